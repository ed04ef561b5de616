"""
Data models for the Accounts app.

Role grants are the only authorization state of the marketplace. A user may
hold several roles; each (user, role) pair exists at most once.
"""

from django.conf import settings
from django.db import models


class Role(models.TextChoices):
    ADMIN = 'admin', 'Admin'
    VERIFIED_SELLER = 'seller_verified', 'Verified seller'
    USER = 'user', 'User'


class RoleGrant(models.Model):
    """A single role granted to a user."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='role_grants',
    )
    role = models.CharField(max_length=20, choices=Role.choices)
    granted_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """RoleGrant model metadata."""

        verbose_name = 'Role grant'
        verbose_name_plural = 'Role grants'
        constraints = [
            models.UniqueConstraint(fields=['user', 'role'], name='unique_user_role'),
        ]

    def __str__(self) -> str:
        return f"{self.user_id}:{self.role}"
