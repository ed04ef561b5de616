"""
Admin configuration for the Accounts app.
"""

from django.contrib import admin
from .models import RoleGrant


@admin.register(RoleGrant)
class RoleGrantAdmin(admin.ModelAdmin):
    """Admin configuration for RoleGrant model."""

    list_display = ('id', 'user', 'role', 'granted_at')
    list_filter = ('role',)
    search_fields = ('user__username', 'user__email')
    readonly_fields = ('granted_at',)
    ordering = ('user', 'role')
