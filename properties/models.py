"""
Data models for the Properties app.

This module contains:
- Property: A listing whose ownership is split into integer tokens
- TokenPurchase: One purchase of tokens, priced at the time of purchase
- Certificate: Ownership evidence for a single purchase
- ProfitDistribution: One payout spread across all holders of a property
"""

from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import DEFAULT_DB_ALIAS, models

from accounts.models import Role
from accounts.services import has_role
from wallet.exceptions import Unauthorized


class PropertyQuerySet(models.QuerySet):
    def update(self, **kwargs):
        # Bulk updates carry no actor, so they can never pass the verification check
        if 'is_verified' in kwargs:
            raise Unauthorized('Verification can only change through Property.save()')
        return super().update(**kwargs)

    def active(self):
        return self.filter(status=Property.Status.ACTIVE)


class Property(models.Model):
    """
    A tokenized listing.

    The verification flag is guarded at save time: any save that changes
    is_verified must name an admin actor, otherwise nothing is written.
    """

    class Status(models.TextChoices):
        ACTIVE = 'active', 'Active'
        INACTIVE = 'inactive', 'Inactive'

    class Type(models.TextChoices):
        RESIDENTIAL = 'residential', 'Residential'
        COMMERCIAL = 'commercial', 'Commercial'
        HOSPITALITY = 'hospitality', 'Hospitality'
        RETAIL = 'retail', 'Retail'

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default='')
    location = models.CharField(max_length=200, blank=True, default='')
    property_type = models.CharField(
        max_length=20,
        choices=Type.choices,
        default=Type.RESIDENTIAL,
    )
    total_tokens = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text='Total token supply'
    )
    tokens_sold = models.PositiveIntegerField(
        default=0,
        help_text='Tokens sold so far (never above total_tokens)'
    )
    token_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
        help_text='Price of one token'
    )
    estimated_roi = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0.00'),
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
    )
    is_verified = models.BooleanField(default=False)
    seller = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='properties',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PropertyQuerySet.as_manager()

    class Meta:
        """Property model metadata."""

        verbose_name = 'Property'
        verbose_name_plural = 'Properties'
        ordering = ['-created_at', '-id']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(tokens_sold__lte=models.F('total_tokens')),
                name='property_tokens_sold_within_supply',
            ),
            models.CheckConstraint(
                condition=models.Q(tokens_sold__gte=0),
                name='property_tokens_sold_non_negative',
            ),
            models.CheckConstraint(
                condition=models.Q(total_tokens__gt=0),
                name='property_total_tokens_positive',
            ),
            models.CheckConstraint(
                condition=models.Q(token_price__gt=0),
                name='property_token_price_positive',
            ),
        ]

    def __str__(self) -> str:
        return f"{self.title} ({self.tokens_sold}/{self.total_tokens})"

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        if 'is_verified' in field_names:
            instance._stored_is_verified = instance.is_verified
        return instance

    @property
    def tokens_available(self) -> int:
        return self.total_tokens - self.tokens_sold

    def refresh_from_db(self, using=None, fields=None, **kwargs):
        super().refresh_from_db(using=using, fields=fields, **kwargs)
        # Only a reload of is_verified itself moves the snapshot
        if fields is not None and 'is_verified' not in fields:
            return
        if 'is_verified' not in self.get_deferred_fields():
            self._stored_is_verified = self.is_verified

    def verification_changed(self) -> bool:
        if 'is_verified' in self.get_deferred_fields():
            return False
        return self.is_verified != getattr(self, '_stored_is_verified', False)

    def save(self, *args, actor_id=None, **kwargs):
        """
        Save the property, refusing verification changes by non-admins.

        Raises:
            Unauthorized: If is_verified differs from the stored value and
                actor_id does not hold the admin role.
        """
        update_fields = kwargs.get('update_fields')
        touches_flag = update_fields is None or 'is_verified' in update_fields
        if touches_flag and self.verification_changed():
            if not has_role(actor_id, Role.ADMIN, using=kwargs.get('using') or DEFAULT_DB_ALIAS):
                raise Unauthorized('Only admins can change verification status')
        super().save(*args, **kwargs)
        if touches_flag:
            self._stored_is_verified = self.is_verified


class TokenPurchase(models.Model):
    """
    A purchase of tokens of one property by one buyer.

    total_cost is the token price at purchase time multiplied by the number
    of tokens; later price changes never touch it.
    """

    buyer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='token_purchases',
    )
    property = models.ForeignKey(
        Property,
        on_delete=models.CASCADE,
        related_name='purchases',
    )
    tokens_purchased = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    total_cost = models.DecimalField(max_digits=19, decimal_places=2)
    purchase_date = models.DateTimeField(auto_now_add=True)
    certificate_issued = models.BooleanField(default=False)
    certificate_url = models.CharField(max_length=500, blank=True, default='')

    class Meta:
        """TokenPurchase model metadata."""

        verbose_name = 'Token purchase'
        verbose_name_plural = 'Token purchases'
        ordering = ['-purchase_date', '-id']
        indexes = [
            models.Index(fields=['property', 'buyer'], name='purchase_property_buyer_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(tokens_purchased__gt=0),
                name='purchase_tokens_positive',
            ),
        ]

    def __str__(self) -> str:
        return f"Purchase #{self.id}: {self.tokens_purchased} tokens of property {self.property_id}"


class Certificate(models.Model):
    """
    Ownership certificate for one purchase.

    property_title and tokens_owned are snapshots taken at purchase time.
    document_url is filled in later by the certificate renderer.
    """

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='certificates',
    )
    purchase = models.OneToOneField(
        TokenPurchase,
        on_delete=models.CASCADE,
        related_name='certificate',
    )
    certificate_number = models.CharField(max_length=32, unique=True)
    property_title = models.CharField(max_length=200)
    tokens_owned = models.PositiveIntegerField()
    issue_date = models.DateTimeField(auto_now_add=True)
    document_url = models.CharField(max_length=500, blank=True, default='')

    class Meta:
        """Certificate model metadata."""

        verbose_name = 'Certificate'
        verbose_name_plural = 'Certificates'
        ordering = ['-issue_date', '-id']

    def __str__(self) -> str:
        return f"{self.certificate_number} ({self.tokens_owned} tokens of {self.property_title})"


class ProfitDistribution(models.Model):
    """A profit payout split across all holders of a property."""

    property = models.ForeignKey(
        Property,
        on_delete=models.CASCADE,
        related_name='distributions',
    )
    total_amount = models.DecimalField(max_digits=19, decimal_places=2)
    per_token_amount = models.DecimalField(max_digits=28, decimal_places=10)
    distribution_date = models.DateTimeField(auto_now_add=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='profit_distributions',
    )
    notes = models.TextField(blank=True, default='')

    class Meta:
        """ProfitDistribution model metadata."""

        verbose_name = 'Profit distribution'
        verbose_name_plural = 'Profit distributions'
        ordering = ['-distribution_date', '-id']

    def __str__(self) -> str:
        return f"Distribution #{self.id}: ${self.total_amount} for property {self.property_id}"
