"""
Data models for the Wallet app.

This module contains:
- Wallet: User balance storage with decimal precision
- WalletTransaction: Append-only ledger entry for every balance change
"""

from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from .meta import decode_meta


class Wallet(models.Model):
    """
    Wallet model linked to a User that maintains a balance.

    Uses DecimalField for accurate currency representation.
    Balance constraint: must be >= 0.00, enforced by the database.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='wallet',
        help_text='The user who owns this wallet'
    )
    balance = models.DecimalField(
        max_digits=19,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
        help_text='Current wallet balance (must be >= 0.00)'
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text='When the wallet was created'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text='When the wallet was last updated'
    )

    class Meta:
        """Wallet model metadata."""

        verbose_name = 'Wallet'
        verbose_name_plural = 'Wallets'
        constraints = [
            models.CheckConstraint(
                condition=models.Q(balance__gte=0),
                name='wallet_balance_non_negative',
            ),
        ]

    def __str__(self) -> str:
        """Return string representation of the wallet."""
        return f"Wallet({self.user.username}: ${self.balance})"


class ImmutableTransactionError(Exception):
    """Raised when code tries to rewrite or remove a ledger entry."""


class WalletTransaction(models.Model):
    """
    Ledger entry recording one balance change of one wallet.

    Rows are append-only: saving an existing row or deleting a single row
    raises. They only disappear together with their wallet.
    """

    class Type(models.TextChoices):
        DEPOSIT = 'deposit', 'Deposit'
        WITHDRAWAL = 'withdrawal', 'Withdrawal'
        PURCHASE = 'purchase', 'Purchase'
        PROFIT = 'profit', 'Profit'
        REFUND = 'refund', 'Refund'
        ADJUSTMENT = 'adjustment', 'Adjustment'

    # Types that reduce the balance; everything else adds to it
    DEBIT_TYPES = frozenset({Type.WITHDRAWAL, Type.PURCHASE})

    wallet = models.ForeignKey(
        Wallet,
        on_delete=models.CASCADE,
        related_name='transactions',
        help_text='Wallet whose balance changed'
    )
    type = models.CharField(
        max_length=20,
        choices=Type.choices,
    )
    amount = models.DecimalField(
        max_digits=19,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
        help_text='Absolute size of the balance change'
    )
    purchase = models.ForeignKey(
        'properties.TokenPurchase',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='wallet_transactions',
    )
    property = models.ForeignKey(
        'properties.Property',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='wallet_transactions',
    )
    distribution = models.ForeignKey(
        'properties.ProfitDistribution',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='wallet_transactions',
    )
    metadata = models.JSONField(null=True, blank=True)
    status = models.CharField(max_length=20, default='completed')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """WalletTransaction model metadata."""

        verbose_name = 'Wallet transaction'
        verbose_name_plural = 'Wallet transactions'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['wallet', 'created_at'], name='wtx_wallet_time_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gt=0),
                name='wallet_tx_amount_positive',
            ),
        ]

    def __str__(self) -> str:
        return f"WalletTransaction #{self.id}: {self.type} ${self.amount}"

    def signed_amount(self) -> Decimal:
        """Amount with the sign it applied to the balance."""
        if self.type in self.DEBIT_TYPES:
            return -self.amount
        return self.amount

    def get_meta(self):
        """Typed metadata record for this entry."""
        return decode_meta(self.type, self.metadata)

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableTransactionError('Wallet transactions are append-only')
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ImmutableTransactionError('Wallet transactions cannot be deleted')
