"""
Admin configuration for the Wallet app.
"""

from django.contrib import admin
from .models import Wallet, WalletTransaction


@admin.register(Wallet)
class WalletAdmin(admin.ModelAdmin):
    """
    Admin configuration for Wallet model.

    Balances are read-only here; they only change through the wallet engine
    so that every change has a ledger entry.
    """

    list_display = ('id', 'user', 'balance', 'created_at', 'updated_at')
    list_filter = ('created_at', 'updated_at')
    search_fields = ('user__username', 'user__email')
    readonly_fields = ('user', 'balance', 'created_at', 'updated_at')
    ordering = ('-updated_at',)

    def has_add_permission(self, request):
        """Wallets are created lazily by the wallet engine."""
        return False


@admin.register(WalletTransaction)
class WalletTransactionAdmin(admin.ModelAdmin):
    """Admin configuration for WalletTransaction model."""

    list_display = ('id', 'wallet', 'type', 'amount', 'property', 'status', 'created_at')
    list_filter = ('type', 'status', 'created_at')
    search_fields = ('wallet__user__username',)
    readonly_fields = (
        'wallet', 'type', 'amount', 'purchase', 'property',
        'distribution', 'metadata', 'status', 'created_at',
    )
    ordering = ('-created_at',)

    def has_add_permission(self, request):
        """Transactions should only be created through the wallet engine."""
        return False

    def has_change_permission(self, request, obj=None):
        """Transactions are immutable."""
        return False

    def has_delete_permission(self, request, obj=None):
        """Transactions cannot be deleted."""
        return False
