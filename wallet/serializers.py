"""
DRF Serializers for the Wallet app.
"""

from rest_framework import serializers

from .models import WalletTransaction


class WalletSerializer(serializers.Serializer):
    """Serializer for wallet balance response."""

    user_id = serializers.IntegerField()
    username = serializers.CharField()
    balance = serializers.DecimalField(max_digits=19, decimal_places=2)


class WalletTransactionSerializer(serializers.ModelSerializer):
    """
    Serializer for ledger entries in the transaction history.

    signed_amount is negative for purchases and withdrawals.
    """

    signed_amount = serializers.DecimalField(
        max_digits=19,
        decimal_places=2,
        read_only=True,
    )
    property_title = serializers.CharField(
        source='property.title',
        read_only=True,
        default=None,
    )

    class Meta:
        model = WalletTransaction
        fields = [
            'id',
            'type',
            'amount',
            'signed_amount',
            'purchase',
            'property',
            'property_title',
            'distribution',
            'metadata',
            'status',
            'created_at',
        ]
        read_only_fields = fields


class ErrorSerializer(serializers.Serializer):
    """Serializer for error responses."""

    error = serializers.CharField()
    code = serializers.CharField()
