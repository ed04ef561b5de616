"""
DRF Serializers for the Properties app.
"""

from decimal import Decimal
from rest_framework import serializers

from .models import Certificate, Property, TokenPurchase


class PropertySerializer(serializers.ModelSerializer):
    """
    Serializer for property listings.

    Used for input validation only on writes; the actual save goes through
    properties.verification so the verification gate sees the actor.
    """

    tokens_available = serializers.IntegerField(read_only=True)

    class Meta:
        model = Property
        fields = [
            'id',
            'title',
            'description',
            'location',
            'property_type',
            'total_tokens',
            'tokens_sold',
            'tokens_available',
            'token_price',
            'estimated_roi',
            'status',
            'is_verified',
            'seller',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'tokens_sold', 'seller', 'created_at', 'updated_at']


class PurchaseSerializer(serializers.Serializer):
    """Serializer for the purchase endpoint."""

    tokens = serializers.IntegerField(
        min_value=1,
        help_text='Number of tokens to buy'
    )


class DistributionSerializer(serializers.Serializer):
    """Serializer for the profit distribution endpoint."""

    total_amount = serializers.DecimalField(
        max_digits=19,
        decimal_places=2,
        min_value=Decimal('0.01'),
        help_text='Amount to distribute (must be > 0)'
    )
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class TokenPurchaseSerializer(serializers.ModelSerializer):
    class Meta:
        model = TokenPurchase
        fields = [
            'id',
            'property',
            'tokens_purchased',
            'total_cost',
            'purchase_date',
            'certificate_issued',
            'certificate_url',
        ]
        read_only_fields = fields


class CertificateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Certificate
        fields = [
            'id',
            'purchase',
            'certificate_number',
            'property_title',
            'tokens_owned',
            'issue_date',
            'document_url',
        ]
        read_only_fields = fields


class CertificateDocumentSerializer(serializers.Serializer):
    document_url = serializers.CharField(max_length=500)
