"""
Admin configuration for the Properties app.
"""

from django.contrib import admin

from accounts.models import Role
from accounts.services import has_role

from .models import Certificate, ProfitDistribution, Property, TokenPurchase


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    """Admin configuration for Property model."""

    list_display = (
        'id', 'title', 'seller', 'token_price', 'tokens_sold',
        'total_tokens', 'status', 'is_verified',
    )
    list_filter = ('status', 'is_verified', 'property_type')
    search_fields = ('title', 'location', 'seller__username')
    readonly_fields = ('tokens_sold', 'created_at', 'updated_at')
    ordering = ('-created_at',)

    def get_readonly_fields(self, request, obj=None):
        fields = super().get_readonly_fields(request, obj)
        if not has_role(request.user.id, Role.ADMIN):
            fields = tuple(fields) + ('is_verified',)
        return fields

    def save_model(self, request, obj, form, change):
        """Pass the admin user through the verification check."""
        obj.save(actor_id=request.user.id)


@admin.register(TokenPurchase)
class TokenPurchaseAdmin(admin.ModelAdmin):
    """Admin configuration for TokenPurchase model."""

    list_display = ('id', 'buyer', 'property', 'tokens_purchased', 'total_cost', 'purchase_date', 'certificate_issued')
    list_filter = ('certificate_issued', 'purchase_date')
    search_fields = ('buyer__username', 'property__title')
    ordering = ('-purchase_date',)

    def has_add_permission(self, request):
        """Purchases should only be created through the purchase engine."""
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(Certificate)
class CertificateAdmin(admin.ModelAdmin):
    """Admin configuration for Certificate model."""

    list_display = ('certificate_number', 'owner', 'property_title', 'tokens_owned', 'issue_date')
    search_fields = ('certificate_number', 'owner__username', 'property_title')
    readonly_fields = ('owner', 'purchase', 'certificate_number', 'property_title', 'tokens_owned', 'issue_date')
    ordering = ('-issue_date',)

    def has_add_permission(self, request):
        return False


@admin.register(ProfitDistribution)
class ProfitDistributionAdmin(admin.ModelAdmin):
    """Admin configuration for ProfitDistribution model."""

    list_display = ('id', 'property', 'total_amount', 'per_token_amount', 'created_by', 'distribution_date')
    list_filter = ('distribution_date',)
    search_fields = ('property__title', 'created_by__username')
    ordering = ('-distribution_date',)

    def has_add_permission(self, request):
        """Distributions should only be created through the distribution engine."""
        return False

    def has_change_permission(self, request, obj=None):
        return False
