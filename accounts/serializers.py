"""
DRF Serializers for the Accounts app.
"""

from rest_framework import serializers


class RoleChangeSerializer(serializers.Serializer):
    """
    Serializer for the assign and revoke endpoints.

    The role itself is validated by the role authority so that unknown roles
    surface as the same error whether called over HTTP or directly.
    """

    user_id = serializers.IntegerField(
        help_text='ID of the user whose roles change'
    )
    role = serializers.CharField(
        max_length=20,
        help_text='admin, seller_verified or user'
    )
