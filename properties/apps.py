"""
Properties app configuration.
"""

from django.apps import AppConfig


class PropertiesConfig(AppConfig):
    """Configuration for the Properties app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'properties'
    verbose_name = 'Properties & Tokens'
