"""
Tests for environment configuration.
"""

import os
from django.test import SimpleTestCase
from unittest.mock import patch

from Realty.env import EnvSettings


class EnvSettingsTest(SimpleTestCase):
    """Test cases for reading deployment settings from the environment."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            env = EnvSettings(_env_file=None)

        self.assertTrue(env.uses_sqlite)
        self.assertEqual(env.allowed_hosts, ['localhost', '127.0.0.1'])
        self.assertFalse(env.celery_task_always_eager)

    def test_values_from_environment(self):
        with patch.dict(os.environ, {
            'DJANGO_DEBUG': 'false',
            'DJANGO_ALLOWED_HOSTS': 'realty.example.com, api.realty.example.com,',
            'DATABASE_ENGINE': 'django.db.backends.postgresql',
            'CELERY_TASK_ALWAYS_EAGER': '1',
            'CELERY_PUBLISH_MAX_RETRIES': '0',
        }, clear=True):
            env = EnvSettings(_env_file=None)

        self.assertFalse(env.django_debug)
        self.assertEqual(env.allowed_hosts, ['realty.example.com', 'api.realty.example.com'])
        self.assertFalse(env.uses_sqlite)
        self.assertTrue(env.celery_task_always_eager)
        self.assertEqual(env.celery_publish_max_retries, 0)

    def test_malformed_flag_is_rejected(self):
        with patch.dict(os.environ, {'DJANGO_DEBUG': 'sometimes'}, clear=True):
            with self.assertRaises(ValueError):
                EnvSettings(_env_file=None)
