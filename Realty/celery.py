"""
Celery application for the Realty project.

Tasks are discovered from each installed app's tasks.py.
"""

import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'Realty.settings')

app = Celery('Realty')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
