"""
Celery tasks for the Properties app.

This module contains background work queued after a purchase commits.
"""

import logging

from celery import shared_task
from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3, default_retry_delay=60, ignore_result=True)
def issue_certificate_document(self, certificate_id: int) -> str:
    """
    Render a certificate and mark its purchase as issued.

    The renderer is the callable named by settings.CERTIFICATE_RENDERER; it
    receives the Certificate and returns a document reference. Without a
    renderer the certificate is marked issued with no document.

    Args:
        certificate_id: The ID of the Certificate to issue.

    Returns:
        The document reference, or '' if there is none.
    """
    # Import here to avoid circular imports
    from properties.certificates import attach_certificate_document
    from properties.models import Certificate

    try:
        certificate = Certificate.objects.select_related('purchase').get(id=certificate_id)
    except Certificate.DoesNotExist:
        # Purchase was deleted before the certificate was issued
        logger.warning('Certificate %s no longer exists', certificate_id)
        return ''

    document_url = ''
    renderer_path = getattr(settings, 'CERTIFICATE_RENDERER', '')
    if renderer_path:
        renderer = import_string(renderer_path)
        try:
            document_url = renderer(certificate) or ''
        except Exception as exc:
            logger.warning('Rendering certificate %s failed: %s', certificate_id, exc)
            raise self.retry(exc=exc)

    attach_certificate_document(certificate_id, document_url)
    return document_url
