"""
Certificate documents.

Rendering happens outside the core. Whatever renders a certificate reports
the resulting document reference back through attach_certificate_document(),
which also marks the purchase's certificate as issued.
"""

import logging

from django.db import DEFAULT_DB_ALIAS, transaction

from accounts.models import Role
from accounts.services import has_role
from wallet.exceptions import CertificateNotFound, Unauthorized

from .models import Certificate

logger = logging.getLogger(__name__)


def attach_certificate_document(certificate_id, document_url: str = '', using: str = DEFAULT_DB_ALIAS) -> Certificate:
    """
    Record the rendered document of a certificate and flag it as issued.

    Raises:
        CertificateNotFound: If the certificate does not exist.
    """
    with transaction.atomic(using=using):
        try:
            certificate = (
                Certificate.objects.using(using)
                .select_for_update()
                .select_related('purchase')
                .get(pk=certificate_id)
            )
        except (Certificate.DoesNotExist, ValueError, TypeError):
            raise CertificateNotFound() from None

        certificate.document_url = document_url or ''
        certificate.save(using=using, update_fields=['document_url'])

        purchase = certificate.purchase
        purchase.certificate_issued = True
        purchase.certificate_url = document_url or ''
        purchase.save(using=using, update_fields=['certificate_issued', 'certificate_url'])

    logger.info('Certificate %s issued (document: %s)', certificate.certificate_number, document_url or '-')
    return certificate


def attach_document_for_user(user_id, certificate_id, document_url: str, using: str = DEFAULT_DB_ALIAS) -> Certificate:
    """
    attach_certificate_document() on behalf of a user.

    Raises:
        CertificateNotFound: If the certificate does not exist.
        Unauthorized: If the user neither owns the certificate nor is an admin.
    """
    owner_id = (
        Certificate.objects.using(using).filter(pk=certificate_id)
        .values_list('owner_id', flat=True)
        .first()
    )
    if owner_id is None:
        raise CertificateNotFound()
    if owner_id != user_id and not has_role(user_id, Role.ADMIN, using=using):
        raise Unauthorized('Only the owner can update this certificate')
    return attach_certificate_document(certificate_id, document_url, using=using)
