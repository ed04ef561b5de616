"""
Unit tests for Celery tasks in the Properties app.
"""

from decimal import Decimal
from django.test import TestCase, override_settings
from django.contrib.auth.models import User
from unittest.mock import patch

from accounts.models import Role, RoleGrant
from accounts.services import has_role
from properties.certificates import attach_certificate_document, attach_document_for_user
from properties.models import Certificate, Property, TokenPurchase
from properties.purchases import purchase_tokens
from properties.tasks import issue_certificate_document
from wallet import services
from wallet.exceptions import CertificateNotFound, Unauthorized


def fake_renderer(certificate):
    return f"/media/certificates/{certificate.certificate_number}.pdf"


def failing_renderer(certificate):
    raise RuntimeError('renderer offline')


class IssueCertificateDocumentTest(TestCase):
    """Test cases for the issue_certificate_document task."""

    def setUp(self):
        """Set up test fixtures."""
        self.buyer = User.objects.create_user(
            username='buyer',
            password='testpass123'
        )
        self.property = Property.objects.create(
            title='Quay Street',
            total_tokens=10,
            token_price=Decimal('5.00'),
        )
        services.deposit(self.buyer.id, '50.00')
        result = purchase_tokens(self.buyer.id, self.property.id, 2)
        self.certificate = Certificate.objects.get(pk=result.certificate_id)

    @override_settings(CERTIFICATE_RENDERER='')
    def test_issue_without_renderer(self):
        """Test that the certificate is marked issued with no document."""
        result = issue_certificate_document(self.certificate.id)

        self.assertEqual(result, '')
        purchase = TokenPurchase.objects.get(pk=self.certificate.purchase_id)
        self.assertTrue(purchase.certificate_issued)
        self.assertEqual(purchase.certificate_url, '')

    @override_settings(CERTIFICATE_RENDERER='properties.tests.test_tasks.fake_renderer')
    def test_issue_with_renderer(self):
        """Test that the rendered document is stored on certificate and purchase."""
        result = issue_certificate_document(self.certificate.id)

        expected = f"/media/certificates/{self.certificate.certificate_number}.pdf"
        self.assertEqual(result, expected)
        self.certificate.refresh_from_db()
        self.assertEqual(self.certificate.document_url, expected)
        purchase = TokenPurchase.objects.get(pk=self.certificate.purchase_id)
        self.assertTrue(purchase.certificate_issued)
        self.assertEqual(purchase.certificate_url, expected)

    @override_settings(CERTIFICATE_RENDERER='properties.tests.test_tasks.failing_renderer')
    def test_renderer_failure_leaves_certificate_pending(self):
        """Test that a failing renderer raises for retry and issues nothing."""
        # Called directly, retry() re-raises the original error
        with self.assertRaises(RuntimeError):
            issue_certificate_document(self.certificate.id)

        self.assertFalse(TokenPurchase.objects.get(pk=self.certificate.purchase_id).certificate_issued)

    def test_task_with_nonexistent_certificate(self):
        """Test that the task handles a missing certificate gracefully."""
        result = issue_certificate_document(99999)
        self.assertEqual(result, '')

    def test_purchase_is_unaffected_by_issuing(self):
        issue_certificate_document(self.certificate.id)

        self.property.refresh_from_db()
        self.assertEqual(self.property.tokens_sold, 2)
        self.assertEqual(TokenPurchase.objects.count(), 1)


class AttachCertificateDocumentTest(TestCase):
    """Test cases for attaching documents to certificates."""

    def setUp(self):
        """Set up test fixtures."""
        self.buyer = User.objects.create_user(username='buyer', password='testpass123')
        self.other = User.objects.create_user(username='other', password='testpass123')
        prop = Property.objects.create(title='Dock 9', total_tokens=5, token_price=Decimal('1.00'))
        services.deposit(self.buyer.id, '5.00')
        result = purchase_tokens(self.buyer.id, prop.id, 1)
        self.certificate_id = result.certificate_id

    def test_attach(self):
        certificate = attach_certificate_document(self.certificate_id, 's3://certs/1.pdf')

        self.assertEqual(certificate.document_url, 's3://certs/1.pdf')
        self.assertTrue(certificate.purchase.certificate_issued)

    def test_attach_missing_certificate(self):
        with self.assertRaises(CertificateNotFound):
            attach_certificate_document(99999, 'x')

    def test_only_owner_attaches(self):
        with self.assertRaises(Unauthorized):
            attach_document_for_user(self.other.id, self.certificate_id, 'x')

        certificate = attach_document_for_user(self.buyer.id, self.certificate_id, 'y')
        self.assertEqual(certificate.document_url, 'y')

    def test_admin_attaches_on_named_database(self):
        """Test that the role check reads from the database the caller names."""
        admin = User.objects.create_user(username='admin', password='testpass123')
        RoleGrant.objects.create(user=admin, role=Role.ADMIN)

        with patch('properties.certificates.has_role', wraps=has_role) as check:
            certificate = attach_document_for_user(admin.id, self.certificate_id, 'z', using='default')

        check.assert_called_once_with(admin.id, Role.ADMIN, using='default')
        self.assertEqual(certificate.document_url, 'z')
