"""
API tests for the Accounts app views.
"""

from django.test import TestCase
from django.contrib.auth.models import User
from django.urls import reverse
from rest_framework.test import APIClient
from rest_framework import status

from accounts.models import Role, RoleGrant


class AssignRoleViewTest(TestCase):
    """Test cases for the AssignRoleView and RevokeRoleView endpoints."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = APIClient()
        self.admin = User.objects.create_user(username='admin', password='testpass123')
        self.user = User.objects.create_user(username='alice', password='testpass123')
        RoleGrant.objects.create(user=self.admin, role=Role.ADMIN)

        self.assign_url = reverse('accounts:assign-role')
        self.revoke_url = reverse('accounts:revoke-role')

    def test_admin_assigns_role(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(
            self.assign_url,
            {'user_id': self.user.id, 'role': 'seller_verified'},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['role'], 'seller_verified')
        self.assertTrue(
            RoleGrant.objects.filter(user=self.user, role=Role.VERIFIED_SELLER).exists()
        )

    def test_non_admin_forbidden(self):
        """Test that a non-admin gets a 403 and nothing changes."""
        self.client.force_authenticate(user=self.user)

        response = self.client.post(
            self.assign_url,
            {'user_id': self.user.id, 'role': 'admin'},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['code'], 'unauthorized')
        self.assertFalse(RoleGrant.objects.filter(user=self.user).exists())

    def test_unknown_user(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(
            self.assign_url,
            {'user_id': 99999, 'role': 'seller_verified'},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'User not found')

    def test_unknown_role(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(
            self.assign_url,
            {'user_id': self.user.id, 'role': 'superhero'},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'invalid_role')

    def test_missing_fields(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(self.assign_url, {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('user_id', response.data['error'])

    def test_revoke_role(self):
        RoleGrant.objects.create(user=self.user, role=Role.VERIFIED_SELLER)
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(
            self.revoke_url,
            {'user_id': self.user.id, 'role': 'seller_verified'},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Role revoked')
        self.assertFalse(RoleGrant.objects.filter(user=self.user).exists())

    def test_unauthenticated(self):
        response = self.client.post(
            self.assign_url,
            {'user_id': self.user.id, 'role': 'admin'},
            format='json'
        )

        self.assertIn(response.status_code, [
            status.HTTP_401_UNAUTHORIZED,
            status.HTTP_403_FORBIDDEN
        ])


class MyRolesViewTest(TestCase):
    """Test cases for the MyRolesView endpoint."""

    def test_lists_own_roles(self):
        client = APIClient()
        user = User.objects.create_user(username='seller', password='testpass123')
        RoleGrant.objects.create(user=user, role=Role.VERIFIED_SELLER)
        RoleGrant.objects.create(user=user, role=Role.USER)
        client.force_authenticate(user=user)

        response = client.get(reverse('accounts:my-roles'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['roles'], ['seller_verified', 'user'])
