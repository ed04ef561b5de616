"""
Tests for property writes and the verification gate.
"""

from decimal import Decimal
from django.test import TestCase
from django.contrib.auth.models import User
from django.core.exceptions import ValidationError

from accounts.models import Role, RoleGrant
from properties.models import Property
from properties.verification import create_property, set_verification, update_property
from wallet.exceptions import InvalidField, PropertyUnavailable, Unauthorized


class VerificationGateTest(TestCase):
    """Test cases for the is_verified guard on Property.save()."""

    def setUp(self):
        """Set up test fixtures."""
        self.admin = User.objects.create_user(username='admin', password='testpass123')
        self.seller = User.objects.create_user(username='seller', password='testpass123')
        self.stranger = User.objects.create_user(username='stranger', password='testpass123')
        RoleGrant.objects.create(user=self.admin, role=Role.ADMIN)
        RoleGrant.objects.create(user=self.seller, role=Role.VERIFIED_SELLER)

        self.property = Property.objects.create(
            title='Mill House',
            total_tokens=50,
            token_price=Decimal('20.00'),
            seller=self.seller,
        )

    def _stored(self):
        return Property.objects.get(pk=self.property.pk)

    def test_seller_cannot_verify_own_listing(self):
        """Test that a bundled edit with a flag change writes nothing."""
        with self.assertRaises(Unauthorized):
            update_property(self.seller.id, self.property.id, {
                'title': 'Mill House (renovated)',
                'is_verified': True,
            })

        stored = self._stored()
        self.assertFalse(stored.is_verified)
        self.assertEqual(stored.title, 'Mill House')

    def test_admin_can_verify(self):
        prop = set_verification(self.admin.id, self.property.id, True)

        self.assertTrue(prop.is_verified)
        self.assertTrue(self._stored().is_verified)

        set_verification(self.admin.id, self.property.id, False)
        self.assertFalse(self._stored().is_verified)

    def test_seller_edits_other_fields(self):
        prop = update_property(self.seller.id, self.property.id, {
            'title': 'Mill House Lofts',
            'token_price': Decimal('25.00'),
        })

        self.assertEqual(prop.title, 'Mill House Lofts')
        self.assertEqual(self._stored().token_price, Decimal('25.00'))

    def test_seller_may_resave_unchanged_flag(self):
        """Test that a seller can edit a verified listing without touching the flag."""
        set_verification(self.admin.id, self.property.id, True)

        update_property(self.seller.id, self.property.id, {'is_verified': True, 'location': 'Leeds'})

        stored = self._stored()
        self.assertTrue(stored.is_verified)
        self.assertEqual(stored.location, 'Leeds')

    def test_stranger_cannot_edit(self):
        with self.assertRaises(Unauthorized):
            update_property(self.stranger.id, self.property.id, {'title': 'Mine now'})
        self.assertEqual(self._stored().title, 'Mill House')

    def test_direct_save_without_actor(self):
        """Test that a model save without an admin actor cannot flip the flag."""
        prop = self._stored()
        prop.is_verified = True

        with self.assertRaises(Unauthorized):
            prop.save()
        with self.assertRaises(Unauthorized):
            prop.save(actor_id=self.seller.id)
        self.assertFalse(self._stored().is_verified)

        prop.save(actor_id=self.admin.id)
        self.assertTrue(self._stored().is_verified)

    def test_partial_refresh_keeps_flag_guarded(self):
        """Test that reloading other fields does not launder an unsaved flag change."""
        prop = self._stored()
        prop.is_verified = True
        prop.refresh_from_db(fields=['title'])

        with self.assertRaises(Unauthorized):
            prop.save()
        self.assertFalse(self._stored().is_verified)

    def test_full_refresh_resets_flag(self):
        prop = self._stored()
        prop.is_verified = True
        prop.refresh_from_db()

        self.assertFalse(prop.is_verified)
        prop.save()
        self.assertFalse(self._stored().is_verified)

    def test_save_of_other_fields_ignores_flag(self):
        prop = self._stored()
        prop.is_verified = True
        prop.title = 'Renamed'

        prop.save(update_fields=['title'])

        stored = self._stored()
        self.assertEqual(stored.title, 'Renamed')
        self.assertFalse(stored.is_verified)

    def test_create_verified_without_actor(self):
        with self.assertRaises(Unauthorized):
            Property.objects.create(
                title='Sneaky',
                total_tokens=1,
                token_price=Decimal('1.00'),
                is_verified=True,
            )
        self.assertFalse(Property.objects.filter(title='Sneaky').exists())

    def test_bulk_update_of_flag_refused(self):
        with self.assertRaises(Unauthorized):
            Property.objects.filter(pk=self.property.pk).update(is_verified=True)
        self.assertFalse(self._stored().is_verified)


class PropertyWriteTest(TestCase):
    """Test cases for create_property() and update_property()."""

    def setUp(self):
        """Set up test fixtures."""
        self.admin = User.objects.create_user(username='admin', password='testpass123')
        self.seller = User.objects.create_user(username='seller', password='testpass123')
        self.user = User.objects.create_user(username='user', password='testpass123')
        RoleGrant.objects.create(user=self.admin, role=Role.ADMIN)
        RoleGrant.objects.create(user=self.seller, role=Role.VERIFIED_SELLER)

    def _fields(self, **overrides):
        fields = {
            'title': 'Canal Wharf',
            'location': 'Bristol',
            'total_tokens': 200,
            'token_price': Decimal('15.00'),
        }
        fields.update(overrides)
        return fields

    def test_verified_seller_lists_property(self):
        prop = create_property(self.seller.id, **self._fields())

        self.assertEqual(prop.seller, self.seller)
        self.assertEqual(prop.tokens_sold, 0)
        self.assertFalse(prop.is_verified)
        self.assertEqual(prop.status, Property.Status.ACTIVE)

    def test_plain_user_cannot_list(self):
        with self.assertRaises(Unauthorized):
            create_property(self.user.id, **self._fields())
        self.assertFalse(Property.objects.exists())

    def test_seller_cannot_list_as_verified(self):
        with self.assertRaises(Unauthorized):
            create_property(self.seller.id, **self._fields(is_verified=True))
        self.assertFalse(Property.objects.exists())

    def test_admin_lists_verified_property(self):
        prop = create_property(self.admin.id, **self._fields(is_verified=True))
        self.assertTrue(Property.objects.get(pk=prop.pk).is_verified)

    def test_unknown_field_rejected(self):
        with self.assertRaises(InvalidField):
            create_property(self.seller.id, **self._fields(tokens_sold=10))

        prop = create_property(self.seller.id, **self._fields())
        with self.assertRaises(InvalidField):
            update_property(self.seller.id, prop.id, {'seller': self.user})

    def test_invalid_values_rejected(self):
        with self.assertRaises(ValidationError):
            create_property(self.seller.id, **self._fields(token_price=Decimal('0.00')))

    def test_supply_cannot_drop_below_sold(self):
        prop = create_property(self.seller.id, **self._fields())
        Property.objects.filter(pk=prop.pk).update(tokens_sold=150)

        with self.assertRaises(InvalidField):
            update_property(self.seller.id, prop.id, {'total_tokens': 100})
        self.assertEqual(Property.objects.get(pk=prop.pk).total_tokens, 200)

    def test_missing_property(self):
        with self.assertRaises(PropertyUnavailable):
            update_property(self.admin.id, 99999, {'title': 'x'})
