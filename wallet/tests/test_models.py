"""
Unit tests for Wallet app models.
"""

from decimal import Decimal
from django.test import TestCase
from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from wallet.meta import DepositMeta, ProfitMeta, PurchaseMeta
from wallet.models import ImmutableTransactionError, Wallet, WalletTransaction


class WalletModelTest(TestCase):
    """Test cases for the Wallet model."""

    def setUp(self):
        """Set up test fixtures."""
        self.user = User.objects.create_user(
            username='testuser',
            password='testpass123'
        )

    def test_wallet_creation(self):
        """Test that a wallet can be created for a user."""
        wallet = Wallet.objects.create(user=self.user)

        self.assertEqual(wallet.user, self.user)
        self.assertEqual(wallet.balance, Decimal('0.00'))
        self.assertIsNotNone(wallet.created_at)
        self.assertIsNotNone(wallet.updated_at)

    def test_wallet_balance_precision(self):
        """Test that wallet balance maintains decimal precision."""
        wallet = Wallet.objects.create(user=self.user, balance=Decimal('1234.56'))
        wallet.refresh_from_db()
        self.assertEqual(wallet.balance, Decimal('1234.56'))

    def test_wallet_one_to_one_constraint(self):
        """Test that a user can only have one wallet."""
        Wallet.objects.create(user=self.user)

        with self.assertRaises(IntegrityError):
            Wallet.objects.create(user=self.user)

    def test_wallet_str_representation(self):
        """Test wallet string representation."""
        wallet = Wallet.objects.create(user=self.user, balance=Decimal('100.50'))
        self.assertIn('testuser', str(wallet))
        self.assertIn('100.50', str(wallet))

    def test_wallet_balance_cannot_be_negative_via_validator(self):
        """Test that wallet balance validator prevents negative values."""
        wallet = Wallet(user=self.user, balance=Decimal('-10.00'))
        with self.assertRaises(ValidationError):
            wallet.full_clean()

    def test_wallet_balance_cannot_be_negative_in_database(self):
        """Test that the database rejects a negative balance."""
        wallet = Wallet.objects.create(user=self.user)
        wallet.balance = Decimal('-0.01')
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                wallet.save()


class WalletTransactionModelTest(TestCase):
    """Test cases for the WalletTransaction model."""

    def setUp(self):
        """Set up test fixtures."""
        self.user = User.objects.create_user(
            username='holder',
            password='testpass123'
        )
        self.wallet = Wallet.objects.create(user=self.user)

    def _entry(self, tx_type='deposit', amount='50.00', metadata=None):
        return WalletTransaction.objects.create(
            wallet=self.wallet,
            type=tx_type,
            amount=Decimal(amount),
            metadata=metadata,
        )

    def test_transaction_creation(self):
        """Test that a ledger entry can be created with defaults."""
        entry = self._entry()

        self.assertEqual(entry.wallet, self.wallet)
        self.assertEqual(entry.amount, Decimal('50.00'))
        self.assertEqual(entry.status, 'completed')
        self.assertIsNotNone(entry.created_at)

    def test_transaction_cannot_be_updated(self):
        """Test that an existing entry cannot be saved again."""
        entry = self._entry()
        entry.amount = Decimal('1.00')

        with self.assertRaises(ImmutableTransactionError):
            entry.save()

        entry.refresh_from_db()
        self.assertEqual(entry.amount, Decimal('50.00'))

    def test_transaction_cannot_be_deleted(self):
        """Test that a single entry cannot be deleted."""
        entry = self._entry()

        with self.assertRaises(ImmutableTransactionError):
            entry.delete()
        self.assertTrue(WalletTransaction.objects.filter(pk=entry.pk).exists())

    def test_transactions_cascade_with_wallet(self):
        """Test that entries go away together with their wallet."""
        self._entry()
        self._entry(amount='10.00')

        self.wallet.delete()

        self.assertEqual(WalletTransaction.objects.count(), 0)

    def test_amount_must_be_positive_in_database(self):
        """Test that the database rejects a zero amount."""
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                self._entry(amount='0.00')

    def test_signed_amount(self):
        """Test that purchases and withdrawals count against the balance."""
        self.assertEqual(self._entry('deposit', '20.00').signed_amount(), Decimal('20.00'))
        self.assertEqual(self._entry('profit', '5.00').signed_amount(), Decimal('5.00'))
        self.assertEqual(self._entry('purchase', '7.50').signed_amount(), Decimal('-7.50'))
        self.assertEqual(self._entry('withdrawal', '1.00').signed_amount(), Decimal('-1.00'))

    def test_metadata_decodes_to_typed_record(self):
        """Test that stored metadata comes back as the record for its type."""
        deposit = self._entry('deposit', metadata=DepositMeta().to_json())
        purchase = self._entry('purchase', metadata=PurchaseMeta(tokens=3).to_json())
        profit = self._entry('profit', metadata=ProfitMeta(
            distribution_id=9, per_token=Decimal('2.5'), tokens=4,
        ).to_json())

        self.assertEqual(deposit.get_meta(), DepositMeta(source='sandbox'))
        self.assertEqual(purchase.get_meta(), PurchaseMeta(tokens=3))
        self.assertEqual(profit.get_meta(), ProfitMeta(distribution_id=9, per_token=Decimal('2.5'), tokens=4))

    def test_metadata_absent_for_untyped_entries(self):
        """Test that adjustments carry no typed metadata."""
        entry = self._entry('adjustment', metadata={'note': 'manual'})
        self.assertIsNone(entry.get_meta())

    def test_transaction_ordering(self):
        """Test that entries are ordered newest first."""
        t1 = self._entry(amount='10.00')
        t2 = self._entry(amount='20.00')

        entries = list(WalletTransaction.objects.all())
        self.assertEqual(entries[0], t2)
        self.assertEqual(entries[1], t1)
