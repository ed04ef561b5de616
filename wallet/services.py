"""
Wallet engine.

Balance changes always go through credit() or debit(), which write exactly
one WalletTransaction for every change. Both must run inside an atomic block
on a wallet row fetched with get_wallet_for_update().
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

from django.db import DEFAULT_DB_ALIAS, transaction

from .exceptions import InsufficientFunds, InvalidAmount
from .meta import DepositMeta, TransactionMeta
from .models import Wallet, WalletTransaction

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')
MAX_AMOUNT = Decimal('99999999999999999.99')


def parse_amount(value) -> Decimal:
    """
    Coerce a money amount to a Decimal with two decimal places.

    Raises:
        InvalidAmount: If the value is not a finite number, is not positive,
            or carries more precision than a cent.
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmount('Amount is required')
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidAmount('Invalid amount') from None
    if not amount.is_finite():
        raise InvalidAmount('Invalid amount')
    if amount <= 0:
        raise InvalidAmount('Amount must be positive')
    try:
        quantized = amount.quantize(CENT)
    except InvalidOperation:
        raise InvalidAmount('Amount is too large') from None
    if amount != quantized:
        raise InvalidAmount('Amount cannot have more than 2 decimal places')
    if quantized > MAX_AMOUNT:
        raise InvalidAmount('Amount is too large')
    return quantized


def get_wallet_for_update(user_id: int, using: str = DEFAULT_DB_ALIAS) -> Wallet:
    """
    Fetch the user's wallet with a row lock, creating an empty one if needed.

    Must be called inside transaction.atomic().
    """
    wallet, created = Wallet.objects.using(using).select_for_update().get_or_create(
        user_id=user_id
    )
    if created:
        logger.info('Created wallet %s for user %s', wallet.pk, user_id)
    return wallet


def credit(
    wallet: Wallet,
    amount: Decimal,
    tx_type: str,
    meta: Optional[TransactionMeta] = None,
    using: str = DEFAULT_DB_ALIAS,
    **links,
) -> WalletTransaction:
    """Add amount to a locked wallet and record the matching ledger entry."""
    if tx_type in WalletTransaction.DEBIT_TYPES:
        raise ValueError(f'{tx_type} is a debit type')
    wallet.balance += amount
    wallet.save(using=using, update_fields=['balance', 'updated_at'])
    return _record(wallet, amount, tx_type, meta, using, links)


def debit(
    wallet: Wallet,
    amount: Decimal,
    tx_type: str,
    meta: Optional[TransactionMeta] = None,
    using: str = DEFAULT_DB_ALIAS,
    **links,
) -> WalletTransaction:
    """
    Subtract amount from a locked wallet and record the matching ledger entry.

    Raises:
        InsufficientFunds: If the balance is lower than amount.
    """
    if tx_type not in WalletTransaction.DEBIT_TYPES:
        raise ValueError(f'{tx_type} is not a debit type')
    if wallet.balance < amount:
        raise InsufficientFunds()
    wallet.balance -= amount
    wallet.save(using=using, update_fields=['balance', 'updated_at'])
    return _record(wallet, amount, tx_type, meta, using, links)


def _record(wallet, amount, tx_type, meta, using, links) -> WalletTransaction:
    entry = WalletTransaction(
        wallet=wallet,
        type=tx_type,
        amount=amount,
        metadata=meta.to_json() if meta is not None else None,
        **links,
    )
    entry.save(using=using)
    return entry


def deposit(user_id: int, amount, using: str = DEFAULT_DB_ALIAS) -> Decimal:
    """
    Deposit funds into the user's wallet and return the new balance.

    The wallet is created on first use. The balance increment and the
    deposit ledger entry commit together or not at all.

    Raises:
        InvalidAmount: If amount is not a positive cent amount.
    """
    amount = parse_amount(amount)

    with transaction.atomic(using=using):
        wallet = get_wallet_for_update(user_id, using=using)
        credit(wallet, amount, WalletTransaction.Type.DEPOSIT, DepositMeta(), using=using)

    logger.info('Deposited %s into wallet %s (user %s)', amount, wallet.pk, user_id)
    return wallet.balance


def get_balance(user_id: int) -> Decimal:
    """Current balance of the user's wallet, creating the wallet if needed."""
    wallet, _ = Wallet.objects.get_or_create(user_id=user_id)
    return wallet.balance


def transactions_for(user_id: int):
    """Ledger entries of the user's wallet, newest first."""
    return WalletTransaction.objects.filter(wallet__user_id=user_id).select_related(
        'property', 'purchase'
    )
