"""
Purchase engine.

purchase_tokens() runs as one atomic block. The property row is locked
before the wallet row, the same order the distribution engine uses, so
racing buyers of one property serialize on the property and never deadlock
against a payout.
"""

import logging
import uuid
from dataclasses import dataclass

from django.db import DEFAULT_DB_ALIAS, transaction

from wallet.exceptions import (
    ExceedsAvailable,
    InsufficientFunds,
    InvalidAmount,
    PropertyUnavailable,
)
from wallet.meta import PurchaseMeta
from wallet.models import WalletTransaction
from wallet.services import debit, get_wallet_for_update

from .models import Certificate, Property, TokenPurchase
from .tasks import issue_certificate_document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PurchaseResult:
    purchase_id: int
    certificate_id: int


def new_certificate_number() -> str:
    return f"CERT-{uuid.uuid4().hex[:12].upper()}"


def _validate_token_count(token_count) -> int:
    if isinstance(token_count, bool) or not isinstance(token_count, int) or token_count <= 0:
        raise InvalidAmount('Tokens must be a positive integer')
    return token_count


def purchase_tokens(buyer_id, property_id, token_count, using: str = DEFAULT_DB_ALIAS) -> PurchaseResult:
    """
    Buy tokens of an active property with the buyer's wallet balance.

    The price and title are read once, under the property lock, and every
    record created here uses that snapshot. Certificate rendering is queued
    after commit and never delays the purchase.

    Raises:
        InvalidAmount: If token_count is not a positive integer.
        PropertyUnavailable: If the property is missing or not active.
        InsufficientFunds: If the wallet cannot cover the cost.
        ExceedsAvailable: If fewer than token_count tokens are left.
    """
    token_count = _validate_token_count(token_count)

    with transaction.atomic(using=using):
        try:
            prop = (
                Property.objects.using(using)
                .select_for_update()
                .active()
                .get(pk=property_id)
            )
        except (Property.DoesNotExist, ValueError, TypeError):
            raise PropertyUnavailable() from None

        price = prop.token_price
        title = prop.title
        cost = price * token_count

        wallet = get_wallet_for_update(buyer_id, using=using)
        if wallet.balance < cost:
            raise InsufficientFunds(
                f'Insufficient funds: balance {wallet.balance}, cost {cost}'
            )

        if token_count > prop.tokens_available:
            raise ExceedsAvailable(
                f'Only {prop.tokens_available} tokens left, requested {token_count}'
            )

        purchase = TokenPurchase(
            buyer_id=buyer_id,
            property=prop,
            tokens_purchased=token_count,
            total_cost=cost,
            certificate_issued=False,
        )
        purchase.save(using=using)

        debit(
            wallet,
            cost,
            WalletTransaction.Type.PURCHASE,
            PurchaseMeta(tokens=token_count),
            using=using,
            purchase=purchase,
            property=prop,
        )

        prop.tokens_sold += token_count
        prop.save(using=using, update_fields=['tokens_sold', 'updated_at'])

        certificate = Certificate(
            owner_id=buyer_id,
            purchase=purchase,
            certificate_number=new_certificate_number(),
            property_title=title,
            tokens_owned=token_count,
        )
        certificate.save(using=using)

        # robust: a broker outage is logged and never fails a committed purchase
        transaction.on_commit(
            lambda: issue_certificate_document.delay(certificate.id),
            using=using,
            robust=True,
        )

    logger.info(
        'User %s bought %s tokens of property %s for %s (purchase %s)',
        buyer_id, token_count, prop.pk, cost, purchase.pk,
    )
    return PurchaseResult(purchase_id=purchase.pk, certificate_id=certificate.pk)
