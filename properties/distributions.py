"""
Distribution engine.

A payout is recorded and every holder is credited inside one atomic block,
so a partially paid distribution is never visible. Holder wallets are
locked in user id order after the property row.

All holders are paid in a single transaction. Splitting very large holder
sets into several commits would need a resumable distribution state and is
not done here.
"""

import logging
from decimal import Decimal
from typing import Optional

from django.db import DEFAULT_DB_ALIAS, transaction
from django.db.models import Sum

from accounts.models import Role
from accounts.services import has_role
from wallet.exceptions import NoTokensIssued, PropertyUnavailable, Unauthorized
from wallet.meta import ProfitMeta
from wallet.models import WalletTransaction
from wallet.services import credit, get_wallet_for_update, parse_amount

from .allocation import allocate, per_token_amount
from .models import ProfitDistribution, Property, TokenPurchase

logger = logging.getLogger(__name__)


def can_distribute(user_id, prop: Property, using: str = DEFAULT_DB_ALIAS) -> bool:
    """Admins may pay out any property; verified sellers only their own."""
    if has_role(user_id, Role.ADMIN, using=using):
        return True
    return (
        prop.seller_id is not None
        and prop.seller_id == user_id
        and has_role(user_id, Role.VERIFIED_SELLER, using=using)
    )


def holdings_for(property_id, using: str = DEFAULT_DB_ALIAS) -> list:
    """(buyer id, total tokens) for every holder of the property, by buyer id."""
    rows = (
        TokenPurchase.objects.using(using)
        .filter(property_id=property_id)
        .values('buyer_id')
        .annotate(tokens=Sum('tokens_purchased'))
        .order_by('buyer_id')
    )
    return [(row['buyer_id'], row['tokens']) for row in rows]


def distribute_profit(
    initiator_id,
    property_id,
    total_amount,
    notes: Optional[str] = None,
    using: str = DEFAULT_DB_ALIAS,
) -> int:
    """
    Pay total_amount out to all holders of a property, pro rata by tokens.

    Credits are allocated with the largest-remainder rule in cents (see
    allocation.allocate), so they add up to exactly total_amount. A holder
    whose share rounds to zero receives no credit and no ledger entry.

    Returns:
        The id of the new ProfitDistribution.

    Raises:
        PropertyUnavailable: If the property does not exist.
        Unauthorized: If the initiator is neither an admin nor the verified
            seller who owns the property.
        InvalidAmount: If total_amount is not a positive cent amount.
        NoTokensIssued: If nobody has bought tokens of the property.
    """
    with transaction.atomic(using=using):
        try:
            prop = Property.objects.using(using).select_for_update().get(pk=property_id)
        except (Property.DoesNotExist, ValueError, TypeError):
            raise PropertyUnavailable() from None

        if not can_distribute(initiator_id, prop, using=using):
            raise Unauthorized('Not authorized to distribute profits for this property')

        total_amount = parse_amount(total_amount)

        holdings = holdings_for(prop.pk, using=using)
        total_tokens = sum(tokens for _, tokens in holdings)
        if total_tokens == 0:
            raise NoTokensIssued()

        per_token = per_token_amount(total_amount, total_tokens)
        distribution = ProfitDistribution(
            property=prop,
            total_amount=total_amount,
            per_token_amount=per_token,
            created_by_id=initiator_id,
            notes=notes or '',
        )
        distribution.save(using=using)

        shares = allocate(total_amount, holdings)
        paid = Decimal('0.00')
        for holder_id, tokens in holdings:
            amount = shares[holder_id]
            if amount <= 0:
                continue
            wallet = get_wallet_for_update(holder_id, using=using)
            credit(
                wallet,
                amount,
                WalletTransaction.Type.PROFIT,
                ProfitMeta(distribution_id=distribution.pk, per_token=per_token, tokens=tokens),
                using=using,
                property=prop,
                distribution=distribution,
            )
            paid += amount

    logger.info(
        'Distribution %s: %s paid to %s holders of property %s (%s per token)',
        distribution.pk, paid, len(holdings), prop.pk, per_token,
    )
    return distribution.pk
