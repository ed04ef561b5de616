"""
Pro-rata allocation of a money amount across token holders.

Allocation works in whole cents with integer arithmetic. Each holder first
gets their exact share rounded down to the cent; the cents left over go one
at a time to the holders with the largest remainders. Ties go to the larger
holding, then to the lower holder key. The allocations always add up to
exactly the amount being split.
"""

from decimal import ROUND_DOWN, Decimal
from typing import Dict, Hashable, Iterable, Tuple

CENT = Decimal('0.01')
PER_TOKEN_PLACES = Decimal('0.0000000001')


def per_token_amount(total: Decimal, total_tokens: int) -> Decimal:
    """total / total_tokens, truncated to the precision stored on a distribution."""
    return (total / Decimal(total_tokens)).quantize(PER_TOKEN_PLACES, rounding=ROUND_DOWN)


def allocate(total: Decimal, holdings: Iterable[Tuple[Hashable, int]]) -> Dict[Hashable, Decimal]:
    """
    Split total across holders in proportion to their tokens.

    Args:
        total: Amount to split, with at most two decimal places.
        holdings: (holder key, token count) pairs; keys must be unique and
            sortable, counts positive.

    Returns:
        Mapping of holder key to allocated amount. Holders whose share rounds
        to zero map to Decimal('0.00').
    """
    holdings = list(holdings)
    total_tokens = sum(tokens for _, tokens in holdings)
    if total_tokens <= 0:
        raise ValueError('Cannot allocate across zero tokens')

    total_cents = int((total / CENT).to_integral_exact())
    cents = {}
    remainders = []
    for key, tokens in holdings:
        share, remainder = divmod(total_cents * tokens, total_tokens)
        cents[key] = share
        remainders.append((remainder, tokens, key))

    leftover = total_cents - sum(cents.values())
    remainders.sort(key=lambda item: (-item[0], -item[1], item[2]))
    for _, _, key in remainders[:leftover]:
        cents[key] += 1

    return {key: (Decimal(value) * CENT).quantize(CENT) for key, value in cents.items()}
