"""
Typed metadata attached to wallet transactions.

Each transaction type carries its own small record instead of an open
key-value bag. The record is stored in the transaction's JSON column and
rebuilt from it on read.
"""

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Optional, Union


@dataclass(frozen=True)
class DepositMeta:
    source: str = 'sandbox'

    def to_json(self) -> dict:
        return asdict(self)

    @classmethod
    def from_json(cls, data: dict) -> 'DepositMeta':
        return cls(source=data.get('source', 'sandbox'))


@dataclass(frozen=True)
class PurchaseMeta:
    tokens: int

    def to_json(self) -> dict:
        return {'tokens': self.tokens}

    @classmethod
    def from_json(cls, data: dict) -> 'PurchaseMeta':
        return cls(tokens=int(data['tokens']))


@dataclass(frozen=True)
class ProfitMeta:
    distribution_id: int
    per_token: Decimal
    tokens: int

    def to_json(self) -> dict:
        # Decimals travel as strings so JSON does not round them through float
        return {
            'distribution_id': self.distribution_id,
            'per_token': str(self.per_token),
            'tokens': self.tokens,
        }

    @classmethod
    def from_json(cls, data: dict) -> 'ProfitMeta':
        return cls(
            distribution_id=int(data['distribution_id']),
            per_token=Decimal(data['per_token']),
            tokens=int(data['tokens']),
        )


TransactionMeta = Union[DepositMeta, PurchaseMeta, ProfitMeta]

META_BY_TYPE = {
    'deposit': DepositMeta,
    'purchase': PurchaseMeta,
    'profit': ProfitMeta,
}


def decode_meta(tx_type: str, data: Optional[dict]) -> Optional[TransactionMeta]:
    """Rebuild the metadata record for a stored transaction, if it has one."""
    meta_class = META_BY_TYPE.get(tx_type)
    if meta_class is None or data is None:
        return None
    return meta_class.from_json(data)
