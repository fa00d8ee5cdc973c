"""Transaction fee calculation."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from cosmotax.exceptions import StructuralError
from cosmotax.parser.utils.amounts import scale_amount

if TYPE_CHECKING:
    from cosmotax.infra.denom.resolver import DenominationResolver
    from cosmotax.parser.utils.types import Denomination, RawTransaction


def primary_fee_coin(tx: RawTransaction) -> tuple[str, str]:
    """(raw amount, denom) of the first fee coin. Chains may list several; only the first counts."""
    fee = tx.tx.auth_info.fee
    if fee is None:
        raise StructuralError(f"transaction {tx.hash} has no fee", tx_id=tx.id)
    if not fee.amount:
        raise StructuralError(f"transaction {tx.hash} has an empty fee amount", tx_id=tx.id)
    coin = fee.amount[0]
    return coin.amount, coin.denom


async def compute_fee_quote(tx: RawTransaction, resolver: DenominationResolver) -> tuple[Denomination, Decimal]:
    """Resolved fee asset and the human-scaled fee amount."""
    raw, denom = primary_fee_coin(tx)
    denomination = await resolver.resolve(denom)
    return denomination, scale_amount(raw, denomination.decimals)


async def compute_fee(tx: RawTransaction, resolver: DenominationResolver) -> Decimal:
    """Human-scaled fee of the transaction, e.g. ``5000uatom -> 0.005000``."""
    _, amount = await compute_fee_quote(tx, resolver)
    return amount
