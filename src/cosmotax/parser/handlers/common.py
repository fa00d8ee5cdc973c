"""Reusable building blocks shared by processors.

All functions degrade silently on missing attributes: a leg without an
amount resolves to ``0 Unknown``, a leg that cannot be attributed to the
wallet is skipped.
"""

from decimal import Decimal

from cosmotax.domain.enums import LedgerType
from cosmotax.parser.utils.amounts import add
from cosmotax.parser.utils.context import ProcessingContext
from cosmotax.parser.utils.grouping import group_attributes, value_of
from cosmotax.parser.utils.types import LedgerEntry, Log, ResolvedCoin

OWNER_KEYS = ("recipient", "receiver", "address", "sender")


def sum_by_symbol(coins: list[ResolvedCoin]) -> dict[str, Decimal]:
    """Collapse coins of the same symbol, first-seen order preserved."""
    totals: dict[str, Decimal] = {}
    for coin in coins:
        totals[coin.symbol] = add(totals.get(coin.symbol, Decimal(0)), coin.amount)
    return totals


async def credited_coins(ctx: ProcessingContext, logs: list[Log] | None = None) -> list[ResolvedCoin]:
    """Coins of every transfer leg paying the wallet."""
    coins: list[ResolvedCoin] = []
    for log in logs if logs is not None else ctx.logs:
        for leg in ctx.transfer_legs(log):
            if ctx.is_self(leg.recipient):
                coins.extend(await ctx.resolve_coins(leg.amount))
    return coins


async def reward_entries(
    ctx: ProcessingContext, description: str, logs: list[Log] | None = None
) -> list[LedgerEntry]:
    """One ``Income`` per symbol credited to the wallet (auto-claimed staking rewards)."""
    totals = sum_by_symbol(await credited_coins(ctx, logs))
    return [
        LedgerEntry(type=LedgerType.INCOME, received_amount=amount, received_asset=symbol, description=description)
        for symbol, amount in totals.items()
    ]


async def claim_airdrop_entries(ctx: ProcessingContext, description: str = "Airdrop") -> list[LedgerEntry]:
    """``Income`` rows for every amount carried by ``claim`` events addressed to the wallet."""
    entries: list[LedgerEntry] = []
    for log in ctx.logs:
        for event in log.events_of_type("claim"):
            for group in group_attributes(event.attributes):
                amount = value_of(group, "amount")
                if not amount:
                    continue
                owner = next((value_of(group, k) for k in OWNER_KEYS if value_of(group, k)), None)
                if owner is not None and not ctx.is_self(owner):
                    continue
                for coin in await ctx.resolve_coins(amount):
                    entries.append(LedgerEntry(
                        type=LedgerType.INCOME,
                        received_amount=coin.amount,
                        received_asset=coin.symbol,
                        description=description,
                    ))
    return entries


def deposit_entry(coin: ResolvedCoin, description: str, meta: str = "") -> LedgerEntry:
    return LedgerEntry(
        type=LedgerType.DEPOSIT,
        received_amount=coin.amount,
        received_asset=coin.symbol,
        description=description,
        meta=meta,
    )


def transfer_entry(coin: ResolvedCoin, description: str, meta: str = "") -> LedgerEntry:
    return LedgerEntry(
        type=LedgerType.TRANSFER,
        sent_amount=coin.amount,
        sent_asset=coin.symbol,
        description=description,
        meta=meta,
    )
