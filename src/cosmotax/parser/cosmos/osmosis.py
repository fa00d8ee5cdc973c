"""Osmosis: GAMM / poolmanager swaps, pool joins and exits, concentrated liquidity, lockups."""

from cosmotax.domain.enums import Action, LedgerType
from cosmotax.parser.generic.base import BaseProcessor
from cosmotax.parser.utils.amounts import format_amount
from cosmotax.parser.utils.context import ProcessingContext
from cosmotax.parser.utils.grouping import group_attributes, value_of
from cosmotax.parser.utils.types import LedgerEntry, Log, ResolvedCoin


async def _sent_and_received(ctx: ProcessingContext) -> tuple[list[ResolvedCoin], list[ResolvedCoin]]:
    """Coins leaving the wallet and coins credited to it, across all transfer legs."""
    sent: list[ResolvedCoin] = []
    received: list[ResolvedCoin] = []
    for leg in ctx.transfer_legs():
        if ctx.is_self(leg.recipient):
            received.extend(await ctx.resolve_coins(leg.amount))
        elif ctx.is_self(leg.sender):
            sent.extend(await ctx.resolve_coins(leg.amount))
    return sent, received


def _swap_records(log: Log) -> list[tuple[str, str]]:
    records = []
    for event in log.events_of_type("token_swapped"):
        for group in group_attributes(event.attributes):
            records.append((value_of(group, "tokens_in", ""), value_of(group, "tokens_out", "")))
    return records


class SwapProcessor(BaseProcessor):
    """Exact-in / exact-out swaps. A multi-hop route collapses to one ``Swap`` row per message."""

    PROCESSOR_NAME = "OsmosisSwapProcessor"
    ACTIONS = (
        Action.OSMOSIS_SWAP_EXACT_AMOUNT_IN,
        Action.OSMOSIS_SWAP_EXACT_AMOUNT_OUT,
        Action.OSMOSIS_PM_SWAP_EXACT_AMOUNT_IN,
        Action.OSMOSIS_PM_SWAP_EXACT_AMOUNT_OUT,
    )

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        entries: list[LedgerEntry] = []
        for log in ctx.logs:
            records = _swap_records(log)
            if not records:
                continue
            tokens_in = await ctx.resolve_coins(records[0][0])
            tokens_out = await ctx.resolve_coins(records[-1][1])
            sent, received = tokens_in[0], tokens_out[0]
            entries.append(LedgerEntry(
                type=LedgerType.SWAP,
                sent_amount=sent.amount,
                sent_asset=sent.symbol,
                received_amount=received.amount,
                received_asset=received.symbol,
                description=(
                    f"Swapped {format_amount(sent.amount)} {sent.symbol} "
                    f"for {format_amount(received.amount)} {received.symbol}"
                ),
            ))

        entries.append(await ctx.fee_entry("Fee for Swapping"))
        return entries


class JoinPoolProcessor(BaseProcessor):
    PROCESSOR_NAME = "JoinPoolProcessor"
    ACTIONS = (Action.OSMOSIS_JOIN_POOL,)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        sent, received = await _sent_and_received(ctx)
        entries = [
            LedgerEntry(
                type=LedgerType.SWAP,
                received_amount=coin.amount,
                received_asset=coin.symbol,
                description=f"Received {format_amount(coin.amount)} {coin.symbol} Pool Token",
            )
            for coin in received
        ]
        entries.extend(
            LedgerEntry(
                type=LedgerType.SWAP,
                sent_amount=coin.amount,
                sent_asset=coin.symbol,
                description=f"Deposit {format_amount(coin.amount)} {coin.symbol} into Liquidity Pool",
            )
            for coin in sent
        )
        entries.append(await ctx.fee_entry("Fee for Joining Liquidity Pool"))
        return entries


class JoinSwapExternProcessor(BaseProcessor):
    """Single-asset join: one asset in, pool shares out."""

    PROCESSOR_NAME = "JoinSwapExternProcessor"
    ACTIONS = (Action.OSMOSIS_JOIN_SWAP_EXTERN_AMOUNT_IN,)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        sent, received = await _sent_and_received(ctx)
        entries: list[LedgerEntry] = []
        if sent or received:
            entry = LedgerEntry(type=LedgerType.SWAP, description="Swapped from Liquidity Pool")
            if sent:
                entry.sent_amount, entry.sent_asset = sent[0].amount, sent[0].symbol
            if received:
                entry.received_amount, entry.received_asset = received[0].amount, received[0].symbol
            entries.append(entry)
        entries.append(await ctx.fee_entry("Fee for Joining Liquidity Pool"))
        return entries


class ExitPoolProcessor(BaseProcessor):
    PROCESSOR_NAME = "ExitPoolProcessor"
    ACTIONS = (Action.OSMOSIS_EXIT_POOL,)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        sent, received = await _sent_and_received(ctx)
        entries = [
            LedgerEntry(
                type=LedgerType.SWAP,
                received_amount=coin.amount,
                received_asset=coin.symbol,
                description="Removed Tokens from Liquidity Pool",
            )
            for coin in received
        ]
        entries.extend(
            LedgerEntry(
                type=LedgerType.SWAP,
                sent_amount=coin.amount,
                sent_asset=coin.symbol,
                description="Swap GAMM Pool tokens",
            )
            for coin in sent
        )
        entries.append(await ctx.fee_entry("Fee for Exiting Liquidity Pool"))
        return entries


class CreatePositionProcessor(BaseProcessor):
    PROCESSOR_NAME = "CreatePositionProcessor"
    ACTIONS = (Action.OSMOSIS_CL_CREATE_POSITION,)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        sent, _ = await _sent_and_received(ctx)
        entries = [
            LedgerEntry(
                type=LedgerType.SWAP,
                sent_amount=coin.amount,
                sent_asset=coin.symbol,
                description=f"Deposit {format_amount(coin.amount)} {coin.symbol} into Concentrated Liquidity Position",
            )
            for coin in sent
        ]
        entries.append(await ctx.fee_entry("Fee for Creating Position"))
        return entries


class WithdrawPositionProcessor(BaseProcessor):
    PROCESSOR_NAME = "WithdrawPositionProcessor"
    ACTIONS = (Action.OSMOSIS_CL_WITHDRAW_POSITION,)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        _, received = await _sent_and_received(ctx)
        entries = [
            LedgerEntry(
                type=LedgerType.SWAP,
                received_amount=coin.amount,
                received_asset=coin.symbol,
                description=f"Withdrew {format_amount(coin.amount)} {coin.symbol} from Concentrated Liquidity Position",
            )
            for coin in received
        ]
        entries.append(await ctx.fee_entry("Fee for Withdrawing Position"))
        return entries


class LockTokensProcessor(BaseProcessor):
    """Bonding pool shares. No value leaves the wallet, only the fee is booked."""

    PROCESSOR_NAME = "LockTokensProcessor"
    ACTIONS = (Action.OSMOSIS_LOCK_TOKENS,)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        entries: list[LedgerEntry] = []
        for log in ctx.logs:
            for event in log.events_of_type("lock_tokens"):
                for group in group_attributes(event.attributes):
                    if not ctx.is_self(value_of(group, "owner")):
                        continue
                    for coin in await ctx.resolve_coins(value_of(group, "amount")):
                        description = f"Bond {format_amount(coin.amount)} {coin.symbol}"
                        if entries:
                            entries.append(LedgerEntry(type=LedgerType.EXPENSE, description=description))
                        else:
                            entries.append(await ctx.fee_entry(description))
        return entries
