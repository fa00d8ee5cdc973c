"""Gravity DEX (``tendermint.liquidity``) batch swaps and pool deposits/withdrawals."""

from cosmotax.domain.enums import Action, LedgerType
from cosmotax.parser.generic.base import BaseProcessor
from cosmotax.parser.utils.amounts import format_amount, multiply, quantize, scale_amount
from cosmotax.parser.utils.context import ProcessingContext
from cosmotax.parser.utils.grouping import value_of
from cosmotax.parser.utils.types import LedgerEntry


class SwapWithinBatchProcessor(BaseProcessor):
    """Batch swap order. The demand side is the order price applied to the offer.

    The swap fee is paid in the offer asset and rides on the ``Swap`` row; the
    transaction fee follows as its own ``Expense``.
    """

    PROCESSOR_NAME = "SwapWithinBatchProcessor"
    ACTIONS = (Action.MSG_SWAP_WITHIN_BATCH, Action.LEGACY_SWAP_WITHIN_BATCH)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        entries: list[LedgerEntry] = []
        for log in ctx.logs:
            for event in log.events_of_type("swap_within_batch"):
                attrs = event.attributes
                offer_denom = await ctx.resolver.resolve(value_of(attrs, "offer_coin_denom", "Unknown"))
                demand_denom = await ctx.resolver.resolve(value_of(attrs, "demand_coin_denom", "Unknown"))

                offer = scale_amount(value_of(attrs, "offer_coin_amount", "0"), offer_denom.decimals)
                offer_fee = scale_amount(value_of(attrs, "offer_coin_fee_amount", "0"), offer_denom.decimals)
                demand = quantize(multiply(offer, value_of(attrs, "order_price", "0")), demand_denom.decimals)

                entries.append(LedgerEntry(
                    type=LedgerType.SWAP,
                    sent_amount=offer,
                    sent_asset=offer_denom.symbol,
                    received_amount=demand,
                    received_asset=demand_denom.symbol,
                    fee_amount=offer_fee,
                    fee_asset=offer_denom.symbol,
                    description=(
                        f"Swap {format_amount(offer)} {offer_denom.symbol} "
                        f"for {format_amount(demand)} {demand_denom.symbol}"
                    ),
                ))

        entries.append(await ctx.fee_entry("Fee for Swapping"))
        return entries


class DepositWithinBatchProcessor(BaseProcessor):
    PROCESSOR_NAME = "DepositWithinBatchProcessor"
    ACTIONS = (Action.MSG_DEPOSIT_WITHIN_BATCH, Action.LEGACY_DEPOSIT_WITHIN_BATCH)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        entries: list[LedgerEntry] = []
        deposited = False

        for leg in ctx.transfer_legs():
            if ctx.is_self(leg.recipient):
                for coin in await ctx.resolve_coins(leg.amount):
                    entries.append(LedgerEntry(
                        type=LedgerType.INCOME,
                        received_amount=coin.amount,
                        received_asset=coin.symbol,
                        description="Received from Liquidity Pool",
                    ))
            elif ctx.is_self(leg.sender):
                for coin in await ctx.resolve_coins(leg.amount):
                    entries.append(LedgerEntry(
                        type=LedgerType.SWAP,
                        sent_amount=coin.amount,
                        sent_asset=coin.symbol,
                        description="Add to Liquidity Pool",
                    ))
                deposited = True

        if deposited:
            entries.append(await ctx.fee_entry("Fee for adding to Liquidity Pool"))
        return entries


class WithdrawWithinBatchProcessor(BaseProcessor):
    """Pool coins handed back to the pool; the reserve coins arrive at batch end, outside the tx."""

    PROCESSOR_NAME = "WithdrawWithinBatchProcessor"
    ACTIONS = (Action.MSG_WITHDRAW_WITHIN_BATCH, Action.LEGACY_WITHDRAW_WITHIN_BATCH)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        entries: list[LedgerEntry] = []
        for log in ctx.logs:
            for event in log.events_of_type("withdraw_within_batch"):
                denomination = await ctx.resolver.resolve(value_of(event.attributes, "pool_coin_denom", "Unknown"))
                amount = scale_amount(value_of(event.attributes, "pool_coin_amount", "0"), denomination.decimals)
                entries.append(LedgerEntry(
                    type=LedgerType.SWAP,
                    sent_amount=amount,
                    sent_asset=denomination.symbol,
                    description="Remove from Liquidity Pool",
                ))

        entries.append(await ctx.fee_entry("Fee for Removing from Liquidity Pool"))
        return entries
