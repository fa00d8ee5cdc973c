"""Staking module: delegate, undelegate, redelegate.

Every staking message withdraws the pending rewards of the touched
validator(s) as a side effect; those show up as transfer legs paying the
delegator and are reported as ``Income``.
"""

from cosmotax.domain.enums import Action, LedgerType
from cosmotax.parser.generic.base import BaseProcessor
from cosmotax.parser.handlers.common import reward_entries
from cosmotax.parser.utils.amounts import UNKNOWN_DENOM, format_amount, parse_amounts, scale_amount
from cosmotax.parser.utils.context import ProcessingContext
from cosmotax.parser.utils.grouping import value_of
from cosmotax.parser.utils.types import LedgerEntry, ResolvedCoin


async def staked_coins(ctx: ProcessingContext, amount_text: str | None) -> list[ResolvedCoin]:
    """Coins of a staking event; bare legacy amounts (``"1000000"``) are in the base denom."""
    coins = []
    for raw, denom in parse_amounts(amount_text):
        denomination = ctx.base if denom == UNKNOWN_DENOM else await ctx.resolver.resolve(denom)
        coins.append(ResolvedCoin(denomination=denomination, amount=scale_amount(raw, denomination.decimals)))
    return coins


class _StakingProcessor(BaseProcessor):
    EVENT_TYPE: str = ""
    REWARD_DESCRIPTION: str = ""
    FALLBACK_DESCRIPTION: str = ""

    def describe(self, coin: ResolvedCoin, attributes) -> str:
        raise NotImplementedError

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        entries: list[LedgerEntry] = []
        fee_asset, fee_amount = await ctx.fee()

        for log in ctx.logs:
            for event in log.events_of_type(self.EVENT_TYPE):
                for coin in await staked_coins(ctx, value_of(event.attributes, "amount")):
                    entry = LedgerEntry(type=LedgerType.EXPENSE, description=self.describe(coin, event.attributes))
                    if not entries:
                        # the fee is paid once per transaction
                        entry.fee_asset = fee_asset.symbol
                        entry.fee_amount = fee_amount
                    entries.append(entry)

        if not entries:
            entries.append(await ctx.fee_entry(self.FALLBACK_DESCRIPTION))

        # a reward withdrawal in the same transaction reports the same transfer legs
        if not ctx.suppress_rewards:
            entries.extend(await reward_entries(ctx, self.REWARD_DESCRIPTION))
        return entries


class DelegateProcessor(_StakingProcessor):
    PROCESSOR_NAME = "DelegateProcessor"
    ACTIONS = (Action.MSG_DELEGATE, Action.LEGACY_DELEGATE)
    EVENT_TYPE = "delegate"
    REWARD_DESCRIPTION = "Claimed Rewards from Delegating"
    FALLBACK_DESCRIPTION = "Fee for Delegating"

    def describe(self, coin: ResolvedCoin, attributes) -> str:
        text = f"Delegated {format_amount(coin.amount)} {coin.symbol}"
        validator = value_of(attributes, "validator")
        return f"{text} to {validator}" if validator else text


class UndelegateProcessor(_StakingProcessor):
    PROCESSOR_NAME = "UndelegateProcessor"
    ACTIONS = (Action.MSG_UNDELEGATE, Action.LEGACY_BEGIN_UNBONDING)
    EVENT_TYPE = "unbond"
    REWARD_DESCRIPTION = "Claimed Rewards from Undelegating"
    FALLBACK_DESCRIPTION = "Fee for Undelegating"

    def describe(self, coin: ResolvedCoin, attributes) -> str:
        text = f"Undelegated {format_amount(coin.amount)} {coin.symbol}"
        validator = value_of(attributes, "validator")
        return f"{text} from {validator}" if validator else text


class RedelegateProcessor(_StakingProcessor):
    PROCESSOR_NAME = "RedelegateProcessor"
    ACTIONS = (Action.MSG_BEGIN_REDELEGATE, Action.LEGACY_BEGIN_REDELEGATE)
    EVENT_TYPE = "redelegate"
    REWARD_DESCRIPTION = "Claimed Rewards from Redelegating"
    FALLBACK_DESCRIPTION = "Fee for Redelegating"

    def describe(self, coin: ResolvedCoin, attributes) -> str:
        source = value_of(attributes, "source_validator", "Unknown")
        destination = value_of(attributes, "destination_validator", "Unknown")
        return f"Redelegated {format_amount(coin.amount)} {coin.symbol} from {source} to {destination}"
