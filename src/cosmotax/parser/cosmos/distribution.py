"""Distribution module: MsgWithdrawDelegatorReward."""

from cosmotax.domain.enums import Action
from cosmotax.parser.generic.base import BaseProcessor
from cosmotax.parser.handlers.common import reward_entries
from cosmotax.parser.utils.context import ProcessingContext
from cosmotax.parser.utils.types import LedgerEntry


class WithdrawRewardProcessor(BaseProcessor):
    """Rewards of every validator claimed in the transaction, one ``Income`` per symbol.

    A wallet claiming from 3 validators in one transaction gets a single row per
    asset, with the fee reported once afterwards.
    """

    PROCESSOR_NAME = "WithdrawRewardProcessor"
    ACTIONS = (Action.MSG_WITHDRAW_DELEGATOR_REWARD, Action.LEGACY_WITHDRAW_DELEGATOR_REWARD)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        entries = await reward_entries(ctx, "Claimed Rewards")
        entries.append(await ctx.fee_entry("Fees from Claiming Rewards"))
        return entries
