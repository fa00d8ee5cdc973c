"""Authz: executions on behalf of the wallet (restake bots) and grant management."""

from cosmotax.domain.enums import Action, LedgerType
from cosmotax.parser.generic.base import BaseProcessor
from cosmotax.parser.handlers.common import credited_coins
from cosmotax.parser.utils.context import ProcessingContext
from cosmotax.parser.utils.types import LedgerEntry


class ExecProcessor(BaseProcessor):
    """Rewards a grantee claimed for the wallet. The grantee pays the fee."""

    PROCESSOR_NAME = "ExecProcessor"
    ACTIONS = (Action.MSG_EXEC,)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        return [
            LedgerEntry(
                type=LedgerType.INCOME,
                received_amount=coin.amount,
                received_asset=coin.symbol,
                description="Claimed Rewards from Auth",
            )
            for coin in await credited_coins(ctx)
        ]


def _grantees(ctx: ProcessingContext, action: Action) -> list[str]:
    return [
        str(message.payload.get("grantee") or "Unknown")
        for message in ctx.tx.messages
        if message.action is action
    ]


class GrantProcessor(BaseProcessor):
    PROCESSOR_NAME = "GrantProcessor"
    ACTIONS = (Action.MSG_GRANT,)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        grantees = _grantees(ctx, Action.MSG_GRANT) or ["Unknown"]
        return [await ctx.fee_entry(f"Granted authorization to {', '.join(grantees)}")]


class RevokeProcessor(BaseProcessor):
    PROCESSOR_NAME = "RevokeProcessor"
    ACTIONS = (Action.MSG_REVOKE,)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        grantees = _grantees(ctx, Action.MSG_REVOKE) or ["Unknown"]
        return [await ctx.fee_entry(f"Revoked authorization from {', '.join(grantees)}")]
