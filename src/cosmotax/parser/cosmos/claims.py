"""Airdrop claim messages."""

from cosmotax.domain.enums import Action
from cosmotax.parser.generic.base import BaseProcessor
from cosmotax.parser.handlers.common import claim_airdrop_entries
from cosmotax.parser.utils.context import ProcessingContext
from cosmotax.parser.utils.types import LedgerEntry


class ClaimProcessor(BaseProcessor):
    PROCESSOR_NAME = "ClaimProcessor"
    ACTIONS = (Action.STRIDE_CLAIM_FREE_AMOUNT,)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        entries = await claim_airdrop_entries(ctx)
        entries.append(await ctx.fee_entry("Fee for Claiming Airdrop"))
        return entries
