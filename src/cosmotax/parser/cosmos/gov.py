"""Governance module: votes, plus the airdrops some chains attach to voting."""

from cosmotax.domain.enums import Action
from cosmotax.parser.generic.base import BaseProcessor
from cosmotax.parser.handlers.common import claim_airdrop_entries
from cosmotax.parser.utils.context import ProcessingContext
from cosmotax.parser.utils.grouping import values_of
from cosmotax.parser.utils.types import LedgerEntry


class VoteProcessor(BaseProcessor):
    PROCESSOR_NAME = "VoteProcessor"
    ACTIONS = (Action.MSG_VOTE, Action.MSG_VOTE_V1, Action.MSG_VOTE_WEIGHTED, Action.LEGACY_VOTE)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        entries = await claim_airdrop_entries(ctx)

        proposal_ids: list[str] = []
        for log in ctx.logs:
            for event in log.events_of_type("proposal_vote"):
                for proposal_id in values_of(event.attributes, "proposal_id"):
                    if proposal_id and proposal_id not in proposal_ids:
                        proposal_ids.append(proposal_id)

        if not proposal_ids:
            # older logs carry no proposal_vote event
            for message in ctx.tx.messages:
                proposal_id = message.payload.get("proposal_id")
                if proposal_id is not None and str(proposal_id) not in proposal_ids:
                    proposal_ids.append(str(proposal_id))

        description = "Vote on " + " ".join(f"#{p}" for p in proposal_ids) if proposal_ids else "Vote"
        entries.append(await ctx.fee_entry(description))
        return entries
