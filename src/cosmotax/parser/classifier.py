"""TransactionClassifier — one raw transaction -> canonical ledger rows."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from cosmotax.domain.enums import REWARD_WITHDRAWAL_ACTIONS, STAKING_ACTIONS, Action, Network
from cosmotax.exceptions import StructuralError
from cosmotax.infra.denom.native import base_denomination
from cosmotax.ledger import ActionDiagnostics
from cosmotax.parser.generic.base import BaseProcessor
from cosmotax.parser.registry import ProcessorRegistry
from cosmotax.parser.utils.context import ProcessingContext
from cosmotax.parser.utils.grouping import value_of
from cosmotax.parser.utils.types import LedgerEntry, LedgerRow, RawTransaction

if TYPE_CHECKING:
    from cosmotax.infra.denom.contracts import ContractMetadataResolver
    from cosmotax.infra.denom.resolver import DenominationResolver
    from cosmotax.report.timeouts import TimeoutLedger

logger = logging.getLogger(__name__)


def discover_actions(tx: RawTransaction) -> list[str]:
    """Distinct ``action`` attributes of all ``message`` events, first appearance first.

    Falls back to the envelope's message types when the logs name no action.
    """
    actions: list[str] = []
    for log in tx.logs:
        for event in log.events_of_type("message"):
            action = value_of(event.attributes, "action")
            if action and action not in actions:
                actions.append(action)
    if not actions and tx.logs:
        for type_url in tx.message_types:
            if type_url not in actions:
                actions.append(type_url)
    return actions


class TransactionClassifier:
    """Raw TX -> actions -> processors -> LedgerRows."""

    def __init__(
        self,
        registry: ProcessorRegistry,
        resolver: DenominationResolver,
        address: str,
        network: Network = Network.COSMOS,
        contracts: ContractMetadataResolver | None = None,
        timeouts: TimeoutLedger | None = None,
        reward_overlap_policy: str = "suppress",
        diagnostics: ActionDiagnostics | None = None,
    ) -> None:
        self._registry = registry
        self._resolver = resolver
        self._address = address
        self._base = base_denomination(network)
        self._contracts = contracts
        self._timeouts = timeouts
        self._suppress_overlap = reward_overlap_policy != "merge"
        self.diagnostics = diagnostics or ActionDiagnostics()

    async def classify_raw(self, record: dict) -> list[LedgerRow]:
        try:
            tx = RawTransaction.model_validate(record)
        except ValidationError as e:
            tx_id = str(record.get("id") or record.get("txhash") or record.get("hash") or "") or None
            raise StructuralError(f"invalid transaction record: {e.error_count()} errors", tx_id=tx_id) from e
        return await self.classify(tx)

    async def classify(self, tx: RawTransaction) -> list[LedgerRow]:
        self.diagnostics.record_message_types(tx.message_types)
        ctx = ProcessingContext(
            address=self._address,
            base=self._base,
            tx=tx,
            resolver=self._resolver,
            contracts=self._contracts,
            timeouts=self._timeouts,
        )

        if tx.failed:
            entries = [await ctx.fee_entry("Transaction Failed")]
            return self._stamp(tx, entries)

        actions = discover_actions(tx)
        ctx.suppress_rewards = self._suppress_overlap and self._overlaps(actions)

        entries: list[LedgerEntry] = []
        invoked: list[BaseProcessor] = []
        for action in actions:
            processor = self._registry.get(action)
            if processor is None:
                logger.debug("No processor for action %s in %s", action, tx.hash)
                self.diagnostics.record_unmatched(action)
                continue
            if processor in invoked:
                continue
            invoked.append(processor)
            entries.extend(await processor.process(ctx))

        return self._stamp(tx, entries)

    @staticmethod
    def _overlaps(actions: list[str]) -> bool:
        decoded = {Action.decode(a) for a in actions}
        return bool(decoded & STAKING_ACTIONS) and bool(decoded & REWARD_WITHDRAWAL_ACTIONS)

    @staticmethod
    def _stamp(tx: RawTransaction, entries: list[LedgerEntry]) -> list[LedgerRow]:
        return [
            LedgerRow.from_entry(entry, date=tx.timestamp, transaction_hash=tx.hash, transaction_id=tx.id)
            for entry in entries
        ]
