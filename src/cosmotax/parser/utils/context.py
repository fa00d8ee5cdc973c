"""ProcessingContext — everything a processor needs to read one transaction."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from cosmotax.domain.enums import LedgerType
from cosmotax.parser.utils.amounts import parse_amounts, scale_amount
from cosmotax.parser.utils.fees import compute_fee_quote
from cosmotax.parser.utils.grouping import group_attributes, value_of
from cosmotax.parser.utils.types import (
    Denomination,
    LedgerEntry,
    Log,
    RawTransaction,
    ResolvedCoin,
    TransferLeg,
)

if TYPE_CHECKING:
    from cosmotax.infra.denom.contracts import ContractMetadataResolver
    from cosmotax.infra.denom.resolver import DenominationResolver
    from cosmotax.report.timeouts import TimeoutLedger


class ProcessingContext:
    """Read-only view of one transaction plus the shared resolvers of the run."""

    def __init__(
        self,
        address: str,
        base: Denomination,
        tx: RawTransaction,
        resolver: DenominationResolver,
        contracts: ContractMetadataResolver | None = None,
        timeouts: TimeoutLedger | None = None,
        suppress_rewards: bool = False,
    ) -> None:
        self.address = address
        self.base = base
        self.tx = tx
        self.resolver = resolver
        self.contracts = contracts
        self.timeouts = timeouts
        self.suppress_rewards = suppress_rewards
        self._fee: tuple[Denomination, Decimal] | None = None

    @property
    def base_symbol(self) -> str:
        return self.base.symbol

    @property
    def logs(self) -> list[Log]:
        return self.tx.logs

    def is_self(self, address: str | None) -> bool:
        return bool(address) and address == self.address

    # --- fees ---

    async def fee(self) -> tuple[Denomination, Decimal]:
        if self._fee is None:
            self._fee = await compute_fee_quote(self.tx, self.resolver)
        return self._fee

    async def fee_entry(self, description: str = "") -> LedgerEntry:
        """``Expense`` row carrying only the transaction fee."""
        asset, amount = await self.fee()
        return LedgerEntry(
            type=LedgerType.EXPENSE,
            fee_asset=asset.symbol,
            fee_amount=amount,
            description=description,
        )

    # --- amounts ---

    async def resolve_coins(self, amount_text: str | None) -> list[ResolvedCoin]:
        """``"1000uatom,5ibc/X"`` -> resolved, human-scaled coins."""
        coins = []
        for raw, denom in parse_amounts(amount_text):
            denomination = await self.resolver.resolve(denom)
            coins.append(ResolvedCoin(denomination=denomination, amount=scale_amount(raw, denomination.decimals)))
        return coins

    # --- events ---

    def transfer_legs(self, log: Log | None = None) -> list[TransferLeg]:
        """Every record of every ``transfer`` event, of one log or of all logs."""
        logs = [log] if log is not None else self.logs
        legs = []
        for item in logs:
            for event in item.events_of_type("transfer"):
                for group in group_attributes(event.attributes):
                    legs.append(TransferLeg(
                        recipient=value_of(group, "recipient", ""),
                        sender=value_of(group, "sender", ""),
                        amount=value_of(group, "amount", ""),
                    ))
        return legs

    def message_senders(self, log: Log) -> list[str]:
        """``sender`` values of a log's ``message`` events."""
        senders = []
        for event in log.events_of_type("message"):
            sender = value_of(event.attributes, "sender")
            if sender:
                senders.append(sender)
        return senders
