"""CosmWasm MsgExecuteContract.

Contracts report what they did through ``wasm`` events. One event holds one
record per contract call (each starting with the contract address key), so
records are recovered with ``group_attributes`` and dispatched on their
``action`` attribute. Amounts inside records are raw CW20 units of the
emitting contract.
"""

import logging
import re
from decimal import Decimal

from cosmotax.domain.enums import Action, LedgerType
from cosmotax.parser.generic.base import BaseProcessor
from cosmotax.parser.handlers.common import credited_coins
from cosmotax.parser.utils.amounts import UNKNOWN_DENOM, format_amount, leading_amount, scale_amount
from cosmotax.parser.utils.context import ProcessingContext
from cosmotax.parser.utils.grouping import group_attributes, value_of
from cosmotax.parser.utils.types import Attribute, Denomination, LedgerEntry, ResolvedCoin

logger = logging.getLogger(__name__)

CONTRACT_KEYS = ("_contract_address", "contract_address")
# companions of another record in the same call
COMPANION_ACTIONS = frozenset({"bond", "send", "increase_allowance"})
# records whose payout also shows up as a CW20 transfer record
PRIMARY_ACTIONS = frozenset({"swap", "claim", "stake", "withdraw_rewards", "transfer_from", "mint"})

_BECH32_RE = re.compile(r"^[a-z]+1[02-9ac-hj-np-z]{38,}$")


def contract_of(record: list[Attribute]) -> str:
    for key in CONTRACT_KEYS:
        value = value_of(record, key)
        if value:
            return value
    return UNKNOWN_DENOM


def _first(record: list[Attribute], *keys: str) -> str | None:
    for key in keys:
        value = value_of(record, key)
        if value:
            return value
    return None


def is_contract_address(value: str) -> bool:
    return bool(_BECH32_RE.match(value))


class WasmExecuteProcessor(BaseProcessor):
    PROCESSOR_NAME = "WasmExecuteProcessor"
    ACTIONS = (Action.WASM_EXECUTE_CONTRACT,)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        call = _ContractCall(ctx)
        entries: list[LedgerEntry] = []

        for log in ctx.logs:
            records = []
            for event in log.events_of_type("wasm"):
                records.extend(group_attributes(event.attributes))
            entries.extend(await call.read(records))

        return entries


class _ContractCall:
    """Reads the wasm records of one transaction. The fee rides on the first expense only."""

    def __init__(self, ctx: ProcessingContext) -> None:
        self.ctx = ctx
        self.fee_charged = False
        self.records: list[list[Attribute]] = []
        self.actions: list[str | None] = []

    async def read(self, records: list[list[Attribute]]) -> list[LedgerEntry]:
        self.records = records
        self.actions = [value_of(r, "action") for r in records]
        entries: list[LedgerEntry] = []
        for record, action in zip(self.records, self.actions):
            if action is None or action in COMPANION_ACTIONS:
                continue
            handler = getattr(self, f"_on_{action}", None)
            if handler is None:
                logger.debug("Ignoring contract action %s in %s", action, self.ctx.tx.hash)
                continue
            entries.extend(await handler(record))
        return entries

    # --- helpers ---

    async def _cw20(self, contract: str, raw: str | None) -> ResolvedCoin:
        contracts = self.ctx.contracts
        denomination = await contracts.resolve(contract) if contracts is not None else None
        if denomination is None or denomination.symbol == UNKNOWN_DENOM:
            # without token_info the contract address is the asset
            denomination = Denomination(denom=contract, symbol=contract, decimals=0)
        return ResolvedCoin(
            denomination=denomination,
            amount=scale_amount(leading_amount(raw or "0"), denomination.decimals),
        )

    async def _asset(self, asset: str, raw: str | None) -> ResolvedCoin:
        """Swap legs name either a native denom or a CW20 contract."""
        if is_contract_address(asset):
            return await self._cw20(asset, raw)
        denomination = await self.ctx.resolver.resolve(asset)
        return ResolvedCoin(denomination=denomination, amount=scale_amount(raw or "0", denomination.decimals))

    async def _charge(self, description: str) -> LedgerEntry:
        if self.fee_charged:
            return LedgerEntry(type=LedgerType.EXPENSE, description=description)
        self.fee_charged = True
        return await self.ctx.fee_entry(description)

    def _swap_entry(self, offer: ResolvedCoin, ask: ResolvedCoin) -> LedgerEntry:
        return LedgerEntry(
            type=LedgerType.SWAP,
            sent_amount=offer.amount,
            sent_asset=offer.symbol,
            received_amount=ask.amount,
            received_asset=ask.symbol,
            description=(
                f"Swapped {format_amount(offer.amount)} {offer.symbol} "
                f"for {format_amount(ask.amount)} {ask.symbol}"
            ),
        )

    # --- actions ---

    async def _on_transfer(self, record: list[Attribute]) -> list[LedgerEntry]:
        if PRIMARY_ACTIONS.intersection(self.actions):
            return []
        sender = _first(record, "from", "sender")
        recipient = _first(record, "to", "recipient")
        coin = await self._cw20(contract_of(record), value_of(record, "amount"))
        if self.ctx.is_self(recipient):
            return [LedgerEntry(
                type=LedgerType.DEPOSIT,
                received_amount=coin.amount,
                received_asset=coin.symbol,
                description=f"Received from {sender}",
            )]
        if self.ctx.is_self(sender):
            return [
                LedgerEntry(
                    type=LedgerType.TRANSFER,
                    sent_amount=coin.amount,
                    sent_asset=coin.symbol,
                    description=f"Sent to {recipient}",
                ),
                await self._charge("Fee for Transfer"),
            ]
        return []

    async def _on_delegate(self, record: list[Attribute]) -> list[LedgerEntry]:
        if not self.ctx.is_self(_first(record, "from", "delegator", "sender")):
            return []
        return [await self._charge(f"Delegate to {_first(record, 'to', 'validator') or 'Unknown'}")]

    async def _on_stake(self, record: list[Attribute]) -> list[LedgerEntry]:
        # the staked amount is carried by the CW20 send that triggered the stake
        send = next((r for r, a in zip(self.records, self.actions) if a == "send"), record)
        if not self.ctx.is_self(_first(send, "from", "sender", "staker")):
            return []
        coin = await self._cw20(contract_of(send), value_of(send, "amount"))
        target = _first(send, "to", "contract") or contract_of(record)
        return [await self._charge(f"Staked {format_amount(coin.amount)} {coin.symbol} to {target}")]

    async def _on_unstake(self, record: list[Attribute]) -> list[LedgerEntry]:
        if not self.ctx.is_self(_first(record, "from", "address", "sender", "staker")):
            return []
        amount = value_of(record, "amount") or "0"
        return [await self._charge(f"Unstake {amount} from {contract_of(record)}")]

    async def _on_vote(self, record: list[Attribute]) -> list[LedgerEntry]:
        proposal_id = _first(record, "proposal_id") or "Unknown"
        return [await self._charge(f"Vote on {contract_of(record)} #{proposal_id}")]

    async def _on_claim(self, record: list[Attribute]) -> list[LedgerEntry]:
        recipient = _first(record, "address", "recipient", "receiver")
        if recipient is not None and not self.ctx.is_self(recipient):
            return []
        contract = contract_of(record)
        coin = await self._cw20(contract, value_of(record, "amount"))
        return [LedgerEntry(
            type=LedgerType.INCOME,
            received_amount=coin.amount,
            received_asset=coin.symbol,
            description=f"Claimed Airdrop from {contract}",
        )]

    async def _on_withdraw_rewards(self, record: list[Attribute]) -> list[LedgerEntry]:
        if not self.ctx.is_self(_first(record, "receiver", "recipient", "owner")):
            return []
        coin = await self._cw20(contract_of(record), value_of(record, "amount"))
        entry = await self._charge("Claimed Rewards")
        entry.type = LedgerType.INCOME
        entry.received_amount = coin.amount
        entry.received_asset = coin.symbol
        return [entry]

    async def _on_swap(self, record: list[Attribute]) -> list[LedgerEntry]:
        if not (self.ctx.is_self(value_of(record, "sender")) or self.ctx.is_self(value_of(record, "receiver"))):
            return []
        ask_asset = value_of(record, "ask_asset", UNKNOWN_DENOM)
        offer = await self._asset(value_of(record, "offer_asset", UNKNOWN_DENOM), value_of(record, "offer_amount"))
        ask = await self._asset(ask_asset, value_of(record, "return_amount"))
        entry = self._swap_entry(offer, ask)
        commission_amount = value_of(record, "commission_amount")
        if commission_amount:
            # the pair's commission is withheld from the ask side
            commission = await self._asset(ask_asset, commission_amount)
            entry.fee_amount = commission.amount
            entry.fee_asset = commission.symbol
        return [entry, await self._charge("Fees from swapping")]

    async def _on_transfer_from(self, record: list[Attribute]) -> list[LedgerEntry]:
        """CW20 sold through an allowance; what came back arrives as native transfer legs."""
        if "mint" in self.actions or not self.ctx.is_self(_first(record, "from", "owner")):
            return []
        offer = await self._cw20(contract_of(record), value_of(record, "amount"))
        received = await credited_coins(self.ctx)
        demand = received[0] if received else ResolvedCoin(denomination=self.ctx.base, amount=Decimal(0))
        return [self._swap_entry(offer, demand), await self._charge("Fees from swapping")]

    async def _on_mint(self, record: list[Attribute]) -> list[LedgerEntry]:
        """Liquidity provision: pool tokens minted to the wallet for the assets it paid in."""
        recipient = _first(record, "to", "recipient")
        if recipient is not None and not self.ctx.is_self(recipient):
            return []
        liquidity = next((r for r in self.records if value_of(r, "liquidity_received")), None)
        raw = value_of(record, "amount") or (value_of(liquidity, "liquidity_received") if liquidity else None)
        pool = await self._cw20(contract_of(record), raw)

        entries = [LedgerEntry(
            type=LedgerType.SWAP,
            received_amount=pool.amount,
            received_asset=pool.symbol,
            description=f"Received {format_amount(pool.amount)} {pool.symbol} Pool Token",
        )]
        for coin in await self._paid_in():
            entries.append(LedgerEntry(
                type=LedgerType.SWAP,
                sent_amount=coin.amount,
                sent_asset=coin.symbol,
                description=f"Deposit {format_amount(coin.amount)} {coin.symbol} into Liquidity Pool",
            ))
        entries.append(await self._charge("Fee for adding to Liquidity Pool"))
        return entries

    async def _paid_in(self) -> list[ResolvedCoin]:
        """CW20 pulled from the wallet through allowances plus native coins it sent."""
        coins = []
        for record, action in zip(self.records, self.actions):
            if action == "transfer_from" and self.ctx.is_self(_first(record, "from", "owner")):
                coins.append(await self._cw20(contract_of(record), value_of(record, "amount")))
        for leg in self.ctx.transfer_legs():
            if self.ctx.is_self(leg.sender):
                coins.extend(await self.ctx.resolve_coins(leg.amount))
        return coins
