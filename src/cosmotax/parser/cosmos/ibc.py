"""IBC transfer application and the relayer messages that settle it."""

import json
import logging
from typing import Any

from cosmotax.domain.enums import Action
from cosmotax.parser.generic.base import BaseProcessor
from cosmotax.parser.handlers.common import claim_airdrop_entries, deposit_entry, transfer_entry
from cosmotax.parser.utils.amounts import scale_amount
from cosmotax.parser.utils.context import ProcessingContext
from cosmotax.parser.utils.grouping import value_of
from cosmotax.parser.utils.types import Event, LedgerEntry, Log, ResolvedCoin
from cosmotax.report.timeouts import timeout_key

logger = logging.getLogger(__name__)

TIMEOUT_HEIGHT_KEY = "packet_timeout_height"


def _innermost_receiver(payload: Any) -> str | None:
    if isinstance(payload, dict):
        for value in payload.values():
            found = _innermost_receiver(value)
            if found:
                return found
        receiver = payload.get("receiver")
        return receiver if isinstance(receiver, str) else None
    return None


def unwrap_receiver(receiver: str | None) -> str:
    """Plain address of a receiver that may be an autopilot / packet-forward JSON payload."""
    if not receiver:
        return ""
    text = receiver.strip()
    if not text.startswith("{"):
        return text
    try:
        payload = json.loads(text)
    except ValueError:
        return text
    return _innermost_receiver(payload) or text


def packet_data(event: Event | None) -> dict:
    """Decoded ICS-20 ``packet_data`` of a packet event, ``{}`` when absent or malformed."""
    if event is None:
        return {}
    raw = value_of(event.attributes, "packet_data")
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def _first_value(event: Event | None, key: str) -> str:
    if event is None:
        return ""
    value = value_of(event.attributes, key)
    if value is None and event.attributes:
        value = event.attributes[0].value
    return value or ""


class IbcTransferProcessor(BaseProcessor):
    """Outbound ICS-20 transfer. Rows carry the packet's timeout height as ``meta``."""

    PROCESSOR_NAME = "IbcTransferProcessor"
    ACTIONS = (Action.MSG_TRANSFER,)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        entries: list[LedgerEntry] = []
        sent = False

        for log in ctx.logs:
            meta = timeout_key(_first_value(log.first_event("send_packet"), TIMEOUT_HEIGHT_KEY))
            receiver = self._receiver(ctx, log)
            for leg in ctx.transfer_legs(log):
                if ctx.is_self(leg.recipient):
                    for coin in await ctx.resolve_coins(leg.amount):
                        entries.append(deposit_entry(coin, f"Received from {leg.sender}", meta))
                elif ctx.is_self(leg.sender):
                    for coin in await ctx.resolve_coins(leg.amount):
                        entries.append(transfer_entry(coin, f"Sent to {receiver}", meta))
                    sent = True

        if sent:
            entries.append(await ctx.fee_entry("Fee for IBC Transfer"))
        return entries

    def _receiver(self, ctx: ProcessingContext, log: Log) -> str:
        event = log.first_event("ibc_transfer")
        receiver = value_of(event.attributes, "receiver") if event else None
        if not receiver:
            receiver = packet_data(log.first_event("send_packet")).get("receiver")
        if not receiver:
            for message in ctx.tx.messages:
                if message.action is Action.MSG_TRANSFER:
                    receiver = message.payload.get("receiver")
                    break
        return unwrap_receiver(receiver)


class RecvPacketProcessor(BaseProcessor):
    """Inbound ICS-20 transfer relayed to this chain."""

    PROCESSOR_NAME = "RecvPacketProcessor"
    ACTIONS = (Action.MSG_RECV_PACKET,)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        entries: list[LedgerEntry] = []

        for log in ctx.logs:
            data = packet_data(log.first_event("recv_packet"))
            sender = data.get("sender", "Unknown")
            credited = False
            for leg in ctx.transfer_legs(log):
                if not ctx.is_self(leg.recipient):
                    continue
                credited = True
                for coin in await ctx.resolve_coins(leg.amount):
                    entries.append(deposit_entry(coin, f"Received from {sender}"))

            if not credited and ctx.is_self(unwrap_receiver(data.get("receiver"))):
                coin = await self._packet_coin(ctx, data)
                entries.append(deposit_entry(coin, f"Received from {sender}"))

        return entries

    async def _packet_coin(self, ctx: ProcessingContext, data: dict) -> ResolvedCoin:
        # the voucher denom is the trace path; its last segment names the asset
        denom = str(data.get("denom") or "Unknown").split("/")[-1]
        denomination = await ctx.resolver.resolve(denom)
        return ResolvedCoin(
            denomination=denomination,
            amount=scale_amount(str(data.get("amount") or "0"), denomination.decimals),
        )


class TimeoutProcessor(BaseProcessor):
    """Refunded transfer: remember its key so the original rows can be purged later."""

    PROCESSOR_NAME = "TimeoutProcessor"
    ACTIONS = (Action.MSG_TIMEOUT,)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        for log in ctx.logs:
            for event in log.events_of_type("timeout_packet"):
                key = timeout_key(_first_value(event, TIMEOUT_HEIGHT_KEY))
                if ctx.timeouts is None:
                    logger.debug("No timeout ledger configured, dropping %s", key)
                    continue
                ctx.timeouts.record(key)
        return []


class AcknowledgementProcessor(BaseProcessor):
    """Acknowledged packets only matter when they carry an airdrop claim."""

    PROCESSOR_NAME = "AcknowledgementProcessor"
    ACTIONS = (Action.MSG_ACKNOWLEDGEMENT,)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        return await claim_airdrop_entries(ctx)
