"""Bank module: MsgSend and MsgMultiSend."""

from cosmotax.domain.enums import Action
from cosmotax.parser.generic.base import BaseProcessor
from cosmotax.parser.handlers.common import deposit_entry, transfer_entry
from cosmotax.parser.utils.context import ProcessingContext
from cosmotax.parser.utils.types import LedgerEntry


class SendProcessor(BaseProcessor):
    """Incoming legs become ``Deposit`` rows, outgoing legs ``Transfer`` rows plus one fee row."""

    PROCESSOR_NAME = "SendProcessor"
    ACTIONS = (Action.MSG_SEND, Action.LEGACY_SEND)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        entries: list[LedgerEntry] = []
        sent = False

        for log in ctx.logs:
            # pre-0.47 logs put the sender only on the message event
            fallback_sender = next(iter(ctx.message_senders(log)), "")
            for leg in ctx.transfer_legs(log):
                sender = leg.sender or fallback_sender
                if ctx.is_self(leg.recipient):
                    for coin in await ctx.resolve_coins(leg.amount):
                        entries.append(deposit_entry(coin, f"Received from {sender}"))
                elif ctx.is_self(sender):
                    for coin in await ctx.resolve_coins(leg.amount):
                        entries.append(transfer_entry(coin, f"Sent to {leg.recipient}"))
                    sent = True

        if sent:
            entries.append(await ctx.fee_entry("Fee for Transfer"))
        return entries


class MultiSendProcessor(BaseProcessor):
    """One input, many outputs. The wallet may be an output, the input, or both."""

    PROCESSOR_NAME = "MultiSendProcessor"
    ACTIONS = (Action.MSG_MULTI_SEND,)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        entries: list[LedgerEntry] = []
        is_input = self._wallet_is_input(ctx)

        for log in ctx.logs:
            senders = ctx.message_senders(log)
            for leg in ctx.transfer_legs(log):
                sender = leg.sender or next(iter(senders), "")
                if ctx.is_self(leg.recipient):
                    for coin in await ctx.resolve_coins(leg.amount):
                        entries.append(deposit_entry(coin, f"Received from {sender}"))
                elif is_input:
                    for coin in await ctx.resolve_coins(leg.amount):
                        entries.append(transfer_entry(coin, f"Sent to {leg.recipient}"))

        if is_input:
            entries.append(await ctx.fee_entry("Fee for Transfer"))
        return entries

    def _wallet_is_input(self, ctx: ProcessingContext) -> bool:
        for log in ctx.logs:
            if any(ctx.is_self(s) for s in ctx.message_senders(log)):
                return True
        for message in ctx.tx.messages:
            if message.action is not Action.MSG_MULTI_SEND:
                continue
            for item in message.payload.get("inputs") or []:
                if isinstance(item, dict) and ctx.is_self(item.get("address")):
                    return True
        return False
