"""Tests for SendProcessor / MultiSendProcessor."""

from decimal import Decimal

from cosmotax.domain.enums import Action, LedgerType
from cosmotax.parser.cosmos.bank import MultiSendProcessor, SendProcessor
from cosmotax.parser.utils.amounts import format_amount

from factories import OTHER, WALLET, event, log, message_event, record, transfer

SEND = Action.MSG_SEND.value


class TestSendProcessor:
    async def test_incoming_send_is_deposit(self, make_ctx):
        ctx = make_ctx(record([log(message_event(SEND, OTHER), transfer((WALLET, OTHER, "1000000uatom")))]))
        entries = await SendProcessor().process(ctx)

        assert len(entries) == 1
        deposit = entries[0]
        assert deposit.type is LedgerType.DEPOSIT
        assert deposit.received_asset == "ATOM"
        assert format_amount(deposit.received_amount) == "1.0"
        assert deposit.description == f"Received from {OTHER}"
        assert deposit.fee_amount is None

    async def test_outgoing_send_is_transfer_plus_fee(self, make_ctx):
        ctx = make_ctx(record([log(message_event(SEND), transfer((OTHER, WALLET, "2500000uatom")))]))
        entries = await SendProcessor().process(ctx)

        assert [e.type for e in entries] == [LedgerType.TRANSFER, LedgerType.EXPENSE]
        assert entries[0].sent_amount == Decimal("2.5")
        assert entries[0].description == f"Sent to {OTHER}"
        assert entries[1].description == "Fee for Transfer"
        assert entries[1].fee_asset == "ATOM"
        assert entries[1].fee_amount == Decimal("0.005")

    async def test_legacy_transfer_without_sender_uses_message_sender(self, make_ctx):
        legacy_transfer = event("transfer", ("recipient", WALLET), ("amount", "3000000uatom"))
        ctx = make_ctx(record([log(message_event("send", OTHER), legacy_transfer)]))
        entries = await SendProcessor().process(ctx)
        assert entries[0].description == f"Received from {OTHER}"
        assert entries[0].received_amount == Decimal("3")

    async def test_multi_coin_leg(self, make_ctx):
        ctx = make_ctx(record([log(message_event(SEND, OTHER), transfer((WALLET, OTHER, "1000000uatom,2000000uosmo")))]))
        entries = await SendProcessor().process(ctx)
        assert [(e.received_asset, e.received_amount) for e in entries] == [
            ("ATOM", Decimal("1")),
            ("OSMO", Decimal("2")),
        ]

    async def test_unrelated_legs_ignored(self, make_ctx):
        ctx = make_ctx(record([log(message_event(SEND, OTHER), transfer((OTHER, "cosmos1x", "1uatom")))]))
        assert await SendProcessor().process(ctx) == []


class TestMultiSendProcessor:
    async def test_wallet_as_output(self, make_ctx):
        ctx = make_ctx(record([
            log(
                message_event(Action.MSG_MULTI_SEND.value, OTHER),
                transfer((WALLET, OTHER, "1000000uatom"), ("cosmos1third", OTHER, "1000000uatom")),
            )
        ]))
        entries = await MultiSendProcessor().process(ctx)
        assert len(entries) == 1
        assert entries[0].type is LedgerType.DEPOSIT

    async def test_wallet_as_input(self, make_ctx):
        legs = event(
            "transfer",
            ("recipient", OTHER), ("amount", "1000000uatom"),
            ("recipient", "cosmos1third"), ("amount", "2000000uatom"),
        )
        ctx = make_ctx(record(
            [log(message_event(Action.MSG_MULTI_SEND.value, WALLET), legs)],
            messages=[{
                "@type": Action.MSG_MULTI_SEND.value,
                "inputs": [{"address": WALLET, "coins": [{"denom": "uatom", "amount": "3000000"}]}],
            }],
        ))
        entries = await MultiSendProcessor().process(ctx)
        assert [e.type for e in entries] == [LedgerType.TRANSFER, LedgerType.TRANSFER, LedgerType.EXPENSE]
        assert entries[1].description == "Sent to cosmos1third"
