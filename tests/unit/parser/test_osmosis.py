"""Tests for Osmosis processors."""

from decimal import Decimal

from cosmotax.domain.enums import Action, LedgerType
from cosmotax.parser.cosmos.osmosis import (
    ExitPoolProcessor,
    JoinPoolProcessor,
    JoinSwapExternProcessor,
    LockTokensProcessor,
    SwapProcessor,
)

from factories import OTHER, event, log, message_event, record, transfer

OSMO_WALLET = "osmo1wallet000000000000000000000000000000000"
POOL = "osmo1pool0000000000000000000000000000000000000"


def _osmo_record(logs: list[dict]) -> dict:
    return record(logs, fee=("2500", "uosmo"))


def _swapped(tokens_in: str, tokens_out: str, pool_id: str) -> list[tuple[str, str]]:
    return [
        ("module", "gamm"),
        ("sender", OSMO_WALLET),
        ("pool_id", pool_id),
        ("tokens_in", tokens_in),
        ("tokens_out", tokens_out),
    ]


class TestSwapProcessor:
    async def test_multi_hop_collapses(self, make_ctx):
        swapped = event(
            "token_swapped",
            *_swapped("1000000uosmo", "500000uatom", "1"),
            *_swapped("500000uatom", "2000000ujuno", "497"),
        )
        raw = _osmo_record([log(message_event(Action.OSMOSIS_SWAP_EXACT_AMOUNT_IN.value, OSMO_WALLET), swapped)])
        ctx = make_ctx(raw)
        ctx.address = OSMO_WALLET
        entries = await SwapProcessor().process(ctx)

        swap, fee = entries
        assert swap.type is LedgerType.SWAP
        assert (swap.sent_asset, swap.sent_amount) == ("OSMO", Decimal("1"))
        assert (swap.received_asset, swap.received_amount) == ("JUNO", Decimal("2"))
        assert swap.description == "Swapped 1.0 OSMO for 2.0 JUNO"
        assert fee.fee_asset == "OSMO"
        assert fee.fee_amount == Decimal("0.0025")


class TestPoolProcessors:
    async def test_join_pool(self, make_ctx):
        raw = _osmo_record([log(
            message_event(Action.OSMOSIS_JOIN_POOL.value, OSMO_WALLET),
            transfer((POOL, OSMO_WALLET, "1000000uosmo,100000uatom"), (OSMO_WALLET, POOL, "50000000000000000000gamm/pool/1")),
        )])
        ctx = make_ctx(raw)
        ctx.address = OSMO_WALLET
        entries = await JoinPoolProcessor().process(ctx)

        assert entries[0].description == "Received 50.0 gamm/pool/1 Pool Token"
        assert entries[0].received_amount == Decimal("50")
        assert [e.description for e in entries[1:3]] == [
            "Deposit 1.0 OSMO into Liquidity Pool",
            "Deposit 0.1 ATOM into Liquidity Pool",
        ]
        assert entries[-1].type is LedgerType.EXPENSE

    async def test_join_swap_extern(self, make_ctx):
        raw = _osmo_record([log(
            transfer((POOL, OSMO_WALLET, "1000000uosmo"), (OSMO_WALLET, POOL, "1000000000000000000gamm/pool/1")),
        )])
        ctx = make_ctx(raw)
        ctx.address = OSMO_WALLET
        swap, fee = await JoinSwapExternProcessor().process(ctx)

        assert swap.sent_asset == "OSMO"
        assert swap.received_asset == "gamm/pool/1"
        assert swap.received_amount == Decimal("1")
        assert swap.description == "Swapped from Liquidity Pool"

    async def test_exit_pool(self, make_ctx):
        raw = _osmo_record([log(
            transfer((OSMO_WALLET, POOL, "990000uosmo,99000uatom"), (POOL, OSMO_WALLET, "50000000000000000000gamm/pool/1")),
        )])
        ctx = make_ctx(raw)
        ctx.address = OSMO_WALLET
        entries = await ExitPoolProcessor().process(ctx)

        assert [e.description for e in entries] == [
            "Removed Tokens from Liquidity Pool",
            "Removed Tokens from Liquidity Pool",
            "Swap GAMM Pool tokens",
            "Fee for Exiting Liquidity Pool",
        ]
        assert entries[2].sent_amount == Decimal("50")


class TestLockTokensProcessor:
    async def test_bond_for_own_lock(self, make_ctx):
        lock = event(
            "lock_tokens",
            ("period_lock_id", "12"),
            ("owner", OSMO_WALLET),
            ("amount", "25000000000000000000gamm/pool/1"),
            ("duration", "1209600s"),
            ("unlock_time", "0001-01-01 00:00:00 +0000 UTC"),
        )
        ctx = make_ctx(_osmo_record([log(lock)]))
        ctx.address = OSMO_WALLET
        entries = await LockTokensProcessor().process(ctx)

        assert len(entries) == 1
        assert entries[0].type is LedgerType.EXPENSE
        assert entries[0].description == "Bond 25.0 gamm/pool/1"
        assert entries[0].fee_amount == Decimal("0.0025")

    async def test_foreign_lock_ignored(self, make_ctx):
        lock = event("lock_tokens", ("period_lock_id", "1"), ("owner", OTHER), ("amount", "1gamm/pool/1"))
        ctx = make_ctx(_osmo_record([log(lock)]))
        ctx.address = OSMO_WALLET
        assert await LockTokensProcessor().process(ctx) == []
