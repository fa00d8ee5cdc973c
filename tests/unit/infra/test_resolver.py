"""Tests for DenominationResolver and its file cache."""

import asyncio
import json

from cosmotax.domain.enums import Network
from cosmotax.exceptions import ResolutionError
from cosmotax.infra.denom.cache import DenominationCache
from cosmotax.infra.denom.resolver import DenominationResolver

IBC_OSMO = "ibc/14F9BC3E44B8A9C1BE1FB08980FAB87034C9905EF17CF2F5008FC085218811CC"
IBC_OTHER = "ibc/27394FB092D2ECCD56123C74F36E4C1F926001CEADA9CA97EA622B25F41E5EB2"


class TestNativeAndLocal:
    async def test_native_needs_no_lookup(self, resolver, trace_lookup):
        denomination = await resolver.resolve("uatom")
        assert (denomination.symbol, denomination.decimals) == ("ATOM", 6)
        trace_lookup.lookup.assert_not_awaited()

    async def test_network_table_is_preferred(self, cache_path, trace_lookup):
        resolver = DenominationResolver(DenominationCache(cache_path), trace_lookup, network=Network.OSMOSIS)
        assert (await resolver.resolve("uion")).symbol == "ION"

    async def test_empty_is_unknown(self, resolver):
        assert (await resolver.resolve(None)).symbol == "Unknown"
        assert (await resolver.resolve("")).decimals == 0

    async def test_local_rules(self, resolver):
        pool = await resolver.resolve("gamm/pool/1")
        assert (pool.symbol, pool.decimals) == ("gamm/pool/1", 18)

        gravity = await resolver.resolve("pool32DD066BE949E5FDCC7DC09EBB67C7301D0CA957C2EF56A39B37430165447DAC")
        assert gravity.decimals == 6

        factory = await resolver.resolve("factory/osmo1abc/ustake")
        assert factory.symbol == "USTAKE"

        assert (await resolver.resolve("uhuahua")).symbol == "HUAHUA"
        assert (await resolver.resolve("acanto")).decimals == 18


class TestBridgedDenoms:
    async def test_lookup_and_cache(self, resolver, trace_lookup, cache_path):
        denomination = await resolver.resolve(IBC_OSMO)

        assert (denomination.symbol, denomination.decimals) == ("OSMO", 6)
        trace_lookup.lookup.assert_awaited_once_with(IBC_OSMO)
        stored = json.loads(cache_path.read_text())
        assert stored[IBC_OSMO] == {"symbol": "OSMO", "decimals": 6}

    async def test_resolved_once_per_run(self, resolver, trace_lookup):
        await resolver.resolve(IBC_OSMO)
        await resolver.resolve(IBC_OSMO)
        assert trace_lookup.lookup.await_count == 1

    async def test_concurrent_callers_share_one_lookup(self, resolver, trace_lookup):
        results = await asyncio.gather(*(resolver.resolve(IBC_OSMO) for _ in range(5)))

        assert {r.symbol for r in results} == {"OSMO"}
        assert trace_lookup.lookup.await_count == 1
        assert resolver.lookup_count == 1

    async def test_failure_cached_as_unknown(self, resolver, trace_lookup, cache_path):
        trace_lookup.lookup.side_effect = ResolutionError("node down")

        first = await resolver.resolve(IBC_OTHER)
        second = await resolver.resolve(IBC_OTHER)

        assert (first.symbol, first.decimals) == ("Unknown", 0)
        assert second == first
        assert trace_lookup.lookup.await_count == 1
        assert json.loads(cache_path.read_text())[IBC_OTHER] == {"symbol": "Unknown", "decimals": 0}

    async def test_existing_cache_skips_lookup(self, cache_path, trace_lookup):
        cache_path.write_text(json.dumps({IBC_OTHER: {"symbol": "AKT", "decimals": 6}}))
        resolver = DenominationResolver(DenominationCache(cache_path), trace_lookup)

        assert (await resolver.resolve(IBC_OTHER)).symbol == "AKT"
        trace_lookup.lookup.assert_not_awaited()

    async def test_bridged_decimals_override(self, cache_path, trace_lookup):
        resolver = DenominationResolver(DenominationCache(cache_path), trace_lookup, bridged_decimals=18)
        assert (await resolver.resolve(IBC_OSMO)).decimals == 18

    async def test_without_transport(self, cache_path):
        resolver = DenominationResolver(DenominationCache(cache_path), None)
        assert (await resolver.resolve(IBC_OSMO)).symbol == "Unknown"
        assert not cache_path.exists()


class TestDenominationCache:
    async def test_file_sorted_by_key(self, cache_path):
        cache = DenominationCache(cache_path)
        await cache.merge({
            "ibc/B": {"symbol": "B", "decimals": 6},
            "ibc/A": {"symbol": "A", "decimals": 8},
        })
        assert list(json.loads(cache_path.read_text())) == ["ibc/A", "ibc/B"]

    async def test_merge_keeps_existing(self, cache_path):
        cache = DenominationCache(cache_path)
        await cache.merge({"ibc/A": {"symbol": "A", "decimals": 6}})
        added = await cache.merge({"ibc/A": {"symbol": "X", "decimals": 0}, "ibc/B": {"symbol": "B", "decimals": 6}})

        assert added == 1
        assert cache.get("ibc/A").symbol == "A"
        assert len(cache) == 2

    def test_invalid_file_starts_empty(self, cache_path):
        cache_path.write_text("{not json")
        cache = DenominationCache(cache_path)
        assert cache.get("ibc/A") is None
        assert "ibc/A" not in cache
