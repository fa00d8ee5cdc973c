"""Tests for the chain registry seeder."""

import json
from unittest.mock import AsyncMock

from cosmotax.infra.denom.cache import DenominationCache
from cosmotax.infra.denom.registry_seed import ChainRegistrySeeder, collect_registry_denoms

PAYLOAD = {
    "chains": [
        {
            "name": "osmosis",
            "denom": "uosmo",
            "symbol": "OSMO",
            "decimals": 6,
            "assets": [
                {"denom": "uion", "symbol": "ION", "decimals": 6},
                {"denom": "ibc/ABC", "symbol": "ATOM", "decimals": 6},
                {"denom": "ibc/NOSYMBOL", "decimals": 6},
            ],
        },
        {"name": "cosmoshub", "denom": "uatom", "symbol": "ATOM", "decimals": 6, "assets": None},
        {"name": "dup", "denom": "uion", "symbol": "NOTION", "decimals": 0},
    ]
}


class TestCollectRegistryDenoms:
    def test_flattens_chains_and_assets(self):
        denoms = collect_registry_denoms(PAYLOAD)
        assert set(denoms) == {"uosmo", "uion", "ibc/ABC", "uatom"}
        assert denoms["uion"] == {"symbol": "ION", "decimals": 6}

    def test_empty_payload(self):
        assert collect_registry_denoms({}) == {}


class TestChainRegistrySeeder:
    async def test_seed_merges_into_cache(self, tmp_path):
        path = tmp_path / "ibc.json"
        path.write_text(json.dumps({"ibc/ABC": {"symbol": "KEEP", "decimals": 6}}))
        http = AsyncMock()
        http.get_json.return_value = PAYLOAD

        added = await ChainRegistrySeeder("https://chains.example/", http, DenominationCache(path)).seed()

        assert added == 3
        stored = json.loads(path.read_text())
        assert stored["ibc/ABC"]["symbol"] == "KEEP"
        assert stored["uosmo"] == {"symbol": "OSMO", "decimals": 6}
