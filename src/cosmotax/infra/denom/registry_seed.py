"""Pre-fill the denomination cache from the public chain registry."""

import logging

from cosmotax.infra.denom.cache import DenominationCache
from cosmotax.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)


def collect_registry_denoms(data: dict) -> dict[str, dict]:
    """Flatten a chains.cosmos.directory payload into ``{denom: {symbol, decimals}}``.

    The first occurrence of a denom wins.
    """
    denoms: dict[str, dict] = {}

    def _add(entry: dict) -> None:
        denom = entry.get("denom")
        symbol = entry.get("symbol")
        decimals = entry.get("decimals")
        if not denom or not symbol or decimals is None or denom in denoms:
            return
        denoms[denom] = {"symbol": symbol, "decimals": int(decimals)}

    for chain in data.get("chains", []):
        _add(chain)
        for asset in chain.get("assets") or []:
            _add(asset)
    return denoms


class ChainRegistrySeeder:
    def __init__(self, registry_url: str, http_client: RateLimitedClient, cache: DenominationCache) -> None:
        self._registry_url = registry_url
        self._http = http_client
        self._cache = cache

    async def seed(self) -> int:
        """Merge registry entries into the cache without overwriting. Returns the number added."""
        data = await self._http.get_json(self._registry_url)
        added = await self._cache.merge(collect_registry_denoms(data or {}))
        logger.info("Seeded %d denominations from %s", added, self._registry_url)
        return added
