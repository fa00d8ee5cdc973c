"""DenominationResolver — raw denom -> symbol + decimals, with a persistent cache."""

import asyncio
import logging
import re

from cosmotax.domain.enums import Network
from cosmotax.exceptions import ResolutionError
from cosmotax.infra.denom.cache import DenominationCache
from cosmotax.infra.denom.lookup import IBC_PREFIX, DenomTraceLookup
from cosmotax.infra.denom.native import native_denomination, symbol_from_base_denom
from cosmotax.parser.utils.amounts import UNKNOWN_DENOM
from cosmotax.parser.utils.types import UNKNOWN_DENOMINATION, Denomination

logger = logging.getLogger(__name__)

GAMM_PREFIX = "gamm/pool/"
FACTORY_PREFIX = "factory/"
_GRAVITY_POOL_RE = re.compile(r"^pool[0-9A-F]{8,}$")


class DenominationResolver:
    """Resolution order: native table -> cache -> external trace lookup (IBC only) -> local heuristics.

    Never raises. A failed lookup is cached as ``Unknown/0`` so the same denom
    fails fast for the rest of the run. External lookups run one at a time.
    """

    def __init__(
        self,
        cache: DenominationCache,
        lookup: DenomTraceLookup | None,
        network: Network = Network.COSMOS,
        bridged_decimals: int = 6,
    ) -> None:
        self._cache = cache
        self._lookup = lookup
        self._network = network
        self._bridged_decimals = bridged_decimals
        self._lookup_lock = asyncio.Lock()
        self.lookup_count = 0

    @property
    def network(self) -> Network:
        return self._network

    async def resolve(self, denom: str | None) -> Denomination:
        if not denom or denom == UNKNOWN_DENOM:
            return UNKNOWN_DENOMINATION

        native = native_denomination(denom, self._network)
        if native is not None:
            return native

        cached = self._cache.get(denom)
        if cached is not None:
            return cached

        if denom.startswith(IBC_PREFIX):
            return await self._resolve_bridged(denom)

        return self._derive_local(denom)

    async def _resolve_bridged(self, denom: str) -> Denomination:
        async with self._lookup_lock:
            # another caller may have resolved it while we waited
            cached = self._cache.get(denom)
            if cached is not None:
                return cached

            if self._lookup is None:
                # left uncached so a run with a transport can still resolve it
                return Denomination(denom=denom, symbol=UNKNOWN_DENOMINATION.symbol, decimals=0)

            self.lookup_count += 1
            try:
                base_denom = await self._lookup.lookup(denom)
                result = Denomination(
                    denom=denom,
                    symbol=symbol_from_base_denom(base_denom),
                    decimals=self._bridged_decimals,
                )
            except ResolutionError as exc:
                logger.warning("Could not resolve %s: %s", denom, exc)
                result = Denomination(denom=denom, symbol=UNKNOWN_DENOMINATION.symbol, decimals=0)
            except Exception:
                logger.exception("Denomination lookup crashed for %s", denom)
                result = Denomination(denom=denom, symbol=UNKNOWN_DENOMINATION.symbol, decimals=0)

            await self._cache.put(denom, result)
            return result

    def _derive_local(self, denom: str) -> Denomination:
        """Symbols for non-bridged denoms that are absent from every table."""
        if denom.startswith(GAMM_PREFIX):
            return Denomination(denom=denom, symbol=denom, decimals=18)
        if _GRAVITY_POOL_RE.match(denom):
            return Denomination(denom=denom, symbol=denom, decimals=6)
        if denom.startswith(FACTORY_PREFIX):
            subdenom = denom.rsplit("/", 1)[-1]
            return Denomination(denom=denom, symbol=subdenom.upper(), decimals=self._bridged_decimals)
        if len(denom) > 1 and denom[1:].isalpha():
            if denom[0] == "u":
                return Denomination(denom=denom, symbol=denom[1:].upper(), decimals=6)
            if denom[0] == "a":
                return Denomination(denom=denom, symbol=denom[1:].upper(), decimals=18)
        logger.debug("No symbol rule for %s, using raw denom", denom)
        return Denomination(denom=denom, symbol=denom, decimals=self._bridged_decimals)
