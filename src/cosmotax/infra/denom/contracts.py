"""ContractMetadataResolver — CW20 contract address -> token symbol + decimals."""

import asyncio
import base64
import json
import logging

from cosmotax.exceptions import ExternalServiceError
from cosmotax.infra.denom.cache import DenominationCache
from cosmotax.infra.http.rate_limited_client import RateLimitedClient
from cosmotax.parser.utils.types import UNKNOWN_DENOMINATION, Denomination

logger = logging.getLogger(__name__)

TOKEN_INFO_QUERY = base64.b64encode(json.dumps({"token_info": {}}).encode()).decode()


class ContractMetadataResolver:
    """Same contract as DenominationResolver: cached, serialized, never raises."""

    def __init__(self, cache: DenominationCache, lcd_url: str, http_client: RateLimitedClient | None) -> None:
        self._cache = cache
        self._lcd_url = lcd_url.rstrip("/")
        self._http = http_client
        self._lookup_lock = asyncio.Lock()
        self.lookup_count = 0

    async def resolve(self, contract_address: str | None) -> Denomination:
        if not contract_address:
            return UNKNOWN_DENOMINATION

        cached = self._cache.get(contract_address)
        if cached is not None:
            return cached

        async with self._lookup_lock:
            cached = self._cache.get(contract_address)
            if cached is not None:
                return cached

            result = await self._fetch(contract_address)
            await self._cache.put(contract_address, result)
            return result

    async def _fetch(self, contract_address: str) -> Denomination:
        unknown = Denomination(denom=contract_address, symbol=UNKNOWN_DENOMINATION.symbol, decimals=0)
        if self._http is None:
            return unknown

        self.lookup_count += 1
        url = f"{self._lcd_url}/cosmwasm/wasm/v1/contract/{contract_address}/smart/{TOKEN_INFO_QUERY}"
        try:
            data = await self._http.get_json(url)
        except ExternalServiceError as exc:
            logger.warning("Token info lookup failed for %s: %s", contract_address, exc)
            return unknown

        info = (data or {}).get("data") or {}
        symbol = info.get("symbol")
        if not symbol:
            logger.warning("Contract %s returned no token_info symbol", contract_address)
            return unknown
        try:
            decimals = int(info.get("decimals", 6))
        except (TypeError, ValueError):
            decimals = 6
        return Denomination(denom=contract_address, symbol=symbol, decimals=decimals)
