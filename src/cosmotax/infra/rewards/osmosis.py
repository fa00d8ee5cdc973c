"""Osmosis LP rewards history backfill (imperator API)."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from cosmotax.exceptions import ExternalServiceError
from cosmotax.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)

DEFAULT_REWARDS_FILE = "osmosis_rewards.json"


class OsmosisRewardsClient:
    """Fetches the LP reward tokens of an address and the daily history of each."""

    def __init__(self, http_client: RateLimitedClient, base_url: str, request_delay: float = 0.5) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._request_delay = request_delay

    @retry(
        retry=retry_if_exception_type(ExternalServiceError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(min=1, max=10),
        reraise=True,
    )
    async def _get(self, path: str) -> Any:
        return await self._http.get_json(f"{self._base_url}{path}")

    async def get_reward_tokens(self, address: str) -> list[str]:
        """GET /lp/v1/rewards/token/{address}"""
        data = await self._get(f"/lp/v1/rewards/token/{address}")
        if not isinstance(data, list):
            return []
        return [item["token"] for item in data if isinstance(item, dict) and item.get("token")]

    async def get_reward_history(self, address: str, token: str) -> list[dict]:
        """GET /lp/v1/rewards/historical/{address}/{token} — ``[{amount, day}]``."""
        data = await self._get(f"/lp/v1/rewards/historical/{address}/{token}")
        return data if isinstance(data, list) else []

    async def collect(self, address: str) -> dict[str, list[dict]]:
        """History per reward token. A token whose history keeps failing is skipped."""
        rewards: dict[str, list[dict]] = {}
        try:
            tokens = await self.get_reward_tokens(address)
        except ExternalServiceError as e:
            logger.warning("Could not list reward tokens for %s: %s", address, e)
            return rewards

        for token in tokens:
            try:
                rewards[token] = await self.get_reward_history(address, token)
            except ExternalServiceError as e:
                logger.warning("Skipping reward history of %s: %s", token, e)
            await asyncio.sleep(self._request_delay)

        logger.info("Collected reward history for %d/%d tokens", len(rewards), len(tokens))
        return rewards


def save_rewards(rewards: dict[str, list[dict]], path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(rewards, indent=2))
