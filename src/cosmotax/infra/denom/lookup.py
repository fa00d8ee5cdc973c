"""Transports that turn an IBC voucher denom into its base denom.

Both raise ResolutionError on any failure; the resolver decides what to do with it.
"""

import asyncio
import logging
from typing import Protocol

from cosmotax.exceptions import ExternalServiceError, ResolutionError
from cosmotax.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)

IBC_PREFIX = "ibc/"


def trace_hash(denom: str) -> str:
    """``ibc/27394FB0...`` -> ``27394FB0...``."""
    return denom[len(IBC_PREFIX):] if denom.startswith(IBC_PREFIX) else denom


class DenomTraceLookup(Protocol):
    async def lookup(self, denom: str) -> str:
        """Base denom of ``denom`` (e.g. ``uosmo``)."""
        ...


def parse_denom_trace_output(stdout: str) -> str:
    """Extract ``base_denom`` from ``<binary> query ibc-transfer denom-trace`` YAML output."""
    for line in stdout.splitlines():
        if "base_denom" in line:
            value = line.split(":", 1)[1].replace(" ", "").strip().strip("\"'")
            if value:
                return value
    raise ResolutionError("no base_denom in denom-trace output")


class CliDenomTraceLookup:
    """Queries a chain CLI (gaiad, osmosisd, ...) for the denom trace."""

    def __init__(self, binary: str, node_url: str) -> None:
        self._binary = binary
        self._node_url = node_url

    async def lookup(self, denom: str) -> str:
        try:
            proc = await asyncio.create_subprocess_exec(
                self._binary,
                "query",
                "ibc-transfer",
                "denom-trace",
                trace_hash(denom),
                "--node",
                self._node_url,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ResolutionError(f"cannot run {self._binary}: {exc}") from exc

        stdout, stderr = await proc.communicate()
        if proc.returncode != 0 or stderr.strip():
            raise ResolutionError(f"{self._binary} denom-trace failed: {stderr.decode(errors='replace').strip()}")
        return parse_denom_trace_output(stdout.decode(errors="replace"))


class RestDenomTraceLookup:
    """Reads the denom trace from a node's LCD REST endpoint."""

    def __init__(self, lcd_url: str, http_client: RateLimitedClient) -> None:
        self._lcd_url = lcd_url.rstrip("/")
        self._http = http_client

    async def lookup(self, denom: str) -> str:
        url = f"{self._lcd_url}/ibc/apps/transfer/v1/denom_traces/{trace_hash(denom)}"
        try:
            data = await self._http.get_json(url)
        except ExternalServiceError as exc:
            raise ResolutionError(str(exc)) from exc

        base_denom = (data or {}).get("denom_trace", {}).get("base_denom")
        if not base_denom:
            raise ResolutionError(f"no base_denom for {denom}")
        return base_denom
