"""Persistent JSON mapping of denom (or contract address) -> {symbol, decimals}."""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path

from cosmotax.parser.utils.types import Denomination

logger = logging.getLogger(__name__)


class DenominationCache:
    """File-backed cache shared by every transaction of a run.

    Loaded lazily on first access, rewritten whole (sorted keys) on each new entry.
    Writes go through a temp file + rename so a crash never leaves a torn file.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._entries: dict[str, dict] | None = None
        self._write_lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, dict]:
        if self._entries is None:
            if self._path.exists():
                try:
                    self._entries = json.loads(self._path.read_text() or "{}")
                except json.JSONDecodeError:
                    logger.warning("Denomination cache %s is not valid JSON, starting empty", self._path)
                    self._entries = {}
            else:
                self._entries = {}
        return self._entries

    def get(self, key: str) -> Denomination | None:
        entry = self._load().get(key)
        if not isinstance(entry, dict) or "symbol" not in entry:
            return None
        return Denomination(denom=key, symbol=str(entry["symbol"]), decimals=int(entry.get("decimals", 0)))

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._load())

    async def put(self, key: str, denomination: Denomination) -> None:
        async with self._write_lock:
            entries = self._load()
            entries[key] = {"symbol": denomination.symbol, "decimals": denomination.decimals}
            self._flush(entries)

    async def merge(self, entries: dict[str, dict], overwrite: bool = False) -> int:
        """Add many entries at once. Returns how many keys were added or replaced."""
        async with self._write_lock:
            current = self._load()
            changed = 0
            for key, value in entries.items():
                if key in current and not overwrite:
                    continue
                current[key] = {"symbol": value["symbol"], "decimals": int(value["decimals"])}
                changed += 1
            if changed:
                self._flush(current)
            return changed

    def _flush(self, entries: dict[str, dict]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        ordered = {k: entries[k] for k in sorted(entries)}
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as fh:
                json.dump(ordered, fh, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
