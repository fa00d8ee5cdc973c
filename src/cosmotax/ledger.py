"""Ledger run — input dump -> classifier -> CSV, with per-run diagnostics."""

from __future__ import annotations

import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from cosmotax.exceptions import StructuralError

if TYPE_CHECKING:
    from cosmotax.parser.classifier import TransactionClassifier
    from cosmotax.report.csv_writer import LedgerCsvWriter

logger = logging.getLogger(__name__)


class ActionDiagnostics:
    """Accumulates what the run saw but could not (or need not) classify."""

    def __init__(self) -> None:
        self.unmatched: Counter[str] = Counter()
        self.message_types: dict[str, None] = {}

    def record_unmatched(self, action: str) -> None:
        self.unmatched[action] += 1

    def record_message_types(self, types: list[str]) -> None:
        for type_url in types:
            self.message_types.setdefault(type_url, None)

    def summary(self) -> dict[str, Any]:
        return {
            "message_types": list(self.message_types),
            "unmatched": dict(self.unmatched),
        }


@dataclass
class RunStats:
    processed: int = 0
    rows: int = 0
    failed: list[str] = field(default_factory=list)
    removed_timeouts: int = 0


def load_transactions(path: Path) -> list[dict]:
    """Read the dumped JSON array of transaction records."""
    with Path(path).open() as fh:
        data = json.load(fh)
    if not isinstance(data, list):
        raise StructuralError(f"{path} does not hold a JSON array of transactions")
    return data


class LedgerRun:
    """Classifies every record in input order and appends the rows to the ledger CSV."""

    def __init__(self, classifier: TransactionClassifier, writer: LedgerCsvWriter) -> None:
        self._classifier = classifier
        self._writer = writer

    @property
    def diagnostics(self) -> ActionDiagnostics:
        return self._classifier.diagnostics

    async def run(self, records: list[dict]) -> RunStats:
        stats = RunStats()
        self._writer.write_header()

        for record in records:
            stats.processed += 1
            try:
                rows = await self._classifier.classify_raw(record)
            except StructuralError as e:
                tx_id = e.tx_id or str(record.get("id") or record.get("txhash") or record.get("hash") or "?")
                logger.warning("Skipping transaction %s: %s", tx_id, e)
                stats.failed.append(tx_id)
                continue
            stats.rows += self._writer.write_rows(rows)

        logger.info(
            "Processed %d transactions, %d rows, %d failed",
            stats.processed, stats.rows, len(stats.failed),
        )
        return stats
