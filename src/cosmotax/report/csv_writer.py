"""LedgerCsvWriter — fixed header once, rows appended per transaction."""

import csv
import logging
from pathlib import Path

from cosmotax.parser.utils.types import LedgerRow
from cosmotax.report.transformers import OutputTransformer

logger = logging.getLogger(__name__)


class LedgerCsvWriter:
    def __init__(self, path: Path, transformer: OutputTransformer) -> None:
        self._path = Path(path)
        self._transformer = transformer

    @property
    def path(self) -> Path:
        return self._path

    @property
    def columns(self) -> list[str]:
        return self._transformer.COLUMNS

    def write_header(self) -> None:
        """Truncate the file and write the header of the transformer's layout."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", newline="") as fh:
            csv.DictWriter(fh, fieldnames=self.columns).writeheader()
        logger.info("Writing %s ledger to %s", self._transformer.NAME, self._path)

    def write_rows(self, rows: list[LedgerRow]) -> int:
        """Append the expanded rows; returns how many CSV lines were written."""
        expanded = [out for row in rows for out in self._transformer.expand(row)]
        if not expanded:
            return 0
        with self._path.open("a", newline="") as fh:
            writer = csv.DictWriter(fh, fieldnames=self.columns, extrasaction="ignore")
            writer.writerows(expanded)
        return len(expanded)


def read_ledger(path: Path) -> list[dict[str, str]]:
    with Path(path).open(newline="") as fh:
        return list(csv.DictReader(fh))
