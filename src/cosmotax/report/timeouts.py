"""IBC timeout correlation: side file of voided transfer keys + CSV purge pass.

A timed-out IBC transfer is refunded on the sending chain, so the earlier
Transfer/Deposit row for it must disappear from the ledger. Rows written for
IBC transfers carry ``meta = "timeout_height: <h>"``; timeouts record the same
key here, and ``reconcile_timeouts`` drops the matching rows afterwards.
"""

import csv
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

META_COLUMNS = ("Meta", "meta")


def timeout_key(timeout_height: str) -> str:
    return f"timeout_height: {timeout_height}"


class TimeoutLedger:
    """Newline-delimited set of correlation keys. Appends are idempotent."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def keys(self) -> set[str]:
        if not self._path.exists():
            return set()
        return {line for line in self._path.read_text().splitlines() if line}

    def record(self, key: str) -> bool:
        """Append ``key`` unless already present. Returns True when written."""
        if key in self.keys():
            return False
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a") as fh:
            fh.write(f"{key}\n")
        logger.debug("Recorded IBC timeout %s", key)
        return True

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)


def reconcile_timeouts(csv_path: Path, ledger: TimeoutLedger) -> int:
    """Drop rows whose meta key timed out, remove the meta column, delete the side file.

    Returns the number of rows removed.
    """
    csv_path = Path(csv_path)
    timeouts = ledger.keys()

    with csv_path.open(newline="") as fh:
        reader = csv.DictReader(fh)
        fieldnames = list(reader.fieldnames or [])
        rows = list(reader)

    meta_column = next((c for c in META_COLUMNS if c in fieldnames), None)
    kept = [row for row in rows if not (meta_column and row.get(meta_column) and row[meta_column] in timeouts)]
    removed = len(rows) - len(kept)

    if meta_column:
        fieldnames.remove(meta_column)
        for row in kept:
            row.pop(meta_column, None)

    with csv_path.open("w", newline="") as fh:
        writer = csv.DictWriter(fh, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(kept)

    if removed:
        logger.info("Removed %d timed-out IBC rows from %s", removed, csv_path)
    else:
        logger.info("No timeout transactions found")
    ledger.clear()
    return removed
