"""Per-asset balance sheet over a written ledger CSV."""

from decimal import Decimal
from pathlib import Path

from pydantic import BaseModel

from cosmotax.parser.utils.amounts import add, to_decimal
from cosmotax.report.csv_writer import read_ledger

# (asset column, amount column) pairs per layout, koinly first
_SENT_COLUMNS = (("Sent Currency", "Sent Amount"), ("sentAsset", "sentAmount"))
_RECEIVED_COLUMNS = (("Received Currency", "Received Amount"), ("receivedAsset", "receivedAmount"))
_FEE_COLUMNS = (("Fee Currency", "Fee Amount"), ("feeAsset", "feeAmount"))


class AssetBalance(BaseModel):
    sent: Decimal = Decimal(0)
    received: Decimal = Decimal(0)
    fees: Decimal = Decimal(0)

    @property
    def ending_balance(self) -> Decimal:
        return self.received - (self.sent + self.fees)


def _pick(row: dict[str, str], pairs: tuple[tuple[str, str], ...]) -> tuple[str, Decimal]:
    for asset_column, amount_column in pairs:
        if asset_column in row:
            return row.get(asset_column) or "", to_decimal(row.get(amount_column))
    return "", Decimal(0)


def build_balance_sheet(rows: list[dict[str, str]]) -> dict[str, AssetBalance]:
    """Sent / received / fees per asset, exact decimals, assets in first-seen order."""
    sheet: dict[str, AssetBalance] = {}

    for row in rows:
        asset, amount = _pick(row, _SENT_COLUMNS)
        if asset:
            balance = sheet.setdefault(asset, AssetBalance())
            balance.sent = add(balance.sent, amount)

        asset, amount = _pick(row, _FEE_COLUMNS)
        if asset:
            balance = sheet.setdefault(asset, AssetBalance())
            balance.fees = add(balance.fees, amount)

        asset, amount = _pick(row, _RECEIVED_COLUMNS)
        if asset:
            balance = sheet.setdefault(asset, AssetBalance())
            balance.received = add(balance.received, amount)

    return sheet


def balance_sheet_from_csv(path: Path) -> dict[str, AssetBalance]:
    return build_balance_sheet(read_ledger(path))
