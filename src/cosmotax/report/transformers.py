"""Output transformers — canonical LedgerRow -> flat CSV rows of a target format."""

from abc import ABC, abstractmethod

from cosmotax.domain.enums import LedgerType, OutputFormat
from cosmotax.parser.utils.amounts import format_amount, format_date
from cosmotax.parser.utils.types import CANONICAL_COLUMNS, LedgerRow

OutputRow = dict[str, str]

KOINLY_COLUMNS: list[str] = [
    "Date",
    "Sent Amount",
    "Sent Currency",
    "Received Amount",
    "Received Currency",
    "Fee Amount",
    "Fee Currency",
    "Net Worth Amount",
    "Net Worth Currency",
    "Label",
    "Description",
    "TxHash",
    "Meta",
]

# Koinly labels; Transfer and Swap additionally split their fee into a cost row
KOINLY_LABELS: dict[LedgerType, str] = {
    LedgerType.DEPOSIT: "deposit",
    LedgerType.EXPENSE: "cost",
    LedgerType.TRANSFER: "withdrawal",
    LedgerType.SWAP: "swap",
    LedgerType.STAKING: "staking",
    LedgerType.INCOME: "income",
    LedgerType.OTHER: "",
}


class OutputTransformer(ABC):
    NAME: str = ""
    COLUMNS: list[str] = []

    @abstractmethod
    def expand(self, row: LedgerRow) -> list[OutputRow]:
        """One canonical row -> one or more output rows."""


class CanonicalTransformer(OutputTransformer):
    NAME = OutputFormat.CANONICAL.value
    COLUMNS = CANONICAL_COLUMNS

    def expand(self, row: LedgerRow) -> list[OutputRow]:
        return [row.as_record()]


class KoinlyTransformer(OutputTransformer):
    """Koinly universal CSV. Fees never stay on a row: they become ``cost`` rows."""

    NAME = OutputFormat.KOINLY.value
    COLUMNS = KOINLY_COLUMNS

    def expand(self, row: LedgerRow) -> list[OutputRow]:
        base = self._base(row)
        fee = {
            **base,
            "Sent Amount": format_amount(row.fee_amount),
            "Sent Currency": row.fee_asset,
            "Received Amount": "",
            "Received Currency": "",
            "Label": "cost",
        }

        if row.type is LedgerType.EXPENSE:
            return [{**fee, "Received Amount": base["Received Amount"], "Received Currency": base["Received Currency"]}]

        if row.type is LedgerType.OTHER:
            rows = [{**base, "Label": "withdrawal" if row.sent_amount is not None else "deposit"}]
            if row.fee_amount is not None:
                rows.append(fee)
            return rows

        if row.type in (LedgerType.SWAP, LedgerType.TRANSFER):
            main = {**base, "Label": KOINLY_LABELS[row.type]}
            if row.fee_amount is None:
                return [main]
            return [fee, main]

        rows = [{**base, "Label": KOINLY_LABELS.get(row.type, "") if row.type else ""}]
        if row.fee_amount is not None:
            rows.append(fee)
        return rows

    @staticmethod
    def _base(row: LedgerRow) -> OutputRow:
        return {
            "Date": format_date(row.date),
            "Sent Amount": format_amount(row.sent_amount),
            "Sent Currency": row.sent_asset,
            "Received Amount": format_amount(row.received_amount),
            "Received Currency": row.received_asset,
            "Fee Amount": "",
            "Fee Currency": "",
            "Net Worth Amount": row.market_value,
            "Net Worth Currency": row.market_value_currency if row.market_value else "",
            "Label": "",
            "Description": row.description,
            "TxHash": row.transaction_hash,
            "Meta": row.meta,
        }


_TRANSFORMERS: dict[str, type[OutputTransformer]] = {
    CanonicalTransformer.NAME: CanonicalTransformer,
    KoinlyTransformer.NAME: KoinlyTransformer,
}


def get_transformer(name: str | OutputFormat) -> OutputTransformer:
    key = name.value if isinstance(name, OutputFormat) else name
    try:
        return _TRANSFORMERS[key]()
    except KeyError:
        raise ValueError(f"Unknown output format: {key!r} (expected one of {sorted(_TRANSFORMERS)})") from None
