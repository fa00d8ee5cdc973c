"""Composite amount parsing and exact decimal scaling."""

import re
from datetime import datetime
from decimal import Context, Decimal, InvalidOperation

# Wide enough for 18-decimal amounts of any realistic supply
_CTX = Context(prec=96)

_PIECE_RE = re.compile(r"^(\d*)(.*)$", re.DOTALL)
_DENOM_RE = re.compile(r"^[A-Za-z][A-Za-z0-9/:._-]*$")
_ALPHA_RUN_RE = re.compile(r"[a-z]+", re.IGNORECASE)

UNKNOWN_DENOM = "Unknown"


def _split_piece(piece: str) -> tuple[str, str]:
    match = _PIECE_RE.match(piece.strip())
    amount, rest = (match.group(1), match.group(2).strip()) if match else ("", "")
    if _DENOM_RE.match(rest):
        denom = rest
    else:
        alpha = _ALPHA_RUN_RE.search(rest)
        denom = alpha.group(0) if alpha else UNKNOWN_DENOM
    return amount or "0", denom


def parse_amounts(value: str | None) -> list[tuple[str, str]]:
    """Split ``"500000uatom,250ibc/ABCD"`` into ``[("500000", "uatom"), ("250", "ibc/ABCD")]``.

    Never raises: an empty piece yields ``("0", "Unknown")``.
    """
    if value is None:
        return [("0", UNKNOWN_DENOM)]
    return [_split_piece(piece) for piece in value.split(",")]


def format_amounts(pairs: list[tuple[str, str]]) -> str:
    """Inverse of parse_amounts for well-formed input."""
    return ",".join(f"{amount}{denom}" for amount, denom in pairs)


def leading_amount(value: str) -> str:
    """Raw integer prefix of a single coin string, ``"0"`` when absent."""
    return _split_piece(value)[0]


def to_decimal(value: str | int | Decimal | None) -> Decimal:
    if value is None or value == "":
        return Decimal(0)
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return Decimal(0)


def scale_amount(raw: str | int | Decimal | None, decimals: int) -> Decimal:
    """Raw base units -> human units, exact (``"1000000", 6 -> 1.000000``)."""
    return to_decimal(raw).scaleb(-decimals, context=_CTX)


def multiply(a: Decimal, b: str | Decimal) -> Decimal:
    return _CTX.multiply(a, to_decimal(b))


def quantize(value: Decimal, decimals: int) -> Decimal:
    """Round to ``decimals`` fractional digits (banker's rounding)."""
    return value.quantize(Decimal(1).scaleb(-decimals), context=_CTX)


def add(a: Decimal, b: Decimal) -> Decimal:
    return _CTX.add(a, b)


def format_amount(value: Decimal | None) -> str:
    """Plain decimal text with trailing zeros stripped: ``1.000000 -> "1.0"``, ``None -> ""``."""
    if value is None:
        return ""
    text = format(value.normalize(_CTX), "f")
    if "." not in text:
        text += ".0"
    return text


def format_date(value: datetime) -> str:
    """``2023-01-05 9:04:07`` (hour without padding)."""
    return f"{value:%Y-%m-%d} {value.hour}:{value:%M:%S}"
