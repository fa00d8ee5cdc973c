from enum import Enum


class OutputFormat(str, Enum):
    """Downstream CSV layouts the ledger can be written in."""

    CANONICAL = "canonical"
    KOINLY = "koinly"
