from enum import Enum


class LedgerType(str, Enum):
    """Closed vocabulary of canonical ledger row types."""

    EXPENSE = "Expense"
    INCOME = "Income"
    DEPOSIT = "Deposit"
    TRANSFER = "Transfer"
    SWAP = "Swap"
    STAKING = "Staking"
    OTHER = "Other"
