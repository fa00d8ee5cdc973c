from cosmotax.domain.enums.action import REWARD_WITHDRAWAL_ACTIONS, STAKING_ACTIONS, Action
from cosmotax.domain.enums.ledger_type import LedgerType
from cosmotax.domain.enums.network import Network
from cosmotax.domain.enums.output_format import OutputFormat

__all__ = [
    "Action",
    "LedgerType",
    "Network",
    "OutputFormat",
    "REWARD_WITHDRAWAL_ACTIONS",
    "STAKING_ACTIONS",
]
