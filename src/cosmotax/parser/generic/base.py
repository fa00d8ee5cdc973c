"""Base processor interface."""

from abc import ABC, abstractmethod

from cosmotax.domain.enums import Action
from cosmotax.parser.utils.context import ProcessingContext
from cosmotax.parser.utils.types import LedgerEntry


class BaseProcessor(ABC):
    """Turns the logs of one action into ledger entries.

    Subclasses declare every action string they understand in ``ACTIONS``:
    the modern type url and any legacy name of the same message. Missing or
    oddly shaped attributes must degrade to placeholders, never raise.
    """

    PROCESSOR_NAME: str = "BaseProcessor"
    ACTIONS: tuple[Action, ...] = ()

    @abstractmethod
    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        """Ledger entries for the action, in emission order."""


class NoOpProcessor(BaseProcessor):
    """Actions that never carry a ledger effect of their own."""

    PROCESSOR_NAME = "NoOpProcessor"
    ACTIONS = (Action.MSG_UPDATE_CLIENT,)

    async def process(self, ctx: ProcessingContext) -> list[LedgerEntry]:
        return []
