"""ProcessorRegistry — action string → processor lookup."""

from cosmotax.domain.enums import Action
from cosmotax.parser.generic.base import BaseProcessor


class ProcessorRegistry:
    """Registry mapping each known action (type url or legacy name) to its processor.

    Several actions may share one processor instance; the classifier relies on
    that identity to run a processor at most once per transaction.
    """

    def __init__(self) -> None:
        self._processors: dict[Action, BaseProcessor] = {}

    def register(self, processor: BaseProcessor, actions: tuple[Action, ...] | None = None) -> None:
        for action in actions if actions is not None else processor.ACTIONS:
            self._processors[action] = processor

    def get(self, action: str | Action | None) -> BaseProcessor | None:
        decoded = action if isinstance(action, Action) else Action.decode(action)
        if decoded is None:
            return None
        return self._processors.get(decoded)

    def __contains__(self, action: str | Action) -> bool:
        return self.get(action) is not None

    @property
    def actions(self) -> list[Action]:
        return list(self._processors)

    @property
    def processors(self) -> list[BaseProcessor]:
        seen: list[BaseProcessor] = []
        for processor in self._processors.values():
            if processor not in seen:
                seen.append(processor)
        return seen


def build_default_registry() -> ProcessorRegistry:
    """Create a ProcessorRegistry with every processor registered."""
    from cosmotax.parser.cosmos.authz import ExecProcessor, GrantProcessor, RevokeProcessor
    from cosmotax.parser.cosmos.bank import MultiSendProcessor, SendProcessor
    from cosmotax.parser.cosmos.claims import ClaimProcessor
    from cosmotax.parser.cosmos.distribution import WithdrawRewardProcessor
    from cosmotax.parser.cosmos.gov import VoteProcessor
    from cosmotax.parser.cosmos.ibc import (
        AcknowledgementProcessor,
        IbcTransferProcessor,
        RecvPacketProcessor,
        TimeoutProcessor,
    )
    from cosmotax.parser.cosmos.liquidity import (
        DepositWithinBatchProcessor,
        SwapWithinBatchProcessor,
        WithdrawWithinBatchProcessor,
    )
    from cosmotax.parser.cosmos.osmosis import (
        CreatePositionProcessor,
        ExitPoolProcessor,
        JoinPoolProcessor,
        JoinSwapExternProcessor,
        LockTokensProcessor,
        SwapProcessor,
        WithdrawPositionProcessor,
    )
    from cosmotax.parser.cosmos.staking import DelegateProcessor, RedelegateProcessor, UndelegateProcessor
    from cosmotax.parser.generic.base import NoOpProcessor
    from cosmotax.parser.wasm import WasmExecuteProcessor

    registry = ProcessorRegistry()

    # Bank
    registry.register(SendProcessor())
    registry.register(MultiSendProcessor())

    # Staking + distribution
    registry.register(DelegateProcessor())
    registry.register(UndelegateProcessor())
    registry.register(RedelegateProcessor())
    registry.register(WithdrawRewardProcessor())

    # Governance, authz, claims
    registry.register(VoteProcessor())
    registry.register(ExecProcessor())
    registry.register(GrantProcessor())
    registry.register(RevokeProcessor())
    registry.register(ClaimProcessor())

    # IBC; MsgUpdateClient rides along relayed packets and books nothing
    registry.register(IbcTransferProcessor())
    registry.register(RecvPacketProcessor())
    registry.register(TimeoutProcessor())
    registry.register(AcknowledgementProcessor())
    registry.register(NoOpProcessor())

    # Gravity DEX
    registry.register(SwapWithinBatchProcessor())
    registry.register(DepositWithinBatchProcessor())
    registry.register(WithdrawWithinBatchProcessor())

    # Osmosis
    registry.register(SwapProcessor())
    registry.register(JoinPoolProcessor())
    registry.register(JoinSwapExternProcessor())
    registry.register(ExitPoolProcessor())
    registry.register(CreatePositionProcessor())
    registry.register(WithdrawPositionProcessor())
    registry.register(LockTokensProcessor())

    # CosmWasm
    registry.register(WasmExecuteProcessor())

    return registry
