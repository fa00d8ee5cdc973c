"""Tests for ProcessorRegistry."""

from cosmotax.domain.enums import Action
from cosmotax.parser.cosmos.bank import SendProcessor
from cosmotax.parser.registry import ProcessorRegistry, build_default_registry


class TestProcessorRegistry:
    def test_register_uses_declared_actions(self):
        registry = ProcessorRegistry()
        processor = SendProcessor()
        registry.register(processor)

        assert registry.get(Action.MSG_SEND) is processor
        assert registry.get("send") is processor
        assert "/cosmos.bank.v1beta1.MsgSend" in registry

    def test_register_explicit_actions(self):
        registry = ProcessorRegistry()
        registry.register(SendProcessor(), actions=(Action.LEGACY_SEND,))

        assert registry.get(Action.MSG_SEND) is None
        assert registry.actions == [Action.LEGACY_SEND]

    def test_unknown_action(self):
        registry = ProcessorRegistry()
        assert registry.get("/foo.bar.MsgBaz") is None
        assert registry.get(None) is None
        assert "/foo.bar.MsgBaz" not in registry

    def test_processors_deduplicated(self):
        registry = ProcessorRegistry()
        registry.register(SendProcessor())
        assert len(registry.processors) == 1


class TestDefaultRegistry:
    def test_every_known_action_is_handled(self):
        registry = build_default_registry()
        missing = [action for action in Action if action not in registry]
        assert missing == []

    def test_legacy_and_modern_share_processor(self):
        registry = build_default_registry()
        assert registry.get(Action.MSG_DELEGATE) is registry.get(Action.LEGACY_DELEGATE)
        assert registry.get(Action.MSG_VOTE) is registry.get(Action.MSG_VOTE_V1)
