"""Tests for wire decoding of transaction records."""

from cosmotax.domain.enums import Action, LedgerType
from cosmotax.parser.utils.types import LedgerEntry, LedgerRow, RawTransaction

from factories import log, message_event, record


class TestRawTransaction:
    def test_decodes_tagged_envelope(self):
        tx = RawTransaction.model_validate(record(
            [log(message_event(Action.MSG_SEND.value))],
            messages=[{"@type": "/cosmos.bank.v1beta1.MsgSend", "from_address": "a", "to_address": "b"}],
        ))
        assert tx.hash == "ABCDEF"
        assert tx.id == "42"
        assert tx.tx.type_url == "/cosmos.tx.v1beta1.Tx"
        assert tx.tx.auth_info.fee.amount[0].denom == "uatom"
        assert tx.messages[0].action is Action.MSG_SEND
        assert tx.messages[0].payload["to_address"] == "b"
        assert tx.message_types == ["/cosmos.bank.v1beta1.MsgSend"]
        assert not tx.failed

    def test_accepts_hash_and_message_aliases(self):
        raw = record([])
        raw["hash"] = raw.pop("txhash")
        raw["message"] = raw.pop("tx")
        raw["id"] = 7
        tx = RawTransaction.model_validate(raw)
        assert tx.hash == "ABCDEF"
        assert tx.id == "7"
        assert tx.tx.auth_info.fee is not None

    def test_null_logs_mean_failed(self):
        raw = record([])
        raw["logs"] = None
        assert RawTransaction.model_validate(raw).failed

    def test_unknown_message_type_has_no_action(self):
        tx = RawTransaction.model_validate(record([], messages=[{"@type": "/some.new.MsgThing"}]))
        assert tx.messages[0].action is None


class TestLedgerRow:
    def test_as_record(self):
        tx = RawTransaction.model_validate(record([]))
        entry = LedgerEntry(type=LedgerType.EXPENSE, fee_asset="ATOM", fee_amount=None, description="x")
        row = LedgerRow.from_entry(entry, date=tx.timestamp, transaction_hash=tx.hash, transaction_id=tx.id)
        out = row.as_record()
        assert out["date"] == "2023-01-05 9:04:07"
        assert out["type"] == "Expense"
        assert out["feeAmount"] == ""
        assert out["marketValueCurrency"] == "USD"
        assert out["transactionHash"] == "ABCDEF"
