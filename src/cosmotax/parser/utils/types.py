"""Core data types for the classification engine.

Wire records are decoded once, at ingestion: the ``@type``-tagged envelopes of
the dump are unwrapped into plain models so processors never index into the
raw JSON.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from cosmotax.domain.enums import Action, LedgerType

CANONICAL_COLUMNS: list[str] = [
    "date",
    "type",
    "sentAsset",
    "sentAmount",
    "receivedAsset",
    "receivedAmount",
    "feeAsset",
    "feeAmount",
    "marketValueCurrency",
    "marketValue",
    "description",
    "transactionHash",
    "transactionId",
    "meta",
]


def untag(data: dict) -> tuple[str, dict]:
    """Split a ``{"@type": t, "<t with dashes>": {...}}`` envelope into (t, payload).

    Untagged envelopes and envelopes carrying their fields inline are returned as-is.
    """
    type_url = data.get("@type", "") or ""
    inner = data.get(type_url.replace(".", "-")) if type_url else None
    if isinstance(inner, dict):
        return type_url, inner
    return type_url, {k: v for k, v in data.items() if k != "@type"}


class Attribute(BaseModel):
    key: str
    value: str = ""

    @field_validator("key", "value", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> str:
        return "" if v is None else str(v)


class Event(BaseModel):
    type: str
    attributes: list[Attribute] = []


class Log(BaseModel):
    """Events emitted by one sub-message, in the order of ``body.messages``."""

    msg_index: int = 0
    log: str = ""
    events: list[Event] = []

    def events_of_type(self, event_type: str) -> list[Event]:
        return [e for e in self.events if e.type == event_type]

    def first_event(self, event_type: str) -> Event | None:
        for e in self.events:
            if e.type == event_type:
                return e
        return None


class Coin(BaseModel):
    denom: str = "Unknown"
    amount: str = "0"

    @field_validator("amount", mode="before")
    @classmethod
    def _stringify(cls, v: Any) -> str:
        return "0" if v is None else str(v)


class Fee(BaseModel):
    amount: list[Coin] = []
    gas_limit: str = "0"


class AuthInfo(BaseModel):
    fee: Fee | None = None


class Message(BaseModel):
    """One sub-message of a transaction body, decoded from its tagged form."""

    type_url: str = ""
    payload: dict[str, Any] = {}

    @model_validator(mode="before")
    @classmethod
    def _decode(cls, data: Any) -> Any:
        if isinstance(data, dict) and "type_url" not in data:
            type_url, payload = untag(data)
            return {"type_url": type_url, "payload": payload}
        return data

    @property
    def action(self) -> Action | None:
        return Action.decode(self.type_url)


class TxBody(BaseModel):
    messages: list[Message] = []
    memo: str = ""


class TxEnvelope(BaseModel):
    type_url: str = ""
    body: TxBody = TxBody()
    auth_info: AuthInfo = AuthInfo()

    @model_validator(mode="before")
    @classmethod
    def _decode(cls, data: Any) -> Any:
        if isinstance(data, dict) and "type_url" not in data:
            type_url, payload = untag(data)
            return {"type_url": type_url, **payload}
        return data


class RawTransaction(BaseModel):
    """One indexed transaction record of the input dump."""

    model_config = ConfigDict(populate_by_name=True)

    hash: str = Field(validation_alias=AliasChoices("txhash", "hash"))
    id: str = ""
    timestamp: datetime
    tx: TxEnvelope = Field(default_factory=TxEnvelope, validation_alias=AliasChoices("tx", "message"))
    logs: list[Log] = []

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("logs", mode="before")
    @classmethod
    def _null_logs(cls, v: Any) -> Any:
        return v or []

    @property
    def messages(self) -> list[Message]:
        return self.tx.body.messages

    @property
    def message_types(self) -> list[str]:
        return [m.type_url for m in self.messages if m.type_url]

    @property
    def failed(self) -> bool:
        return not self.logs


class Denomination(BaseModel):
    """Human-readable identity of an on-chain asset."""

    model_config = ConfigDict(frozen=True)

    denom: str
    symbol: str
    decimals: int


UNKNOWN_DENOMINATION = Denomination(denom="Unknown", symbol="Unknown", decimals=0)


class LedgerEntry(BaseModel):
    """Partial ledger row produced by a processor (no date/hash/id yet)."""

    type: LedgerType | None = None
    sent_asset: str = ""
    sent_amount: Decimal | None = None
    received_asset: str = ""
    received_amount: Decimal | None = None
    fee_asset: str = ""
    fee_amount: Decimal | None = None
    description: str = ""
    meta: str = ""


class LedgerRow(LedgerEntry):
    """Canonical ledger row: one economically distinct effect of a transaction."""

    date: datetime
    transaction_hash: str
    transaction_id: str = ""
    market_value_currency: str = "USD"
    market_value: str = ""

    @classmethod
    def from_entry(cls, entry: LedgerEntry, *, date: datetime, transaction_hash: str, transaction_id: str) -> "LedgerRow":
        return cls(
            **entry.model_dump(),
            date=date,
            transaction_hash=transaction_hash,
            transaction_id=transaction_id,
        )

    def as_record(self) -> dict[str, str]:
        """Flat string record keyed by CANONICAL_COLUMNS."""
        from cosmotax.parser.utils.amounts import format_amount, format_date

        return {
            "date": format_date(self.date),
            "type": self.type.value if self.type else "",
            "sentAsset": self.sent_asset,
            "sentAmount": format_amount(self.sent_amount),
            "receivedAsset": self.received_asset,
            "receivedAmount": format_amount(self.received_amount),
            "feeAsset": self.fee_asset,
            "feeAmount": format_amount(self.fee_amount),
            "marketValueCurrency": self.market_value_currency,
            "marketValue": self.market_value,
            "description": self.description,
            "transactionHash": self.transaction_hash,
            "transactionId": self.transaction_id,
            "meta": self.meta,
        }


class TransferLeg(BaseModel):
    """One record of a ``transfer`` event."""

    recipient: str = ""
    sender: str = ""
    amount: str = ""


class ResolvedCoin(BaseModel):
    denomination: Denomination
    amount: Decimal

    @property
    def symbol(self) -> str:
        return self.denomination.symbol
