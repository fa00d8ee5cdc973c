"""Error hierarchy for the ledger pipeline."""


class CosmoTaxError(Exception):
    """Base class for all cosmotax errors."""


class StructuralError(CosmoTaxError):
    """A required field is missing from a transaction. Fatal for that transaction only."""

    def __init__(self, message: str, tx_id: str | None = None) -> None:
        super().__init__(message)
        self.tx_id = tx_id


class ResolutionError(CosmoTaxError):
    """An external denomination or contract lookup failed."""


class ExternalServiceError(CosmoTaxError):
    """An HTTP API or CLI transport returned an error."""
