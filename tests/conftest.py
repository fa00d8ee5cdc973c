from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from cosmotax.infra.denom.cache import DenominationCache
from cosmotax.infra.denom.resolver import DenominationResolver
from cosmotax.infra.denom.native import base_denomination
from cosmotax.domain.enums import Network
from cosmotax.parser.utils.context import ProcessingContext
from cosmotax.parser.utils.types import RawTransaction

from factories import WALLET


@pytest.fixture()
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / "ibc-denominations.json"


@pytest.fixture()
def trace_lookup() -> AsyncMock:
    lookup = AsyncMock()
    lookup.lookup.return_value = "uosmo"
    return lookup


@pytest.fixture()
def resolver(cache_path, trace_lookup) -> DenominationResolver:
    return DenominationResolver(DenominationCache(cache_path), trace_lookup)


@pytest.fixture()
def make_ctx(resolver):
    """Build a ProcessingContext for a dump record, wallet = factories.WALLET."""

    def _make(record: dict, **kwargs) -> ProcessingContext:
        return ProcessingContext(
            address=WALLET,
            base=base_denomination(Network.COSMOS),
            tx=RawTransaction.model_validate(record),
            resolver=resolver,
            **kwargs,
        )

    return _make
