"""Statically known native denominations per network."""

from cosmotax.domain.enums import Network
from cosmotax.parser.utils.types import Denomination

# (denom, symbol, decimals); the first entry of each network is its staking/fee asset
NATIVE_DENOMS: dict[Network, list[tuple[str, str, int]]] = {
    Network.COSMOS: [("uatom", "ATOM", 6)],
    Network.OSMOSIS: [("uosmo", "OSMO", 6), ("uion", "ION", 6)],
    Network.JUNO: [("ujuno", "JUNO", 6)],
    Network.STARGAZE: [("ustars", "STARS", 6)],
    Network.STRIDE: [("ustrd", "STRD", 6)],
    Network.AKASH: [("uakt", "AKT", 6)],
    Network.EVMOS: [("aevmos", "EVMOS", 18)],
    Network.INJECTIVE: [("inj", "INJ", 18)],
}

_ALL_NATIVE: dict[str, Denomination] = {
    denom: Denomination(denom=denom, symbol=symbol, decimals=decimals)
    for entries in NATIVE_DENOMS.values()
    for denom, symbol, decimals in entries
}


def base_denomination(network: Network) -> Denomination:
    """Staking and fee asset of a network."""
    denom, symbol, decimals = NATIVE_DENOMS[network][0]
    return Denomination(denom=denom, symbol=symbol, decimals=decimals)


def native_denomination(denom: str, network: Network | None = None) -> Denomination | None:
    """Native entry for ``denom``, preferring the given network's table."""
    if network is not None:
        for native, symbol, decimals in NATIVE_DENOMS.get(network, []):
            if native == denom:
                return Denomination(denom=denom, symbol=symbol, decimals=decimals)
    return _ALL_NATIVE.get(denom)


def symbol_from_base_denom(base_denom: str) -> str:
    """Readable symbol for a trace's base denom: ``uosmo -> OSMO``, ``aevmos -> EVMOS``."""
    native = _ALL_NATIVE.get(base_denom)
    if native is not None:
        return native.symbol
    if len(base_denom) > 1 and base_denom[0] in ("u", "a") and base_denom[1:].isalpha():
        return base_denom[1:].upper()
    return base_denom.upper() if base_denom.isalpha() else base_denom
