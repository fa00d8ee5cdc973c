from enum import Enum


class Network(str, Enum):
    """Supported Cosmos-SDK networks. Values match the data/csv file prefixes."""

    COSMOS = "cosmos"
    OSMOSIS = "osmosis"
    JUNO = "juno"
    STARGAZE = "stargaze"
    STRIDE = "stride"
    AKASH = "akash"
    EVMOS = "evmos"
    INJECTIVE = "injective"
