from pathlib import Path

from pydantic_settings import BaseSettings

from cosmotax.domain.enums import Network, OutputFormat

# Precision of IBC vouchers whose decimals cannot be read from the trace
DEFAULT_BRIDGED_DECIMALS: dict[Network, int] = {
    Network.EVMOS: 18,
    Network.INJECTIVE: 18,
}


class Settings(BaseSettings):
    network: Network = Network.COSMOS
    data_dir: Path = Path("data")
    csv_dir: Path = Path("csv")
    cache_dir: Path = Path(".")
    denom_cache_file: str = "ibc-denominations.json"
    contract_cache_file: str = "contract-metadata.json"
    denom_lookup: str = "cli"  # cli | rest
    node_binary: str = "gaiad"
    node_rpc_url: str = "https://cosmos-rpc.quickapi.com:443"
    lcd_url: str = "https://cosmos-rest.publicnode.com"
    chain_registry_url: str = "https://chains.cosmos.directory/"
    bridged_decimals: int | None = None
    reward_overlap_policy: str = "suppress"  # suppress | merge
    output_format: OutputFormat = OutputFormat.KOINLY
    http_rate_per_second: float = 2.0
    http_timeout: float = 30.0
    rewards_api_url: str = "https://api-osmosis-chain.imperator.co"
    rewards_request_delay: float = 0.5
    log_level: str = "INFO"

    @property
    def input_path(self) -> Path:
        return self.data_dir / f"{self.network.value}.json"

    @property
    def csv_path(self) -> Path:
        return self.csv_dir / f"{self.network.value}_data.csv"

    @property
    def timeout_path(self) -> Path:
        return self.cache_dir / f"{self.network.value}_timeout_txs.txt"

    @property
    def denom_cache_path(self) -> Path:
        return self.cache_dir / self.denom_cache_file

    @property
    def contract_cache_path(self) -> Path:
        return self.cache_dir / self.contract_cache_file

    @property
    def default_bridged_decimals(self) -> int:
        if self.bridged_decimals is not None:
            return self.bridged_decimals
        return DEFAULT_BRIDGED_DECIMALS.get(self.network, 6)

    class Config:
        env_file = ".env"
        env_prefix = "COSMOTAX_"

