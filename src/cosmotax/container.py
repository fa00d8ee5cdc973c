from dependency_injector import containers, providers

from cosmotax.config import Settings
from cosmotax.infra.denom.cache import DenominationCache
from cosmotax.infra.denom.contracts import ContractMetadataResolver
from cosmotax.infra.denom.lookup import CliDenomTraceLookup, DenomTraceLookup, RestDenomTraceLookup
from cosmotax.infra.denom.registry_seed import ChainRegistrySeeder
from cosmotax.infra.denom.resolver import DenominationResolver
from cosmotax.infra.http.rate_limited_client import RateLimitedClient
from cosmotax.infra.rewards.osmosis import OsmosisRewardsClient
from cosmotax.ledger import ActionDiagnostics, LedgerRun
from cosmotax.parser.classifier import TransactionClassifier
from cosmotax.parser.registry import build_default_registry
from cosmotax.report.csv_writer import LedgerCsvWriter
from cosmotax.report.timeouts import TimeoutLedger
from cosmotax.report.transformers import get_transformer


def build_lookup(settings: Settings, http_client: RateLimitedClient) -> DenomTraceLookup:
    if settings.denom_lookup == "rest":
        return RestDenomTraceLookup(settings.lcd_url, http_client)
    return CliDenomTraceLookup(settings.node_binary, settings.node_rpc_url)


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings)

    http_client = providers.Singleton(
        RateLimitedClient,
        rate_per_second=settings.provided.http_rate_per_second,
        timeout=settings.provided.http_timeout,
    )

    denom_cache = providers.Singleton(DenominationCache, path=settings.provided.denom_cache_path)
    contract_cache = providers.Singleton(DenominationCache, path=settings.provided.contract_cache_path)

    lookup = providers.Singleton(build_lookup, settings=settings, http_client=http_client)

    resolver = providers.Singleton(
        DenominationResolver,
        cache=denom_cache,
        lookup=lookup,
        network=settings.provided.network,
        bridged_decimals=settings.provided.default_bridged_decimals,
    )

    contracts = providers.Singleton(
        ContractMetadataResolver,
        cache=contract_cache,
        lcd_url=settings.provided.lcd_url,
        http_client=http_client,
    )

    timeouts = providers.Singleton(TimeoutLedger, path=settings.provided.timeout_path)

    registry = providers.Singleton(build_default_registry)
    diagnostics = providers.Singleton(ActionDiagnostics)

    # address is supplied per run: container.classifier(address=...)
    classifier = providers.Factory(
        TransactionClassifier,
        registry=registry,
        resolver=resolver,
        network=settings.provided.network,
        contracts=contracts,
        timeouts=timeouts,
        reward_overlap_policy=settings.provided.reward_overlap_policy,
        diagnostics=diagnostics,
    )

    transformer = providers.Factory(get_transformer, name=settings.provided.output_format)
    csv_writer = providers.Factory(LedgerCsvWriter, path=settings.provided.csv_path, transformer=transformer)

    ledger_run = providers.Factory(LedgerRun, writer=csv_writer)

    registry_seeder = providers.Factory(
        ChainRegistrySeeder,
        registry_url=settings.provided.chain_registry_url,
        http_client=http_client,
        cache=denom_cache,
    )

    rewards_client = providers.Factory(
        OsmosisRewardsClient,
        http_client=http_client,
        base_url=settings.provided.rewards_api_url,
        request_delay=settings.provided.rewards_request_delay,
    )
