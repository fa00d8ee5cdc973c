"""cosmotax command line.

Usage:
    cosmotax run <address> [--network cosmos] [--input data/cosmos.json] [--format koinly]
    cosmotax reconcile [--network cosmos]
    cosmotax balance [--network cosmos]
    cosmotax seed-denoms
    cosmotax rewards <address>
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from cosmotax.config import Settings
from cosmotax.container import Container
from cosmotax.domain.enums import Network, OutputFormat
from cosmotax.exceptions import CosmoTaxError
from cosmotax.infra.rewards.osmosis import DEFAULT_REWARDS_FILE, save_rewards
from cosmotax.ledger import load_transactions
from cosmotax.parser.utils.amounts import format_amount
from cosmotax.report.balance_sheet import balance_sheet_from_csv
from cosmotax.report.timeouts import reconcile_timeouts

logger = logging.getLogger("cosmotax")


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cosmotax", description="Cosmos wallet history -> tax ledger CSV.")
    parser.add_argument(
        "--network",
        choices=[n.value for n in Network],
        default=None,
        help="Chain of the wallet (overrides COSMOTAX_NETWORK)",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (overrides COSMOTAX_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Classify a transaction dump into the ledger CSV")
    run.add_argument("address", help="Wallet address the ledger is written for")
    run.add_argument("--input", type=Path, default=None, help="JSON array of transactions (default data/<network>.json)")
    run.add_argument("--output", type=Path, default=None, help="Ledger CSV (default csv/<network>_data.csv)")
    run.add_argument("--format", choices=[f.value for f in OutputFormat], default=None, help="Output layout")
    run.add_argument("--no-reconcile", action="store_true", help="Keep rows of timed-out IBC transfers")

    sub.add_parser("reconcile", help="Drop rows of timed-out IBC transfers from the ledger CSV")
    sub.add_parser("balance", help="Print sent/received/fees/ending balance per asset")
    sub.add_parser("seed-denoms", help="Merge chain registry assets into the denomination cache")

    rewards = sub.add_parser("rewards", help="Backfill Osmosis LP rewards history")
    rewards.add_argument("address")
    rewards.add_argument("--output", type=Path, default=Path(DEFAULT_REWARDS_FILE))
    return parser


def build_settings(args: argparse.Namespace) -> Settings:
    overrides: dict = {}
    if args.network:
        overrides["network"] = Network(args.network)
    if args.log_level:
        overrides["log_level"] = args.log_level
    if getattr(args, "format", None):
        overrides["output_format"] = OutputFormat(args.format)
    return Settings(**overrides)


async def cmd_run(container: Container, args: argparse.Namespace) -> int:
    settings: Settings = container.settings()
    input_path = args.input or settings.input_path
    csv_path = args.output or settings.csv_path

    records = load_transactions(input_path)
    logger.info("Loaded %d transactions from %s", len(records), input_path)

    classifier = container.classifier(address=args.address)
    writer = container.csv_writer(path=csv_path)
    run = container.ledger_run(classifier=classifier, writer=writer)
    try:
        stats = await run.run(records)
    finally:
        await container.http_client().close()

    if not args.no_reconcile:
        stats.removed_timeouts = reconcile_timeouts(csv_path, container.timeouts())

    summary = run.diagnostics.summary()
    print(f"{csv_path} created")
    print(f"processed {stats.processed} transactions ({stats.rows} rows)")
    if stats.failed:
        print(f"failed: {', '.join(stats.failed)}")
    print("message types seen:")
    for type_url in summary["message_types"]:
        print(f"  {type_url}")
    if summary["unmatched"]:
        print("unmatched actions:")
        for action, count in summary["unmatched"].items():
            print(f"  {action}: {count}")
    return 0


def cmd_reconcile(container: Container, args: argparse.Namespace) -> int:
    settings: Settings = container.settings()
    removed = reconcile_timeouts(settings.csv_path, container.timeouts())
    print(f"removed {removed} timed-out rows from {settings.csv_path}")
    return 0


def cmd_balance(container: Container, args: argparse.Namespace) -> int:
    settings: Settings = container.settings()
    sheet = balance_sheet_from_csv(settings.csv_path)
    print("Your balance is:")
    for asset, balance in sheet.items():
        print(
            f"  {asset}: sent={format_amount(balance.sent)} received={format_amount(balance.received)} "
            f"fees={format_amount(balance.fees)} ending={format_amount(balance.ending_balance)}"
        )
    return 0


async def cmd_seed_denoms(container: Container, args: argparse.Namespace) -> int:
    try:
        added = await container.registry_seeder().seed()
    finally:
        await container.http_client().close()
    print(f"added {added} denominations to {container.settings().denom_cache_path}")
    return 0


async def cmd_rewards(container: Container, args: argparse.Namespace) -> int:
    try:
        rewards = await container.rewards_client().collect(args.address)
    finally:
        await container.http_client().close()
    save_rewards(rewards, args.output)
    print(f"saved rewards history of {len(rewards)} tokens to {args.output}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = build_settings(args)
    configure_logging(settings.log_level)

    container = Container()
    container.settings.override(settings)

    try:
        if args.command == "run":
            return asyncio.run(cmd_run(container, args))
        if args.command == "reconcile":
            return cmd_reconcile(container, args)
        if args.command == "balance":
            return cmd_balance(container, args)
        if args.command == "seed-denoms":
            return asyncio.run(cmd_seed_denoms(container, args))
        if args.command == "rewards":
            return asyncio.run(cmd_rewards(container, args))
    except (CosmoTaxError, FileNotFoundError) as e:
        logger.error("%s", e)
        return 1
    return 2


if __name__ == "__main__":
    sys.exit(main())
