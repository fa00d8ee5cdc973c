"""Tests for settings and the cosmotax command line."""

import json

import pytest

from cosmotax.cli import build_parser, build_settings, main
from cosmotax.config import Settings
from cosmotax.domain.enums import Action, Network, OutputFormat
from cosmotax.report.csv_writer import read_ledger

from factories import OTHER, WALLET, log, message_event, record, transfer


@pytest.fixture()
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ("COSMOTAX_NETWORK", "COSMOTAX_OUTPUT_FORMAT", "COSMOTAX_DENOM_LOOKUP"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


class TestSettings:
    def test_paths_follow_network(self, workdir):
        settings = Settings(network=Network.OSMOSIS)
        assert str(settings.input_path) == "data/osmosis.json"
        assert str(settings.csv_path) == "csv/osmosis_data.csv"
        assert settings.timeout_path.name == "osmosis_timeout_txs.txt"

    def test_bridged_decimals_per_network(self, workdir):
        assert Settings().default_bridged_decimals == 6
        assert Settings(network=Network.EVMOS).default_bridged_decimals == 18
        assert Settings(network=Network.EVMOS, bridged_decimals=8).default_bridged_decimals == 8

    def test_env_prefix(self, workdir, monkeypatch):
        monkeypatch.setenv("COSMOTAX_NETWORK", "juno")
        assert Settings().network is Network.JUNO


class TestParser:
    def test_run_arguments(self, workdir):
        args = build_parser().parse_args(["--network", "osmosis", "run", WALLET, "--format", "canonical"])
        settings = build_settings(args)

        assert args.address == WALLET
        assert settings.network is Network.OSMOSIS
        assert settings.output_format is OutputFormat.CANONICAL

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestMain:
    def test_run_then_balance(self, workdir, capsys):
        (workdir / "data").mkdir()
        (workdir / "data" / "cosmos.json").write_text(json.dumps([
            record([log(message_event(Action.MSG_SEND.value, OTHER), transfer((WALLET, OTHER, "3000000uatom")))]),
            record([log(message_event(Action.MSG_SEND.value), transfer((OTHER, WALLET, "1000000uatom")))], tx_hash="B"),
        ]))

        assert main(["run", WALLET, "--format", "canonical"]) == 0
        out = capsys.readouterr().out
        assert "csv/cosmos_data.csv created" in out

        rows = read_ledger(workdir / "csv" / "cosmos_data.csv")
        assert [r["type"] for r in rows] == ["Deposit", "Transfer", "Expense"]
        assert "meta" not in rows[0]

        assert main(["balance"]) == 0
        assert "ATOM: sent=1.0 received=3.0 fees=0.005 ending=1.995" in capsys.readouterr().out

    def test_missing_input_fails(self, workdir):
        assert main(["run", WALLET]) == 1
