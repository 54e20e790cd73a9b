# tests/test_cli.py

import json

import yaml
from click.testing import CliRunner

from purchase_indexer import create_aggregator
from purchase_indexer.cli.__main__ import cli

from helpers import CONTRACT, MERCHANT, OTHER_MERCHANT, FakeChainClient, make_log


CONFIG = {
    "networks": [
        {
            "key": "sepolia",
            "chain_id": 11155111,
            "name": "Sepolia",
            "rpc_url": "https://rpc.sepolia.example",
            "explorer_url": "https://sepolia.etherscan.io",
            "contract_address": CONTRACT,
            "deployment_block": 0,
        },
        {
            "key": "mordor",
            "chain_id": 63,
            "name": "Mordor Testnet",
            "rpc_url": "https://rpc.mordor.example",
            "explorer_url": "https://blockscout.com/etc/mordor",
            "contract_address": CONTRACT,
            "deployment_block": 10,
        },
    ],
}


def fake_factory(config):
    clients = {
        "sepolia": FakeChainClient(height=100, logs=[make_log(20), make_log(40, receiver=OTHER_MERCHANT)]),
        "mordor": FakeChainClient(height=100, logs=[make_log(30)], timestamp_offset=1),
    }
    return create_aggregator(config, clients=clients)


def invoke(tmp_path, *args):
    config_path = tmp_path / "networks.yaml"
    config_path.write_text(yaml.safe_dump(CONFIG))
    runner = CliRunner()
    return runner.invoke(
        cli,
        ["--config", str(config_path), *args],
        obj={"aggregator_factory": fake_factory},
        env={"PURCHASE_INDEXER_LOG_LEVEL": "ERROR"},
    )


def test_networks_command(tmp_path):
    result = invoke(tmp_path, "networks")

    assert result.exit_code == 0, result.output
    assert "sepolia" in result.output
    assert "chain_id=63" in result.output


def test_purchases_command(tmp_path):
    result = invoke(tmp_path, "purchases", "--receiver", MERCHANT)

    assert result.exit_code == 0, result.output
    events = json.loads(result.stdout)
    assert [(event["chain_id"], event["block_number"]) for event in events] == [(11155111, 20), (63, 30)]
    assert events[0]["amount_sc"] == "1"
    assert events[0]["timestamp"] is None


def test_latest_command(tmp_path):
    result = invoke(tmp_path, "latest", "--limit", "2")

    assert result.exit_code == 0, result.output
    events = json.loads(result.stdout)
    assert [event["block_number"] for event in events] == [40, 30]
    assert all(event["timestamp"] for event in events)


def test_latest_rejects_bad_limit(tmp_path):
    result = invoke(tmp_path, "latest", "--limit", "zero")

    assert result.exit_code != 0
    assert "positive integer" in result.output


def test_bad_receiver_is_reported(tmp_path):
    result = invoke(tmp_path, "purchases", "--receiver", "0x1234")

    assert result.exit_code != 0
    assert "Invalid address" in result.output


def test_missing_config_file(tmp_path):
    result = CliRunner().invoke(cli, ["--config", str(tmp_path / "nope.yaml"), "networks"], obj={})

    assert result.exit_code != 0
    assert "Config file not found" in result.output
