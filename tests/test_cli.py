import pytest
from typer.testing import CliRunner

from drinkchain import cli
from drinkchain.strategies.store import StrategyStore

runner = CliRunner()


@pytest.fixture
def store(monkeypatch, memory_storage):
    monkeypatch.setattr(cli, "_store", lambda: StrategyStore(memory_storage))
    return memory_storage


def test_strategies_lifecycle(store):
    result = runner.invoke(cli.app, ["strategies", "list"])
    assert "No saved strategies." in result.output

    result = runner.invoke(cli.app, ["strategies", "create", "夏季", "甜度", "保质期"])
    assert result.exit_code == 0
    assert "Saved strategy 夏季" in result.output

    listed = runner.invoke(cli.app, ["strategies", "list"]).output
    assert "夏季: 甜度, 保质期" in listed
    strategy_id = listed.split("]")[0].lstrip("[")

    result = runner.invoke(cli.app, ["strategies", "delete", strategy_id])
    assert result.exit_code == 0
    assert runner.invoke(cli.app, ["strategies", "list"]).output.strip() == "No saved strategies."


def test_create_rejects_too_many_factors(store):
    result = runner.invoke(cli.app, ["strategies", "create", "x", "a", "b", "c", "d"])
    assert result.exit_code == 1
    assert "Invalid strategy" in result.output


def test_delete_unknown(store):
    result = runner.invoke(cli.app, ["strategies", "delete", "nope"])
    assert result.exit_code == 1


def test_doctor_passes_with_key_and_data_dir(monkeypatch, tmp_path):
    monkeypatch.setattr(cli.settings, "DATA_DIR", tmp_path)
    result = runner.invoke(cli.app, ["doctor"])
    assert result.exit_code == 0
    assert "all good" in result.output
