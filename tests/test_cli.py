"""Tests for the click command-line interface."""

import pytest
from click.testing import CliRunner

import hedgecalc.__main__ as cli_module
from hedgecalc.__main__ import cli
from hedgecalc.snapshot import from_json, to_json
from hedgecalc.state import recompute


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    monkeypatch.setattr(cli_module, "setup_logging", lambda: None)


@pytest.fixture
def state_file(tmp_path, base_state):
    path = tmp_path / "state.json"
    path.write_text(to_json(base_state), encoding="utf-8")
    return path


@pytest.fixture
def runner():
    return CliRunner()


class TestProjectCommand:
    def test_prints_table_and_totals(self, runner, state_file):
        result = runner.invoke(cli, ["project", "--state", str(state_file)])
        assert result.exit_code == 0, result.output
        assert "January 2025" in result.output
        assert "December 2025" in result.output
        assert "Total P&L" in result.output

    def test_writes_output_snapshot(self, runner, state_file, tmp_path):
        out = tmp_path / "out.json"
        result = runner.invoke(cli, ["project", "--state", str(state_file), "--output", str(out)])
        assert result.exit_code == 0, result.output
        assert len(from_json(out.read_text(encoding="utf-8")).results) == 12

    def test_invalid_snapshot(self, runner, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text('{"params": {}}', encoding="utf-8")
        result = runner.invoke(cli, ["project", "--state", str(bad)])
        assert result.exit_code != 0
        assert "Invalid snapshot" in result.output


class TestOtherCommands:
    def test_scenarios_lists_catalog(self, runner):
        result = runner.invoke(cli, ["scenarios"])
        assert result.exit_code == 0
        assert "Market Crash" in result.output
        assert "real basis" in result.output

    def test_payoff(self, runner, state_file):
        result = runner.invoke(cli, ["payoff", "--state", str(state_file)])
        assert result.exit_code == 0
        # header plus 101 points
        assert len(result.output.strip().splitlines()) == 102

    def test_stress(self, runner, state_file, tmp_path):
        out = tmp_path / "stressed.json"
        result = runner.invoke(cli, ["stress", "crash", "--state", str(state_file), "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert "Market Crash" in result.output
        assert from_json(out.read_text(encoding="utf-8")).active_scenario == "crash"

    def test_stress_unknown_key(self, runner, state_file):
        result = runner.invoke(cli, ["stress", "meteor", "--state", str(state_file)])
        assert result.exit_code == 2

    def test_summary_requires_results(self, runner, state_file):
        result = runner.invoke(cli, ["summary", "--state", str(state_file)])
        assert result.exit_code == 0
        assert "No results" in result.output

    def test_summary(self, runner, tmp_path, base_state):
        path = tmp_path / "computed.json"
        path.write_text(to_json(recompute(base_state)), encoding="utf-8")
        result = runner.invoke(cli, ["summary", "--state", str(path)])
        assert result.exit_code == 0
        assert "2025" in result.output
        assert "Cost Reduction" in result.output
