"""
Unit tests for tradeperf.cli.commands.report module.

Tests cover:
- Console and JSON output for a trade journal
- Starting capital and format from CLI options or system.yaml
- Error handling for missing/invalid journals and options
"""

import json

import pytest
from click.testing import CliRunner

from tradeperf.cli.main import main
from tradeperf.system import LoggerFactory


@pytest.fixture
def cli_runner():
    """Fixture providing Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep config discovery and logging handlers local to each test."""
    monkeypatch.delenv("TRADEPERF_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    LoggerFactory.reset()


@pytest.fixture
def journal_file(tmp_path):
    """Journal: +100, -50, -30, +200 with one 2R long and one -1R long."""
    path = tmp_path / "trades.csv"
    path.write_text(
        "trade_date,direction,entry_price,exit_price,stop_loss,profit_loss\n"
        "2025-01-01,long,100,120,90,100\n"
        "2025-01-02,long,100,90,90,-50\n"
        "2025-01-03,long,,,,-30\n"
        "2025-01-04,long,,,,200\n"
    )
    return path


def _invoke_json(cli_runner, *args):
    result = cli_runner.invoke(main, ["report", *args, "--format", "json", "--log-level", "ERROR"])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestReportJson:
    """Test JSON output."""

    def test_json_contains_both_analyses(self, cli_runner, journal_file):
        """Test JSON payload structure and key figures."""
        # Act
        payload = _invoke_json(cli_runner, str(journal_file), "--starting-capital", "1000")

        # Assert
        drawdown = payload["drawdown"]
        assert drawdown["max_drawdown"] == "80.00"
        assert drawdown["max_drawdown_percent"] == "7.27"
        assert drawdown["is_in_drawdown"] is False
        assert len(drawdown["drawdown_periods"]) == 1

        r_multiple = payload["r_multiple"]
        assert r_multiple["eligible_trades"] == 2
        assert r_multiple["recent_rs"] == ["2.00", "-1.00"]
        assert r_multiple["expectancy_r"] == "0.50"
        assert len(r_multiple["distribution"]) == 7

    def test_default_starting_capital(self, cli_runner, journal_file):
        """Test 10000 is used when no capital is configured."""
        payload = _invoke_json(cli_runner, str(journal_file))

        assert payload["drawdown"]["peak_equity"] == "10220.00"

    def test_settings_from_config_file(self, cli_runner, journal_file, tmp_path):
        """Test starting capital and format come from --config."""
        # Arrange
        config_file = tmp_path / "system.yaml"
        config_file.write_text(
            "analytics:\n  starting_capital: 2000\n  output_format: json\nlogging:\n  level: ERROR\n"
        )

        # Act
        result = cli_runner.invoke(main, ["report", str(journal_file), "--config", str(config_file)])

        # Assert
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["drawdown"]["peak_equity"] == "2220.00"

    def test_cli_capital_overrides_config(self, cli_runner, journal_file, tmp_path):
        """Test --starting-capital wins over system.yaml."""
        config_file = tmp_path / "system.yaml"
        config_file.write_text("analytics:\n  starting_capital: 2000\n")

        payload = _invoke_json(
            cli_runner, str(journal_file), "--config", str(config_file), "--starting-capital", "1000"
        )

        assert payload["drawdown"]["peak_equity"] == "1220.00"


class TestReportConsole:
    """Test console output."""

    def test_console_report(self, cli_runner, journal_file):
        """Test Rich report sections are printed."""
        # Act
        result = cli_runner.invoke(
            main, ["report", str(journal_file), "-c", "1000", "--log-level", "ERROR"]
        )

        # Assert
        assert result.exit_code == 0, result.output
        assert "Trade Performance Report" in result.output
        assert "Drawdown Analysis" in result.output
        assert "R-Multiple Statistics" in result.output
        assert "$1,000.00" in result.output


class TestReportErrors:
    """Test error handling."""

    def test_missing_file_is_usage_error(self, cli_runner, tmp_path):
        """Test click rejects a path that does not exist."""
        result = cli_runner.invoke(main, ["report", str(tmp_path / "absent.csv")])

        assert result.exit_code == 2

    def test_unsupported_file_fails(self, cli_runner, tmp_path):
        """Test a load error exits with status 1."""
        path = tmp_path / "trades.txt"
        path.write_text("whatever")

        result = cli_runner.invoke(main, ["report", str(path), "--log-level", "ERROR"])

        assert result.exit_code == 1
        assert "Report failed" in result.output

    def test_invalid_starting_capital_fails(self, cli_runner, journal_file):
        """Test non-numeric capital exits with status 1."""
        result = cli_runner.invoke(
            main, ["report", str(journal_file), "-c", "lots", "--log-level", "ERROR"]
        )

        assert result.exit_code == 1
        assert "Invalid starting capital" in result.output

    def test_non_finite_starting_capital_fails(self, cli_runner, journal_file):
        """Test infinite capital is rejected."""
        result = cli_runner.invoke(
            main, ["report", str(journal_file), "-c", "Infinity", "--log-level", "ERROR"]
        )

        assert result.exit_code == 1
        assert "finite" in result.output


def test_version_option(cli_runner):
    """Test --version prints a version string."""
    result = cli_runner.invoke(main, ["--version"])

    assert result.exit_code == 0
    assert "version" in result.output
