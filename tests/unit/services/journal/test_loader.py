"""Unit tests for the trade journal loader."""

import json
from datetime import datetime
from decimal import Decimal

import pytest

from tradeperf.libraries.performance.models import Direction
from tradeperf.services.journal import TradeLoadError, load_trades


@pytest.fixture
def csv_journal(tmp_path):
    """CSV journal with one complete trade and one missing its stop."""
    path = tmp_path / "trades.csv"
    path.write_text(
        "trade_date,direction,entry_price,exit_price,stop_loss,profit_loss,trade_id,symbol\n"
        "2025-01-02,long,100,120,90,200,T1,AAPL\n"
        "2025-01-03,SHORT,50.5,48,,25,T2,MSFT\n"
    )
    return path


class TestLoadCsv:
    """Test CSV loading."""

    def test_loads_rows_in_file_order(self, csv_journal):
        """Test each row becomes a TradeRecord."""
        # Act
        trades = load_trades(csv_journal)

        # Assert
        assert len(trades) == 2
        first = trades[0]
        assert first.trade_date == datetime(2025, 1, 2)
        assert first.direction == Direction.LONG
        assert first.entry_price == Decimal("100")
        assert first.exit_price == Decimal("120")
        assert first.stop_loss == Decimal("90")
        assert first.profit_loss == Decimal("200")
        assert first.trade_id == "T1"
        assert first.symbol == "AAPL"

    def test_blank_cells_are_missing_values(self, csv_journal):
        """Test empty stop_loss is read as None."""
        trades = load_trades(csv_journal)

        assert trades[1].stop_loss is None
        assert trades[1].entry_price == Decimal("50.5")

    def test_direction_is_case_insensitive(self, csv_journal):
        """Test SHORT maps to Direction.SHORT."""
        assert load_trades(csv_journal)[1].direction == Direction.SHORT

    def test_optional_columns_may_be_absent(self, tmp_path):
        """Test a journal with only the required columns."""
        # Arrange
        path = tmp_path / "minimal.csv"
        path.write_text("trade_date,direction,profit_loss\n2025-02-01T10:30:00Z,long,-40\n")

        # Act
        trades = load_trades(path)

        # Assert
        assert trades[0].profit_loss == Decimal("-40")
        assert trades[0].entry_price is None
        assert trades[0].trade_date.tzinfo is not None

    def test_missing_required_column_raises(self, tmp_path):
        """Test a journal without a direction column is rejected."""
        path = tmp_path / "bad.csv"
        path.write_text("trade_date,profit_loss\n2025-01-02,10\n")

        with pytest.raises(TradeLoadError, match="direction"):
            load_trades(path)

    def test_invalid_row_names_row_number(self, tmp_path):
        """Test validation errors report the offending row."""
        # Arrange
        path = tmp_path / "bad_row.csv"
        path.write_text("trade_date,direction,profit_loss\n2025-01-02,long,10\nnot-a-date,long,5\n")

        # Act & Assert
        with pytest.raises(TradeLoadError, match="row 2") as exc_info:
            load_trades(path)
        assert exc_info.value.__cause__ is not None

    def test_unknown_direction_raises(self, tmp_path):
        """Test directions other than long/short are rejected."""
        path = tmp_path / "sideways.csv"
        path.write_text("trade_date,direction,profit_loss\n2025-01-02,sideways,10\n")

        with pytest.raises(TradeLoadError, match="row 1"):
            load_trades(path)


class TestLoadJson:
    """Test JSON loading."""

    def test_loads_list_of_trades(self, tmp_path):
        """Test a top-level list of objects."""
        # Arrange
        path = tmp_path / "trades.json"
        path.write_text(
            json.dumps(
                [
                    {"trade_date": "2025-01-02", "direction": "long", "profit_loss": 12.1, "trade_id": 7},
                    {"trade_date": "2025-01-03", "direction": "short", "entry_price": 10, "stop_loss": None},
                ]
            )
        )

        # Act
        trades = load_trades(path)

        # Assert
        assert len(trades) == 2
        assert trades[0].profit_loss == Decimal("12.1")
        assert trades[0].trade_id == "7"
        assert trades[1].entry_price == Decimal("10")
        assert trades[1].stop_loss is None

    def test_loads_wrapped_trades(self, tmp_path):
        """Test {"trades": [...]} is accepted."""
        path = tmp_path / "wrapped.json"
        path.write_text(json.dumps({"trades": [{"trade_date": "2025-01-02", "direction": "long"}]}))

        assert len(load_trades(path)) == 1

    def test_invalid_json_raises(self, tmp_path):
        """Test malformed JSON is reported as a load error."""
        path = tmp_path / "broken.json"
        path.write_text("[{")

        with pytest.raises(TradeLoadError, match="Invalid JSON"):
            load_trades(path)

    def test_non_list_payload_raises(self, tmp_path):
        """Test an object without a trades list is rejected."""
        path = tmp_path / "object.json"
        path.write_text(json.dumps({"rows": []}))

        with pytest.raises(TradeLoadError, match="list of trades"):
            load_trades(path)

    def test_non_object_row_raises(self, tmp_path):
        """Test list entries must be objects."""
        path = tmp_path / "scalars.json"
        path.write_text(json.dumps([1, 2]))

        with pytest.raises(TradeLoadError, match="Row 1"):
            load_trades(path)


class TestLoadErrors:
    """Test file-level errors."""

    def test_unsupported_suffix(self, tmp_path):
        """Test unknown file types are rejected."""
        path = tmp_path / "trades.txt"
        path.write_text("")

        with pytest.raises(TradeLoadError, match="Unsupported"):
            load_trades(path)

    def test_missing_file(self, tmp_path):
        """Test a missing file is a load error."""
        with pytest.raises(TradeLoadError, match="not found"):
            load_trades(tmp_path / "absent.csv")

    def test_load_error_is_value_error(self, tmp_path):
        """Test callers can catch ValueError."""
        with pytest.raises(ValueError):
            load_trades(tmp_path / "absent.json")
