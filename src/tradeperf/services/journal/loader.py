"""Trade journal snapshot loader.

Reads a trade snapshot from disk into TradeRecord models.

Supported formats (by file suffix):
  - .csv: header row with columns
        trade_date,direction,entry_price,exit_price,stop_loss,profit_loss
    plus optional trade_id,symbol. Blank cells are read as missing values.
  - .json: a list of trade objects, or {"trades": [...]} with the same keys.

Missing prices are not an error here; the analyzers decide which trades are
eligible for each statistic. Rows that cannot be turned into a TradeRecord
(bad date, unknown direction, non-numeric price) fail the whole load.

Example:
    >>> trades = load_trades("journal/trades.csv")
    >>> analysis = analyze_drawdown(trades)
"""

import csv
import json
from decimal import Decimal
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from tradeperf.libraries.performance.models import TradeRecord
from tradeperf.system import LoggerFactory

logger = LoggerFactory.get_logger()

REQUIRED_COLUMNS = ("trade_date", "direction")
SUPPORTED_SUFFIXES = (".csv", ".json")


class TradeLoadError(ValueError):
    """Raised when a trade snapshot file cannot be read."""


def load_trades(path: Path | str) -> list[TradeRecord]:
    """
    Load a trade snapshot from a CSV or JSON file.

    Args:
        path: Path to the snapshot file

    Returns:
        Trades in file order

    Raises:
        TradeLoadError: If the file is missing, has an unsupported suffix,
            or contains a row that is not a valid trade
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix not in SUPPORTED_SUFFIXES:
        raise TradeLoadError(f"Unsupported trade file format '{path.suffix}' for {path} (expected .csv or .json)")
    if not path.exists():
        raise TradeLoadError(f"Trade file not found: {path}")

    rows = _read_csv_rows(path) if suffix == ".csv" else _read_json_rows(path)

    trades = []
    for row_number, row in enumerate(rows, start=1):
        trades.append(_to_trade_record(row, path, row_number))

    logger.info("journal_loader.loaded", path=str(path), trades=len(trades))
    return trades


def _read_csv_rows(path: Path) -> list[dict[str, Any]]:
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        fieldnames = [name.strip() for name in reader.fieldnames or []]
        missing = [column for column in REQUIRED_COLUMNS if column not in fieldnames]
        if missing:
            raise TradeLoadError(f"Trade file {path} is missing required columns: {', '.join(missing)}")

        rows = []
        for raw in reader:
            rows.append({(key or "").strip(): _blank_to_none(value) for key, value in raw.items()})
        return rows


def _read_json_rows(path: Path) -> list[dict[str, Any]]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f, parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise TradeLoadError(f"Invalid JSON in trade file {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("trades")
    if not isinstance(data, list):
        raise TradeLoadError(f"Trade file {path} must contain a list of trades or a 'trades' list")

    for row_number, row in enumerate(data, start=1):
        if not isinstance(row, dict):
            raise TradeLoadError(f"Row {row_number} in {path} is not an object")
    return data


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _to_trade_record(row: dict[str, Any], path: Path, row_number: int) -> TradeRecord:
    fields = {key: value for key, value in row.items() if key in TradeRecord.model_fields and value is not None}
    direction = fields.get("direction")
    if isinstance(direction, str):
        fields["direction"] = direction.strip().lower()
    for key in ("trade_id", "symbol"):
        if key in fields:
            fields[key] = str(fields[key])

    try:
        return TradeRecord(**fields)
    except ValidationError as e:
        raise TradeLoadError(f"Invalid trade at row {row_number} in {path}: {e}") from e
