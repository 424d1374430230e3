"""Performance analytics data models.

Pydantic models for the trade snapshot consumed by the analyzers and the
value objects they return. Every model is frozen: results are fresh
allocations on each call and are never mutated in place.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Direction(str, Enum):
    """Trade direction."""

    LONG = "long"
    SHORT = "short"


class TradeRecord(BaseModel):
    """
    Journal entry for a single trade, as supplied by the trade store.

    Price fields are optional because journals are often partially filled in.
    A trade without profit_loss has no equity impact; a trade without
    entry/stop/exit prices has no defined R-multiple.
    """

    trade_date: datetime
    direction: Direction
    entry_price: Decimal | None = None
    exit_price: Decimal | None = None
    stop_loss: Decimal | None = None
    profit_loss: Decimal | None = None  # Realized P&L in base currency
    trade_id: str | None = None
    symbol: str | None = None

    model_config = ConfigDict(frozen=True)


class EquityPoint(BaseModel):
    """
    Single point on the reconstructed equity curve.

    `index` is the position on the chronologically sorted curve.
    """

    index: int
    trade_date: datetime
    profit_loss: Decimal
    equity: Decimal

    model_config = ConfigDict(frozen=True)


class DrawdownPeriod(BaseModel):
    """
    Record of a drawdown period (first dip below peak to recovery).

    depth and depth_percent are the deepest excursion within the period,
    measured against the peak that opened it.
    """

    start_date: datetime
    end_date: datetime | None  # None while the period is still open
    depth: Decimal
    depth_percent: Decimal
    duration_days: int
    recovered: bool
    recovery_days: int | None  # Trough to recovery (None if not recovered)

    model_config = ConfigDict(frozen=True)


class DrawdownAnalysis(BaseModel):
    """
    Aggregate drawdown report for a trade snapshot.

    drawdown_periods holds only the most recent periods; averages and
    longest_drawdown are computed over all total_periods of them.
    """

    current_drawdown: Decimal = Decimal("0")
    current_drawdown_percent: Decimal = Decimal("0")
    max_drawdown: Decimal = Decimal("0")
    max_drawdown_percent: Decimal = Decimal("0")
    avg_drawdown_duration: Decimal = Decimal("0")  # Days
    avg_recovery_time: Decimal = Decimal("0")  # Days
    longest_drawdown: int = 0  # Days
    drawdown_periods: list[DrawdownPeriod] = Field(default_factory=list)
    total_periods: int = 0
    is_in_drawdown: bool = False
    peak_equity: Decimal
    current_equity: Decimal

    model_config = ConfigDict(frozen=True)


class RValueRecord(BaseModel):
    """Realized R-multiple of one eligible trade."""

    trade_index: int  # Position in the caller's input sequence
    trade_date: datetime
    direction: Direction
    r_multiple: Decimal

    model_config = ConfigDict(frozen=True)


class RBucket(BaseModel):
    """
    One histogram bucket over R values.

    Covers lower < r <= upper; a None bound is unbounded on that side.
    """

    label: str
    lower: Decimal | None
    upper: Decimal | None
    count: int
    percentage: int  # Share of eligible trades, whole percent

    model_config = ConfigDict(frozen=True)


class RMultipleStats(BaseModel):
    """
    R-multiple distribution statistics.

    recent_rs follows the caller's input order, not trade date order.
    """

    avg_r: Decimal = Decimal("0")
    max_r: Decimal = Decimal("0")
    min_r: Decimal = Decimal("0")
    total_r_won: Decimal = Decimal("0")
    total_r_lost: Decimal = Decimal("0")  # Absolute value
    expectancy_r: Decimal = Decimal("0")
    win_rate: Decimal = Decimal("0")  # Percentage (0-100)
    eligible_trades: int = 0
    distribution: list[RBucket] = Field(default_factory=list)
    recent_rs: list[Decimal] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
