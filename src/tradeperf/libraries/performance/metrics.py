"""Performance calculation building blocks.

Pure functions the analyzers compose: equity curve reconstruction,
drawdown period segmentation, per-trade R-multiples and the R histogram.
All functions are stateless and never modify their inputs.

Usage:
    >>> from tradeperf.libraries.performance import metrics
    >>> curve = metrics.build_equity_curve(trades, Decimal("10000"))
    >>> scan = metrics.calculate_drawdown_periods(curve, Decimal("10000"), now)
    >>> len(scan.periods)
    2
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Sequence

from tradeperf.libraries.performance.models import (
    Direction,
    DrawdownPeriod,
    EquityPoint,
    RBucket,
    RValueRecord,
    TradeRecord,
)
from tradeperf.libraries.performance.rounding import (
    HUNDRED,
    ZERO,
    round_money,
    round_percent,
    round_r,
    round_whole_percent,
    safe_divide,
)

# (label, lower, upper) with lower < r <= upper; None is unbounded
R_BUCKET_RANGES: tuple[tuple[str, Decimal | None, Decimal | None], ...] = (
    ("< -2R", None, Decimal("-2")),
    ("-2R to -1R", Decimal("-2"), Decimal("-1")),
    ("-1R to 0", Decimal("-1"), Decimal("0")),
    ("0 to 1R", Decimal("0"), Decimal("1")),
    ("1R to 2R", Decimal("1"), Decimal("2")),
    ("2R to 3R", Decimal("2"), Decimal("3")),
    ("> 3R", Decimal("3"), None),
)


@dataclass(frozen=True)
class DrawdownScan:
    """Result of scanning an equity curve for drawdowns."""

    periods: list[DrawdownPeriod]
    max_drawdown: Decimal
    max_drawdown_percent: Decimal
    peak_equity: Decimal
    final_equity: Decimal


def calendar_days_between(start: datetime, end: datetime) -> int:
    """
    Count calendar days from start to end.

    Uses the calendar dates in each timestamp's own timezone, so 23:00 to
    01:00 the next day counts as one day.

    Example:
        >>> calendar_days_between(datetime(2025, 1, 1, 23), datetime(2025, 1, 2, 1))
        1
    """
    return (end.date() - start.date()).days


def drawdown_percent(amount: Decimal, peak: Decimal) -> Decimal:
    """
    Drawdown as a percentage of the peak that defines it.

    Returns zero when the peak is not positive.

    Example:
        >>> drawdown_percent(Decimal("80"), Decimal("1100"))
        Decimal('7.272727272727272727272727273')
    """
    if peak <= ZERO:
        return ZERO
    return amount / peak * HUNDRED


def build_equity_curve(trades: Sequence[TradeRecord], starting_capital: Decimal) -> list[EquityPoint]:
    """
    Reconstruct the equity curve from trade outcomes.

    Trades without profit_loss are skipped. The rest are sorted by trade_date
    (stable, so trades sharing a timestamp keep their input order) and
    accumulated onto starting_capital.

    Args:
        trades: Trade snapshot in any order
        starting_capital: Equity before the first trade

    Returns:
        Chronological list of EquityPoint, one per eligible trade

    Raises:
        TypeError: If trade dates cannot be compared (naive vs aware)

    Example:
        >>> curve = build_equity_curve(trades, Decimal("1000"))
        >>> [p.equity for p in curve]
        [Decimal('1100'), Decimal('1050'), Decimal('1020'), Decimal('1220')]
    """
    eligible = sorted(
        (t for t in trades if t.profit_loss is not None),
        key=lambda t: t.trade_date,
    )

    curve: list[EquityPoint] = []
    equity = starting_capital
    for index, trade in enumerate(eligible):
        assert trade.profit_loss is not None
        equity += trade.profit_loss
        curve.append(
            EquityPoint(
                index=index,
                trade_date=trade.trade_date,
                profit_loss=trade.profit_loss,
                equity=equity,
            )
        )

    return curve


def calculate_drawdown_periods(
    curve: Sequence[EquityPoint],
    starting_capital: Decimal,
    now: datetime,
) -> DrawdownScan:
    """
    Segment an equity curve into drawdown periods.

    A period opens on the first point below the running peak and closes on
    the first point strictly above it. Within an open period the depth only
    grows; the trough is the earliest point that reached the final depth.
    Points equal to the peak neither open nor close a period.

    Args:
        curve: Output of build_equity_curve
        starting_capital: Initial peak
        now: Clock used for the duration of a still-open period

    Returns:
        DrawdownScan with periods in chronological order and the global
        max drawdown (amount, and its percentage at that point)

    Example:
        >>> scan = calculate_drawdown_periods(curve, Decimal("1000"), now)
        >>> scan.periods[0].depth
        Decimal('80.00')
    """
    periods: list[DrawdownPeriod] = []
    peak = starting_capital
    equity = starting_capital
    max_drawdown = ZERO
    max_drawdown_pct = ZERO

    # Open period state, as curve indices into `curve`
    start_idx: int | None = None
    trough_idx: int | None = None
    depth = ZERO
    depth_pct = ZERO

    for point in curve:
        equity = point.equity

        if equity > peak:
            if start_idx is not None and trough_idx is not None:
                start = curve[start_idx]
                trough = curve[trough_idx]
                periods.append(
                    DrawdownPeriod(
                        start_date=start.trade_date,
                        end_date=point.trade_date,
                        depth=round_money(depth),
                        depth_percent=round_percent(depth_pct),
                        duration_days=calendar_days_between(start.trade_date, point.trade_date),
                        recovered=True,
                        recovery_days=calendar_days_between(trough.trade_date, point.trade_date),
                    )
                )
                start_idx = None
                trough_idx = None
            peak = equity

        elif equity < peak:
            amount = peak - equity
            pct = drawdown_percent(amount, peak)

            if start_idx is None:
                start_idx = point.index
                trough_idx = point.index
                depth = amount
                depth_pct = pct
            elif amount > depth:
                trough_idx = point.index
                depth = amount
                depth_pct = pct

            if amount > max_drawdown:
                max_drawdown = amount
                max_drawdown_pct = pct

    if start_idx is not None:
        start = curve[start_idx]
        periods.append(
            DrawdownPeriod(
                start_date=start.trade_date,
                end_date=None,
                depth=round_money(depth),
                depth_percent=round_percent(depth_pct),
                duration_days=calendar_days_between(start.trade_date, now),
                recovered=False,
                recovery_days=None,
            )
        )

    return DrawdownScan(
        periods=periods,
        max_drawdown=max_drawdown,
        max_drawdown_percent=max_drawdown_pct,
        peak_equity=peak,
        final_equity=equity,
    )


def calculate_r_multiple(trade: TradeRecord) -> Decimal | None:
    """
    Realized R-multiple of a trade, rounded to 2 decimals.

    R = reward / initial risk, where risk is the distance from entry to stop.

    Returns:
        R value, or None if entry, stop or exit is missing or risk is zero

    Example:
        >>> calculate_r_multiple(long_trade)  # entry 100, stop 90, exit 120
        Decimal('2.00')
    """
    if trade.entry_price is None or trade.stop_loss is None or trade.exit_price is None:
        return None

    risk = abs(trade.entry_price - trade.stop_loss)
    if risk == ZERO:
        return None

    if trade.direction == Direction.LONG:
        reward = trade.exit_price - trade.entry_price
    else:
        reward = trade.entry_price - trade.exit_price

    return round_r(reward / risk)


def collect_r_values(trades: Sequence[TradeRecord]) -> list[RValueRecord]:
    """
    R-multiples of all eligible trades, in input order.

    Example:
        >>> [r.r_multiple for r in collect_r_values(trades)]
        [Decimal('2.00'), Decimal('-1.00')]
    """
    records: list[RValueRecord] = []
    for index, trade in enumerate(trades):
        r = calculate_r_multiple(trade)
        if r is None:
            continue
        records.append(
            RValueRecord(
                trade_index=index,
                trade_date=trade.trade_date,
                direction=trade.direction,
                r_multiple=r,
            )
        )
    return records


def _in_bucket(r: Decimal, lower: Decimal | None, upper: Decimal | None) -> bool:
    if lower is not None and not r > lower:
        return False
    if upper is not None and not r <= upper:
        return False
    return True


def calculate_r_distribution(r_values: Sequence[Decimal]) -> list[RBucket]:
    """
    Bucket R values into the fixed seven-range histogram.

    Each value lands in exactly one bucket (lower < r <= upper), so a value
    on a boundary belongs to the lower bucket.

    Returns:
        Seven RBucket rows, or an empty list when there are no values

    Example:
        >>> [b.count for b in calculate_r_distribution([Decimal("2.00")])]
        [0, 0, 0, 0, 1, 0, 0]
    """
    if not r_values:
        return []

    total = Decimal(len(r_values))
    buckets: list[RBucket] = []
    for label, lower, upper in R_BUCKET_RANGES:
        count = sum(1 for r in r_values if _in_bucket(r, lower, upper))
        buckets.append(
            RBucket(
                label=label,
                lower=lower,
                upper=upper,
                count=count,
                percentage=round_whole_percent(Decimal(count) / total * HUNDRED),
            )
        )
    return buckets


def calculate_r_expectancy(r_values: Sequence[Decimal]) -> Decimal:
    """
    Expected R per trade.

    Expectancy = WinRate × AvgWin - (1 - WinRate) × AvgLoss

    A zero R counts as neither win nor loss but still dilutes the win rate.

    Example:
        >>> calculate_r_expectancy([Decimal("2"), Decimal("-1")])
        Decimal('0.5')
    """
    if not r_values:
        return ZERO

    wins = [r for r in r_values if r > ZERO]
    losses = [r for r in r_values if r < ZERO]

    win_rate = Decimal(len(wins)) / Decimal(len(r_values))
    avg_win = safe_divide(sum(wins, ZERO), Decimal(len(wins)))
    avg_loss = safe_divide(abs(sum(losses, ZERO)), Decimal(len(losses)))

    return win_rate * avg_win - (Decimal("1") - win_rate) * avg_loss
