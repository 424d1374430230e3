"""Trade snapshot analyzers.

Two independent, stateless entry points over the same trade snapshot:

- analyze_drawdown: equity curve, drawdown periods and aggregate risk metrics
- analyze_r_multiples: per-trade R-multiples, distribution and expectancy

Both are recomputed from scratch on every call. Running either twice on the
same input yields equal results, and neither keeps state between calls.

Usage:
    >>> from tradeperf.libraries.performance import analyze_drawdown, analyze_r_multiples
    >>> drawdown = analyze_drawdown(trades, starting_capital=Decimal("10000"))
    >>> drawdown.max_drawdown_percent
    Decimal('7.27')
    >>> r_stats = analyze_r_multiples(trades)
    >>> r_stats.expectancy_r
    Decimal('0.45')
"""

from datetime import datetime
from decimal import Decimal
from typing import Sequence

from tradeperf.libraries.performance.metrics import (
    build_equity_curve,
    calculate_drawdown_periods,
    calculate_r_distribution,
    calculate_r_expectancy,
    collect_r_values,
)
from tradeperf.libraries.performance.models import DrawdownAnalysis, RMultipleStats, TradeRecord
from tradeperf.libraries.performance.rounding import (
    HUNDRED,
    ZERO,
    round_duration,
    round_money,
    round_percent,
    round_r,
    safe_divide,
    to_decimal,
)
from tradeperf.system import LoggerFactory

logger = LoggerFactory.get_logger()

DEFAULT_STARTING_CAPITAL = Decimal("10000")
MAX_REPORTED_PERIODS = 10
RECENT_R_LIMIT = 20


def analyze_drawdown(
    trades: Sequence[TradeRecord],
    starting_capital: Decimal | int | float | str = DEFAULT_STARTING_CAPITAL,
    *,
    now: datetime | None = None,
) -> DrawdownAnalysis:
    """
    Reconstruct the equity curve and summarize its drawdowns.

    Trades without profit_loss are ignored; the rest are ordered by
    trade_date internally, so the input order does not matter.

    Args:
        trades: Trade snapshot in any order
        starting_capital: Equity before the first trade
        now: Clock for the duration of a still-open drawdown. Defaults to
            the current time in the timezone of the trade dates.

    Returns:
        DrawdownAnalysis (money/percent to 2 decimals, average durations
        to 1 decimal, the 10 most recent periods)

    Raises:
        ValueError: If starting_capital is not finite
        TypeError: If trade dates cannot be ordered

    Example:
        >>> analysis = analyze_drawdown(trades, Decimal("1000"))
        >>> analysis.max_drawdown
        Decimal('80.00')
        >>> analysis.drawdown_periods[0].recovered
        True
    """
    capital = to_decimal(starting_capital)
    if not capital.is_finite():
        raise ValueError(f"starting_capital must be finite, got {starting_capital!r}")

    curve = build_equity_curve(trades, capital)

    if not curve:
        logger.debug("drawdown_analyzer.no_eligible_trades", trades=len(trades))
        return DrawdownAnalysis(
            peak_equity=round_money(capital),
            current_equity=round_money(capital),
        )

    if now is None:
        now = datetime.now(tz=curve[0].trade_date.tzinfo)

    scan = calculate_drawdown_periods(curve, capital, now)
    periods = scan.periods

    recovered = [p for p in periods if p.recovered]
    avg_duration = safe_divide(Decimal(sum(p.duration_days for p in periods)), Decimal(len(periods)))
    avg_recovery = safe_divide(
        Decimal(sum(p.recovery_days or 0 for p in recovered)),
        Decimal(len(recovered)),
    )
    longest = max((p.duration_days for p in periods), default=0)

    current_drawdown = scan.peak_equity - scan.final_equity
    current_drawdown_pct = (
        current_drawdown / scan.peak_equity * HUNDRED if scan.peak_equity > ZERO else ZERO
    )

    analysis = DrawdownAnalysis(
        current_drawdown=round_money(current_drawdown),
        current_drawdown_percent=round_percent(current_drawdown_pct),
        max_drawdown=round_money(scan.max_drawdown),
        max_drawdown_percent=round_percent(scan.max_drawdown_percent),
        avg_drawdown_duration=round_duration(avg_duration),
        avg_recovery_time=round_duration(avg_recovery),
        longest_drawdown=longest,
        drawdown_periods=periods[-MAX_REPORTED_PERIODS:],
        total_periods=len(periods),
        is_in_drawdown=current_drawdown > ZERO,
        peak_equity=round_money(scan.peak_equity),
        current_equity=round_money(scan.final_equity),
    )

    logger.debug(
        "drawdown_analyzer.completed",
        trades=len(trades),
        eligible=len(curve),
        periods=len(periods),
        max_drawdown=str(analysis.max_drawdown),
        in_drawdown=analysis.is_in_drawdown,
    )
    return analysis


def analyze_r_multiples(trades: Sequence[TradeRecord]) -> RMultipleStats:
    """
    Compute R-multiple statistics for a trade snapshot.

    Trades missing entry, stop or exit prices, or with zero risk, are
    excluded rather than treated as errors. Trades are not re-sorted:
    recent_rs lists the first 20 R values in input order.

    Args:
        trades: Trade snapshot

    Returns:
        RMultipleStats (R figures to 2 decimals, distribution over seven
        fixed ranges), or all-zero stats when no trade is eligible

    Example:
        >>> stats = analyze_r_multiples([long_trade])  # entry 100, stop 90, exit 120
        >>> stats.avg_r
        Decimal('2.00')
        >>> [b.label for b in stats.distribution if b.count]
        ['1R to 2R']
    """
    records = collect_r_values(trades)

    excluded = len(trades) - len(records)
    if excluded:
        logger.debug("r_multiple_analyzer.trades_excluded", excluded=excluded, total=len(trades))

    if not records:
        return RMultipleStats()

    r_values = [record.r_multiple for record in records]
    count = Decimal(len(r_values))

    wins = [r for r in r_values if r > ZERO]
    losses = [r for r in r_values if r < ZERO]

    stats = RMultipleStats(
        avg_r=round_r(sum(r_values, ZERO) / count),
        max_r=max(r_values),
        min_r=min(r_values),
        total_r_won=round_r(sum(wins, ZERO)),
        total_r_lost=round_r(abs(sum(losses, ZERO))),
        expectancy_r=round_r(calculate_r_expectancy(r_values)),
        win_rate=round_percent(Decimal(len(wins)) / count * HUNDRED),
        eligible_trades=len(r_values),
        distribution=calculate_r_distribution(r_values),
        recent_rs=r_values[:RECENT_R_LIMIT],
    )

    logger.debug(
        "r_multiple_analyzer.completed",
        trades=len(trades),
        eligible=stats.eligible_trades,
        avg_r=str(stats.avg_r),
        expectancy_r=str(stats.expectancy_r),
    )
    return stats
