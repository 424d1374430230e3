"""Performance analytics library for trade journals.

This library turns a trade snapshot into risk and edge statistics:

1. **Models** (`models.py`): Pydantic data structures
   - TradeRecord: Journal entry consumed by the analyzers
   - EquityPoint: Point on the reconstructed equity curve
   - DrawdownPeriod / DrawdownAnalysis: Drawdown history and summary
   - RValueRecord / RBucket / RMultipleStats: R-multiple distribution

2. **Metrics** (`metrics.py`): Pure building blocks
   - Equity curve reconstruction
   - Drawdown period segmentation
   - Per-trade R-multiples, histogram, expectancy

3. **Analyzers** (`analyzers.py`): Snapshot entry points
   - analyze_drawdown
   - analyze_r_multiples

4. **Rounding** (`rounding.py`): Precision contract for published figures

Usage:
    >>> from tradeperf.libraries.performance import analyze_drawdown, analyze_r_multiples
    >>> analysis = analyze_drawdown(trades, starting_capital=Decimal("10000"))
    >>> print(f"Max DD: {analysis.max_drawdown_percent}%")
    >>> stats = analyze_r_multiples(trades)
    >>> print(f"Expectancy: {stats.expectancy_r}R")

Design Principles:
    - Decimal precision for financial calculations
    - Recompute from the full snapshot on every call (no incremental state)
    - Incomplete trades are excluded, never raised on
    - Explicit zero defaults for empty inputs and zero denominators
"""

from tradeperf.libraries.performance.analyzers import (
    DEFAULT_STARTING_CAPITAL,
    MAX_REPORTED_PERIODS,
    RECENT_R_LIMIT,
    analyze_drawdown,
    analyze_r_multiples,
)
from tradeperf.libraries.performance.metrics import (
    R_BUCKET_RANGES,
    build_equity_curve,
    calculate_drawdown_periods,
    calculate_r_distribution,
    calculate_r_expectancy,
    calculate_r_multiple,
    collect_r_values,
)
from tradeperf.libraries.performance.models import (
    Direction,
    DrawdownAnalysis,
    DrawdownPeriod,
    EquityPoint,
    RBucket,
    RMultipleStats,
    RValueRecord,
    TradeRecord,
)

__all__ = [
    # Models
    "Direction",
    "TradeRecord",
    "EquityPoint",
    "DrawdownPeriod",
    "DrawdownAnalysis",
    "RValueRecord",
    "RBucket",
    "RMultipleStats",
    # Building blocks
    "R_BUCKET_RANGES",
    "build_equity_curve",
    "calculate_drawdown_periods",
    "calculate_r_multiple",
    "collect_r_values",
    "calculate_r_distribution",
    "calculate_r_expectancy",
    # Analyzers
    "DEFAULT_STARTING_CAPITAL",
    "MAX_REPORTED_PERIODS",
    "RECENT_R_LIMIT",
    "analyze_drawdown",
    "analyze_r_multiples",
]
