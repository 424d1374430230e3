"""Precision contract for performance figures.

Every derived figure the analyzers publish passes through one of these
helpers, so the rounding rules live in a single place:

- Money (equity, drawdown amounts): 2 decimals
- Percentages (drawdown %, win rate): 2 decimals
- Average durations (days): 1 decimal
- R-multiples: 2 decimals, applied per trade before aggregation
- Histogram shares: whole percent

All rounding is ROUND_HALF_UP on Decimal values, so results are reproducible
for a fixed input regardless of platform float behaviour.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext

MONEY_PLACES = 2
PERCENT_PLACES = 2
DURATION_PLACES = 1
R_PLACES = 2

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """
    Convert a numeric input to Decimal.

    Floats go through str() so that 0.1 becomes Decimal("0.1") rather than
    its binary expansion.

    Example:
        >>> to_decimal(0.1)
        Decimal('0.1')
    """
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize(value: Decimal, places: int) -> Decimal:
    """
    Round value to a fixed number of decimal places (half up).

    Args:
        value: Value to round
        places: Number of decimal places (0 for whole numbers)

    Returns:
        Rounded Decimal

    Example:
        >>> quantize(Decimal("7.2727"), 2)
        Decimal('7.27')
        >>> quantize(Decimal("-1.005"), 2)
        Decimal('-1.01')
    """
    with localcontext() as ctx:
        # Wide values need more digits than the default 28-digit context
        ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
        return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def round_money(value: Decimal) -> Decimal:
    """Round a currency amount."""
    return quantize(value, MONEY_PLACES)


def round_percent(value: Decimal) -> Decimal:
    """Round a percentage."""
    return quantize(value, PERCENT_PLACES)


def round_duration(value: Decimal) -> Decimal:
    """Round an average duration in days."""
    return quantize(value, DURATION_PLACES)


def round_r(value: Decimal) -> Decimal:
    """Round an R-multiple."""
    return quantize(value, R_PLACES)


def round_whole_percent(value: Decimal) -> int:
    """Round a percentage to the nearest integer."""
    return int(quantize(value, 0))


def safe_divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    """
    Divide, returning zero when the denominator is zero.

    Example:
        >>> safe_divide(Decimal("5"), Decimal("0"))
        Decimal('0')
    """
    if denominator == ZERO:
        return ZERO
    return numerator / denominator
