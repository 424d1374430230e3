"""Rich console formatters for trade performance reports.

Terminal display of drawdown and R-multiple statistics with tables,
colors, and formatting using the Rich library.
"""

from decimal import Decimal

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tradeperf.libraries.performance.models import DrawdownAnalysis, DrawdownPeriod, RBucket, RMultipleStats


def _format_pct(value: Decimal, precision: int = 2) -> str:
    """Format percentage."""
    return f"{float(value):.{precision}f}%"


def _format_currency(value: Decimal, precision: int = 2) -> str:
    """Format currency value."""
    return f"${float(value):,.{precision}f}"


def _format_r(value: Decimal) -> str:
    """Format R-multiple with sign."""
    return f"{float(value):+.2f}R"


def _get_color(value: Decimal) -> str:
    """Get color based on positive/negative value."""
    if value > 0:
        return "green"
    elif value < 0:
        return "red"
    return "white"


def _create_drawdown_summary_table(analysis: DrawdownAnalysis) -> Table:
    """Create drawdown summary table."""
    table = Table(title="📉 Drawdown Analysis", show_header=False, box=None, padding=(0, 2))

    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Peak Equity", _format_currency(analysis.peak_equity))
    table.add_row("Current Equity", _format_currency(analysis.current_equity))
    table.add_row("", "")  # Spacer

    if analysis.is_in_drawdown:
        table.add_row(
            "Current Drawdown",
            f"[red]{_format_currency(analysis.current_drawdown)} "
            f"({_format_pct(analysis.current_drawdown_percent)})[/red]",
        )
    else:
        table.add_row("Current Drawdown", "[green]At peak[/green]")

    table.add_row(
        "Max Drawdown",
        f"[red]{_format_currency(analysis.max_drawdown)} ({_format_pct(analysis.max_drawdown_percent)})[/red]",
    )
    table.add_row("Drawdown Periods", str(analysis.total_periods))
    table.add_row("Avg Duration", f"{float(analysis.avg_drawdown_duration):.1f} days")
    table.add_row("Avg Recovery", f"{float(analysis.avg_recovery_time):.1f} days")
    table.add_row("Longest Drawdown", f"{analysis.longest_drawdown} days")

    return table


def _create_drawdown_periods_table(periods: list[DrawdownPeriod]) -> Table | None:
    """Create table of recent drawdown periods, newest first."""
    if not periods:
        return None

    table = Table(title=f"🕑 Last {len(periods)} Drawdowns", box=None, padding=(0, 1))

    table.add_column("Start", style="cyan")
    table.add_column("End", style="cyan")
    table.add_column("Depth", justify="right", style="red")
    table.add_column("Depth %", justify="right", style="red")
    table.add_column("Duration", justify="right")
    table.add_column("Recovery", justify="right")
    table.add_column("Status", justify="center")

    for period in reversed(periods):
        status = "✅" if period.recovered else "🔴"
        end_str = period.end_date.strftime("%Y-%m-%d") if period.end_date else "—"
        recovery_str = f"{period.recovery_days} days" if period.recovery_days is not None else "—"

        table.add_row(
            period.start_date.strftime("%Y-%m-%d"),
            end_str,
            _format_currency(period.depth),
            _format_pct(period.depth_percent),
            f"{period.duration_days} days",
            recovery_str,
            status,
        )

    return table


def _create_r_summary_table(stats: RMultipleStats) -> Table:
    """Create R-multiple summary table."""
    table = Table(title="🎯 R-Multiple Statistics", show_header=False, box=None, padding=(0, 2))

    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Eligible Trades", f"{stats.eligible_trades:,}")

    win_rate_color = "green" if stats.win_rate > Decimal("50") else "yellow" if stats.win_rate > Decimal("40") else "red"
    table.add_row("Win Rate", f"[{win_rate_color}]{_format_pct(stats.win_rate)}[/{win_rate_color}]")

    expectancy_color = _get_color(stats.expectancy_r)
    table.add_row("Expectancy", f"[{expectancy_color}]{_format_r(stats.expectancy_r)}[/{expectancy_color}]")

    avg_color = _get_color(stats.avg_r)
    table.add_row("Average R", f"[{avg_color}]{_format_r(stats.avg_r)}[/{avg_color}]")
    table.add_row("", "")  # Spacer
    table.add_row("Best Trade", f"[green]{_format_r(stats.max_r)}[/green]")
    table.add_row("Worst Trade", f"[red]{_format_r(stats.min_r)}[/red]")
    table.add_row("Total R Won", f"[green]{_format_r(stats.total_r_won)}[/green]")
    table.add_row("Total R Lost", f"[red]{float(stats.total_r_lost):.2f}R[/red]")

    return table


def _create_distribution_table(buckets: list[RBucket]) -> Table | None:
    """Create R distribution histogram table."""
    if not buckets:
        return None

    table = Table(title="📊 R Distribution", box=None, padding=(0, 1))

    table.add_column("Range", style="cyan")
    table.add_column("Trades", justify="right")
    table.add_column("Share", justify="right")
    table.add_column("", justify="left")

    for bucket in buckets:
        negative = bucket.upper is not None and bucket.upper <= 0
        bar_color = "red" if negative else "green"
        bar = "█" * (bucket.percentage // 2)
        table.add_row(
            bucket.label,
            str(bucket.count),
            f"{bucket.percentage}%",
            f"[{bar_color}]{bar}[/{bar_color}]",
        )

    return table


def display_drawdown_analysis(analysis: DrawdownAnalysis, console: Console | None = None) -> None:
    """
    Display drawdown analysis in Rich-formatted console output.

    Args:
        analysis: Result of analyze_drawdown
        console: Rich Console instance (creates new if None)
    """
    if console is None:
        console = Console()

    console.print()
    console.print(_create_drawdown_summary_table(analysis))
    console.print()

    table = _create_drawdown_periods_table(analysis.drawdown_periods)
    if table:
        console.print(table)
        console.print()


def display_r_multiple_stats(stats: RMultipleStats, console: Console | None = None) -> None:
    """
    Display R-multiple statistics in Rich-formatted console output.

    Args:
        stats: Result of analyze_r_multiples
        console: Rich Console instance (creates new if None)
    """
    if console is None:
        console = Console()

    if stats.eligible_trades == 0:
        console.print(
            Panel(
                "No trades with entry, stop and exit prices",
                title="🎯 R-Multiple Statistics",
                border_style="yellow",
            )
        )
        console.print()
        return

    console.print(_create_r_summary_table(stats))
    console.print()

    table = _create_distribution_table(stats.distribution)
    if table:
        console.print(table)
        console.print()

    recent = Text()
    for r in stats.recent_rs:
        recent.append(f"{_format_r(r)} ", style=_get_color(r))
    console.print(Panel(recent, title=f"Recent {len(stats.recent_rs)} R", border_style="cyan"))
    console.print()
