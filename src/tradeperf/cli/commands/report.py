"""Performance report command."""

import json
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Literal, Optional, cast

import click
from rich.console import Console

from tradeperf.libraries.performance import analyze_drawdown, analyze_r_multiples
from tradeperf.services.journal import load_trades
from tradeperf.services.reporting import display_drawdown_analysis, display_r_multiple_stats
from tradeperf.system import LoggerFactory
from tradeperf.system.config import reload_system_config

console = Console()


def _parse_capital(value: str) -> Decimal:
    try:
        capital = Decimal(value)
    except InvalidOperation as e:
        raise ValueError(f"Invalid starting capital: {value!r}") from e
    if not capital.is_finite():
        raise ValueError(f"Starting capital must be finite, got {value!r}")
    return capital


@click.command("report")
@click.argument("trades_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--starting-capital",
    "-c",
    type=str,
    help="Equity before the first trade (default from system.yaml, else 10000)",
)
@click.option(
    "--format",
    "-o",
    "output_format",
    type=click.Choice(["console", "json"], case_sensitive=False),
    help="Output format (default from system.yaml, else console)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to system configuration file (YAML)",
)
@click.option(
    "--log-level",
    "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Set logging level (DEBUG shows analyzer details)",
)
def report_command(
    trades_file: Path,
    starting_capital: Optional[str],
    output_format: Optional[str],
    config_path: Optional[Path],
    log_level: Optional[str],
):
    """
    Analyze a trade journal snapshot.

    Reports drawdowns of the reconstructed equity curve and the R-multiple
    distribution of trades with entry, stop and exit prices. CLI options
    override system.yaml values without modifying files.

    \b
    Examples:
        # Console report with default starting capital
        tradeperf report trades.csv

        # Custom starting capital, machine-readable output
        tradeperf report trades.json -c 25000 --format json
    """
    try:
        system_config = reload_system_config(config_path)

        if log_level:
            # Click already validated the choice
            level = cast(Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], log_level.upper())
            system_config.logging.level = level
        LoggerFactory.configure(system_config.logging.to_logger_config())

        capital = _parse_capital(starting_capital or system_config.analytics.starting_capital)
        fmt = (output_format or system_config.analytics.output_format).lower()
        if fmt not in ("console", "json"):
            raise ValueError(f"Unsupported output format: {fmt!r}")

        trades = load_trades(trades_file)
        drawdown = analyze_drawdown(trades, capital)
        r_stats = analyze_r_multiples(trades)

        if fmt == "json":
            payload = {
                "drawdown": drawdown.model_dump(mode="json"),
                "r_multiple": r_stats.model_dump(mode="json"),
            }
            click.echo(json.dumps(payload, indent=2))
            return

        console.rule("[bold blue]Trade Performance Report[/bold blue]")
        console.print(f"  Journal: [yellow]{trades_file}[/yellow]")
        console.print(f"  Trades: [yellow]{len(trades)}[/yellow]")
        console.print(f"  Starting Capital: [yellow]${float(capital):,.2f}[/yellow]")

        display_drawdown_analysis(drawdown, console=console)
        display_r_multiple_stats(r_stats, console=console)
        console.rule()

    except Exception as e:
        console.print(f"[bold red]✗ Report failed:[/bold red] {e}")
        sys.exit(1)
