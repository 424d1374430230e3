"""CLI commands."""

from tradeperf.cli.commands.report import report_command

__all__ = ["report_command"]
