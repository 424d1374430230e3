"""Reporting: terminal display of analyzer results."""

from tradeperf.services.reporting.formatters import display_drawdown_analysis, display_r_multiple_stats

__all__ = ["display_drawdown_analysis", "display_r_multiple_stats"]
