"""
tradeperf - Trading Performance Analytics

Equity curve, drawdown and R-multiple analytics over trade journal snapshots.
"""

from importlib.metadata import version

try:
    __version__ = version("tradeperf")
except Exception:
    __version__ = "0.0.0.dev"  # Fallback for development


__all__ = [
    "__version__",
]
