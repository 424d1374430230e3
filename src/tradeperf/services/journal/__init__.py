"""Trade journal access: load trade snapshots from disk."""

from tradeperf.services.journal.loader import TradeLoadError, load_trades

__all__ = ["TradeLoadError", "load_trades"]
