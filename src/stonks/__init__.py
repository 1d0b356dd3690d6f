"""Ledger-derived portfolio state, cached market data, valuation and rebalancing."""

__version__ = "0.1.0"
