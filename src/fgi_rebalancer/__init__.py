"""Sentiment-driven two-asset rebalancing backtests."""
