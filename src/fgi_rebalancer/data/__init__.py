"""Sample retrieval and parsing."""

from fgi_rebalancer.data.feed import (
    build_data_url,
    fetch_historical_data,
    load_samples,
    parse_samples,
    parse_timestamp,
)

__all__ = [
    "build_data_url",
    "fetch_historical_data",
    "load_samples",
    "parse_samples",
    "parse_timestamp",
]
