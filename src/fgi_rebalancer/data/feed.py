"""Historical price and sentiment retrieval."""

from __future__ import annotations

import csv
import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

import requests

from fgi_rebalancer.simulator.models import Sample

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.surfsolana.com"
SENTIMENT_KEYS = ("fgi", "sentiment")

# epoch values above this are treated as milliseconds
_EPOCH_MS_CUTOFF = 1e11


def build_data_url(asset: str, timeframe: str, period: str = "1_year", base_url: str = DEFAULT_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/{asset}/{timeframe}/{period}.json"


def fetch_historical_data(
    asset: str,
    timeframe: str,
    period: str = "1_year",
    *,
    base_url: str = DEFAULT_BASE_URL,
    session: Optional[requests.Session] = None,
    timeout: float = 30.0,
    max_retries: int = 3,
) -> list[Sample]:
    """Download a JSON array of ``{timestamp, price, fgi}`` records.

    Rate limits (HTTP 429) and transport errors are retried with exponential
    backoff; the last error is re-raised once ``max_retries`` is exhausted.
    A session created here is closed before returning; an injected one is not.
    """
    url = build_data_url(asset, timeframe, period, base_url)
    logger.info("Fetching data from %s", url)

    if session is not None:
        payload = _get_json_array(session, url, timeout, max_retries)
    else:
        with requests.Session() as owned:
            payload = _get_json_array(owned, url, timeout, max_retries)

    samples = parse_samples(payload)
    logger.info("Fetched %d data points", len(samples))
    if samples:
        sentiments = [sample.sentiment for sample in samples]
        logger.info("Sentiment range in dataset: %s to %s", min(sentiments), max(sentiments))
    return samples


def _get_json_array(sess: requests.Session, url: str, timeout: float, max_retries: int) -> list[Any]:
    backoff = 1.0
    for attempt in range(max_retries):
        try:
            resp = sess.get(url, timeout=timeout)
            if resp.status_code == 429 and attempt < max_retries - 1:
                retry_after = resp.headers.get("Retry-After")
                sleep_s = float(retry_after) if retry_after is not None else backoff
                logger.warning("Rate limited (429). Sleeping %.2fs then retrying...", sleep_s)
                time.sleep(min(10.0, sleep_s))
                backoff = min(10.0, backoff * 2.0)
                continue
            resp.raise_for_status()
            payload = resp.json()
            if not isinstance(payload, list):
                raise ValueError(f"Unexpected response type: {type(payload).__name__}")
            return payload
        except (requests.RequestException, ValueError) as exc:
            if attempt == max_retries - 1:
                logger.error("Failed to fetch %s after %d attempts: %s", url, attempt + 1, exc)
                raise
            sleep_s = min(10.0, backoff)
            logger.warning(
                "Request failed (attempt %d/%d): %s. Sleeping %.2fs...", attempt + 1, max_retries, exc, sleep_s
            )
            time.sleep(sleep_s)
            backoff = min(10.0, backoff * 2.0)
    raise requests.RequestException(f"No attempts made for {url}")


def parse_samples(records: Iterable[Mapping[str, Any]]) -> list[Sample]:
    samples: list[Sample] = []
    for index, record in enumerate(records):
        try:
            samples.append(_parse_record(record))
        except (KeyError, TypeError, ValueError, OverflowError, OSError) as exc:
            # out-of-range epochs surface as OverflowError or OSError from fromtimestamp
            raise ValueError(f"Invalid sample record at index {index}: {exc}") from exc
    return samples


def load_samples(path: str | Path) -> list[Sample]:
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        payload = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(payload, list):
            raise ValueError("Sample file must contain a JSON array")
        return parse_samples(payload)
    if suffix == ".csv":
        with path.open("r", encoding="utf-8", newline="") as handle:
            return parse_samples(csv.DictReader(handle))
    raise ValueError(f"Unsupported sample file type: {path.suffix}")


def parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = value / 1000 if value > _EPOCH_MS_CUTOFF else value
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    elif isinstance(value, str):
        text = value.strip()
        if text.replace(".", "", 1).isdigit():
            return parse_timestamp(float(text))
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        moment = datetime.fromisoformat(text)
    else:
        raise TypeError(f"Unsupported timestamp: {value!r}")
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _parse_record(record: Mapping[str, Any]) -> Sample:
    sentiment_key = next((key for key in SENTIMENT_KEYS if record.get(key) not in (None, "")), None)
    if sentiment_key is None:
        raise KeyError("sentiment")
    return Sample(
        timestamp=parse_timestamp(record["timestamp"]),
        price=float(record["price"]),
        sentiment=float(record[sentiment_key]),
    )
