# tools/dataset_loader.py
from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional

import requests
from schemas.dataset import Dataset
from utils.errors import (
    ConsistencyError,
    FormatError,
    LoadError,
    SchemaError,
    TransportError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadResult:
    dataset: Optional[Dataset] = None
    error: Optional[LoadError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.dataset is not None


def _is_int(v: Any) -> bool:
    # JSON true/false decode to bool, which is an int subclass
    return isinstance(v, int) and not isinstance(v, bool)


def validate_payload(raw: Any) -> Dataset:
    """
    Check the decoded JSON document and build a Dataset from it.

    Raises SchemaError for missing/misshapen fields and ConsistencyError
    when a category's series length differs from len(years).
    """
    if not isinstance(raw, dict):
        raise SchemaError("Invalid data format: expected a JSON object")

    years = raw.get("years")
    categories = raw.get("categories")
    if not isinstance(years, list) or not isinstance(categories, dict):
        raise SchemaError("Invalid data format: missing required fields")

    if not years:
        raise SchemaError("Invalid data format: 'years' is empty")
    if not all(_is_int(y) for y in years):
        raise SchemaError("Invalid data format: 'years' must be integers")
    for prev, cur in zip(years, years[1:]):
        if cur <= prev:
            raise SchemaError(
                f"Invalid data format: 'years' not strictly increasing at {cur}"
            )

    expected = len(years)
    for name, values in categories.items():
        if not isinstance(values, list):
            raise SchemaError(f"Invalid data format: category {name} is not a list")
        if len(values) != expected:
            raise ConsistencyError(name, expected=expected, actual=len(values))
        if not all(_is_int(v) and v >= 0 for v in values):
            raise SchemaError(
                f"Invalid data format: category {name} has non-count values"
            )

    markers = raw.get("markers")
    if markers is None:
        markers = {}
    elif not isinstance(markers, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in markers.items()
    ):
        raise SchemaError("Invalid data format: 'markers' must map names to symbols")

    return Dataset(years=years, categories=categories, markers=markers)


class DatasetLoader:
    """
    Fetches the static dataset once and validates it.

    `source` is either an http(s) URL or a filesystem path. Blocking I/O
    runs on a worker thread so the event loop stays free while pending.
    """

    def __init__(
        self,
        source: str | Path = "data.json",
        *,
        timeout: float = 30.0,
        on_pending: Callable[[], Awaitable[None]] | None = None,
    ):
        self.source = str(source)
        self.timeout = timeout
        self.on_pending = on_pending

    # ----------------------------
    # Public methods
    # ----------------------------

    async def load(self) -> LoadResult:
        try:
            dataset = await self.fetch()
        except LoadError as e:
            logger.error("Error in load_dataset: %s", e.message)
            return LoadResult(error=e)
        return LoadResult(dataset=dataset)

    async def fetch(self) -> Dataset:
        if self.on_pending is not None:
            await self.on_pending()

        text = await asyncio.to_thread(self._read_source)

        try:
            raw = json.loads(text)
        except ValueError as e:
            raise FormatError(f"Malformed JSON in {self.source}: {e}") from e

        dataset = validate_payload(raw)

        logger.info(
            "Data loaded successfully: years=%d categories=%d total_data_points=%d",
            len(dataset.years),
            len(dataset.categories),
            dataset.total_data_points,
        )
        return dataset

    # ----------------------------
    # Transport helpers
    # ----------------------------

    def _is_remote(self) -> bool:
        return self.source.startswith(("http://", "https://"))

    def _read_source(self) -> str:
        if self._is_remote():
            return self._read_http()
        return self._read_file()

    def _read_http(self) -> str:
        try:
            r = requests.get(self.source, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(
                f"Could not reach {self.source}: {e}", reason=str(e)
            ) from e

        if not r.ok:
            raise TransportError(
                f"HTTP {r.status_code}: {r.reason}",
                status=r.status_code,
                reason=r.reason,
            )
        return r.text

    def _read_file(self) -> str:
        path = Path(self.source)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise TransportError(
                f"Data file not found: {path}", reason="not found"
            ) from e
        except UnicodeDecodeError as e:
            raise FormatError(f"{path} is not UTF-8 text: {e}") from e
        except OSError as e:
            raise TransportError(f"Could not read {path}: {e}", reason=str(e)) from e


def summarize(dataset: Dataset) -> Dict[str, Any]:
    totals = dataset.totals()
    top: List[str] = sorted(totals, key=lambda k: totals[k], reverse=True)[:5]
    return {
        "years": [dataset.years[0], dataset.years[-1]],
        "categories": len(dataset.categories),
        "total_data_points": dataset.total_data_points,
        "top_categories": top,
    }
