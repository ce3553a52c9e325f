"""Tests for dataset loading and validation."""

from __future__ import annotations

import asyncio
import json

import pytest
import requests
from tools import dataset_loader
from tools.dataset_loader import DatasetLoader, LoadResult, summarize, validate_payload
from utils.errors import (
    ConsistencyError,
    FormatError,
    SchemaError,
    TransportError,
)


def _load(source, **kwargs) -> LoadResult:
    return asyncio.run(DatasetLoader(source, **kwargs).load())


def test_load_valid_file_returns_dataset(write_json, small_payload) -> None:
    """A well-formed file yields an ok result with the parsed dataset."""

    result = _load(write_json(small_payload))

    assert result.ok
    assert result.error is None
    assert result.dataset.years == (2016, 2017)
    assert dict(result.dataset.categories) == {"AI": (2, 5), "Finance": (3, 3)}
    assert dict(result.dataset.markers) == {}


def test_load_bundled_data_file(bundled_data_path) -> None:
    """The shipped data.json passes validation."""

    result = _load(bundled_data_path)

    assert result.ok
    assert len(result.dataset.categories) > 0
    assert result.dataset.total_data_points == len(result.dataset.years) * len(
        result.dataset.categories
    )


def test_length_mismatch_names_category(write_json) -> None:
    """Three years but a two-value category fails with ConsistencyError."""

    payload = {
        "years": [2016, 2017, 2018],
        "categories": {"AI": [1, 2, 3], "Finance": [1, 2]},
    }
    result = _load(write_json(payload))

    assert not result.ok
    assert result.dataset is None
    assert isinstance(result.error, ConsistencyError)
    assert result.error.category == "Finance"
    assert result.error.expected == 3
    assert result.error.actual == 2
    assert "Finance" in result.error.message


@pytest.mark.parametrize(
    "payload",
    [
        {"categories": {"AI": [1]}},
        {"years": [2016]},
        {"years": "2016", "categories": {}},
        {"years": [2016], "categories": [["AI", [1]]]},
        [2016, 2017],
        {"years": [], "categories": {}},
        {"years": [2017, 2016], "categories": {}},
        {"years": [2016, 2016], "categories": {}},
        {"years": [2016, "2017"], "categories": {}},
        {"years": [True, 2017], "categories": {}},
        {"years": [2016], "categories": {"AI": 3}},
        {"years": [2016], "categories": {"AI": [-1]}},
        {"years": [2016], "categories": {"AI": [1.5]}},
        {"years": [2016], "categories": {"AI": [1]}, "markers": ["star"]},
        {"years": [2016], "categories": {"AI": [1]}, "markers": {"AI": 3}},
    ],
)
def test_schema_failures(write_json, payload) -> None:
    """Missing or misshapen fields fail with SchemaError and no dataset."""

    result = _load(write_json(payload))

    assert isinstance(result.error, SchemaError)
    assert result.dataset is None


def test_malformed_json_is_format_error(write_json) -> None:
    """Content that does not parse as JSON is a FormatError."""

    result = _load(write_json('{"years": [2016,'))

    assert isinstance(result.error, FormatError)


def test_missing_file_is_transport_error(tmp_path) -> None:
    """A missing static file is reported as a transport failure."""

    result = _load(tmp_path / "nope.json")

    assert isinstance(result.error, TransportError)
    assert result.error.reason == "not found"


class _FakeResponse:
    def __init__(self, status_code: int, text: str = "", reason: str = "OK") -> None:
        self.status_code = status_code
        self.text = text
        self.reason = reason

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400


def test_http_non_success_status(monkeypatch) -> None:
    """A 404 becomes a TransportError carrying status and reason."""

    def fake_get(url, timeout):
        return _FakeResponse(404, reason="Not Found")

    monkeypatch.setattr(dataset_loader.requests, "get", fake_get)

    result = _load("https://example.test/data.json")

    assert isinstance(result.error, TransportError)
    assert result.error.status == 404
    assert result.error.reason == "Not Found"
    assert result.error.message == "HTTP 404: Not Found"


def test_http_connection_error(monkeypatch) -> None:
    """Network failures are wrapped rather than propagated."""

    def fake_get(url, timeout):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(dataset_loader.requests, "get", fake_get)

    result = _load("http://example.test/data.json")

    assert isinstance(result.error, TransportError)
    assert result.error.status is None


def test_http_success_passes_timeout(monkeypatch, small_payload) -> None:
    """The configured timeout reaches requests and the body is validated."""

    seen = {}

    def fake_get(url, timeout):
        seen["url"] = url
        seen["timeout"] = timeout
        return _FakeResponse(200, text=json.dumps(small_payload))

    monkeypatch.setattr(dataset_loader.requests, "get", fake_get)

    result = _load("https://example.test/data.json", timeout=5)

    assert result.ok
    assert seen == {"url": "https://example.test/data.json", "timeout": 5}


def test_on_pending_runs_before_fetch(write_json, small_payload) -> None:
    """The loading signal fires once, before the data is read."""

    events = []

    async def on_pending():
        events.append("pending")

    loader = DatasetLoader(write_json(small_payload), on_pending=on_pending)
    result = asyncio.run(loader.load())

    assert result.ok
    assert events == ["pending"]


def test_fetch_raises_typed_error(write_json) -> None:
    """fetch() is the raising variant of load()."""

    loader = DatasetLoader(write_json({"years": [2016]}))

    with pytest.raises(SchemaError):
        asyncio.run(loader.fetch())


def test_validate_payload_keeps_markers(small_payload) -> None:
    payload = dict(small_payload, markers={"AI": "star"})

    ds = validate_payload(payload)

    assert ds.markers["AI"] == "star"


def test_summarize(small_dataset) -> None:
    assert summarize(small_dataset) == {
        "years": [2016, 2017],
        "categories": 2,
        "total_data_points": 4,
        "top_categories": ["AI", "Finance"],
    }
