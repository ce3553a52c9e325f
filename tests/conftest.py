"""Shared fixtures for the topic evolution tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, List

import pytest
from charts.mount import ChartMount
from schemas.dataset import Dataset
from tools.dataset_loader import validate_payload


class RecordingMount(ChartMount):
    """In-memory mount that records every state it was asked to draw."""

    def __init__(self, fail_chart: bool = False) -> None:
        super().__init__()
        self.calls: List[tuple] = []
        self.fail_chart = fail_chart

    async def _draw_loading(self) -> None:
        self.calls.append(("loading",))

    async def _draw_error(self, message: str) -> None:
        self.calls.append(("error", message))

    async def _draw_chart(self, figure) -> None:
        if self.fail_chart:
            raise RuntimeError("mount exploded")
        self.calls.append(("chart", figure))


@pytest.fixture
def small_payload() -> dict:
    return {
        "years": [2016, 2017],
        "categories": {"AI": [2, 5], "Finance": [3, 3]},
    }


@pytest.fixture
def small_dataset(small_payload) -> Dataset:
    return validate_payload(small_payload)


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[Any], Path]:
    """Write an object (or raw text) to a file and return its path."""

    def _write(obj: Any, name: str = "data.json") -> Path:
        path = tmp_path / name
        text = obj if isinstance(obj, str) else json.dumps(obj)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def recording_mount() -> RecordingMount:
    return RecordingMount()


@pytest.fixture
def bundled_data_path() -> Path:
    return Path(__file__).resolve().parents[1] / "data.json"
