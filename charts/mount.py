# charts/mount.py
from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
import plotly.graph_objects as go
from charts.plotly_renderer import PLOT_CONFIG
from utils.errors import RenderError

logger = logging.getLogger(__name__)

CHART_DIV_ID = "evolution-chart"


class MountState(str, Enum):
    EMPTY = "empty"
    LOADING = "loading"
    ERROR = "error"
    CHART = "chart"


class ChartMount:
    """
    The one region the app draws into.

    Loading, error and chart are mutually exclusive; each show_* call
    replaces whatever was there. Subclasses implement the _draw_* hooks.
    """

    def __init__(self):
        self.state = MountState.EMPTY
        self.error_message: Optional[str] = None

    async def show_loading(self) -> None:
        await self._draw_loading()
        self.state = MountState.LOADING
        self.error_message = None

    async def show_error(self, message: str = "Failed to load data") -> None:
        await self._draw_error(message)
        self.state = MountState.ERROR
        self.error_message = message

    async def show_chart(self, figure: go.Figure) -> None:
        try:
            await self._draw_chart(figure)
        except RenderError:
            raise
        except Exception as e:
            raise RenderError(f"Failed to mount chart: {e}") from e
        self.state = MountState.CHART
        self.error_message = None

    # -------------------------
    # Subclass hooks
    # -------------------------

    async def _draw_loading(self) -> None:
        raise NotImplementedError

    async def _draw_error(self, message: str) -> None:
        raise NotImplementedError

    async def _draw_chart(self, figure: go.Figure) -> None:
        raise NotImplementedError


def _template_env() -> Environment:
    templates_path = Path(__file__).resolve().parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(templates_path)),
        autoescape=select_autoescape(enabled_extensions=("html", "xml")),
        trim_blocks=True,
        lstrip_blocks=True,
    )


class StaticPageMount(ChartMount):
    """
    Writes the mount region into a standalone HTML page.
    """

    template_name = "page.html"

    def __init__(
        self,
        path: str | Path = "index.html",
        *,
        title: str = "Academic Topic Evolution",
        include_plotlyjs: str | bool = "cdn",
    ):
        super().__init__()
        self.path = Path(path)
        self.title = title
        self.include_plotlyjs = include_plotlyjs
        self.env = _template_env()

    async def _draw_loading(self) -> None:
        placeholder = dict(
            color="#718096",
            icon="\U0001f4ca",
            headline="Loading visualization...",
            detail="Preparing topic counts",
        )
        self._write(MountState.LOADING, placeholder=placeholder)

    async def _draw_error(self, message: str) -> None:
        placeholder = dict(
            color="#e53e3e",
            icon="⚠️",
            headline="Visualization Error",
            detail=message,
        )
        self._write(MountState.ERROR, placeholder=placeholder)

    async def _draw_chart(self, figure: go.Figure) -> None:
        chart_html = figure.to_html(
            full_html=False,
            include_plotlyjs=self.include_plotlyjs,
            config=PLOT_CONFIG,
            default_width="100%",
        )
        self._write(MountState.CHART, chart_html=chart_html)

    def _write(
        self,
        state: MountState,
        *,
        placeholder: Optional[Dict[str, str]] = None,
        chart_html: Optional[str] = None,
    ) -> None:
        page = self.env.get_template(self.template_name).render(
            title=self.title,
            div_id=CHART_DIV_ID,
            state=state.value,
            placeholder=placeholder or {},
            chart_html=chart_html,
        )
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp.html")
        tmp.write_text(page, encoding="utf-8")
        tmp.replace(self.path)
        logger.debug("Wrote %s state to %s", state.value, self.path)
