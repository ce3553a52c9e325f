from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import plotly.graph_objects as go
from charts.mount import ChartMount
from charts.plotly_renderer import render_plotly
from config import Settings
from schemas.dataset import Dataset
from tools.dataset_loader import DatasetLoader
from utils.debounce import Debouncer
from utils.errors import RenderError

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """
    Page-lifetime state: the dataset (written once) and the last figure.
    """

    dataset: Optional[Dataset] = None
    figure: Optional[go.Figure] = None
    error: Optional[str] = None
    render_count: int = 0

    def set_dataset(self, dataset: Dataset) -> None:
        if self.dataset is not None:
            raise RuntimeError("dataset is already loaded")
        self.dataset = dataset


class TopicEvolutionApp:
    """
    Load once, render, re-render on (debounced) resize.
    """

    def __init__(
        self,
        *,
        loader: DatasetLoader,
        mount: ChartMount,
        settings: Settings | None = None,
        ctx: AppContext | None = None,
    ):
        self.settings = settings or Settings()
        self.loader = loader
        self.mount = mount
        self.ctx = ctx or AppContext()
        self.debouncer = Debouncer(self.settings.resize_debounce_seconds)

        if self.loader.on_pending is None:
            self.loader.on_pending = self.mount.show_loading

    async def initialize(self) -> bool:
        logger.info("Initializing application...")
        try:
            result = await self.loader.load()
            if not result.ok:
                await self._fail(result.error.message)
                return False

            self.ctx.set_dataset(result.dataset)
            ok = await self.rerender()
            if ok:
                logger.info("Application initialized successfully")
            return ok
        except Exception as e:
            logger.exception("Error in initialize_app: %s", e)
            try:
                await self._fail("Application failed to initialize")
            except Exception as err:
                logger.exception("Error in show_error_state: %s", err)
            return False

    async def rerender(self) -> bool:
        if self.ctx.dataset is None:
            return False
        try:
            fig = render_plotly(self.ctx.dataset)
            await self.mount.show_chart(fig)
        except RenderError as e:
            logger.error("Error in render_chart: %s", e)
            await self._fail("Failed to render chart visualization")
            return False

        self.ctx.figure = fig
        self.ctx.error = None
        self.ctx.render_count += 1
        logger.info("Chart rendered successfully")
        return True

    def handle_resize(self) -> None:
        if self.ctx.dataset is None:
            return
        self.debouncer.schedule(self.rerender)

    async def _fail(self, message: str) -> None:
        self.ctx.error = message
        await self.mount.show_error(message)
