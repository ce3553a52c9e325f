# chainlit/app.py
from __future__ import annotations

import asyncio
import pathlib
import sys

cwd = pathlib.Path.cwd()
proj_root = cwd.parent if cwd.name == "chainlit" else cwd
if str(proj_root) not in sys.path:
    sys.path.insert(0, str(proj_root))


import chainlit as cl
import plotly.graph_objects as go
from charts.mount import CHART_DIV_ID, ChartMount
from config import Settings
from tools.dataset_loader import DatasetLoader
from topic_app import TopicEvolutionApp
from utils.error_hooks import install_global_handlers
from utils.log import configure_logging


class ChainlitMessageMount(ChartMount):
    """
    Mount region backed by a single chat message that gets updated.
    """

    def __init__(self):
        super().__init__()
        self.msg: cl.Message | None = None

    async def _ensure_msg(self) -> cl.Message:
        if self.msg is None:
            self.msg = cl.Message(content="")
            await self.msg.send()
        return self.msg

    async def _draw_loading(self) -> None:
        msg = await self._ensure_msg()
        msg.content = "Loading visualization..."
        msg.elements = []
        await msg.update()

    async def _draw_error(self, message: str) -> None:
        msg = await self._ensure_msg()
        msg.content = f"**Visualization Error**\n\n{message}"
        msg.elements = []
        await msg.update()

    async def _draw_chart(self, figure: go.Figure) -> None:
        msg = await self._ensure_msg()
        msg.content = ""
        msg.elements = [cl.Plotly(name=CHART_DIV_ID, figure=figure, display="inline")]
        await msg.update()


# -------------------------
# 1) Dependency wiring (startup)
# -------------------------

SETTINGS = Settings.from_env()
configure_logging(SETTINGS.log_level)
install_global_handlers()


def build_app(settings: Settings) -> TopicEvolutionApp:
    loader = DatasetLoader(settings.data_source, timeout=settings.http_timeout)
    return TopicEvolutionApp(
        loader=loader, mount=ChainlitMessageMount(), settings=settings
    )


@cl.on_chat_start
async def on_chat_start():
    # the server loop does not exist at import; no-op after the first session
    install_global_handlers(asyncio.get_running_loop())

    app = build_app(SETTINGS)
    cl.user_session.set("app", app)
    await app.initialize()


@cl.on_window_message
async def on_window_message(message: str):
    # Host page forwards viewport changes as "resize"
    if message != "resize":
        return
    app: TopicEvolutionApp | None = cl.user_session.get("app")
    if app is not None:
        app.handle_resize()
