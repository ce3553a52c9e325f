from __future__ import annotations

import logging

LOG_FORMAT = "[topic_evolution] %(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    root = logging.getLogger()
    if isinstance(level, str):
        level = level.upper()
    root.setLevel(level)

    for h in root.handlers:
        if getattr(h, "_topic_evolution", False):
            return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._topic_evolution = True  # type: ignore[attr-defined]
    root.addHandler(handler)
