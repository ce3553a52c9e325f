"""
Render the topic evolution chart into a standalone HTML page.

Usage:
  python scripts/export_static_page.py --data data.json --out site/index.html

The page always ends in one state: chart, or the error panel when the
data cannot be loaded. Exit status is 1 in the error case.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from charts.mount import MountState, StaticPageMount  # noqa: E402
from config import Settings  # noqa: E402
from tools.dataset_loader import DatasetLoader, summarize  # noqa: E402
from topic_app import TopicEvolutionApp  # noqa: E402
from utils.error_hooks import install_global_handlers  # noqa: E402
from utils.log import configure_logging  # noqa: E402


def parse_args(argv=None) -> argparse.Namespace:
    settings = Settings.from_env()
    ap = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    ap.add_argument(
        "--data",
        default=settings.data_source,
        help="Path or URL of the dataset JSON (default: TOPIC_DATA_SOURCE or data.json)",
    )
    ap.add_argument("--out", default="site/index.html", help="Output HTML file")
    ap.add_argument(
        "--inline-plotlyjs",
        action="store_true",
        help="Embed plotly.js in the page instead of loading it from the CDN",
    )
    ap.add_argument("--log-level", default=settings.log_level)
    return ap.parse_args(argv)


async def export_page(
    data: str, out: Path, *, inline_plotlyjs: bool = False, timeout: float = 30.0
) -> TopicEvolutionApp:
    install_global_handlers()
    mount = StaticPageMount(out, include_plotlyjs=True if inline_plotlyjs else "cdn")
    app = TopicEvolutionApp(
        loader=DatasetLoader(data, timeout=timeout),
        mount=mount,
    )
    await app.initialize()
    return app


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)
    settings = Settings.from_env()

    out = Path(args.out)
    app = asyncio.run(
        export_page(
            args.data,
            out,
            inline_plotlyjs=args.inline_plotlyjs,
            timeout=settings.http_timeout,
        )
    )

    if app.mount.state is not MountState.CHART:
        print(f"[error] {app.ctx.error} (error page written to {out})")
        return 1

    print(f"[ok] wrote {out}")
    print(json.dumps(summarize(app.ctx.dataset), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
