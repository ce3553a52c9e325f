from __future__ import annotations

from typing import Any, Dict, List, Sequence

import plotly.graph_objects as go
from charts.series_builder import build_annotations, build_series
from schemas.chart_spec import Annotation, Series
from schemas.dataset import Dataset
from utils.errors import RenderError

FONT_FAMILY = "-apple-system, BlinkMacSystemFont, sans-serif"

PLOT_CONFIG = {
    "responsive": True,
    "displayModeBar": True,
    "displaylogo": False,
    "modeBarButtonsToRemove": ["pan2d", "lasso2d", "select2d", "autoScale2d"],
}

HOVER_TEMPLATE = (
    "<b>%{fullData.name}</b><br>" "Year: %{x}<br>" "Topics: %{y}<br>" "<extra></extra>"
)


def chart_title(dataset: Dataset) -> str:
    return f"Academic Topic Evolution ({dataset.years[0]}-{dataset.years[-1]})"


def annotation_to_plotly(a: Annotation) -> Dict[str, Any]:
    return dict(
        x=a.anchor_year,
        y=a.value,
        text=a.label,
        showarrow=True,
        arrowhead=2,
        arrowsize=1,
        arrowwidth=2,
        arrowcolor=a.style_hint,
        ax=0,
        ay=-40,
        font=dict(size=11, color="#1a202c", family=FONT_FAMILY),
        bgcolor="rgba(255,255,255,0.9)",
        bordercolor=a.style_hint,
        borderwidth=1,
        borderpad=4,
    )


def series_to_trace(s: Series) -> go.Scatter:
    return go.Scatter(
        x=s.x,
        y=s.y,
        mode="lines+markers",
        name=s.name,
        line=dict(width=3, color=s.color, shape="linear"),
        marker=dict(
            size=10,
            color=s.color,
            symbol=s.symbol,
            line=dict(width=2, color="#ffffff"),
        ),
        hovertemplate=HOVER_TEMPLATE,
        connectgaps=False,
    )


def build_layout(
    dataset: Dataset, annotations: Sequence[Annotation]
) -> Dict[str, Any]:
    axis_style = dict(
        gridcolor="#e2e8f0",
        gridwidth=1,
        linecolor="#cbd5e0",
        linewidth=2,
        tickfont=dict(color="#4a5568"),
    )
    return dict(
        title=dict(
            text=chart_title(dataset),
            font=dict(family=FONT_FAMILY, size=20, color="#1a202c"),
            x=0.5,
            xanchor="center",
        ),
        xaxis=dict(
            title=dict(text="Year", font=dict(size=14, color="#4a5568")),
            tickmode="array",
            tickvals=list(dataset.years),
            ticktext=[str(y) for y in dataset.years],
            **axis_style,
        ),
        yaxis=dict(
            title=dict(text="Number of Topics", font=dict(size=14, color="#4a5568")),
            rangemode="tozero",
            **axis_style,
        ),
        plot_bgcolor="#ffffff",
        paper_bgcolor="#ffffff",
        autosize=True,
        hovermode="closest",
        hoverlabel=dict(
            bgcolor="#1a202c",
            bordercolor="#4a5568",
            font=dict(color="#ffffff", size=12),
        ),
        legend=dict(
            orientation="v",
            yanchor="top",
            y=1,
            xanchor="left",
            x=1.02,
            font=dict(size=11, color="#4a5568"),
            bgcolor="rgba(255,255,255,0.8)",
            bordercolor="#e2e8f0",
            borderwidth=1,
        ),
        margin=dict(l=80, r=140, t=80, b=80),
        annotations=[annotation_to_plotly(a) for a in annotations],
    )


def render_plotly(dataset: Dataset) -> go.Figure:
    """
    Series, annotations and layout go to plotly as one figure.
    """
    try:
        series: List[Series] = build_series(dataset)
        annotations = build_annotations(dataset)
        fig = go.Figure(
            data=[series_to_trace(s) for s in series],
            layout=build_layout(dataset, annotations),
        )
    except Exception as e:
        raise RenderError(f"Failed to render chart visualization: {e}") from e
    return fig
