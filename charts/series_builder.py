# charts/series_builder.py
from __future__ import annotations

from typing import List, Sequence

from schemas.chart_spec import Annotation, AnnotationTrigger, Series
from schemas.dataset import Dataset

PALETTE = (
    "#FF6B6B",
    "#4ECDC4",
    "#45B7D1",
    "#96CEB4",
    "#FFEAA7",
    "#DDA0DD",
    "#98D8C8",
    "#F7DC6F",
    "#FF9FF3",
    "#54A0FF",
    "#5F27CD",
    "#00D2D3",
    "#FF9F43",
    "#10AC84",
    "#EE5A24",
    "#0AD3C4",
    "#FFC312",
    "#C4E538",
    "#F79F1F",
    "#A3CB38",
)

DEFAULT_SYMBOL = "circle"

# Hand-picked callouts; category names must match data.json exactly.
ANNOTATION_TRIGGERS = (
    AnnotationTrigger("Machine Learning & AI", 2024, "LLMs<br>Emerge", "#FF6B6B"),
    AnnotationTrigger(
        "Social Sciences & Demographics", 2019, "Census<br>Focus", "#ed8936"
    ),
    AnnotationTrigger("Pandemic & Public Health", 2020, "COVID-19<br>Impact", "#48bb78"),
)


def build_series(
    dataset: Dataset, palette: Sequence[str] = PALETTE
) -> List[Series]:
    """
    One Series per category, largest total first.

    Ties keep the dataset's insertion order (stable sort); colors cycle
    through `palette` by sorted position.
    """
    if not palette:
        raise ValueError("palette must not be empty")

    totals = dataset.totals()
    ordered = sorted(totals, key=totals.__getitem__, reverse=True)

    out: List[Series] = []
    for pos, name in enumerate(ordered):
        total = totals[name]
        values = dataset.categories[name]
        out.append(
            Series(
                name=name,
                color=palette[pos % len(palette)],
                symbol=dataset.markers.get(name, DEFAULT_SYMBOL),
                total=total,
                points=list(zip(dataset.years, values)),
            )
        )
    return out


def build_annotations(
    dataset: Dataset, triggers: Sequence[AnnotationTrigger] = ANNOTATION_TRIGGERS
) -> List[Annotation]:
    out: List[Annotation] = []
    for trig in triggers:
        value = dataset.value_at(trig.category, trig.year)
        if not value:
            continue
        out.append(
            Annotation(
                anchor_category=trig.category,
                anchor_year=trig.year,
                label=trig.label,
                style_hint=trig.color_hint,
                value=value,
            )
        )
    return out
