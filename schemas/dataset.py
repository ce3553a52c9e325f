# schemas/dataset.py
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

import pandas as pd


@dataclass(frozen=True)
class Dataset:
    """
    Validated topic counts: one value per year for every category.

    Built only by tools.dataset_loader.validate_payload; the mappings are
    read-only views so nothing downstream can edit them in place.
    """

    years: Tuple[int, ...]
    categories: Mapping[str, Tuple[int, ...]]
    markers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "years", tuple(self.years))
        object.__setattr__(
            self,
            "categories",
            MappingProxyType({k: tuple(v) for k, v in self.categories.items()}),
        )
        object.__setattr__(self, "markers", MappingProxyType(dict(self.markers)))

    @property
    def total_data_points(self) -> int:
        return len(self.years) * len(self.categories)

    def value_at(self, category: str, year: int) -> Optional[int]:
        values = self.categories.get(category)
        if values is None:
            return None
        try:
            idx = self.years.index(year)
        except ValueError:
            return None
        return values[idx]

    def totals(self) -> Dict[str, int]:
        return {name: sum(values) for name, values in self.categories.items()}

    def to_frame(self) -> pd.DataFrame:
        """
        Years as the index, one column per category in insertion order.
        """
        return pd.DataFrame(
            {name: list(values) for name, values in self.categories.items()},
            index=pd.Index(list(self.years), name="year"),
            columns=list(self.categories.keys()),
        )
