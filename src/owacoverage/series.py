# src/owacoverage/series.py

"""
Append-only bound series.

One row is recorded per sampling point: the tick index plus the four bounds
(lower, Min-UnCover, Max-UnCover, upper), the diagnostic ground-truth count
and the time spent in each solver at that point. Rows are all-or-nothing:
:meth:`BoundSeries.append` takes every column at once.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from .errors import EmptySeriesError

__all__ = ["BoundSeries", "BOUND_COLUMNS"]

BOUND_COLUMNS = ("lower", "min_uncover", "max_uncover", "upper")


@dataclass
class BoundSeries:
    ticks: List[int] = field(default_factory=list)
    lower: List[int] = field(default_factory=list)
    min_uncover: List[int] = field(default_factory=list)
    max_uncover: List[int] = field(default_factory=list)
    upper: List[int] = field(default_factory=list)
    ground_truth: List[Optional[int]] = field(default_factory=list)
    min_uncover_seconds: List[float] = field(default_factory=list)
    max_uncover_seconds: List[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.ticks)

    def append(
        self,
        *,
        tick: int,
        lower: int,
        min_uncover: int,
        max_uncover: int,
        upper: int,
        ground_truth: Optional[int] = None,
        min_uncover_seconds: float = 0.0,
        max_uncover_seconds: float = 0.0,
    ) -> None:
        self.ticks.append(tick)
        self.lower.append(lower)
        self.min_uncover.append(min_uncover)
        self.max_uncover.append(max_uncover)
        self.upper.append(upper)
        self.ground_truth.append(ground_truth)
        self.min_uncover_seconds.append(min_uncover_seconds)
        self.max_uncover_seconds.append(max_uncover_seconds)

    def last(self, name: str):
        """Most recent value of column ``name``; :class:`EmptySeriesError` if none."""
        values = getattr(self, name)
        if not values:
            raise EmptySeriesError(f"series {name!r} has no sampling point yet")
        return values[-1]

    def last_or_none(self, name: str):
        values = getattr(self, name)
        return values[-1] if values else None

    def row(self, i: int = -1) -> Dict[str, Optional[int]]:
        if not self.ticks:
            raise EmptySeriesError("no sampling point recorded yet")
        return {"tick": self.ticks[i], **{c: getattr(self, c)[i] for c in BOUND_COLUMNS}}

    def as_frame(self) -> pd.DataFrame:
        """All sampling points as a DataFrame indexed by tick."""
        df = pd.DataFrame({
            "tick": self.ticks,
            "lower": self.lower,
            "min_uncover": self.min_uncover,
            "max_uncover": self.max_uncover,
            "upper": self.upper,
            "ground_truth": pd.array(self.ground_truth, dtype="Int64"),
            "min_uncover_seconds": self.min_uncover_seconds,
            "max_uncover_seconds": self.max_uncover_seconds,
        })
        return df.set_index("tick")
