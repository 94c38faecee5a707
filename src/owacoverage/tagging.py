# src/owacoverage/tagging.py

"""
Adapters from labelled scenario data to tag vectors.

The engine never looks at raw simulation data; a tagging collaborator turns
each tick into a tag vector. :class:`TagSchema` fixes the tag order once per
run and offers the common conversions:

- a scenario *instance* (labels that fired, some flagged uncertain): a label
  absent from the instance is known False, a present uncertain label is
  Unknown, any other present label is True;
- raw ``(condition, inverse_condition)`` pairs;
- rows of a :class:`pandas.DataFrame` with one column per tag, where
  ``True``/``False`` are known and missing values (``NaN``/``None``/``pd.NA``)
  are Unknown.

Examples
--------
>>> from owacoverage.tagging import TagSchema
>>> from owacoverage.valuation import format_tag_vector
>>> schema = TagSchema(["follow", "overtake", "speeding"])
>>> format_tag_vector(schema.from_instance({"follow": False, "speeding": True}))
'TF?'
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Mapping, Sequence, Tuple

import pandas as pd

from .valuation import FALSE, TRUE, UNKNOWN, TagVector, Valuation

__all__ = ["TagSchema"]


@dataclass(frozen=True)
class TagSchema:
    labels: Tuple[str, ...]

    def __init__(self, labels: Sequence[str]):
        labels = tuple(labels)
        if not labels:
            raise ValueError("a tag schema needs at least one label")
        if len(set(labels)) != len(labels):
            raise ValueError("tag labels must be unique")
        object.__setattr__(self, "labels", labels)

    @property
    def tag_count(self) -> int:
        return len(self.labels)

    def from_instance(self, instance: Mapping[str, bool]) -> TagVector:
        """
        ``instance`` maps each label present in the scenario instance to
        whether that node is uncertain. Labels outside the schema are ignored.
        """
        out = []
        for label in self.labels:
            if label not in instance:
                out.append(FALSE)
            elif instance[label]:
                out.append(UNKNOWN)
            else:
                out.append(TRUE)
        return tuple(out)

    def from_condition_pairs(self, pairs: Sequence[Tuple[bool, bool]]) -> TagVector:
        if len(pairs) != self.tag_count:
            raise ValueError(f"expected {self.tag_count} condition pairs, got {len(pairs)}")
        return tuple(Valuation(bool(c), bool(i)) for c, i in pairs)

    def vectors_from_frame(self, df: pd.DataFrame) -> Iterator[TagVector]:
        """Yield one tag vector per row of ``df`` (columns selected by label)."""
        missing = [c for c in self.labels if c not in df.columns]
        if missing:
            raise KeyError(f"missing tag columns: {missing}")
        sub = df.loc[:, list(self.labels)]
        unknown = sub.isna().to_numpy()
        values = sub.to_numpy(dtype=object)
        for vals, unk in zip(values, unknown):
            yield tuple(UNKNOWN if u else (TRUE if bool(x) else FALSE) for x, u in zip(vals, unk))
