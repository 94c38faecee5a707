# src/owacoverage/valuation.py

"""
Three-valued tag valuations and tag vectors.

A :class:`Valuation` is a pair ``(condition, inverse_condition)``:

====================  ===========  ===================
state                 condition    inverse_condition
====================  ===========  ===================
Unknown  (``?``)      False        False
True     (``T``)      True         False
False    (``F``)      False        True
====================  ===========  ===================

``(True, True)`` is illegal and rejected at construction. An optional
``ground_truth`` hint may ride along for diagnostics; it never takes part in
equality or hashing, so two valuations with different hints are the same
set member.

A *tag vector* is simply a ``tuple`` of valuations. Tuples are immutable, so
a vector handed to the engine cannot be changed behind its back.

Examples
--------
>>> from owacoverage.valuation import parse_tag_vector, format_tag_vector, count_unknowns
>>> v = parse_tag_vector("T?F")
>>> format_tag_vector(v)
'T?F'
>>> count_unknowns(v)
1
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import InvalidValuationError

__all__ = [
    "Valuation",
    "UNKNOWN",
    "TRUE",
    "FALSE",
    "TagVector",
    "tag_vector",
    "parse_tag_vector",
    "format_tag_vector",
    "is_concrete",
    "count_unknowns",
    "unknown_positions",
    "truth_vector",
]


_BOOL_TYPES = (bool, np.bool_)


@dataclass(frozen=True)
class Valuation:
    condition: bool
    inverse_condition: bool
    ground_truth: Optional[bool] = field(default=None, compare=False)

    def __post_init__(self):
        if not isinstance(self.condition, _BOOL_TYPES) or not isinstance(self.inverse_condition, _BOOL_TYPES):
            raise InvalidValuationError(
                f"condition flags must be booleans, got "
                f"({self.condition!r}, {self.inverse_condition!r})"
            )
        if self.condition and self.inverse_condition:
            raise InvalidValuationError("condition and inverse_condition cannot both hold")
        # normalize numpy booleans so equality and hashing stay uniform
        object.__setattr__(self, "condition", bool(self.condition))
        object.__setattr__(self, "inverse_condition", bool(self.inverse_condition))
        if self.ground_truth is not None:
            object.__setattr__(self, "ground_truth", bool(self.ground_truth))

    @property
    def is_unknown(self) -> bool:
        return not self.condition and not self.inverse_condition

    @property
    def is_true(self) -> bool:
        return self.condition

    @property
    def is_false(self) -> bool:
        return self.inverse_condition

    def resolved_truth(self) -> Optional[bool]:
        """Known value if any, else the ground-truth hint (possibly ``None``)."""
        if self.is_true:
            return True
        if self.is_false:
            return False
        return self.ground_truth

    @classmethod
    def unknown(cls, ground_truth: Optional[bool] = None) -> "Valuation":
        return cls(False, False, ground_truth)

    @classmethod
    def of(cls, value: bool) -> "Valuation":
        return cls(bool(value), not bool(value), bool(value))

    def __str__(self) -> str:
        if self.is_unknown:
            return "?"
        return "T" if self.is_true else "F"


UNKNOWN = Valuation(False, False)
TRUE = Valuation(True, False)
FALSE = Valuation(False, True)

TagVector = Tuple[Valuation, ...]

_SYMBOLS = {"T": TRUE, "F": FALSE, "?": UNKNOWN, "1": TRUE, "0": FALSE, "U": UNKNOWN}

ValuationLike = Union[Valuation, bool, None, str, Tuple[bool, bool]]


def _coerce(x: ValuationLike) -> Valuation:
    if isinstance(x, Valuation):
        return x
    if x is None:
        return UNKNOWN
    if isinstance(x, _BOOL_TYPES):
        return TRUE if x else FALSE
    if isinstance(x, str):
        try:
            return _SYMBOLS[x.upper()]
        except KeyError:
            raise InvalidValuationError(f"unknown valuation symbol {x!r}") from None
    if isinstance(x, tuple) and len(x) == 2:
        return Valuation(x[0], x[1])
    raise InvalidValuationError(f"cannot interpret {x!r} as a valuation")


def tag_vector(values: Iterable[ValuationLike]) -> TagVector:
    """
    Build an immutable tag vector.

    Accepts :class:`Valuation` objects, plain booleans (``None`` is Unknown),
    ``"T"``/``"F"``/``"?"`` symbols, or raw ``(condition, inverse_condition)``
    pairs. Always returns a fresh tuple.
    """
    return tuple(_coerce(x) for x in values)


def parse_tag_vector(text: str) -> TagVector:
    """Parse a compact string such as ``"T?F"`` (whitespace and commas ignored)."""
    return tag_vector(ch for ch in text if ch not in " ,")


def format_tag_vector(v: Sequence[Valuation]) -> str:
    return "".join(str(x) for x in v)


def is_concrete(v: Sequence[Valuation]) -> bool:
    return not any(x.is_unknown for x in v)


def count_unknowns(v: Sequence[Valuation]) -> int:
    return sum(1 for x in v if x.is_unknown)


def unknown_positions(v: Sequence[Valuation]) -> Tuple[int, ...]:
    return tuple(i for i, x in enumerate(v) if x.is_unknown)


def truth_vector(v: Sequence[Valuation]) -> Optional[Tuple[bool, ...]]:
    """Ground-truth resolution of ``v``; ``None`` if some Unknown has no hint."""
    out = []
    for x in v:
        t = x.resolved_truth()
        if t is None:
            return None
        out.append(t)
    return tuple(out)
