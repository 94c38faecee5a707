# src/owacoverage/bounds.py

from __future__ import annotations
from typing import Iterable, Optional, Sequence

from .powerset import Family
from .valuation import TagVector, is_concrete, truth_vector

__all__ = [
    "lower_bound",
    "upper_bound",
    "ground_truth_count",
    "check_ordering",
]


def lower_bound(observed: Iterable[TagVector]) -> int:
    """Number of observed vectors without any Unknown (``observed`` is deduplicated)."""
    return sum(1 for v in observed if is_concrete(v))


def upper_bound(families: Iterable[Family]) -> int:
    """Size of the union of all power sets."""
    reachable = set()
    for _, power_set in families:
        reachable.update(power_set)
    return len(reachable)


def ground_truth_count(observed: Iterable[TagVector]) -> Optional[int]:
    """
    Distinct ground-truth vectors among ``observed``.

    Unknowns resolve through their hint; vectors with an un-hinted Unknown are
    left out. Returns ``None`` when no vector can be resolved at all.
    """
    truths = set()
    unresolved = 0
    for v in observed:
        t = truth_vector(v)
        if t is None:
            unresolved += 1
        else:
            truths.add(t)
    if not truths and unresolved:
        return None
    return len(truths)


def check_ordering(values: Sequence[int]) -> bool:
    """True iff ``values`` is non-decreasing."""
    return all(a <= b for a, b in zip(values, values[1:]))
