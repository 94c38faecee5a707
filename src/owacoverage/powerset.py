# src/owacoverage/powerset.py

"""
Power-set expansion of partially known tag vectors.

``expand(v)`` returns every concrete vector obtainable from ``v`` by assigning
True/False independently to each Unknown position. Expansion walks the
Unknown positions left to right and doubles the working set at each one, so
every combination is produced exactly once: ``|expand(v)| == 2 ** u``.

The functions here are pure and hold no shared state, so callers may farm
them out to worker processes. :func:`split` gives the two-way decomposition
``expand(v) == expand(t) | expand(f)`` for that purpose.
"""

from __future__ import annotations
from typing import FrozenSet, Iterable, List, Tuple

from .valuation import TRUE, FALSE, TagVector, unknown_positions

__all__ = [
    "expand",
    "split",
    "expand_all",
    "Family",
]

Family = Tuple[TagVector, FrozenSet[TagVector]]


def _assign(v: TagVector, i: int, value) -> TagVector:
    return v[:i] + (value,) + v[i + 1:]


def expand(v: Iterable) -> FrozenSet[TagVector]:
    """
    Concrete resolutions of ``v``.

    Parameters
    ----------
    v : sequence of Valuation
        Tag vector, possibly containing Unknown entries.

    Returns
    -------
    frozenset of tuple
        ``2 ** u`` pairwise distinct concrete vectors, each agreeing with ``v``
        on every known position. A vector without Unknowns maps to ``{v}``.
    """
    v = tuple(v)
    current: List[TagVector] = [v]
    # Every partial vector shares the same Unknown positions, so scanning the
    # positions of ``v`` once is the same as scanning each branch.
    for i in unknown_positions(v):
        nxt: List[TagVector] = []
        for item in current:
            nxt.append(_assign(item, i, TRUE))
            nxt.append(_assign(item, i, FALSE))
        current = nxt
    return frozenset(current)


def split(v: Iterable) -> Tuple[TagVector, TagVector]:
    """
    Resolve the first Unknown of ``v`` both ways.

    Raises ``ValueError`` if ``v`` is already concrete.
    """
    v = tuple(v)
    pos = unknown_positions(v)
    if not pos:
        raise ValueError("cannot split a concrete vector")
    i = pos[0]
    return _assign(v, i, TRUE), _assign(v, i, FALSE)


def expand_all(vectors: Iterable[TagVector]) -> List[Family]:
    """Pair each vector with its power set, in iteration order."""
    return [(tuple(v), expand(v)) for v in vectors]
