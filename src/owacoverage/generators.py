# src/owacoverage/generators.py

from __future__ import annotations
from typing import Iterator, Optional

import numpy as np

from .valuation import Valuation, TagVector

__all__ = ["EXPERIMENT_SEED", "random_tag_vectors"]

EXPERIMENT_SEED = 10101


def random_tag_vectors(
    num_tags: int,
    probability: float,
    *,
    seed: Optional[int] = EXPERIMENT_SEED,
    max_ticks: Optional[int] = None,
) -> Iterator[TagVector]:
    """
    Lazily generate random tag vectors.

    Each tag is Unknown with probability ``probability`` (carrying a uniformly
    random ground-truth hint); otherwise it is True or False with equal odds
    and its hint equals its value. ``max_ticks=None`` yields forever.

    Parameters
    ----------
    num_tags : int
        Vector width.
    probability : float
        Per-tag probability of an Unknown, in ``[0, 1]``.
    seed : int, optional
        Seed for :func:`numpy.random.default_rng`; equal seeds give equal
        streams.
    max_ticks : int, optional
        Number of vectors to produce.
    """
    if num_tags < 1:
        raise ValueError("num_tags must be ≥ 1")
    if not 0.0 <= probability <= 1.0:
        raise ValueError("probability must lie in [0, 1]")
    if max_ticks is not None and max_ticks < 0:
        raise ValueError("max_ticks must be ≥ 0")

    rng = np.random.default_rng(seed)
    produced = 0
    while max_ticks is None or produced < max_ticks:
        unknown = rng.random(num_tags) < probability
        values = rng.random(num_tags) < 0.5
        yield tuple(
            Valuation.unknown(bool(val)) if unk else Valuation.of(bool(val))
            for unk, val in zip(unknown, values)
        )
        produced += 1
