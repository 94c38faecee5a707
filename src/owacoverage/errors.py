# src/owacoverage/errors.py

"""
Exception taxonomy for the coverage bound engine.

Three families are distinguished:

- *input validation* errors (:class:`InvalidValuationError`,
  :class:`DimensionMismatchError`) are raised synchronously by ``observe`` and
  are recoverable: the caller may drop the offending tick and continue.
- *internal solver* errors (:class:`InternalSolverError` and subclasses) mean
  an encoding is broken. They are fatal and must abort the run.
- :class:`SolverUnknownError` is the distinct UNKNOWN/timeout outcome of an
  optimization call. It is never coerced into a bound value.
"""

from __future__ import annotations

__all__ = [
    "CoverageError",
    "InvalidValuationError",
    "DimensionMismatchError",
    "EmptySeriesError",
    "InternalSolverError",
    "UnsatisfiableEncodingError",
    "MatchingMismatchError",
    "SolverUnknownError",
    "SolverUnavailableError",
]


class CoverageError(Exception):
    """Base class for every error raised by :mod:`owacoverage`."""


class InvalidValuationError(CoverageError, ValueError):
    """A valuation is not one of Unknown / True / False."""


class DimensionMismatchError(CoverageError, ValueError):
    """A tag vector's width differs from the configured tag count."""

    def __init__(self, expected: int, got: int):
        super().__init__(f"expected a tag vector of width {expected}, got {got}")
        self.expected = expected
        self.got = got


class EmptySeriesError(CoverageError, LookupError):
    """A bound series was read before any sampling point was recorded."""


class InternalSolverError(CoverageError, RuntimeError):
    """An optimization result contradicts its own construction."""


class UnsatisfiableEncodingError(InternalSolverError):
    """The hitting-set encoding was reported UNSATISFIABLE."""


class MatchingMismatchError(InternalSolverError):
    """Two maximum-matching algorithms disagree on the same instance."""

    def __init__(self, results: dict):
        detail = ", ".join(f"{k}={v}" for k, v in results.items())
        super().__init__(f"Max-UnCover algorithms disagree: {detail}")
        self.results = dict(results)


class SolverUnknownError(CoverageError):
    """The solver returned UNKNOWN (e.g. a time limit was hit)."""

    def __init__(self, message: str, *, time_limit=None):
        super().__init__(message)
        self.time_limit = time_limit


class SolverUnavailableError(CoverageError, RuntimeError):
    """No MILP backend is installed (need SciPy, or CBC/GLPK via PuLP)."""
