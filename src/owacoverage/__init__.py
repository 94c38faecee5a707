from .valuation import (
    Valuation,
    UNKNOWN,
    TRUE,
    FALSE,
    TagVector,
    tag_vector,
    parse_tag_vector,
    format_tag_vector,
)
from .errors import (
    CoverageError,
    InvalidValuationError,
    DimensionMismatchError,
    EmptySeriesError,
    InternalSolverError,
    UnsatisfiableEncodingError,
    MatchingMismatchError,
    SolverUnknownError,
    SolverUnavailableError,
)
from .config import EngineConfig
from .powerset import expand, split, expand_all
from .min_uncover import MinUncoverSolver
from .max_uncover import MaxUncoverSolver
from .series import BoundSeries
from .engine import CoverageBoundEngine
from .tagging import TagSchema
from .generators import random_tag_vectors

__all__ = [
    "Valuation",
    "UNKNOWN",
    "TRUE",
    "FALSE",
    "TagVector",
    "tag_vector",
    "parse_tag_vector",
    "format_tag_vector",
    "CoverageError",
    "InvalidValuationError",
    "DimensionMismatchError",
    "EmptySeriesError",
    "InternalSolverError",
    "UnsatisfiableEncodingError",
    "MatchingMismatchError",
    "SolverUnknownError",
    "SolverUnavailableError",
    "EngineConfig",
    "expand",
    "split",
    "expand_all",
    "MinUncoverSolver",
    "MaxUncoverSolver",
    "BoundSeries",
    "CoverageBoundEngine",
    "TagSchema",
    "random_tag_vectors",
]
