import numpy as np
import pytest

from owacoverage.config import EngineConfig
from owacoverage.engine import CoverageBoundEngine
from owacoverage.valuation import parse_tag_vector


@pytest.fixture
def tv():
    # tv("T?F") -> tag vector
    return parse_tag_vector


@pytest.fixture
def make_engine():
    def _make(tag_count, **kwargs):
        return CoverageBoundEngine(EngineConfig(tag_count=tag_count, **kwargs))
    return _make


@pytest.fixture
def rng():
    return np.random.default_rng(7)


@pytest.fixture
def random_text():
    def _random_text(rng, k, p_unknown):
        out = []
        for _ in range(k):
            if rng.random() < p_unknown:
                out.append("?")
            else:
                out.append("T" if rng.random() < 0.5 else "F")
        return "".join(out)
    return _random_text
