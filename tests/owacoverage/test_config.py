import pytest

from owacoverage.config import EngineConfig


def test_defaults():
    cfg = EngineConfig(tag_count=4)
    assert cfg.sample_size == 1
    assert cfg.resolved_max_possible == 16
    assert cfg.cross_check_matching and not cfg.use_maxsat_oracle
    assert cfg.solver_time_limit is None


def test_override_max_possible():
    assert EngineConfig(tag_count=4, max_possible=5).resolved_max_possible == 5


@pytest.mark.parametrize("kwargs", [
    {"tag_count": 0},
    {"tag_count": 2, "sample_size": 0},
    {"tag_count": 2, "max_possible": 0},
    {"tag_count": 2, "max_possible": 5},
    {"tag_count": 2, "solver_time_limit": 0},
])
def test_invalid_configs(kwargs):
    with pytest.raises(ValueError):
        EngineConfig(**kwargs)


def test_config_is_frozen():
    cfg = EngineConfig(tag_count=2)
    with pytest.raises(Exception):
        cfg.sample_size = 3
