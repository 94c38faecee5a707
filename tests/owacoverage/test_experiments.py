import pandas as pd

from owacoverage.config import EngineConfig
from owacoverage.engine import CoverageBoundEngine
from owacoverage.errors import SolverUnknownError
from owacoverage.experiments import (
    print_summary, run_matrix_experiment, run_random_experiment, run_stream,
)
from owacoverage.valuation import parse_tag_vector


def test_run_stream_stops_on_saturation():
    eng = CoverageBoundEngine(EngineConfig(tag_count=1))
    vectors = [parse_tag_vector(t) for t in ["T", "F", "T", "?"]]
    res = run_stream(eng, vectors)
    assert res.stop_reason == "saturated"
    assert eng.tick_count == 2


def test_run_stream_exhausts_source():
    eng = CoverageBoundEngine(EngineConfig(tag_count=2))
    res = run_stream(eng, [parse_tag_vector("T?")])
    assert res.stop_reason == "exhausted"
    assert isinstance(res.frame, pd.DataFrame) and len(res.frame) == 1


def test_run_stream_zero_gap():
    eng = CoverageBoundEngine(EngineConfig(tag_count=2))
    res = run_stream(eng, [parse_tag_vector("TF"), parse_tag_vector("TT")], stop_on_zero_gap=True)
    assert res.stop_reason == "gap closed"
    assert eng.tick_count == 1


def test_run_stream_skips_unknown_points(monkeypatch):
    eng = CoverageBoundEngine(EngineConfig(tag_count=2))
    def _boom(families):
        raise SolverUnknownError("timeout")
    monkeypatch.setattr(eng.min_solver, "solve", _boom)
    res = run_stream(eng, [parse_tag_vector("T?"), parse_tag_vector("?F")])
    assert res.skipped_points == [1, 2]
    assert len(eng.series) == 0


def test_random_experiment_small():
    res = run_random_experiment(3, 0.2, max_ticks=200, seed=1, progress=False)
    s = res.engine.series
    assert len(s) >= 1
    assert s.upper[-1] <= 8
    assert res.stop_reason in {"saturated", "gap closed", "exhausted"}
    summ = res.summary()
    assert summ["label"] == "n=3_p=0.2"


def test_matrix_experiment_rows():
    df = run_matrix_experiment([(1, 1), (2, 1)], [0.1, 0.5], max_ticks=50, progress=False)
    assert len(df) == 4
    assert {"label", "lower", "upper", "stop_reason"} <= set(df.columns)


def test_print_summary(capsys, monkeypatch):
    from rich.console import Console
    from owacoverage import experiments
    monkeypatch.setattr(experiments, "console", Console(force_terminal=False, width=200))
    print_summary({"ticks": 3, "gap_percent": 12.5}, title="t")
    out = capsys.readouterr().out
    assert "ticks" in out and "12.5" in out
