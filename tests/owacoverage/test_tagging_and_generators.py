import numpy as np
import pandas as pd
import pytest

from owacoverage.generators import random_tag_vectors
from owacoverage.tagging import TagSchema
from owacoverage.valuation import count_unknowns, format_tag_vector, truth_vector


def test_instance_conversion():
    schema = TagSchema(["t3", "t6", "t7", "t8"])
    v = schema.from_instance({"t3": False, "t7": True, "other": False})
    assert format_tag_vector(v) == "TF?F"


def test_condition_pairs():
    schema = TagSchema(["a", "b", "c"])
    v = schema.from_condition_pairs([(True, False), (False, False), (False, True)])
    assert format_tag_vector(v) == "T?F"
    with pytest.raises(ValueError):
        schema.from_condition_pairs([(True, False)])


def test_schema_validation():
    with pytest.raises(ValueError):
        TagSchema([])
    with pytest.raises(ValueError):
        TagSchema(["a", "a"])


def test_vectors_from_frame():
    df = pd.DataFrame({
        "a": [True, False, None],
        "b": [False, np.nan, True],
        "ignored": [1, 2, 3],
    })
    schema = TagSchema(["b", "a"])
    got = [format_tag_vector(v) for v in schema.vectors_from_frame(df)]
    assert got == ["FT", "?F", "T?"]
    with pytest.raises(KeyError):
        list(TagSchema(["zzz"]).vectors_from_frame(df))


def test_random_vectors_reproducible():
    a = [format_tag_vector(v) for v in random_tag_vectors(5, 0.2, seed=3, max_ticks=20)]
    b = [format_tag_vector(v) for v in random_tag_vectors(5, 0.2, seed=3, max_ticks=20)]
    assert a == b and len(a) == 20
    assert all(len(s) == 5 for s in a)


def test_random_vectors_probability_extremes():
    none = list(random_tag_vectors(4, 0.0, max_ticks=30))
    assert all(count_unknowns(v) == 0 for v in none)
    allu = list(random_tag_vectors(4, 1.0, max_ticks=30))
    assert all(count_unknowns(v) == 4 for v in allu)
    # every Unknown carries a hint
    assert all(truth_vector(v) is not None for v in allu)


def test_random_vectors_unbounded_is_lazy():
    gen = random_tag_vectors(3, 0.5)
    first = [next(gen) for _ in range(1000)]
    assert len(first) == 1000


@pytest.mark.parametrize("kwargs", [
    {"num_tags": 0, "probability": 0.1},
    {"num_tags": 2, "probability": 1.5},
    {"num_tags": 2, "probability": 0.1, "max_ticks": -1},
])
def test_random_vectors_validation(kwargs):
    with pytest.raises(ValueError):
        next(random_tag_vectors(**kwargs))
