import types
from itertools import islice

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from lockstep.strategies import from_constraint

from .conftest import *


def test_generator_soundness(constraint: Constraint):
    """Every generated value satisfies the predicate."""
    for value in islice(constraint.generator(seed=0), 100):
        assert constraint(value), f"{constraint.describe()} generated {value!r}"


@settings(max_examples=100, deadline=None, suppress_health_check=[HealthCheck.too_slow])
@given(data=st.data())
def test_generator_soundness_hypothesis(constraint: Constraint, data):
    value = data.draw(from_constraint(constraint))
    assert constraint(value)


def test_generator_seeded(constraint: Constraint):
    first = list(islice(constraint.generator(seed=42), 20))
    second = list(islice(constraint.generator(seed=42), 20))
    assert first == second


def test_generator_restartable(constraint: Constraint):
    stream = constraint.generator(seed=3)
    consumed = list(islice(stream, 5))

    # A new stream does not share state with the one already consumed
    assert list(islice(constraint.generator(seed=3), 5)) == consumed


def test_check_passes(constraint: Constraint):
    report = check(constraint, num_samples=100, seed=1)
    assert report.passed
    assert report.num_samples == 100
    assert report.finished_at is not None


def test_conform_unform(constraint: Constraint):
    for value in islice(constraint.generator(seed=5), 25):
        conformed = constraint.conform(value)
        assert conformed is not INVALID
        assert constraint.unform(conformed) == value
        assert constraint.explain(value) == []


def test_predicate_never_raises(constraint: Constraint):
    for value in [None, 0, -1, 1.5, float("nan"), "", " ", "\x00", "@", [], {}, object(), b"bytes", True]:
        assert constraint(value) in (True, False)
        problems = constraint.explain(value)
        assert isinstance(problems, list)
        if not constraint(value):
            assert constraint.conform(value) is INVALID
            assert problems


def test_describe(constraint: Constraint):
    assert isinstance(constraint, Constraint)
    assert constraint.describe()
    assert repr(constraint) == constraint.describe()


def test_star_exports_keep_fixtures():
    import lockstep.core

    assert "constraint" not in lockstep.core.__all__
    assert not any(isinstance(getattr(lockstep.core, name), types.ModuleType) for name in lockstep.core.__all__)
