from decimal import Decimal
from itertools import islice
import random

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from lockstep.modules.numbers.fixed_point import max_magnitude, precision_of, scale_of, to_decimal

from .conftest import *


def test_precision_scale_boundary():
    constraint = decimal_in(precision=3, scale=1)
    assert constraint(Decimal("12.3"))
    assert constraint("12.3")
    assert constraint(12.3)
    assert constraint(99)
    assert not constraint(Decimal("123.4"))
    assert not constraint(Decimal("1.23"))
    assert not constraint("1000")


def test_negative_scale_rejected():
    d = Decimal("1E+2")
    assert scale_of(d) == -2
    assert not decimal_in(scale=2)(d)
    assert not decimal_in(precision=5, scale=2)(d)
    assert decimal_in(precision=5)(d)
    assert decimal_in(scale=2)(Decimal("100"))


def test_min_max():
    constraint = decimal_in(min="-1.5", max=10)
    assert constraint(-1.5)
    assert constraint(10)
    assert constraint("3.14159")
    assert not constraint(Decimal("-1.51"))
    assert not constraint(10.0001)


@pytest.mark.parametrize("value", ["abc", None, "NaN", "Infinity", float("inf"), float("nan"), True, [], {}, "1.2.3", " 12.3 ", "1_000", "12.3\n", "\u0661\u0662"])
def test_parse_failures_are_false(value):
    assert not decimal_in()(value)
    assert not decimal_in(precision=10, scale=2)(value)


@pytest.mark.parametrize("text, expected", [("12.3", "12.3"), ("-1E+2", "-1E+2"), (".5", "0.5"), ("+7.", "7")])
def test_numeric_literals(text, expected):
    assert to_decimal(text) == Decimal(expected)


@pytest.mark.parametrize("text", [" 12.3 ", "1_000", "1e", "-", ""])
def test_malformed_literals(text):
    with pytest.raises(ParseFailure):
        to_decimal(text)


@pytest.mark.parametrize("options", [
    {"min": 2, "max": 1},
    {"precision": 0},
    {"precision": -3},
    {"scale": -1},
    {"precision": 2, "scale": 3},
    {"scale": 2, "min": "1.234"},
    {"precision": 2, "max": 100},
    {"scale": 1, "min": "1E+1"},
    {"min": "NaN"},
    {"max": "abc"},
    {"step": 2},
])
def test_configuration_errors(options):
    with pytest.raises(ConfigurationError):
        DecimalConstraint(**options)


def test_config_and_options_are_exclusive():
    with pytest.raises(ConfigurationError):
        DecimalConstraint(DecimalConfig(precision=2), scale=1)


def test_bounds_satisfy_constraint():
    constraint = decimal_in(precision=4, scale=2, min="-1.5", max="22.25")
    assert constraint(constraint.config.min)
    assert constraint(constraint.config.max)


def test_max_magnitude():
    assert max_magnitude(3) == Decimal("999")
    assert max_magnitude(3, 1) == Decimal("99.9")
    assert max_magnitude(2, 2) == Decimal("0.99")
    assert precision_of(max_magnitude(7, 3)) == 7
    assert scale_of(max_magnitude(7, 3)) == 3


def test_generator_respects_derived_bounds():
    constraint = decimal_in(precision=3, scale=1)
    values = list(islice(constraint.generator(seed=11), 500))
    assert all(abs(value) <= Decimal("99.9") for value in values)
    assert all(scale_of(value) <= 1 and precision_of(value) <= 3 for value in values)
    # Both extremes are reachable
    assert Decimal("99.9") in values and Decimal("-99.9") in values


def test_generator_large_precision():
    constraint = decimal_in(precision=60, scale=30)
    assert check(constraint, num_samples=200, seed=0).passed


def test_idempotent_construction():
    first = decimal_in(precision=5, scale=2, min=-3)
    second = DecimalConstraint(DecimalConfig(precision=5, scale=2, min=-3))
    assert first.config == second.config

    probes = ["1.25", "1.255", "-3", "-3.01", "999.99", "1000", "1E+1", 0.5]
    assert [first(probe) for probe in probes] == [second(probe) for probe in probes]


@settings(max_examples=100, deadline=None)
@given(data=st.data(), precision=st.none() | st.integers(min_value=1, max_value=25))
def test_generator_soundness_over_configurations(data, precision):
    max_scale = precision if precision is not None else 25
    scale = data.draw(st.none() | st.integers(min_value=0, max_value=max_scale))

    # Bounds are drawn from the shape they must satisfy
    shape = decimal_in(precision=precision, scale=scale)
    rng = random.Random(data.draw(st.integers(min_value=0, max_value=2**32)))
    bounds = sorted(shape.generate(rng) for _ in range(2))
    low = data.draw(st.sampled_from([None, bounds[0]]))
    high = data.draw(st.sampled_from([None, bounds[1]]))

    constraint = decimal_in(precision=precision, scale=scale, min=low, max=high)
    if low is not None:
        assert constraint(low)
    if high is not None:
        assert constraint(high)

    for value in islice(constraint.generator(seed=data.draw(st.integers(min_value=0, max_value=2**32))), 20):
        assert constraint(value), f"{constraint.describe()} generated {value!r}"
