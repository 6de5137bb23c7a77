import pytest
from hypothesis import given
from hypothesis import strategies as st

from .conftest import *


def test_string_in():
    constraint = string_in(chars="abc", min_count=1, max_count=3)
    assert constraint("ab")
    assert constraint("ccc")
    assert not constraint("")
    assert not constraint("abcd")
    assert not constraint("abd")
    assert not constraint(["a", "b"])


@given(st.text(alphabet="abcd", max_size=6))
def test_string_round_trip(value):
    constraint = string_in(chars="abc", max_count=5)
    if constraint(value):
        assert constraint.unform(constraint.conform(value)) == value
    else:
        assert constraint.conform(value) is INVALID


def test_hostname_string():
    constraint = ModuleRegistry.get("hostname-string")
    assert constraint("a-b--c")
    assert not constraint("-a")
    assert not constraint("a-")
    assert not constraint("a.b")

    conformed = constraint.conform("a-b--c")
    assert conformed == {
        "prefix": ["a"],
        "sections": [
            {"hyphen": ["-"], "suffix": ["b"]},
            {"hyphen": ["-", "-"], "suffix": ["c"]},
        ],
    }
    assert constraint.unform(conformed) == "a-b--c"


@given(st.text(alphabet="ab-", min_size=1, max_size=10))
def test_hostname_string_round_trip(value):
    constraint = ModuleRegistry.get("hostname-string")
    assert constraint(value) == HostPartConstraint()(value)
    if constraint(value):
        assert constraint.unform(constraint.conform(value)) == value


def test_charseq():
    constraint = charseq_in(count=2, chars="xy")
    assert constraint(["x", "y"])
    assert constraint(("y", "y"))
    assert not constraint("xy")
    assert not constraint(["x"])
    assert not constraint(["x", "z"])
    assert not constraint(["xy", "y"])


def test_explain():
    constraint = string_in(chars="ab", max_count=2)
    assert constraint.explain("ab") == []

    problems = constraint.explain("abc")
    assert len(problems) == 2
    assert problems[1].value == "c"
    assert problems[1].index == (2,)

    assert [problem.reason for problem in constraint.explain(5)] == ["is not a string"]


def test_unform_requires_characters():
    constraint = string_in(chars="abc")
    with pytest.raises(NotImplementedError):
        constraint.unform(["ab", "c"])


def test_with_generator_not_implemented():
    with pytest.raises(NotImplementedError):
        string_in(chars="abc").with_generator(lambda rng: "abc")


def test_string_like_by_name():
    from lockstep.modules.strings.string_like import string_like
    assert string_like("hostname-charseq")("abc")


@pytest.mark.parametrize("options", [
    {"count": 2, "min_count": 1},
    {"min_count": 3, "max_count": 2},
    {"chars": "", "min_count": 1},
    {"chars": ["ab"]},
    {"count": -1},
])
def test_charseq_configuration_errors(options):
    with pytest.raises(ConfigurationError):
        charseq_in(**options)
