import pytest

from .conftest import *


def test_named_constraints():
    assert isinstance(ModuleRegistry.get("web-url"), UrlConstraint)
    assert isinstance(ModuleRegistry.get("fully-qualified-hostname"), HostnameConstraint)
    assert "email-address" in ModuleRegistry.names()

    with pytest.raises(KeyError):
        ModuleRegistry.get("no-such-constraint")


def test_define_is_append_only():
    constraint = IntRangeConstraint(min=0, max=3)
    assert ModuleRegistry.define("registry-test-range", constraint) is constraint
    with pytest.raises(ValueError):
        ModuleRegistry.define("registry-test-range", IntRangeConstraint(min=0, max=3))
    assert ModuleRegistry.get("registry-test-range") is constraint

    with pytest.raises(TypeError):
        ModuleRegistry.define("registry-test-other", "not a constraint")


def test_instantiate():
    constraint = ModuleRegistry.instantiate({"name": "HostnameConstraint", "min_depth": 2, "max_depth": 2})
    assert isinstance(constraint, HostnameConstraint)
    assert constraint("example.com")
    assert not constraint("a.b.c")

    # Identical configurations give the same immutable instance
    assert ModuleRegistry.instantiate({"name": "HostnameConstraint", "min_depth": 2, "max_depth": 2}) is constraint


def test_instantiate_ref():
    assert ModuleRegistry.instantiate({"ref": "ip-address"}) is ModuleRegistry.get("ip-address")


def test_instantiate_nested():
    constraint = ModuleRegistry.instantiate({
        "name": "StringLike",
        "inner": {"name": "CharSeqConstraint", "chars": "ab", "max_count": 2},
    })
    assert constraint("ab")
    assert not constraint("abc")


def test_instantiate_errors():
    with pytest.raises(ValueError, match="not registered"):
        ModuleRegistry.instantiate({"name": "NoSuchConstraint"})
    with pytest.raises(ConfigurationError):
        ModuleRegistry.instantiate({"name": "DecimalConstraint", "precision": 0})


def test_instantiate_from_yaml(tmp_path):
    path = tmp_path / "constraint.yaml"
    path.write_text("name: DecimalConstraint\nprecision: 5\nscale: 2\nmin: -10\nmax: '99.5'\n")
    constraint = ModuleRegistry.instantiate_from_yaml(path)
    assert isinstance(constraint, DecimalConstraint)
    assert constraint("99.5")
    assert not constraint("99.51")
    assert not constraint("-10.5")

    with pytest.raises(FileNotFoundError):
        ModuleRegistry.instantiate_from_yaml(tmp_path / "missing.yaml")
