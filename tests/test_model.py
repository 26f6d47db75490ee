import pytest

from olmresolve.resolution.model import (
    AtMost,
    CacheQuerier,
    Dependency,
    Entity,
    Mandatory,
    SimpleVariable,
    all_of,
    at_most,
    dependency,
    mandatory,
)


@pytest.fixture
def source():
    return CacheQuerier(
        {
            "a": Entity("a", {"k": "1"}),
            "b": Entity("b", {"k": "2"}),
            "c": Entity("c", {"k": "1"}),
        }
    )


def test_get(source):
    assert source.get("b") == Entity("b", {"k": "2"})
    with pytest.raises(KeyError):
        source.get("zzz")


def test_filter(source):
    ids = [e.id for e in source.filter(lambda e: e.properties["k"] == "1")]
    assert ids == ["a", "c"]


def test_all_of(source):
    pred = all_of(lambda e: e.properties["k"] == "1", lambda e: e.id != "a")
    assert [e.id for e in source.filter(pred)] == ["c"]


def test_group_by(source):
    groups = source.group_by(lambda e: [e.properties["k"]])
    assert {k: [e.id for e in v] for k, v in groups.items()} == {"1": ["a", "c"], "2": ["b"]}


def test_iterate(source):
    seen = []
    source.iterate(lambda e: seen.append(e.id))
    assert seen == ["a", "b", "c"]


def test_constraint_builders():
    assert mandatory() == Mandatory()
    assert dependency("x", "y") == Dependency(("x", "y"))
    assert at_most(1, "x") == AtMost(1, ("x",))


def test_simple_variable():
    var = SimpleVariable("v", [mandatory()])
    assert var.identifier == "v"
    assert var.constraints == [Mandatory()]