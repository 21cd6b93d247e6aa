import pytest

from ..jsonpointer import JSONPointer


def test_root():
    assert str(JSONPointer()) == ""
    assert len(JSONPointer()) == 0
    assert JSONPointer("") == JSONPointer()


def test_compose():
    p = JSONPointer() / "data" / "relationships"
    assert str(p) == "/data/relationships"
    assert str(p[0]) == "/data/relationships/0"
    assert p.components == ("data", "relationships")
    assert p.parent == JSONPointer("/data")


def test_escape():
    p = JSONPointer() / "a/b" / "m~n"
    assert str(p) == "/a~1b/m~0n"
    assert JSONPointer("/a~1b/m~0n") == p


def test_invalid():
    with pytest.raises(ValueError):
        JSONPointer("data")
    with pytest.raises(ValueError):
        JSONPointer().parent


def test_hashable():
    assert {JSONPointer("/a"): 1}[JSONPointer() / "a"] == 1
