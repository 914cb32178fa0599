import pytest

from pizarra.store import TupleList, is_variable_name
from pizarra.tuples import LindaTuple


def _store(*items):
    store = TupleList()
    for item in items:
        store.insert(str(item), item)
    return store


@pytest.mark.parametrize(
    "text, expected",
    [("?A", True), ("?Z", True), ("?a", False), ("?", False), ("?AA", False), ("A?", False)],
)
def test_is_variable_name(text, expected):
    assert is_variable_name(text) is expected


def test_new_list_is_empty():
    store = TupleList()
    assert store.is_empty()
    assert len(store) == 0
    assert store.find(LindaTuple("?A")) is None


def test_insert_counts():
    store = _store(LindaTuple("a"), LindaTuple("b"))
    assert len(store) == 2
    assert not store.is_empty()


def test_find_exact():
    store = _store(LindaTuple("1", "mi casa", "árbol"))
    assert store.find(LindaTuple("1", "mi casa", "árbol")) == LindaTuple("1", "mi casa", "árbol")
    assert store.find(LindaTuple("1", "mi casa", "pino")) is None


def test_find_with_variables():
    t3 = LindaTuple("aprieta", "el", "pan", "45", "34", "88")
    store = _store(t3, LindaTuple("1000"))
    assert store.find(LindaTuple("aprieta", "?X", "pan", "?Y", "34", "?Z")) == t3
    assert store.find(LindaTuple("?X")) == LindaTuple("1000")


def test_size_must_match():
    store = _store(LindaTuple("a", "b"))
    assert store.find(LindaTuple("?A")) is None


def test_repeated_variable_must_bind_consistently():
    store = _store(LindaTuple("x", "y"))
    assert store.find(LindaTuple("?A", "?A")) is None
    store.insert("[z,z]", LindaTuple("z", "z"))
    assert store.find(LindaTuple("?A", "?A")) == LindaTuple("z", "z")


def test_newest_match_first():
    store = _store(LindaTuple("old"), LindaTuple("new"))
    assert store.find(LindaTuple("?A")) == LindaTuple("new")


def test_find_returns_copy():
    original = LindaTuple("a", "b")
    store = _store(original)
    found = store.find(LindaTuple("?A", "?B"))
    found.set(1, "changed")
    assert store.find(LindaTuple("?A", "?B")) == LindaTuple("a", "b")


def test_remove_one_of_duplicates():
    item = LindaTuple("a", "b")
    store = _store(item, LindaTuple("a", "b"))
    assert store.remove(str(item)) is True
    assert len(store) == 1
    assert store.remove(str(item)) is True
    assert store.is_empty()


def test_remove_missing_key():
    store = _store(LindaTuple("a"))
    assert store.remove("[b]") is False
    assert len(store) == 1