import csv

import pytest

from balancedtrees import AVLTree, RedBlackTree
from balancedtrees.checks import validate
from balancedtrees.generator import generate
from balancedtrees.storage import TreeStore


@pytest.fixture
def store():
    yield TreeStore()


def write_csv(path, header, rows):
    with open(path, "w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(header)
        writer.writerows([r] for r in rows)
    return str(path)


def test_store_holds_both_kinds(store):
    assert isinstance(store.tree("avl"), AVLTree)
    assert isinstance(store.tree("redblack"), RedBlackTree)
    with pytest.raises(KeyError):
        store.tree("btree")


def test_insert_and_delete_reach_every_tree(store):
    for e in [5, 1, 9, 1]:
        store.insert_element(e)
    assert len(store) == 4
    assert store.delete_element(1)
    assert not store.delete_element(42)
    for kind in ("avl", "redblack"):
        assert list(store.tree(kind)) == [1, 5, 9]
    assert store.inserted == 4
    assert store.deleted == 1
    assert store.summary() == {
        "avl": {"size": 3, "height": 1},
        "redblack": {"size": 3, "height": 1},
    }


def test_insert_none_is_rejected(store):
    with pytest.raises(ValueError):
        store.insert_element(None)


def test_ingest_skips_unparsable_rows(store, tmp_path):
    path = write_csv(tmp_path / "elements.csv", ["element"], ["3", "abc", "1", " 2 ", "7.0", "", "inf"])
    assert store.ingest_data(path) == 4
    assert list(store.tree("avl")) == [1, 2, 3, 7]
    assert list(store.tree("redblack")) == [1, 2, 3, 7]


def test_ingest_missing_file_or_column(store, tmp_path):
    assert store.ingest_data(str(tmp_path / "nope.csv")) == 0
    path = write_csv(tmp_path / "other.csv", ["value"], ["1"])
    assert store.ingest_data(path) == 0
    assert store.ingest_data(path, column_name="value") == 1


def test_generate_then_ingest(store, tmp_path):
    path = generate(str(tmp_path / "data" / "elements.csv"), count=500, low=0, high=100, seed=5)
    assert store.ingest_data(path) == 500
    for kind in ("avl", "redblack"):
        assert validate(store.tree(kind)) == (True, [])


def test_generate_is_reproducible(tmp_path):
    a = generate(str(tmp_path / "a.csv"), count=20, seed=3)
    b = generate(str(tmp_path / "b.csv"), count=20, seed=3)
    with open(a, encoding="utf-8") as fa, open(b, encoding="utf-8") as fb:
        lines = fa.read().splitlines()
        assert lines == fb.read().splitlines()
    assert lines[0] == "element"
    assert len(lines) == 21


def test_generate_rejects_bad_arguments(tmp_path):
    with pytest.raises(ValueError):
        generate(str(tmp_path / "x.csv"), count=-1)
    with pytest.raises(ValueError):
        generate(str(tmp_path / "x.csv"), low=10, high=1)
