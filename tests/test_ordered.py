import pytest

from balancedtrees import InvalidPositionError, NoSuchVertexError, OrderedBinaryTree
from balancedtrees.checks import validate_order


def preorder(tree):
    return [p.get_element() for p in tree.preorder()]


@pytest.fixture
def tree():
    yield OrderedBinaryTree([5, 3, 8, 1, 4, 7, 9])


def test_insert_rejects_none():
    t = OrderedBinaryTree()
    with pytest.raises(ValueError):
        t.insert(None)
    assert len(t) == 0


def test_insert_returns_new_position():
    t = OrderedBinaryTree([2])
    p = t.insert(1)
    assert p.get_element() == 1
    assert t.last_added() is p
    assert p.parent() is t.root()


def test_ties_go_left():
    t = OrderedBinaryTree([2, 2, 2])
    assert preorder(t) == [2, 2, 2]
    assert t.height() == 2
    assert not t.root().has_right()


def test_search_and_contains(tree):
    assert tree.search(7).get_element() == 7
    assert tree.search(6) is None
    assert tree.search(None) is None
    assert tree.contains(1)
    assert 9 in tree
    assert 10 not in tree


def test_search_on_empty_tree():
    t = OrderedBinaryTree()
    assert t.search(1) is None
    assert not t.contains(1)


def test_delete_leaf(tree):
    tree.delete(1)
    assert preorder(tree) == [5, 3, 4, 8, 7, 9]
    assert len(tree) == 6


def test_delete_vertex_with_one_child():
    t = OrderedBinaryTree([5, 3, 8, 9])
    t.delete(8)
    assert preorder(t) == [5, 3, 9]
    assert t.search(9).parent() is t.root()


def test_delete_with_two_children_uses_predecessor(tree):
    tree.delete(5)
    assert preorder(tree) == [4, 3, 1, 8, 7, 9]
    assert validate_order(tree)[0]


def test_delete_root_with_single_child():
    t = OrderedBinaryTree([1, 2])
    t.delete(1)
    assert t.root().get_element() == 2
    assert not t.root().has_parent()


def test_delete_last_element():
    t = OrderedBinaryTree([1])
    t.delete(1)
    assert t.is_empty()
    assert t.height() == -1


def test_delete_absent_is_noop(tree):
    before = OrderedBinaryTree([5, 3, 8, 1, 4, 7, 9])
    tree.delete(6)
    assert tree == before
    assert len(tree) == 7


def test_delete_one_duplicate_at_a_time():
    t = OrderedBinaryTree([2, 2, 2])
    t.delete(2)
    assert list(t) == [2, 2]
    t.delete(2)
    t.delete(2)
    assert t.is_empty()


def test_min_max(tree):
    assert tree.min() == 1
    assert tree.max() == 9
    with pytest.raises(NoSuchVertexError):
        OrderedBinaryTree().min()
    with pytest.raises(NoSuchVertexError):
        OrderedBinaryTree().max()


def test_key_function():
    t = OrderedBinaryTree(["ccc", "a", "bb"], key=len)
    assert list(t) == ["a", "bb", "ccc"]
    # equal keys are equal elements as far as the tree is concerned
    assert t.search("zz").get_element() == "bb"


def test_rotate_right_preserves_inorder():
    t = OrderedBinaryTree([5, 3, 8, 1, 4])
    t.rotate_right(t.root())
    assert preorder(t) == [3, 1, 5, 4, 8]
    assert list(t) == [1, 3, 4, 5, 8]
    assert not t.root().has_parent()
    assert t.search(4).parent().get_element() == 5
    assert validate_order(t)[0]


def test_rotate_left_preserves_inorder():
    t = OrderedBinaryTree([3, 1, 5, 4, 8])
    t.rotate_left(t.root())
    assert preorder(t) == [5, 3, 1, 4, 8]
    assert validate_order(t)[0]


def test_rotate_inner_vertex():
    t = OrderedBinaryTree([5, 3, 8, 7, 9])
    t.rotate_right(t.search(8))
    assert preorder(t) == [5, 3, 7, 8, 9]
    assert t.search(7).parent() is t.root()


def test_rotation_without_required_child_is_noop(tree):
    leaf = tree.search(9)
    tree.rotate_left(leaf)
    tree.rotate_right(leaf)
    assert preorder(tree) == [5, 3, 1, 4, 8, 7, 9]


def test_rotation_rejects_invalid_position(tree):
    with pytest.raises(InvalidPositionError):
        tree.rotate_left(None)


@pytest.mark.parametrize("method", ["rotate_left", "rotate_right"])
def test_rotation_rejects_vertex_of_another_tree(tree, method):
    other = OrderedBinaryTree([1, 2, 0])
    with pytest.raises(InvalidPositionError):
        getattr(tree, method)(other.root())
    assert preorder(tree) == [5, 3, 1, 4, 8, 7, 9]
    assert len(tree) == 7
    assert validate_order(tree) == (True, [])
    assert validate_order(other) == (True, [])


def test_rotation_rejects_vertex_kept_across_clear():
    t = OrderedBinaryTree([1, 2])
    old = t.root()
    t.clear()
    with pytest.raises(InvalidPositionError):
        t.rotate_left(old)
    assert t.is_empty()
    assert t.last_added() is None
    assert validate_order(t) == (True, [])


def test_key_of():
    t = OrderedBinaryTree(key=len)
    assert t.key_of("kiwi") == 4
    assert OrderedBinaryTree().key_of(7) == 7
