from typing import Any, Callable, Iterable, Optional

from .binary_tree import LinkedBinaryTree, Position
from .errors import NoSuchVertexError


class OrderedBinaryTree(LinkedBinaryTree):
    """Binary search tree keeping its elements in inorder sequence.

    Every element in the left subtree of a vertex compares less than or equal
    to the vertex, and every element in the right subtree compares greater or
    equal. Equal elements are routed left on insertion, but a rotation may
    carry one to the right; the tree behaves as an ordered multiset.

    ``key`` plays the same role as in ``sorted``: when given, elements are
    ordered by ``key(element)`` instead of by the elements themselves.
    """

    def __init__(self, iterable: Iterable[Any] = (), key: Optional[Callable[[Any], Any]] = None):
        super().__init__()
        self._key = key if key is not None else (lambda e: e)
        self._last_added = None
        for e in iterable:
            self.insert(e)

    # ------------------ Queries ------------------
    def _find_node(self, e):
        """Return the first node whose element compares equal to e on a root-to-leaf descent."""
        if e is None:
            return None
        k = self._key(e)
        walk = self._root
        while walk is not None:
            here = self._key(walk.get_element())
            if k == here:
                return walk
            walk = walk.get_left() if k < here else walk.get_right()
        return None

    def search(self, e) -> Optional[Position]:
        """Return the Position holding e, or None if e is not in the tree."""
        return self._find_node(e)

    def contains(self, e) -> bool:
        return self._find_node(e) is not None

    def __contains__(self, e) -> bool:
        return self.contains(e)

    def _subtree_last(self, node):
        """Return the node holding the maximum of the subtree rooted at node."""
        walk = node
        while walk.get_right() is not None:
            walk = walk.get_right()
        return walk

    def _subtree_first(self, node):
        walk = node
        while walk.get_left() is not None:
            walk = walk.get_left()
        return walk

    def min(self):
        """Return the smallest element (NoSuchVertexError if the tree is empty)."""
        if self._root is None:
            raise NoSuchVertexError("tree is empty")
        return self._subtree_first(self._root).get_element()

    def max(self):
        """Return the largest element (NoSuchVertexError if the tree is empty)."""
        if self._root is None:
            raise NoSuchVertexError("tree is empty")
        return self._subtree_last(self._root).get_element()

    def last_added(self) -> Optional[Position]:
        """Return the Position created by the most recent insert.

        Only meaningful immediately after ``insert``; any other mutation leaves
        the returned value undefined.
        """
        return self._last_added

    def key_of(self, e):
        """Return the value the tree orders e by."""
        return self._key(e)

    # ------------------ Mutations ------------------
    def clear(self) -> None:
        super().clear()
        self._last_added = None

    def insert(self, e) -> Position:
        """Insert e keeping the inorder sequence sorted; return its new Position."""
        if e is None:
            raise ValueError("cannot insert None into the tree")
        if self._root is None:
            node = self._add_root(e)
        else:
            k = self._key(e)
            walk = self._root
            while True:
                if k <= self._key(walk.get_element()):
                    if walk.get_left() is None:
                        node = self._add_left(walk, e)
                        break
                    walk = walk.get_left()
                else:
                    if walk.get_right() is None:
                        node = self._add_right(walk, e)
                        break
                    walk = walk.get_right()
        self._last_added = node
        return node

    def _swap_with_predecessor(self, node):
        """Copy the inorder predecessor's element into node and return the predecessor.

        node must have two children; the returned node has at most one (a left one).
        """
        predecessor = self._subtree_last(node.get_left())
        self._replace(node, predecessor.get_element())
        return predecessor

    def _removable_node(self, e):
        """Return the node to splice out when deleting e, or None if e is absent."""
        node = self._find_node(e)
        if node is None:
            return None
        if node.get_left() is not None and node.get_right() is not None:
            node = self._swap_with_predecessor(node)
        return node

    def delete(self, e) -> None:
        """Remove one occurrence of e; do nothing if e is not in the tree."""
        node = self._removable_node(e)
        if node is None:
            return
        self._delete(node)

    # ------------------ Rotations ------------------
    def _rotate_left(self, node) -> None:
        """Rotate node down to the left, lifting its right child; no-op without one."""
        pivot = node.get_right()
        if pivot is None:
            return
        self._rotate(pivot)

    def _rotate_right(self, node) -> None:
        """Rotate node down to the right, lifting its left child; no-op without one."""
        pivot = node.get_left()
        if pivot is None:
            return
        self._rotate(pivot)

    def rotate_left(self, p: Position) -> None:
        self._rotate_left(self._validate(p))

    def rotate_right(self, p: Position) -> None:
        self._rotate_right(self._validate(p))
