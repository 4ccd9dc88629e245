from typing import Optional

from .binary_tree import Position
from .errors import RotationNotSupportedError
from .ordered import OrderedBinaryTree


class AVLTree(OrderedBinaryTree):
    """Ordered binary tree that keeps every vertex height-balanced.

    For each vertex the heights of its two subtrees differ by at most one.
    Heights are cached in the vertices and refreshed bottom-up after every
    insert and delete, rotating wherever a vertex is found out of balance.
    """

    class _AVLNode(OrderedBinaryTree._Node):
        """Node storing the height of the subtree rooted at it."""
        __slots__ = '_height',

        def __init__(self, e, parent=None, left=None, right=None):
            super().__init__(e, parent, left, right)
            self._height = 0

        def height(self) -> int:
            return self._height

        def balance(self) -> int:
            """Return height(left) - height(right), counting a missing child as -1."""
            h_left = self._left._height if self._left is not None else -1
            h_right = self._right._height if self._right is not None else -1
            return h_left - h_right

        def _matches(self, other) -> bool:
            return self._height == other._height and super()._matches(other)

        def __str__(self) -> str:
            return f"{self._element} {self._height}/{self.balance()}"

    _Node = _AVLNode

    def _update_height(self, node) -> None:
        """Recompute the cached height of node from its children."""
        h_left = node.get_left().height() if node.get_left() is not None else -1
        h_right = node.get_right().height() if node.get_right() is not None else -1
        node._height = 1 + max(h_left, h_right)

    def _rebalance(self, node) -> None:
        """Walk from node up to the root refreshing heights and rotating where needed."""
        while node is not None:
            self._update_height(node)
            balance = node.balance()

            if balance == -2:
                q = node.get_right()
                if q.balance() == 1:
                    # zig-zag: straighten it before the main rotation
                    self._rotate_right(q)
                    self._update_height(q)
                    self._update_height(q.get_parent())
                self._rotate_left(node)
                self._update_height(node)
                self._update_height(node.get_parent())

            elif balance == 2:
                p = node.get_left()
                if p.balance() == -1:
                    self._rotate_left(p)
                    self._update_height(p)
                    self._update_height(p.get_parent())
                self._rotate_right(node)
                self._update_height(node)
                self._update_height(node.get_parent())

            node = node.get_parent()

    def insert(self, e) -> Position:
        """Insert e and rebalance the tree from the new vertex upwards."""
        node = super().insert(e)
        self._rebalance(node)
        return node

    def delete(self, e) -> None:
        """Remove one occurrence of e and rebalance from the removal point upwards."""
        node = self._removable_node(e)
        if node is None:
            return
        parent: Optional[OrderedBinaryTree._Node] = node.get_parent()
        self._delete(node)
        self._rebalance(parent)

    def rotate_left(self, p: Position) -> None:
        """AVL trees cannot be rotated by their users: it would unbalance them."""
        raise RotationNotSupportedError("AVL trees cannot be rotated left by the user")

    def rotate_right(self, p: Position) -> None:
        """AVL trees cannot be rotated by their users: it would unbalance them."""
        raise RotationNotSupportedError("AVL trees cannot be rotated right by the user")
