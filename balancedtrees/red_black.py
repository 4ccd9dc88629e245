from enum import Enum
from typing import Optional

from .binary_tree import Position
from .errors import RotationNotSupportedError
from .ordered import OrderedBinaryTree


class Color(Enum):
    RED = "red"
    BLACK = "black"


class RedBlackTree(OrderedBinaryTree):
    """Ordered binary tree balanced by coloring its vertices.

    A red-black tree always satisfies:

    1. Every vertex is RED or BLACK.
    2. The root is BLACK.
    3. Every missing child counts as a BLACK leaf.
    4. A RED vertex has two BLACK children.
    5. Every path from a vertex down to a missing child crosses the same
       number of BLACK vertices.
    """

    class _RBNode(OrderedBinaryTree._Node):
        """Node storing its color."""
        __slots__ = '_color',

        def __init__(self, e, parent=None, left=None, right=None):
            super().__init__(e, parent, left, right)
            self._color = Color.RED

        def get_color(self) -> Color:
            return self._color

        def _matches(self, other) -> bool:
            return self._color is other._color and super()._matches(other)

        def __str__(self) -> str:
            tag = "R" if self._color is Color.RED else "B"
            return f"{tag}{{{self._element}}}"

    _Node = _RBNode

    def color(self, p: Position) -> Color:
        """Return the color of Position p (TypeError if p is not a red-black vertex)."""
        if not isinstance(p, self._RBNode):
            raise TypeError("position is not a red-black vertex")
        return self._validate(p).get_color()

    # ------------------ Helpers ------------------
    @staticmethod
    def _is_red(node) -> bool:
        return node is not None and node._color is Color.RED

    @staticmethod
    def _is_left(node) -> bool:
        return node.get_parent().get_left() is node

    @staticmethod
    def _sibling_of(node):
        parent = node.get_parent()
        if parent is None:
            return None
        if parent.get_left() is node:
            return parent.get_right()
        return parent.get_left()

    # ------------------ Insertion ------------------
    def insert(self, e) -> Position:
        """Insert e as a RED vertex and recolor/rotate until the tree is valid again."""
        node = super().insert(e)
        node._color = Color.RED
        self._fix_after_insert(node)
        return node

    def _fix_after_insert(self, v) -> None:
        while True:
            parent = v.get_parent()
            if parent is None:
                v._color = Color.BLACK
                return
            if not self._is_red(parent):
                return

            # a RED parent is never the root, so the grandparent exists
            grandparent = parent.get_parent()
            uncle = self._sibling_of(parent)
            if self._is_red(uncle):
                parent._color = uncle._color = Color.BLACK
                grandparent._color = Color.RED
                v = grandparent
                continue

            if self._is_left(v) != self._is_left(parent):
                if self._is_left(parent):
                    self._rotate_left(parent)
                else:
                    self._rotate_right(parent)
                v, parent = parent, v

            parent._color = Color.BLACK
            grandparent._color = Color.RED
            if self._is_left(v):
                self._rotate_right(grandparent)
            else:
                self._rotate_left(grandparent)
            return

    # ------------------ Deletion ------------------
    def delete(self, e) -> None:
        """Remove one occurrence of e and restore the red-black properties."""
        node = self._removable_node(e)
        if node is None:
            return

        phantom: Optional[RedBlackTree._RBNode] = None
        if node.get_left() is None and node.get_right() is None:
            # temporary BLACK leaf, so there is always a child to promote
            phantom = self._make_node(None, node)
            phantom._color = Color.BLACK
            node.set_left(phantom)
            child = phantom
        elif node.get_left() is not None:
            child = node.get_left()
        else:
            child = node.get_right()

        removed_red = self._is_red(node)
        self._delete(node)

        if self._is_red(child) or removed_red:
            child._color = Color.BLACK
        else:
            self._fix_after_delete(child)

        if phantom is not None:
            self._splice(phantom)
            self._retire(phantom)

    def _fix_after_delete(self, v) -> None:
        """Resolve a double-black deficiency sitting at v."""
        while v.get_parent() is not None:
            parent = v.get_parent()
            sibling = self._sibling_of(v)

            if self._is_red(sibling):
                parent._color = Color.RED
                sibling._color = Color.BLACK
                if self._is_left(v):
                    self._rotate_left(parent)
                else:
                    self._rotate_right(parent)
                sibling = self._sibling_of(v)

            if self._is_left(v):
                near, far = sibling.get_left(), sibling.get_right()
            else:
                near, far = sibling.get_right(), sibling.get_left()

            if not self._is_red(near) and not self._is_red(far):
                sibling._color = Color.RED
                if self._is_red(parent):
                    parent._color = Color.BLACK
                    return
                v = parent
                continue

            if not self._is_red(far):
                near._color = Color.BLACK
                sibling._color = Color.RED
                if self._is_left(v):
                    self._rotate_right(sibling)
                else:
                    self._rotate_left(sibling)
                sibling = self._sibling_of(v)
                far = sibling.get_right() if self._is_left(v) else sibling.get_left()

            sibling._color = parent._color
            parent._color = Color.BLACK
            far._color = Color.BLACK
            if self._is_left(v):
                self._rotate_left(parent)
            else:
                self._rotate_right(parent)
            return

    def rotate_left(self, p: Position) -> None:
        """Red-black trees cannot be rotated by their users: it would unbalance them."""
        raise RotationNotSupportedError("red-black trees cannot be rotated left by the user")

    def rotate_right(self, p: Position) -> None:
        """Red-black trees cannot be rotated by their users: it would unbalance them."""
        raise RotationNotSupportedError("red-black trees cannot be rotated right by the user")
