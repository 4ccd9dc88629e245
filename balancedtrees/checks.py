"""
Invariant validators for the tree classes.

Every validator returns ``(is_valid, errors)`` where ``errors`` lists one
human-readable message per violation found. They walk the vertices directly
and never modify the tree.
"""

from typing import List, Tuple

from .avl import AVLTree
from .errors import NoSuchVertexError
from .ordered import OrderedBinaryTree
from .red_black import Color, RedBlackTree


def _root_of(tree: OrderedBinaryTree):
    try:
        return tree.root()
    except NoSuchVertexError:
        return None


def _nodes(tree: OrderedBinaryTree):
    """Yield (node, bounds) pairs top-down; bounds are the key limits inherited from ancestors."""
    root = _root_of(tree)
    if root is None:
        return
    stack = [(root, None, None)]
    while stack:
        node, low, high = stack.pop()
        yield node, low, high
        k = tree.key_of(node.get_element())
        if node.get_left() is not None:
            stack.append((node.get_left(), low, k))
        if node.get_right() is not None:
            stack.append((node.get_right(), k, high))


def validate_order(tree: OrderedBinaryTree) -> Tuple[bool, List[str]]:
    """
    Check the binary-search-tree ordering and the parent back-references.

    Left descendants must compare <= their ancestor and right descendants >=;
    rotations may move an equal element to the right of its twin.
    """
    errors: List[str] = []
    root = _root_of(tree)
    if root is not None and root.get_parent() is not None:
        errors.append("root has a parent")

    count = 0
    for node, low, high in _nodes(tree):
        count += 1
        k = tree.key_of(node.get_element())
        if low is not None and not k >= low:
            errors.append(f"Order violation: {node.get_element()!r} is smaller than an ancestor it descends right from")
        if high is not None and not k <= high:
            errors.append(f"Order violation: {node.get_element()!r} is greater than an ancestor it descends left from")
        for child in (node.get_left(), node.get_right()):
            if child is not None and child.get_parent() is not node:
                errors.append(f"Broken parent link below {node.get_element()!r}")

    if count != len(tree):
        errors.append(f"Size mismatch: counted {count} vertices, tree reports {len(tree)}")
    return len(errors) == 0, errors


def validate_avl(tree: AVLTree) -> Tuple[bool, List[str]]:
    """Check that cached heights are exact and every balance factor is within [-1, 1]."""
    errors: List[str] = []
    computed = {}
    for node in tree.postorder():
        h_left = computed[id(node.get_left())] if node.get_left() is not None else -1
        h_right = computed[id(node.get_right())] if node.get_right() is not None else -1
        h = 1 + max(h_left, h_right)
        computed[id(node)] = h
        if node.height() != h:
            errors.append(f"Stale height at {node.get_element()!r}: cached {node.height()}, actual {h}")
        if abs(h_left - h_right) > 1:
            errors.append(f"Balance violation at {node.get_element()!r}: {h_left - h_right}")
    return len(errors) == 0, errors


def validate_red_black(tree: RedBlackTree) -> Tuple[bool, List[str]]:
    """
    Check the five red-black properties.

    Missing children are BLACK by construction, so property 3 holds whenever
    the others can be evaluated.
    """
    errors: List[str] = []
    root = _root_of(tree)
    if root is not None and tree.color(root) is not Color.BLACK:
        errors.append("Root is not BLACK")

    black_height = {}
    for node in tree.postorder():
        if node.get_color() not in (Color.RED, Color.BLACK):
            errors.append(f"Vertex {node.get_element()!r} has no color")
        if node.get_element() is None:
            errors.append("Phantom vertex left in the tree")

        children = (node.get_left(), node.get_right())
        if node.get_color() is Color.RED:
            for child in children:
                if child is not None and child.get_color() is Color.RED:
                    errors.append(f"Red violation: {node.get_element()!r} and its child {child.get_element()!r} are both RED")

        left_bh, right_bh = (black_height[id(c)] if c is not None else 1 for c in children)
        if left_bh != right_bh:
            errors.append(f"Black-height violation at {node.get_element()!r}: left={left_bh}, right={right_bh}")
        black_height[id(node)] = left_bh + (1 if node.get_color() is Color.BLACK else 0)
    return len(errors) == 0, errors


def validate(tree: OrderedBinaryTree) -> Tuple[bool, List[str]]:
    """Run every validator that applies to the type of tree."""
    _, errors = validate_order(tree)
    if isinstance(tree, AVLTree):
        errors.extend(validate_avl(tree)[1])
    if isinstance(tree, RedBlackTree):
        errors.extend(validate_red_black(tree)[1])
    return len(errors) == 0, errors
