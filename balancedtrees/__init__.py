"""Self-balancing ordered binary search trees: AVL and red-black."""

from .avl import AVLTree
from .binary_tree import BinaryTree, LinkedBinaryTree, Position, Tree
from .errors import InvalidPositionError, NoSuchVertexError, RotationNotSupportedError
from .ordered import OrderedBinaryTree
from .red_black import Color, RedBlackTree

__all__ = [
    "AVLTree",
    "BinaryTree",
    "Color",
    "InvalidPositionError",
    "LinkedBinaryTree",
    "NoSuchVertexError",
    "OrderedBinaryTree",
    "Position",
    "RedBlackTree",
    "RotationNotSupportedError",
    "Tree",
]
