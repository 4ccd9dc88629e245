from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Callable, Iterable, Iterator, Optional

from .errors import InvalidPositionError, NoSuchVertexError


class Position(ABC):
    @abstractmethod
    def get_element(self):
        """Return the element stored at this position."""
        pass

    def __eq__(self, other):
        """Return True if other is a Position equal to this one."""
        raise NotImplementedError('must be implemented by subclass')

    def __ne__(self, other):
        """Return True if other is not equal to this position."""
        return not (self == other)


class Tree(ABC):
    """Abstract base class representing a tree structure."""

    @abstractmethod
    def __len__(self) -> int:
        """Return the total number of elements in the tree."""
        pass

    def is_empty(self) -> bool:
        """Return True if the tree is empty."""
        return len(self) == 0

    @abstractmethod
    def __iter__(self):
        """Generate an iteration of the tree's elements."""
        pass

    @abstractmethod
    def positions(self) -> Iterable[Position]:
        """Generate an iteration of the tree's positions."""
        pass

    @abstractmethod
    def root(self) -> Position:
        """Return the root Position of the tree (NoSuchVertexError if empty)."""
        pass

    @abstractmethod
    def parent(self, p: Position) -> Optional[Position]:
        """Return the Position of p's parent (or None if p is root)."""
        pass

    @abstractmethod
    def children(self, p: Position) -> Iterable[Position]:
        """Return an iterable collection containing the children of Position p."""
        pass

    @abstractmethod
    def num_children(self, p: Position) -> int:
        """Return the number of children that Position p has."""
        pass

    def is_internal(self, p: Position) -> bool:
        """Return True if Position p has at least one child."""
        return self.num_children(p) > 0

    def is_leaf(self, p: Position) -> bool:
        """Return True if Position p has no children."""
        return self.num_children(p) == 0

    def is_root(self, p: Position) -> bool:
        """Return True if Position p represents the root of the tree."""
        return self.parent(p) is None


class BinaryTree(Tree):
    """Abstract base class representing a binary tree structure.

    Besides the child accessors, it provides the four classic traversals both
    as generators of positions and in visitor form (an action called once per
    vertex). All traversals are iterative, so they work on degenerate trees of
    any depth.
    """

    @abstractmethod
    def left(self, p: Position) -> Optional[Position]:
        """Return the Position of p's left child (or None if no child exists)."""
        pass

    @abstractmethod
    def right(self, p: Position) -> Optional[Position]:
        """Return the Position of p's right child (or None if no child exists)."""
        pass

    def sibling(self, p: Position) -> Optional[Position]:
        """Return the Position of p's sibling (or None if no sibling exists)."""
        parent = self.parent(p)
        if parent is None:
            return None
        if p is self.left(parent):
            return self.right(parent)
        return self.left(parent)

    def num_children(self, p: Position) -> int:
        count = 0
        if self.left(p) is not None:
            count += 1
        if self.right(p) is not None:
            count += 1
        return count

    def children(self, p: Position) -> Iterable[Position]:
        """Generate an iteration of Positions representing p's children."""
        if self.left(p) is not None:
            yield self.left(p)
        if self.right(p) is not None:
            yield self.right(p)

    # ------------------ Traversals ------------------
    def preorder(self) -> Iterator[Position]:
        """Generate a preorder iteration of positions in the tree."""
        if self.is_empty():
            return
        stack = [self.root()]
        while stack:
            p = stack.pop()
            yield p
            if self.right(p) is not None:
                stack.append(self.right(p))
            if self.left(p) is not None:
                stack.append(self.left(p))

    def inorder(self) -> Iterator[Position]:
        """Generate an inorder iteration of positions in the tree."""
        stack = []
        walk = None if self.is_empty() else self.root()
        while stack or walk is not None:
            # push the whole left branch, then visit its lowest vertex
            while walk is not None:
                stack.append(walk)
                walk = self.left(walk)
            p = stack.pop()
            yield p
            walk = self.right(p)

    def postorder(self) -> Iterator[Position]:
        """Generate a postorder iteration of positions in the tree."""
        if self.is_empty():
            return
        stack = [(self.root(), False)]
        while stack:
            p, expanded = stack.pop()
            if expanded:
                yield p
                continue
            stack.append((p, True))
            if self.right(p) is not None:
                stack.append((self.right(p), False))
            if self.left(p) is not None:
                stack.append((self.left(p), False))

    def breadthfirst(self) -> Iterator[Position]:
        """Generate a breadth-first iteration of positions in the tree."""
        if self.is_empty():
            return
        fringe = deque([self.root()])
        while fringe:
            p = fringe.popleft()
            yield p
            for c in self.children(p):
                fringe.append(c)

    def dfs_preorder(self, action: Callable[[Position], Any]) -> None:
        for p in self.preorder():
            action(p)

    def dfs_inorder(self, action: Callable[[Position], Any]) -> None:
        for p in self.inorder():
            action(p)

    def dfs_postorder(self, action: Callable[[Position], Any]) -> None:
        for p in self.postorder():
            action(p)

    def bfs(self, action: Callable[[Position], Any]) -> None:
        for p in self.breadthfirst():
            action(p)


class LinkedBinaryTree(BinaryTree):
    """Concrete implementation of a binary tree using a node-based, linked structure."""

    class _Node(Position):
        """Nested Node class that acts as a Position.

        The parent link is a back-reference used only to walk upwards; a tree
        owns its vertices through the root and the child links. _owner names
        the tree the vertex was made by, and is None once it is removed.
        """
        __slots__ = '_element', '_parent', '_left', '_right', '_owner'

        def __init__(self, e, parent=None, left=None, right=None):
            self._element = e
            self._parent = parent
            self._left = left
            self._right = right
            self._owner = None

        def get_element(self):
            if self._parent is self:  # convention for defunct node
                raise InvalidPositionError("Position no longer valid")
            return self._element

        def get_parent(self): return self._parent
        def get_left(self): return self._left
        def get_right(self): return self._right
        def set_element(self, e): self._element = e
        def set_parent(self, parent): self._parent = parent
        def set_left(self, left): self._left = left
        def set_right(self, right): self._right = right

        def has_parent(self) -> bool: return self._parent is not None
        def has_left(self) -> bool: return self._left is not None
        def has_right(self) -> bool: return self._right is not None

        def parent(self) -> 'LinkedBinaryTree._Node':
            if self._parent is None:
                raise NoSuchVertexError("vertex has no parent")
            return self._parent

        def left(self) -> 'LinkedBinaryTree._Node':
            if self._left is None:
                raise NoSuchVertexError("vertex has no left child")
            return self._left

        def right(self) -> 'LinkedBinaryTree._Node':
            if self._right is None:
                raise NoSuchVertexError("vertex has no right child")
            return self._right

        def height(self) -> int:
            """Return the height of the subtree rooted here (a leaf has height 0)."""
            level = -1
            frontier = [self]
            while frontier:
                level += 1
                frontier = [c for n in frontier for c in (n._left, n._right) if c is not None]
            return level

        def depth(self) -> int:
            """Return the number of levels separating this vertex from the root."""
            d = 0
            walk = self._parent
            while walk is not None:
                d += 1
                walk = walk._parent
            return d

        def _matches(self, other) -> bool:
            """Compare the per-vertex data of two vertices of the same type."""
            return self._element == other._element

        def __eq__(self, other):
            """Structural equality: same vertex type, equal elements, equal subtrees."""
            pending = [(self, other)]
            while pending:
                a, b = pending.pop()
                if a is None or b is None:
                    if a is not b:
                        return False
                    continue
                if type(a) is not type(b) or not a._matches(b):
                    return False
                pending.append((a._left, b._left))
                pending.append((a._right, b._right))
            return True

        __hash__ = None

        def __str__(self) -> str:
            return str(self._element)

    def __init__(self):
        self._root = None
        self._size = 0

    def _validate(self, p):
        """Validates the position and returns it as a node."""
        if not isinstance(p, self._Node):
            raise InvalidPositionError("Not valid position type")
        if p.get_parent() is p:
            raise InvalidPositionError("p is no longer in the tree")
        if p._owner is not self:
            raise InvalidPositionError("p does not belong to this tree")
        return p

    def _make_node(self, e, parent=None, left=None, right=None):
        """Factory function to create a new node storing element e."""
        node = self._Node(e, parent, left, right)
        node._owner = self
        return node

    def _retire(self, node) -> None:
        """Mark node as defunct, so later use of its Position is rejected."""
        node.set_element(None)
        node.set_left(None)
        node.set_right(None)
        node.set_parent(node)  # convention for defunct node
        node._owner = None

    def __len__(self) -> int: return self._size
    def parent(self, p: Position) -> Optional[Position]: return self._validate(p).get_parent()
    def left(self, p: Position) -> Optional[Position]: return self._validate(p).get_left()
    def right(self, p: Position) -> Optional[Position]: return self._validate(p).get_right()

    def root(self) -> Position:
        if self._root is None:
            raise NoSuchVertexError("tree is empty")
        return self._root

    def height(self, p: Optional[Position] = None) -> int:
        """Return the height of Position p, or of the whole tree (-1 if empty)."""
        if p is None:
            return -1 if self._root is None else self._root.height()
        return self._validate(p).height()

    def depth(self, p: Position) -> int:
        return self._validate(p).depth()

    def __iter__(self) -> Iterator[Any]:
        """Generate an iteration of the tree's elements in inorder."""
        for p in self.inorder():
            yield p.get_element()

    def positions(self) -> Iterable[Position]:
        """Generate an iteration of the tree's positions (using inorder traversal)."""
        yield from self.inorder()

    def clear(self) -> None:
        """Remove every element, leaving the tree empty.

        Positions handed out before the call become invalid.
        """
        stack = [] if self._root is None else [self._root]
        while stack:
            node = stack.pop()
            stack.extend(c for c in (node.get_left(), node.get_right()) if c is not None)
            self._retire(node)
        self._root = None
        self._size = 0

    def __eq__(self, other):
        if type(other) is not type(self):
            return False
        if self.is_empty() and other.is_empty():
            return True
        return len(self) == len(other) and self._root == other._root

    __hash__ = None

    def __str__(self) -> str:
        """Draw the tree one vertex per line, children hanging below their parent."""
        if self._root is None:
            return ""
        lines = []
        stack = [(self._root, "", "")]
        while stack:
            node, head, indent = stack.pop()
            lines.append(head + str(node))
            left, right = node.get_left(), node.get_right()
            if left is not None and right is not None:
                stack.append((right, indent + "└─»", indent + "   "))
                stack.append((left, indent + "├─›", indent + "│  "))
            elif left is not None:
                stack.append((left, indent + "└─›", indent + "   "))
            elif right is not None:
                stack.append((right, indent + "└─»", indent + "   "))
        return "\n".join(lines) + "\n"

    # ------------------ Structural primitives ------------------
    def _add_root(self, e):
        if self._root is not None: raise RuntimeError("Tree is not empty")
        self._root = self._make_node(e, None, None, None)
        self._size = 1
        return self._root

    def _add_left(self, p, e):
        parent = self._validate(p)
        if parent.get_left() is not None: raise RuntimeError("p already has a left child")
        child = self._make_node(e, parent, None, None)
        parent.set_left(child)
        self._size += 1
        return child

    def _add_right(self, p, e):
        parent = self._validate(p)
        if parent.get_right() is not None: raise RuntimeError("p already has a right child")
        child = self._make_node(e, parent, None, None)
        parent.set_right(child)
        self._size += 1
        return child

    def _replace(self, p, e):
        """Replaces the element at Position p with e and returns the replaced element."""
        node = self._validate(p)
        temp = node.get_element()
        node.set_element(e)
        return temp

    def _splice(self, node):
        """Unlink a node with at most one child, promoting that child into its slot."""
        if node.get_left() is not None and node.get_right() is not None:
            raise RuntimeError("p has two children")
        child = node.get_left() if node.get_left() is not None else node.get_right()
        parent = node.get_parent()
        if child is not None:
            child.set_parent(parent)
        if node is self._root:
            self._root = child
        elif node is parent.get_left():
            parent.set_left(child)
        else:
            parent.set_right(child)
        return child

    def _delete(self, p):
        """Removes the node at Position p and replaces it with its child, if any."""
        node = self._validate(p)
        self._splice(node)
        self._size -= 1
        temp = node.get_element()
        self._retire(node)
        return temp

    def _relink(self, parent, child, make_left_child):
        """Relink a parent node with its oriented child node."""
        if child is not None:
            child.set_parent(parent)
        if make_left_child:
            parent.set_left(child)
        else:
            parent.set_right(child)

    def _rotate(self, x):
        """Rotate node x above its parent, preserving the inorder sequence."""
        y = x.get_parent()
        z = y.get_parent()

        if z is None:
            self._root = x
            x.set_parent(None)
        else:
            self._relink(z, x, y is z.get_left())

        if x is y.get_left():
            self._relink(y, x.get_right(), True)
            self._relink(x, y, False)
        else:
            self._relink(y, x.get_left(), False)
            self._relink(x, y, True)
