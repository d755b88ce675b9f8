from collections import deque
from typing import Any, Iterable, Iterator, Optional, Tuple


EMPTY_MARKER = "**[Empty]**"

# Child state bits: left child present, right child present.
NO_CHILDREN = 0b00
RIGHT_ONLY = 0b01
LEFT_ONLY = 0b10
BOTH_CHILDREN = 0b11


class KeyNotFoundError(KeyError):
    """Raised when a key is absent from the tree."""

    def __init__(self, key: Any):
        super().__init__(key)
        self.key = key


class _Node:
    """A tree node. Each node is referenced by exactly one parent slot."""
    __slots__ = 'key', 'value', 'left', 'right'

    def __init__(self, key, value, left=None, right=None):
        self.key = key
        self.value = value
        self.left = left
        self.right = right

    def child_state(self) -> int:
        """Return the 2-bit classification of which child slots are populated."""
        state = NO_CHILDREN
        if self.left is not None:
            state |= LEFT_ONLY
        if self.right is not None:
            state |= RIGHT_ONLY
        return state

    def __repr__(self):
        return f"_Node({self.key!r}, {self.value!r})"


class OrderedTree:
    """Ordered key/value container backed by an unbalanced binary search tree.

    Smaller keys go left, greater or equal keys go right. Equal keys are
    kept as separate nodes; lookups and removals see the shallowest one,
    and the next duplicate becomes visible once it is removed.

    The tree never rebalances, so operations are O(height): O(log n) for
    random insertion order and O(n) for sorted input.
    """

    def __init__(self):
        self._root: Optional[_Node] = None
        self._size = 0

    @classmethod
    def from_sequence(cls, pairs: Iterable[Tuple[Any, Any]]) -> "OrderedTree":
        """Build a tree by inserting (key, value) pairs in order."""
        tree = cls()
        for key, value in pairs:
            tree.insert(key, value)
        return tree

    # ------------------ Accessors ------------------
    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._root is None

    def __contains__(self, key) -> bool:
        return self._find(key) is not None

    def __iter__(self) -> Iterator[Any]:
        """Generate the keys in ascending order."""
        for node in self._in_order_nodes():
            yield node.key

    def items(self) -> Iterator[Tuple[Any, Any]]:
        for node in self._in_order_nodes():
            yield node.key, node.value

    def values(self) -> Iterator[Any]:
        for node in self._in_order_nodes():
            yield node.value

    def height(self) -> int:
        """Return the number of levels in the tree (0 when empty)."""
        if self._root is None:
            return 0
        levels = 0
        level = [self._root]
        while level:
            levels += 1
            level = [child for node in level for child in (node.left, node.right) if child is not None]
        return levels

    def __repr__(self):
        return f"{type(self).__name__}({self.in_order_traversal()})"

    # ------------------ Lookup ------------------
    def _find(self, key) -> Optional[_Node]:
        """Return the shallowest node holding key, or None."""
        current = self._root
        while current is not None:
            if key == current.key:
                return current
            if key > current.key:
                current = current.right
            else:
                current = current.left
        return None

    def get(self, key, default=None):
        """Return the value stored under key, or default if the key is absent."""
        node = self._find(key)
        if node is None:
            return default
        return node.value

    def __getitem__(self, key):
        node = self._find(key)
        if node is None:
            raise KeyNotFoundError(key)
        return node.value

    # ------------------ Mutations ------------------
    def insert(self, key, value) -> None:
        """Insert (key, value). Equal keys are added to the right, never overwritten."""
        self._size += 1
        if self._root is None:
            self._root = _Node(key, value)
            return

        current = self._root
        while True:
            if key < current.key:
                if current.left is None:
                    current.left = _Node(key, value)
                    return
                current = current.left
            else:
                if current.right is None:
                    current.right = _Node(key, value)
                    return
                current = current.right

    def __setitem__(self, key, value):
        self.insert(key, value)

    def remove(self, key):
        """Remove the node holding key and return its value.

        Raises KeyNotFoundError if the key is absent; the tree is left
        untouched in that case.
        """
        if self._root is None:
            raise KeyNotFoundError(key)

        if key == self._root.key:
            value = self._unlink(None, None, self._root)
            self._size -= 1
            return value

        # Match one level early so the parent slot is at hand for splicing.
        current = self._root
        while True:
            side = 'left' if key < current.key else 'right'
            child = getattr(current, side)
            if child is None:
                raise KeyNotFoundError(key)
            if key == child.key:
                value = self._unlink(current, side, child)
                self._size -= 1
                return value
            current = child

    def __delitem__(self, key):
        self.remove(key)

    def _unlink(self, parent: Optional[_Node], side: Optional[str], node: _Node):
        """Remove node from the slot parent.<side> (the root slot when parent is None)."""
        state = node.child_state()
        if state == BOTH_CHILDREN:
            return self._splice_predecessor(node)

        if state == RIGHT_ONLY:
            replacement = node.right
        elif state == LEFT_ONLY:
            replacement = node.left
        else:
            replacement = None

        if parent is None:
            self._root = replacement
        else:
            setattr(parent, side, replacement)
        node.left = node.right = None
        return node.value

    @staticmethod
    def _splice_predecessor(node: _Node):
        """Overwrite node with its in-order predecessor and splice the predecessor out.

        Returns the value node held before the overwrite.
        """
        removed_value = node.value

        pred_parent, pred = node, node.left
        while pred.right is not None:
            pred_parent, pred = pred, pred.right

        if pred_parent is node:
            node.left = pred.left
        else:
            pred_parent.right = pred.left

        node.key, node.value = pred.key, pred.value
        pred.left = None
        return removed_value

    def clear(self) -> None:
        self._root = None
        self._size = 0

    # ------------------ Traversals ------------------
    def _in_order_nodes(self) -> Iterator[_Node]:
        stack = []
        current = self._root
        while stack or current is not None:
            while current is not None:
                stack.append(current)
                current = current.left
            current = stack.pop()
            yield current
            current = current.right

    def pre_order(self) -> Iterator[Any]:
        """Generate keys node, left subtree, right subtree."""
        if self._root is None:
            return
        stack = [self._root]
        while stack:
            node = stack.pop()
            yield node.key
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def in_order(self) -> Iterator[Any]:
        """Generate keys left subtree, node, right subtree."""
        return iter(self)

    def post_order(self) -> Iterator[Any]:
        """Generate keys left subtree, right subtree, node."""
        stack = []
        last_visited = None
        current = self._root
        while stack or current is not None:
            if current is not None:
                stack.append(current)
                current = current.left
                continue
            top = stack[-1]
            if top.right is not None and top.right is not last_visited:
                current = top.right
            else:
                yield top.key
                last_visited = stack.pop()

    def breadth_first(self) -> Iterator[Any]:
        """Generate keys level by level, left to right."""
        if self._root is None:
            return
        queue = deque([self._root])
        while queue:
            node = queue.popleft()
            yield node.key
            if node.left is not None:
                queue.append(node.left)
            if node.right is not None:
                queue.append(node.right)

    def _render(self, keys: Iterable[Any]) -> str:
        if self._root is None:
            return EMPTY_MARKER
        return "[" + ", ".join(str(k) for k in keys) + "]"

    def pre_order_traversal(self) -> str:
        return self._render(self.pre_order())

    def in_order_traversal(self) -> str:
        return self._render(self.in_order())

    def post_order_traversal(self) -> str:
        return self._render(self.post_order())

    def breadth_first_traversal(self) -> str:
        return self._render(self.breadth_first())
