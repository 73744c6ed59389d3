from typing import TypeVar, Generic, Dict, List, Iterator, Optional, Tuple

T = TypeVar('T')


class AVLInvariantError(RuntimeError):
    """Raised when the tree reaches a state insertion can never produce."""


class AVLTree(Generic[T]):
    class Node:
        def __init__(self, value: T) -> None:
            self.value: T = value
            self.metadata: Tuple[int, int] = (0, 0)
            self.left: Optional['AVLTree.Node'] = None
            self.right: Optional['AVLTree.Node'] = None

        def balance_factor(self) -> int:
            return self.metadata[0] - self.metadata[1]

        def is_leaf(self) -> bool:
            return self.left is None and self.right is None

        def __repr__(self) -> str:
            return f"Node({self.value!r}, metadata={self.metadata})"

    def __init__(self) -> None:
        self._root: Optional[AVLTree.Node] = None
        self._size: int = 0
        self._rotations: Dict[str, int] = {
            "left_left": 0,
            "right_right": 0,
            "left_right": 0,
            "right_left": 0,
        }

    @property
    def root(self) -> Optional[Node]:
        return self._root

    def _subtree_height(self, node: Optional[Node]) -> int:
        # Height of a subtree as seen from its parent; absent children count as 0.
        if node is None:
            return 0
        return max(node.metadata) + 1

    def _fix_metadata(self, node: Node) -> None:
        node.metadata = (self._subtree_height(node.left), self._subtree_height(node.right))

    def _rotate_left(self, node: Node) -> Node:
        promoted = node.right
        assert promoted is not None

        node.right = promoted.left
        promoted.left = node

        self._fix_metadata(node)
        self._fix_metadata(promoted)

        return promoted

    def _rotate_right(self, node: Node) -> Node:
        promoted = node.left
        assert promoted is not None

        node.left = promoted.right
        promoted.right = node

        self._fix_metadata(node)
        self._fix_metadata(promoted)

        return promoted

    def _balance(self, node: Node) -> Node:
        """Restore the balance invariant at ``node`` and return the subtree root.

        Expects the children's metadata to be exact and ``node.metadata`` to
        reflect the children's heights after the insertion below it.
        """
        difference = node.balance_factor()
        if difference > 2 or difference < -2:
            raise AVLInvariantError(
                f"balance factor {difference} at node {node.value!r} is outside [-2, 2]"
            )

        if difference == 2:
            assert node.left is not None
            if node.left.balance_factor() < 0:
                node.left = self._rotate_left(node.left)
                self._rotations["left_right"] += 1
            else:
                self._rotations["left_left"] += 1
            node = self._rotate_right(node)
        elif difference == -2:
            assert node.right is not None
            if node.right.balance_factor() > 0:
                node.right = self._rotate_right(node.right)
                self._rotations["right_left"] += 1
            else:
                self._rotations["right_right"] += 1
            node = self._rotate_left(node)

        self._fix_metadata(node)
        return node

    def _insert(self, node: Node, value: T) -> Tuple[Node, int]:
        """Insert ``value`` below ``node``.

        Returns the root of the subtree after rebalancing and how much taller
        that subtree became (0 or 1).
        """
        height_before = max(node.metadata)
        left_height, right_height = node.metadata

        if value < node.value:
            if node.left is None:
                node.left = AVLTree.Node(value)
                self._size += 1
                left_height = 1
            else:
                node.left, delta = self._insert(node.left, value)
                left_height += delta
        elif value > node.value:
            if node.right is None:
                node.right = AVLTree.Node(value)
                self._size += 1
                right_height = 1
            else:
                node.right, delta = self._insert(node.right, value)
                right_height += delta
        elif value == node.value:
            return node, 0
        else:
            raise AVLInvariantError(
                f"{value!r} and {node.value!r} are neither less, greater nor equal"
            )

        node.metadata = (left_height, right_height)
        node = self._balance(node)

        delta = max(node.metadata) - height_before
        if delta not in (0, 1):
            raise AVLInvariantError(f"subtree height changed by {delta} after one insertion")
        return node, delta

    def insert(self, value: T) -> None:
        if self._root is None:
            self._root = AVLTree.Node(value)
            self._size = 1
            return
        self._root, _ = self._insert(self._root, value)

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def height(self) -> int:
        if self._root is None:
            return 0
        return max(self._root.metadata)

    def rotation_counts(self) -> Dict[str, int]:
        return dict(self._rotations)

    def iter_nodes(self) -> Iterator[Node]:
        """Depth-first walk over every node; does not modify the tree."""
        if self._root is None:
            return
        stack: List[AVLTree.Node] = [self._root]
        while stack:
            node = stack.pop()
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
            yield node

    def in_order(self) -> List[T]:
        result: List[T] = []
        stack: List[AVLTree.Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            result.append(node.value)
            node = node.right
        return result

    def is_balanced(self) -> bool:
        return all(abs(node.balance_factor()) <= 1 for node in self.iter_nodes())

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        return iter(self.in_order())

    def __repr__(self) -> str:
        return f"AVLTree({self.in_order()})"

    def __str__(self) -> str:
        return f"AVLTree(size={self._size}, height={self.height()})"
