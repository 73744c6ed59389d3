import sys
import os
import math
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from avl_tree import AVLTree, AVLInvariantError


def shape(node):
    if node is None:
        return None
    return (node.value, node.metadata, shape(node.left), shape(node.right))


def build(values):
    tree: AVLTree[int] = AVLTree()
    for v in values:
        tree.insert(v)
    return tree


class TestAVLTreeConstruction(unittest.TestCase):
    def test_new_tree_is_empty(self):
        tree: AVLTree[int] = AVLTree()
        self.assertEqual(tree.size(), 0)
        self.assertTrue(tree.is_empty())
        self.assertEqual(tree.height(), 0)
        self.assertIsNone(tree.root)

    def test_first_insert_creates_leaf_root(self):
        tree = build([10])
        self.assertEqual(tree.root.value, 10)
        self.assertEqual(tree.root.metadata, (0, 0))
        self.assertTrue(tree.root.is_leaf())
        self.assertEqual(tree.height(), 0)

    def test_iter_nodes_on_empty_tree(self):
        tree: AVLTree[int] = AVLTree()
        self.assertEqual(list(tree.iter_nodes()), [])
        self.assertEqual(tree.in_order(), [])


class TestAVLTreeInsert(unittest.TestCase):
    def test_insert_left_child_sets_left_height(self):
        tree = build([10, 5])
        self.assertEqual(tree.root.metadata, (1, 0))
        self.assertEqual(tree.root.left.value, 5)
        self.assertEqual(tree.root.left.metadata, (0, 0))

    def test_insert_right_child_sets_right_height(self):
        tree = build([10, 15])
        self.assertEqual(tree.root.metadata, (0, 1))
        self.assertEqual(tree.root.right.value, 15)

    def test_insert_multiple_elements(self):
        tree = build([10, 5, 15])
        self.assertEqual(tree.size(), 3)
        self.assertEqual(tree.root.metadata, (1, 1))
        self.assertEqual(tree.in_order(), [5, 10, 15])

    def test_insert_maintains_bst_property(self):
        values = [50, 30, 70, 20, 40, 60, 80]
        tree = build(values)
        self.assertEqual(tree.in_order(), sorted(values))

    def test_insert_strings(self):
        tree: AVLTree[str] = AVLTree()
        for word in ["pear", "apple", "fig", "banana"]:
            tree.insert(word)
        self.assertEqual(tree.in_order(), ["apple", "banana", "fig", "pear"])
        self.assertTrue(tree.is_balanced())

    def test_size_counts_distinct_values(self):
        tree = build([3, 1, 2, 3, 1, 4])
        self.assertEqual(tree.size(), 4)
        self.assertEqual(len(tree), 4)


class TestAVLTreeDuplicates(unittest.TestCase):
    def test_duplicate_at_root_leaf_is_no_op(self):
        once = build([10])
        twice = build([10, 10])
        self.assertEqual(shape(twice.root), shape(once.root))
        self.assertEqual(twice.size(), 1)

    def test_duplicate_at_internal_node_is_no_op(self):
        once = build([20, 10, 30, 5])
        again = build([20, 10, 30, 5, 10])
        self.assertEqual(shape(again.root), shape(once.root))
        self.assertEqual(again.size(), 4)

    def test_duplicate_does_not_rotate(self):
        tree = build([10, 20, 30])
        before = tree.rotation_counts()
        tree.insert(20)
        tree.insert(30)
        self.assertEqual(tree.rotation_counts(), before)


class TestAVLTreeRightRotation(unittest.TestCase):
    def test_ll_imbalance_triggers_right_rotation(self):
        tree = build([30, 20, 10])
        self.assertEqual(tree.root.value, 20)
        self.assertEqual(tree.root.left.value, 10)
        self.assertEqual(tree.root.right.value, 30)
        self.assertEqual(tree.rotation_counts()["left_left"], 1)

    def test_height_after_right_rotation(self):
        tree = build([30, 20, 10])
        self.assertEqual(tree.root.metadata, (1, 1))
        self.assertEqual(tree.height(), 1)


class TestAVLTreeLeftRotation(unittest.TestCase):
    def test_rr_imbalance_triggers_left_rotation(self):
        tree = build([10, 20, 30])
        self.assertEqual(tree.root.value, 20)
        self.assertEqual(tree.root.left.value, 10)
        self.assertEqual(tree.root.right.value, 30)
        self.assertEqual(tree.root.left.metadata, (0, 0))
        self.assertEqual(tree.root.right.metadata, (0, 0))
        self.assertEqual(tree.root.metadata, (1, 1))
        self.assertEqual(tree.rotation_counts()["right_right"], 1)


class TestAVLTreeLeftRightRotation(unittest.TestCase):
    def test_lr_imbalance_matches_single_rotation_shape(self):
        tree = build([30, 10, 20])
        self.assertEqual(shape(tree.root), shape(build([10, 20, 30]).root))
        self.assertEqual(tree.rotation_counts()["left_right"], 1)
        self.assertEqual(tree.rotation_counts()["left_left"], 0)


class TestAVLTreeRightLeftRotation(unittest.TestCase):
    def test_rl_imbalance_triggers_right_left_rotation(self):
        tree = build([10, 30, 20])
        self.assertEqual(tree.root.value, 20)
        self.assertEqual(tree.root.metadata, (1, 1))
        self.assertEqual(tree.rotation_counts()["right_left"], 1)


class TestAVLTreeDeepRebalance(unittest.TestCase):
    def test_rotation_below_root_keeps_parent_metadata(self):
        tree = build([50, 30, 70, 20, 10])
        self.assertEqual(tree.root.value, 50)
        self.assertEqual(tree.root.left.value, 20)
        self.assertEqual(tree.root.left.metadata, (1, 1))
        self.assertEqual(tree.root.metadata, (2, 1))

    def test_double_rotation_moves_inner_subtrees(self):
        tree = build([50, 20, 70, 10, 30, 25])
        self.assertEqual(tree.root.value, 30)
        self.assertEqual(tree.in_order(), [10, 20, 25, 30, 50, 70])
        self.assertEqual(tree.root.left.right.value, 25)
        self.assertTrue(tree.is_balanced())


class TestAVLTreeHeight(unittest.TestCase):
    def test_height_updates_after_insert(self):
        tree = build([10])
        self.assertEqual(tree.height(), 0)
        tree.insert(5)
        self.assertEqual(tree.height(), 1)
        tree.insert(15)
        self.assertEqual(tree.height(), 1)
        tree.insert(1)
        self.assertEqual(tree.height(), 2)

    def test_height_is_logarithmic_for_sorted_insert(self):
        n = 1000
        tree = build(range(n))
        bound = 1.45 * math.log2(n + 2) - 1.33
        self.assertLessEqual(tree.height(), bound)
        self.assertEqual(tree.size(), n)
        self.assertEqual(tree.in_order(), list(range(n)))
        self.assertTrue(tree.is_balanced())

    def test_sorted_insert_of_power_of_two_minus_one_is_perfect(self):
        tree = build(range(1, 16))
        self.assertEqual(tree.height(), 3)
        self.assertEqual(tree.root.value, 8)
        for node in tree.iter_nodes():
            self.assertEqual(node.balance_factor(), 0)


class TestAVLTreeTraversal(unittest.TestCase):
    def test_iter_nodes_visits_every_node_once(self):
        values = [50, 30, 70, 20, 40, 60, 80, 10]
        tree = build(values)
        visited = [node.value for node in tree.iter_nodes()]
        self.assertEqual(sorted(visited), sorted(values))

    def test_iter_nodes_starts_at_root(self):
        tree = build([20, 10, 30])
        self.assertEqual(next(tree.iter_nodes()).value, 20)

    def test_iter_yields_sorted_values(self):
        tree = build([5, 3, 8, 1])
        self.assertEqual(list(tree), [1, 3, 5, 8])

    def test_traversal_does_not_mutate(self):
        tree = build([5, 3, 8, 1, 4])
        before = shape(tree.root)
        list(tree.iter_nodes())
        tree.in_order()
        self.assertEqual(shape(tree.root), before)


class TestAVLTreeInvariantErrors(unittest.TestCase):
    def test_unordered_value_raises(self):
        tree: AVLTree[float] = AVLTree()
        tree.insert(1.0)
        with self.assertRaises(AVLInvariantError):
            tree.insert(float("nan"))
        self.assertEqual(tree.size(), 1)

    def test_balance_outside_range_raises(self):
        tree: AVLTree[int] = AVLTree()
        node = AVLTree.Node(10)
        node.metadata = (3, 0)
        with self.assertRaises(AVLInvariantError):
            tree._balance(node)

    def test_error_is_runtime_error(self):
        self.assertTrue(issubclass(AVLInvariantError, RuntimeError))


class TestAVLTreeRepr(unittest.TestCase):
    def test_repr_lists_values(self):
        tree = build([2, 1, 3])
        self.assertEqual(repr(tree), "AVLTree([1, 2, 3])")

    def test_str_reports_size_and_height(self):
        tree = build([2, 1, 3])
        self.assertEqual(str(tree), "AVLTree(size=3, height=1)")


if __name__ == "__main__":
    unittest.main()
