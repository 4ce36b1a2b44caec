import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gridmaze.core.disjoint_set import DisjointSet

class TestDisjointSet(unittest.TestCase):
    def test_make_set(self):
        ds = DisjointSet()
        self.assertEqual([ds.make_set() for _ in range(3)], [0, 1, 2])
        self.assertEqual(len(ds), 3)
        for i in range(3):
            self.assertEqual(ds.find(i), i)
        self.assertFalse(ds.connected(0, 1))

    def test_union_connects(self):
        ds = DisjointSet(5)
        ds.union(0, 1)
        ds.union(3, 4)
        self.assertTrue(ds.connected(0, 1))
        self.assertTrue(ds.connected(4, 3))
        self.assertFalse(ds.connected(1, 3))

        ds.union(1, 4)
        self.assertTrue(ds.connected(0, 3))
        self.assertFalse(ds.connected(2, 0))

    def test_rank_tie_increments_root(self):
        ds = DisjointSet(2)
        root = ds.union(0, 1)
        self.assertEqual(root, 1)
        self.assertEqual(ds.parent[0], 1)
        self.assertEqual(ds.rank[1], 1)
        self.assertEqual(ds.rank[0], 0)

    def test_lower_rank_goes_under_higher(self):
        ds = DisjointSet(3)
        ds.union(0, 1) # root 1, rank 1
        root = ds.union(2, 0)
        self.assertEqual(root, 1)
        self.assertEqual(ds.parent[2], 1)
        self.assertEqual(ds.rank[1], 1) # No tie, no increment

        # Argument order doesn't matter
        ds2 = DisjointSet(3)
        ds2.union(0, 1)
        self.assertEqual(ds2.union(1, 2), 1)
        self.assertEqual(ds2.rank[1], 1)

    def test_union_same_set_is_noop(self):
        ds = DisjointSet(3)
        ds.union(0, 1)
        parents = list(ds.parent)
        ranks = list(ds.rank)
        self.assertEqual(ds.union(1, 0), ds.find(0))
        self.assertEqual(list(ds.parent), parents)
        self.assertEqual(list(ds.rank), ranks)

    def test_path_compression(self):
        ds = DisjointSet(4)
        # Chain 0 -> 1 -> 2 -> 3 built by hand
        ds.parent[0] = 1
        ds.parent[1] = 2
        ds.parent[2] = 3
        self.assertEqual(ds.find(0), 3)
        self.assertEqual(list(ds.parent), [3, 3, 3, 3])

    def test_long_chain_no_recursion_limit(self):
        n = 100000
        ds = DisjointSet(n)
        for i in range(n - 1):
            ds.parent[i] = i + 1
        self.assertEqual(ds.find(0), n - 1)
        self.assertEqual(ds.parent[0], n - 1)

if __name__ == '__main__':
    unittest.main()
