import unittest

from mazesolver import DisjointSet, Position


class DisjointSetTests(unittest.TestCase):
    def setUp(self) -> None:
        self.a, self.b, self.c, self.d = (Position(1, col) for col in (1, 3, 5, 7))
        self.sets = DisjointSet([self.a, self.b, self.c, self.d])

    def test_new_elements_are_singletons(self) -> None:
        self.assertEqual(len(self.sets), 4)
        self.assertEqual(self.sets.count_sets(), 4)
        self.assertEqual(self.sets.find(self.a), self.a)
        self.assertFalse(self.sets.connected(self.a, self.b))

    def test_union_connects_sets(self) -> None:
        self.assertTrue(self.sets.union(self.a, self.b))
        self.assertTrue(self.sets.connected(self.a, self.b))
        self.assertFalse(self.sets.connected(self.a, self.c))
        self.assertFalse(self.sets.union(self.b, self.a))
        self.assertEqual(self.sets.count_sets(), 3)

    def test_tie_union_raises_winning_rank(self) -> None:
        self.sets.union(self.a, self.b)

        self.assertEqual(self.sets.find(self.b), self.a)
        self.assertEqual(self.sets._rank[self.a], 1)
        self.assertEqual(self.sets._rank[self.b], 0)

    def test_union_by_rank_keeps_higher_root(self) -> None:
        self.sets.union(self.a, self.b)
        root = self.sets.find(self.a)
        self.sets.union(self.c, root)
        self.assertEqual(self.sets.find(self.c), root)
        self.assertEqual(self.sets._rank[root], 1)
        self.assertEqual(self.sets._rank[self.c], 0)

    def test_find_compresses_paths(self) -> None:
        self.sets.union(self.a, self.b)
        self.sets.union(self.c, self.d)
        self.sets.union(self.a, self.c)
        root = self.sets.find(self.a)

        self.assertEqual(self.sets.find(self.d), root)
        self.assertEqual(self.sets._parent[self.d], root)

    def test_unregistered_element_raises(self) -> None:
        with self.assertRaises(KeyError):
            self.sets.find(Position(9, 9))
        self.assertNotIn(Position(9, 9), self.sets)


if __name__ == "__main__":
    unittest.main()
