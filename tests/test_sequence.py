import unittest

from tripwise.errors import IndexOutOfRange
from tripwise.sequence import OrderedSequence


class TestOrderedSequence(unittest.TestCase):
    def setUp(self):
        self.seq = OrderedSequence(["a", "b", "c"])

    def test_append_and_get(self):
        self.seq.append("d")
        self.assertEqual(self.seq.size(), 4)
        self.assertEqual(self.seq.get(3), "d")
        self.assertEqual(self.seq[0], "a")

    def test_insert_shifts_later_elements(self):
        self.seq.insert_at(1, "x")
        self.assertEqual(self.seq.to_list(), ["a", "x", "b", "c"])
        # inserting at size() appends
        self.seq.insert_at(4, "z")
        self.assertEqual(self.seq.get(4), "z")

    def test_set_returns_previous(self):
        previous = self.seq.set(2, "q")
        self.assertEqual(previous, "c")
        self.assertEqual(self.seq.to_list(), ["a", "b", "q"])

    def test_remove_returns_removed(self):
        removed = self.seq.remove_at(0)
        self.assertEqual(removed, "a")
        self.assertEqual(self.seq.to_list(), ["b", "c"])
        self.assertEqual(self.seq.index_of("c"), 1)

    def test_bounds(self):
        with self.assertRaises(IndexOutOfRange):
            self.seq.insert_at(4, "x")
        with self.assertRaises(IndexOutOfRange):
            self.seq.insert_at(-1, "x")
        for op in (self.seq.get, self.seq.remove_at):
            with self.assertRaises(IndexOutOfRange):
                op(3)
            with self.assertRaises(IndexOutOfRange):
                op(-1)
        with self.assertRaises(IndexOutOfRange):
            self.seq.set(3, "x")
        with self.assertRaises(IndexError):
            self.seq[-1]
        # failed calls leave the sequence untouched
        self.assertEqual(self.seq.to_list(), ["a", "b", "c"])

    def test_empty(self):
        empty = OrderedSequence()
        self.assertTrue(empty.is_empty())
        self.assertEqual(len(empty), 0)
        with self.assertRaises(IndexOutOfRange):
            empty.get(0)
        empty.insert_at(0, 1)
        self.assertFalse(empty.is_empty())

    def test_contains_and_index_of(self):
        self.assertTrue(self.seq.contains("b"))
        self.assertIn("c", self.seq)
        self.assertFalse(self.seq.contains("z"))
        self.assertEqual(self.seq.index_of("z"), -1)
        self.seq.append("a")
        self.assertEqual(self.seq.index_of("a"), 0)

    def test_iteration_and_equality(self):
        self.assertEqual(list(self.seq), ["a", "b", "c"])
        self.assertEqual(self.seq, OrderedSequence(["a", "b", "c"]))
        self.assertNotEqual(self.seq, OrderedSequence(["c", "b", "a"]))
        # to_list is a copy
        self.seq.to_list().append("d")
        self.assertEqual(self.seq.size(), 3)


if __name__ == "__main__":
    unittest.main()
