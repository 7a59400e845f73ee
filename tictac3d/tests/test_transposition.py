import unittest
from tictac3d.core.transposition import TranspositionTable, CacheFullError


class TestTranspositionTable(unittest.TestCase):

    def test_miss_then_hit(self):
        tt = TranspositionTable(table_size=101, capacity=10)
        self.assertIsNone(tt.get(5, 9))
        tt.put(5, 9, -13)
        self.assertEqual(tt.get(5, 9), -13)
        self.assertEqual((tt.hits, tt.misses), (1, 1))
        self.assertEqual(len(tt), 1)

    def test_zero_score_is_a_hit(self):
        tt = TranspositionTable(table_size=7, capacity=4)
        tt.put(0, 0, 0)
        self.assertEqual(tt.get(0, 0), 0)

    def test_hash_index(self):
        tt = TranspositionTable(table_size=1000, capacity=4)
        self.assertEqual(tt.index(1, 0), 46351 % 1000)
        self.assertEqual(tt.index(3, 5), ((46351 * 3) ^ 5) % 1000)

    def test_partial_match_is_not_a_hit(self):
        """
        Single bucket: every key collides. An entry that shares only one
        field with the query must not answer it.
        """
        tt = TranspositionTable(table_size=1, capacity=10)
        tt.put(1, 2, 5)
        tt.put(3, 4, -7)

        self.assertIsNone(tt.get(1, 4))
        self.assertIsNone(tt.get(3, 2))
        self.assertIsNone(tt.get(1, 3))
        self.assertEqual(tt.get(1, 2), 5)
        self.assertEqual(tt.get(3, 4), -7)

    def test_long_chain_finds_every_entry(self):
        tt = TranspositionTable(table_size=3, capacity=100)
        keys = [(x, x ^ 0b101) for x in range(60)]
        for n, (x, o) in enumerate(keys):
            tt.put(x, o, n % 55 - 27)
        for n, (x, o) in enumerate(keys):
            self.assertEqual(tt.get(x, o), n % 55 - 27)
        self.assertEqual(sum(tt.chain_length(b) for b in range(3)), 60)

    def test_capacity_is_fatal(self):
        tt = TranspositionTable(table_size=11, capacity=2)
        tt.put(1, 0, 1)
        tt.put(2, 0, 1)
        with self.assertRaises(CacheFullError):
            tt.put(3, 0, 1)
        # Entries already stored survive
        self.assertEqual(tt.get(2, 0), 1)
        self.assertEqual(len(tt), 2)

    def test_rejects_bad_sizes(self):
        with self.assertRaises(ValueError):
            TranspositionTable(table_size=0)
        with self.assertRaises(ValueError):
            TranspositionTable(table_size=10, capacity=0)

    def test_reset(self):
        tt = TranspositionTable(table_size=5, capacity=5)
        tt.put(1, 1, 3)
        tt.get(1, 1)
        tt.reset()
        self.assertEqual(len(tt), 0)
        self.assertEqual(tt.hits, 0)
        self.assertIsNone(tt.get(1, 1))

    def test_stats_histogram(self):
        tt = TranspositionTable(table_size=1, capacity=20)
        for x in range(12):
            tt.put(x, 0, 0)
        stats = tt.stats()
        self.assertEqual(stats.population, 12)
        self.assertEqual(stats.buckets, 1)
        self.assertEqual(stats.bucket_sizes[10], 1)
        self.assertEqual(sum(stats.bucket_sizes.values()), 1)
        self.assertAlmostEqual(stats.load_factor, 12.0)


if __name__ == '__main__':
    unittest.main()
