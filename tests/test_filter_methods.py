from __future__ import annotations

import importlib.util
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for filter-method tests")
class FilterTests(unittest.TestCase):
    def test_filter_keeps_even_numbers(self) -> None:
        from seqiter import filter_

        self.assertEqual(filter_([1, 2, 3, 4], lambda x: x % 2 == 0), [2, 4])

    def test_filter_always_true_copies_receiver(self) -> None:
        from seqiter import filter_

        numbers = [1, 6, 3, 8]
        out = filter_(numbers, lambda x: True)
        self.assertEqual(out, numbers)
        self.assertIsNot(out, numbers)

    def test_filter_preserves_relative_order(self) -> None:
        from seqiter import filter_

        words = ["cat", "elephant", "dog", "butterfly", "ant", "hippopotamus"]
        self.assertEqual(filter_(words, lambda w: len(w) > 5), ["elephant", "butterfly", "hippopotamus"])

    def test_filter_by_index(self) -> None:
        from seqiter import filter_

        items = ["apple", "banana", "cherry", "date", "elderberry"]
        self.assertEqual(filter_(items, lambda item, index: index % 2 == 0), ["apple", "cherry", "elderberry"])

    def test_filter_unique_values_through_receiver_argument(self) -> None:
        from seqiter import filter_, index_of

        values = [1, 2, 2, 3, 4, 4, 5]
        self.assertEqual(filter_(values, lambda x, i, seq: index_of(seq, x) == i), [1, 2, 3, 4, 5])

    def test_filter_uses_truthiness(self) -> None:
        from seqiter import filter_

        raw = ["hello", "", "world", " ", None, "x"]
        self.assertEqual(filter_(raw, lambda s: s and s.strip()), ["hello", "world", "x"])

    def test_filter_empty_receiver(self) -> None:
        from seqiter import filter_

        self.assertEqual(filter_([], lambda x: True), [])
        self.assertEqual(filter_((), lambda x: True), ())

    def test_filter_jax_array_keeps_dtype(self) -> None:
        import jax.numpy as jnp

        from seqiter import filter_

        arr = jnp.array([1, 2, 3, 4], dtype=jnp.int32)
        evens = filter_(arr, lambda x: x % 2 == 0)
        self.assertEqual(evens.tolist(), [2, 4])

        none = filter_(arr, lambda x: x > 10)
        self.assertEqual(none.shape, (0,))
        self.assertEqual(none.dtype, arr.dtype)

    def test_filter_errors(self) -> None:
        from seqiter import InvalidReceiverError, NotCallableError, filter_

        with self.assertRaises(InvalidReceiverError):
            filter_(None, lambda x: True)
        with self.assertRaises(NotCallableError):
            filter_([1], 1)


if __name__ == "__main__":
    unittest.main()
