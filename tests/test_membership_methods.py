from __future__ import annotations

import importlib.util
import math
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for membership-method tests")
class IncludesTests(unittest.TestCase):
    def test_includes_finds_nan(self) -> None:
        from seqiter import includes

        nan = float("nan")
        self.assertFalse(nan == float("nan"))
        self.assertTrue(includes([1, 2, nan, 4], float("nan")))
        self.assertTrue(includes([1, 2, math.nan], nan))

    def test_includes_treats_signed_zeros_as_equal(self) -> None:
        from seqiter import includes

        self.assertTrue(includes([0.0], -0.0))
        self.assertTrue(includes([-0.0], 0))

    def test_includes_plain_values(self) -> None:
        from seqiter import includes

        self.assertTrue(includes(["apple", "banana"], "banana"))
        self.assertFalse(includes(["apple", "banana"], "cherry"))
        self.assertFalse(includes([], 1))
        self.assertFalse(includes([1, 2], "1"))

    def test_includes_does_not_coerce_bools(self) -> None:
        from seqiter import includes

        self.assertFalse(includes([1, 0], True))
        self.assertFalse(includes([True], 1))
        self.assertTrue(includes([False, True], True))

    def test_includes_from_index(self) -> None:
        from seqiter import includes

        values = [1, 2, float("nan"), 4]
        self.assertFalse(includes(values, 2, 2))
        self.assertTrue(includes(values, 4, -1))
        self.assertFalse(includes(values, 2, -1))
        self.assertTrue(includes(values, 1, -100))
        self.assertFalse(includes(values, 1, 4))
        self.assertFalse(includes(values, 1, 99))

    def test_includes_non_numeric_from_index_counts_as_zero(self) -> None:
        from seqiter import includes, index_of

        values = [1, 2, 3]
        self.assertTrue(includes(values, 1, None))
        self.assertTrue(includes(values, 1, "x"))
        self.assertFalse(includes(values, 1, "1"))
        self.assertEqual(index_of(values, 1, None), 0)

    def test_includes_on_jax_arrays(self) -> None:
        import jax.numpy as jnp

        from seqiter import includes

        self.assertTrue(includes(jnp.array([1.0, jnp.nan]), float("nan")))
        self.assertTrue(includes(jnp.array([1, 2, 3]), 2))
        self.assertFalse(includes(jnp.array([1, 2, 3]), "2"))

    def test_includes_rejects_missing_receiver(self) -> None:
        from seqiter import InvalidReceiverError, includes

        with self.assertRaises(InvalidReceiverError):
            includes(None, 1)


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for membership-method tests")
class IndexOfTests(unittest.TestCase):
    def test_index_of_uses_strict_equality(self) -> None:
        from seqiter import index_of

        self.assertEqual(index_of([1, 2, float("nan")], float("nan")), -1)
        self.assertEqual(index_of(["a", "b", "a"], "a"), 0)
        self.assertEqual(index_of(["a", "b", "a"], "a", 1), 2)
        self.assertEqual(index_of(["a", "b"], "z"), -1)
        self.assertEqual(index_of([], "z"), -1)

    def test_last_index_of(self) -> None:
        from seqiter import last_index_of

        values = [1, 2, 1, 2]
        self.assertEqual(last_index_of(values, 2), 3)
        self.assertEqual(last_index_of(values, 2, 2), 1)
        self.assertEqual(last_index_of(values, 2, -2), 1)
        self.assertEqual(last_index_of(values, 1, 99), 2)
        self.assertEqual(last_index_of(values, 1, -10), -1)
        self.assertEqual(last_index_of(values, 3), -1)
        self.assertEqual(last_index_of([float("nan")], float("nan")), -1)


if __name__ == "__main__":
    unittest.main()
