from __future__ import annotations

import importlib.util
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for NDArray storage tests")
class NDArrayConstructionTests(unittest.TestCase):
    def test_shape_construction_defaults_to_boxed_zeros(self) -> None:
        from ndkit import DataType, NDArray

        A = NDArray(shape=(2, 3))
        self.assertEqual(A.shape, (2, 3))
        self.assertEqual(A.rank, 2)
        self.assertEqual(A.length, 6)
        self.assertIs(A.datatype, DataType.UNTYPED)
        self.assertEqual(A.to_flat_list(), [0] * 6)

    def test_numeric_construction_with_fill(self) -> None:
        from ndkit import DataType, NDArray

        A = NDArray(shape=[2, 2], datatype="i32", fill=7)
        self.assertIs(A.datatype, DataType.I32)
        self.assertEqual(A.get(1, 1), 7)
        self.assertIsInstance(A.get(0, 0), int)
        self.assertEqual(str(A.data.dtype), "int32")

    def test_length_is_product_of_shape(self) -> None:
        from ndkit import NDArray

        cases = [((), 1), ((0,), 0), ((2, 0), 0), ((4,), 4), ((2, 3, 4), 24)]
        for shape, expected in cases:
            for datatype in (None, "f64"):
                with self.subTest(shape=shape, datatype=datatype):
                    A = NDArray(shape=shape, datatype=datatype)
                    self.assertEqual(A.length, expected)
                    self.assertEqual(len(A.to_flat_list()), expected)

    def test_from_shape_alias(self) -> None:
        from ndkit import DataType, NDArray

        A = NDArray.from_shape([3], "ui32", fill=2)
        self.assertIs(A.datatype, DataType.UI32)
        self.assertEqual(A.to_flat_list(), [2, 2, 2])

    def test_rank_zero_array_has_single_cell(self) -> None:
        from ndkit import NDArray

        A = NDArray(shape=(), fill=3)
        self.assertEqual(A.get(), 3)
        self.assertEqual(A.tolist(), 3)

    def test_invalid_shapes_are_rejected(self) -> None:
        from ndkit import InvalidShapeError, NDArray

        for shape in [(-1,), (2, -3), (2.5,), ("a",)]:
            with self.subTest(shape=shape):
                with self.assertRaises(InvalidShapeError):
                    NDArray(shape=shape)
        with self.assertRaises(InvalidShapeError):
            NDArray()

    def test_flat_values_infer_rank_one(self) -> None:
        from ndkit import NDArray

        A = NDArray([1, 2, 3])
        self.assertEqual(A.shape, (3,))
        self.assertEqual(A.get(2), 3)

    def test_flat_values_with_explicit_shape(self) -> None:
        from ndkit import InvalidShapeError, NDArray

        A = NDArray([1, 2, 3, 4, 5, 6], shape=(2, 3))
        self.assertEqual(A.get(1, 0), 4)
        self.assertEqual(A.tolist(), [[1, 2, 3], [4, 5, 6]])
        with self.assertRaises(InvalidShapeError):
            NDArray([1, 2, 3], shape=(2, 2))

    def test_nested_values_infer_shape(self) -> None:
        from ndkit import InvalidShapeError, NDArray

        A = NDArray([[1, 2], [3, 4], [5, 6]])
        self.assertEqual(A.shape, (3, 2))
        self.assertEqual(A.get(1, 0), 3)
        with self.assertRaises(InvalidShapeError):
            NDArray([[1, 2], [3]])
        with self.assertRaises(InvalidShapeError):
            NDArray([[1, 2], 3])

    def test_typed_buffer_infers_datatype(self) -> None:
        import jax.numpy as jnp
        from ndkit import DataType, NDArray

        A = NDArray(jnp.asarray([[1.5, 2.5]], dtype=jnp.float32))
        self.assertIs(A.datatype, DataType.F32)
        self.assertEqual(A.shape, (1, 2))
        self.assertEqual(A.get(0, 1), 2.5)

    def test_typed_buffer_outside_enumeration_needs_datatype(self) -> None:
        import numpy as np
        from ndkit import DataType, NDArray, TypeMismatchError

        buffer = np.arange(4, dtype=np.int64)
        with self.assertRaises(TypeMismatchError):
            NDArray(buffer)
        A = NDArray(buffer, datatype="i16")
        self.assertIs(A.datatype, DataType.I16)
        self.assertEqual(A.to_flat_list(), [0, 1, 2, 3])

    def test_unknown_datatype_is_rejected(self) -> None:
        from ndkit import NDArray, TypeMismatchError

        with self.assertRaises(TypeMismatchError):
            NDArray(shape=(2,), datatype="i64")

    def test_non_sequence_values_are_rejected(self) -> None:
        from ndkit import NDArray, TypeMismatchError

        with self.assertRaises(TypeMismatchError):
            NDArray(5)


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for NDArray storage tests")
class NDArrayAccessTests(unittest.TestCase):
    def test_set_then_get_round_trips(self) -> None:
        from ndkit import NDArray

        for datatype in (None, "i8", "ui16", "i32", "f32", "f64"):
            with self.subTest(datatype=datatype):
                A = NDArray(shape=(2, 3, 2), datatype=datatype)
                A.set(1, 2, 0, 5)
                A.set(0, 1, 1, 3)
                self.assertEqual(A.get(1, 2, 0), 5)
                self.assertEqual(A.get(0, 1, 1), 3)
                self.assertEqual(A.get(0, 0, 0), 0)

    def test_row_major_layout(self) -> None:
        from ndkit import NDArray

        A = NDArray(shape=(2, 3))
        A.set(1, 0, 9)
        self.assertEqual(A.get_n(3), 9)
        A.set_n(5, 4)
        self.assertEqual(A.get(1, 2), 4)

    def test_fixed_width_storage_wraps_and_truncates(self) -> None:
        from ndkit import NDArray

        A = NDArray(shape=(3,), datatype="i8")
        A.set(0, 130)
        A.set(1, 2.75)
        A.set(2, -2.75)
        self.assertEqual(A.to_flat_list(), [-126, 2, -2])

        B = NDArray(shape=(1,), datatype="ui8")
        B.set(0, -1)
        self.assertEqual(B.get(0), 255)

        C = NDArray(shape=(1,), datatype="f32")
        C.set(0, 0.1)
        self.assertAlmostEqual(C.get(0), 0.1, places=6)
        self.assertNotEqual(C.get(0), 0.1)

    def test_numeric_writes_happen_in_place(self) -> None:
        from ndkit import NDArray

        A = NDArray(shape=(1000,), datatype="f64")
        buffer = A.storage.array
        for i in range(0, 1000, 100):
            A.set(i, i + 0.5)
        A.set_n(999, -1)
        self.assertIs(A.storage.array, buffer)
        self.assertEqual(buffer[100], 100.5)
        self.assertEqual(A.get(900), 900.5)
        self.assertEqual(buffer[999], -1.0)
        A.fill(2)
        self.assertIs(A.storage.array, buffer)
        self.assertEqual(float(buffer[0]), 2.0)

    def test_typed_buffer_is_copied_on_construction(self) -> None:
        import numpy as np
        from ndkit import NDArray

        source = np.arange(4, dtype=np.int16)
        A = NDArray(source)
        source[0] = 99
        A.set(1, 42)
        self.assertEqual(A.to_flat_list(), [0, 42, 2, 3])
        self.assertEqual(int(source[1]), 1)

    def test_out_of_range_indices(self) -> None:
        from ndkit import IndexOutOfBoundsError, NDArray

        A = NDArray(shape=(2, 3))
        with self.assertRaises(IndexOutOfBoundsError) as ctx:
            A.get(2, 0)
        self.assertEqual(ctx.exception.axis, 0)
        self.assertEqual(ctx.exception.index, 2)
        self.assertEqual(ctx.exception.size, 2)

        with self.assertRaises(IndexOutOfBoundsError) as ctx:
            A.set(0, -1, 5)
        self.assertEqual(ctx.exception.axis, 1)

        with self.assertRaises(IndexOutOfBoundsError):
            A.get(0)
        with self.assertRaises(IndexOutOfBoundsError):
            A.get(0, 0, 0)
        with self.assertRaises(IndexOutOfBoundsError):
            A.get_n(6)
        with self.assertRaises(IndexOutOfBoundsError):
            A.set_n(-1, 0)

    def test_type_mismatch_on_numeric_storage(self) -> None:
        from ndkit import Complex, NDArray, TypeMismatchError

        A = NDArray(shape=(2,), datatype="f64")
        with self.assertRaises(TypeMismatchError):
            A.set(0, Complex(1, 2))
        with self.assertRaises(TypeMismatchError):
            A.set(0, 1j)
        with self.assertRaises(TypeMismatchError):
            A.fill(Complex(0, 1))
        with self.assertRaises(TypeMismatchError):
            NDArray([1, Complex(0, 1)], datatype="f64")
        self.assertEqual(A.to_flat_list(), [0.0, 0.0])

    def test_type_mismatch_on_boxed_storage(self) -> None:
        from ndkit import NDArray, TypeMismatchError

        A = NDArray(shape=(2,))
        with self.assertRaises(TypeMismatchError):
            A.set(0, "x")
        with self.assertRaises(TypeMismatchError):
            NDArray([1, None])

    def test_boxed_cells_mix_numbers_and_complex(self) -> None:
        from ndkit import Complex, NDArray

        A = NDArray([1, Complex(1, 2), 2.5, 3j])
        self.assertEqual(A.get(0), 1)
        self.assertEqual(A.get(1), Complex(1, 2))
        self.assertEqual(A.get(2), 2.5)
        self.assertEqual(A.get(3), Complex(0.0, 3.0))

    def test_fill_overwrites_every_cell(self) -> None:
        from ndkit import NDArray

        for datatype in (None, "ui8", "f64"):
            with self.subTest(datatype=datatype):
                A = NDArray(shape=(2, 2), datatype=datatype)
                A.fill(3)
                self.assertEqual(A.to_flat_list(), [3, 3, 3, 3])

    def test_for_each_visits_row_major_with_indices(self) -> None:
        from ndkit import NDArray

        for datatype in (None, "i32"):
            with self.subTest(datatype=datatype):
                A = NDArray([[1, 2, 3], [4, 5, 6]], datatype=datatype)
                seen = []
                A.for_each(lambda value, *index: seen.append((value, index)))
                self.assertEqual(
                    seen,
                    [(1, (0, 0)), (2, (0, 1)), (3, (0, 2)), (4, (1, 0)), (5, (1, 1)), (6, (1, 2))],
                )

    def test_for_each_skips_empty_arrays(self) -> None:
        from ndkit import NDArray

        calls = []
        NDArray(shape=(2, 0)).for_each(lambda *args: calls.append(args))
        self.assertEqual(calls, [])

    def test_clone_is_a_deep_copy(self) -> None:
        from ndkit import Complex, NDArray

        for datatype in (None, "f64"):
            with self.subTest(datatype=datatype):
                A = NDArray([[1, 2], [3, 4]], datatype=datatype)
                B = A.clone()
                self.assertEqual(B.shape, A.shape)
                self.assertIs(B.datatype, A.datatype)
                B.set(0, 0, 9)
                self.assertEqual(A.get(0, 0), 1)
                self.assertEqual(B.get(0, 0), 9)

        C = NDArray([Complex(1, 1)])
        D = C.clone()
        D.get(0).real = 5
        self.assertEqual(C.get(0).real, 1)

    def test_set_copies_complex_values(self) -> None:
        from ndkit import Complex, NDArray

        z = Complex(1, 1)
        A = NDArray(shape=(1,))
        A.set(0, z)
        z.real = 7
        self.assertEqual(A.get(0), Complex(1, 1))

    def test_is_shape_equal_compares_axes_not_counts(self) -> None:
        from ndkit import NDArray

        A = NDArray(shape=(2, 3))
        B = NDArray(shape=(3, 2))
        C = NDArray(shape=(2, 3), datatype="i8")
        D = NDArray(shape=(6,))
        self.assertTrue(A.is_shape_equal(A))
        self.assertTrue(A.is_shape_equal(C))
        self.assertTrue(C.is_shape_equal(A))
        self.assertFalse(A.is_shape_equal(B))
        self.assertFalse(B.is_shape_equal(A))
        self.assertFalse(A.is_shape_equal(D))

    def test_is_equal_uses_tolerance(self) -> None:
        from ndkit import Complex, NDArray

        A = NDArray([1.0, 2.0, Complex(1, 0)])
        B = NDArray([1.0 + 1e-12, 2.0, 1.0])
        self.assertTrue(A.is_equal(B))
        self.assertFalse(A.is_equal(B, tolerance=0))
        self.assertFalse(A.is_equal(NDArray([1.0, 2.0])))

    def test_tolist_and_data_snapshots(self) -> None:
        from ndkit import NDArray

        A = NDArray([[1, 2], [3, 4]])
        self.assertEqual(A.tolist(), [[1, 2], [3, 4]])
        self.assertEqual(A.data, (1, 2, 3, 4))
        self.assertIn("shape=(2, 2)", repr(A))


if __name__ == "__main__":
    unittest.main()
