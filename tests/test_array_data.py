import numpy as np
import pytest
from hypothesis import given
from hypothesis.strategies import integers, lists

from multiarray import (
    ElementKind,
    KindMismatchError,
    NDArray,
    OutOfRangeError,
    ShapeMismatchError,
    shape_size,
    strides_from_shape,
)

from .array_strategies import float64s, int32s, shapes


class TestShape:
    def test_strides_row_major(self):
        assert strides_from_shape((2, 3, 4)) == (12, 4, 1)
        assert strides_from_shape((5,)) == (1,)
        assert strides_from_shape((3, 1, 2)) == (2, 2, 1)

    def test_size(self):
        assert shape_size((2, 3, 4)) == 24
        assert shape_size((7,)) == 7

    def test_rank_zero_rejected(self):
        with pytest.raises(ShapeMismatchError):
            NDArray([], ())

    def test_zero_extent_rejected(self):
        with pytest.raises(ShapeMismatchError):
            NDArray.zeros((2, 0))

    def test_storage_must_fit_shape(self):
        with pytest.raises(ShapeMismatchError):
            NDArray([1.0, 2.0, 3.0], (2, 2))


class TestConstruction:
    @given(lists(int32s, min_size=1), integers(min_value=1, max_value=5))
    def test_ints_round_trip(self, values, dims):
        a = NDArray.from_ints(values, dims)
        assert a.to_int_array() == values

    @given(lists(float64s, min_size=1), integers(min_value=1, max_value=5))
    def test_floats_round_trip(self, values, dims):
        a = NDArray.from_floats(values, dims)
        assert a.to_float_array() == values

    def test_values_go_on_last_axis(self):
        a = NDArray.from_ints([1, 2, 3], dims=3)
        assert a.shape == (1, 1, 3)
        assert a.kind is ElementKind.INT32
        assert NDArray.from_floats([1.0, 2.0]).shape == (2,)

    def test_target_rank_must_be_positive(self):
        with pytest.raises(ShapeMismatchError):
            NDArray.from_ints([1, 2], dims=0)
        with pytest.raises(ShapeMismatchError):
            NDArray.from_floats([1.0], dims=-1)

    def test_from_floats_float32(self):
        a = NDArray.from_floats([0.5, 1.5], dims=2, kind=ElementKind.FLOAT32)
        assert a.kind is ElementKind.FLOAT32
        assert a.to_array().dtype == np.float32
        assert a.to_array().tolist() == [0.5, 1.5]

    def test_from_floats_rejects_int_kind(self):
        with pytest.raises(KindMismatchError):
            NDArray.from_floats([1.0], kind=ElementKind.INT32)

    def test_kind_from_numpy_storage(self):
        a = NDArray(np.arange(6, dtype=np.float32), (2, 3))
        assert a.kind is ElementKind.FLOAT32
        with pytest.raises(KindMismatchError):
            NDArray(np.arange(4, dtype=np.int64), (4,))

    def test_construction_copies_input(self):
        src = np.arange(4, dtype=np.float64)
        a = NDArray(src, (2, 2))
        src[0] = 100.0
        assert a.get((0, 0)) == 0.0

    def test_zeros(self):
        a = NDArray.zeros((2, 3), ElementKind.INT32)
        assert a.size == 6
        assert a.to_int_array() == [0] * 6


class TestSequential:
    @given(shapes())
    def test_values_are_flat_offsets(self, shape):
        a = NDArray.sequential(shape)
        assert a.kind is ElementKind.FLOAT64
        assert a.to_float_array() == [float(i) for i in range(shape_size(shape))]

    def test_deterministic(self):
        assert NDArray.sequential((3, 4)).to_float_array() == NDArray.sequential((3, 4)).to_float_array()


class TestFlatten:
    def test_kinds_are_not_converted(self):
        ints = NDArray.from_ints([1, 2])
        floats = NDArray.from_floats([1.0, 2.0])
        with pytest.raises(KindMismatchError):
            ints.to_float_array()
        with pytest.raises(KindMismatchError):
            floats.to_int_array()
        with pytest.raises(KindMismatchError):
            NDArray.from_floats([1.0], kind=ElementKind.FLOAT32).to_float_array()

    def test_flatten_is_a_copy(self, cube):
        values = cube.to_float_array()
        values[0] = -1.0
        arr = cube.to_array()
        arr[1] = -1.0
        assert cube.get_flat(0) == 0.0
        assert cube.get_flat(1) == 1.0

    def test_flatten_order_is_row_major(self, cube):
        flat = cube.to_float_array()
        for index in cube.indices():
            assert flat[cube.index(index)] == cube.get(index)


class TestIndexing:
    def test_index(self, cube):
        assert cube.index((0, 0, 0)) == 0
        assert cube.index((1, 2, 3)) == 23
        assert cube.index((1, 0, 2)) == 14
        assert NDArray.sequential((5,)).index(3) == 3

    def test_index_wrong_length(self, cube):
        with pytest.raises(ShapeMismatchError):
            cube.index((0, 0))

    @pytest.mark.parametrize("index", [(2, 0, 0), (0, 3, 0), (0, 0, 4), (0, -1, 0)])
    def test_index_out_of_range(self, cube, index):
        with pytest.raises(OutOfRangeError):
            cube.index(index)

    def test_get_set(self, cube):
        cube.set((1, 1, 1), -5.0)
        assert cube.get((1, 1, 1)) == -5.0
        assert cube.get_flat(17) == -5.0

    def test_flat_access(self, cube):
        cube.set_flat(23, 99.0)
        assert cube.get((1, 2, 3)) == 99.0
        with pytest.raises(OutOfRangeError):
            cube.get_flat(24)
        with pytest.raises(OutOfRangeError):
            cube.set_flat(-1, 0.0)

    def test_indices_cover_array(self):
        a = NDArray.sequential((2, 3))
        assert list(a.indices()) == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]
