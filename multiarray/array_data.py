from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Iterable, Optional, Sequence, Tuple, Union

import numpy as np
import numpy.typing as npt
from numpy import array, int32
from typing_extensions import TypeAlias

from .errors import KindMismatchError, OutOfRangeError, ShapeMismatchError
from .operators import prod

if TYPE_CHECKING:
    from .array_ops import Indexing

Storage: TypeAlias = npt.NDArray[np.generic]
Index: TypeAlias = npt.NDArray[np.int32]
Shape: TypeAlias = npt.NDArray[np.int32]
Strides: TypeAlias = npt.NDArray[np.int32]

UserIndex: TypeAlias = Sequence[int]
UserShape: TypeAlias = Sequence[int]
UserStrides: TypeAlias = Sequence[int]


class ElementKind(enum.Enum):
    INT32 = "int32"
    FLOAT64 = "float64"
    FLOAT32 = "float32"

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self.value)

    @property
    def is_float(self) -> bool:
        return self is not ElementKind.INT32

    @classmethod
    def from_dtype(cls, dtype: npt.DTypeLike) -> ElementKind:
        name = np.dtype(dtype).name
        for kind in cls:
            if kind.value == name:
                return kind
        raise KindMismatchError(f"Kind Error: unsupported element dtype {name}.")


def strides_from_shape(shape: UserShape) -> UserStrides:
    layout = [1]
    offset = 1
    for s in reversed(shape):
        layout.append(s * offset)
        offset = s * offset
    return tuple(reversed(layout[:-1]))


def shape_size(shape: UserShape) -> int:
    return int(prod(shape))


def _check_shape(shape: UserShape) -> Tuple[int, ...]:
    shape = tuple(int(s) for s in shape)
    if len(shape) < 1:
        raise ShapeMismatchError("Shape Error: rank must be at least 1.")
    if any(s < 1 for s in shape):
        raise ShapeMismatchError(f"Shape Error: every extent of {shape} must be at least 1.")
    return shape


def _linear_to_multi_index(i: int, shape: Tuple[int, ...]) -> Tuple[int, ...]:
    idx = [0] * len(shape)
    for p in range(len(shape) - 1, -1, -1):
        idx[p] = i % shape[p]
        i //= shape[p]
    return tuple(idx)


class NDArray:
    """
    A dense, row-major array that exclusively owns one flat buffer.

    Every constructor copies its input, and every operation that produces an
    array (slicing, adding) allocates a new buffer, so two instances never
    share storage.
    """

    _storage: Storage
    _strides: Strides
    _shape: Shape
    strides: UserStrides
    shape: UserShape
    dims: int
    size: int
    kind: ElementKind

    def __init__(self,
                 storage: Union[Sequence[float], Storage],
                 shape: UserShape,
                 kind: Optional[ElementKind] = None):
        if kind is None:
            if isinstance(storage, np.ndarray):
                kind = ElementKind.from_dtype(storage.dtype)
            else:
                kind = ElementKind.FLOAT64
        shape = _check_shape(shape)
        strides = strides_from_shape(shape)

        self._storage = array(storage, dtype=kind.dtype).reshape(-1)
        self._strides = array(strides, dtype=int32)
        self._shape = array(shape, dtype=int32)
        self.strides = strides
        self.shape = shape
        self.dims = len(shape)
        self.size = shape_size(shape)
        self.kind = kind
        if len(self._storage) != self.size:
            raise ShapeMismatchError(
                f"Shape Error: storage of length {len(self._storage)} does not fit shape {shape}."
            )

    # Construction

    @staticmethod
    def _last_axis_shape(count: int, dims: int) -> UserShape:
        if dims < 1:
            raise ShapeMismatchError(f"Shape Error: target rank {dims} must be at least 1.")
        shape = [1] * dims
        shape[-1] = count
        return tuple(shape)

    @classmethod
    def from_ints(cls, values: Sequence[int], dims: int = 1) -> NDArray:
        """
        Build an int32 array holding `values` along its last axis.

        Args:
            values: the elements, in order
            dims: target rank; the leading `dims - 1` axes have extent 1

        Returns:
            An array of shape ``(1, ..., 1, len(values))``.
        """
        shape = cls._last_axis_shape(len(values), dims)
        return cls(array(values, dtype=int32), shape, ElementKind.INT32)

    @classmethod
    def from_floats(cls,
                    values: Sequence[float],
                    dims: int = 1,
                    kind: ElementKind = ElementKind.FLOAT64) -> NDArray:
        """
        Build a float array holding `values` along its last axis.

        Args:
            values: the elements, in order
            dims: target rank; the leading `dims - 1` axes have extent 1
            kind: FLOAT64 (default) or FLOAT32

        Returns:
            An array of shape ``(1, ..., 1, len(values))``.
        """
        if not kind.is_float:
            raise KindMismatchError(f"Kind Error: from_floats cannot build a {kind.value} array.")
        shape = cls._last_axis_shape(len(values), dims)
        return cls(array(values, dtype=kind.dtype), shape, kind)

    @classmethod
    def zeros(cls, shape: UserShape, kind: ElementKind = ElementKind.FLOAT64) -> NDArray:
        shape = _check_shape(shape)
        return cls(np.zeros(shape_size(shape), dtype=kind.dtype), shape, kind)

    @classmethod
    def sequential(cls, shape: UserShape) -> NDArray:
        """
        Float64 array filled with ``0, 1, 2, ...`` in flat order.

        Handy in tests. For shape ``(2, 3, 4)``::

            [[[ 0.0, 1.0, 2.0, 3.0 ],
              [ 4.0, 5.0, 6.0, 7.0 ],
              [ 8.0, 9.0, 10.0, 11.0 ]],
             [[ 12.0, 13.0, 14.0, 15.0 ],
              [ 16.0, 17.0, 18.0, 19.0 ],
              [ 20.0, 21.0, 22.0, 23.0 ]]]
        """
        shape = _check_shape(shape)
        return cls(np.arange(shape_size(shape), dtype=np.float64), shape, ElementKind.FLOAT64)

    # Flattening

    def to_int_array(self) -> list:
        "All elements in row-major order as python ints (int32 arrays only)."
        if self.kind is not ElementKind.INT32:
            raise KindMismatchError(f"Kind Error: to_int_array on a {self.kind.value} array.")
        return self._storage.tolist()

    def to_float_array(self) -> list:
        "All elements in row-major order as python floats (float64 arrays only)."
        if self.kind is not ElementKind.FLOAT64:
            raise KindMismatchError(f"Kind Error: to_float_array on a {self.kind.value} array.")
        return self._storage.tolist()

    def to_array(self) -> Storage:
        return self._storage.copy()

    # Indexing

    def index(self, index: Union[int, UserIndex]) -> int:
        if isinstance(index, (int, np.integer)):
            aindex = (int(index),)
        else:
            aindex = tuple(int(i) for i in index)

        if len(aindex) != self.dims:
            raise ShapeMismatchError(f"Indexing Error: Index {aindex} must be size of {self.shape}.")
        for i, ind in enumerate(aindex):
            if ind < 0:
                raise OutOfRangeError(f"Indexing Error: Negative indexing for {aindex} not supported.")
            if ind >= self.shape[i]:
                raise OutOfRangeError(f"Indexing Error: Index {aindex} out of range {self.shape}.")

        pos = 0
        for ind, stride in zip(aindex, self.strides):
            pos += ind * stride
        return pos

    def indices(self) -> Iterable[UserIndex]:
        for i in range(self.size):
            yield _linear_to_multi_index(i, self.shape)

    def get(self, key: Union[int, UserIndex]):
        return self._storage[self.index(key)]

    def set(self, key: Union[int, UserIndex], val: float) -> None:
        self._storage[self.index(key)] = val

    def _check_offset(self, offset: int) -> int:
        if not 0 <= offset < self.size:
            raise OutOfRangeError(f"Indexing Error: offset {offset} out of range for size {self.size}.")
        return offset

    def get_flat(self, offset: int):
        return self._storage[self._check_offset(offset)]

    def set_flat(self, offset: int, val: float) -> None:
        self._storage[self._check_offset(offset)] = val

    def tuple(self) -> Tuple[Storage, Shape, Strides]:
        return (self._storage, self._shape, self._strides)

    # Operations

    def slice(self, indexing: Sequence[Indexing]) -> NDArray:
        from .array_ops import slice_array

        return slice_array(self, indexing)

    def __add__(self, other: NDArray) -> NDArray:
        if not isinstance(other, NDArray):
            return NotImplemented
        from .fast_ops import broadcast_add

        return broadcast_add(self, other)

    @property
    def debug(self) -> str:
        from .array_debug import debug_string

        return debug_string(self)

    def __str__(self) -> str:
        return self.debug

    def __repr__(self) -> str:
        return f"NDArray(shape={self.shape}, kind={self.kind.value})"
