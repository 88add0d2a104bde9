from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Mapping, Sequence, Union

import numpy as np
from typing_extensions import TypeAlias

from .array_data import ElementKind, NDArray
from .errors import KindMismatchError, OutOfRangeError, ShapeMismatchError

if TYPE_CHECKING:
    from .array_data import Index, Shape, Storage, Strides

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Select:
    "Fix an axis at one index."
    index: int


@dataclass(frozen=True)
class Slice:
    "Keep every index of an axis."


Indexing: TypeAlias = Union[Select, Slice]


# Helper functions for the slicing kernel.
def fill_index(flat: int, shape: Sequence[int], out_index: np.ndarray) -> None:
    cur = flat
    for idx in range(len(shape) - 1, -1, -1):
        sh = shape[idx]
        out_index[idx] = int(cur % sh)
        cur //= sh


def compute_position(index: np.ndarray, strides: Sequence[int]) -> int:
    pos = 0
    for ind, s in zip(index, strides):
        pos += int(ind) * int(s)
    return pos


def slice_array(a: NDArray, indexing: Sequence[Indexing]) -> NDArray:
    """
    Slice an array numpy-style, one entry of `indexing` per axis.

    Exactly one entry must be ``Slice()``; the others are ``Select(i)``.
    ``slice_array(a, [Select(1), Slice(), Select(2)])`` is ``a[1, :, 2]``,
    except the result keeps the rank of `a` with the selected axes at
    extent 1.

    Args:
        a: a float array
        indexing: one `Select` or `Slice` per axis of `a`

    Returns:
        A new float64 array.
    """
    if len(indexing) != a.dims:
        raise ShapeMismatchError(
            f"Indexing Error: plan of length {len(indexing)} for array of shape {a.shape}."
        )
    sliced = [i for i, idx in enumerate(indexing) if isinstance(idx, Slice)]
    if len(sliced) != 1:
        raise ShapeMismatchError(
            f"Indexing Error: plan must hold exactly one Slice, got {len(sliced)}."
        )
    select_dims: Dict[int, int] = {}
    for i, idx in enumerate(indexing):
        if isinstance(idx, Select):
            select_dims[i] = idx.index
        elif not isinstance(idx, Slice):
            raise ShapeMismatchError(f"Indexing Error: unknown plan entry {idx!r}.")
    return slice_dim(a, sliced[0], select_dims)


def slice_dim(a: NDArray, dim: int, select_dims: Mapping[int, int]) -> NDArray:
    """
    Slice along axis `dim`, selecting ``select_dims[d]`` on every other axis `d`.
    """
    if not 0 <= dim < a.dims:
        raise ShapeMismatchError(f"Indexing Error: slice axis {dim} for array of shape {a.shape}.")
    if len(select_dims) + 1 != a.dims or dim in select_dims:
        raise ShapeMismatchError(
            f"Indexing Error: every axis but {dim} of {a.shape} needs a selected index."
        )
    for d, ind in select_dims.items():
        if not isinstance(ind, (int, np.integer)) or isinstance(ind, bool):
            raise OutOfRangeError(f"Indexing Error: index {ind!r} for axis {d} is not an integer.")
        if not 0 <= d < a.dims:
            raise ShapeMismatchError(f"Indexing Error: axis {d} for array of shape {a.shape}.")
        if not 0 <= ind < a.shape[d]:
            raise OutOfRangeError(f"Indexing Error: index {ind} out of range for axis {d} of {a.shape}.")
    if not a.kind.is_float:
        raise KindMismatchError(f"Kind Error: slicing supports float arrays, got {a.kind.value}.")

    shape = [1] * a.dims
    shape[dim] = a.shape[dim]
    logger.debug("Slicing array of shape %s into array of shape %s", a.shape, tuple(shape))

    out = NDArray.zeros(shape, ElementKind.FLOAT64)
    in_index = np.zeros(a.dims, np.int32)
    for d, ind in select_dims.items():
        in_index[d] = ind
    tensor_slice(*out.tuple(), *a.tuple(), in_index, dim)
    return out


def tensor_slice(
    out: Storage,
    out_shape: Shape,
    out_strides: Strides,
    in_storage: Storage,
    in_shape: Shape,
    in_strides: Strides,
    in_index: Index,
    slice_dim: int,
) -> None:
    """
    Low-level implementation of slice.

    `in_index` already holds the selected index of every axis but
    `slice_dim`, which is taken from the output index.
    """
    out_index = np.zeros(len(out_shape), np.int32)
    for i in range(len(out)):
        fill_index(i, out_shape, out_index)
        in_index[slice_dim] = out_index[slice_dim]
        o = compute_position(out_index, out_strides)
        j = compute_position(in_index, in_strides)
        out[o] = in_storage[j]
