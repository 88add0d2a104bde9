from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from numba import njit

from .array_data import ElementKind, NDArray
from .config import Config
from .errors import KindMismatchError, ShapeMismatchError

if TYPE_CHECKING:
    from .array_data import Shape, Storage, Strides

logger = logging.getLogger(__name__)

_JIT_OPTIONS = dict(Config.get("numba"))


def broadcast_add(lhs: NDArray, rhs: NDArray) -> NDArray:
    """
    Elementwise sum of two float32 matrices, broadcasting the leading axis.

    Both operands are rank 2 with the same trailing extent. Their leading
    extents must either match, or one of them must be 1, in which case that
    single row is added to every row of the other operand.

    Args:
        lhs: float32 array of shape ``(m, n)`` or ``(1, n)``
        rhs: float32 array of shape ``(m, n)`` or ``(1, n)``

    Returns:
        A new float32 array of shape ``(m, n)``.
    """
    if lhs.kind is not ElementKind.FLOAT32 or rhs.kind is not ElementKind.FLOAT32:
        raise KindMismatchError(
            f"Kind Error: add needs two float32 arrays, got {lhs.kind.value} and {rhs.kind.value}."
        )
    if lhs.dims != 2 or rhs.dims != 2:
        raise ShapeMismatchError(f"Broadcast Error: add needs two matrices, got {lhs.shape} {rhs.shape}.")
    if lhs.shape[1] != rhs.shape[1]:
        raise ShapeMismatchError(f"Broadcast Error: trailing extents differ {lhs.shape} {rhs.shape}.")

    # A[m, n] + B[1, n] | B[m, n], swapped when A[1, n] + B[m, n]
    if lhs.shape[0] >= rhs.shape[0]:
        base, other = lhs, rhs
    else:
        base, other = rhs, lhs
    if other.shape[0] != 1 and other.shape[0] != base.shape[0]:
        raise ShapeMismatchError(f"Broadcast Error: cannot broadcast {lhs.shape} {rhs.shape}.")

    logger.debug(
        "Adding %s + %s (%s)",
        lhs.shape,
        rhs.shape,
        "same shape" if other.shape == base.shape else "row broadcast",
    )
    out = NDArray.zeros(base.shape, ElementKind.FLOAT32)
    tensor_broadcast_add(*out.tuple(), *base.tuple(), *other.tuple())
    return out


# Low-level kernels. Both only write to `out`.
def _tensor_vector_add(
    a_storage: Storage,
    a_start: int,
    b_storage: Storage,
    b_start: int,
    out: Storage,
    out_start: int,
    length: int,
) -> None:
    for i in range(length):
        out[out_start + i] = a_storage[a_start + i] + b_storage[b_start + i]


tensor_vector_add = njit(**_JIT_OPTIONS)(_tensor_vector_add)


def _tensor_broadcast_add(
    out: Storage,
    out_shape: Shape,
    out_strides: Strides,
    a_storage: Storage,
    a_shape: Shape,
    a_strides: Strides,
    b_storage: Storage,
    b_shape: Shape,
    b_strides: Strides,
) -> None:
    # `a` has the output shape; `b` has the same shape or a single row.
    if b_shape[0] == a_shape[0]:
        tensor_vector_add(a_storage, 0, b_storage, 0, out, 0, len(out))
        return

    width = out_shape[1]
    a_pos = 0
    out_pos = 0
    tensor_vector_add(a_storage, a_pos, b_storage, 0, out, out_pos, width)
    for _ in range(1, out_shape[0]):
        a_pos += a_strides[0]
        out_pos += out_strides[0]
        tensor_vector_add(a_storage, a_pos, b_storage, 0, out, out_pos, width)


tensor_broadcast_add = njit(**_JIT_OPTIONS)(_tensor_broadcast_add)
