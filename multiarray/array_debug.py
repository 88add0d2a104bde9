"""
Nested-bracket text rendering of an array, for debugging.

A ``(2, 3)`` array renders as::

    [[ 0.0, 1.0, 2.0 ],
     [ 3.0, 4.0, 5.0 ]]
"""

from __future__ import annotations

from typing import List, Optional

from .array_data import NDArray
from .config import Config
from .errors import ShapeMismatchError


def _indent(x: int) -> str:
    return " " * x


def debug_string(a: NDArray, wrap_every: Optional[int] = None) -> str:
    if wrap_every is None:
        wrap_every = Config.get("debug.wrap_every", 11)
    if wrap_every < 1:
        raise ShapeMismatchError(f"Debug Error: wrap width must be at least 1, got {wrap_every}.")
    return _render(a, [], wrap_every)


def _render(a: NDArray, indices: List[int], wrap_every: int) -> str:
    # One call per axis; `d` is the axis this call renders.
    indices = indices + [0]
    d = len(indices) - 1
    n = a.shape[d]
    s = "["
    if len(indices) < a.dims:
        for i in range(n):
            indices[d] = i
            s += _render(a, indices, wrap_every)
            if i != n - 1:
                s += ",\n" + _indent(d + 1)
    else:
        s += " "
        for i in range(n):
            indices[d] = i
            s += str(a.get(indices))
            if i != n - 1:
                s += ", "
                if i % wrap_every == wrap_every - 1:
                    s += "\n " + _indent(d + 1)
        s += " "
    return s + "]"
