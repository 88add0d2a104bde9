"""
Scalar helpers shared by the array kernels.
"""

from typing import Iterable


def prod(ls: Iterable[int]) -> int:
    "Product of a list of numbers"
    out = 1
    for x in ls:
        out *= x
    return out
