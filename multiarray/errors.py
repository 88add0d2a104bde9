"""
Precondition failures raised by the array core.

All of these are programmer errors: a malformed shape, a plan that does not
fit the array, or operands of the wrong element kind.
"""


class MultiArrayError(RuntimeError):
    pass


class ShapeMismatchError(MultiArrayError):
    "Rank, extent or indexing plan does not fit the array."


class KindMismatchError(MultiArrayError):
    "Element kind is unsupported or differs between operands."


class OutOfRangeError(MultiArrayError, IndexError):
    "An index falls outside its axis extent or the flat buffer."
