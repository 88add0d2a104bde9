from .array_data import ElementKind, NDArray, shape_size, strides_from_shape  # noqa: F401
from .array_debug import debug_string  # noqa: F401
from .array_ops import Indexing, Select, Slice, slice_array, slice_dim  # noqa: F401
from .config import Config  # noqa: F401
from .errors import (  # noqa: F401
    KindMismatchError,
    MultiArrayError,
    OutOfRangeError,
    ShapeMismatchError,
)
from .fast_ops import broadcast_add  # noqa: F401

__version__ = "0.1.0"
