"""Buffer operations built on unit boundaries."""

from .arrays import free_array, to_buffer, to_unit_array
from .concat import concat, concat_all, concat_all_consuming, concat_consuming, copy
from .intersperse import join, repeat
from .reorder import reverse
from .slicing import NPOS, substring

__all__ = [
    "NPOS",
    "substring",
    "reverse",
    "join",
    "repeat",
    "copy",
    "concat",
    "concat_all",
    "concat_consuming",
    "concat_all_consuming",
    "to_unit_array",
    "to_buffer",
    "free_array",
]
