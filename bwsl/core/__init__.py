"""Index arithmetic, pair indexing and numeric progressions."""

from .mathutils import (
    accumulate_product,
    array_to_index,
    cbinomial,
    choose_between,
    choose_with_probability,
    index_to_array,
    sgn,
    square,
)
from .pairs import individual_indices, num_pairs, pair_index
from .spaces import LinSpace, LogSpace

__all__ = [
    "accumulate_product", "array_to_index", "cbinomial", "choose_between",
    "choose_with_probability", "index_to_array", "sgn", "square",
    "individual_indices", "num_pairs", "pair_index",
    "LinSpace", "LogSpace",
]
