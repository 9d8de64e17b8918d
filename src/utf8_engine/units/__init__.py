"""Unit classification and boundary navigation."""

from .classify import LeadClass, classify, is_continuation, unit_width
from .cursor import (
    Cursor,
    advance,
    bounds,
    distance,
    iter_units,
    iter_units_reversed,
    next_unit,
    prior_unit,
)

__all__ = [
    "LeadClass",
    "classify",
    "is_continuation",
    "unit_width",
    "Cursor",
    "advance",
    "bounds",
    "distance",
    "iter_units",
    "iter_units_reversed",
    "next_unit",
    "prior_unit",
]
