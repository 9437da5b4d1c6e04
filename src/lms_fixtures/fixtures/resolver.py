"""
Resolution of raw algorithm knobs to LMS and LM-OTS typecodes.

The tree type depends only on `(n, tree_height)` and the one-time signature
type only on `(n, w)`, so resolution is two table lookups. The tables are
checked for totality when this module is imported: a supported combination
without an entry is an import-time error, never a silent fallback.
"""

from __future__ import annotations

from collections.abc import Mapping
from itertools import product
from types import MappingProxyType

from typing_extensions import Final

from lms_fixtures.subspecs.lms import (
    LMOTS_PARAMETERS,
    LMS_PARAMETERS,
    LmotsAlgorithmType,
    LmsAlgorithmType,
)

from .errors import InvalidParameter
from .models import AlgorithmParameterSet, ResolvedAlgorithm

SUPPORTED_N: Final = (32, 24)
"""Hash output sizes in bytes."""

SUPPORTED_W: Final = (1, 2, 4, 8)
"""Winternitz widths in bits."""

SUPPORTED_TREE_HEIGHTS: Final = (5, 10, 15, 20)
"""LMS tree heights."""

LMS_TYPES: Final[Mapping[tuple[int, int], LmsAlgorithmType]] = MappingProxyType(
    {(p.m, p.h): t for t, p in LMS_PARAMETERS.items()}
)
"""Tree typecodes keyed by `(n, tree_height)`."""

LMOTS_TYPES: Final[Mapping[tuple[int, int], LmotsAlgorithmType]] = MappingProxyType(
    {(p.n, p.w): t for t, p in LMOTS_PARAMETERS.items()}
)
"""One-time signature typecodes keyed by `(n, w)`."""


def _check_tables() -> None:
    missing_lms = [k for k in product(SUPPORTED_N, SUPPORTED_TREE_HEIGHTS) if k not in LMS_TYPES]
    missing_lmots = [k for k in product(SUPPORTED_N, SUPPORTED_W) if k not in LMOTS_TYPES]
    if missing_lms or missing_lmots:
        raise RuntimeError(
            f"Typecode tables are incomplete: LMS {missing_lms}, LM-OTS {missing_lmots}"
        )
    if len(LMS_TYPES) != len(LMS_PARAMETERS) or len(LMOTS_TYPES) != len(LMOTS_PARAMETERS):
        raise RuntimeError("Two typecodes share the same parameters")


_check_tables()


def validate_parameters(params: AlgorithmParameterSet) -> None:
    """
    Check each knob against its supported values.

    Fields are checked in the order tree height, n, w, and the first
    offending field is reported.

    Raises:
        InvalidParameter: If a knob is outside its supported set.
    """
    if params.tree_height not in SUPPORTED_TREE_HEIGHTS:
        raise InvalidParameter("tree_height", params.tree_height, SUPPORTED_TREE_HEIGHTS)
    if params.n not in SUPPORTED_N:
        raise InvalidParameter("n", params.n, SUPPORTED_N)
    if params.w not in SUPPORTED_W:
        raise InvalidParameter("w", params.w, SUPPORTED_W)


def resolve(params: AlgorithmParameterSet) -> ResolvedAlgorithm:
    """
    Map `(n, w, tree_height)` onto its LMS and LM-OTS typecodes.

    Args:
        params: The raw knobs.

    Returns:
        The unique typecode pair for the knobs.

    Raises:
        InvalidParameter: If a knob is outside its supported set.
    """
    validate_parameters(params)
    return ResolvedAlgorithm(
        lms_type=LMS_TYPES[(params.n, params.tree_height)],
        lmots_type=LMOTS_TYPES[(params.n, params.w)],
    )
