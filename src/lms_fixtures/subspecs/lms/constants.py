"""
Algorithm identifiers and parameter sets for LMS and LM-OTS.

The identifiers are the IANA registry values from RFC 8554 and NIST SP 800-208.
Only the SHA-256 (N32) and SHA-256/192 (N24) families with tree heights
5 through 20 are supported, which is exactly what the target verifier accepts.
The parameter values themselves are read from the signing library's tables.
"""

from collections.abc import Mapping
from enum import IntEnum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict
from pyhsslms.pyhsslms import LenI
from pyhsslms.pyhsslms import lmots_params as PYHSSLMS_LMOTS_PARAMS
from pyhsslms.pyhsslms import lms_params as PYHSSLMS_LMS_PARAMS
from typing_extensions import Final

TYPECODE_LENGTH: Final = 4
"""Length in bytes of a serialized typecode."""


class LmsAlgorithmType(IntEnum):
    """LMS tree typecodes."""

    LMS_SHA256_N32_H5 = 0x05
    LMS_SHA256_N32_H10 = 0x06
    LMS_SHA256_N32_H15 = 0x07
    LMS_SHA256_N32_H20 = 0x08
    LMS_SHA256_N24_H5 = 0x0A
    LMS_SHA256_N24_H10 = 0x0B
    LMS_SHA256_N24_H15 = 0x0C
    LMS_SHA256_N24_H20 = 0x0D

    @property
    def typecode(self) -> bytes:
        """The 4-byte big-endian wire form."""
        return self.value.to_bytes(TYPECODE_LENGTH, "big")


class LmotsAlgorithmType(IntEnum):
    """LM-OTS one-time signature typecodes."""

    LMOTS_SHA256_N32_W1 = 0x01
    LMOTS_SHA256_N32_W2 = 0x02
    LMOTS_SHA256_N32_W4 = 0x03
    LMOTS_SHA256_N32_W8 = 0x04
    LMOTS_SHA256_N24_W1 = 0x05
    LMOTS_SHA256_N24_W2 = 0x06
    LMOTS_SHA256_N24_W4 = 0x07
    LMOTS_SHA256_N24_W8 = 0x08

    @property
    def typecode(self) -> bytes:
        """The 4-byte big-endian wire form."""
        return self.value.to_bytes(TYPECODE_LENGTH, "big")


class LmotsParameters(BaseModel):
    """Parameters of one LM-OTS variant (RFC 8554, Section 4.1)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    algorithm_type: LmotsAlgorithmType
    """The typecode these parameters belong to."""

    n: int
    """Hash output length in bytes."""

    w: int
    """Winternitz width in bits."""

    p: int
    """Number of Winternitz chains, i.e. `n`-byte elements in a signature."""

    ls: int
    """Left shift applied to the checksum before it is appended."""


class LmsParameters(BaseModel):
    """Parameters of one LMS tree variant (RFC 8554, Section 5.1)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    algorithm_type: LmsAlgorithmType
    """The typecode these parameters belong to."""

    m: int
    """Bytes per tree node."""

    h: int
    """Tree height."""

    @property
    def leaf_count(self) -> int:
        """Number of one-time keys in the tree."""
        return 1 << self.h


def _lmots(t: LmotsAlgorithmType) -> LmotsParameters:
    _, n, p, w, ls = PYHSSLMS_LMOTS_PARAMS[t.typecode]
    return LmotsParameters(algorithm_type=t, n=n, w=w, p=p, ls=ls)


def _lms(t: LmsAlgorithmType) -> LmsParameters:
    _, m, h = PYHSSLMS_LMS_PARAMS[t.typecode]
    return LmsParameters(algorithm_type=t, m=m, h=h)


LMOTS_PARAMETERS: Final[Mapping[LmotsAlgorithmType, LmotsParameters]] = MappingProxyType(
    {t: _lmots(t) for t in LmotsAlgorithmType}
)
"""LM-OTS parameter sets keyed by typecode."""

LMS_PARAMETERS: Final[Mapping[LmsAlgorithmType, LmsParameters]] = MappingProxyType(
    {t: _lms(t) for t in LmsAlgorithmType}
)
"""LMS tree parameter sets keyed by typecode."""

IDENTIFIER_LENGTH: Final[int] = LenI
"""Length in bytes of the key pair identifier `I`."""
