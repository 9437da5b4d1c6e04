"""
RFC 8554 wire format of LMS public keys and signatures.

    public key = u32 lms_type || u32 lmots_type || I[16] || T[1][m]
    signature  = u32 q || u32 lmots_type || C[n] || y[0..p][n]
                 || u32 lms_type || path[0..h][m]

All integers are big-endian. The signing library produces and consumes
exactly these bytes.
"""

from __future__ import annotations

from .constants import (
    IDENTIFIER_LENGTH,
    LMOTS_PARAMETERS,
    LMS_PARAMETERS,
    TYPECODE_LENGTH,
    LmotsAlgorithmType,
    LmsAlgorithmType,
)
from .containers import LmotsSignature, PublicKey, Signature
from .exceptions import LmsError


def _read_u32(data: bytes, offset: int) -> int:
    if offset + TYPECODE_LENGTH > len(data):
        raise LmsError(f"Truncated input: no 4-byte field at offset {offset}")
    return int.from_bytes(data[offset : offset + TYPECODE_LENGTH], "big")


def _lms_type(value: int) -> LmsAlgorithmType:
    try:
        return LmsAlgorithmType(value)
    except ValueError:
        raise LmsError(f"Unknown LMS typecode {value:#x}") from None


def _lmots_type(value: int) -> LmotsAlgorithmType:
    try:
        return LmotsAlgorithmType(value)
    except ValueError:
        raise LmsError(f"Unknown LM-OTS typecode {value:#x}") from None


def _split(data: bytes, offset: int, count: int, size: int) -> tuple[bytes, ...]:
    return tuple(data[offset + i * size : offset + (i + 1) * size] for i in range(count))


def serialize_public_key(public_key: PublicKey) -> bytes:
    """Encode a public key in wire format."""
    return (
        public_key.lms_type.typecode
        + public_key.lmots_type.typecode
        + public_key.identifier
        + public_key.root
    )


def deserialize_public_key(data: bytes) -> PublicKey:
    """
    Decode a public key from wire format.

    Raises:
        LmsError: If a typecode is unknown or the length does not fit the types.
    """
    lms_type = _lms_type(_read_u32(data, 0))
    lmots_type = _lmots_type(_read_u32(data, TYPECODE_LENGTH))

    offset = 2 * TYPECODE_LENGTH
    m = LMS_PARAMETERS[lms_type].m
    if len(data) != offset + IDENTIFIER_LENGTH + m:
        raise LmsError(
            f"{lms_type.name} public key must be {offset + IDENTIFIER_LENGTH + m} bytes, "
            f"got {len(data)}"
        )
    return PublicKey(
        lms_type=lms_type,
        lmots_type=lmots_type,
        identifier=data[offset : offset + IDENTIFIER_LENGTH],
        root=data[offset + IDENTIFIER_LENGTH :],
    )


def serialize_signature(signature: Signature) -> bytes:
    """Encode a signature in wire format."""
    ots = signature.ots
    return b"".join(
        [
            signature.q.to_bytes(TYPECODE_LENGTH, "big"),
            ots.lmots_type.typecode,
            ots.randomizer,
            *ots.y,
            signature.lms_type.typecode,
            *signature.path,
        ]
    )


def deserialize_signature(data: bytes) -> Signature:
    """
    Decode a signature from wire format.

    The chain count and path length follow from the typecodes embedded in
    the signature itself.

    Raises:
        LmsError: If a typecode is unknown or the length does not fit the types.
    """
    q = _read_u32(data, 0)
    lmots_type = _lmots_type(_read_u32(data, TYPECODE_LENGTH))
    lmots_params = LMOTS_PARAMETERS[lmots_type]
    n, p = lmots_params.n, lmots_params.p

    offset = 2 * TYPECODE_LENGTH
    randomizer = data[offset : offset + n]
    y = _split(data, offset + n, p, n)
    offset += n * (p + 1)

    lms_type = _lms_type(_read_u32(data, offset))
    lms_params = LMS_PARAMETERS[lms_type]
    offset += TYPECODE_LENGTH

    expected = offset + lms_params.h * lms_params.m
    if len(data) != expected:
        raise LmsError(
            f"{lmots_type.name}/{lms_type.name} signature must be {expected} bytes, "
            f"got {len(data)}"
        )

    return Signature(
        q=q,
        ots=LmotsSignature(lmots_type=lmots_type, randomizer=randomizer, y=y),
        lms_type=lms_type,
        path=_split(data, offset, lms_params.h, lms_params.m),
    )
