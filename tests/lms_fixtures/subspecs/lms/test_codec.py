"""Tests for the RFC 8554 wire format of keys and signatures."""

import pytest

from lms_fixtures.subspecs.lms import (
    KeyTree,
    LmotsAlgorithmType,
    LmsAlgorithmType,
    LmsError,
    LmsScheme,
    PublicKey,
    deserialize_public_key,
    deserialize_signature,
    serialize_public_key,
    serialize_signature,
)

MESSAGE = b"codec"


def test_public_key_layout(n24_key_pair: tuple[PublicKey, KeyTree]) -> None:
    """Two typecodes, the identifier, then the root."""
    public_key, _ = n24_key_pair
    data = serialize_public_key(public_key)

    assert len(data) == 4 + 4 + 16 + 24
    assert data[:8] == bytes([0, 0, 0, 0x0A, 0, 0, 0, 0x07])
    assert data[8:24] == public_key.identifier
    assert deserialize_public_key(data) == public_key


def test_signature_sizes_follow_embedded_typecodes(
    scheme: LmsScheme, n32_key_pair: tuple[PublicKey, KeyTree]
) -> None:
    """Chain count and path length are read from the signature itself."""
    _, tree = n32_key_pair
    data = serialize_signature(scheme.sign(MESSAGE, tree.private_key(12), 12, tree))

    assert len(data) == 4 + 4 + 32 * (67 + 1) + 4 + 32 * 5
    signature = deserialize_signature(data)
    assert signature.q == 12
    assert len(signature.ots.y) == 67
    assert len(signature.path) == 5


@pytest.mark.parametrize(
    "data, match",
    [
        pytest.param(b"\x00\x00\x00", "Truncated input", id="truncated"),
        pytest.param(
            (0x99).to_bytes(4, "big") + (0x03).to_bytes(4, "big") + bytes(48),
            "Unknown LMS typecode 0x99",
            id="unknown-lms-type",
        ),
        pytest.param(
            (0x05).to_bytes(4, "big") + (0x42).to_bytes(4, "big") + bytes(48),
            "Unknown LM-OTS typecode 0x42",
            id="unknown-lmots-type",
        ),
        pytest.param(
            (0x05).to_bytes(4, "big") + (0x03).to_bytes(4, "big") + bytes(16 + 24),
            "must be 56 bytes, got 48",
            id="short-root",
        ),
    ],
)
def test_malformed_public_key_is_rejected(data: bytes, match: str) -> None:
    """Malformed public keys raise the service's own error."""
    with pytest.raises(LmsError, match=match):
        deserialize_public_key(data)


def test_signature_with_trailing_bytes_is_rejected(
    scheme: LmsScheme, n24_key_pair: tuple[PublicKey, KeyTree]
) -> None:
    """A signature must end exactly after the last path node."""
    _, tree = n24_key_pair
    data = serialize_signature(scheme.sign(MESSAGE, tree.private_key(2), 2, tree))
    with pytest.raises(LmsError, match="LMOTS_SHA256_N24_W4/LMS_SHA256_N24_H5"):
        deserialize_signature(data + b"\x00")


def test_typecodes_are_big_endian_words() -> None:
    """Typecodes travel as 4-byte big-endian integers."""
    assert LmsAlgorithmType.LMS_SHA256_N32_H20.typecode == b"\x00\x00\x00\x08"
    assert LmotsAlgorithmType.LMOTS_SHA256_N24_W8.typecode == b"\x00\x00\x00\x08"
