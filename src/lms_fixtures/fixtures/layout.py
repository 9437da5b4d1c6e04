"""
Binary layout of LMS public keys and signatures as the target reads them.

The target verifier reinterprets fixture bytes in place as

    #[repr(C)] LmsPublicKey<N> {
        tree_type: u32 (big-endian),
        otstype:   u32 (big-endian),
        id:        [u8; 16],
        digest:    [u32; N],
    }

    #[repr(C)] LmsSignature<N, P, H> {
        q:         u32 (big-endian),
        ots: LmotsSignature<N, P> {
            ots_type: u32 (big-endian),
            nonce:    [u32; N],
            y:        [[u32; N]; P],
        },
        tree_type: u32 (big-endian),
        tree_path: [[u32; N]; H],
    }

where `N` counts 32-bit words (`n / 4`). Digest words hold the hash bytes
unchanged, and every field is a whole number of words, so the structures
have no padding. Any change to the target structures must bump
`LAYOUT_VERSION`.
"""

from __future__ import annotations

from typing import ClassVar

from lms_fixtures.subspecs.lms import (
    LMOTS_PARAMETERS,
    LMS_PARAMETERS,
    LmotsAlgorithmType,
    LmsAlgorithmType,
    LmsError,
    PublicKey,
    Signature,
    deserialize_public_key,
    deserialize_signature,
    serialize_public_key,
    serialize_signature,
)
from lms_fixtures.subspecs.lms.constants import IDENTIFIER_LENGTH
from lms_fixtures.types import StrictBaseModel

from .errors import LayoutError

LAYOUT_VERSION: int = 1
"""Version of the target structure definitions this encoder matches."""

WORD_SIZE: int = 4
"""Bytes per 32-bit word."""


class StructuralParams(StrictBaseModel):
    """
    The const generic arguments of the target's key and signature structures.

    Together with `layout_version` these fully determine every byte offset,
    so they travel with the encoded data instead of being implied by position.
    """

    SUPPORTED_LAYOUT_VERSIONS: ClassVar[tuple[int, ...]] = (LAYOUT_VERSION,)

    n_words: int
    """Hash length in 32-bit words (`n / 4`)."""

    p: int
    """Number of Winternitz chains."""

    height: int
    """Tree height `h`."""

    layout_version: int = LAYOUT_VERSION
    """The structure definition version the sizes below are computed for."""

    @classmethod
    def for_types(
        cls, lms_type: LmsAlgorithmType, lmots_type: LmotsAlgorithmType
    ) -> StructuralParams:
        """Derive the structural parameters of an algorithm pair."""
        lmots_params = LMOTS_PARAMETERS[lmots_type]
        lms_params = LMS_PARAMETERS[lms_type]
        return cls(
            n_words=lmots_params.n // WORD_SIZE,
            p=lmots_params.p,
            height=lms_params.h,
        )

    @property
    def n(self) -> int:
        """Hash length in bytes."""
        return self.n_words * WORD_SIZE

    @property
    def public_key_size(self) -> int:
        """Size of `LmsPublicKey<N>`."""
        return 2 * WORD_SIZE + IDENTIFIER_LENGTH + self.n

    @property
    def lmots_signature_size(self) -> int:
        """Size of `LmotsSignature<N, P>`."""
        return WORD_SIZE + self.n * (self.p + 1)

    @property
    def signature_size(self) -> int:
        """Size of `LmsSignature<N, P, H>`."""
        return 2 * WORD_SIZE + self.lmots_signature_size + self.n * self.height

    def check_version(self) -> None:
        """
        Reject parameters computed for a structure version this encoder does not produce.

        Raises:
            LayoutError: If the layout version is unsupported.
        """
        if self.layout_version not in self.SUPPORTED_LAYOUT_VERSIONS:
            raise LayoutError(
                f"Unsupported layout version {self.layout_version}, "
                f"expected one of {self.SUPPORTED_LAYOUT_VERSIONS}"
            )


def _check_length(what: str, data: bytes, expected: int) -> None:
    if len(data) != expected:
        raise LayoutError(f"{what} is {len(data)} bytes, the target structure is {expected}")


def _check_types(signature: Signature, params: StructuralParams) -> None:
    lms_type, lmots_type = signature.lms_type, signature.ots.lmots_type
    actual = StructuralParams.for_types(lms_type, lmots_type)
    if actual != params:
        raise LayoutError(
            f"Signature typecodes {lms_type.name}/{lmots_type.name} describe {actual!r}, "
            f"expected {params!r}"
        )


def encode_public_key(public_key: PublicKey, params: StructuralParams) -> bytes:
    """
    Serialize a public key as `LmsPublicKey<N>`.

    The target structure matches the RFC 8554 wire format word for word.

    Args:
        public_key: The key to encode.
        params: The structure parameters the bytes must match.

    Returns:
        Exactly `params.public_key_size` bytes.

    Raises:
        LayoutError: If the encoding does not have the structure's size.
    """
    params.check_version()
    data = serialize_public_key(public_key)
    _check_length("Public key", data, params.public_key_size)
    return data


def encode_signature(signature: Signature, params: StructuralParams) -> bytes:
    """
    Serialize a signature as `LmsSignature<N, P, H>`.

    Args:
        signature: The signature to encode.
        params: The structure parameters the bytes must match.

    Returns:
        Exactly `params.signature_size` bytes.

    Raises:
        LayoutError: If the encoding does not have the structure's size.
    """
    params.check_version()
    data = serialize_signature(signature)
    _check_length("Signature", data, params.signature_size)
    return data


def decode_public_key(data: bytes, params: StructuralParams) -> PublicKey:
    """
    Read back a public key laid out as `LmsPublicKey<N>`.

    Raises:
        LayoutError: If the length or the typecodes do not fit `params`.
    """
    params.check_version()
    _check_length("Public key", data, params.public_key_size)
    try:
        public_key = deserialize_public_key(data)
    except LmsError as e:
        raise LayoutError(f"Cannot decode public key: {e.message}") from e
    return public_key


def decode_signature(data: bytes, params: StructuralParams) -> Signature:
    """
    Read back a signature laid out as `LmsSignature<N, P, H>`.

    Raises:
        LayoutError: If the length or the typecodes do not fit `params`.
    """
    params.check_version()
    _check_length("Signature", data, params.signature_size)
    try:
        signature = deserialize_signature(data)
    except LmsError as e:
        raise LayoutError(f"Cannot decode signature: {e.message}") from e
    _check_types(signature, params)
    return signature
