"""
Data containers for LMS keys and signatures.

These are plain value objects. `codec` converts them to and from the
RFC 8554 wire format the signing library speaks.
"""

from __future__ import annotations

from lms_fixtures.types import StrictBaseModel

from .constants import LmotsAlgorithmType, LmsAlgorithmType


class PublicKey(StrictBaseModel):
    """
    The public half of an LMS key pair.

    A verifier needs nothing else besides the message and signature.
    """

    lms_type: LmsAlgorithmType
    """The tree variant the key was generated for."""

    lmots_type: LmotsAlgorithmType
    """The one-time signature variant used at the leaves."""

    identifier: bytes
    """The 16-byte key pair identifier `I`."""

    root: bytes
    """The Merkle root `T[1]`, committing to every one-time public key."""


class LmotsPrivateKey(StrictBaseModel):
    """
    Handle on the one-time private key of a single leaf.

    The key material itself never leaves the signing library. The handle
    names the leaf so a signing request can be checked against the tree
    it is made for.
    """

    lmots_type: LmotsAlgorithmType
    """The one-time signature variant."""

    identifier: bytes
    """The identifier `I` of the tree this leaf belongs to."""

    q: int
    """The leaf index inside the tree."""


class LmotsSignature(StrictBaseModel):
    """A one-time signature over a single message."""

    lmots_type: LmotsAlgorithmType
    """The one-time signature variant."""

    randomizer: bytes
    """The per-signature randomizer `C`."""

    y: tuple[bytes, ...]
    """The `p` intermediate chain values."""


class Signature(StrictBaseModel):
    """
    An LMS signature.

    Binds a one-time signature to the tree root through the authentication
    path of leaf `q`.
    """

    q: int
    """The index of the leaf that signed."""

    ots: LmotsSignature
    """The one-time signature produced by that leaf."""

    lms_type: LmsAlgorithmType
    """The tree variant."""

    path: tuple[bytes, ...]
    """The `h` sibling nodes from the leaf up to (excluding) the root."""
