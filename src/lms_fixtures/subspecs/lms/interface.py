"""
Defines the signing and verification service consumed by the fixture pipeline.

`SigningService` is the contract: build a key tree, sign under a chosen leaf,
verify, and look up LM-OTS parameters. `LmsScheme` fulfils it with pyhsslms,
which implements RFC 8554 and the SHA-256/192 variants of NIST SP 800-208.
"""

from __future__ import annotations

import logging
from typing import Protocol

from pyhsslms import LmsPrivateKey, LmsPublicKey

from .codec import (
    deserialize_public_key,
    deserialize_signature,
    serialize_public_key,
    serialize_signature,
)
from .constants import (
    LMOTS_PARAMETERS,
    LMS_PARAMETERS,
    LmotsAlgorithmType,
    LmotsParameters,
    LmsAlgorithmType,
)
from .containers import LmotsPrivateKey, PublicKey, Signature
from .exceptions import LmsError

logger = logging.getLogger(__name__)


class KeyTree:
    """
    A fully built LMS key tree.

    Wraps the signing library's private key, which holds every one-time key
    and Merkle node. Leaf indices are absolute; `q` is the first leaf the
    tree was handed over with.

    Args:
        key: The library's private key.
        public_key: The public key of `key`.
    """

    def __init__(self, key: LmsPrivateKey, public_key: PublicKey) -> None:
        self.key = key
        self.lms_type = public_key.lms_type
        self.lmots_type = public_key.lmots_type
        self.identifier = public_key.identifier
        self.q: int = key.q

        self.lms_params = LMS_PARAMETERS[self.lms_type]
        self.lmots_params = LMOTS_PARAMETERS[self.lmots_type]

    @property
    def height(self) -> int:
        """Tree height `h`."""
        return self.lms_params.h

    @property
    def leaf_count(self) -> int:
        """Total number of leaves, `2^h`."""
        return self.lms_params.leaf_count

    def private_key(self, index: int) -> LmotsPrivateKey:
        """
        Return the one-time private key handle of leaf `index`.

        Raises:
            LmsError: If `index` is outside the tree.
        """
        if not 0 <= index < self.leaf_count:
            raise LmsError(f"Leaf {index} is outside a tree of {self.leaf_count} leaves")
        return LmotsPrivateKey(lmots_type=self.lmots_type, identifier=self.identifier, q=index)


class SigningService(Protocol):
    """The operations the fixture pipeline needs from an LMS implementation."""

    def build_tree(
        self, lms_type: LmsAlgorithmType, lmots_type: LmotsAlgorithmType
    ) -> tuple[PublicKey, KeyTree]:
        """Build a fresh key tree and return its public key alongside it."""
        ...

    def sign(
        self,
        message: bytes,
        private_key: LmotsPrivateKey,
        leaf_index: int,
        tree: KeyTree,
    ) -> Signature:
        """Sign `message` with the one-time key of `leaf_index`."""
        ...

    def verify(self, message: bytes, public_key: PublicKey, signature: Signature) -> bool:
        """Check `signature` over `message` against `public_key`."""
        ...

    def get_lmots_parameters(self, lmots_type: LmotsAlgorithmType) -> LmotsParameters:
        """Look up the parameters of an LM-OTS variant."""
        ...


class LmsScheme:
    """LMS signing and verification service backed by pyhsslms."""

    def build_tree(
        self, lms_type: LmsAlgorithmType, lmots_type: LmotsAlgorithmType
    ) -> tuple[PublicKey, KeyTree]:
        """
        Generates a new key pair.

        Every call draws a fresh identifier and seed, so two trees built with
        the same parameters are unrelated.

        Args:
            lms_type: The tree variant.
            lmots_type: The one-time signature variant used at the leaves.

        Returns:
            The public key and the full key tree.

        Raises:
            LmsError: If the typecodes are unknown or use different hash sizes.
        """
        if lms_type not in LMS_PARAMETERS:
            raise LmsError(f"Unsupported LMS type: {lms_type!r}")
        lmots_params = self.get_lmots_parameters(lmots_type)
        lms_params = LMS_PARAMETERS[lms_type]
        if lms_params.m != lmots_params.n:
            raise LmsError(
                f"{lms_type.name} uses {lms_params.m}-byte nodes but "
                f"{lmots_type.name} uses {lmots_params.n}-byte hashes"
            )

        logger.debug("Building %s tree with %s leaves", lms_type.name, lmots_type.name)
        try:
            key = LmsPrivateKey(lms_type.typecode, lmots_type.typecode)
            public_key = deserialize_public_key(key.publicKey().serialize())
        except ValueError as e:
            raise LmsError(f"Cannot build {lms_type.name} tree: {e}") from e
        return public_key, KeyTree(key, public_key)

    def sign(
        self,
        message: bytes,
        private_key: LmotsPrivateKey,
        leaf_index: int,
        tree: KeyTree,
    ) -> Signature:
        """
        Signs a message with the one-time key of a single leaf.

        The caller chooses the leaf. Reusing a leaf for two different messages
        breaks the scheme, which is why fixture batches sample distinct leaves.

        Args:
            message: The message to sign.
            private_key: The one-time private key handle of the leaf.
            leaf_index: The leaf index `q`.
            tree: The tree the leaf belongs to.

        Returns:
            The LMS signature.

        Raises:
            LmsError: If the key does not belong to this leaf of this tree,
                or the library refuses to sign.
        """
        if private_key.q != leaf_index:
            raise LmsError(
                f"Private key belongs to leaf {private_key.q}, not leaf {leaf_index}"
            )
        if private_key.identifier != tree.identifier:
            raise LmsError("Private key does not belong to this tree")
        if private_key.lmots_type != tree.lmots_type:
            raise LmsError(
                f"Private key is {private_key.lmots_type.name}, tree uses {tree.lmots_type.name}"
            )

        # The library signs with whichever leaf its counter points at.
        tree.key.q = leaf_index
        try:
            signature = deserialize_signature(tree.key.sign(message))
        except ValueError as e:
            raise LmsError(f"Cannot sign with leaf {leaf_index}: {e}") from e

        if signature.q != leaf_index:
            raise LmsError(f"Asked to sign with leaf {leaf_index}, got leaf {signature.q}")
        return signature

    def verify(self, message: bytes, public_key: PublicKey, signature: Signature) -> bool:
        """
        Verifies an LMS signature (RFC 8554, Algorithm 6a).

        Args:
            message: The signed message.
            public_key: The signer's public key.
            signature: The signature to check.

        Returns:
            `True` if the signature is valid, `False` otherwise.

        Raises:
            LmsError: If the signature does not structurally fit the public key.
        """
        if signature.lms_type != public_key.lms_type:
            raise LmsError(
                f"Signature is {signature.lms_type.name}, key is {public_key.lms_type.name}"
            )
        if signature.ots.lmots_type != public_key.lmots_type:
            raise LmsError(
                f"Signature is {signature.ots.lmots_type.name}, "
                f"key is {public_key.lmots_type.name}"
            )

        lms_params = LMS_PARAMETERS[public_key.lms_type]
        lmots_params = self.get_lmots_parameters(public_key.lmots_type)
        m, h = lms_params.m, lms_params.h

        if not 0 <= signature.q < lms_params.leaf_count:
            raise LmsError(f"Leaf {signature.q} is outside a tree of height {h}")
        if len(signature.path) != h or any(len(node) != m for node in signature.path):
            raise LmsError(f"Authentication path must hold {h} nodes of {m} bytes")
        ots = signature.ots
        if len(ots.randomizer) != lmots_params.n or len(ots.y) != lmots_params.p:
            raise LmsError("One-time signature has the wrong shape")
        if any(len(y_i) != lmots_params.n for y_i in ots.y):
            raise LmsError("One-time signature has the wrong shape")

        try:
            verifier = LmsPublicKey.deserialize(serialize_public_key(public_key))
            return bool(verifier.verify(message, serialize_signature(signature)))
        except ValueError as e:
            raise LmsError(f"Cannot verify signature for leaf {signature.q}: {e}") from e

    def get_lmots_parameters(self, lmots_type: LmotsAlgorithmType) -> LmotsParameters:
        """
        Looks up the parameters of an LM-OTS variant.

        Raises:
            LmsError: If the typecode is unknown.
        """
        try:
            return LMOTS_PARAMETERS[lmots_type]
        except KeyError:
            raise LmsError(f"Unsupported LM-OTS type: {lmots_type!r}") from None


DEFAULT_SIGNING_SERVICE = LmsScheme()
"""The service used by the pipeline unless another one is injected."""
