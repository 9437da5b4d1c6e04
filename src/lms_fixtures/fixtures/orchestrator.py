"""
Drives the signing service to produce one signature per sampled leaf.

The orchestrator owns the key tree for the duration of a run. Any service
failure, and any signature that does not verify the way its vector
expects, aborts the whole batch.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, NamedTuple, TypeVar

from lms_fixtures.config import LMS_SELF_VERIFY
from lms_fixtures.subspecs.lms import (
    DEFAULT_SIGNING_SERVICE,
    KeyTree,
    LmotsParameters,
    LmotsSignature,
    LmsError,
    PublicKey,
    Signature,
    SigningService,
)

from .errors import SelfVerificationError, ServiceError
from .models import ResolvedAlgorithm

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SignedLeaf(NamedTuple):
    """A signature produced under one leaf, with its expected verification outcome."""

    leaf_index: int
    expect_success: bool
    signature: Signature


class SignedBatch(NamedTuple):
    """Everything the encoder needs from a signing run."""

    public_key: PublicKey
    lmots_parameters: LmotsParameters
    leaves: list[SignedLeaf]


def corrupt_signature(signature: Signature) -> Signature:
    """
    Return a copy of `signature` that no longer verifies.

    Inverts the first byte of the one-time randomizer `C`. The structure,
    typecodes and sizes are untouched, so the target has to reject the
    signature cryptographically rather than by parsing it.
    """
    ots = signature.ots
    randomizer = bytes([ots.randomizer[0] ^ 0xFF]) + ots.randomizer[1:]
    return Signature(
        q=signature.q,
        ots=LmotsSignature(lmots_type=ots.lmots_type, randomizer=randomizer, y=ots.y),
        lms_type=signature.lms_type,
        path=signature.path,
    )


class SigningOrchestrator:
    """
    Builds one key tree and signs the fixture message under each sampled leaf.

    Args:
        service: The signing and verification service.
        self_verify: `'all'` re-verifies every valid signature before it is
            accepted; `'n24'` only re-verifies signatures with 24-byte hashes.
            Corrupted signatures are always checked to fail.
    """

    def __init__(
        self,
        service: SigningService = DEFAULT_SIGNING_SERVICE,
        self_verify: str = LMS_SELF_VERIFY,
    ) -> None:
        self.service = service
        self.self_verify = self_verify

    def verifies_valid_signatures(self, n: int) -> bool:
        """Whether valid signatures with `n`-byte hashes are re-verified."""
        return self.self_verify == "all" or n == 24

    def run(
        self,
        algorithm: ResolvedAlgorithm,
        message: bytes,
        leaf_offsets: Sequence[int],
        invalid_count: int = 0,
    ) -> SignedBatch:
        """
        Sign `message` under every leaf in `leaf_offsets`.

        The last `invalid_count` leaves produce corrupted signatures marked
        as expected to fail; all others are expected to verify.

        Args:
            algorithm: The typecodes to build the tree with.
            message: The message to sign.
            leaf_offsets: Distinct leaf offsets, relative to the tree's base index.
            invalid_count: How many of the trailing leaves get corrupted signatures.

        Returns:
            The public key, the LM-OTS parameters and one signed leaf per offset.

        Raises:
            ServiceError: If the service fails to build, sign or verify.
            SelfVerificationError: If a signature verifies differently than expected.
        """
        public_key, tree = self._call(
            "build key tree", self.service.build_tree, algorithm.lms_type, algorithm.lmots_type
        )
        lmots_parameters = self._call(
            "look up LM-OTS parameters", self.service.get_lmots_parameters, algorithm.lmots_type
        )
        check_valid = self.verifies_valid_signatures(lmots_parameters.n)

        first_invalid = len(leaf_offsets) - invalid_count
        leaves: list[SignedLeaf] = []
        for position, offset in enumerate(leaf_offsets):
            expect_success = position < first_invalid
            signature = self._sign_leaf(tree, message, offset)

            if not expect_success:
                signature = corrupt_signature(signature)

            if check_valid or not expect_success:
                self._self_verify(message, public_key, signature, offset, expect_success)

            leaves.append(SignedLeaf(offset, expect_success, signature))

        return SignedBatch(public_key, lmots_parameters, leaves)

    def _sign_leaf(self, tree: KeyTree, message: bytes, offset: int) -> Signature:
        leaf_index = tree.q + offset
        logger.debug("Signing with leaf %d", leaf_index)
        private_key = self._call("read private key", tree.private_key, leaf_index)
        return self._call(
            f"sign with leaf {leaf_index}",
            self.service.sign,
            message,
            private_key,
            leaf_index,
            tree,
        )

    def _self_verify(
        self,
        message: bytes,
        public_key: PublicKey,
        signature: Signature,
        offset: int,
        expect_success: bool,
    ) -> None:
        verified = self._call(
            f"verify leaf {offset}", self.service.verify, message, public_key, signature
        )
        logger.debug("Leaf %d verified=%s (expected %s)", offset, verified, expect_success)
        if verified != expect_success:
            outcome = "does not verify" if expect_success else "verifies despite corruption"
            raise SelfVerificationError(f"Signature for leaf {offset} {outcome}")

    @staticmethod
    def _call(action: str, func: Callable[..., T], *args: Any) -> T:
        try:
            return func(*args)
        except LmsError as e:
            raise ServiceError(f"Failed to {action}: {e.message}") from e
