"""Tests for the signing orchestrator."""

from __future__ import annotations

import pytest

from lms_fixtures.fixtures import (
    ExitCode,
    ResolvedAlgorithm,
    SelfVerificationError,
    ServiceError,
    SigningOrchestrator,
    corrupt_signature,
)
from lms_fixtures.subspecs.lms import (
    KeyTree,
    LmotsAlgorithmType,
    LmotsPrivateKey,
    LmsAlgorithmType,
    LmsError,
    LmsScheme,
    PublicKey,
    Signature,
)

MESSAGE = b"orchestrated"

N32 = ResolvedAlgorithm(
    lms_type=LmsAlgorithmType.LMS_SHA256_N32_H5,
    lmots_type=LmotsAlgorithmType.LMOTS_SHA256_N32_W4,
)
N24 = ResolvedAlgorithm(
    lms_type=LmsAlgorithmType.LMS_SHA256_N24_H5,
    lmots_type=LmotsAlgorithmType.LMOTS_SHA256_N24_W4,
)


class RecordingScheme(LmsScheme):
    """Reference service that records every verification and can be told to fail."""

    def __init__(self, verify_result: bool | None = None, fail_sign_at: int | None = None):
        super().__init__()
        self.verify_result = verify_result
        self.fail_sign_at = fail_sign_at
        self.verified: list[int] = []
        self.signed: list[int] = []

    def sign(
        self, message: bytes, private_key: LmotsPrivateKey, leaf_index: int, tree: KeyTree
    ) -> Signature:
        if leaf_index == self.fail_sign_at:
            raise LmsError("hardware said no")
        self.signed.append(leaf_index)
        return super().sign(message, private_key, leaf_index, tree)

    def verify(self, message: bytes, public_key: PublicKey, signature: Signature) -> bool:
        self.verified.append(signature.q)
        result = super().verify(message, public_key, signature)
        return result if self.verify_result is None else self.verify_result


def test_every_leaf_is_signed_in_order() -> None:
    """One valid signature per sampled leaf, in sampling order."""
    service = RecordingScheme()
    batch = SigningOrchestrator(service, self_verify="all").run(N32, MESSAGE, [9, 2, 30])

    assert [leaf.leaf_index for leaf in batch.leaves] == [9, 2, 30]
    assert all(leaf.expect_success for leaf in batch.leaves)
    assert [leaf.signature.q for leaf in batch.leaves] == [9, 2, 30]
    assert service.verified == [9, 2, 30]
    assert batch.lmots_parameters.p == 67
    assert batch.public_key.lms_type is N32.lms_type

    for leaf in batch.leaves:
        assert service.verify(MESSAGE, batch.public_key, leaf.signature)


def test_failed_self_verification_aborts_the_batch() -> None:
    """A valid signature that does not verify stops the run."""
    service = RecordingScheme(verify_result=False)
    with pytest.raises(SelfVerificationError, match="does not verify") as exc_info:
        SigningOrchestrator(service, self_verify="all").run(N24, MESSAGE, [4, 5])

    assert exc_info.value.exit_code == ExitCode.SELF_VERIFICATION_FAILED
    assert service.signed == [4]


def test_n24_mode_skips_n32_verification() -> None:
    """In `n24` mode, valid N=32 signatures are accepted without verification."""
    service = RecordingScheme(verify_result=False)
    batch = SigningOrchestrator(service, self_verify="n24").run(N32, MESSAGE, [1, 2])

    assert service.verified == []
    assert len(batch.leaves) == 2


def test_n24_mode_still_verifies_n24() -> None:
    """In `n24` mode, N=24 signatures are still verified."""
    service = RecordingScheme(verify_result=False)
    with pytest.raises(SelfVerificationError):
        SigningOrchestrator(service, self_verify="n24").run(N24, MESSAGE, [1])


@pytest.mark.parametrize(
    "mode, n, expected",
    [
        ("all", 32, True),
        ("all", 24, True),
        ("n24", 32, False),
        ("n24", 24, True),
    ],
)
def test_verification_policy(mode: str, n: int, expected: bool) -> None:
    """Which hash sizes get their valid signatures re-verified."""
    assert SigningOrchestrator(self_verify=mode).verifies_valid_signatures(n) is expected


def test_trailing_leaves_get_corrupted_signatures() -> None:
    """The last `invalid_count` leaves are corrupted and expected to fail."""
    service = RecordingScheme()
    batch = SigningOrchestrator(service, self_verify="n24").run(
        N32, MESSAGE, [3, 8, 13, 21], invalid_count=2
    )

    assert [leaf.expect_success for leaf in batch.leaves] == [True, True, False, False]
    # Corrupted signatures are checked even when valid ones are not.
    assert service.verified == [13, 21]
    for leaf in batch.leaves:
        assert service.verify(MESSAGE, batch.public_key, leaf.signature) is leaf.expect_success


def test_corruption_that_still_verifies_is_an_error() -> None:
    """A corrupted signature the service accepts aborts the run."""
    service = RecordingScheme(verify_result=True)
    with pytest.raises(SelfVerificationError, match="verifies despite corruption"):
        SigningOrchestrator(service, self_verify="all").run(N24, MESSAGE, [0, 1], invalid_count=1)


def test_corrupt_signature_only_changes_the_randomizer(
    scheme: LmsScheme, n32_key_pair: tuple[PublicKey, KeyTree]
) -> None:
    """The corrupted copy keeps every field except the first byte of `C`."""
    _, tree = n32_key_pair
    signature = scheme.sign(MESSAGE, tree.private_key(6), 6, tree)
    corrupted = corrupt_signature(signature)

    assert corrupted.ots.randomizer[0] == signature.ots.randomizer[0] ^ 0xFF
    assert corrupted.ots.randomizer[1:] == signature.ots.randomizer[1:]
    assert corrupted.ots.y == signature.ots.y
    assert corrupted.path == signature.path
    assert (corrupted.q, corrupted.lms_type) == (signature.q, signature.lms_type)


def test_service_errors_are_wrapped() -> None:
    """Errors raised by the service surface as `ServiceError` naming the failed step."""
    service = RecordingScheme(fail_sign_at=7)
    with pytest.raises(ServiceError, match="Failed to sign with leaf 7: hardware said no") as exc:
        SigningOrchestrator(service).run(N32, MESSAGE, [0, 7, 9])

    assert exc.value.exit_code == ExitCode.SERVICE_FAILURE
    assert isinstance(exc.value.__cause__, LmsError)
    assert service.signed == [0]


def test_mismatched_algorithm_pair_is_a_service_error() -> None:
    """The service refuses to build a tree from typecodes of different hash sizes."""
    mixed = ResolvedAlgorithm(
        lms_type=LmsAlgorithmType.LMS_SHA256_N32_H5,
        lmots_type=LmotsAlgorithmType.LMOTS_SHA256_N24_W4,
    )
    with pytest.raises(ServiceError, match="Failed to build key tree"):
        SigningOrchestrator(LmsScheme()).run(mixed, MESSAGE, [0])
