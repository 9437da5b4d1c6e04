"""
The fixture generation pipeline.

Resolve parameters, sample leaves, sign, encode, and emit. Every stage
completes its whole batch before the next one starts, and the output file is
only touched once the complete fixture exists in memory.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from lms_fixtures.config import MAX_TESTS, MIN_TESTS

from .emitter import write_fixture
from .errors import InvalidTestCount, LayoutError, TooManyTests
from .layout import StructuralParams, encode_public_key, encode_signature
from .models import GenerationRequest, OutputFixture, ResolvedAlgorithm, TestVector
from .orchestrator import SignedBatch, SigningOrchestrator
from .resolver import resolve
from .sampler import LeafSampler

logger = logging.getLogger(__name__)


def _check_test_count(request: GenerationRequest) -> None:
    if request.tests < MIN_TESTS or request.invalid_tests < 0 or request.total_tests > MAX_TESTS:
        raise InvalidTestCount(request.total_tests, MIN_TESTS, MAX_TESTS)
    if request.total_tests > 1 << request.tree_height:
        raise TooManyTests(request.total_tests, request.tree_height)


def encode_batch(
    message: bytes, algorithm: ResolvedAlgorithm, batch: SignedBatch
) -> OutputFixture:
    """
    Serialize a signed batch into the target's binary layout.

    Args:
        message: The signed message.
        algorithm: The typecodes the batch was produced with.
        batch: The orchestrator's output.

    Returns:
        The encoded fixture.

    Raises:
        LayoutError: If any encoding disagrees with the target structure sizes.
    """
    params = StructuralParams.for_types(algorithm.lms_type, algorithm.lmots_type)
    if params.p != batch.lmots_parameters.p:
        raise LayoutError(
            f"Service reports p={batch.lmots_parameters.p}, "
            f"{algorithm.lmots_type.name} has p={params.p}"
        )

    vectors = tuple(
        TestVector(
            leaf_index=leaf.leaf_index,
            expect_success=leaf.expect_success,
            signature_bytes=encode_signature(leaf.signature, params),
        )
        for leaf in batch.leaves
    )
    try:
        return OutputFixture(
            message=message,
            public_key_bytes=encode_public_key(batch.public_key, params),
            structural_params=params,
            test_vectors=vectors,
        )
    except ValidationError as e:
        raise LayoutError(f"Encoded fixture is inconsistent: {e}") from e


def generate_fixture(
    request: GenerationRequest,
    *,
    sampler: LeafSampler | None = None,
    orchestrator: SigningOrchestrator | None = None,
) -> OutputFixture:
    """
    Run the pipeline up to, but excluding, writing the output file.

    Args:
        request: The requested parameters and test counts.
        sampler: Leaf sampler to use. Defaults to one on the process-wide generator.
        orchestrator: Signing orchestrator to use. Defaults to the pyhsslms-backed service.

    Returns:
        The complete, encoded fixture.

    Raises:
        ConfigurationError: If the request is invalid. Raised before any signing.
        ServiceError: If signing or self-verification fails.
        LayoutError: If the encoding does not match the target structures.
    """
    algorithm = resolve(request.parameters)
    _check_test_count(request)

    sampler = sampler or LeafSampler()
    orchestrator = orchestrator or SigningOrchestrator()

    logger.info(
        "Going to create tests for N: %d, W: %d, tree_height: %d",
        request.n,
        request.w,
        request.tree_height,
    )
    leaf_offsets = sampler.sample(request.total_tests, request.tree_height)
    logger.info("Going to use the following keys: %s", leaf_offsets)

    batch = orchestrator.run(
        algorithm, request.message, leaf_offsets, invalid_count=request.invalid_tests
    )
    return encode_batch(request.message, algorithm, batch)


def write_fixture_file(
    request: GenerationRequest,
    path: Path,
    *,
    sampler: LeafSampler | None = None,
    orchestrator: SigningOrchestrator | None = None,
) -> OutputFixture:
    """
    Generate a fixture and write it as a test program to `path`.

    Nothing is written if any stage fails.

    Returns:
        The fixture that was written.

    Raises:
        FixtureGenerationError: If any stage fails.
    """
    fixture = generate_fixture(request, sampler=sampler, orchestrator=orchestrator)
    write_fixture(fixture, path)
    return fixture
