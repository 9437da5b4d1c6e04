"""
Shared pytest fixtures for all lms_fixtures tests.

Key trees are built per test: pyhsslms one-time leaves sign only once, so a
shared tree would make tests that sign the same leaf depend on test order.
"""

from __future__ import annotations

import random

import pytest

from lms_fixtures.fixtures import (
    GenerationRequest,
    LeafSampler,
    ResolvedAlgorithm,
    SigningOrchestrator,
)
from lms_fixtures.subspecs.lms import (
    KeyTree,
    LmotsAlgorithmType,
    LmsAlgorithmType,
    LmsScheme,
    PublicKey,
)

N32_W4_H5 = ResolvedAlgorithm(
    lms_type=LmsAlgorithmType.LMS_SHA256_N32_H5,
    lmots_type=LmotsAlgorithmType.LMOTS_SHA256_N32_W4,
)
N24_W4_H5 = ResolvedAlgorithm(
    lms_type=LmsAlgorithmType.LMS_SHA256_N24_H5,
    lmots_type=LmotsAlgorithmType.LMOTS_SHA256_N24_W4,
)


@pytest.fixture(scope="session")
def scheme() -> LmsScheme:
    """The pyhsslms-backed signing service."""
    return LmsScheme()


@pytest.fixture
def n32_key_pair(scheme: LmsScheme) -> tuple[PublicKey, KeyTree]:
    """An LMS_SHA256_N32_H5 / LMOTS_SHA256_N32_W4 key pair."""
    return scheme.build_tree(N32_W4_H5.lms_type, N32_W4_H5.lmots_type)


@pytest.fixture
def n24_key_pair(scheme: LmsScheme) -> tuple[PublicKey, KeyTree]:
    """An LMS_SHA256_N24_H5 / LMOTS_SHA256_N24_W4 key pair."""
    return scheme.build_tree(N24_W4_H5.lms_type, N24_W4_H5.lmots_type)


@pytest.fixture
def seeded_sampler() -> LeafSampler:
    """A leaf sampler with a fixed seed."""
    return LeafSampler(random.Random(1234))


@pytest.fixture
def orchestrator(scheme: LmsScheme) -> SigningOrchestrator:
    """An orchestrator that re-verifies every signature."""
    return SigningOrchestrator(service=scheme, self_verify="all")


@pytest.fixture
def small_request() -> GenerationRequest:
    """A cheap request: N=32, W=4, tree height 5, three vectors."""
    return GenerationRequest(n=32, w=4, tree_height=5, tests=3)
