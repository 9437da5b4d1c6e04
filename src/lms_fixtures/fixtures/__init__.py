"""
The fixture generation pipeline.

Resolver -> leaf sampler -> signing orchestrator -> binary layout encoder ->
fixture emitter, driven by `generate_fixture` / `write_fixture_file`.
"""

from .emitter import render_fixture, write_fixture
from .errors import (
    ConfigurationError,
    ExitCode,
    FixtureGenerationError,
    InvalidParameter,
    InvalidTestCount,
    LayoutError,
    OutputError,
    SelfVerificationError,
    ServiceError,
    TooManyTests,
)
from .generator import encode_batch, generate_fixture, write_fixture_file
from .layout import (
    LAYOUT_VERSION,
    StructuralParams,
    decode_public_key,
    decode_signature,
    encode_public_key,
    encode_signature,
)
from .models import (
    AlgorithmParameterSet,
    GenerationRequest,
    OutputFixture,
    ResolvedAlgorithm,
    TestVector,
)
from .orchestrator import SignedBatch, SignedLeaf, SigningOrchestrator, corrupt_signature
from .resolver import resolve
from .sampler import LeafSampler

__all__ = [
    "AlgorithmParameterSet",
    "ConfigurationError",
    "ExitCode",
    "FixtureGenerationError",
    "GenerationRequest",
    "InvalidParameter",
    "InvalidTestCount",
    "LAYOUT_VERSION",
    "LayoutError",
    "LeafSampler",
    "OutputError",
    "OutputFixture",
    "ResolvedAlgorithm",
    "SelfVerificationError",
    "ServiceError",
    "SignedBatch",
    "SignedLeaf",
    "SigningOrchestrator",
    "StructuralParams",
    "TestVector",
    "TooManyTests",
    "corrupt_signature",
    "decode_public_key",
    "decode_signature",
    "encode_batch",
    "encode_public_key",
    "encode_signature",
    "generate_fixture",
    "render_fixture",
    "resolve",
    "write_fixture",
    "write_fixture_file",
]
