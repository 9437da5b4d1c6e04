"""
Test fixture generator for LMS signature verifiers.

Resolves LMS / LM-OTS parameters, signs a message under randomly chosen tree
leaves, and emits a self-contained verification program for the target.
"""

from .fixtures import (
    FixtureGenerationError,
    GenerationRequest,
    OutputFixture,
    TestVector,
    generate_fixture,
    write_fixture_file,
)

__all__ = [
    "FixtureGenerationError",
    "GenerationRequest",
    "OutputFixture",
    "TestVector",
    "generate_fixture",
    "write_fixture_file",
]
