"""Data model of a fixture generation run."""

from __future__ import annotations

from pydantic import Field, model_validator

from lms_fixtures.config import DEFAULT_MESSAGE
from lms_fixtures.subspecs.lms import LmotsAlgorithmType, LmsAlgorithmType
from lms_fixtures.types import StrictBaseModel

from .layout import StructuralParams


class AlgorithmParameterSet(StrictBaseModel):
    """The raw knobs a fixture is requested with."""

    n: int
    """Hash output size in bytes."""

    w: int
    """Winternitz width in bits."""

    tree_height: int
    """Height of the LMS tree."""


class ResolvedAlgorithm(StrictBaseModel):
    """The canonical identifiers an `AlgorithmParameterSet` maps onto."""

    lms_type: LmsAlgorithmType
    lmots_type: LmotsAlgorithmType


class GenerationRequest(StrictBaseModel):
    """Everything one invocation of the generator needs besides the output path."""

    n: int
    """Hash output size in bytes (24 or 32)."""

    w: int
    """Winternitz width in bits (1, 2, 4 or 8)."""

    tree_height: int
    """LMS tree height (5, 10, 15 or 20)."""

    tests: int
    """Number of vectors expected to verify."""

    invalid_tests: int = 0
    """Number of additional vectors carrying a corrupted signature."""

    message: bytes = DEFAULT_MESSAGE
    """The message every vector signs."""

    @property
    def parameters(self) -> AlgorithmParameterSet:
        """The algorithm knobs of this request."""
        return AlgorithmParameterSet(n=self.n, w=self.w, tree_height=self.tree_height)

    @property
    def total_tests(self) -> int:
        """Number of vectors in the fixture, valid and invalid together."""
        return self.tests + self.invalid_tests


class TestVector(StrictBaseModel):
    """One signature in a fixture, and whether the target must accept it."""

    __test__ = False

    leaf_index: int = Field(ge=0)
    """The leaf offset the signature was produced under."""

    expect_success: bool
    """Whether verification must succeed."""

    signature_bytes: bytes
    """The signature in the target's `LmsSignature<N, P, H>` layout."""


class OutputFixture(StrictBaseModel):
    """
    The complete, encoded content of one fixture file.

    Construction fails unless every invariant the emitted program relies on
    holds, so a fixture that exists can always be written.
    """

    message: bytes
    """The signed message."""

    public_key_bytes: bytes
    """The public key in the target's `LmsPublicKey<N>` layout."""

    structural_params: StructuralParams
    """The const generic arguments needed to reinterpret the bytes."""

    test_vectors: tuple[TestVector, ...]
    """The vectors, in the order they are checked."""

    @model_validator(mode="after")
    def check_layout(self) -> OutputFixture:
        """Enforce sizes and leaf uniqueness."""
        params = self.structural_params
        if len(self.public_key_bytes) != params.public_key_size:
            raise ValueError(
                f"public key is {len(self.public_key_bytes)} bytes, "
                f"expected {params.public_key_size}"
            )

        leaf_count = 1 << params.height
        seen: set[int] = set()
        for vector in self.test_vectors:
            if vector.leaf_index >= leaf_count:
                raise ValueError(f"leaf {vector.leaf_index} is outside a tree of {leaf_count}")
            if vector.leaf_index in seen:
                raise ValueError(f"leaf {vector.leaf_index} is used by more than one vector")
            seen.add(vector.leaf_index)
            if len(vector.signature_bytes) != params.signature_size:
                raise ValueError(
                    f"signature for leaf {vector.leaf_index} is "
                    f"{len(vector.signature_bytes)} bytes, expected {params.signature_size}"
                )
        return self
