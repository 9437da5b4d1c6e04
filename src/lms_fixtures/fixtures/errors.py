"""
Exception hierarchy for fixture generation.

Every error aborts the whole run; none of them leaves an output file behind.
Each exception carries the process exit code the CLI reports for it.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, ClassVar


class ExitCode(IntEnum):
    """Documented process exit codes of the fixture generator."""

    SUCCESS = 0
    INVALID_HASH_SIZE = 10
    INVALID_WINTERNITZ_WIDTH = 11
    INVALID_TREE_HEIGHT = 12
    INVALID_TEST_COUNT = 13
    TOO_MANY_TESTS = 14
    SERVICE_FAILURE = 20
    SELF_VERIFICATION_FAILED = 21
    LAYOUT_MISMATCH = 22
    OUTPUT_FAILURE = 30


class FixtureGenerationError(Exception):
    """
    Base exception for all fixture generation errors.

    Attributes:
        message: Human-readable error description.
    """

    exit_code: ClassVar[ExitCode] = ExitCode.SERVICE_FAILURE

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class ConfigurationError(FixtureGenerationError):
    """Base class for errors detected before any signing work starts."""


class InvalidParameter(ConfigurationError):
    """
    Raised when one of the algorithm knobs is outside its allowed set.

    Attributes:
        field: The offending parameter (`n`, `w` or `tree_height`).
        value: The rejected value.
        allowed: The values that would have been accepted.
    """

    _EXIT_CODES: ClassVar[dict[str, ExitCode]] = {
        "n": ExitCode.INVALID_HASH_SIZE,
        "w": ExitCode.INVALID_WINTERNITZ_WIDTH,
        "tree_height": ExitCode.INVALID_TREE_HEIGHT,
    }

    def __init__(self, field: str, value: Any, allowed: tuple[int, ...]) -> None:
        self.field = field
        self.value = value
        self.allowed = allowed
        choices = ", ".join(str(a) for a in allowed)
        super().__init__(f"Invalid {field}: {value} expected one of {choices}")

    @property
    def exit_code(self) -> ExitCode:  # type: ignore[override]
        """The exit code of the offending field."""
        return self._EXIT_CODES[self.field]


class InvalidTestCount(ConfigurationError):
    """Raised when the requested number of test vectors is outside the allowed range."""

    exit_code = ExitCode.INVALID_TEST_COUNT

    def __init__(self, count: int, minimum: int, maximum: int) -> None:
        self.count = count
        super().__init__(
            f"Invalid number of tests: {count} expected a number between {minimum} and {maximum}"
        )


class TooManyTests(ConfigurationError):
    """Raised when a tree does not have enough distinct leaves for the requested vectors."""

    exit_code = ExitCode.TOO_MANY_TESTS

    def __init__(self, count: int, tree_height: int) -> None:
        self.count = count
        self.tree_height = tree_height
        super().__init__(f"Can't create {count} tests with a tree height of {tree_height}")


class ServiceError(FixtureGenerationError):
    """Raised when the signing service fails to build a tree, sign or verify."""

    exit_code = ExitCode.SERVICE_FAILURE


class SelfVerificationError(ServiceError):
    """Raised when a generated signature does not verify the way its vector expects."""

    exit_code = ExitCode.SELF_VERIFICATION_FAILED


class LayoutError(FixtureGenerationError):
    """Raised when encoded bytes do not match the consumer's structure sizes."""

    exit_code = ExitCode.LAYOUT_MISMATCH


class OutputError(FixtureGenerationError):
    """Raised when the output file cannot be created or written."""

    exit_code = ExitCode.OUTPUT_FAILURE
