"""Errors raised by the LMS signing and verification service."""

from __future__ import annotations


class LmsError(Exception):
    """
    Raised when a key tree cannot be built, a message cannot be signed,
    or a signature is structurally unusable for verification.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"
