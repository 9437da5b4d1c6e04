"""Base types shared across the fixture generator."""

from .base import StrictBaseModel

__all__ = [
    "StrictBaseModel",
]
