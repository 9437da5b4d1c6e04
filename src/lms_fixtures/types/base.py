"""The pydantic base model every fixture and key container derives from."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """
    A strict, immutable pydantic base model.

    Values are never coerced, so a byte string cannot slip in where an
    integer is expected.
    """

    model_config = ConfigDict(
        validate_default=True,
        extra="forbid",
        frozen=True,
        strict=True,
    )

    def replace(self: Self, **changes: Any) -> Self:
        """Return a validated copy with `changes` applied to the explicitly set fields."""
        return self.__class__(**(self.model_dump(exclude_unset=True) | changes))
