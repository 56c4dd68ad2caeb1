from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class BaseModelSchema(BaseModel):
    """Base Pydantic model for request schemas."""

    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("*")
    @classmethod
    def reject_nul_characters(cls, value: Any) -> Any:
        # PostgreSQL text columns cannot store NUL.
        if isinstance(value, str) and "\x00" in value:
            raise ValueError("must not contain NUL characters")
        return value
