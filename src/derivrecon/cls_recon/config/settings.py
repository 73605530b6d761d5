"""Configuration for CLS currency conversion."""

from pydantic import BaseModel, Field, ConfigDict, field_validator


class CLSSettings(BaseModel):
    """Currency pair and rate fixing used to normalize CLS amounts."""

    model_config = ConfigDict(
        frozen=True,
        validate_assignment=True,  # Immutable configuration
    )

    source_currency: str = Field(default="CAD", min_length=3, max_length=3)
    target_currency: str = Field(default="USD", min_length=3, max_length=3)
    rate_type: str = Field(default="NEW_YORK", min_length=1)

    @field_validator("source_currency", "target_currency", "rate_type")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.strip().upper()
