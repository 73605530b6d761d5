"""Configuration for OCC clearing filters."""

from pydantic import BaseModel, Field, ConfigDict


class OCCSettings(BaseModel):
    """Clearing member filter for the OCC adapter."""

    model_config = ConfigDict(
        frozen=True,
        validate_assignment=True,
        str_strip_whitespace=True,
    )

    cmo_code: str = Field(default="WFCSLLC", min_length=1, description="Clearing member to keep")
