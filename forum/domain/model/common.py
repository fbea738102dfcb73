"""Shared base for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable entity. Changes produce a new instance via ``model_copy``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
