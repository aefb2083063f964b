"""Core base class for configuration models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable model base that rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_assignment=True)
