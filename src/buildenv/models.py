"""Pydantic models for resolved secrets."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class SecretSource(str, Enum):
    FILE = "file"
    ENVIRONMENT = "environment"


class ResolvedSecret(BaseModel):
    """A required secret together with where it was found."""
    model_config = ConfigDict(frozen=True)

    name: str
    value: str
    source: SecretSource

    @field_validator("name", "value")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @property
    def masked(self) -> str:
        """Value with everything but the last four characters hidden."""
        if len(self.value) <= 8:
            return "*" * len(self.value)
        return "*" * (len(self.value) - 4) + self.value[-4:]
