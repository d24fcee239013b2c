"""
Matching Constants

Tunable thresholds and limits for the matching engine, grouped into one
immutable object so matchers never read literals or global settings directly.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, ConfigDict

from ..config import settings


class MatchConfig(BaseModel):
    # Top score must be strictly greater than this to be answered
    accept_threshold: float = Field(default=0.3, ge=0.0, le=1.0)
    # Maximum fuzzy distance; also the fuzzy index cutoff
    fuzzy_threshold: float = Field(default=0.4, ge=0.0, le=1.0)
    fuzzy_limit: int = Field(default=3, ge=1)
    suggestion_limit: int = Field(default=5, ge=0, le=5)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def from_settings(cls) -> "MatchConfig":
        return cls(
            accept_threshold=settings.accept_threshold,
            fuzzy_threshold=settings.fuzzy_threshold,
            fuzzy_limit=settings.fuzzy_limit,
            suggestion_limit=settings.suggestion_limit,
        )
