"""Request DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from insight_gateway.entities import InsightQuery


def _as_text(value: Any, default: str) -> str:
    """Render a JSON scalar as JavaScript's ``toString`` would."""
    if not value:
        return default
    if value is True:
        return "true"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class AnalyzeRequest(BaseModel):
    """Request DTO for the analyze endpoint.

    Values are coerced to strings the way JavaScript prints them (``true``,
    ``1`` for ``1.0``). Falsy values fall back to the defaults, so
    ``"language": ""`` means English. ``topic`` is trimmed; an empty topic is
    reported by the handler, not by pydantic, so it gets its own error code.
    """

    model_config = ConfigDict(extra="ignore")

    topic: str = Field("", description="Subject to analyze")
    language: str = Field("en", description="Language code passed to the upstream")
    geo: str = Field("", description="Optional region code")

    @field_validator("topic", mode="before")
    @classmethod
    def _coerce_topic(cls, value: Any) -> str:
        return _as_text(value, "").strip()

    @field_validator("language", mode="before")
    @classmethod
    def _coerce_language(cls, value: Any) -> str:
        return _as_text(value, "en")

    @field_validator("geo", mode="before")
    @classmethod
    def _coerce_geo(cls, value: Any) -> str:
        return _as_text(value, "")

    @classmethod
    def from_payload(cls, payload: Any) -> "AnalyzeRequest":
        """Build from decoded JSON. Anything but an object counts as ``{}``."""
        return cls.model_validate(payload if isinstance(payload, dict) else {})

    def to_query(self) -> InsightQuery:
        return InsightQuery(topic=self.topic, language=self.language, geo=self.geo)
