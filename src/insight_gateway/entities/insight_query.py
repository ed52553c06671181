"""Insight query domain entity."""

from dataclasses import dataclass

CACHE_KEY_PREFIX = "insight"


def build_cache_key(language: str, geo: str, topic: str) -> str:
    """Build the cache key for a query.

    Only the topic is case-normalized; language and geo are used as given.
    """
    return f"{CACHE_KEY_PREFIX}:{language}:{geo}:{topic.lower()}"


@dataclass(frozen=True)
class InsightQuery:
    """A validated request for an insight about a topic.

    Attributes:
        topic: Subject to analyze, already trimmed and non-empty
        language: Language code passed through to the upstream (e.g. "en")
        geo: Optional region code, empty when not given
    """

    topic: str
    language: str = "en"
    geo: str = ""

    @property
    def cache_key(self) -> str:
        return build_cache_key(self.language, self.geo, self.topic)

    def to_payload(self) -> dict[str, str]:
        """Body sent to the upstream orchestration service."""
        return {"topic": self.topic, "language": self.language, "geo": self.geo}
