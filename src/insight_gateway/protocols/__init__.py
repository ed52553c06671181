"""Protocol interfaces for swappable implementations.

Protocols let the service run against Redis or memory caches and against a
real or simulated upstream without changing service code.
"""

from .insight_upstream import InsightUpstream
from .response_store import ResponseStore

__all__ = [
    "InsightUpstream",
    "ResponseStore",
]
