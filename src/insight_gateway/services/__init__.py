"""Service layer for business logic.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .insight_service import InsightService

__all__ = [
    "InsightService",
]
