"""Handler layer for HTTP endpoints.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .analyze_handler import AnalyzeHandler

__all__ = [
    "AnalyzeHandler",
]
