"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract. Internal logic uses
entities from the entities package.
"""

from .requests import AnalyzeRequest
from .responses import ErrorResponse, HealthCheckResponse

__all__ = [
    "AnalyzeRequest",
    "ErrorResponse",
    "HealthCheckResponse",
]
