"""Header names and values shared by every handler response."""

JSON_CONTENT_TYPE = "application/json"

CACHE_STATUS_HEADER = "x-cache"
API_KEY_HEADER = "x-api-key"

CORS_HEADERS = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "POST, OPTIONS",
    "access-control-allow-headers": "authorization, content-type, x-api-key",
}


def cache_control(ttl: int) -> str:
    """Build the cache-control value advertised on fresh upstream responses."""
    return f"public, max-age={ttl}"
