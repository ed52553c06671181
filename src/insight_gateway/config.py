import os
from dataclasses import dataclass
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

CACHE_BACKENDS = ("redis", "memory")


@dataclass(frozen=True)
class Settings:
    """Application settings.

    Built once at process start (see ``Settings.from_env``) and passed into the
    app factory. Request handling code never reads the environment directly.
    """

    # Client auth
    public_api_key: str | None = None

    # Upstream orchestration service
    upstream_url: str | None = None
    upstream_token: str | None = None
    upstream_timeout_ms: int = 12000

    # Cache
    cache_ttl: int = 900  # 15 minutes
    cache_backend: str = "redis"
    cache_namespace: str = "insight-cache"

    # Redis
    redis_url: str = "redis://localhost:6379"
    redis_password: str | None = None

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = False

    environment: str = "local"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables (and ``.env`` if present)."""
        load_dotenv()
        return cls(
            public_api_key=os.getenv("PUBLIC_API_KEY"),
            upstream_url=os.getenv("UPSTREAM_URL"),
            upstream_token=os.getenv("UPSTREAM_TOKEN"),
            upstream_timeout_ms=int(os.getenv("UPSTREAM_TIMEOUT_MS", "12000")),
            cache_ttl=int(os.getenv("CACHE_TTL", "900")),
            cache_backend=os.getenv("CACHE_BACKEND", "redis").lower(),
            cache_namespace=os.getenv("CACHE_NAMESPACE", "insight-cache"),
            redis_url=os.getenv("REDIS_URL", "redis://localhost:6379"),
            redis_password=os.getenv("REDIS_PASSWORD"),
            api_host=os.getenv("API_HOST", "0.0.0.0"),
            api_port=int(os.getenv("API_PORT", "8000")),
            api_reload=os.getenv("API_RELOAD", "false").lower() == "true",
            environment=os.getenv("ENVIRONMENT", "local"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def upstream_timeout(self) -> float:
        """Upstream deadline in seconds."""
        return self.upstream_timeout_ms / 1000

    def validate(self) -> list[str]:
        """Return the names of required env vars that are not set."""
        required = {
            "PUBLIC_API_KEY": self.public_api_key,
            "UPSTREAM_URL": self.upstream_url,
        }
        return [name for name, value in required.items() if not value]

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl <= 0:
            raise ValueError(f"CACHE_TTL must be positive, got {self.cache_ttl}")

        if self.upstream_timeout_ms <= 0:
            raise ValueError(f"UPSTREAM_TIMEOUT_MS must be positive, got {self.upstream_timeout_ms}")

        if self.cache_backend not in CACHE_BACKENDS:
            raise ValueError(
                f"CACHE_BACKEND must be one of {list(CACHE_BACKENDS)}, got {self.cache_backend!r}"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()


def get_redis_client(settings: Settings) -> redis.Redis:
    """Create an asyncio Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=False,
    )
