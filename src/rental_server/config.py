"""Server configuration — reads settings from environment variables.

Defaults suit local development; production overrides them via env vars.
"""

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ServerSettings:
    """Immutable server configuration read from environment at startup."""

    # Network
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS: comma-separated origins, or "*" for wide-open dev mode
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"

    # Object storage: upload URLs are issued under this base and signed
    # with the secret; the storage gateway verifies the signature on PUT.
    object_upload_base_url: str = "http://localhost:9000/rental-objects"
    object_upload_secret: str = "dev-upload-secret"
    object_upload_ttl_seconds: int = 900

    # Trusted proxy secret: when set, requests carrying X-User-ID must
    # also carry a matching X-Proxy-Secret.
    trusted_proxy_secret: str | None = None


def load_settings() -> ServerSettings:
    """Build settings from ``SERVER_*`` and ``OBJECT_UPLOAD_*`` environment variables."""
    raw_origins = os.getenv("SERVER_CORS_ORIGINS", "*")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]

    return ServerSettings(
        host=os.getenv("SERVER_HOST", "0.0.0.0"),
        port=int(os.getenv("SERVER_PORT", "8080")),
        cors_origins=origins,
        log_level=os.getenv("SERVER_LOG_LEVEL", "INFO").upper(),
        object_upload_base_url=os.getenv(
            "OBJECT_UPLOAD_BASE_URL", "http://localhost:9000/rental-objects",
        ),
        object_upload_secret=os.getenv("OBJECT_UPLOAD_SECRET", "dev-upload-secret"),
        object_upload_ttl_seconds=int(os.getenv("OBJECT_UPLOAD_TTL_SECONDS", "900")),
        trusted_proxy_secret=os.getenv("TRUSTED_PROXY_SECRET") or None,
    )
