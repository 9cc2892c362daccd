"""
Cross-origin access for the staff dashboard and host-stand clients.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config.settings import settings

# Vite and CRA dev servers
_DEV_ORIGINS = tuple(
    f"http://{host}:{port}" for host in ("localhost", "127.0.0.1") for port in (3000, 5173)
)


def get_cors_origins() -> list[str]:
    """Origins from ALLOWED_ORIGINS (comma-separated), else the local dev servers."""
    configured = [origin.strip() for origin in settings.allowed_origins.split(",")]
    configured = [origin for origin in configured if origin]
    return configured or list(_DEV_ORIGINS)


def configure_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
        # Preflights are not cached in development so origin edits apply at once
        max_age=0 if settings.environment == "development" else 600,
    )
