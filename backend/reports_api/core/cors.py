"""
CORS configuration for the admin dashboard.

The reports are read-only POSTs from the dashboard, so only GET, POST and
preflight requests are allowed.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config.settings import settings

# Dashboard dev servers, used when ALLOWED_ORIGINS is empty
DEV_ORIGINS = [
    f"http://{host}:{port}"
    for host in ("localhost", "127.0.0.1")
    for port in (3000, 5173, 8081)  # Next.js, Vite, Expo web
]


def get_cors_origins() -> list[str]:
    """ALLOWED_ORIGINS (comma-separated, trailing slashes ignored) or the dev defaults."""
    configured = [o.strip().rstrip("/") for o in settings.allowed_origins.split(",")]
    return [o for o in configured if o] or DEV_ORIGINS


def configure_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
        max_age=0 if settings.environment == "development" else 600,
    )
