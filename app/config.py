"""Application configuration read from environment variables.

Defaults are meant for local development.
"""

from __future__ import annotations

import os

# --- Admin credentials -------------------------------------------------------
# Logging in with exactly these credentials yields an admin session.
ADMIN_EMAIL: str = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "admin")

# --- Startup -----------------------------------------------------------------
# Load a handful of demo events when the app is created.
SEED_SAMPLE_EVENTS: bool = os.getenv("SEED_SAMPLE_EVENTS", "true").lower() in (
    "1",
    "true",
    "yes",
)

# --- HTTP --------------------------------------------------------------------
CORS_ALLOW_ORIGINS: list[str] = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
