"""
app/core/config.py

Centralised configuration loaded from environment variables.
Use a .env file locally; the hosting platform injects these at runtime.
"""

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ── Application ────────────────────────────────────────────────────────────
    app_name: str = "Document Verification Service"
    app_version: str = "1.0.0"
    debug: bool = False

    # ── Caller-side verification path ──────────────────────────────────────────
    # Base URL of the network verification service.  Leave unset to route every
    # verify() call through the local fallback validator.
    verify_service_url: Optional[str] = None
    demo_mode: bool = False
    verify_timeout_seconds: float = 10.0
    verify_request_mode: Literal["metadata", "content"] = "metadata"
    signature_sample_bytes: int = 8    # leading bytes sent in metadata mode

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


# Single shared instance — import this everywhere.
settings = Settings()
