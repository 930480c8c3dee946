"""
Runtime configuration.

Values are read from environment variables (optionally from a `.env` file in
the project root) into an immutable Settings object. Nothing here talks to the
network; missing Supabase credentials are reported only when a client is
actually created (see `repositories/client.py`).

Environment variables:
- SUPABASE_URL, SUPABASE_KEY: document store credentials (server-side key)
- CADENCE_INTERVAL_SECONDS: trigger interval for the looping runner (3600)
- CADENCE_MAX_WORKERS: parallel candidate workers per run (8)
- CADENCE_CANDIDATE_TIMEOUT_SECONDS: bound on one candidate's processing (60)
- DISPATCH_TIMEOUT_SECONDS: bound on one dispatcher call (15)
- AGENT_SIGNATURE: sign-off used in outreach templates
- WHATSAPP_GATEWAY_URL, WHATSAPP_GATEWAY_TOKEN: HTTP messaging gateway
- SMTP_HOST, SMTP_PORT, SMTP_USER, SMTP_PASSWORD, SMTP_FROM_EMAIL, SMTP_USE_TLS
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

ENV_PATH = Path(__file__).parent.parent / ".env"


def _get_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be > 0, got {value}")
    return value


def _get_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be > 0, got {value}")
    return value


def _get_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _get_optional(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(name)
    return value if value else None


@dataclass(frozen=True, slots=True)
class Settings:
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None

    cadence_interval_seconds: int = 3600
    cadence_max_workers: int = 8
    candidate_timeout_seconds: float = 60.0
    dispatch_timeout_seconds: float = 15.0

    agent_signature: str = "Your RealtorBuddy agent"

    whatsapp_gateway_url: Optional[str] = None
    whatsapp_gateway_token: Optional[str] = None

    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_from_email: Optional[str] = None
    smtp_use_tls: bool = True

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    @property
    def gateway_configured(self) -> bool:
        return bool(self.whatsapp_gateway_url or self.smtp_host)

    @staticmethod
    def from_env(env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build Settings from a mapping (defaults to os.environ)."""

        source: Mapping[str, str] = os.environ if env is None else env

        return Settings(
            supabase_url=_get_optional(source, "SUPABASE_URL"),
            supabase_key=_get_optional(source, "SUPABASE_KEY"),
            cadence_interval_seconds=_get_int(source, "CADENCE_INTERVAL_SECONDS", 3600),
            cadence_max_workers=_get_int(source, "CADENCE_MAX_WORKERS", 8),
            candidate_timeout_seconds=_get_float(source, "CADENCE_CANDIDATE_TIMEOUT_SECONDS", 60.0),
            dispatch_timeout_seconds=_get_float(source, "DISPATCH_TIMEOUT_SECONDS", 15.0),
            agent_signature=source.get("AGENT_SIGNATURE") or "Your RealtorBuddy agent",
            whatsapp_gateway_url=_get_optional(source, "WHATSAPP_GATEWAY_URL"),
            whatsapp_gateway_token=_get_optional(source, "WHATSAPP_GATEWAY_TOKEN"),
            smtp_host=_get_optional(source, "SMTP_HOST"),
            smtp_port=_get_int(source, "SMTP_PORT", 587),
            smtp_user=_get_optional(source, "SMTP_USER"),
            smtp_password=_get_optional(source, "SMTP_PASSWORD"),
            smtp_from_email=_get_optional(source, "SMTP_FROM_EMAIL"),
            smtp_use_tls=_get_bool(source, "SMTP_USE_TLS", True),
        )


def load_settings(env_path: Path = ENV_PATH) -> Settings:
    """Load `.env` (if present) into the process environment, then read Settings."""

    load_dotenv(dotenv_path=env_path)
    return Settings.from_env()


__all__ = ["Settings", "load_settings"]
