"""
Tests for `config/settings.py`.

Covers rules:
- Defaults apply when variables are absent or blank.
- Numeric variables must be positive numbers.
- Supabase and gateway configuration flags reflect the provided values.
"""

import pytest

from config.settings import Settings


def test_defaults() -> None:
    """Verify defaults for an empty environment."""

    settings = Settings.from_env({})

    assert settings.cadence_interval_seconds == 3600
    assert settings.cadence_max_workers == 8
    assert settings.candidate_timeout_seconds == 60.0
    assert settings.dispatch_timeout_seconds == 15.0
    assert settings.smtp_port == 587
    assert settings.smtp_use_tls is True
    assert not settings.supabase_configured
    assert not settings.gateway_configured


def test_values_are_read_from_env() -> None:
    """Verify values are parsed from the mapping."""

    settings = Settings.from_env(
        {
            "SUPABASE_URL": "https://project.supabase.co",
            "SUPABASE_KEY": "service-key",
            "CADENCE_MAX_WORKERS": "2",
            "DISPATCH_TIMEOUT_SECONDS": "2.5",
            "AGENT_SIGNATURE": "Sam Realtor",
            "SMTP_HOST": "smtp.example.com",
            "SMTP_USE_TLS": "false",
            "CADENCE_INTERVAL_SECONDS": "",
        }
    )

    assert settings.supabase_configured
    assert settings.gateway_configured
    assert settings.cadence_max_workers == 2
    assert settings.dispatch_timeout_seconds == 2.5
    assert settings.agent_signature == "Sam Realtor"
    assert settings.smtp_use_tls is False
    assert settings.cadence_interval_seconds == 3600


@pytest.mark.parametrize(
    "env",
    [
        {"CADENCE_MAX_WORKERS": "many"},
        {"CADENCE_MAX_WORKERS": "0"},
        {"DISPATCH_TIMEOUT_SECONDS": "-1"},
        {"CADENCE_CANDIDATE_TIMEOUT_SECONDS": "soon"},
    ],
)
def test_invalid_numbers_are_rejected(env: dict) -> None:
    """Verify malformed or non-positive numbers fail fast."""

    with pytest.raises(ValueError):
        Settings.from_env(env)
