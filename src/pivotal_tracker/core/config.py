from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from . import client as _client
from .client import API_URL, PivotalTrackerClient
from .errors import ConfigurationError


@dataclass(frozen=True)
class TrackerSettings:
    project: str
    api_url: str = API_URL
    token: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    log_level: str = "INFO"


def load_env_config(*, use_dotenv: bool = True) -> TrackerSettings:
    """Load Tracker settings from environment (optional .env)."""
    if use_dotenv:
        _client.load_dotenv()

    def _get(name: str) -> Optional[str]:
        return os.getenv(name, "").strip() or None

    return TrackerSettings(
        project=_get("PIVOTAL_TRACKER_PROJECT") or "",
        api_url=_get("PIVOTAL_TRACKER_API_URL") or API_URL,
        token=_get("PIVOTAL_TRACKER_TOKEN"),
        username=_get("PIVOTAL_TRACKER_USERNAME"),
        password=_get("PIVOTAL_TRACKER_PASSWORD"),
        log_level=_get("LOG_LEVEL") or "INFO",
    )


def create_client_from_env(**kwargs) -> PivotalTrackerClient:
    """
    Create a PivotalTrackerClient from environment variables.
    Uses PIVOTAL_TRACKER_TOKEN when set, otherwise logs in with
    PIVOTAL_TRACKER_USERNAME / PIVOTAL_TRACKER_PASSWORD.
    """
    settings = load_env_config()
    if not settings.project:
        raise ConfigurationError("Missing PIVOTAL_TRACKER_PROJECT in environment.")
    if not settings.token and not (settings.username and settings.password):
        raise ConfigurationError(
            "Missing PIVOTAL_TRACKER_TOKEN or PIVOTAL_TRACKER_USERNAME/"
            "PIVOTAL_TRACKER_PASSWORD in environment."
        )

    client = PivotalTrackerClient(
        settings.project, api_url=settings.api_url, token=settings.token, **kwargs
    )
    if not settings.token:
        client.authenticate(settings.username, settings.password)
    return client


__all__ = ["TrackerSettings", "load_env_config", "create_client_from_env"]
