from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT_SECONDS = 15.0
DEFAULT_REQUEST_RETRIES = 0
DEFAULT_YT_DLP_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_WORKERS = 4


@dataclass(frozen=True)
class ScraperSettings:
    facebook_cookie: Optional[str] = None
    yt_dlp_path: str = "yt-dlp"
    yt_dlp_timeout_seconds: float = DEFAULT_YT_DLP_TIMEOUT_SECONDS
    yt_dlp_enabled: bool = True
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    request_retries: int = DEFAULT_REQUEST_RETRIES
    max_workers: int = DEFAULT_MAX_WORKERS


def _parse_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid %s=%r, using %s", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Invalid %s=%r, using %s", name, raw, default)
        return default
    return value


def _parse_int(name: str, default: int, minimum: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid %s=%r, using %s", name, raw, default)
        return default
    if value < minimum:
        logger.warning("Invalid %s=%r, using %s", name, raw, default)
        return default
    return value


def _parse_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    return default


def _resolve_yt_dlp_path() -> str:
    override = os.environ.get("YT_DLP_PATH")
    if override and override.strip():
        return override.strip()
    return shutil.which("yt-dlp") or "yt-dlp"


def load_settings() -> ScraperSettings:
    """Build :class:`ScraperSettings` from the process environment."""

    cookie = os.environ.get("FACEBOOK_COOKIE") or None
    return ScraperSettings(
        facebook_cookie=cookie.strip() if cookie else None,
        yt_dlp_path=_resolve_yt_dlp_path(),
        yt_dlp_timeout_seconds=_parse_float(
            "YT_DLP_TIMEOUT_SECONDS", DEFAULT_YT_DLP_TIMEOUT_SECONDS
        ),
        yt_dlp_enabled=_parse_bool("YT_DLP_ENABLED", True),
        request_timeout_seconds=_parse_float(
            "SCRAPER_TIMEOUT_SECONDS", DEFAULT_REQUEST_TIMEOUT_SECONDS
        ),
        request_retries=_parse_int("SCRAPER_RETRIES", DEFAULT_REQUEST_RETRIES, 0),
        max_workers=_parse_int("SCRAPER_MAX_WORKERS", DEFAULT_MAX_WORKERS, 1),
    )


__all__ = ["ScraperSettings", "load_settings"]
