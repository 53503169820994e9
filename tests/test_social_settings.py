from __future__ import annotations

import pytest

from social_stats import settings as settings_module
from social_stats.models import Platform
from social_stats.settings import load_settings

ENV_VARS = (
    "FACEBOOK_COOKIE",
    "YT_DLP_PATH",
    "YT_DLP_TIMEOUT_SECONDS",
    "YT_DLP_ENABLED",
    "SCRAPER_TIMEOUT_SECONDS",
    "SCRAPER_RETRIES",
    "SCRAPER_MAX_WORKERS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings_module.shutil, "which", lambda name: None)

    loaded = load_settings()

    assert loaded.facebook_cookie is None
    assert loaded.yt_dlp_path == "yt-dlp"
    assert loaded.yt_dlp_timeout_seconds == 30
    assert loaded.yt_dlp_enabled is True
    assert loaded.request_timeout_seconds == 15
    assert loaded.request_retries == 0
    assert loaded.max_workers == 4


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FACEBOOK_COOKIE", " c_user=1; xs=2 ")
    monkeypatch.setenv("YT_DLP_PATH", "/srv/bin/yt-dlp")
    monkeypatch.setenv("YT_DLP_TIMEOUT_SECONDS", "12.5")
    monkeypatch.setenv("YT_DLP_ENABLED", "off")
    monkeypatch.setenv("SCRAPER_RETRIES", "3")
    monkeypatch.setenv("SCRAPER_MAX_WORKERS", "8")

    loaded = load_settings()

    assert loaded.facebook_cookie == "c_user=1; xs=2"
    assert loaded.yt_dlp_path == "/srv/bin/yt-dlp"
    assert loaded.yt_dlp_timeout_seconds == 12.5
    assert loaded.yt_dlp_enabled is False
    assert loaded.request_retries == 3
    assert loaded.max_workers == 8


def test_invalid_numbers_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("YT_DLP_TIMEOUT_SECONDS", "soon")
    monkeypatch.setenv("SCRAPER_TIMEOUT_SECONDS", "-1")
    monkeypatch.setenv("SCRAPER_MAX_WORKERS", "0")

    loaded = load_settings()

    assert loaded.yt_dlp_timeout_seconds == 30
    assert loaded.request_timeout_seconds == 15
    assert loaded.max_workers == 4


def test_which_is_used_when_path_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings_module.shutil, "which", lambda name: "/usr/bin/yt-dlp")

    assert load_settings().yt_dlp_path == "/usr/bin/yt-dlp"


@pytest.mark.parametrize(
    "tag, expected",
    [
        ("YOUTUBE", Platform.YOUTUBE),
        ("youtube", Platform.YOUTUBE),
        (" TikTok ", Platform.TIKTOK),
        ("FACEBOOK", Platform.FACEBOOK),
        ("INSTAGRAM", Platform.OTHER),
        (None, Platform.OTHER),
    ],
)
def test_platform_parse(tag, expected: Platform) -> None:
    assert Platform.parse(tag) is expected
