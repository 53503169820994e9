"""Test configuration helpers for import path setup."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]

root_path = str(ROOT)

if root_path not in sys.path:
    sys.path.insert(0, root_path)

from social_stats.context import PlatformContext  # noqa: E402
from social_stats.extractor import MetadataExtractor  # noqa: E402
from social_stats.models import FetchedDocument  # noqa: E402
from social_stats.settings import ScraperSettings  # noqa: E402


class FakeExtractor(MetadataExtractor):
    def __init__(self, views: Optional[int] = None):
        self.views = views
        self.calls: List[str] = []

    def extract(self, url: str) -> Optional[int]:
        self.calls.append(url)
        return self.views


class FakeFetch:
    """Deterministic transport returning one canned document per call."""

    def __init__(self, text: str = "", status: int = 200):
        self.text = text
        self.status = status
        self.calls: List[Tuple[str, str, Optional[Dict[str, str]]]] = []

    def __call__(
        self, url: str, platform: str, headers: Optional[Dict[str, str]] = None
    ) -> FetchedDocument:
        self.calls.append((url, platform, headers))
        return FetchedDocument(url=url, status=self.status, text=self.text)


def build_context(
    fetch: FakeFetch,
    extractor: Optional[MetadataExtractor] = None,
    settings: Optional[ScraperSettings] = None,
) -> PlatformContext:
    logger = logging.getLogger("test-social-stats")
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return PlatformContext(
        fetch=fetch,
        extractor=extractor or FakeExtractor(),
        settings=settings or ScraperSettings(),
        logger=logger,
    )


@pytest.fixture()
def settings() -> ScraperSettings:
    return ScraperSettings(yt_dlp_path="/opt/bin/yt-dlp", yt_dlp_timeout_seconds=5)
