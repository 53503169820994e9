from __future__ import annotations

import logging
import threading
import time
from typing import Dict, Optional

import requests
from requests import Session
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .context import PlatformContext
from .exceptions import UnsupportedPlatformError
from .extractor import MetadataExtractor, NullExtractor, YtDlpExtractor
from .models import (
    UNSUPPORTED_PLATFORM_ERROR,
    FetchedDocument,
    Platform,
    ScrapeRequest,
    ScrapeResult,
)
from .platforms import get_resolver, supported_platforms
from .settings import ScraperSettings, load_settings

SUPPORTED_PLATFORMS = supported_platforms()


def _build_session(settings: ScraperSettings) -> Session:
    session = requests.Session()
    retry = Retry(
        total=settings.request_retries,
        backoff_factor=0.5,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET",),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update(
        {
            "Accept": "text/html,application/json;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }
    )
    return session


class SocialStatsScraper:
    """Fetch public view counts for posted videos, one URL at a time."""

    def __init__(
        self,
        settings: Optional[ScraperSettings] = None,
        logger: Optional[logging.Logger] = None,
        extractor: Optional[MetadataExtractor] = None,
        session: Optional[Session] = None,
    ):
        self.settings = settings or load_settings()
        self.logger = logger or logging.getLogger(__name__)
        self.session = session or _build_session(self.settings)
        if extractor is not None:
            self.extractor = extractor
        elif self.settings.yt_dlp_enabled:
            self.extractor = YtDlpExtractor.from_settings(self.settings, self.logger)
        else:
            self.extractor = NullExtractor()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def fetch_social_stats(self, url: str, platform: str) -> ScrapeResult:
        return self.scrape(ScrapeRequest(url=url, platform=Platform.parse(platform)))

    def scrape(self, request: ScrapeRequest) -> ScrapeResult:
        """Run the platform strategy chain for ``request``; never raises."""

        if request.platform not in SUPPORTED_PLATFORMS:
            return ScrapeResult(error=UNSUPPORTED_PLATFORM_ERROR)
        try:
            resolver = get_resolver(request.platform)
            return resolver(request.url, self._build_context())
        except UnsupportedPlatformError:
            return ScrapeResult(error=UNSUPPORTED_PLATFORM_ERROR)
        except Exception as exc:  # noqa: BLE001
            self.logger.exception(
                "Error fetching stats for %s (%s)", request.url, request.platform.value
            )
            return ScrapeResult(error=str(exc) or exc.__class__.__name__)

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------
    def fetch_document(
        self, url: str, platform: str, headers: Optional[Dict[str, str]] = None
    ) -> FetchedDocument:
        start = time.perf_counter()
        try:
            response = self.session.get(
                url, headers=headers, timeout=self.settings.request_timeout_seconds
            )
        except requests.RequestException as exc:
            elapsed = time.perf_counter() - start
            self.logger.info(
                "%s url=%s attempt=direct error=%s elapsed=%.2fs",
                platform,
                url,
                exc,
                elapsed,
            )
            raise
        elapsed = time.perf_counter() - start
        self.logger.info(
            "%s url=%s attempt=direct status=%s elapsed=%.2fs",
            platform,
            url,
            response.status_code,
            elapsed,
        )
        return FetchedDocument(
            url=url,
            status=response.status_code,
            text=response.text,
            headers=dict(response.headers),
        )

    def _build_context(self) -> PlatformContext:
        return PlatformContext(
            fetch=self.fetch_document,
            extractor=self.extractor,
            settings=self.settings,
            logger=self.logger,
        )


_default_scraper: Optional[SocialStatsScraper] = None
_default_lock = threading.Lock()


def get_default_scraper() -> SocialStatsScraper:
    global _default_scraper
    with _default_lock:
        if _default_scraper is None:
            _default_scraper = SocialStatsScraper()
        return _default_scraper


def fetch_social_stats(url: str, platform: str) -> ScrapeResult:
    """Scrape the view count of ``url`` on ``platform`` with the default scraper."""

    return get_default_scraper().fetch_social_stats(url, platform)


__all__ = [
    "SUPPORTED_PLATFORMS",
    "SocialStatsScraper",
    "fetch_social_stats",
    "get_default_scraper",
]
