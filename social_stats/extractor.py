"""Out-of-process media metadata extraction via the ``yt-dlp`` executable."""

from __future__ import annotations

import json
import logging
import math
import subprocess
import time
from typing import List, Optional

from .models import ScrapeResult
from .settings import DEFAULT_YT_DLP_TIMEOUT_SECONDS, ScraperSettings

VIEW_COUNT_KEY = "view_count"


class MetadataExtractor:
    """Capability returning a view count for a media URL, or ``None``."""

    def extract(self, url: str) -> Optional[int]:
        raise NotImplementedError


class NullExtractor(MetadataExtractor):
    def extract(self, url: str) -> Optional[int]:
        return None


def _coerce_view_count(value: object) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float) and math.isfinite(value) and value > 0:
        return math.floor(value)
    return None


def parse_view_count(stdout: str) -> Optional[int]:
    """Read ``view_count`` from the first JSON document in ``stdout``.

    Raises :class:`ValueError` when the output is not a JSON object.
    """

    first_line = next(
        (line for line in (stdout or "").splitlines() if line.strip()), ""
    )
    data = json.loads(first_line)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return _coerce_view_count(data.get(VIEW_COUNT_KEY))


class YtDlpExtractor(MetadataExtractor):
    """Run ``yt-dlp --dump-json`` and read the view count from its output.

    Every failure (missing binary, timeout, non-zero exit, malformed output,
    absent count) resolves to ``None``; nothing is raised to the caller.
    """

    def __init__(
        self,
        binary: str = "yt-dlp",
        timeout_seconds: float = DEFAULT_YT_DLP_TIMEOUT_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        self.binary = binary
        self.timeout_seconds = timeout_seconds
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_settings(
        cls, settings: ScraperSettings, logger: Optional[logging.Logger] = None
    ) -> "YtDlpExtractor":
        return cls(
            binary=settings.yt_dlp_path,
            timeout_seconds=settings.yt_dlp_timeout_seconds,
            logger=logger,
        )

    def build_command(self, url: str) -> List[str]:
        return [self.binary, "--dump-json", url, "--no-warnings"]

    def extract(self, url: str) -> Optional[int]:
        start = time.perf_counter()
        try:
            proc = subprocess.run(
                self.build_command(url),
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout_seconds,
            )
        except subprocess.TimeoutExpired:
            self.logger.warning(
                "yt-dlp url=%s error=timeout after %.0fs", url, self.timeout_seconds
            )
            return None
        except (OSError, subprocess.SubprocessError, UnicodeDecodeError) as exc:
            self.logger.warning("yt-dlp url=%s error=%s", url, exc)
            return None
        elapsed = time.perf_counter() - start
        if proc.returncode != 0:
            stderr = (proc.stderr or "").strip()
            self.logger.warning(
                "yt-dlp url=%s exit=%s elapsed=%.2fs stderr=%s",
                url,
                proc.returncode,
                elapsed,
                stderr[:200],
            )
            return None
        try:
            views = parse_view_count(proc.stdout)
        except ValueError as exc:
            self.logger.warning("yt-dlp url=%s parse error=%s", url, exc)
            return None
        self.logger.info(
            "yt-dlp url=%s views=%s elapsed=%.2fs", url, views, elapsed
        )
        return views


def run_external_extractor(
    url: str, extractor: Optional[MetadataExtractor] = None
) -> ScrapeResult:
    """Return ``ScrapeResult(views=...)`` from the external extractor; never raises."""

    active = extractor if extractor is not None else YtDlpExtractor()
    try:
        views = active.extract(url)
    except Exception as exc:  # noqa: BLE001
        logging.getLogger(__name__).warning("yt-dlp url=%s error=%s", url, exc)
        views = None
    return ScrapeResult(views=views, source="yt-dlp" if views is not None else None)


__all__ = [
    "MetadataExtractor",
    "NullExtractor",
    "YtDlpExtractor",
    "parse_view_count",
    "run_external_extractor",
]
