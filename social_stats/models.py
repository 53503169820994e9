from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

UNSUPPORTED_PLATFORM_ERROR = "Platform not supported for scraping"
PARSE_FAILURE_ERROR = "Could not parse views"
FACEBOOK_COMPOSITE_ERROR = "Could not parse views (FB Desktop + yt-dlp failed)"


def http_status_error(status: int) -> str:
    return f"HTTP {status}"


class Platform(str, Enum):
    YOUTUBE = "YOUTUBE"
    TIKTOK = "TIKTOK"
    FACEBOOK = "FACEBOOK"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, tag: object) -> "Platform":
        """Map a free-form platform tag onto the closed set, defaulting to OTHER."""

        if isinstance(tag, Platform):
            return tag
        if not isinstance(tag, str):
            return cls.OTHER
        try:
            return cls(tag.strip().upper())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class ScrapeRequest:
    url: str
    platform: Platform


@dataclass
class ScrapeResult:
    views: Optional[int] = None
    error: Optional[str] = None
    source: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.views is not None

    def to_dict(self) -> Dict[str, object]:
        return {
            "views": self.views,
            "error": self.error,
            "source": self.source,
        }


@dataclass
class FetchedDocument:
    url: str
    status: int
    text: str
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass
class ExtractionOutcome:
    matched: bool
    value: Optional[int] = None
    strategy: Optional[str] = None

    @classmethod
    def miss(cls) -> "ExtractionOutcome":
        return cls(matched=False)
