from .dispatcher import SocialStatsScraper, fetch_social_stats
from .exceptions import UnsupportedPlatformError
from .models import Platform, ScrapeResult

__all__ = [
    "Platform",
    "ScrapeResult",
    "SocialStatsScraper",
    "UnsupportedPlatformError",
    "fetch_social_stats",
]
