from __future__ import annotations

from typing import Callable, Dict

from social_stats.context import PlatformContext
from social_stats.exceptions import UnsupportedPlatformError
from social_stats.models import Platform, ScrapeResult
from social_stats.platforms import facebook, tiktok, youtube

Resolver = Callable[[str, PlatformContext], ScrapeResult]

_RESOLVERS: Dict[Platform, Resolver] = {
    Platform.YOUTUBE: youtube.resolve,
    Platform.TIKTOK: tiktok.resolve,
    Platform.FACEBOOK: facebook.resolve,
}


def get_resolver(platform: Platform) -> Resolver:
    try:
        return _RESOLVERS[platform]
    except KeyError as exc:
        raise UnsupportedPlatformError(f"Unsupported platform: {platform}") from exc


def supported_platforms() -> set[Platform]:
    return set(_RESOLVERS.keys())
