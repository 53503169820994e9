from __future__ import annotations

from typing import Dict

from requests import RequestException

from ..context import PlatformContext
from ..extractor import run_external_extractor
from ..models import FACEBOOK_COMPOSITE_ERROR, ScrapeResult, http_status_error
from ..utils import Strategy, parse_magnitude_views, run_strategies

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/100.0.4896.127 Safari/537.36"
)
MOBILE_HOST = "m.facebook.com"
DESKTOP_HOST = "www.facebook.com"

# Matches og:title style text such as "2.8M views".
STRATEGIES: tuple[Strategy, ...] = (("views-text", parse_magnitude_views),)


def to_desktop_url(url: str) -> str:
    """The mobile site blocks scraping even with a session cookie."""

    return url.replace(MOBILE_HOST, DESKTOP_HOST)


def build_headers(cookie: str | None) -> Dict[str, str]:
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
        "Upgrade-Insecure-Requests": "1",
    }
    if cookie:
        headers["Cookie"] = cookie
    return headers


def resolve(url: str, context: PlatformContext) -> ScrapeResult:
    extracted = run_external_extractor(url, context.extractor)
    if extracted.views is not None:
        context.logger.info(
            "facebook url=%s parse=yt-dlp views=%s", url, extracted.views
        )
        return ScrapeResult(views=extracted.views, source="facebook:yt-dlp")

    desktop_url = to_desktop_url(url)
    headers = build_headers(context.settings.facebook_cookie)
    try:
        document = context.fetch(desktop_url, "facebook", headers)
    except RequestException as exc:
        return ScrapeResult(error=str(exc))
    if not document.ok:
        return ScrapeResult(error=http_status_error(document.status))
    outcome = run_strategies(document.text, STRATEGIES)
    if not outcome.matched:
        context.logger.info("facebook url=%s parse=miss", desktop_url)
        return ScrapeResult(error=FACEBOOK_COMPOSITE_ERROR)
    context.logger.info(
        "facebook url=%s parse=%s views=%s",
        desktop_url,
        outcome.strategy,
        outcome.value,
    )
    return ScrapeResult(views=outcome.value, source=f"facebook:{outcome.strategy}")
