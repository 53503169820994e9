from __future__ import annotations

import re

from requests import RequestException

from ..context import PlatformContext
from ..models import PARSE_FAILURE_ERROR, ScrapeResult, http_status_error
from ..utils import Strategy, regex_int_parser, run_strategies

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

YT_INTERACTION_COUNT_RE = re.compile(
    r'<meta itemprop="interactionCount" content="([0-9]+)"'
)
YT_VIEW_COUNT_JSON_RE = re.compile(r'"viewCount":"([0-9]+)"')
YT_VIEWS_TEXT_RE = re.compile(r"([0-9]{1,3}(?:,[0-9]{3})*)\s+views")

# Structured fields first; the free-text phrase is locale dependent.
STRATEGIES: tuple[Strategy, ...] = (
    ("interaction-count", regex_int_parser(YT_INTERACTION_COUNT_RE)),
    ("view-count-json", regex_int_parser(YT_VIEW_COUNT_JSON_RE)),
    ("views-text", regex_int_parser(YT_VIEWS_TEXT_RE)),
)


def resolve(url: str, context: PlatformContext) -> ScrapeResult:
    try:
        document = context.fetch(url, "youtube", {"User-Agent": USER_AGENT})
    except RequestException as exc:
        return ScrapeResult(error=str(exc))
    if not document.ok:
        return ScrapeResult(error=http_status_error(document.status))
    outcome = run_strategies(document.text, STRATEGIES)
    if not outcome.matched:
        context.logger.info("youtube url=%s parse=miss", url)
        return ScrapeResult(error=PARSE_FAILURE_ERROR)
    context.logger.info(
        "youtube url=%s parse=%s views=%s", url, outcome.strategy, outcome.value
    )
    return ScrapeResult(views=outcome.value, source=f"youtube:{outcome.strategy}")
