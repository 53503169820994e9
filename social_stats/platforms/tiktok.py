from __future__ import annotations

import re

from requests import RequestException

from ..context import PlatformContext
from ..models import PARSE_FAILURE_ERROR, ScrapeResult, http_status_error
from ..utils import Strategy, regex_int_parser, run_strategies

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/100.0.4896.127 Safari/537.36"
)
REFERER = "https://www.tiktok.com/"

TIKTOK_PLAY_COUNT_RE = re.compile(r'"playCount":\s*([0-9]+)')

STRATEGIES: tuple[Strategy, ...] = (
    ("play-count", regex_int_parser(TIKTOK_PLAY_COUNT_RE)),
)


def resolve(url: str, context: PlatformContext) -> ScrapeResult:
    headers = {"User-Agent": USER_AGENT, "Referer": REFERER}
    try:
        document = context.fetch(url, "tiktok", headers)
    except RequestException as exc:
        return ScrapeResult(error=str(exc))
    if not document.ok:
        return ScrapeResult(error=http_status_error(document.status))
    outcome = run_strategies(document.text, STRATEGIES)
    if not outcome.matched:
        context.logger.info("tiktok url=%s parse=miss", url)
        return ScrapeResult(error=PARSE_FAILURE_ERROR)
    context.logger.info(
        "tiktok url=%s parse=%s views=%s", url, outcome.strategy, outcome.value
    )
    return ScrapeResult(views=outcome.value, source=f"tiktok:{outcome.strategy}")
