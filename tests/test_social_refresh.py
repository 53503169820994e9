from __future__ import annotations

import threading
import time
from typing import Dict, List, Tuple
from unittest.mock import MagicMock

from social_stats.models import ScrapeResult
from social_stats.refresh import (
    InMemoryPostStore,
    RefreshSummary,
    SocialPost,
    refresh_social_posts,
    refresh_store,
)
from social_stats.settings import ScraperSettings
from social_stats.thread_pool import run_with_thread_pool


def _fake_scraper(results: Dict[str, ScrapeResult]) -> MagicMock:
    scraper = MagicMock()
    scraper.settings = ScraperSettings(max_workers=2)
    scraper.fetch_social_stats.side_effect = lambda url, platform: results[url]
    return scraper


def test_refresh_counts_updated_failed_and_skipped() -> None:
    posts = [
        SocialPost(id="1", platform="YOUTUBE", url="https://yt/1"),
        SocialPost(id="2", platform="TIKTOK", url="https://tt/2"),
        SocialPost(id="3", platform="FACEBOOK", url=None),
        SocialPost(id="4", platform="INSTAGRAM", url="https://ig/4"),
        SocialPost(id="5", platform="FACEBOOK", url="https://fb/5"),
    ]
    scraper = _fake_scraper(
        {
            "https://yt/1": ScrapeResult(views=100),
            "https://tt/2": ScrapeResult(error="HTTP 403"),
            "https://fb/5": ScrapeResult(views=None, error=None),
        }
    )
    updates: List[Tuple[str, int]] = []

    summary = refresh_social_posts(
        posts, scraper, lambda post, views: updates.append((post.id, views))
    )

    assert summary == RefreshSummary(updated=1, failed=2, skipped=2)
    assert summary.message == "Scraping complete. Updated: 1, Failed: 2"
    assert updates == [("1", 100)]
    scraped_urls = {call.args[0] for call in scraper.fetch_social_stats.call_args_list}
    assert scraped_urls == {"https://yt/1", "https://tt/2", "https://fb/5"}


def test_refresh_survives_update_errors() -> None:
    posts = [
        SocialPost(id="1", platform="YOUTUBE", url="https://yt/1"),
        SocialPost(id="2", platform="YOUTUBE", url="https://yt/2"),
    ]
    scraper = _fake_scraper(
        {"https://yt/1": ScrapeResult(views=1), "https://yt/2": ScrapeResult(views=2)}
    )

    def on_update(post: SocialPost, views: int) -> None:
        if post.id == "1":
            raise RuntimeError("database is locked")

    summary = refresh_social_posts(posts, scraper, on_update)

    assert summary.updated == 1
    assert summary.failed == 1


def test_refresh_store_persists_views() -> None:
    store = InMemoryPostStore(
        [
            SocialPost(id="a", platform="TIKTOK", url="https://tt/a", views=0),
            SocialPost(id="b", platform="TIKTOK", url="https://tt/b", views=9),
        ]
    )
    scraper = _fake_scraper(
        {
            "https://tt/a": ScrapeResult(views=4_200),
            "https://tt/b": ScrapeResult(error="Could not parse views"),
        }
    )

    summary = refresh_store(store, scraper)

    assert summary.updated == 1
    assert summary.failed == 1
    assert store.get("a").views == 4_200
    assert store.get("b").views == 9


def test_thread_pool_respects_worker_cap_and_order() -> None:
    active = 0
    peak = 0
    lock = threading.Lock()

    def work(item: int) -> int:
        nonlocal active, peak
        with lock:
            active += 1
            peak = max(peak, active)
        time.sleep(0.02)
        with lock:
            active -= 1
        if item == 3:
            raise ValueError("bad item")
        return item * 10

    results = run_with_thread_pool(
        list(range(6)), work, max_workers=2, on_error=lambda item, exc: -1
    )

    assert results == [0, 10, 20, -1, 40, 50]
    assert peak <= 2


def test_thread_pool_empty_input() -> None:
    assert run_with_thread_pool([], lambda item: item, max_workers=3, on_error=lambda i, e: None) == []
