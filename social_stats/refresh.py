"""Batch refresh of stored social post view counts."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional

from .dispatcher import SUPPORTED_PLATFORMS, SocialStatsScraper
from .models import Platform
from .thread_pool import run_with_thread_pool

logger = logging.getLogger(__name__)


@dataclass
class SocialPost:
    id: str
    platform: str
    url: Optional[str]
    views: int = 0


class RefreshStatus(str, Enum):
    UPDATED = "updated"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class RefreshSummary:
    updated: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def message(self) -> str:
        return f"Scraping complete. Updated: {self.updated}, Failed: {self.failed}"

    def to_dict(self) -> Dict[str, object]:
        return {
            "updated": self.updated,
            "failed": self.failed,
            "skipped": self.skipped,
            "message": self.message,
        }


class PostStore:
    """Storage collaborator holding the posts whose views get refreshed."""

    def list_posts(self) -> List[SocialPost]:
        raise NotImplementedError

    def update_views(self, post_id: str, views: int) -> None:
        raise NotImplementedError


class InMemoryPostStore(PostStore):
    def __init__(self, posts: Iterable[SocialPost] = ()):
        self._posts: Dict[str, SocialPost] = {post.id: post for post in posts}
        self._lock = threading.Lock()

    def list_posts(self) -> List[SocialPost]:
        with self._lock:
            return [replace(post) for post in self._posts.values()]

    def update_views(self, post_id: str, views: int) -> None:
        with self._lock:
            post = self._posts.get(post_id)
            if post is None:
                raise KeyError(post_id)
            post.views = views

    def get(self, post_id: str) -> Optional[SocialPost]:
        with self._lock:
            post = self._posts.get(post_id)
            return replace(post) if post else None


def _is_scrapable(post: SocialPost) -> bool:
    if not post.url:
        return False
    return Platform.parse(post.platform) in SUPPORTED_PLATFORMS


def refresh_social_posts(
    posts: Iterable[SocialPost],
    scraper: SocialStatsScraper,
    on_update: Callable[[SocialPost, int], None],
    *,
    max_workers: Optional[int] = None,
) -> RefreshSummary:
    """Scrape every supported post and hand fresh counts to ``on_update``.

    Posts without a URL or on an unsupported platform are skipped. A failed
    scrape, or an ``on_update`` error, counts as failed and the rest of the
    batch keeps going.
    """

    post_list = list(posts)
    workers = max_workers or scraper.settings.max_workers

    def _refresh(post: SocialPost) -> RefreshStatus:
        if not _is_scrapable(post):
            return RefreshStatus.SKIPPED
        result = scraper.fetch_social_stats(post.url or "", post.platform)
        if result.views is None:
            logger.warning(
                "Failed to scrape %s URL: %s - %s", post.platform, post.url, result.error
            )
            return RefreshStatus.FAILED
        on_update(post, result.views)
        return RefreshStatus.UPDATED

    def _on_error(post: SocialPost, exc: Exception) -> RefreshStatus:
        logger.warning("Failed to refresh %s URL: %s - %s", post.platform, post.url, exc)
        return RefreshStatus.FAILED

    statuses = run_with_thread_pool(
        post_list, _refresh, max_workers=workers, on_error=_on_error
    )
    summary = RefreshSummary()
    for status in statuses:
        if status is RefreshStatus.UPDATED:
            summary.updated += 1
        elif status is RefreshStatus.FAILED:
            summary.failed += 1
        else:
            summary.skipped += 1
    logger.info(summary.message)
    return summary


def refresh_store(
    store: PostStore,
    scraper: SocialStatsScraper,
    *,
    max_workers: Optional[int] = None,
) -> RefreshSummary:
    """Refresh every post in ``store`` and persist successful counts."""

    return refresh_social_posts(
        store.list_posts(),
        scraper,
        lambda post, views: store.update_views(post.id, views),
        max_workers=max_workers,
    )


__all__ = [
    "InMemoryPostStore",
    "PostStore",
    "RefreshStatus",
    "RefreshSummary",
    "SocialPost",
    "refresh_social_posts",
    "refresh_store",
]
