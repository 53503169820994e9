from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def run_with_thread_pool(
    items: Sequence[T],
    func: Callable[[T], R],
    *,
    max_workers: int,
    on_error: Callable[[T, Exception], R],
) -> List[R]:
    """Apply ``func`` to every item on at most ``max_workers`` threads.

    Parameters
    ----------
    items:
        Sequence of work items.
    func:
        Callable invoked as ``func(item)``.
    max_workers:
        Upper bound on concurrently running calls.
    on_error:
        Fallback invoked as ``on_error(item, exc)`` when ``func`` raises; its
        return value takes the failed item's place.

    Results are returned in the order of ``items``.
    """
    if not items:
        return []
    results: List[R] = []
    ex = ThreadPoolExecutor(max_workers=max(1, max_workers))
    futures = [ex.submit(func, item) for item in items]
    try:
        for item, fut in zip(items, futures):
            try:
                res = fut.result()
            except Exception as e:
                res = on_error(item, e)
            results.append(res)
    except KeyboardInterrupt:  # pragma: no cover - user requested termination
        for f in futures:
            f.cancel()
        ex.shutdown(wait=False, cancel_futures=True)
        raise
    ex.shutdown(wait=True)
    return results


__all__ = ["run_with_thread_pool"]
