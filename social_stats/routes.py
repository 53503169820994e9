"""Flask routes for inspecting scrapes and refreshing stored view counts."""

from __future__ import annotations

from typing import Optional

from flask import Blueprint, current_app, jsonify, request
from requests import RequestException

from .dispatcher import SocialStatsScraper
from .refresh import PostStore, refresh_store

DEBUG_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
DEBUG_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"
SNIPPET_LENGTH = 500


def create_blueprint(scraper: SocialStatsScraper, store: Optional[PostStore]) -> Blueprint:
    blueprint = Blueprint("social_stats", __name__, url_prefix="/api/social-stats")

    @blueprint.get("/debug")
    def debug_scrape():
        url = (request.args.get("url") or "").strip()
        platform = request.args.get("platform") or "FACEBOOK"
        if not url:
            return jsonify({"error": "Missing url parameter"}), 400

        stats = scraper.fetch_social_stats(url, platform)
        try:
            document = scraper.fetch_document(
                url,
                "debug",
                {"User-Agent": DEBUG_USER_AGENT, "Accept": DEBUG_ACCEPT},
            )
        except RequestException as exc:
            current_app.logger.warning("Debug fetch failed for %s: %s", url, exc)
            return jsonify({"error": str(exc)}), 500

        return jsonify(
            {
                "stats": stats.to_dict(),
                "debug": {
                    "status": document.status,
                    "headers": document.headers,
                    "htmlLength": len(document.text),
                    "htmlSnippet": document.text[:SNIPPET_LENGTH],
                },
            }
        )

    @blueprint.post("/refresh")
    def refresh_stats():
        if store is None:
            return jsonify({"error": "No post store configured"}), 503
        try:
            summary = refresh_store(store, scraper)
        except Exception:  # noqa: BLE001
            current_app.logger.exception("Error updating stats")
            return jsonify({"error": "Internal server error"}), 500
        payload = {"success": True}
        payload.update(summary.to_dict())
        return jsonify(payload)

    return blueprint


__all__ = ["create_blueprint"]
