from __future__ import annotations

import logging
from typing import Optional

from flask import Flask

from .dispatcher import SocialStatsScraper
from .refresh import PostStore
from .routes import create_blueprint


def create_app(
    scraper: Optional[SocialStatsScraper] = None,
    store: Optional[PostStore] = None,
) -> Flask:
    app = Flask(__name__)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s"))
    app.logger.setLevel(logging.INFO)
    if not app.logger.handlers:
        app.logger.addHandler(handler)

    scraper = scraper or SocialStatsScraper(logger=app.logger)
    app.register_blueprint(create_blueprint(scraper, store))
    app.logger.info(
        "yt-dlp %s (timeout %.0fs)",
        scraper.settings.yt_dlp_path if scraper.settings.yt_dlp_enabled else "disabled",
        scraper.settings.yt_dlp_timeout_seconds,
    )
    return app


if __name__ == "__main__":  # pragma: no cover - manual run
    create_app().run(host="0.0.0.0", port=5001)
