from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .extractor import MetadataExtractor
from .models import FetchedDocument
from .settings import ScraperSettings

Fetch = Callable[[str, str, Optional[Dict[str, str]]], FetchedDocument]


@dataclass
class PlatformContext:
    """Collaborators handed to a platform resolver for one scrape."""

    fetch: Fetch
    extractor: MetadataExtractor
    settings: ScraperSettings
    logger: logging.Logger
