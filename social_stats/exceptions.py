from __future__ import annotations


class UnsupportedPlatformError(ValueError):
    """Raised when no scraping strategy exists for the requested platform."""
