"""Common utilities for signed-urls."""

from signed_urls.common.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
