"""
Request blocking for browser pages.

Aborts requests to ad, tracker and large media URLs while a page is in use.
page_session enables the blocker on every page it opens and tears it down
before closing unless low bandwidth mode is on. Pages are held weakly, so a
page closed without teardown drops out once it is garbage collected.
"""

from __future__ import annotations

import weakref
from typing import TYPE_CHECKING

from pagewarden.utils.config import BrowserConfig, get_settings
from pagewarden.utils.logging import get_logger

if TYPE_CHECKING:
    from playwright.async_api import Page, Route

logger = get_logger(__name__)

AD_PATTERNS = [
    "*googlesyndication.com*",
    "*doubleclick.net*",
    "*googleadservices.com*",
    "*adnxs.com*",
    "*criteo.com*",
]

TRACKER_PATTERNS = [
    "*google-analytics.com*",
    "*googletagmanager.com*",
    "*facebook.com/tr*",
    "*hotjar.com*",
    "*mixpanel.com*",
]

LARGE_MEDIA_PATTERNS = [
    "*.mp4",
    "*.webm",
    "*.avi",
    "*.mov",
]


async def _block_route(route: Route) -> None:
    await route.abort()


class ResourceBlocker:
    """Installs and removes abort routes on individual pages."""

    def __init__(self, config: BrowserConfig | None = None) -> None:
        config = config or get_settings().browser

        patterns: list[str] = []
        if config.block_ads:
            patterns.extend(AD_PATTERNS)
        if config.block_trackers:
            patterns.extend(TRACKER_PATTERNS)
        if config.block_large_media:
            patterns.extend(LARGE_MEDIA_PATTERNS)

        self._patterns = patterns
        self._blocked_pages: weakref.WeakSet[Page] = weakref.WeakSet()

    @property
    def patterns(self) -> list[str]:
        return list(self._patterns)

    async def enable_in_page(self, page: Page) -> None:
        """Route every configured pattern on the page to an abort handler."""
        if page in self._blocked_pages:
            return

        for pattern in self._patterns:
            await page.route(pattern, _block_route)

        self._blocked_pages.add(page)
        logger.debug("Blocker enabled in page", patterns=len(self._patterns))

    async def disable_in_page(self, page: Page) -> None:
        """Remove the routes installed by enable_in_page().

        No-op for pages the blocker was never enabled in.
        """
        if page not in self._blocked_pages:
            return

        # Forget the page first so a failed teardown is not retried on a dead page.
        self._blocked_pages.discard(page)
        for pattern in self._patterns:
            await page.unroute(pattern, _block_route)

        logger.debug("Blocker disabled in page")


_resource_blocker: ResourceBlocker | None = None


def get_resource_blocker() -> ResourceBlocker:
    """Get or create the global ResourceBlocker."""
    global _resource_blocker
    if _resource_blocker is None:
        _resource_blocker = ResourceBlocker()
    return _resource_blocker


def reset_resource_blocker() -> None:
    """Reset the global blocker (for testing only)."""
    global _resource_blocker
    _resource_blocker = None
