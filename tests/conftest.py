"""
Pytest fixtures and configuration for pagewarden tests.

=============================================================================
Test Classification
=============================================================================

Primary Markers:
- @pytest.mark.unit: Single class/function, no external dependencies
  - DEFAULT: Tests without marker are auto-classified as unit
- @pytest.mark.integration: Multiple components, browser mocked
- @pytest.mark.e2e: Real Chromium via Playwright
  - DEFAULT SKIPPED: Run with `RUN_E2E=true pytest -m e2e`
- @pytest.mark.slow: Tests taking >5 seconds

=============================================================================
Mock Strategy
=============================================================================

- Browser and pages: Mocked in unit/integration tests (MagicMock/AsyncMock shaped like
  playwright.async_api Browser/Page)
- Clock: Pass explicit `now` datetimes instead of patching datetime
- Randomness: Pass explicit `rng` callables
"""

import os
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set test environment before importing anything else
os.environ["PAGEWARDEN_CONFIG_DIR"] = str(Path(__file__).parent.parent / "config")
os.environ["PAGEWARDEN_GENERAL__LOG_LEVEL"] = "DEBUG"

# E2E tests drive a real Chromium and need `playwright install chromium`
_RUN_E2E = os.environ.get("RUN_E2E") == "true"


def pytest_collection_modifyitems(config, items):
    """Auto-apply the unit marker and skip E2E tests unless RUN_E2E=true."""
    skip_e2e = pytest.mark.skip(reason="E2E tests need a browser. Run with: RUN_E2E=true pytest -m e2e")

    for item in items:
        has_classification = any(
            marker.name in ("unit", "integration", "e2e") for marker in item.iter_markers()
        )
        if not has_classification:
            item.add_marker(pytest.mark.unit)

        if not _RUN_E2E and any(marker.name == "e2e" for marker in item.iter_markers()):
            item.add_marker(skip_e2e)


@pytest.fixture(autouse=True)
def reset_globals():
    """Reset cached settings and the global blocker around each test."""
    from pagewarden.crawler.blocker import reset_resource_blocker
    from pagewarden.utils.config import get_settings

    get_settings.cache_clear()
    reset_resource_blocker()
    yield
    get_settings.cache_clear()
    reset_resource_blocker()


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def mock_settings():
    """Settings with a small user agent pool and break time disabled."""
    from pagewarden.utils.config import BrowserConfig, GeneralConfig, PageConfig, Settings

    return Settings(
        general=GeneralConfig(log_level="DEBUG"),
        page=PageConfig(timeout=15000, user_agents=["agent-a", "agent-b"]),
        browser=BrowserConfig(low_bandwidth=False, min_sleep=100, max_sleep=200),
    )


@pytest.fixture
def low_bandwidth_settings(mock_settings):
    """mock_settings with low bandwidth mode on."""
    return mock_settings.model_copy(
        update={"browser": mock_settings.browser.model_copy(update={"low_bandwidth": True})}
    )


# =============================================================================
# Browser Fixtures
# =============================================================================


def make_mock_page() -> MagicMock:
    """Create a MagicMock shaped like playwright.async_api.Page.

    close() flips is_closed() to True, like a real page.
    """
    page = MagicMock()
    page.is_closed.return_value = False
    page.set_default_navigation_timeout = MagicMock()
    page.set_extra_http_headers = AsyncMock()
    page.route = AsyncMock()
    page.unroute = AsyncMock()

    response = MagicMock()
    response.status = 200
    page.goto = AsyncMock(return_value=response)

    async def close() -> None:
        page.is_closed.return_value = True

    page.close = AsyncMock(side_effect=close)
    return page


@pytest.fixture
def mock_page() -> MagicMock:
    """A single mock page."""
    return make_mock_page()


@pytest.fixture
def mock_browser(mock_page) -> MagicMock:
    """Mock Browser whose new_page() returns mock_page."""
    browser = MagicMock()
    browser.new_page = AsyncMock(return_value=mock_page)
    return browser


@pytest.fixture
def mock_blocker() -> MagicMock:
    """Blocker collaborator with async enable_in_page() / disable_in_page()."""
    blocker = MagicMock()
    blocker.enable_in_page = AsyncMock()
    blocker.disable_in_page = AsyncMock()
    return blocker


@pytest.fixture
def page_factory():
    """Factory for independent mock pages (concurrency tests)."""
    return make_mock_page
