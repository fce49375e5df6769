"""
E2E tests for page sessions against a real headless Chromium.

Run with: RUN_E2E=true pytest -m e2e
Requires: playwright install chromium

## Test Perspectives Table
| Case ID | Input / Precondition | Perspective (Equivalence / Boundary) | Expected Result | Notes |
|---------|----------------------|---------------------------------------|-----------------|-------|
| TC-E2E-01 | data: URL navigation | Equivalence – real page | Content readable, page closed | - |
| TC-E2E-02 | Work raises | Abnormal – work error | Page closed, context has no pages | - |
"""

import pytest
import pytest_asyncio
from playwright.async_api import async_playwright

from pagewarden.crawler.blocker import ResourceBlocker
from pagewarden.crawler.page_session import using_page, using_response

pytestmark = pytest.mark.e2e

HTML_URL = "data:text/html,<title>pagewarden</title><p>ready</p>"


@pytest_asyncio.fixture
async def browser_context():
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True)
        context = await browser.new_context()
        try:
            yield context
        finally:
            await context.close()
            await browser.close()


@pytest.mark.asyncio
async def test_navigate_and_release(browser_context, mock_settings) -> None:
    """TC-E2E-01: a real page is navigated, used and closed."""
    blocker = ResourceBlocker(mock_settings.browser)

    async def work(response, page, context):
        assert page.is_closed() is False
        return await page.title(), page

    title, page = await using_response(
        browser_context, HTML_URL, work, settings=mock_settings, blocker=blocker
    )

    assert title == "pagewarden"
    assert page.is_closed()
    assert browser_context.pages == []


@pytest.mark.asyncio
async def test_work_error_closes_real_page(browser_context, mock_settings) -> None:
    """TC-E2E-02: a failing work callback still closes the real page."""

    async def work(page, context):
        raise LookupError("element not found")

    with pytest.raises(LookupError):
        await using_page(browser_context, work, settings=mock_settings)

    assert browser_context.pages == []
