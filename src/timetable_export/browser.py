"""Render saved portal pages in headless Chromium.

The calendar month view is built client-side by FullCalendar, so a page saved
as "HTML only" may not contain the event labels until its scripts run.
render_saved_page() opens the file from disk, lets the scripts settle and
returns the resulting DOM as HTML. Only file:// requests are allowed through.
"""

from pathlib import Path

from playwright.async_api import Route
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from src.timetable_export.errors import PermanentError, TransientError
from src.timetable_export.logging import get_logger

log = get_logger(__name__)

BLOCKED_RESOURCE_TYPES: frozenset[str] = frozenset({"image", "font", "media"})


async def _local_only(route: Route) -> None:
    request = route.request
    if not request.url.startswith("file://"):
        log.debug("blocked_remote_request", url=request.url)
        await route.abort("blockedbyclient")
        return
    if request.resource_type in BLOCKED_RESOURCE_TYPES:
        await route.abort()
    else:
        await route.continue_()


@retry(
    stop=stop_after_attempt(2),
    wait=wait_fixed(2),
    retry=retry_if_exception_type(TransientError),
    reraise=True,
)
async def _render(url: str, timeout_ms: int) -> str:
    async with async_playwright() as pw:
        browser = await pw.chromium.launch(headless=True)
        try:
            page = await browser.new_page()
            await page.route("**/*", _local_only)
            page.set_default_timeout(timeout_ms)
            await page.goto(url, wait_until="networkidle", timeout=timeout_ms)
            return await page.content()
        except PlaywrightTimeoutError as e:
            log.warning("render_timeout", url=url, error=str(e))
            raise TransientError(f"Rendering {url} timed out") from e
        finally:
            await browser.close()


async def render_saved_page(path: str | Path, timeout_ms: int = 30000) -> str:
    """Return the scripted DOM of a saved page as HTML.

    Args:
        path: Saved .html file.
        timeout_ms: Navigation timeout per attempt.

    Raises:
        PermanentError: If the file doesn't exist.
        TransientError: If rendering timed out on every attempt.
    """
    file_path = Path(path).expanduser().resolve()
    if not file_path.is_file():
        raise PermanentError(f"Saved page not found: {file_path}")

    url = file_path.as_uri()
    log.info("render_started", url=url)
    html = await _render(url, timeout_ms)
    log.info("render_finished", url=url, chars=len(html))
    return html
