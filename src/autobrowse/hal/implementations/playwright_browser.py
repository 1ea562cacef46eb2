"""Playwright browser implementation."""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from playwright.sync_api import Browser, BrowserContext, Page, Playwright, sync_playwright
from playwright.sync_api import Error as PlaywrightError

from ...exceptions import ActionError
from ..interfaces.browser_controller import DEFAULT_ELEMENT_TIMEOUT, IBrowserController

logger = logging.getLogger(__name__)

T = TypeVar("T")

LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-blink-features=AutomationControlled",
]
VIEWPORT = {"width": 1920, "height": 1080}


class PlaywrightBrowser(IBrowserController):
    """Drives a Chromium browser through Playwright's sync API.

    Every element operation first waits, within its own timeout, for the
    selector to be attached to the DOM, then performs the interaction.
    Playwright errors are raised as :class:`ActionError` with the selector in
    the error context.

    Example:
        >>> with PlaywrightBrowser(headless=True) as browser:
        ...     browser.navigate("https://example.com")
        ...     title = browser.get_text("h1")
    """

    def __init__(
        self,
        headless: bool = True,
        executable_path: str | None = None,
        user_agent: str | None = None,
        navigation_timeout: float = 30.0,
    ) -> None:
        self.headless = headless
        self.executable_path = executable_path
        self.user_agent = user_agent
        self.navigation_timeout = navigation_timeout

        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None

    @classmethod
    def from_settings(cls, settings: Any) -> "PlaywrightBrowser":
        """Build from the ``browser`` group of AutobrowseSettings."""
        browser_settings = settings.browser
        return cls(
            headless=browser_settings.headless,
            executable_path=browser_settings.executable_path,
            user_agent=browser_settings.user_agent,
            navigation_timeout=browser_settings.timeout,
        )

    def launch(self) -> "PlaywrightBrowser":
        """Start Playwright, launch Chromium and open a page.

        Raises:
            ActionError: If the browser cannot be launched
        """
        if self._page is not None:
            return self

        logger.info(
            "Launching Chromium (headless=%s, executable=%s)",
            self.headless,
            self.executable_path or "bundled",
        )
        try:
            self._playwright = sync_playwright().start()
            launch_options: dict[str, Any] = {"headless": self.headless, "args": LAUNCH_ARGS}
            if self.executable_path:
                launch_options["executable_path"] = self.executable_path
            self._browser = self._playwright.chromium.launch(**launch_options)

            context_options: dict[str, Any] = {"viewport": VIEWPORT}
            if self.user_agent:
                context_options["user_agent"] = self.user_agent
            self._context = self._browser.new_context(**context_options)
            self._page = self._context.new_page()
            self._page.set_default_navigation_timeout(self.navigation_timeout * 1000)
        except PlaywrightError as e:
            self.close()
            raise ActionError(f"Failed to launch browser: {e}", cause=e) from e

        return self

    def close(self) -> None:
        """Close the page, browser and Playwright driver."""
        for closer in (self._context, self._browser):
            if closer is None:
                continue
            try:
                closer.close()
            except PlaywrightError as e:
                logger.warning("Error while closing browser: %s", e)
        if self._playwright is not None:
            self._playwright.stop()

        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None
        logger.debug("Browser closed")

    def __enter__(self) -> "PlaywrightBrowser":
        return self.launch()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def page(self) -> Page:
        if self._page is None:
            raise ActionError("Browser is not launched")
        return self._page

    def _run(self, operation: str, selector: str, call: Callable[[], T]) -> T:
        try:
            return call()
        except PlaywrightError as e:
            raise ActionError(
                f"{operation} failed for '{selector}': {e}",
                cause=e,
                context={"operation": operation, "selector": selector},
            ) from e

    def _attached(self, selector: str, timeout: float) -> None:
        self.page.wait_for_selector(selector, state="attached", timeout=timeout * 1000)

    def _element_operation(
        self, operation: str, selector: str, timeout: float, call: Callable[[], T]
    ) -> T:
        def run() -> T:
            self._attached(selector, timeout)
            return call()

        return self._run(operation, selector, run)

    # Page operations

    def navigate(self, url: str) -> None:
        logger.info("Navigating to %s", url)
        self._run("navigate", url, lambda: self.page.goto(url, wait_until="networkidle"))

    def screenshot(self, path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._run("screenshot", str(path), lambda: self.page.screenshot(path=str(path), full_page=True))
        logger.info("Screenshot saved to %s", path)
        return path

    # Waits

    def wait_for_appear(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        self._run(
            "wait_appear",
            selector,
            lambda: self.page.wait_for_selector(selector, state="visible", timeout=timeout * 1000),
        )

    def wait_for_disappear(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        self._run(
            "wait_disappear",
            selector,
            lambda: self.page.wait_for_selector(selector, state="hidden", timeout=timeout * 1000),
        )

    # Element interaction

    def click(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        self._element_operation(
            "click", selector, timeout, lambda: self.page.click(selector, timeout=timeout * 1000)
        )

    def right_click(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        self._element_operation(
            "right_click",
            selector,
            timeout,
            lambda: self.page.click(selector, button="right", timeout=timeout * 1000),
        )

    def hover(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        self._element_operation(
            "hover", selector, timeout, lambda: self.page.hover(selector, timeout=timeout * 1000)
        )

    def fill(self, selector: str, value: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        self._element_operation(
            "fill",
            selector,
            timeout,
            lambda: self.page.fill(selector, value, timeout=timeout * 1000),
        )

    def select_option(
        self, selector: str, value: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT
    ) -> None:
        self._element_operation(
            "select",
            selector,
            timeout,
            lambda: self.page.select_option(selector, label=value, timeout=timeout * 1000),
        )

    def scroll_into_view(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        self._element_operation(
            "scroll",
            selector,
            timeout,
            lambda: self.page.eval_on_selector(
                selector,
                "el => el.scrollIntoView({behavior: 'smooth', block: 'center'})",
            ),
        )

    def drag_and_drop(
        self, source: str, target: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT
    ) -> None:
        def drag() -> None:
            self._attached(target, timeout)
            self.page.drag_and_drop(source, target, timeout=timeout * 1000)

        self._element_operation("drag_drop", source, timeout, drag)

    # Extraction

    def get_text(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> str:
        text = self._element_operation(
            "get_text",
            selector,
            timeout,
            lambda: self.page.text_content(selector, timeout=timeout * 1000),
        )
        return text or ""

    def get_attribute(
        self, selector: str, name: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT
    ) -> str:
        value = self._element_operation(
            "get_attribute",
            selector,
            timeout,
            lambda: self.page.get_attribute(selector, name, timeout=timeout * 1000),
        )
        return value or ""
