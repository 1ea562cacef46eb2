"""MockBrowser - Simulates browser operations.

Records every operation instead of driving a browser, so that task logic can
be exercised without Playwright, a display or network access. Element texts
and attributes are served from dictionaries, and selectors can be marked as
failing to simulate missing elements.
"""

import logging
from pathlib import Path
from typing import Any

from ..exceptions import ActionError
from ..hal.interfaces.browser_controller import DEFAULT_ELEMENT_TIMEOUT, IBrowserController

logger = logging.getLogger(__name__)


class MockBrowser(IBrowserController):
    """Mock browser implementation.

    Example:
        browser = MockBrowser(texts={"#count": "3"}, failing_selectors={"#gone"})
        browser.click("#next")
        browser.get_text("#count")  # "3"
        browser.click("#gone")  # raises ActionError
        browser.operations  # [{"operation": "click", "selector": "#next", ...}, ...]

    Attributes:
        operations: Recorded operations, oldest first. Failed operations are
            recorded too.
        current_url: Last navigated URL
        texts: Selector to text content
        attributes: Selector to attribute mapping
        failing_selectors: Selectors every operation fails on
    """

    def __init__(
        self,
        texts: dict[str, str] | None = None,
        attributes: dict[str, dict[str, str]] | None = None,
        failing_selectors: set[str] | None = None,
        fail_navigation: bool = False,
    ) -> None:
        self.texts: dict[str, str] = dict(texts or {})
        self.attributes: dict[str, dict[str, str]] = dict(attributes or {})
        self.failing_selectors: set[str] = set(failing_selectors or ())
        self.fail_navigation = fail_navigation
        self.current_url: str | None = None
        self.closed = False

        self.operations: list[dict[str, Any]] = []

        logger.debug("MockBrowser initialized")

    def _record(self, operation: str, selector: str | None = None, **details: Any) -> None:
        entry: dict[str, Any] = {"operation": operation}
        if selector is not None:
            entry["selector"] = selector
        entry.update(details)
        self.operations.append(entry)
        logger.debug("MockBrowser.%s: %s", operation, entry)

        if selector is not None and selector in self.failing_selectors:
            raise ActionError(
                f"{operation} failed for '{selector}': element not found",
                context={"operation": operation, "selector": selector},
            )

    # Query helpers

    def operation_names(self) -> list[str]:
        return [op["operation"] for op in self.operations]

    def find_operations(self, operation: str) -> list[dict[str, Any]]:
        return [op for op in self.operations if op["operation"] == operation]

    def reset(self) -> None:
        self.operations.clear()
        self.current_url = None

    # Lifecycle, mirroring PlaywrightBrowser

    def launch(self) -> "MockBrowser":
        self.closed = False
        return self

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "MockBrowser":
        return self.launch()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # Page operations

    def navigate(self, url: str) -> None:
        self.operations.append({"operation": "navigate", "url": url})
        if self.fail_navigation:
            raise ActionError(f"navigate failed for '{url}': net::ERR_NAME_NOT_RESOLVED")
        self.current_url = url

    def screenshot(self, path: Path) -> Path:
        path = Path(path)
        self.operations.append({"operation": "screenshot", "path": str(path)})
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"")
        return path

    # Waits

    def wait_for_appear(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        self._record("wait_appear", selector, timeout=timeout)

    def wait_for_disappear(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        self._record("wait_disappear", selector, timeout=timeout)

    # Element interaction

    def click(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        self._record("click", selector, timeout=timeout)

    def right_click(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        self._record("right_click", selector, timeout=timeout)

    def hover(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        self._record("hover", selector, timeout=timeout)

    def fill(self, selector: str, value: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        self._record("fill", selector, value=value, timeout=timeout)

    def select_option(
        self, selector: str, value: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT
    ) -> None:
        self._record("select", selector, value=value, timeout=timeout)

    def scroll_into_view(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        self._record("scroll", selector, timeout=timeout)

    def drag_and_drop(
        self, source: str, target: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT
    ) -> None:
        self._record("drag_drop", source, target=target, timeout=timeout)
        if target in self.failing_selectors:
            raise ActionError(f"drag_drop failed for '{target}': element not found")

    # Extraction

    def get_text(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> str:
        self._record("get_text", selector, timeout=timeout)
        return self.texts.get(selector, "")

    def get_attribute(
        self, selector: str, name: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT
    ) -> str:
        self._record("get_attribute", selector, attribute=name, timeout=timeout)
        return self.attributes.get(selector, {}).get(name, "")
