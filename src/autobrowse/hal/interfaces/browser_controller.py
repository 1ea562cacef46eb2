"""Browser controller interface definition."""

from abc import ABC, abstractmethod
from pathlib import Path

DEFAULT_ELEMENT_TIMEOUT = 10.0


class IBrowserController(ABC):
    """Interface for the browser operations tasks are executed against.

    All element operations take a CSS selector and a timeout in seconds
    within which the element must be found. Any failure, including a
    timeout, raises :class:`~autobrowse.exceptions.ActionError`.
    """

    # Page operations

    @abstractmethod
    def navigate(self, url: str) -> None:
        """Open a URL in the current page and wait for it to settle."""

    @abstractmethod
    def screenshot(self, path: Path) -> Path:
        """Capture the full page to a PNG file.

        Returns:
            The written path
        """

    # Waits

    @abstractmethod
    def wait_for_appear(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        """Wait until an element matching the selector is visible."""

    @abstractmethod
    def wait_for_disappear(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        """Wait until no element matching the selector is visible."""

    # Element interaction

    @abstractmethod
    def click(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        """Left-click an element."""

    @abstractmethod
    def right_click(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        """Right-click an element."""

    @abstractmethod
    def hover(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        """Move the pointer over an element."""

    @abstractmethod
    def fill(self, selector: str, value: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        """Replace the content of an input with a value."""

    @abstractmethod
    def select_option(
        self, selector: str, value: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT
    ) -> None:
        """Select the option of a ``<select>`` whose label matches value."""

    @abstractmethod
    def scroll_into_view(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> None:
        """Scroll an element into the center of the viewport."""

    @abstractmethod
    def drag_and_drop(
        self, source: str, target: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT
    ) -> None:
        """Drag the source element onto the target element."""

    # Extraction

    @abstractmethod
    def get_text(self, selector: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT) -> str:
        """Return the text content of an element."""

    @abstractmethod
    def get_attribute(
        self, selector: str, name: str, timeout: float = DEFAULT_ELEMENT_TIMEOUT
    ) -> str:
        """Return an attribute value of an element, empty when absent."""
