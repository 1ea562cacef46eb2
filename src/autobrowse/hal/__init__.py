"""Browser abstraction layer.

Task execution talks to the browser only through :class:`IBrowserController`.
:class:`PlaywrightBrowser` is the real implementation; tests and ``--mock``
runs use :class:`autobrowse.mock.MockBrowser`.

The Playwright implementation is imported lazily so that the interface can
be used without a Playwright driver installed.
"""

from typing import Any

from .interfaces import DEFAULT_ELEMENT_TIMEOUT, IBrowserController

__all__ = ["DEFAULT_ELEMENT_TIMEOUT", "IBrowserController", "PlaywrightBrowser"]


def __getattr__(name: str) -> Any:
    if name == "PlaywrightBrowser":
        from .implementations.playwright_browser import PlaywrightBrowser

        return PlaywrightBrowser
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
