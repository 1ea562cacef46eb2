"""Browser implementations."""

from .playwright_browser import PlaywrightBrowser

__all__ = ["PlaywrightBrowser"]
