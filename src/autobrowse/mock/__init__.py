"""Mock implementations for running tasks without a real browser."""

from .mock_browser import MockBrowser

__all__ = ["MockBrowser"]
