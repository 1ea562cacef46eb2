"""Browser abstraction interfaces."""

from .browser_controller import DEFAULT_ELEMENT_TIMEOUT, IBrowserController

__all__ = ["DEFAULT_ELEMENT_TIMEOUT", "IBrowserController"]
