"""Configuration exception.

Exception thrown when there is a configuration error.
"""

from ..base_exceptions import AutobrowseException


class ConfigurationError(AutobrowseException):
    """Thrown when there is a configuration error.

    Indicates a problem with process configuration, such as an unreadable
    config file, invalid settings, or conflicting values.
    """
