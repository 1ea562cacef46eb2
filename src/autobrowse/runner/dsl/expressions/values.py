"""Value coercion rules shared by the evaluator and template substitution.

Variables hold ``str``, ``int``, ``float`` or ``bool``. Equality compares the
display strings of both operands, ordering compares numbers, and the logical
operators coerce through truthiness.
"""

from typing import Any


def to_display_string(value: Any) -> str:
    """Render a value the way it is compared and interpolated.

    Booleans render as ``true``/``false`` and whole floats drop their
    fractional part, so ``1.0`` and ``1`` both render as ``1``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if value is None:
        return ""
    return str(value)


def to_number(value: Any) -> float | None:
    """Coerce a value to a float for ordering comparisons.

    Returns:
        The numeric value, or None when the value is not numeric. Booleans
        are never numeric.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def to_boolean(value: Any) -> bool:
    """Truthiness used by ``&&``, ``||`` and ``!``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value != ""
    return False
