"""``{{name}}`` placeholder substitution for action fields."""

import re
from collections.abc import Mapping

from .expression import EvaluationScope
from .values import to_display_string

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")


def substitute_variables(text: str, context: EvaluationScope) -> str:
    """Replace each ``{{name}}`` with the display string of ``name``.

    Names resolve through the context's loop scopes before its shared table.
    Placeholders naming an undefined variable are left as written.

    Example:
        >>> substitute_variables("Hello {{ name }}", {"name": "X"})
        'Hello X'
    """
    if not text or "{{" not in text:
        return text

    def replace(match: re.Match) -> str:
        name = match.group(1)
        try:
            if isinstance(context, Mapping):
                value = context[name]
            else:
                value = context.get_variable(name)
        except KeyError:
            return match.group(0)
        return to_display_string(value)

    return PLACEHOLDER_PATTERN.sub(replace, text)
