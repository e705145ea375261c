"""Value formatting and identifier helpers shared by both front ends."""

import json
import math
import re
from typing import Any, Optional

_ID_SEPARATORS = re.compile(r"[-_]")

# Integral values below this magnitude print without an exponent.
_MAX_PLAIN_INTEGER = 1e16


def scalar_text(value: Any) -> str:
    """
    Get the textual representation of a parsed JSON scalar.

    Args:
        value: Scalar produced by the JSON decoder

    Returns:
        The value as it reads in JSON text (strings are returned unquoted)
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return json.dumps(value)
    return str(value)


def format_value(text: str) -> str:
    """
    Render a scalar's text for display inside a node.

    Booleans become lowercase ``true``/``false``, finite numbers are
    printed in canonical form and everything else, the text ``null``
    included, is wrapped in double quotes. Text that is already quoted is
    returned as is, so ``format_value(format_value(x)) == format_value(x)``.

    Args:
        text: Raw scalar text

    Returns:
        Display string
    """
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return text

    stripped = text.strip()
    lowered = stripped.lower()
    if lowered in ("true", "false"):
        return lowered

    number = _parse_number(stripped)
    if number is not None:
        return _canonical_number(number)

    return f'"{text}"'


def format_scalar(value: Any) -> str:
    """
    Render a parsed JSON scalar for display inside a node.

    A JSON null is shown as a bare ``null``; a string reading ``"null"`` is
    quoted like any other text.
    """
    if value is None:
        return "null"
    return format_value(scalar_text(value))


def _parse_number(text: str) -> Optional[float]:
    """Parse text as a finite float, or return None."""
    if not text or "_" in text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def _canonical_number(number: float) -> str:
    """Print a number without a trailing ``.0`` for integral values."""
    if number.is_integer() and abs(number) < _MAX_PLAIN_INTEGER:
        return str(int(number))
    return repr(number)


def to_pascal_case(text: str) -> str:
    """
    Convert hyphen/underscore separated text to PascalCase segments.

    ``"user-address_line"`` becomes ``"UserAddressLine"``; empty segments
    are dropped.
    """
    if not text:
        return text

    parts = [part for part in _ID_SEPARATORS.split(text) if part]
    return "".join(part[0].upper() + part[1:] for part in parts)
