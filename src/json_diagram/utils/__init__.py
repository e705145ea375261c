"""Utility functions for the JSON Diagram builder."""

from .formatting import format_scalar, format_value, scalar_text, to_pascal_case
from .validation import ValidationUtils

__all__ = ["format_scalar", "format_value", "scalar_text", "to_pascal_case", "ValidationUtils"]
