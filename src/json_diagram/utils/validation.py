"""Validation utilities for input documents."""

import json
from typing import Any, List, Tuple

from lxml import etree

from ..types import ValidationResult, ValidationError, ErrorType
from ..xml_parser import XmlDocumentParser


class ValidationUtils:
    """Utility class for validating input text and parsed structures."""

    @staticmethod
    def validate_json_string(json_string: str) -> ValidationResult:
        """
        Validate JSON string syntax.

        Args:
            json_string: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not json_string.strip():
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="JSON string is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Invalid JSON syntax: {e.msg}",
                location=f"line {e.lineno}, column {e.colno}"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)
        except RecursionError:
            errors.append(ValidationError(
                type=ErrorType.DEPTH,
                message="JSON nesting is too deep to decode",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        if not isinstance(data, (dict, list)):
            warnings.append(f"Root element is a {type(data).__name__}; "
                            "the diagram will contain a single node.")
        elif not data:
            warnings.append("Document is empty; the diagram will contain no nodes.")

        return ValidationResult(is_valid=True, errors=errors, warnings=warnings)

    @staticmethod
    def validate_xml_string(xml_string: str) -> ValidationResult:
        """
        Validate XML fragment syntax.

        The text is checked the way the XML front end reads it: wrapped in a
        synthetic root element, so several top-level elements are allowed.
        """
        errors = []
        warnings = []

        try:
            root = XmlDocumentParser.parse_wrapped(xml_string)
        except (etree.XMLSyntaxError, ValueError) as e:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Invalid XML syntax: {e}",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        if not XmlDocumentParser.child_elements(root):
            warnings.append("Document has no elements; the diagram will contain no nodes.")

        return ValidationResult(is_valid=True, errors=errors, warnings=warnings)

    @staticmethod
    def measure_depth(data: Any) -> int:
        """
        Measure container nesting depth without recursion.

        A scalar has depth 0, ``{}`` and ``[]`` have depth 1.
        """
        max_depth = 0
        stack: List[Tuple[Any, int]] = [(data, 0)]

        while stack:
            value, depth = stack.pop()
            if isinstance(value, dict):
                children = value.values()
            elif isinstance(value, list):
                children = value
            else:
                continue

            depth += 1
            max_depth = max(max_depth, depth)
            stack.extend((child, depth) for child in children)

        return max_depth

    @staticmethod
    def measure_element_depth(element: etree._Element) -> int:
        """Measure element nesting depth below ``element`` without recursion."""
        max_depth = 0
        stack = [(child, 1) for child in XmlDocumentParser.child_elements(element)]

        while stack:
            current, depth = stack.pop()
            max_depth = max(max_depth, depth)
            stack.extend((child, depth + 1) for child in XmlDocumentParser.child_elements(current))

        return max_depth

    @staticmethod
    def validate_depth(depth: int, max_depth: int) -> ValidationResult:
        """
        Check a measured depth against the configured limit.

        Args:
            depth: Measured nesting depth
            max_depth: Maximum allowed depth

        Returns:
            ValidationResult with a DEPTH error when the limit is exceeded
        """
        errors = []
        warnings = []

        if depth > max_depth:
            errors.append(ValidationError(
                type=ErrorType.DEPTH,
                message=f"Nesting depth {depth} exceeds the limit of {max_depth}",
                location="document"
            ))
        elif depth > max_depth // 2:
            warnings.append(f"Deep nesting detected (depth: {depth}). "
                            "The diagram may be hard to read.")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )
