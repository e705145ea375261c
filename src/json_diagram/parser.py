"""JSON parser with validation and root normalization."""

import json
import logging
from typing import Any, Optional

from .config import DiagramConfig
from .error_handler import ErrorHandler
from .types import RootContext, ValidationResult, InputKind
from .utils.validation import ValidationUtils


class JSONParser:
    """
    JSON parser with validation and top-level document normalization.

    Parses text into Python values, guards against pathological nesting and
    decides how the top of the document maps onto the diagram's root.
    """

    def __init__(self, error_handler: Optional[ErrorHandler] = None,
                 config: Optional[DiagramConfig] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the JSON parser.

        Args:
            error_handler: Optional ErrorHandler instance
            config: Optional DiagramConfig instance
            logger: Optional logger instance
        """
        self.error_handler = error_handler or ErrorHandler()
        self.config = config or DiagramConfig()
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, json_string: str) -> Any:
        """
        Parse and validate a JSON string.

        Args:
            json_string: JSON string to parse

        Returns:
            Parsed document

        Raises:
            ProcessingError: If the JSON is malformed or too deep to decode
        """
        validation_result = self.error_handler.validate_input(json_string, InputKind.JSON)
        self.error_handler.raise_for_result(validation_result, "Invalid JSON input")

        data = json.loads(json_string)

        for warning in validation_result.warnings:
            self.logger.warning(warning)

        self.logger.info(f"Parsed JSON document with root type {type(data).__name__}")
        return data

    def validate_for_processing(self, data: Any) -> ValidationResult:
        """
        Check that parsed data can be walked safely.

        Args:
            data: Parsed JSON data

        Returns:
            ValidationResult with a DEPTH error for over-deep documents
        """
        depth = ValidationUtils.measure_depth(data)
        return ValidationUtils.validate_depth(depth, self.config.max_depth)

    def preprocess_root(self, data: Any) -> RootContext:
        """
        Normalize the top of the document.

        A single property with a blank key wrapping an object is an anonymous
        envelope and is skipped. A single named property wrapping an object
        names the root. Anything else uses the default root identifier.

        Args:
            data: Parsed JSON document

        Returns:
            RootContext describing the data to walk and the root identifier
        """
        identifier = self.config.default_root_identifier

        if not isinstance(data, dict):
            return RootContext(data=data, identifier=identifier)

        envelope_skipped = False
        while len(data) == 1:
            key, value = next(iter(data.items()))
            if not isinstance(value, dict):
                break
            if key.strip():
                if not envelope_skipped:
                    identifier = key
                break

            self.logger.debug("Skipping anonymous root envelope")
            envelope_skipped = True
            data = value

        return RootContext(data=data, identifier=identifier, envelope_skipped=envelope_skipped)
