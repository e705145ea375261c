"""Error handling implementation for the JSON Diagram builder."""

import logging
from typing import Optional

from .types import (
    ErrorHandlerInterface,
    ValidationResult,
    ValidationError,
    ErrorResponse,
    ProcessingError,
    ErrorType,
    InputKind
)
from .utils.validation import ValidationUtils


class ErrorHandler(ErrorHandlerInterface):
    """
    Error handler for diagram generation.

    Validates raw input before parsing and turns processing errors into
    responses the caller can show to a user.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_input(self, input_data: str, kind: InputKind = InputKind.JSON) -> ValidationResult:
        """
        Validate raw input text.

        Args:
            input_data: Document text to validate
            kind: Input format of the text

        Returns:
            ValidationResult with validation details
        """
        if kind == InputKind.XML:
            return ValidationUtils.validate_xml_string(input_data)
        if kind == InputKind.JSON:
            return ValidationUtils.validate_json_string(input_data)

        return ValidationResult(
            is_valid=False,
            errors=[ValidationError(
                type=ErrorType.STRUCTURE,
                message=f"Unsupported input kind: {kind}",
                location="kind"
            )],
            warnings=[]
        )

    def handle_processing_error(self, error: ProcessingError) -> ErrorResponse:
        """
        Handle processing errors and suggest a fix.

        Args:
            error: ProcessingError to handle

        Returns:
            ErrorResponse with recovery information
        """
        self.logger.error(f"Processing error: {error.error_type.value} - {error}")

        if error.error_type == ErrorType.SYNTAX:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Fix the document syntax at the reported location and retry."
            )
        elif error.error_type == ErrorType.DEPTH:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Reduce the document nesting depth or raise max_depth in DiagramConfig."
            )
        elif error.error_type == ErrorType.STRUCTURE:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Use a supported input kind (json or xml)."
            )
        else:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Unknown error type. Please check logs and retry."
            )

    @staticmethod
    def raise_for_result(result: ValidationResult, prefix: str) -> None:
        """
        Raise a ProcessingError for the first error of a failed validation.

        Args:
            result: Validation result to check
            prefix: Message prefix naming the failed step

        Raises:
            ProcessingError: If the result is not valid
        """
        if result.is_valid:
            return

        messages = [error.message for error in result.errors]
        locations = [error.location for error in result.errors if error.location]
        raise ProcessingError(
            f"{prefix}: {'; '.join(messages)}",
            result.errors[0].type,
            context={"locations": locations}
        )
