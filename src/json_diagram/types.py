"""Core type definitions for the JSON Diagram builder."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple


class DataType(Enum):
    """Enumeration of document value kinds."""
    DICT = "dict"
    LIST = "list"
    PRIMITIVE = "primitive"
    NULL = "null"


class InputKind(Enum):
    """Enumeration of supported input document formats."""
    JSON = "json"
    XML = "xml"


class ErrorType(Enum):
    """Enumeration of error types."""
    SYNTAX = "syntax"
    STRUCTURE = "structure"
    DEPTH = "depth"


@dataclass
class ChildGroups:
    """Immediate children of an object split into primitive and complex entries."""
    primitives: List[Tuple[str, Any]] = field(default_factory=list)
    complexes: List[Tuple[str, Any]] = field(default_factory=list)

    @property
    def has_primitives(self) -> bool:
        return len(self.primitives) > 0


@dataclass
class RootContext:
    """Result of top-level document normalization."""
    data: Any
    identifier: str
    envelope_skipped: bool = False


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str


@dataclass
class RenderResult:
    """Result of a render operation."""
    success: bool
    data: 'DiagramData'
    errors: Optional[List[str]] = None
    warnings: Optional[List[str]] = None


class ProcessingError(Exception):
    """Custom exception for processing errors."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Any] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context


# Abstract base classes for interfaces

class DiagramProcessorInterface(ABC):
    """Abstract interface for document-to-diagram processors."""

    @abstractmethod
    def process(self, document: Any) -> 'DiagramData':
        """Process a parsed document into diagram data."""
        pass


class ErrorHandlerInterface(ABC):
    """Abstract interface for error handling."""

    @abstractmethod
    def validate_input(self, input_data: str, kind: InputKind) -> ValidationResult:
        """Validate input data."""
        pass

    @abstractmethod
    def handle_processing_error(self, error: ProcessingError) -> ErrorResponse:
        """Handle processing errors."""
        pass
