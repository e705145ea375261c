"""Diagram processors for the supported input formats."""

from .json_processor import JSONProcessor
from .xml_processor import XMLProcessor

__all__ = ["JSONProcessor", "XMLProcessor"]
