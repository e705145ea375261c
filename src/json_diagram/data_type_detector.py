"""Data type detection and child classification for JSON structures."""

import logging
from typing import Any, Dict, Optional

from .types import ChildGroups, DataType


class DataTypeDetector:
    """
    Classifier for parsed JSON values.

    Decides the kind of every value the processors visit, splits an object's
    children into primitive and complex groups, and computes the numbers
    shown in container badges.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the data type detector.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def detect_element_type(self, element: Any) -> DataType:
        """
        Detect the type of a single element.

        Args:
            element: Element to analyze

        Returns:
            DataType enum indicating the element type
        """
        if isinstance(element, dict):
            return DataType.DICT
        elif isinstance(element, list):
            return DataType.LIST
        elif element is None:
            return DataType.NULL
        else:
            return DataType.PRIMITIVE

    def is_complex(self, element: Any) -> bool:
        """Check if an element is an object or an array."""
        return self.detect_element_type(element) in (DataType.DICT, DataType.LIST)

    def is_empty(self, element: Any) -> bool:
        """Check if an element is an empty object or an empty array."""
        return self.is_complex(element) and len(element) == 0

    def classify_children(self, data: Dict[str, Any]) -> ChildGroups:
        """
        Split an object's properties into primitive and complex groups.

        Scalars and nulls are primitive; non-empty objects and arrays are
        complex; empty objects and arrays are dropped. Both groups keep
        source order.

        Args:
            data: Object to classify

        Returns:
            ChildGroups with (key, value) pairs
        """
        groups = ChildGroups()

        for key, value in data.items():
            if not self.is_complex(value):
                groups.primitives.append((key, value))
            elif len(value) > 0:
                groups.complexes.append((key, value))
            else:
                self.logger.debug(f"Dropping empty container property '{key}'")

        return groups

    def count_children(self, element: Any) -> int:
        """
        Compute the number shown in a container's ``{n}`` badge.

        Arrays count every element, nulls included. Objects count groups,
        not scalars: one for all primitive properties together, plus one per
        array-valued and one per object-valued property.

        Args:
            element: Value to count

        Returns:
            Badge count, 0 for anything that is not a container
        """
        element_type = self.detect_element_type(element)

        if element_type == DataType.LIST:
            return len(element)

        if element_type != DataType.DICT:
            return 0

        value_types = [self.detect_element_type(value) for value in element.values()]
        has_primitives = any(t in (DataType.PRIMITIVE, DataType.NULL) for t in value_types)
        list_count = value_types.count(DataType.LIST)
        dict_count = value_types.count(DataType.DICT)

        return (1 if has_primitives else 0) + list_count + dict_count

    @staticmethod
    def requires_intermediate_node(groups: ChildGroups) -> bool:
        """
        Decide whether an object inside an array needs its own node.

        An item with primitives, or with more than one complex child, gets an
        intermediate node. An item with a single complex child and nothing
        else is collapsed: the child hangs directly off the array's parent.
        """
        return groups.has_primitives or len(groups.complexes) > 1
