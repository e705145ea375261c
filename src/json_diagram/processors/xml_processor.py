"""XML processor turning parsed XML element trees into diagram graphs."""

import logging
from typing import List, NamedTuple, Optional, Tuple

from lxml import etree

from ..config import DiagramConfig
from ..engines.graph_builder import GraphBuilder
from ..error_handler import ErrorHandler
from ..models import DiagramData
from ..types import DiagramProcessorInterface, ErrorType, ProcessingError
from ..utils.formatting import format_value, to_pascal_case
from ..utils.validation import ValidationUtils
from ..xml_parser import XmlDocumentParser


class ElementGroups(NamedTuple):
    """Child elements of one XML element, grouped by how they are drawn."""
    primitives: List[etree._Element]
    complexes: List[etree._Element]
    arrays: List[Tuple[str, List[etree._Element]]]


class XMLProcessor(DiagramProcessorInterface):
    """
    Processor for XML element trees.

    Sibling elements sharing a tag form an array group, a lone element
    without child elements is a primitive, anything else is complex.
    Primitives are merged into one leaf per level, exactly like object
    properties on the JSON side.

    Items of a repeated-tag group are shaped one at a time, so a single
    group can mix value leaves, merged leaves and containers. Two items
    sharing a tag are not assumed to share a structure.
    """

    def __init__(self, xml_parser: Optional[XmlDocumentParser] = None,
                 error_handler: Optional[ErrorHandler] = None,
                 config: Optional[DiagramConfig] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the XML processor.

        Args:
            xml_parser: Optional XmlDocumentParser instance
            error_handler: Optional ErrorHandler instance
            config: Optional DiagramConfig instance
            logger: Optional logger instance
        """
        self.config = config or DiagramConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.xml_parser = xml_parser or XmlDocumentParser(self.logger)
        self.error_handler = error_handler or ErrorHandler(self.logger)

    def process(self, document: Optional[etree._Element]) -> DiagramData:
        """
        Process the synthetic wrapper element into diagram data.

        Args:
            document: Wrapper element returned by XmlDocumentParser.parse,
                or None for input that failed to parse

        Returns:
            DiagramData with nodes and connectors

        Raises:
            ProcessingError: If the elements are nested deeper than max_depth,
                or deeper than the interpreter can walk
        """
        builder = GraphBuilder(self.config, self.logger)
        if document is None:
            return builder.build()

        depth = ValidationUtils.measure_element_depth(document)
        depth_result = ValidationUtils.validate_depth(depth, self.config.max_depth)
        self.error_handler.raise_for_result(depth_result, "Unsupported XML document")

        top_elements = self.xml_parser.child_elements(document)
        if not top_elements:
            self.logger.info("XML document has no elements, nothing to draw")
            return builder.build()

        try:
            self._process_top_level(top_elements, builder)
        except RecursionError:
            self.logger.error("XML document is nested too deep to walk")
            raise ProcessingError(
                "Unsupported XML document: nesting is too deep to walk, lower max_depth",
                ErrorType.DEPTH,
                context={"max_depth": self.config.max_depth}
            ) from None

        self.logger.info(f"Built XML diagram with {builder.node_count} nodes "
                         f"and {builder.connector_count} connectors")
        return builder.build()

    def _process_top_level(self, top_elements: List[etree._Element], builder: GraphBuilder) -> None:
        """Emit the root leaf for top-level primitives and walk every top-level group."""
        groups = self._partition(top_elements)
        path_root = self.config.path_root

        root_id = None
        if groups.primitives:
            root_id = builder.add_merged_leaf(
                self.config.xml_root_id, self._format_entries(groups.primitives), path_root
            )

        for element in groups.complexes:
            tag = self.xml_parser.local_name(element)
            self._process_element(element, to_pascal_case(tag), root_id, tag, f"{path_root}.{tag}", builder)

        for tag, items in groups.arrays:
            self._process_array_group(tag, items, root_id, path_root, builder)

        builder.ensure_single_root()

    def _partition(self, elements: List[etree._Element]) -> ElementGroups:
        """Group elements by tag and sort the groups into primitives, complexes and arrays."""
        groups = ElementGroups(primitives=[], complexes=[], arrays=[])

        for tag, items in self.xml_parser.group_by_tag(elements).items():
            if len(items) > 1:
                groups.arrays.append((tag, items))
            elif not self.xml_parser.child_elements(items[0]):
                groups.primitives.append(items[0])
            else:
                groups.complexes.append(items[0])

        return groups

    def _process_element(self, element: etree._Element, base_id: str, parent_id: Optional[str],
                         key: str, path: str, builder: GraphBuilder) -> str:
        """
        Emit a container for an element with child elements, and everything below it.

        Args:
            element: Element to process
            base_id: Preferred id of the element's node
            parent_id: Id of the parent node, or None at the top level
            key: Display name of the element
            path: Logical path of the element
            builder: Graph builder for this call

        Returns:
            Id of the node emitted for the element
        """
        groups = self._partition(self.xml_parser.child_elements(element))
        display_count = (len(groups.complexes) + len(groups.arrays)
                         + (1 if groups.primitives else 0))

        node_id = builder.add_container(base_id, key, display_count, path)
        if parent_id is not None:
            builder.connect(parent_id, node_id)

        if groups.primitives:
            leaf_id = builder.add_merged_leaf(
                f"{node_id}-leaf", self._format_entries(groups.primitives), path
            )
            builder.connect(node_id, leaf_id)

        self._process_complex_groups(groups, node_id, path, builder)
        return node_id

    def _process_complex_groups(self, groups: ElementGroups, parent_id: str, path: str,
                                builder: GraphBuilder) -> None:
        for child in groups.complexes:
            tag = self.xml_parser.local_name(child)
            self._process_element(
                child, f"{parent_id}-{to_pascal_case(tag)}", parent_id, tag, f"{path}.{tag}", builder
            )

        for tag, items in groups.arrays:
            self._process_array_group(tag, items, parent_id, path, builder)

    def _process_array_group(self, tag: str, items: List[etree._Element], parent_id: Optional[str],
                             parent_path: str, builder: GraphBuilder) -> None:
        """
        Emit a container for repeated sibling elements and one entry per item.

        Each item is drawn by its own shape: a childless item is a value
        leaf, an item with only distinct primitive children is one merged
        leaf, an item mixing primitives with complex children gets a merged
        leaf with the complex children below it, and anything else is
        processed as a complex element.
        """
        block_base = f"{parent_id}-{to_pascal_case(tag)}" if parent_id is not None else to_pascal_case(tag)
        block_path = f"{parent_path}.{tag}"
        block_id = builder.add_container(block_base, tag, len(items), block_path)
        if parent_id is not None:
            builder.connect(parent_id, block_id)

        for index, item in enumerate(items):
            item_id = f"{block_id}-{index}"
            item_path = f"{block_path}[{index}]"
            children = self.xml_parser.child_elements(item)

            if not children:
                leaf_id = builder.add_value_leaf(
                    item_id, format_value(self.xml_parser.text_of(item)), item_path,
                    annotation_id=f"Value_{tag}"
                )
                builder.connect(block_id, leaf_id)
                continue

            groups = self._partition(children)

            if groups.primitives:
                leaf_id = builder.add_merged_leaf(item_id, self._format_entries(groups.primitives), item_path)
                builder.connect(block_id, leaf_id)
                self._process_complex_groups(groups, leaf_id, item_path, builder)
            else:
                self._process_element(item, item_id, block_id, tag, item_path, builder)

    def _format_entries(self, elements: List[etree._Element]) -> List[Tuple[str, str]]:
        return [
            (self.xml_parser.local_name(element), format_value(self.xml_parser.text_of(element)))
            for element in elements
        ]
