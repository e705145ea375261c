"""JSON processor turning parsed JSON documents into diagram graphs."""

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..config import DiagramConfig
from ..data_type_detector import DataTypeDetector
from ..engines.graph_builder import GraphBuilder
from ..models import DiagramData
from ..parser import JSONParser
from ..types import DiagramProcessorInterface, DataType, ErrorType, ProcessingError, RootContext
from ..utils.formatting import format_scalar, to_pascal_case


class JSONProcessor(DiagramProcessorInterface):
    """
    Processor for parsed JSON documents.

    Walks the document top-down and emits one node per group of data:
    primitive properties of an object are merged into a single leaf, every
    non-empty object or array becomes a container, and array items are
    flattened where an item would only wrap a single complex value.
    """

    def __init__(self, parser: Optional[JSONParser] = None,
                 detector: Optional[DataTypeDetector] = None,
                 config: Optional[DiagramConfig] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the JSON processor.

        Args:
            parser: Optional JSONParser instance used for root normalization
            detector: Optional DataTypeDetector instance
            config: Optional DiagramConfig instance
            logger: Optional logger instance
        """
        self.config = config or DiagramConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.parser = parser or JSONParser(config=self.config, logger=self.logger)
        self.detector = detector or DataTypeDetector(self.logger)

    def process(self, document: Any) -> DiagramData:
        """
        Process a parsed JSON document into diagram data.

        Args:
            document: Parsed JSON value

        Returns:
            DiagramData with nodes and connectors

        Raises:
            ProcessingError: If the document is nested deeper than max_depth,
                or deeper than the interpreter can walk
        """
        depth_result = self.parser.validate_for_processing(document)
        self.parser.error_handler.raise_for_result(depth_result, "Unsupported JSON document")

        builder = GraphBuilder(self.config, self.logger)

        if self.detector.is_empty(document):
            self.logger.info("Empty JSON document, nothing to draw")
            return builder.build()

        root = self.parser.preprocess_root(document)
        root_type = self.detector.detect_element_type(root.data)

        try:
            if root_type == DataType.DICT:
                self._process_object_root(root, builder)
            elif root_type == DataType.LIST:
                self._process_array_root(root, builder)
            else:
                self._process_scalar_root(root, builder)
        except RecursionError:
            self.logger.error("JSON document is nested too deep to walk")
            raise ProcessingError(
                "Unsupported JSON document: nesting is too deep to walk, lower max_depth",
                ErrorType.DEPTH,
                context={"max_depth": self.config.max_depth}
            ) from None

        self.logger.info(f"Built JSON diagram with {builder.node_count} nodes "
                         f"and {builder.connector_count} connectors")
        return builder.build()

    def _process_object_root(self, root: RootContext, builder: GraphBuilder) -> None:
        """Emit the merged root leaf and the top-level containers."""
        data = root.data
        if not data:
            return

        groups = self.detector.classify_children(data)
        path_root = self.config.path_root

        root_id = None
        if groups.primitives:
            base_id = (self.config.envelope_root_id if root.envelope_skipped
                       else to_pascal_case(root.identifier))
            root_id = builder.add_merged_leaf(base_id, self._format_entries(groups.primitives), path_root)

        for key, value in groups.complexes:
            path = f"{path_root}.{key}"
            node_id = builder.add_container(to_pascal_case(key), key, self.detector.count_children(value), path)
            if root_id is not None:
                builder.connect(root_id, node_id)
            self._process_value(value, node_id, path, key, builder)

        builder.ensure_single_root(force=root.envelope_skipped and root_id is None)

    def _process_array_root(self, root: RootContext, builder: GraphBuilder) -> None:
        """Treat a top-level array as one implicit container."""
        path_root = self.config.path_root
        root_id = builder.add_container(
            to_pascal_case(path_root), root.identifier, len(root.data), path_root
        )
        self._process_array(root.data, root_id, path_root, root.identifier, builder)
        builder.ensure_single_root()

    def _process_scalar_root(self, root: RootContext, builder: GraphBuilder) -> None:
        path_root = self.config.path_root
        builder.add_value_leaf(
            to_pascal_case(path_root),
            format_scalar(root.data),
            path_root,
            annotation_id=f"Value_{root.identifier}"
        )

    def _process_value(self, value: Any, parent_id: str, path: str, key: str,
                       builder: GraphBuilder) -> None:
        """Dispatch on the kind of ``value``; scalars and nulls emit nothing here."""
        value_type = self.detector.detect_element_type(value)

        if value_type == DataType.DICT:
            self._process_object(value, parent_id, path, builder)
        elif value_type == DataType.LIST:
            self._process_array(value, parent_id, path, key, builder)

    def _process_object(self, data: Dict[str, Any], parent_id: str, path: str,
                        builder: GraphBuilder) -> None:
        """
        Emit nodes for an object hanging below ``parent_id``.

        Args:
            data: Object to process
            parent_id: Id of the container node representing the object
            path: Logical path of the object
            builder: Graph builder for this call
        """
        if not data:
            return

        groups = self.detector.classify_children(data)

        if groups.primitives:
            leaf_id = builder.add_merged_leaf(
                to_pascal_case(f"{parent_id}-leaf"), self._format_entries(groups.primitives), path
            )
            builder.connect(parent_id, leaf_id)

        self._process_complex_children(groups.complexes, parent_id, path, builder)

    def _process_complex_children(self, complexes: List[Tuple[str, Any]], parent_id: str,
                                  path: str, builder: GraphBuilder) -> None:
        """Emit one container per complex child, connected from ``parent_id``, and recurse."""
        for key, value in complexes:
            child_path = f"{path}.{key}"
            child_id = builder.add_container(
                to_pascal_case(f"{parent_id}-{key}"), key, self.detector.count_children(value), child_path
            )
            builder.connect(parent_id, child_id)
            self._process_value(value, child_id, child_path, key, builder)

    def _process_array(self, items: List[Any], parent_id: str, path: str, key: str,
                       builder: GraphBuilder) -> None:
        """
        Emit nodes for the items of an array hanging below ``parent_id``.

        Null items are skipped but keep their index, so paths stay aligned
        with positions in the source array.

        Args:
            items: Array to process
            parent_id: Id of the container node representing the array
            path: Logical path of the array
            key: Display key of the array
            builder: Graph builder for this call
        """
        for index, item in enumerate(items):
            item_type = self.detector.detect_element_type(item)
            if item_type == DataType.NULL:
                continue

            item_id = to_pascal_case(f"{parent_id}-{index}")
            item_path = f"{path}[{index}]"

            if item_type == DataType.PRIMITIVE:
                node_id = builder.add_value_leaf(
                    item_id, format_scalar(item), item_path, annotation_id=f"Value_{key}"
                )
                builder.connect(parent_id, node_id)
            elif item_type == DataType.LIST:
                if not item:
                    continue
                node_id = builder.add_container(item_id, f"Item {index}", len(item), item_path)
                builder.connect(parent_id, node_id)
                self._process_array(item, node_id, item_path, key, builder)
            else:
                self._process_array_object(item, item_id, parent_id, index, item_path, builder)

    def _process_array_object(self, item: Dict[str, Any], item_id: str, parent_id: str,
                              index: int, item_path: str, builder: GraphBuilder) -> None:
        """
        Emit nodes for an object found inside an array.

        Items with primitives or several complex children get an intermediate
        node; an item wrapping exactly one complex child is collapsed so the
        child connects straight to the array's parent.
        """
        groups = self.detector.classify_children(item)

        if self.detector.requires_intermediate_node(groups):
            if groups.primitives:
                node_id = builder.add_merged_leaf(item_id, self._format_entries(groups.primitives), item_path)
            else:
                node_id = builder.add_label_node(item_id, f"Item {index}", item_path)
            builder.connect(parent_id, node_id)
            self._process_complex_children(groups.complexes, node_id, item_path, builder)
        elif groups.complexes:
            key, value = groups.complexes[0]
            child_path = f"{item_path}.{key}"
            child_id = builder.add_container(
                to_pascal_case(f"{item_id}-{key}"), key, self.detector.count_children(value), child_path
            )
            builder.connect(parent_id, child_id)
            self._process_value(value, child_id, child_path, key, builder)

    @staticmethod
    def _format_entries(primitives: List[Tuple[str, Any]]) -> List[Tuple[str, str]]:
        return [(key, format_scalar(value)) for key, value in primitives]
