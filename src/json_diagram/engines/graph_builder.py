"""Graph builder for emitting diagram nodes and connectors."""

import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..config import DiagramConfig
from ..models import Annotation, Connector, DiagramData, Node, NodeData


class GraphBuilder:
    """
    Call-scoped factory for nodes and connectors.

    Owns the id registry for one parse, so concurrent parses never share
    counters. Nodes and connectors are append-only; ``build`` hands them
    over as a DiagramData.
    """

    FALLBACK_ID = "Node"

    def __init__(self, config: Optional[DiagramConfig] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the graph builder.

        Args:
            config: Optional DiagramConfig instance
            logger: Optional logger instance
        """
        self.config = config or DiagramConfig()
        self.logger = logger or logging.getLogger(__name__)
        self._nodes: List[Node] = []
        self._connectors: List[Connector] = []
        self._node_ids: Set[str] = {self.config.super_root_id}
        self._emitted: Set[str] = set()
        self._connector_ids: Set[str] = set()
        self._edges: Set[Tuple[str, str]] = set()
        self._id_counters: Dict[str, int] = {}

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def connector_count(self) -> int:
        return len(self._connectors)

    def has_node(self, node_id: str) -> bool:
        """Check if a node with this id has been emitted."""
        return node_id in self._emitted

    def reserve_node_id(self, base: str) -> str:
        """
        Reserve a unique node id derived from ``base``.

        The first request for a base gets the base itself; later requests get
        ``base-2``, ``base-3`` and so on.

        Args:
            base: Preferred id

        Returns:
            Reserved id
        """
        return self._reserve(base or self.FALLBACK_ID, self._node_ids)

    def _reserve(self, base: str, registry: Set[str]) -> str:
        candidate = base
        while candidate in registry:
            counter = self._id_counters.get(base, 1) + 1
            self._id_counters[base] = counter
            candidate = f"{base}-{counter}"
        registry.add(candidate)
        return candidate

    def _append_node(self, node_id: str, annotations: List[Annotation], is_leaf: bool,
                     merged_content: str, path: str, title: str) -> str:
        node = Node(
            id=node_id,
            width=self.config.node_width,
            height=self.config.node_height,
            annotations=annotations,
            additional_info={"isLeaf": is_leaf, "mergedContent": merged_content},
            data=NodeData(path=path, title=title, actualdata=title)
        )
        self._nodes.append(node)
        self._emitted.add(node_id)
        self.logger.debug(f"Created {'leaf' if is_leaf else 'container'} node {node_id} at {path}")
        return node_id

    def add_merged_leaf(self, base_id: str, entries: Sequence[Tuple[str, str]], path: str) -> str:
        """
        Emit one leaf node bundling several primitive key/value pairs.

        Args:
            base_id: Preferred node id
            entries: (key, formatted value) pairs in display order
            path: Logical location in the source document

        Returns:
            Id of the new node
        """
        node_id = self.reserve_node_id(base_id)
        annotations = []
        for key, value in entries:
            annotations.append(Annotation(id=f"Key_{node_id}_{key}", content=f"{key}:"))
            annotations.append(Annotation(id=f"Value_{node_id}_{key}", content=value))

        merged_content = "\n".join(f"{key}: {value}" for key, value in entries)
        return self._append_node(node_id, annotations, True, merged_content, path, merged_content)

    def add_value_leaf(self, base_id: str, content: str, path: str,
                       annotation_id: Optional[str] = None) -> str:
        """Emit a leaf node with a single annotation."""
        node_id = self.reserve_node_id(base_id)
        annotations = [Annotation(id=annotation_id, content=content)]
        return self._append_node(node_id, annotations, True, content, path, content)

    def add_container(self, base_id: str, label: str, child_count: int, path: str) -> str:
        """
        Emit a container node showing a label and a ``{n}`` badge.

        The badge annotation is omitted when ``child_count`` is 0.
        """
        node_id = self.reserve_node_id(base_id)
        annotations = [Annotation(content=label)]
        if child_count > 0:
            annotations.append(Annotation(content=f"{{{child_count}}}"))

        merged_content = f"{label}  {{{child_count}}}"
        return self._append_node(node_id, annotations, False, merged_content, path, label)

    def add_label_node(self, base_id: str, label: str, path: str) -> str:
        """Emit a bare container node showing only a label."""
        node_id = self.reserve_node_id(base_id)
        return self._append_node(node_id, [Annotation(content=label)], False, label, path, label)

    def connect(self, source_id: str, target_id: str) -> Optional[Connector]:
        """
        Link two emitted nodes.

        Args:
            source_id: Parent node id
            target_id: Child node id

        Returns:
            The new Connector, or None if the edge already exists

        Raises:
            ValueError: If either end has not been emitted
        """
        for node_id in (source_id, target_id):
            if not self.has_node(node_id):
                raise ValueError(f"Cannot connect unknown node {node_id}")

        if (source_id, target_id) in self._edges:
            self.logger.debug(f"Skipping duplicate connector {source_id} -> {target_id}")
            return None

        connector_id = self._reserve(Connector.make_id(source_id, target_id), self._connector_ids)
        connector = Connector(id=connector_id, source_id=source_id, target_id=target_id)
        self._edges.add((source_id, target_id))
        self._connectors.append(connector)
        return connector

    def root_ids(self) -> List[str]:
        """Get ids of nodes without an incoming connector, in node order."""
        targets = {target for _, target in self._edges}
        return [node.id for node in self._nodes if node.id not in targets]

    def ensure_single_root(self, force: bool = False) -> Optional[str]:
        """
        Anchor disconnected roots under one synthetic super-root.

        The super-root is added when more than one node lacks a parent, or
        when ``force`` is set and there is at least one such node.

        Args:
            force: Add the super-root even for a single natural root

        Returns:
            Id of the super-root, or None if none was added
        """
        if self.has_node(self.config.super_root_id):
            return None

        roots = self.root_ids()
        if len(roots) > 1 or (force and roots):
            super_root_id = self.config.super_root_id
            node = Node(
                id=super_root_id,
                width=self.config.super_root_size,
                height=self.config.super_root_size,
                annotations=[],
                additional_info={"isLeaf": False, "mergedContent": ""},
                data=NodeData(path=self.config.super_root_path)
            )
            self._nodes.append(node)
            self._emitted.add(super_root_id)
            for root_id in roots:
                self.connect(super_root_id, root_id)

            self.logger.info(f"Added super-root {super_root_id} above {len(roots)} root nodes")
            return super_root_id

        return None

    def build(self) -> DiagramData:
        """Hand the emitted nodes and connectors over as DiagramData."""
        return DiagramData(nodes=list(self._nodes), connectors=list(self._connectors))
