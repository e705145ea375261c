"""Diagram data aggregate handed to the renderer."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .node import Node
from .connector import Connector


@dataclass
class DiagramData:
    """
    Output of one parse: the ordered node list and the ordered connector list.

    Created fresh per call and never shared between calls.
    """

    nodes: List[Node] = field(default_factory=list)
    connectors: List[Connector] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Check if the diagram has no nodes."""
        return len(self.nodes) == 0

    def node_ids(self) -> List[str]:
        """Get node ids in emission order."""
        return [node.id for node in self.nodes]

    def get_node(self, node_id: str) -> Optional[Node]:
        """Find a node by id."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def children_of(self, node_id: str) -> List[Node]:
        """Get the target nodes of every connector leaving ``node_id``."""
        by_id = {node.id: node for node in self.nodes}
        return [by_id[c.target_id] for c in self.connectors if c.source_id == node_id]

    def root_ids(self) -> List[str]:
        """Get ids of nodes without an incoming connector, in node order."""
        targets = {connector.target_id for connector in self.connectors}
        return [node.id for node in self.nodes if node.id not in targets]

    def to_dict(self) -> Dict[str, Any]:
        """Convert diagram to dictionary for JSON serialization."""
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "connectors": [connector.to_dict() for connector in self.connectors]
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize the diagram to a JSON string."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)
