"""Connector model linking a parent node to a child node."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Connector:
    """Directed edge between two nodes of the same diagram."""

    id: str
    source_id: str
    target_id: str

    def __post_init__(self):
        """Validate connector after initialization."""
        if not self.id:
            raise ValueError("connector id cannot be empty")

        if not self.source_id or not self.target_id:
            raise ValueError("connector must have both a source and a target")

        if self.source_id == self.target_id:
            raise ValueError(f"connector {self.id} cannot link node {self.source_id} to itself")

    @staticmethod
    def make_id(source_id: str, target_id: str) -> str:
        """Derive the conventional connector id for an edge."""
        return f"connector-{source_id}-{target_id}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert connector to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "sourceId": self.source_id,
            "targetId": self.target_id
        }
