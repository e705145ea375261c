"""Node model with validation and serialization helpers."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Annotation:
    """A text fragment rendered inside a node (key label, value label or count badge)."""

    content: str
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert annotation to dictionary for JSON serialization."""
        return {"id": self.id, "content": self.content}


@dataclass
class NodeData:
    """Detail payload shown by the renderer's popups."""

    path: str
    title: str = ""
    actualdata: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "title": self.title, "actualdata": self.actualdata}


@dataclass
class Node:
    """
    A visual unit of the diagram.

    A node is either a merged bag of primitive key/value pairs (leaf), a
    container for an object or array with a label and a child-count badge,
    or the synthetic super-root.
    """

    id: str
    width: float
    height: float
    annotations: List[Annotation] = field(default_factory=list)
    additional_info: Dict[str, Any] = field(default_factory=dict)
    data: NodeData = field(default_factory=lambda: NodeData(path=""))

    def __post_init__(self):
        """Validate node after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate node integrity."""
        if not self.id:
            raise ValueError("node id cannot be empty")

        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"node {self.id} must have a positive size")

        self.additional_info.setdefault("isLeaf", False)
        self.additional_info.setdefault("mergedContent", "")

    @property
    def is_leaf(self) -> bool:
        return bool(self.additional_info["isLeaf"])

    @property
    def merged_content(self) -> str:
        return self.additional_info["mergedContent"]

    @property
    def path(self) -> str:
        return self.data.path

    def annotation_texts(self) -> List[str]:
        """Get annotation contents in render order."""
        return [annotation.content for annotation in self.annotations]

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "width": self.width,
            "height": self.height,
            "annotations": [annotation.to_dict() for annotation in self.annotations],
            "additionalInfo": dict(self.additional_info),
            "data": self.data.to_dict()
        }
