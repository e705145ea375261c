"""
JSON Diagram - Turn JSON and XML documents into layout-ready graphs.

Produces a list of nodes (merged primitive leaves, object/array containers)
and a list of connectors that a diagram widget can lay out as a tree.
"""

from .config import DiagramConfig
from .diagram_visualizer import DiagramVisualizer, process_data
from .models import Annotation, Connector, DiagramData, Node, NodeData
from .types import InputKind, ProcessingError, ErrorType, RenderResult

__version__ = "1.0.0"
__all__ = [
    "DiagramVisualizer",
    "process_data",
    "DiagramConfig",
    "DiagramData",
    "Node",
    "NodeData",
    "Annotation",
    "Connector",
    "InputKind",
    "ErrorType",
    "ProcessingError",
    "RenderResult",
]
