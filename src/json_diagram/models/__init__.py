"""Data models for the JSON Diagram builder."""

from .node import Annotation, Node, NodeData
from .connector import Connector
from .diagram_data import DiagramData

__all__ = ["Annotation", "Node", "NodeData", "Connector", "DiagramData"]
