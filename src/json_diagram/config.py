"""Configuration for diagram generation."""

from dataclasses import dataclass


@dataclass
class DiagramConfig:
    """
    Tunable settings shared by the diagram processors.

    Node sizes are the fixed defaults handed to the renderer; identifiers
    are the literal ids used for synthetic and top-level nodes.
    """

    node_width: float = 150
    node_height: float = 50
    super_root_id: str = "main-root"
    super_root_size: float = 40
    super_root_path: str = "MainRoot"
    default_root_identifier: str = "root"
    envelope_root_id: str = "DataRoot"
    xml_root_id: str = "RootMerged"
    path_root: str = "Root"
    max_depth: int = 200

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.node_width <= 0 or self.node_height <= 0:
            raise ValueError("node_width and node_height must be positive")

        if self.super_root_size <= 0:
            raise ValueError("super_root_size must be positive")

        if not self.super_root_id:
            raise ValueError("super_root_id cannot be empty")

        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")
