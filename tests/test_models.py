"""Tests for data models."""

import json

import pytest
from json_diagram.config import DiagramConfig
from json_diagram.models import Annotation, Connector, DiagramData, Node, NodeData


class TestNode:
    """Tests for Node class."""

    def test_create_valid_node(self):
        """Test creating a valid node."""
        node = Node(
            id="Root",
            width=150,
            height=50,
            annotations=[Annotation(id="Key_Root_a", content="a:"), Annotation(id="Value_Root_a", content="1")],
            additional_info={"isLeaf": True, "mergedContent": "a: 1"},
            data=NodeData(path="Root", title="a: 1", actualdata="a: 1")
        )

        assert node.is_leaf
        assert node.merged_content == "a: 1"
        assert node.path == "Root"
        assert node.annotation_texts() == ["a:", "1"]

    def test_defaults(self):
        """Test default flags for a bare node."""
        node = Node(id="X", width=10, height=10)

        assert not node.is_leaf
        assert node.merged_content == ""
        assert node.annotations == []

    def test_empty_id(self):
        """Test validation of empty node id."""
        with pytest.raises(ValueError, match="node id cannot be empty"):
            Node(id="", width=10, height=10)

    @pytest.mark.parametrize("width,height", [(0, 10), (10, -1)])
    def test_invalid_size(self, width, height):
        """Test validation of node sizes."""
        with pytest.raises(ValueError, match="positive size"):
            Node(id="X", width=width, height=height)

    def test_to_dict(self):
        """Test serialization keys."""
        node = Node(
            id="User",
            width=150,
            height=50,
            annotations=[Annotation(content="user"), Annotation(content="{2}")],
            additional_info={"isLeaf": False, "mergedContent": "user  {2}"},
            data=NodeData(path="Root.user", title="user", actualdata="user")
        )

        assert node.to_dict() == {
            "id": "User",
            "width": 150,
            "height": 50,
            "annotations": [{"id": None, "content": "user"}, {"id": None, "content": "{2}"}],
            "additionalInfo": {"isLeaf": False, "mergedContent": "user  {2}"},
            "data": {"path": "Root.user", "title": "user", "actualdata": "user"}
        }


class TestConnector:
    """Tests for Connector class."""

    def test_create_valid_connector(self):
        """Test creating a valid connector."""
        connector = Connector(id=Connector.make_id("A", "B"), source_id="A", target_id="B")

        assert connector.id == "connector-A-B"
        assert connector.to_dict() == {"id": "connector-A-B", "sourceId": "A", "targetId": "B"}

    def test_self_loop(self):
        """Test that a node cannot connect to itself."""
        with pytest.raises(ValueError, match="to itself"):
            Connector(id="c", source_id="A", target_id="A")

    def test_missing_end(self):
        """Test validation of connector ends."""
        with pytest.raises(ValueError, match="source and a target"):
            Connector(id="c", source_id="A", target_id="")

    def test_empty_id(self):
        """Test validation of empty connector id."""
        with pytest.raises(ValueError, match="connector id cannot be empty"):
            Connector(id="", source_id="A", target_id="B")


class TestDiagramData:
    """Tests for DiagramData class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.data = DiagramData(
            nodes=[
                Node(id="A", width=10, height=10),
                Node(id="B", width=10, height=10),
                Node(id="C", width=10, height=10),
            ],
            connectors=[Connector(id="connector-A-B", source_id="A", target_id="B")]
        )

    def test_queries(self):
        """Test lookup helpers."""
        assert not self.data.is_empty()
        assert self.data.node_ids() == ["A", "B", "C"]
        assert self.data.get_node("B").id == "B"
        assert self.data.get_node("Z") is None
        assert [node.id for node in self.data.children_of("A")] == ["B"]
        assert self.data.root_ids() == ["A", "C"]

    def test_empty(self):
        """Test an empty diagram."""
        data = DiagramData()

        assert data.is_empty()
        assert data.to_dict() == {"nodes": [], "connectors": []}

    def test_to_json(self):
        """Test JSON serialization, including non-ASCII content."""
        data = DiagramData(nodes=[Node(
            id="Root",
            width=10,
            height=10,
            additional_info={"isLeaf": True, "mergedContent": 'name: "Zoë"'}
        )])

        text = data.to_json()

        assert "Zoë" in text
        assert json.loads(text)["nodes"][0]["additionalInfo"]["mergedContent"] == 'name: "Zoë"'


class TestDiagramConfig:
    """Tests for DiagramConfig class."""

    def test_defaults(self):
        """Test default settings."""
        config = DiagramConfig()

        assert config.node_width == 150
        assert config.node_height == 50
        assert config.super_root_id == "main-root"
        assert config.max_depth == 200

    @pytest.mark.parametrize("kwargs", [
        {"node_width": 0},
        {"node_height": -5},
        {"super_root_size": 0},
        {"super_root_id": ""},
        {"max_depth": 0},
    ])
    def test_invalid_values(self, kwargs):
        """Test validation of configuration values."""
        with pytest.raises(ValueError):
            DiagramConfig(**kwargs)
