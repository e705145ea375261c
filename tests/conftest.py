"""Pytest configuration and fixtures."""

import pytest
import tempfile
from pathlib import Path
from typing import Dict, List

from json_diagram.models import DiagramData


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_user_json():
    """Sample nested JSON document for testing."""
    return {
        "name": "Alice",
        "active": True,
        "profile": {
            "age": 30,
            "city": "New York"
        },
        "addresses": [
            {"street": "1 Main St", "city": "Springfield"},
            {"street": "9 Elm St", "city": "Shelbyville"}
        ],
        "tags": ["admin", None, "staff"],
        "preferences": {}
    }


@pytest.fixture
def sample_wrapper_list_json():
    """Array of single-field wrapper objects."""
    return {
        "orders": [
            {"order": {"id": 1, "total": 9.5}},
            {"order": {"id": 2, "total": 12}}
        ]
    }


@pytest.fixture
def sample_library_xml():
    """Sample XML document for testing."""
    return """
    <library>
        <name>City Library</name>
        <open>true</open>
        <address>
            <street>Main St</street>
            <number>12</number>
        </address>
        <book>
            <title>Dune</title>
            <year>1965</year>
        </book>
        <book>
            <title>Emma</title>
            <year>1815</year>
        </book>
    </library>
    """


def incoming_counts(data: DiagramData) -> Dict[str, int]:
    """Count incoming connectors per node id."""
    counts = {node.id: 0 for node in data.nodes}
    for connector in data.connectors:
        counts[connector.target_id] += 1
    return counts


def assert_single_parent_tree(data: DiagramData) -> None:
    """Assert the graph is one tree: a single root, every other node with one parent."""
    counts = incoming_counts(data)
    roots = [node_id for node_id, count in counts.items() if count == 0]
    assert len(roots) == 1, f"expected one root, got {roots}"
    assert all(count <= 1 for count in counts.values())

    node_ids = set(counts)
    for connector in data.connectors:
        assert connector.source_id in node_ids
        assert connector.target_id in node_ids

    pairs = [(c.source_id, c.target_id) for c in data.connectors]
    assert len(pairs) == len(set(pairs))

    ids = [node.id for node in data.nodes]
    assert len(ids) == len(set(ids))


def child_ids(data: DiagramData, node_id: str) -> List[str]:
    """Get target ids of connectors leaving ``node_id``."""
    return [c.target_id for c in data.connectors if c.source_id == node_id]
