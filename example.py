#!/usr/bin/env python3
"""
Example usage of the JSON Diagram builder.

This script turns a JSON document and an XML document into node/connector
graphs and prints what a diagram widget would receive.
"""

import json
from json_diagram import DiagramVisualizer, InputKind


SAMPLE_XML = """
<catalog>
    <owner>ACME</owner>
    <product>
        <name>Widget</name>
        <price>9.99</price>
    </product>
    <product>
        <name>Gadget</name>
        <price>24</price>
        <tag>new</tag>
        <tag>sale</tag>
    </product>
</catalog>
"""


def show(title, result):
    """Print a short report for one render result."""
    print(f"\n{title}")
    print("-" * len(title))

    if not result.success:
        print("❌ Failed to render document")
        for error in result.errors or []:
            print(f"   Error: {error}")
        return

    data = result.data
    print(f"✅ {len(data.nodes)} nodes, {len(data.connectors)} connectors")
    print(f"   Roots: {', '.join(data.root_ids()) or 'none'}")

    for node in data.nodes:
        kind = "leaf" if node.is_leaf else "container"
        content = node.merged_content.replace("\n", " | ")
        print(f"   {node.id:<28} {kind:<10} {node.path:<28} {content}")

    for warning in result.warnings or []:
        print(f"   ⚠️  {warning}")


def main():
    """Main example function."""
    print("JSON Diagram Example")
    print("=" * 50)

    sample_data = {
        "name": "Alice Johnson",
        "email": "alice@example.com",
        "profile": {
            "age": 30,
            "city": "New York",
            "interests": ["reading", "hiking", None, "photography"]
        },
        "posts": [
            {"id": 1, "title": "My First Post", "tags": ["introduction", "hello"]},
            {"post": {"id": 2, "title": "Learning Python"}}
        ],
        "settings": {}
    }

    visualizer = DiagramVisualizer()

    show("JSON document", visualizer.render(json.dumps(sample_data), InputKind.JSON))
    show("XML document", visualizer.render(SAMPLE_XML, InputKind.XML))
    show("Malformed JSON", visualizer.render('{"name": ', InputKind.JSON))

    summary = visualizer.profiler.get_performance_summary()
    print(f"\nProfiled {summary['total_operations']} operations "
          f"in {summary['total_duration']:.4f}s")


if __name__ == "__main__":
    main()
