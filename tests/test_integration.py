"""Integration tests for the JSON Diagram builder."""

import json

import pytest
from click.testing import CliRunner
from conftest import assert_single_parent_tree
from json_diagram import DiagramConfig, DiagramVisualizer, InputKind, ProcessingError, process_data
from json_diagram.cli import main
from json_diagram.types import ErrorType


class TestDiagramVisualizerIntegration:
    """Integration tests for the complete diagram pipeline."""

    def setup_method(self):
        """Set up test fixtures."""
        self.visualizer = DiagramVisualizer()

    def test_process_json_document(self, sample_user_json):
        """Test the JSON path end to end."""
        data = self.visualizer.process_data(json.dumps(sample_user_json), InputKind.JSON)

        assert data.node_ids()[0] == "Root"
        assert_single_parent_tree(data)

    def test_process_xml_document(self, sample_library_xml):
        """Test the XML path end to end, with the kind given as text."""
        data = self.visualizer.process_data(sample_library_xml, "XML")

        assert data.node_ids()[0] == "Library"
        assert_single_parent_tree(data)

    def test_profiling_records_each_call(self, sample_wrapper_list_json):
        """Test that each call is profiled with its output size."""
        data = self.visualizer.process_data(json.dumps(sample_wrapper_list_json))

        summary = self.visualizer.profiler.get_performance_summary()
        assert summary["total_operations"] == 1
        assert summary["operations"][0]["name"] == "process_json"
        assert summary["operations"][0]["nodes"] == len(data.nodes)

    @pytest.mark.parametrize("kind,text", [
        (InputKind.JSON, '{"a": {"b": 1}}'),
        (InputKind.XML, "<a><b>1</b></a>"),
    ])
    def test_memory_is_sampled_between_parse_and_walk(self, monkeypatch, kind, text):
        """Test that each call takes a memory sample while its session is open."""
        profiler = self.visualizer.profiler
        sampled = []
        monkeypatch.setattr(profiler, "sample_performance", lambda: sampled.append(profiler.current_operation))

        self.visualizer.process_data(text, kind)

        assert sampled == [f"process_{kind.value}"]

    def test_deep_xml_reports_depth(self):
        """Test that XML nested past the limit fails with a depth error, not an empty graph."""
        text = "<a>" * 300 + "1" + "</a>" * 300

        with pytest.raises(ProcessingError) as exc_info:
            self.visualizer.process_data(text, InputKind.XML)
        assert exc_info.value.error_type == ErrorType.DEPTH

        result = self.visualizer.render(text, InputKind.XML)
        assert not result.success
        assert "exceeds the limit of 200" in result.errors[0]

    def test_malformed_json_raises(self):
        """Test that malformed JSON is reported as a syntax error."""
        with pytest.raises(ProcessingError) as exc_info:
            self.visualizer.process_data('{"a": ')

        assert exc_info.value.error_type == ErrorType.SYNTAX

    def test_malformed_xml_gives_empty_graph(self):
        """Test that malformed XML never raises."""
        data = self.visualizer.process_data("<a><b></a>", InputKind.XML)

        assert data.is_empty()

    def test_unsupported_kind(self):
        """Test rejection of unknown input kinds."""
        with pytest.raises(ProcessingError) as exc_info:
            self.visualizer.process_data("{}", "yaml")

        assert exc_info.value.error_type == ErrorType.STRUCTURE

    def test_render_success(self):
        """Test the non-raising entry point on good input."""
        result = self.visualizer.render('{"a": 1}')

        assert result.success
        assert result.data.node_ids() == ["Root"]
        assert result.errors is None
        assert result.warnings is None

    def test_render_failure(self):
        """Test the non-raising entry point on bad input."""
        result = self.visualizer.render('{"a": ')

        assert not result.success
        assert result.data.is_empty()
        assert "Invalid JSON input" in result.errors[0]
        assert "syntax" in result.errors[1].lower()

    def test_render_empty_document(self):
        """Test that empty documents succeed with a warning."""
        result = self.visualizer.render("[]")

        assert result.success
        assert result.data.is_empty()
        assert result.warnings == ["Document produced no nodes"]

    def test_depth_limit_from_config(self):
        """Test that the configured depth limit is applied."""
        visualizer = DiagramVisualizer(config=DiagramConfig(max_depth=2), enable_profiling=False)

        with pytest.raises(ProcessingError) as exc_info:
            visualizer.process_data('{"a": {"b": {"c": 1}}}')

        assert exc_info.value.error_type == ErrorType.DEPTH

    def test_module_level_process_data(self):
        """Test the convenience function."""
        data = process_data("<a><b>1</b></a>", "xml")

        assert data.node_ids() == ["A", "A-leaf"]

    def test_output_shape(self):
        """Test the serialized diagram layout handed to a renderer."""
        payload = json.loads(process_data('{"a": 1, "b": {"c": 2}}').to_json())

        assert set(payload) == {"nodes", "connectors"}
        assert payload["connectors"][0] == {"id": "connector-Root-B", "sourceId": "Root", "targetId": "B"}
        root = payload["nodes"][0]
        assert root["additionalInfo"] == {"isLeaf": True, "mergedContent": "a: 1"}
        assert root["data"]["path"] == "Root"
        assert root["width"] == 150 and root["height"] == 50


class TestCLI:
    """Tests for the command-line interface."""

    def setup_method(self):
        """Set up test fixtures."""
        self.runner = CliRunner()

    def test_render_to_file(self, temp_dir, sample_user_json):
        """Test rendering a JSON file into an output file."""
        input_file = temp_dir / "user.json"
        input_file.write_text(json.dumps(sample_user_json), encoding="utf-8")
        output_file = temp_dir / "diagram.json"

        result = self.runner.invoke(main, ["render", str(input_file), "-o", str(output_file)])

        assert result.exit_code == 0
        assert "Wrote 9 nodes and 8 connectors" in result.output
        payload = json.loads(output_file.read_text(encoding="utf-8"))
        assert len(payload["nodes"]) == 9

    def test_render_xml_by_extension(self, temp_dir, sample_library_xml):
        """Test that .xml files are read as XML."""
        input_file = temp_dir / "library.xml"
        input_file.write_text(sample_library_xml, encoding="utf-8")
        output_file = temp_dir / "diagram.json"

        result = self.runner.invoke(main, ["render", str(input_file), "-o", str(output_file)])

        assert result.exit_code == 0
        payload = json.loads(output_file.read_text(encoding="utf-8"))
        assert payload["nodes"][0]["id"] == "Library"

    def test_render_to_stdout(self, temp_dir):
        """Test printing the diagram JSON."""
        input_file = temp_dir / "doc.txt"
        input_file.write_text('{"a": 1}', encoding="utf-8")

        result = self.runner.invoke(main, ["render", str(input_file), "--kind", "json", "--indent", "0"])

        assert result.exit_code == 0
        assert '"mergedContent": "a: 1"' in result.output

    def test_render_invalid_input(self, temp_dir):
        """Test the exit code for malformed input."""
        input_file = temp_dir / "bad.json"
        input_file.write_text('{"a": ', encoding="utf-8")

        result = self.runner.invoke(main, ["render", str(input_file)])

        assert result.exit_code == 1
        assert "Render failed" in result.output

    def test_render_max_depth_option(self, temp_dir):
        """Test the depth limit option."""
        input_file = temp_dir / "deep.json"
        input_file.write_text('{"a": {"b": {"c": 1}}}', encoding="utf-8")

        result = self.runner.invoke(main, ["render", str(input_file), "--max-depth", "2"])

        assert result.exit_code == 1
        assert "exceeds the limit of 2" in result.output

    def test_summary(self, temp_dir):
        """Test the summary command."""
        input_file = temp_dir / "doc.json"
        input_file.write_text('{"x": {"a": 1}, "y": {"b": 2}}', encoding="utf-8")

        result = self.runner.invoke(main, ["summary", str(input_file)])

        assert result.exit_code == 0
        assert "Nodes: 5 (2 leaf, 3 container)" in result.output
        assert "Connectors: 4" in result.output
        assert "Roots: main-root" in result.output
