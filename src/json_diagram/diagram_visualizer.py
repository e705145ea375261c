"""Main entry point turning JSON or XML text into diagram data."""

import logging
from typing import Optional, Union

from .config import DiagramConfig
from .error_handler import ErrorHandler
from .models import DiagramData
from .parser import JSONParser
from .processors import JSONProcessor, XMLProcessor
from .profiler import PerformanceProfiler
from .types import InputKind, ProcessingError, ErrorType, RenderResult
from .xml_parser import XmlDocumentParser


class DiagramVisualizer:
    """
    Facade over the JSON and XML diagram processors.

    Every call builds its own processor state, so one instance can serve
    any number of documents.
    """

    def __init__(self, config: Optional[DiagramConfig] = None,
                 logger: Optional[logging.Logger] = None,
                 enable_profiling: bool = True):
        """
        Initialize the diagram visualizer.

        Args:
            config: Optional DiagramConfig instance
            logger: Optional logger instance
            enable_profiling: Record duration and memory of each call
        """
        self.config = config or DiagramConfig()
        self.logger = logger or logging.getLogger(__name__)

        self.error_handler = ErrorHandler(self.logger)
        self.json_parser = JSONParser(self.error_handler, self.config, self.logger)
        self.xml_parser = XmlDocumentParser(self.logger)
        self.json_processor = JSONProcessor(parser=self.json_parser, config=self.config, logger=self.logger)
        self.xml_processor = XMLProcessor(
            xml_parser=self.xml_parser,
            error_handler=self.error_handler,
            config=self.config,
            logger=self.logger
        )
        self.profiler = PerformanceProfiler(self.logger) if enable_profiling else None

    def process_data(self, text: str, kind: Union[InputKind, str] = InputKind.JSON) -> DiagramData:
        """
        Convert a document into diagram data.

        Args:
            text: JSON or XML document text
            kind: Input format, an InputKind or its value ("json" / "xml")

        Returns:
            DiagramData with nodes and connectors. Empty documents and
            malformed XML give an empty graph.

        Raises:
            ProcessingError: For malformed JSON, excessive nesting or an
                unsupported input kind
        """
        input_kind = self.resolve_kind(kind)

        if self.profiler is None:
            return self._process(text, input_kind)

        with self.profiler.profile_operation(f"process_{input_kind.value}", len(text.encode("utf-8"))) as profiler:
            data = self._process(text, input_kind)
            profiler.record_output(len(data.nodes), len(data.connectors))
        return data

    def _process(self, text: str, kind: InputKind) -> DiagramData:
        if kind == InputKind.XML:
            element = self.xml_parser.parse(text)
            self._sample()
            return self.xml_processor.process(element)

        document = self.json_parser.parse(text)
        self._sample()
        return self.json_processor.process(document)

    def _sample(self) -> None:
        if self.profiler is not None:
            self.profiler.sample_performance()

    def render(self, text: str, kind: Union[InputKind, str] = InputKind.JSON) -> RenderResult:
        """
        Convert a document into diagram data without raising.

        Args:
            text: JSON or XML document text
            kind: Input format

        Returns:
            RenderResult; on failure the graph is empty and errors explain why
        """
        try:
            data = self.process_data(text, kind)
        except ProcessingError as e:
            response = self.error_handler.handle_processing_error(e)
            return RenderResult(
                success=False,
                data=DiagramData(),
                errors=[str(e), response.suggested_action]
            )

        warnings = []
        if data.is_empty():
            warnings.append("Document produced no nodes")

        return RenderResult(success=True, data=data, warnings=warnings or None)

    @staticmethod
    def resolve_kind(kind: Union[InputKind, str]) -> InputKind:
        """
        Normalize an input kind flag.

        Raises:
            ProcessingError: If the kind is not json or xml
        """
        if isinstance(kind, InputKind):
            return kind
        try:
            return InputKind(str(kind).strip().lower())
        except ValueError:
            raise ProcessingError(
                f"Unsupported input kind: {kind}",
                ErrorType.STRUCTURE,
                context={"kind": kind}
            )


def process_data(text: str, kind: Union[InputKind, str] = InputKind.JSON,
                 config: Optional[DiagramConfig] = None) -> DiagramData:
    """Convert a JSON or XML document into diagram data."""
    return DiagramVisualizer(config=config, enable_profiling=False).process_data(text, kind)
