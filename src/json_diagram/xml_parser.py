"""XML parser producing element trees for the XML diagram processor."""

import logging
import re
from typing import Dict, List, Optional

from lxml import etree


class XmlDocumentParser:
    """
    Parser for XML fragments.

    The input is wrapped in a synthetic root element before parsing, so a
    document may carry several top-level elements.
    """

    WRAPPER_TAG = "__root__"
    _DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the XML parser.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, xml_string: str) -> Optional[etree._Element]:
        """
        Parse XML text into the synthetic wrapper element.

        Args:
            xml_string: XML text to parse

        Returns:
            The wrapper element, or None if the text is not well-formed
        """
        try:
            root = self.parse_wrapped(xml_string)
        except (etree.XMLSyntaxError, ValueError) as e:
            self.logger.warning(f"XML parsing failed, returning an empty diagram: {e}")
            return None

        self.logger.info(f"Parsed XML with {len(self.child_elements(root))} top-level elements")
        return root

    @classmethod
    def parse_wrapped(cls, xml_string: str) -> etree._Element:
        """
        Wrap and parse XML text.

        Raises:
            etree.XMLSyntaxError: If the text is not well-formed
        """
        body = cls._DECLARATION.sub("", xml_string.lstrip("\ufeff"), count=1)
        parser = etree.XMLParser(
            resolve_entities=False,
            no_network=True,
            remove_comments=True,
            remove_pis=True,
            huge_tree=True
        )
        return etree.fromstring(f"<{cls.WRAPPER_TAG}>{body}</{cls.WRAPPER_TAG}>", parser)

    @staticmethod
    def child_elements(element: etree._Element) -> List[etree._Element]:
        """Get child elements, skipping entities and other non-element nodes."""
        return [child for child in element if isinstance(child.tag, str)]

    @staticmethod
    def local_name(element: etree._Element) -> str:
        """Get an element's tag without its namespace."""
        return etree.QName(element).localname

    @staticmethod
    def text_of(element: etree._Element) -> str:
        """Get the trimmed concatenated text content of an element."""
        return "".join(element.itertext()).strip()

    @classmethod
    def group_by_tag(cls, elements: List[etree._Element]) -> Dict[str, List[etree._Element]]:
        """Group elements by local tag name, keeping first-seen order."""
        groups: Dict[str, List[etree._Element]] = {}
        for element in elements:
            groups.setdefault(cls.local_name(element), []).append(element)
        return groups
