"""Element tree adapter.

The decoder only needs three things from a node: its name, its text and its
ordered children. This module provides them on top of
``xml.etree.ElementTree``.
"""

import xml.etree.ElementTree as ET
from typing import List

from ..errors import AnnotationSyntaxError

Node = ET.Element


def parse_xml_text(content: str | bytes) -> Node:
    """Parse annotation text into an element tree.

    Args:
        content: XML document as text or bytes.

    Returns:
        Root element.

    Raises:
        AnnotationSyntaxError: If the text is not well-formed XML.
    """
    try:
        return ET.fromstring(content)
    except ET.ParseError as e:
        raise AnnotationSyntaxError(str(e), position=getattr(e, "position", None)) from e


def node_name(node: Node) -> str:
    """Local tag name, without any ``{namespace}`` prefix."""
    tag = node.tag
    if isinstance(tag, str) and tag.startswith("{"):
        return tag.rsplit("}", 1)[1]
    return str(tag)


def node_text(node: Node) -> str:
    """Text directly inside the node (empty string if none)."""
    return node.text or ""


def node_children(node: Node) -> List[Node]:
    """Child elements in document order."""
    return list(node)
