"""
Contains the logic for reading HTML markup into a tree of parse nodes.
"""
import logging
import re

import lxml.html
from lxml import etree

from ..utils.logger import LOGGER_NAME
from ..utils.structures import CommentNode, ElementNode, ParseNode, TextNode


log = logging.getLogger(LOGGER_NAME)

# Documents (as opposed to fragments) are parsed whole, <html> element included
FULL_DOCUMENT_RE = re.compile(r'^\s*(<!doctype[^>]*>\s*)?<html[\s>]', re.IGNORECASE)


def parse_html(html: str | None) -> list[ParseNode]:
    """
    Parses an HTML fragment or document into parse nodes, keeping
    top level text, comments and <style> elements in document order.
    """
    if not html or not html.strip():
        return []

    if FULL_DOCUMENT_RE.match(html):
        document = lxml.html.document_fromstring(html)
        # <html> stays a structural node so its and <body>'s classes are kept
        root = _convert_node(document)
        nodes = [root] if root is not None else []
    else:
        container = lxml.html.fragment_fromstring(html, create_parent=True)
        nodes = _convert_children(container)

    log.debug(f"Parsed HTML into {len(nodes)} top level nodes.")
    return nodes


def _convert_children(element: etree._Element) -> list[ParseNode]:
    """Converts the content of an lxml element: text, children and their tails."""
    nodes: list[ParseNode] = []
    if element.text:
        nodes.append(TextNode(element.text))

    for child in element:
        node = _convert_node(child)
        if node is not None:
            nodes.append(node)
        if child.tail:
            nodes.append(TextNode(child.tail))
    return nodes


def _convert_node(element: etree._Element) -> ParseNode | None:
    if element.tag is etree.Comment:
        return CommentNode(element.text or '')

    # processing instructions and entities carry nothing we can style
    if not isinstance(element.tag, str):
        return None

    attributes = tuple((str(k), str(v)) for k, v in element.attrib.items())
    return ElementNode(
        tag_name=etree.QName(element).localname.lower(),
        attributes=attributes,
        children=tuple(_convert_children(element)),
    )
