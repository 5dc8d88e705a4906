"""
Filters a parse tree down to the nodes that matter for the stylesheet.

Elements without a `class` or `style` attribute and without retained
descendants are dropped; text is dropped; comments are consumed as labels
for the elements that follow them; <style> elements become StyleBlocks.
"""
import logging
from collections.abc import Sequence

from ..utils.logger import LOGGER_NAME
from ..utils.structures import (
    CommentNode, ElementNode, FilterAttributes, NormalizedElement,
    NormalizedNode, ParseNode, StyleBlock, TextNode,
)
from ..utils.text_utils import clean_text


log = logging.getLogger(LOGGER_NAME)

STYLE_TAG = 'style'
# Number of preceding candidates searched for label comments
COMMENT_LOOKBEHIND = 2


def extract_style_contents(style_nodes: Sequence[ElementNode]) -> list[StyleBlock]:
    """
    Wraps the text of each <style> element into a StyleBlock.
    All text children are joined in document order, without a separator.
    The content is not parsed or validated.
    """
    blocks = []
    for element in style_nodes:
        content = ''.join(
            child.content for child in element.children if isinstance(child, TextNode)
        )
        blocks.append(StyleBlock(content=content))
    return blocks


def get_filter_attributes(element: ElementNode) -> FilterAttributes | None:
    """Returns the cleaned `class` and `style` values, or None if neither is set."""
    classes = clean_text(element.get('class'))
    style = clean_text(element.get('style'))
    if classes is None and style is None:
        return None
    return FilterAttributes(classes=classes, style=style)


def get_comment_label(candidates: Sequence[ParseNode], index: int) -> str:
    """
    Builds the label for candidates[index] from the comments among the
    two candidates right before it.

    Predecessors are collected nearest first and the list is reversed
    before joining, so with two comments the farther one comes first:
    `<!-- A --><!-- B --><div>` gives "A, B".
    """
    previous = [
        candidates[i]
        for i in range(index - 1, index - 1 - COMMENT_LOOKBEHIND, -1)
        if i >= 0
    ]
    texts = [
        clean_text(node.content, is_comment=True)
        for node in previous
        if isinstance(node, CommentNode)
    ]
    texts = [text for text in texts if text is not None]
    texts.reverse()
    return ', '.join(texts)


def _is_style_element(node: ParseNode) -> bool:
    return isinstance(node, ElementNode) and node.tag_name == STYLE_TAG


def normalize(nodes: Sequence[ParseNode] | None,
              depth: int = 1) -> tuple[NormalizedNode, ...] | None:
    """
    Normalizes one level of the parse tree, recursing into children.

    Returns the StyleBlocks of this level followed by the retained elements,
    or None when nothing at this level (or below it) is worth keeping.
    StyleBlocks found below this level are hoisted into this level's list
    in document order, so only the top level ever holds them.
    """
    if not nodes:
        return None

    candidates = [
        node for node in nodes
        if isinstance(node, (ElementNode, CommentNode)) and not _is_style_element(node)
    ]

    style_blocks: list[StyleBlock] = []
    elements: list[NormalizedElement] = []
    index = -1
    for node in nodes:
        if _is_style_element(node):
            style_blocks.extend(extract_style_contents([node]))
            continue
        if not isinstance(node, (ElementNode, CommentNode)):
            continue
        index += 1
        if not isinstance(node, ElementNode):
            continue    # comments only label their followers

        comment = get_comment_label(candidates, index)

        children = None
        normalized_children = normalize(node.children, depth + 1)
        if normalized_children:
            style_blocks.extend(
                child for child in normalized_children if isinstance(child, StyleBlock)
            )
            children = tuple(
                child for child in normalized_children
                if isinstance(child, NormalizedElement)
            ) or None

        filter_attributes = get_filter_attributes(node)

        if filter_attributes is not None or children is not None:
            elements.append(NormalizedElement(
                node=node,
                comment=comment,
                order=depth,
                filter_attributes=filter_attributes,
                children=children,
            ))

    if style_blocks:
        log.debug(f"Collected {len(style_blocks)} <style> block(s) at depth {depth}.")
    if not style_blocks and not elements:
        return None
    return (*style_blocks, *elements)
