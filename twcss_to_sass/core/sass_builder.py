"""
Renders a normalized tree into nested SCSS text.

The output is unformatted: blocks and declarations are concatenated
without whitespace, the formatter takes care of layout.
"""
import logging
from collections.abc import Sequence

from .class_names import synthesize_name
from ..utils.config import ConversionConfig, DEFAULT_CONFIG
from ..utils.logger import LOGGER_NAME
from ..utils.structures import NormalizedElement, NormalizedNode, StyleBlock
from ..utils.text_utils import add_missing_suffix


log = logging.getLogger(LOGGER_NAME)


def render_style_region(block: StyleBlock, number: int) -> str:
    """Wraps <style> contents into `#region` markers, left unnested."""
    return (
        f"// #region {block.label} #{number}\n"
        f"\n{block.content}\n"
        "// #endregion\n\n"
    )


def render_declarations(node: NormalizedElement) -> str:
    """`@apply <classes>;` followed by the inline style, if the element has them."""
    attributes = node.filter_attributes
    if attributes is None:
        return ''

    body = ''
    if attributes.classes:
        body += f"@apply {attributes.classes};"
    if attributes.style:
        body += f"\n{add_missing_suffix(attributes.style, ';')}\n"
    return body


def build_tree(nodes: Sequence[NormalizedNode] | NormalizedElement | None,
               config: ConversionConfig | None = None,
               depth: int = 0) -> str:
    """
    Builds SCSS for a list of sibling nodes, or for the children of a
    single element.

    `depth` only feeds the `.class-<tag>-<depth>` fallback names. It grows by
    one for every sibling that has children, and the grown value is handed
    down to that sibling's children, so it is not the true tree depth.
    Selector nesting follows the recursion itself.
    """
    if not nodes:
        return ''
    config = config or DEFAULT_CONFIG

    if isinstance(nodes, NormalizedElement):
        nodes = nodes.children or ()

    style_count = 0
    parts = []
    for node in nodes:
        if isinstance(node, StyleBlock):
            style_count += 1
            parts.append(render_style_region(node, style_count))
            continue

        if node.filter_attributes is None and node.children is None:
            continue

        sub_tree = ''
        if node.children:
            depth += 1
            sub_tree = build_tree(node, config, depth)

        body = render_declarations(node) + sub_tree
        if not body:
            log.debug(f"Skipping <{node.tag_name}> with an empty body.")
            continue

        parts.append(f"{synthesize_name(node, depth, config)}{{{body}}}")

    return ''.join(parts)
