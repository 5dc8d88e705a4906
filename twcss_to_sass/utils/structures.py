from typing import NamedTuple, Union

__all__ = [
    "ElementNode", "TextNode", "CommentNode", "ParseNode",
    "FilterAttributes", "NormalizedElement", "StyleBlock", "NormalizedNode",
]


# --- Parse tree (as read from the HTML) ---

class TextNode(NamedTuple):
    """A run of character data."""
    content: str


class CommentNode(NamedTuple):
    """An HTML comment, without the <!-- --> delimiters."""
    content: str


class ElementNode(NamedTuple):
    """An HTML element with its raw attributes and children in document order."""
    tag_name: str
    attributes: tuple[tuple[str, str], ...] = ()
    children: tuple["ParseNode", ...] = ()

    def get(self, key: str) -> str | None:
        """Returns the first value of attribute `key`, if present."""
        return next((value for k, value in self.attributes if k == key), None)


ParseNode = Union[ElementNode, TextNode, CommentNode]


# --- Normalized tree (what the SASS builder consumes) ---

class FilterAttributes(NamedTuple):
    """Cleaned `class` and inline `style` values of an element."""
    classes: str | None = None
    style: str | None = None


class StyleBlock(NamedTuple):
    """Contents of a <style> element, emitted verbatim as a region."""
    content: str
    label: str = "STYLE"


class NormalizedElement(NamedTuple):
    """
    A retained element and the metadata collected for it during normalization.
    The wrapped parse node is never modified.
    """
    node: ElementNode
    comment: str = ''
    order: int = 1
    """Nesting depth at which the element was visited (top level = 1)."""
    filter_attributes: FilterAttributes | None = None
    children: tuple["NormalizedNode", ...] | None = None

    @property
    def tag_name(self) -> str:
        return self.node.tag_name


NormalizedNode = Union[NormalizedElement, StyleBlock]
