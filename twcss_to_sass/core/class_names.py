"""
Derives SCSS selector names for normalized elements.
"""
from slugify import slugify

from ..utils.config import ConversionConfig, DEFAULT_CONFIG
from ..utils.structures import NormalizedElement

# Tags too generic to be used as a bare type selector
GENERIC_CONTAINER_TAGS = frozenset({'div'})


def comment_header(node: NormalizedElement) -> str:
    """`/* <label> -> <order> */`, the label falling back to the tag name."""
    return f"/* {node.comment or node.tag_name} -> {node.order} */"


def comment_to_class_name(comment: str, config: ConversionConfig) -> str:
    """Slugifies a comment label into a class name with prefix and suffix."""
    options = config.class_name_options
    name = options.prefix + slugify(
        comment,
        lowercase=options.lowercase,
        separator=options.replace_with,
    )
    # the suffix is kept whole, only prefix + slug are truncated
    name = name[:config.max_class_name_length]
    return name + options.suffix


def synthesize_name(node: NormalizedElement, depth: int,
                    config: ConversionConfig | None = None) -> str:
    """
    Returns the selector for `node`, preceded by a comment header when
    `print_comments` is on.

    Precedence:
        1. `.<slug>` from the comment label (use_comment_blocks_as_class_name)
        2. the bare tag name, for tags that are not generic containers
        3. `.class-<tag>-<depth>`
    """
    config = config or DEFAULT_CONFIG
    header = comment_header(node) if config.print_comments else ''

    if node.comment and config.use_comment_blocks_as_class_name:
        selector = '.' + comment_to_class_name(node.comment, config)
    elif node.tag_name not in GENERIC_CONTAINER_TAGS:
        selector = node.tag_name
    else:
        selector = f".class-{node.tag_name}-{depth}"

    return header + selector
