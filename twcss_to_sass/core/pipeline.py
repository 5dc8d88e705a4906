"""
The main conversion pipeline (Facade).

This module orchestrates the entire conversion process, using the other
core modules to perform specific tasks.
"""
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .formatter import format_sass
from .html_parser import parse_html
from .normalizer import normalize
from .sass_builder import build_tree
from ..utils.config import ConversionConfig, resolve_config
from ..utils.logger import LOGGER_NAME
from ..utils.text_utils import clean_text


log = logging.getLogger(LOGGER_NAME)


class ConversionPipeline:
    """
    A facade that simplifies the conversion process.

    The UI layer (CLI or library callers) interacts with this class to run
    a conversion. It coordinates the parser, normalizer, builder and formatter.
    """

    def __init__(self, config: ConversionConfig):
        """Initializes the pipeline with a specific configuration."""
        self.config = config


    def convert(self, html: str | None) -> str | None:
        """
        Converts HTML markup to SCSS.
        Returns None for empty input or when no element carries styling.
        """
        # 1. Collapse whitespace; nothing left means nothing to do
        html = clean_text(html)
        if html is None:
            return None

        # 2. Parse and keep only the nodes that carry styling
        nodes = parse_html(html)
        normalized = normalize(nodes)
        if normalized is None:
            log.debug("No class, style or <style> content found.")
            return None

        # 3. Render nested SCSS
        sass = build_tree(normalized, self.config)

        # 4. Pretty print
        if self.config.format_output:
            return format_sass(sass, self.config.formatter_options)
        return sass


    def convert_file(self, source_path: Path, output_path: Path) -> Path | None:
        """
        Converts an HTML file and writes the result to `output_path`.
        Returns the written path, or None if the file produced no stylesheet.
        """
        html = source_path.read_text(encoding="utf-8")
        result = self.convert(html)
        if result is None:
            log.warning(f"No stylesheet produced for '{source_path.name}'.")
            return None

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(result, encoding="utf-8")
        log.info(f"Wrote '{output_path}'.")
        return output_path


def convert(html: str | None,
            options: ConversionConfig | Mapping[str, Any] | None = None) -> str | None:
    """
    Converts HTML to SCSS.

    Args:
        html: HTML markup annotated with utility classes and inline styles.
        options: A ConversionConfig, or a mapping of overrides merged over the
            defaults for this call only.
    """
    return ConversionPipeline(resolve_config(options)).convert(html)
