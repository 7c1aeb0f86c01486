"""
Style engine facade.

This module provides the StyleEngine class that ties markup parsing,
stylesheet parsing and cascade resolution together for the layout stage.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from style_engine.css import StyleSheet
from style_engine.dom import Node
from style_engine.errors import ParseError
from style_engine.parser import CSSParser, HTMLParser
from style_engine.style import StyledNode, style_tree
from style_engine.utils.config import Config
from style_engine.utils.logging import PerformanceLogger, log_exception, setup_logging

logger = logging.getLogger(__name__)


class StyleEngine:
    """
    Turns markup and stylesheet text into a styled tree.

    Source text must already be loaded; the engine performs no I/O.
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize the style engine.

        Args:
            config: Engine configuration; defaults are used when omitted
        """
        self.config = config or Config()

        setup_logging(log_file=self.config.get('logging.file'),
                      console_level=self.config.get('logging.console_level', 'WARNING'),
                      file_level=self.config.get('logging.file_level', 'DEBUG'))

        self.html_parser = HTMLParser(self.config.get('markup.implicit_root_tag', 'html'))
        self.css_parser = CSSParser()

        self.workers = int(self.config.get('cascade.workers', 0) or 0)
        if self.workers < 0:
            raise ValueError(f"cascade.workers must not be negative, got {self.workers}")

        self.performance: Optional[PerformanceLogger] = None
        if self.config.get('profiling.enabled', False):
            self.performance = PerformanceLogger(logger, "StyleEngine")
            if not logger.isEnabledFor(logging.DEBUG):
                logger.warning("Profiling is enabled but DEBUG records are filtered out; "
                               "set logging.console_level to DEBUG or configure logging.file")

        logger.info(f"Style engine initialized (workers: {self.workers})")

    def parse_markup(self, source: str) -> Node:
        """
        Parse markup text.

        Raises:
            ParseError: If the markup is malformed
        """
        return self._run("parse_markup", lambda: self.html_parser.parse(source),
                         "Error parsing markup")

    def parse_stylesheet(self, source: str) -> StyleSheet:
        """
        Parse stylesheet text.

        Raises:
            ParseError: If the stylesheet is malformed
        """
        return self._run("parse_stylesheet", lambda: self.css_parser.parse(source),
                         "Error parsing stylesheet")

    def style_tree(self, root: Node, stylesheet: StyleSheet) -> StyledNode:
        """
        Resolve the cascade for ``root``.

        With ``cascade.workers`` above zero the root's child subtrees are
        resolved on a thread pool of that size.

        Raises:
            ParseError: If an inline ``style`` attribute is malformed
        """
        def resolve() -> StyledNode:
            if self.workers == 0:
                return style_tree(root, stylesheet)
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                return style_tree(root, stylesheet, executor)

        return self._run("style_tree", resolve, "Error resolving styles")

    def style(self, markup: str, stylesheet: str) -> StyledNode:
        """
        Parse both sources and resolve the cascade.

        Args:
            markup: Markup text
            stylesheet: Stylesheet text

        Returns:
            StyledNode: Root of the styled tree
        """
        root = self.parse_markup(markup)
        sheet = self.parse_stylesheet(stylesheet)
        return self.style_tree(root, sheet)

    def _run(self, name: str, operation, error_message: str):
        if self.performance:
            self.performance.start(name)
        try:
            return operation()
        except ParseError as e:
            log_exception(logger, e, error_message)
            raise
        finally:
            if self.performance:
                self.performance.end(name)
