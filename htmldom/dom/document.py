"""
Document implementation for the DOM.
This module implements HtmlDocument, the facade that owns a parsed tree and
hands out HtmlElement handles for lookups and newly created elements.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from html5lib.html5parser import ParseError

from ..utils.config import Config
from ..utils.logging import log_exception
from .element import HtmlElement
from .exceptions import InvalidDocument
from .node import Tree
from .parser import HtmlParser
from .selector import PathQuery
from .selector_engine import SelectorEngine
from .serializer import serialize

logger = logging.getLogger(__name__)


class HtmlDocument:
    """
    A parsed HTML document.

    Lookups never raise for missing elements: single-result lookups return
    None and plural lookups return an empty list. Only selector translation
    errors (UnsupportedSelector) escape the query methods.
    """

    def __init__(self, html_content: Union[str, bytes], config: Optional[Config] = None):
        """
        Parse HTML content into a new document.

        Args:
            html_content: The HTML content to parse
            config: Parser and serializer settings (defaults when omitted)

        Raises:
            InvalidDocument: If the content is empty or cannot be parsed
        """
        self.config = config or Config()
        self.selector_engine = SelectorEngine()
        self.serializer_options: Dict[str, Any] = self.config.serializer_options()
        self._parser = HtmlParser(strict=bool(self.config.get('parser.strict', False)))

        self.tree: Tree = self._parse(html_content)

    def _parse(self, html_content: Union[str, bytes]) -> Tree:
        if html_content is None:
            raise InvalidDocument("Cannot parse None HTML content")
        if not isinstance(html_content, (str, bytes)):
            raise InvalidDocument(
                f"HTML content must be str or bytes, not {type(html_content).__name__}")
        if not html_content.strip():
            raise InvalidDocument("HTML content must not be empty")

        tree = Tree()
        try:
            self._parser.parse(html_content, tree)
        except ParseError as e:
            log_exception(logger, e, "Error in HTML parser")
            raise InvalidDocument(f"Error parsing HTML: {e}") from e

        if tree.document_element is None:
            raise InvalidDocument("No document element found in parsed HTML")

        logger.debug(f"HTML document initialized with {len(tree)} nodes")
        return tree

    def _wrap(self, index: Optional[int]) -> Optional[HtmlElement]:
        return None if index is None else HtmlElement(self, index)

    def _child_of_root(self, tag_name: str) -> Optional[HtmlElement]:
        root = self.tree.document_element
        if root is None:
            return None
        for child in self.tree.element_children(root):
            if self.tree.node(child).tag_name == tag_name:
                return self._wrap(child)
        return None

    @property
    def document_element(self) -> Optional[HtmlElement]:
        """The root element (normally ``html``)."""
        return self._wrap(self.tree.document_element)

    @property
    def head(self) -> Optional[HtmlElement]:
        return self._child_of_root('head')

    @property
    def body(self) -> Optional[HtmlElement]:
        return self._child_of_root('body')

    def parse_fragment(self, html: Union[str, bytes], container: str = "div") -> List[int]:
        """
        Parse an HTML fragment into new detached nodes of this document.

        Args:
            html: The HTML fragment
            container: Tag name of the element the nodes are meant for

        Returns:
            Indices of the top-level nodes in order
        """
        return self._parser.parse_fragment(html, self.tree, container)

    def create_element(self, tag_name: str, text: Optional[str] = None) -> HtmlElement:
        """
        Create a new detached element.

        Args:
            tag_name: The tag name of the element
            text: Optional text content for the element

        Returns:
            The new element
        """
        element = HtmlElement(self, self.tree.create_element(tag_name))
        if text:
            element.set_text_content(text)
        return element

    def get_element_by_id(self, element_id: str) -> Optional[HtmlElement]:
        """
        Get an element by its ID.

        Returns:
            The first element with the ID in document order, or None
        """
        if not element_id:
            return None
        return self._wrap(self.selector_engine.select_first(
            PathQuery.by_id(element_id), self.tree, self.tree.root))

    def get_elements_by_class_name(self, class_name: str) -> List[HtmlElement]:
        """
        Get all elements carrying every class in ``class_name``.

        Args:
            class_name: One class name, or several separated by whitespace
        """
        return self.query_selector_all(PathQuery.by_class(class_name))

    def get_elements_by_tag_name(self, tag_name: str) -> List[HtmlElement]:
        """Get all elements with the given tag name ('*' for all elements)."""
        return self.query_selector_all(PathQuery.by_tag(tag_name))

    def query_selector(self, selector: str) -> Optional[HtmlElement]:
        """
        Find the first element matching the specified selector.

        Raises:
            UnsupportedSelector: If the selector cannot be translated
        """
        return self._wrap(self.selector_engine.select_first(selector, self.tree, self.tree.root))

    def query_selector_all(self, selector: str) -> List[HtmlElement]:
        """
        Find all elements matching the specified selector.

        Raises:
            UnsupportedSelector: If the selector cannot be translated
        """
        return [self._wrap(index)
                for index in self.selector_engine.select(selector, self.tree, self.tree.root)]

    def serialize(self) -> str:
        """Serialize the whole document, doctype included."""
        return serialize(self.tree, self.tree.root, self.serializer_options)

    def get_errors(self) -> List[str]:
        """
        Get the recoverable errors html5lib reported while parsing.

        Returns:
            Messages of the form ``line:column: error-code``
        """
        return list(self._parser.errors)

    # JavaScript-style aliases
    getElementById = get_element_by_id
    getElementsByClassName = get_elements_by_class_name
    getElementsByTagName = get_elements_by_tag_name
    querySelector = query_selector
    querySelectorAll = query_selector_all
    createElement = create_element


def create_document(html_content: Union[str, bytes], config: Optional[Config] = None) -> HtmlDocument:
    """
    Parse HTML content into an HtmlDocument.

    Raises:
        InvalidDocument: If the content is empty or cannot be parsed
    """
    return HtmlDocument(html_content, config)


createDocument = create_document
