"""
HTML parsing for the DOM.
This module runs html5lib over markup and copies the resulting nodes into a
Tree arena, for whole documents and for fragments.
"""

import logging
from typing import List, Union

import html5lib
from html5lib.constants import namespaces

from .node import NodeType, Tree

logger = logging.getLogger(__name__)

Markup = Union[str, bytes]


class HtmlParser:
    """
    HTML5 parser backed by html5lib.

    Recoverable parse errors are collected in ``errors``; in strict mode
    html5lib raises ``html5lib.html5parser.ParseError`` instead.
    """

    def __init__(self, strict: bool = False):
        """
        Initialize the parser.

        Args:
            strict: Raise on the first parse error instead of recovering
        """
        self.strict = strict
        self.errors: List[str] = []

    def _create_parser(self) -> html5lib.HTMLParser:
        return html5lib.HTMLParser(
            tree=html5lib.treebuilders.getTreeBuilder("dom"),
            strict=self.strict,
            namespaceHTMLElements=False,
        )

    def parse(self, markup: Markup, tree: Tree) -> None:
        """
        Parse a complete document into the tree's document node.

        Args:
            markup: The HTML content to parse
            tree: The arena to fill
        """
        logger.debug(f"Parsing HTML content (first 100 chars): {markup[:100]!r}")

        parser = self._create_parser()
        parsed = parser.parse(markup)
        self._collect_errors(parser)

        for child in parsed.childNodes:
            self._convert_node(child, tree, tree.root)

        logger.debug(f"Parsed document into {len(tree)} nodes "
                     f"with {len(parser.errors)} recovered errors")

    def parse_fragment(self, markup: Markup, tree: Tree, container: str = "div") -> List[int]:
        """
        Parse a fragment as if it were the content of ``container``.

        Args:
            markup: The HTML fragment
            tree: The arena receiving the new nodes
            container: Tag name of the element the fragment will live in

        Returns:
            Indices of the fragment's top-level nodes, detached, in order
        """
        parser = self._create_parser()
        fragment = parser.parseFragment(markup, container=container)
        self._collect_errors(parser)

        indices = []
        for child in fragment.childNodes:
            index = self._convert_node(child, tree, None)
            if index is not None:
                indices.append(index)

        logger.debug(f"Parsed fragment in <{container}> into {len(indices)} top-level nodes")
        return indices

    def _collect_errors(self, parser: html5lib.HTMLParser) -> None:
        for position, code, _datavars in parser.errors:
            line, column = position
            self.errors.append(f"{line}:{column}: {code}")

    def _convert_node(self, node, tree: Tree, parent):
        """
        Recursively copy a parsed html5lib (minidom) node into the arena.

        Args:
            node: The parsed node
            tree: The arena
            parent: Index of the arena parent, or None to leave it detached

        Returns:
            The new node index, or None for node kinds that are not kept
        """
        node_type = node.nodeType

        if node_type == NodeType.ELEMENT_NODE:
            namespace = node.namespaceURI or None
            if namespace == namespaces["html"]:
                namespace = None
            attributes = {name: value for name, value in node.attributes.items()}
            index = tree.create_element(node.tagName, namespace, attributes)
            for child in node.childNodes:
                self._convert_node(child, tree, index)
        elif node_type == NodeType.TEXT_NODE:
            index = tree.create_text(node.data)
        elif node_type == NodeType.COMMENT_NODE:
            index = tree.create_comment(node.data)
        elif node_type == NodeType.DOCUMENT_TYPE_NODE:
            index = tree.create_doctype(node.name, node.publicId, node.systemId)
        else:
            logger.warning(f"Skipping unsupported parsed node type: {node_type}")
            return None

        if parent is not None:
            tree.append_child(parent, index)
        return index
