"""
HTML serialization for the DOM.
Walks the Tree arena with an html5lib tree walker and renders it with the
html5lib serializer.
"""

from typing import Any, Dict, Optional

from html5lib.constants import namespaces, rcdataElements
from html5lib.serializer import HTMLSerializer
from html5lib.treewalkers.base import (
    COMMENT, DOCTYPE, DOCUMENT, ELEMENT, TEXT, NonRecursiveTreeWalker,
)

from .node import Node, NodeType, ParentNode, Tree


class TreeWalker(NonRecursiveTreeWalker):
    """html5lib tree walker over a Tree arena, starting at one node."""

    def __init__(self, tree: Tree, start: int):
        self.nodes = tree
        super().__init__(tree.node(start))

    def getNodeDetails(self, node: Node):
        if node.node_type == NodeType.DOCUMENT_NODE:
            return (DOCUMENT,)
        elif node.node_type == NodeType.DOCUMENT_TYPE_NODE:
            return DOCTYPE, node.name, node.public_id, node.system_id
        elif node.node_type == NodeType.TEXT_NODE:
            return TEXT, node.data
        elif node.node_type == NodeType.COMMENT_NODE:
            return COMMENT, node.data
        else:
            attributes = {(None, name): value for name, value in node.attributes.items()}
            return (ELEMENT, node.namespace or namespaces["html"], node.tag_name,
                    attributes, bool(node.children))

    def getFirstChild(self, node: Node) -> Optional[Node]:
        if isinstance(node, ParentNode) and node.children:
            return self.nodes.node(node.children[0])
        return None

    def getNextSibling(self, node: Node) -> Optional[Node]:
        if node.parent is None:
            return None
        siblings = self.nodes.node(node.parent).children
        position = siblings.index(node.index) + 1
        if position < len(siblings):
            return self.nodes.node(siblings[position])
        return None

    def getParentNode(self, node: Node) -> Optional[Node]:
        if node.parent is None:
            return None
        return self.nodes.node(node.parent)


def serialize(tree: Tree, index: int, options: Optional[Dict[str, Any]] = None) -> str:
    """
    Serialize one node (and its subtree) to markup.

    Args:
        tree: The arena holding the node
        index: The node to serialize
        options: Keyword arguments for ``html5lib.serializer.HTMLSerializer``

    Returns:
        The serialized markup
    """
    serializer = HTMLSerializer(**(options or {}))
    return serializer.render(TreeWalker(tree, index))


def serialize_children(tree: Tree, index: int, options: Optional[Dict[str, Any]] = None) -> str:
    """
    Concatenate the serialized form of each direct child of a node.

    Text inside raw text elements (script, style, ...) is emitted as is,
    matching what the serializer writes between the element's own tags.
    """
    node = tree.node(index)
    raw_text = (node.node_type == NodeType.ELEMENT_NODE
                and node.tag_name in rcdataElements
                and not (options or {}).get('escape_rcdata', False))

    parts = []
    for child in tree.children_of(index):
        child_node = tree.node(child)
        if raw_text and child_node.node_type == NodeType.TEXT_NODE:
            parts.append(child_node.data)
        else:
            parts.append(serialize(tree, child, options))
    return "".join(parts)
