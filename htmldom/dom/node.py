"""
Node storage for the DOM.
This module implements the document tree as an arena of nodes addressed by
stable integer indices. Each entry records its own structural parent, which is
the only place the parent relationship is stored.
"""

import logging
from enum import IntEnum
from typing import Dict, Iterator, List, Optional

from .exceptions import HierarchyRequestError

logger = logging.getLogger(__name__)


class NodeType(IntEnum):
    """Node types as defined in the DOM specification."""
    ELEMENT_NODE = 1
    TEXT_NODE = 3
    COMMENT_NODE = 8
    DOCUMENT_NODE = 9
    DOCUMENT_TYPE_NODE = 10


class Node:
    """
    Base arena entry.

    Only the tree assigns ``parent``; handles never keep their own copy.
    """

    node_type: NodeType

    def __init__(self, index: int):
        self.index = index
        self.parent: Optional[int] = None

    def __repr__(self):
        return f"<{type(self).__name__} #{self.index} parent={self.parent}>"


class ParentNode(Node):
    """Arena entry that can hold child nodes."""

    def __init__(self, index: int):
        super().__init__(index)
        self.children: List[int] = []


class DocumentNode(ParentNode):
    node_type = NodeType.DOCUMENT_NODE


class Element(ParentNode):
    """Element entry: tag name, namespace and ordered attributes."""

    node_type = NodeType.ELEMENT_NODE

    def __init__(self,
                 index: int,
                 tag_name: str,
                 namespace: Optional[str] = None,
                 attributes: Optional[Dict[str, str]] = None):
        super().__init__(index)
        # Foreign (SVG/MathML) tag names keep their case
        self.tag_name = tag_name.lower() if namespace is None else tag_name
        self.namespace = namespace
        self.attributes: Dict[str, str] = dict(attributes or {})

    def __repr__(self):
        return f"<Element {self.tag_name} #{self.index} parent={self.parent}>"


class Text(Node):
    node_type = NodeType.TEXT_NODE

    def __init__(self, index: int, data: str):
        super().__init__(index)
        self.data = data or ""


class Comment(Node):
    node_type = NodeType.COMMENT_NODE

    def __init__(self, index: int, data: str):
        super().__init__(index)
        self.data = data or ""


class DocumentType(Node):
    node_type = NodeType.DOCUMENT_TYPE_NODE

    def __init__(self, index: int, name: str,
                 public_id: Optional[str] = None,
                 system_id: Optional[str] = None):
        super().__init__(index)
        self.name = name
        self.public_id = public_id
        self.system_id = system_id


class Tree:
    """
    Arena holding every node of one document.

    Index 0 is the document node. Indices are never reused: a detached node
    keeps its index and can be reinserted later.
    """

    def __init__(self):
        self._nodes: List[Node] = []
        self.root = self._add(DocumentNode(len(self._nodes)))

    def __len__(self) -> int:
        return len(self._nodes)

    def _add(self, node: Node) -> int:
        self._nodes.append(node)
        return node.index

    # Allocation

    def create_element(self, tag_name: str, namespace: Optional[str] = None,
                       attributes: Optional[Dict[str, str]] = None) -> int:
        return self._add(Element(len(self._nodes), tag_name, namespace, attributes))

    def create_text(self, data: str) -> int:
        return self._add(Text(len(self._nodes), data))

    def create_comment(self, data: str) -> int:
        return self._add(Comment(len(self._nodes), data))

    def create_doctype(self, name: str, public_id: Optional[str] = None,
                       system_id: Optional[str] = None) -> int:
        return self._add(DocumentType(len(self._nodes), name, public_id, system_id))

    # Access

    def node(self, index: int) -> Node:
        """
        Get the arena entry for an index.

        Raises:
            KeyError: If the index was never allocated in this tree
        """
        if not isinstance(index, int) or index < 0 or index >= len(self._nodes):
            raise KeyError(f"No node with index {index!r}")
        return self._nodes[index]

    def is_element(self, index: int) -> bool:
        return self.node(index).node_type == NodeType.ELEMENT_NODE

    def parent_of(self, index: int) -> Optional[int]:
        return self.node(index).parent

    def children_of(self, index: int) -> List[int]:
        node = self.node(index)
        if isinstance(node, ParentNode):
            return list(node.children)
        return []

    def element_children(self, index: int) -> List[int]:
        return [child for child in self.children_of(index) if self.is_element(child)]

    @property
    def document_element(self) -> Optional[int]:
        """Index of the root element (normally ``html``), if any."""
        for child in self._nodes[self.root].children:
            if self.is_element(child):
                return child
        return None

    def contains(self, ancestor: int, index: int) -> bool:
        """Check whether ``ancestor`` is ``index`` or one of its ancestors."""
        current: Optional[int] = index
        while current is not None:
            if current == ancestor:
                return True
            current = self._nodes[current].parent
        return False

    def iter_descendants(self, index: int) -> Iterator[int]:
        """
        Iterate over the descendants of a node in document order.

        The start node itself is not yielded.
        """
        stack = list(reversed(self.children_of(index)))
        while stack:
            current = stack.pop()
            yield current
            node = self._nodes[current]
            if isinstance(node, ParentNode):
                stack.extend(reversed(node.children))

    def text_content(self, index: int) -> str:
        node = self.node(index)
        if isinstance(node, (Text, Comment)):
            return node.data
        return "".join(
            self._nodes[descendant].data
            for descendant in self.iter_descendants(index)
            if self._nodes[descendant].node_type == NodeType.TEXT_NODE
        )

    # Mutation

    def _check_insertion(self, parent: int, child: int) -> ParentNode:
        parent_node = self.node(parent)
        child_node = self.node(child)
        if not isinstance(parent_node, ParentNode):
            raise HierarchyRequestError(
                f"{type(parent_node).__name__} nodes cannot have children")
        if child_node.node_type == NodeType.DOCUMENT_NODE:
            raise HierarchyRequestError("The document node cannot be inserted")
        if self.contains(child, parent):
            raise HierarchyRequestError(
                "The new child is an ancestor of (or the same as) the parent")
        return parent_node

    def append_child(self, parent: int, child: int) -> int:
        """
        Append a node as the last child of ``parent``.

        A node that already has a parent is moved.

        Returns:
            The appended node index
        """
        parent_node = self._check_insertion(parent, child)
        self.detach(child)
        parent_node.children.append(child)
        self._nodes[child].parent = parent
        return child

    def insert_before(self, parent: int, child: int, reference: Optional[int] = None) -> int:
        """
        Insert a node before a reference child of ``parent``.

        Args:
            parent: The parent node index
            child: The node to insert
            reference: A child of ``parent``, or None to append

        Returns:
            The inserted node index
        """
        if reference is None:
            return self.append_child(parent, child)

        parent_node = self._check_insertion(parent, child)
        if self.node(reference).parent != parent:
            raise HierarchyRequestError(
                f"Node #{reference} is not a child of node #{parent}")
        if reference == child:
            return child

        self.detach(child)
        position = parent_node.children.index(reference)
        parent_node.children.insert(position, child)
        self._nodes[child].parent = parent
        return child

    def remove_child(self, parent: int, child: int) -> int:
        """
        Remove a child node from ``parent``.

        Returns:
            The removed node index
        """
        if self.node(child).parent != parent:
            raise HierarchyRequestError(
                f"Node #{child} is not a child of node #{parent}")
        self.detach(child)
        return child

    def detach(self, index: int) -> None:
        """Detach a node from its parent, if it has one."""
        node = self.node(index)
        if node.parent is None:
            return
        self._nodes[node.parent].children.remove(index)
        node.parent = None
