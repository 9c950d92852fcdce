"""
Element handle implementation for the DOM.
This module implements HtmlElement, a lightweight reference to one element of
an HtmlDocument exposing attribute, class, tree mutation and navigation
operations.
"""

import logging
from typing import Dict, List, Optional, TYPE_CHECKING

from .exceptions import HierarchyRequestError, InvalidPosition
from .node import Element, NodeType
from .selector import PathQuery
from .serializer import serialize, serialize_children

if TYPE_CHECKING:
    from .document import HtmlDocument

logger = logging.getLogger(__name__)

ADJACENT_POSITIONS = ('beforebegin', 'afterbegin', 'beforeend', 'afterend')


class HtmlElement:
    """
    Handle over one element of a document.

    Handles do not own the element and keep no tree state of their own:
    parent, children and siblings are read from the document's tree at call
    time. Two handles over the same element compare equal.
    """

    def __init__(self, document: 'HtmlDocument', index: int):
        """
        Initialize a handle.

        Args:
            document: The document whose tree holds the element
            index: Index of the element in the tree

        Raises:
            TypeError: If the index does not refer to an element
        """
        node = document.tree.node(index)
        if node.node_type != NodeType.ELEMENT_NODE:
            raise TypeError(f"Node #{index} is a {node.node_type.name}, not an element")
        self._document = document
        self._index = index

    @property
    def document(self) -> 'HtmlDocument':
        return self._document

    @property
    def index(self) -> int:
        return self._index

    @property
    def _node(self) -> Element:
        return self._document.tree.node(self._index)

    @property
    def tag_name(self) -> str:
        return self._node.tag_name

    @property
    def id(self) -> str:
        return self.get_attribute('id')

    def __eq__(self, other):
        if not isinstance(other, HtmlElement):
            return NotImplemented
        return self._document is other._document and self._index == other._index

    def __hash__(self):
        return hash((id(self._document), self._index))

    def __repr__(self):
        return f"<HtmlElement {self.tag_name} #{self._index}>"

    def _wrap(self, index: Optional[int]) -> Optional['HtmlElement']:
        return None if index is None else HtmlElement(self._document, index)

    def _require_same_document(self, other: 'HtmlElement') -> None:
        if not isinstance(other, HtmlElement):
            raise TypeError(f"Expected an HtmlElement, got {type(other).__name__}")
        if other._document is not self._document:
            raise HierarchyRequestError("The element belongs to another document")

    # Attributes

    def get_attribute(self, name: str) -> str:
        """
        Get the value of an attribute.

        Returns:
            The attribute value, or an empty string if it is not set
        """
        return self._node.attributes.get(name, "")

    def has_attribute(self, name: str) -> bool:
        return name in self._node.attributes

    def get_attributes(self) -> Dict[str, str]:
        return dict(self._node.attributes)

    def set_attribute(self, name: str, value: str) -> 'HtmlElement':
        self._node.attributes[name] = value
        return self

    def remove_attribute(self, name: str) -> 'HtmlElement':
        self._node.attributes.pop(name, None)
        return self

    # Classes

    def get_class_list(self) -> List[str]:
        """Get the class tokens of this element, in attribute order."""
        return self.get_attribute('class').split()

    def has_class(self, class_name: str) -> bool:
        return class_name in self.get_class_list()

    def add_class(self, class_name: str) -> 'HtmlElement':
        """
        Add a class token unless it is already present as a whole token.

        An empty name is ignored.

        Raises:
            ValueError: If the name contains whitespace
        """
        if not class_name:
            return self
        if any(char.isspace() for char in class_name):
            raise ValueError(f"Class name must not contain whitespace: {class_name!r}")
        tokens = self.get_class_list()
        if class_name not in tokens:
            tokens.append(class_name)
            self.set_attribute('class', " ".join(tokens))
        return self

    def remove_class(self, class_name: str) -> 'HtmlElement':
        """Remove every occurrence of a class token."""
        if not self.has_attribute('class'):
            return self
        tokens = [token for token in self.get_class_list() if token != class_name]
        self.set_attribute('class', " ".join(tokens))
        return self

    def toggle_class(self, class_name: str) -> 'HtmlElement':
        if self.has_class(class_name):
            return self.remove_class(class_name)
        return self.add_class(class_name)

    # Tree mutation

    def append_child(self, child: 'HtmlElement') -> 'HtmlElement':
        """
        Move an element to be the last child of this element.

        Returns:
            This element, for chaining
        """
        self._require_same_document(child)
        self._document.tree.append_child(self._index, child._index)
        logger.debug(f"Appended {child!r} to {self!r}")
        return self

    def insert_before(self, new_node: 'HtmlElement',
                      reference_node: Optional['HtmlElement']) -> 'HtmlElement':
        """
        Insert an element before one of this element's children.

        Args:
            new_node: The element to insert
            reference_node: A child of this element, or None to append

        Returns:
            This element, for chaining

        Raises:
            HierarchyRequestError: If reference_node is not a child of this element
        """
        self._require_same_document(new_node)
        reference = None
        if reference_node is not None:
            self._require_same_document(reference_node)
            reference = reference_node._index
        self._document.tree.insert_before(self._index, new_node._index, reference)
        logger.debug(f"Inserted {new_node!r} into {self!r} before {reference_node!r}")
        return self

    def remove_child(self, child: 'HtmlElement') -> 'HtmlElement':
        """
        Detach one of this element's children.

        Returns:
            The removed child

        Raises:
            HierarchyRequestError: If child is not a child of this element
        """
        self._require_same_document(child)
        self._document.tree.remove_child(self._index, child._index)
        logger.debug(f"Removed {child!r} from {self!r}")
        return child

    def remove(self) -> None:
        """
        Detach this element from its parent.

        Raises:
            HierarchyRequestError: If the element has no parent
        """
        tree = self._document.tree
        parent = tree.parent_of(self._index)
        if parent is None:
            raise HierarchyRequestError(f"{self!r} has no parent to be removed from")
        tree.remove_child(parent, self._index)
        logger.debug(f"Removed {self!r} from node #{parent}")

    def insert_adjacent_html(self, position: str, html: str) -> 'HtmlElement':
        """
        Parse an HTML fragment and insert the result relative to this element.

        Args:
            position: 'beforebegin', 'afterbegin', 'beforeend' or 'afterend'
            html: The markup to parse

        Returns:
            This element, for chaining

        Raises:
            InvalidPosition: For an unknown position
            HierarchyRequestError: For 'beforebegin'/'afterend' without an
                element parent
        """
        where = position.lower() if isinstance(position, str) else position
        if where not in ADJACENT_POSITIONS:
            raise InvalidPosition(position)

        tree = self._document.tree
        if where in ('beforebegin', 'afterend'):
            parent = tree.parent_of(self._index)
            if parent is None or not tree.is_element(parent):
                raise HierarchyRequestError(
                    f"Cannot insert '{where}' {self!r}: it has no parent element")
            container = parent
        else:
            container = self._index

        nodes = self._document.parse_fragment(html, tree.node(container).tag_name)

        if where == 'beforebegin':
            for index in nodes:
                tree.insert_before(container, index, self._index)
        elif where == 'afterbegin':
            children = tree.children_of(self._index)
            first = children[0] if children else None
            for index in nodes:
                tree.insert_before(self._index, index, first)
        elif where == 'beforeend':
            for index in nodes:
                tree.append_child(self._index, index)
        else:
            siblings = tree.children_of(container)
            position_after = siblings.index(self._index) + 1
            following = siblings[position_after] if position_after < len(siblings) else None
            for index in nodes:
                tree.insert_before(container, index, following)

        logger.debug(f"Inserted {len(nodes)} node(s) at '{where}' of {self!r}")
        return self

    # Navigation

    def get_parent(self) -> Optional['HtmlElement']:
        """Get the parent element, or None for detached and root elements."""
        parent = self._document.tree.parent_of(self._index)
        if parent is None or not self._document.tree.is_element(parent):
            return None
        return self._wrap(parent)

    def get_child_nodes(self) -> List['HtmlElement']:
        """Get the child elements in document order."""
        return [self._wrap(index) for index in self._document.tree.element_children(self._index)]

    def get_first_child(self) -> Optional['HtmlElement']:
        children = self._document.tree.element_children(self._index)
        return self._wrap(children[0]) if children else None

    def get_last_child(self) -> Optional['HtmlElement']:
        children = self._document.tree.element_children(self._index)
        return self._wrap(children[-1]) if children else None

    def _sibling(self, step: int) -> Optional['HtmlElement']:
        tree = self._document.tree
        parent = tree.parent_of(self._index)
        if parent is None:
            return None
        siblings = tree.element_children(parent)
        position = siblings.index(self._index) + step
        if 0 <= position < len(siblings):
            return self._wrap(siblings[position])
        return None

    def get_next_sibling(self) -> Optional['HtmlElement']:
        return self._sibling(1)

    def get_previous_sibling(self) -> Optional['HtmlElement']:
        return self._sibling(-1)

    def matches(self, selector: str) -> bool:
        """
        Check if the element matches a CSS selector.

        Raises:
            UnsupportedSelector: If the selector cannot be translated
        """
        return self._document.selector_engine.matches(self._document.tree, self._index, selector)

    def closest(self, selector: str) -> Optional['HtmlElement']:
        """Find the closest ancestor element (or self) that matches a selector."""
        current: Optional[HtmlElement] = self
        while current is not None:
            if current.matches(selector):
                return current
            current = current.get_parent()
        return None

    # Content

    def get_inner_html(self) -> str:
        """Serialize the children of this element, without the element's own tags."""
        return serialize_children(self._document.tree, self._index,
                                  self._document.serializer_options)

    def get_outer_html(self) -> str:
        return serialize(self._document.tree, self._index, self._document.serializer_options)

    def set_inner_html(self, html: str) -> 'HtmlElement':
        """Replace the children of this element with a parsed HTML fragment."""
        tree = self._document.tree
        nodes = self._document.parse_fragment(html, self.tag_name)
        for child in tree.children_of(self._index):
            tree.detach(child)
        for index in nodes:
            tree.append_child(self._index, index)
        return self

    inner_html = property(get_inner_html)

    def get_text_content(self) -> str:
        return self._document.tree.text_content(self._index)

    def set_text_content(self, text: str) -> 'HtmlElement':
        """Replace the children of this element with a single text node."""
        tree = self._document.tree
        for child in tree.children_of(self._index):
            tree.detach(child)
        if text:
            tree.append_child(self._index, tree.create_text(text))
        return self

    # Scoped lookups

    def query_selector(self, selector: str) -> Optional['HtmlElement']:
        """
        Find the first descendant element that matches a selector.

        Raises:
            UnsupportedSelector: If the selector cannot be translated
        """
        return self._wrap(self._document.selector_engine.select_first(
            selector, self._document.tree, self._index))

    def query_selector_all(self, selector: str) -> List['HtmlElement']:
        """
        Find all descendant elements that match a selector.

        Raises:
            UnsupportedSelector: If the selector cannot be translated
        """
        return [self._wrap(index) for index in self._document.selector_engine.select(
            selector, self._document.tree, self._index)]

    def get_elements_by_class_name(self, class_name: str) -> List['HtmlElement']:
        return self.query_selector_all(PathQuery.by_class(class_name))

    def get_elements_by_tag_name(self, tag_name: str) -> List['HtmlElement']:
        return self.query_selector_all(PathQuery.by_tag(tag_name))

    # JavaScript-style aliases
    getAttribute = get_attribute
    hasAttribute = has_attribute
    setAttribute = set_attribute
    removeAttribute = remove_attribute
    addClass = add_class
    removeClass = remove_class
    toggleClass = toggle_class
    hasClass = has_class
    appendChild = append_child
    insertBefore = insert_before
    removeChild = remove_child
    insertAdjacentHTML = insert_adjacent_html
    getParent = get_parent
    getChildNodes = get_child_nodes
    getFirstChild = get_first_child
    getLastChild = get_last_child
    getNextSibling = get_next_sibling
    getPreviousSibling = get_previous_sibling
    getInnerContent = get_inner_html
    getInnerHtml = get_inner_html
    getOuterHtml = get_outer_html
    setInnerHtml = set_inner_html
    getTextContent = get_text_content
    setTextContent = set_text_content
    querySelector = query_selector
    querySelectorAll = query_selector_all
    getElementsByClassName = get_elements_by_class_name
    getElementsByTagName = get_elements_by_tag_name
