"""
DOM facade over html5lib.
This package provides the node arena, selector translation and evaluation,
element handles and the document wrapper.
"""

from .node import Node, NodeType, Element, Text, Comment, DocumentType, DocumentNode, Tree
from .exceptions import (
    DomError, UnsupportedSelector, InvalidDocument, HierarchyRequestError,
    InvalidPosition, QueryEvaluationError,
)
from .selector import AttributeOperator, PathQuery, translate
from .selector_engine import QueryMode, SelectorEngine, evaluate, matches
from .parser import HtmlParser
from .element import HtmlElement
from .document import HtmlDocument, create_document, createDocument

__all__ = [
    'Node', 'NodeType', 'Element', 'Text', 'Comment', 'DocumentType', 'DocumentNode', 'Tree',
    'DomError', 'UnsupportedSelector', 'InvalidDocument', 'HierarchyRequestError',
    'InvalidPosition', 'QueryEvaluationError',
    'AttributeOperator', 'PathQuery', 'translate',
    'QueryMode', 'SelectorEngine', 'evaluate', 'matches',
    'HtmlParser', 'HtmlElement', 'HtmlDocument', 'create_document', 'createDocument',
]
