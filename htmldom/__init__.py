"""
htmldom - query and mutate parsed HTML documents with CSS-like selectors.
"""

import logging

from .dom import (
    HtmlDocument, HtmlElement, create_document, createDocument,
    PathQuery, QueryMode, SelectorEngine, translate, evaluate,
    DomError, UnsupportedSelector, InvalidDocument, HierarchyRequestError, InvalidPosition,
)
from .utils import Config, setup_logging

# Library logging stays silent until the application configures it
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Package information
__version__ = "1.0.0"
__author__ = "htmldom developers"
__description__ = "Query and mutate parsed HTML documents with CSS-like selectors"

__all__ = [
    'HtmlDocument', 'HtmlElement', 'create_document', 'createDocument',
    'PathQuery', 'QueryMode', 'SelectorEngine', 'translate', 'evaluate',
    'DomError', 'UnsupportedSelector', 'InvalidDocument', 'HierarchyRequestError',
    'InvalidPosition', 'Config', 'setup_logging',
]
