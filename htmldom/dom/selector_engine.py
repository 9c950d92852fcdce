"""
Selector engine implementation.
This module evaluates PathQuery objects against a Tree, scoped to a context
node. Evaluation keeps no state between calls.
"""

import logging
from enum import Enum
from typing import Callable, List, Union

from .exceptions import QueryEvaluationError
from .node import Element, NodeType, Tree
from .selector import AttributeOperator, PathQuery, translate

logger = logging.getLogger(__name__)

Predicate = Callable[[Element], bool]


class QueryMode(Enum):
    """How many matches an evaluation collects."""
    FIRST = 'first'
    ALL = 'all'


def _attribute_test(query: PathQuery) -> Predicate:
    name = query.attribute
    expected = query.value

    try:
        operator = AttributeOperator(query.operator)
    except ValueError:
        raise QueryEvaluationError(f"Unknown attribute operator: {query.operator!r}")

    if operator == AttributeOperator.EXISTS:
        return lambda element: name in element.attributes
    if operator == AttributeOperator.EQUALS:
        return lambda element: element.attributes.get(name) == expected
    if operator == AttributeOperator.PREFIX:
        return lambda element: name in element.attributes and element.attributes[name].startswith(expected)
    if operator == AttributeOperator.SUFFIX:
        return lambda element: name in element.attributes and element.attributes[name].endswith(expected)
    if operator == AttributeOperator.SUBSTRING:
        return lambda element: name in element.attributes and expected in element.attributes[name]

    tokens = expected.split()
    if not tokens:
        return lambda element: False

    def includes(element: Element) -> bool:
        present = element.attributes.get(name)
        if present is None:
            return False
        present_tokens = present.split()
        return all(token in present_tokens for token in tokens)

    return includes


def compile_query(query: PathQuery) -> Predicate:
    """
    Build a predicate over Element entries for a query.

    Raises:
        QueryEvaluationError: If the query cannot be executed
    """
    if not isinstance(query, PathQuery):
        raise QueryEvaluationError(f"Not a path query: {query!r}")

    tag = (query.tag or '*').lower()
    attribute_test = _attribute_test(query) if query.attribute is not None else None

    def predicate(element: Element) -> bool:
        if tag != '*' and element.tag_name.lower() != tag:
            return False
        return attribute_test is None or attribute_test(element)

    return predicate


def evaluate(tree: Tree, context: int, query: PathQuery,
             mode: QueryMode = QueryMode.ALL) -> List[int]:
    """
    Find the elements below ``context`` matching ``query``.

    Args:
        tree: The tree to search
        context: Index of the node whose descendants are searched
        query: The path query
        mode: QueryMode.FIRST for at most one result, QueryMode.ALL for all

    Returns:
        Matching element indices in document order; empty when nothing
        matches or when the query cannot be executed
    """
    try:
        predicate = compile_query(query)
    except QueryEvaluationError as e:
        logger.warning(f"Cannot evaluate {query!r}: {e}")
        return []

    results = []
    for index in tree.iter_descendants(context):
        node = tree.node(index)
        if node.node_type != NodeType.ELEMENT_NODE or not predicate(node):
            continue
        results.append(index)
        if mode == QueryMode.FIRST:
            break

    logger.debug(f"{query} from node #{context} matched {len(results)} element(s)")
    return results


def matches(tree: Tree, index: int, query: PathQuery) -> bool:
    """Check whether one node is an element matching ``query``."""
    node = tree.node(index)
    if node.node_type != NodeType.ELEMENT_NODE:
        return False
    try:
        return compile_query(query)(node)
    except QueryEvaluationError as e:
        logger.warning(f"Cannot evaluate {query!r}: {e}")
        return False


class SelectorEngine:
    """
    CSS selector engine for DOM queries.

    Accepts selector strings (translated on the fly) or PathQuery objects.
    Holds no per-document state, so one instance can serve any tree.
    """

    def _query(self, selector: Union[str, PathQuery]) -> PathQuery:
        if isinstance(selector, PathQuery):
            return selector
        return translate(selector)

    def select(self, selector: Union[str, PathQuery], tree: Tree, context: int) -> List[int]:
        """
        Find all elements below ``context`` matching a selector.

        Raises:
            UnsupportedSelector: If the selector string cannot be translated
        """
        return evaluate(tree, context, self._query(selector), QueryMode.ALL)

    def select_first(self, selector: Union[str, PathQuery], tree: Tree, context: int):
        """Find the first element below ``context`` matching a selector, or None."""
        found = evaluate(tree, context, self._query(selector), QueryMode.FIRST)
        return found[0] if found else None

    def matches(self, tree: Tree, index: int, selector: Union[str, PathQuery]) -> bool:
        """Check if an element matches a selector."""
        return matches(tree, index, self._query(selector))
