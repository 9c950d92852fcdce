"""
CSS selector translation.
This module turns a single simple CSS selector (id, class, tag, or tag with one
attribute predicate) into a PathQuery that the selector engine can evaluate.
"""

import logging
import re
from enum import Enum
from functools import lru_cache
from typing import Optional

from .exceptions import UnsupportedSelector

logger = logging.getLogger(__name__)

# Checked in this order; the first full match wins
ID_PATTERN = re.compile(r'#([\w\-]+)')
CLASS_PATTERN = re.compile(r'\.([\w\-]+)')
ATTRIBUTE_PATTERN = re.compile(r'([\w\-]+)\[([^\]]+)\]')
TAG_PATTERN = re.compile(r'[\w\-]+')

# Content of the brackets: name, optional operator and value
PREDICATE_PATTERN = re.compile(
    r'''\s*([\w\-]+)\s*'''
    r'''(?:([\^$*]?=)\s*(?:"([^"]*)"|'([^']*)'|([\w\-]+))\s*)?'''
)


class AttributeOperator(Enum):
    """Attribute predicates a PathQuery can carry."""
    EXISTS = ''
    EQUALS = '='
    PREFIX = '^='
    SUFFIX = '$='
    SUBSTRING = '*='
    INCLUDES = '~='


def xpath_literal(value: str) -> str:
    """Quote a string as an XPath literal."""
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = ["'" + part + "'" for part in value.split("'")]
    return "concat(" + ", \"'\", ".join(parts) + ")"


class PathQuery:
    """
    Structural query: a tag test plus at most one attribute predicate.

    Instances are immutable and compare by value.
    """

    __slots__ = ('tag', 'attribute', 'operator', 'value')

    def __init__(self,
                 tag: str = '*',
                 attribute: Optional[str] = None,
                 operator: AttributeOperator = AttributeOperator.EXISTS,
                 value: str = ''):
        object.__setattr__(self, 'tag', tag)
        object.__setattr__(self, 'attribute', attribute)
        object.__setattr__(self, 'operator', operator)
        object.__setattr__(self, 'value', value)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def by_id(cls, element_id: str) -> 'PathQuery':
        return cls('*', 'id', AttributeOperator.EQUALS, element_id)

    @classmethod
    def by_class(cls, class_name: str) -> 'PathQuery':
        return cls('*', 'class', AttributeOperator.INCLUDES, class_name)

    @classmethod
    def by_tag(cls, tag_name: str) -> 'PathQuery':
        return cls(tag_name)

    def _key(self):
        return (self.tag, self.attribute, self.operator, self.value)

    def __eq__(self, other):
        if not isinstance(other, PathQuery):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return (f"PathQuery(tag={self.tag!r}, attribute={self.attribute!r}, "
                f"operator={self.operator}, value={self.value!r})")

    def __str__(self):
        return self.expression

    @property
    def expression(self) -> str:
        """The equivalent XPath expression, relative to the context node."""
        step = f".//{self.tag}"
        if self.attribute is None:
            return step

        attr = f"@{self.attribute}"
        literal = xpath_literal(self.value)
        operator = self.operator
        if operator == AttributeOperator.EXISTS:
            predicate = attr
        elif operator == AttributeOperator.EQUALS:
            predicate = f"{attr}={literal}"
        elif operator == AttributeOperator.PREFIX:
            predicate = f"starts-with({attr}, {literal})"
        elif operator == AttributeOperator.SUFFIX:
            predicate = (f"substring({attr}, string-length({attr}) - "
                         f"string-length({literal}) + 1) = {literal}")
        elif operator == AttributeOperator.SUBSTRING:
            predicate = f"contains({attr}, {literal})"
        else:
            predicate = (f"contains(concat(' ', normalize-space({attr}), ' '), "
                         f"{xpath_literal(' ' + self.value + ' ')})")
        return f"{step}[{predicate}]"


_OPERATORS = {operator.value: operator for operator in AttributeOperator}


def translate(selector: str) -> PathQuery:
    """
    Translate a simple CSS selector into a PathQuery.

    Supported forms: ``#id``, ``.class``, ``tag``, ``tag[attr]``,
    ``tag[attr="v"]``, ``tag[attr^="v"]``, ``tag[attr$="v"]`` and
    ``tag[attr*="v"]``.

    Args:
        selector: The CSS selector string

    Returns:
        The PathQuery for the selector

    Raises:
        UnsupportedSelector: If the selector is not one of the supported forms
    """
    if not isinstance(selector, str):
        raise UnsupportedSelector(selector)

    query = _translate_cached(selector)
    if query is None:
        raise UnsupportedSelector(selector)

    logger.debug(f"Translated selector '{selector}' to {query.expression}")
    return query


@lru_cache(maxsize=256)
def _translate_cached(selector: str) -> Optional[PathQuery]:
    match = ID_PATTERN.fullmatch(selector)
    if match:
        return PathQuery.by_id(match.group(1))

    match = CLASS_PATTERN.fullmatch(selector)
    if match:
        return PathQuery.by_class(match.group(1))

    match = ATTRIBUTE_PATTERN.fullmatch(selector)
    if match:
        tag_name, predicate = match.groups()
        predicate_match = PREDICATE_PATTERN.fullmatch(predicate)
        if not predicate_match:
            return None

        name, operator, double_quoted, single_quoted, bare = predicate_match.groups()
        if operator is None:
            return PathQuery(tag_name, name)

        value = next(v for v in (double_quoted, single_quoted, bare) if v is not None)
        return PathQuery(tag_name, name, _OPERATORS[operator], value)

    if TAG_PATTERN.fullmatch(selector):
        return PathQuery.by_tag(selector)

    return None
