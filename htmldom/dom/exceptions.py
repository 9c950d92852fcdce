"""
Exceptions raised by the DOM facade.
"""


class DomError(Exception):
    """Base class for errors raised by htmldom."""


class UnsupportedSelector(DomError, ValueError):
    """Raised when a selector string matches none of the supported forms."""

    def __init__(self, selector):
        self.selector = selector
        super().__init__(f"Unsupported selector format: {selector}")


class InvalidDocument(DomError, ValueError):
    """Raised when markup is empty or cannot be parsed into a document."""


class HierarchyRequestError(DomError):
    """Raised when a tree mutation would violate a structural precondition."""


class InvalidPosition(DomError, ValueError):
    """Raised for an unknown insertAdjacentHTML position."""

    def __init__(self, position):
        self.position = position
        super().__init__(
            f"Invalid position '{position}', expected one of "
            "'beforebegin', 'afterbegin', 'beforeend', 'afterend'"
        )


class QueryEvaluationError(DomError):
    """Raised internally when a path query cannot be executed."""
