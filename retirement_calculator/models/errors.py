"""
Exceptions raised by the projection engine and its input boundary.

The pure projection functions never validate their arguments; errors are
raised at the input boundary (InvalidInputError) and by the contribution
solver when it cannot reach its goal (DidNotConvergeError).
"""

from typing import Dict, Optional


class ProjectionError(Exception):
    """Base exception for projection-related errors."""


class InvalidInputError(ProjectionError, ValueError):
    """Raised when form inputs are non-numeric or out of range."""

    def __init__(
        self, message: str, field_errors: Optional[Dict[str, str]] = None
    ) -> None:
        super().__init__(message)
        self.field_errors: Dict[str, str] = dict(field_errors or {})


class DidNotConvergeError(ProjectionError):
    """Raised when the contribution solver cannot close the shortfall."""

    def __init__(
        self,
        message: str,
        iterations: int = 0,
        difference: Optional[float] = None,
    ) -> None:
        super().__init__(message)
        self.iterations = iterations
        self.difference = difference
