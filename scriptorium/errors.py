"""
Error types for Scriptorium.

Internal helpers raise these; public repository operations catch them and
hand a normalized OperationError back inside an Err result.
"""

from typing import Any, Dict, List, Optional


class ScriptoriumError(Exception):
    """Base class for all Scriptorium errors."""


class TransientNetworkError(ScriptoriumError):
    """
    A timeout or dropped-connection class failure talking to the upstream API.

    The retry layer treats these as retryable.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotionAPIError(ScriptoriumError):
    """A non-retryable error response from the Notion API."""

    def __init__(self, message: str, status_code: Optional[int] = None, code: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class SchemaValidationError(ScriptoriumError):
    """
    External data did not match the expected shape.

    Attributes:
        context: What was being validated (e.g. "post properties")
        issues: List of "field.path: reason" strings
    """

    def __init__(self, message: str, context: str = "", issues: Optional[List[str]] = None):
        self.context = context
        self.issues = issues or []
        if self.issues:
            message = f"{message} ({', '.join(self.issues)})"
        super().__init__(message)


class InvariantViolationError(ScriptoriumError):
    """A condition that must always hold did not (e.g. duplicate unique keys)."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class CacheReadError(ScriptoriumError):
    """The cache backing store could not be read for a reason other than a miss."""


class ConfigurationError(ScriptoriumError):
    """Required configuration (token, data source ids) is missing or invalid."""


class OperationError(ScriptoriumError):
    """
    The single failure shape returned to callers of repository operations.

    The message keeps the operation name and the underlying message; the
    original exception is available as ``cause``.
    """

    def __init__(self, operation: str, cause: BaseException):
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause
        self.__cause__ = cause


def invariant(condition: Any, message: str, context: Optional[Dict[str, Any]] = None) -> None:
    """
    Raise InvariantViolationError unless the condition holds.

    Messages follow the "X must Y" convention.
    """
    if not condition:
        raise InvariantViolationError(message, context)
