"""
Helpers for validating external data with pydantic.

Every boundary check in Scriptorium goes through ``validate_or_raise`` so
failures are logged the same way and carry field-path diagnostics.
"""

import logging
from typing import Any, List, Type, TypeVar, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..errors import SchemaValidationError

T = TypeVar("T")


def format_validation_error(error: ValidationError) -> List[str]:
    """
    Format a pydantic validation error as "field.path: reason" strings.

    Example:
        ["Title.title: Field required", "First published.date.start: Input should be a valid string"]
    """
    issues = []
    for issue in error.errors():
        path = ".".join(str(part) for part in issue["loc"])
        issues.append(f"{path}: {issue['msg']}" if path else issue["msg"])
    return issues


def log_validation_error(error: ValidationError, context: str) -> None:
    """Log a validation error in a concise, readable format."""
    logging.warning(f"Invalid {context} ({', '.join(format_validation_error(error))})")


def validate_or_raise(
    schema: Union[Type[T], TypeAdapter],
    data: Any,
    context: str,
    message: str
) -> T:
    """
    Validate data against a model or TypeAdapter, failing closed.

    Args:
        schema: A pydantic model class or TypeAdapter
        data: The untrusted value
        context: What is being validated, used in logs
        message: Error message for the raised SchemaValidationError

    Returns:
        The validated value

    Raises:
        SchemaValidationError: If data does not match the schema
    """
    try:
        if isinstance(schema, TypeAdapter):
            return schema.validate_python(data)
        if isinstance(schema, type) and issubclass(schema, BaseModel):
            return schema.model_validate(data)
        return TypeAdapter(schema).validate_python(data)
    except ValidationError as e:
        log_validation_error(e, context)
        raise SchemaValidationError(message, context, format_validation_error(e)) from e
