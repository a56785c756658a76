"""
Schema text verifier with structured error reporting.

This module is the first stage of the engine: it decodes raw schema text and
runs the field validator over it. Failures never escape as exceptions; they
come back as an EngineError inside a VerificationResult.

Usage:
    ```python
    from form_guard.validation import verify_schema

    result = verify_schema('{"fields": [{"name": "x", "type": "widget"}]}')
    if not result.is_valid:
        print(f"{result.error.kind} at {result.error.path}: {result.error.message}")
    ```
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from form_guard.schema.errors import MalformedInputError, SchemaError, ShapeError
from form_guard.schema.parser import parse_form_schema
from form_guard.schema.types import FormSchema

logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "Invalid JSON format"


@dataclass
class EngineError:
    """
    Structured description of why a schema was rejected.

    Attributes:
        kind: "malformed", "shape" or "field"
        message: Human-readable message
        path: Dotted field path for field errors (None otherwise)
    """

    kind: str
    message: str
    path: Optional[str] = None

    @classmethod
    def from_exception(cls, error: SchemaError) -> "EngineError":
        return cls(kind=error.kind, message=error.message, path=error.path)

    def to_dict(self) -> Dict[str, Any]:
        data = {"kind": self.kind, "message": self.message}
        if self.path is not None:
            data["path"] = self.path
        return data


@dataclass
class VerificationResult:
    """
    Result of verifying schema text.

    Attributes:
        is_valid: Whether the schema passed every check
        error: First failure found (None if valid)
        raw_text: Original schema text
        schema: Verified schema (None if invalid)
    """

    is_valid: bool
    error: Optional[EngineError]
    raw_text: Union[str, bytes]
    schema: Optional[FormSchema]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def load_schema_text(raw_text: Union[str, bytes]) -> Any:
    """
    Decode schema text as strict JSON.

    NaN and Infinity literals are rejected, matching strict JSON parsers.

    Raises:
        MalformedInputError: If the text is not valid JSON
    """
    try:
        return json.loads(raw_text, parse_constant=_reject_constant)
    except (ValueError, TypeError, RecursionError) as e:
        logger.debug(f"Schema text is not valid JSON: {e}")
        raise MalformedInputError(INVALID_JSON_MESSAGE) from e


def verify_document(document: Any) -> FormSchema:
    """
    Verify an already decoded schema document.

    Raises:
        SchemaError: On the first failure
    """
    try:
        return parse_form_schema(document)
    except RecursionError as e:
        raise ShapeError("Schema nesting is too deep") from e


def verify_schema(raw_text: Union[str, bytes]) -> VerificationResult:
    """
    Verify schema text.

    Args:
        raw_text: JSON text describing the form

    Returns:
        VerificationResult: Verified schema, or the first error

    Example:
        ```python
        result = verify_schema("{not json")
        assert result.error.message == "Invalid JSON format"
        ```
    """
    try:
        schema = verify_document(load_schema_text(raw_text))
    except SchemaError as e:
        logger.info(f"Schema rejected ({e.kind}): {e.message}")
        return VerificationResult(
            is_valid=False,
            error=EngineError.from_exception(e),
            raw_text=raw_text,
            schema=None,
        )

    return VerificationResult(is_valid=True, error=None, raw_text=raw_text, schema=schema)


def quick_verify(raw_text: Union[str, bytes]) -> bool:
    """
    Quick verification - just returns True/False.

    Example:
        ```python
        if not quick_verify(text):
            print("Schema rejected")
        ```
    """
    return verify_schema(raw_text).is_valid


def format_engine_error(error: Optional[EngineError]) -> str:
    """
    Format an engine error as a single human-readable line.

    Example:
        ```python
        format_engine_error(EngineError("field", "Invalid field type for x", "x"))
        # 'Field error at x: Invalid field type for x'
        ```
    """
    if error is None:
        return "No errors"
    prefix = {
        "malformed": "Malformed input",
        "shape": "Shape error",
        "field": "Field error",
    }.get(error.kind, "Error")
    if error.path:
        return f"{prefix} at {error.path}: {error.message}"
    return f"{prefix}: {error.message}"
