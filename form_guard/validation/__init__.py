"""
Verification layer module.

This module decodes raw schema text, verifies it and reports the first
failure as a structured EngineError.

Components:
    - validator: verify_schema / quick_verify and the EngineError record
    - error_formatter: Convert errors to human-readable messages with hints

Verification Flow:
    1. Decode text as strict JSON ("Invalid JSON format" on failure)
    2. Check the root is an object with a fields array
    3. Verify fields in order, stopping at the first invalid one
    4. Check the layout block

Example:
    ```python
    from form_guard.validation import verify_schema, format_engine_error

    result = verify_schema(text)
    if not result.is_valid:
        print(format_engine_error(result.error))
    ```
"""

from form_guard.validation.validator import (
    EngineError,
    VerificationResult,
    format_engine_error,
    load_schema_text,
    quick_verify,
    verify_document,
    verify_schema,
)
from form_guard.validation.error_formatter import format_error_with_context, suggest_fix

__all__ = [
    "verify_schema",
    "verify_document",
    "load_schema_text",
    "quick_verify",
    "VerificationResult",
    "EngineError",
    "format_engine_error",
    "format_error_with_context",
    "suggest_fix",
]
