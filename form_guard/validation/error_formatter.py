"""
Error formatter - convert engine errors to user-friendly messages.

This module provides utilities for formatting verification errors in a way
that helps schema authors understand what went wrong and how to fix it.
"""

from form_guard.schema.types import FieldType
from form_guard.validation.validator import EngineError


def format_error_with_context(error: EngineError) -> str:
    """
    Format error with its category and location.

    Args:
        error: Engine error

    Returns:
        str: Multi-line description
    """
    lines = [
        f"❌ Schema Error ({error.kind})",
        f"   Problem: {error.message}",
    ]

    if error.path:
        lines.append(f"   Location: {error.path}")

    fix = suggest_fix(error)
    if fix:
        lines.append(f"   Hint: {fix}")

    return "\n".join(lines)


def suggest_fix(error: EngineError) -> str:
    """
    Suggest how to fix a verification error.

    Args:
        error: Engine error

    Returns:
        str: Suggested fix (empty if there is nothing specific to say)
    """
    message = error.message

    if error.kind == "malformed":
        return "Check for trailing commas, unquoted keys or single quotes"

    elif error.kind == "shape":
        if "nesting" in message:
            return "Flatten nested objects and arrays; deep trees cannot be rendered"
        if message.startswith("Layout"):
            return "Use positive integers for columns and a [horizontal, vertical] gutter"
        return 'Wrap the fields in an object: {"fields": [...]}'

    elif "Invalid field type" in message:
        return f"Use one of: {', '.join(FieldType.names())}"

    elif "Field name is required" in message:
        return "Give every field a non-empty string name"

    elif "min value" in message.lower() or "max value" in message.lower():
        return f"Ensure min <= defaultValue <= max at {error.path}"

    elif "default value" in message.lower():
        return f"Make the default at {error.path} match the declared field type"

    elif "options" in message:
        return 'Provide options as [{"label": "...", "value": ...}]'

    else:
        return ""
