"""
CLI command implementations.

This module contains the business logic for each CLI command:
- validate: Verify a schema file
- resolve: Resolve a schema file and show the descriptor tree
- types: Describe the field grammar
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from form_guard.config import EngineOptions
from form_guard.engine import SchemaEngine
from form_guard.resolution.resolver import ResolvedField
from form_guard.schema.types import FieldType

from .display import (
    console,
    print_engine_error,
    print_error,
    print_field_tree,
    print_field_types,
    print_header,
    print_info,
    print_initial_values,
    print_json,
    print_separator,
    print_success,
    print_warning,
)

FIELD_TYPE_DOCS: Dict[FieldType, Dict[str, str]] = {
    FieldType.STRING: {"default": "string", "attributes": "minLength, maxLength"},
    FieldType.LONGTEXT: {"default": "string", "attributes": "minLength, maxLength, rows"},
    FieldType.NUMBER: {"default": "number within [min, max]", "attributes": "min, max, step"},
    FieldType.CHECKBOX: {"default": "boolean", "attributes": "defaultChecked"},
    FieldType.RADIO: {"default": "one option value", "attributes": "options"},
    FieldType.SELECT: {"default": "option value(s)", "attributes": "options, mode (multiple|tags)"},
    FieldType.UPLOAD: {"default": "array", "attributes": "multiple, maxCount, maxSize, accept, listType"},
    FieldType.ARRAY: {"default": "array of item values", "attributes": "items, minItems, maxItems"},
    FieldType.OBJECT: {"default": "object of property values", "attributes": "properties"},
    FieldType.DATE: {"default": "date string", "attributes": "format, showTime"},
    FieldType.JSON: {"default": "string", "attributes": ""},
}


def read_schema_file(schema_path: Path) -> str:
    """
    Read schema text from a file.

    Args:
        schema_path: Path to schema JSON file

    Returns:
        Raw schema text (decoding is the engine's job)

    Raises:
        ValueError: If file doesn't exist
    """
    if not schema_path.exists():
        raise ValueError(f"Schema file not found: {schema_path}")

    return schema_path.read_text(encoding="utf-8")


def load_initial_values_file(values_path: Path) -> Dict[str, Any]:
    """
    Load caller initial values from a JSON object file.

    Raises:
        ValueError: If file doesn't exist or isn't a JSON object
    """
    if not values_path.exists():
        raise ValueError(f"Initial values file not found: {values_path}")

    try:
        with open(values_path, encoding="utf-8") as f:
            values = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in initial values file: {e}")

    if not isinstance(values, dict):
        raise ValueError("Initial values file must contain a JSON object")
    return values


def unbound_initial_keys(tree: Sequence[ResolvedField], initial_values: Dict[str, Any]) -> List[str]:
    """Return caller initial-value keys that no resolved field binds to."""
    bound = {resolved.value_path for top in tree for resolved in top.walk()}
    return sorted(key for key in initial_values if key not in bound)


def validate_command(schema_path: Path, show_schema: bool) -> None:
    """
    Execute the validate command.

    Args:
        schema_path: Path to schema JSON file
        show_schema: Whether to display the schema text
    """
    print_header("FormGuard - Validate Schema")

    try:
        text = read_schema_file(schema_path)
        print_success(f"Loaded schema from: {schema_path}")
    except Exception as e:
        print_error(f"Failed to load schema: {e}")
        raise SystemExit(1)

    if show_schema:
        print_json(text, title="Schema")

    print_separator()
    print_info("Verifying...")

    result = SchemaEngine().verify(text)

    console.print()
    if result.is_valid:
        print_success(f"Schema is valid ({len(result.schema.fields)} top-level field(s))")
    else:
        print_error("Schema is invalid")
        print_engine_error(result.error)
        raise SystemExit(1)


def resolve_command(
    schema_path: Path,
    initial_path: Optional[Path],
    output_path: Optional[Path],
    columns: Optional[int],
    show_tree: bool,
) -> None:
    """
    Execute the resolve command.

    Args:
        schema_path: Path to schema JSON file
        initial_path: Optional path to caller initial values
        output_path: Optional path to save the resolved result as JSON
        columns: Default column count when the schema layout omits one
        show_tree: Whether to display the resolved tree
    """
    print_header("FormGuard - Resolve Schema")

    try:
        text = read_schema_file(schema_path)
        initial_values = load_initial_values_file(initial_path) if initial_path else None
    except Exception as e:
        print_error(f"Failed to load input: {e}")
        raise SystemExit(1)

    options = EngineOptions(default_columns=columns) if columns else EngineOptions()
    result = SchemaEngine(options).resolve(text, initial_values)

    if not result.is_valid:
        print_error("Schema is invalid")
        print_engine_error(result.error)
        raise SystemExit(1)

    print_success(f"Resolved {len(result.tree)} top-level field(s)")

    unbound = unbound_initial_keys(result.tree, initial_values or {})
    if unbound:
        print_warning(f"Initial values with no matching field: {', '.join(unbound)}")

    if show_tree:
        print_field_tree(result.tree)
    print_initial_values(result.initial_values)

    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)
        print_success(f"Resolution saved to: {output_path}")


def types_command() -> None:
    """Execute the types command."""
    rows: List[Dict[str, str]] = [
        {"type": field_type.value, **FIELD_TYPE_DOCS[field_type]}
        for field_type in FieldType
    ]
    print_field_types(rows)
