"""
Schema grammar and verification module.

This module handles conversion of decoded form-schema JSON into the frozen
FieldSpec tree the rest of the engine works with.

Components:
    - types: FieldType and the FieldSpec variants (StringField, ObjectField, etc.)
    - errors: SchemaError hierarchy (MalformedInputError, ShapeError, FieldError)
    - parser: Recursive field validator and the shallow value validator
    - dates: Deterministic date parsing

Example:
    ```python
    from form_guard.schema import parse_form_schema

    schema = parse_form_schema({
        "fields": [{"name": "age", "label": "Age", "type": "number", "min": 0}]
    })
    print(schema.fields[0].min)
    ```
"""

from form_guard.schema.dates import parse_date, try_parse_date
from form_guard.schema.errors import (
    DefaultValueError,
    FieldError,
    MalformedInputError,
    SchemaError,
    ShapeError,
)
from form_guard.schema.parser import (
    MAX_NESTING_DEPTH,
    ValueCheck,
    parse_field,
    parse_form_schema,
    parse_layout,
    validate_value,
)
from form_guard.schema.types import FieldSpec, FieldType, FormSchema, LayoutSpec, UNSET, freeze, thaw

__all__ = [
    "parse_field",
    "parse_form_schema",
    "parse_layout",
    "validate_value",
    "ValueCheck",
    "parse_date",
    "try_parse_date",
    "FieldSpec",
    "FieldType",
    "FormSchema",
    "LayoutSpec",
    "UNSET",
    "freeze",
    "thaw",
    "MAX_NESTING_DEPTH",
    "SchemaError",
    "MalformedInputError",
    "ShapeError",
    "FieldError",
    "DefaultValueError",
]
