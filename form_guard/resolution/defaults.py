"""
Default resolver - extract initial form values from a verified schema.

The resulting mapping is flat and keyed by the binding path the renderer
uses:
    - A top-level field contributes {name: default}
    - An object field contributes nothing under its own name; each property
      with a default contributes {property_key: default} at the top level
    - Array defaults pass through unchanged
    - Date defaults become datetime values, and are dropped if unparsable

Caller-supplied values are merged last and win key by key.
"""

import copy
import logging
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from form_guard.schema.dates import REFERENCE_DATE, try_parse_date
from form_guard.schema.types import UNSET, CheckboxField, DateField, FieldSpec, FormSchema, ObjectField, thaw

logger = logging.getLogger(__name__)


def default_of(spec: FieldSpec) -> Any:
    """Return a field's authored default (UNSET when it has none)."""
    if isinstance(spec, CheckboxField):
        return spec.effective_default
    return spec.default_value


def _emit(values: Dict[str, Any], key: str, spec: FieldSpec, reference: datetime) -> None:
    default = default_of(spec)
    if default is UNSET:
        return

    if isinstance(spec, DateField):
        parsed = try_parse_date(default, reference)
        if parsed is None:
            logger.warning(f"Dropping unparsable date default for {key}: {default!r}")
            return
        values[key] = parsed
        return

    values[key] = thaw(default)


def extract_defaults(schema: FormSchema, reference: datetime = REFERENCE_DATE) -> Dict[str, Any]:
    """
    Build the flat initial-value mapping for a verified schema.

    Args:
        schema: Verified FormSchema
        reference: Source of date components missing from date defaults

    Returns:
        Dict: Binding path -> initial value

    Example:
        ```python
        # {"name": "personalInfo", "type": "object",
        #  "properties": {"age": {"name": "age", "type": "number", "defaultValue": 25}}}
        extract_defaults(schema)  # {"age": 25}
        ```
    """
    values: Dict[str, Any] = {}
    for spec in schema.fields:
        if isinstance(spec, ObjectField):
            # Property defaults are merged one level up, not namespaced.
            for key, prop in spec.properties.items():
                _emit(values, key, prop, reference)
        else:
            _emit(values, spec.name, spec, reference)

    logger.debug(f"Extracted {len(values)} default value(s)")
    return values


def merge_initial_values(
    defaults: Mapping[str, Any],
    overrides: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Shallow-merge caller initial values over schema defaults.

    Args:
        defaults: Output of extract_defaults
        overrides: Caller-supplied values (None means no overrides)

    Returns:
        Dict: New mapping; neither input is modified
    """
    merged = dict(defaults)
    if overrides:
        merged.update(copy.deepcopy(dict(overrides)))
    return merged
