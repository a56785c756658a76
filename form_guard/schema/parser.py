"""
Form schema parser - verifies untyped JSON field descriptions.

This module is the field validator of the engine. It walks an authored field
description (already decoded from JSON) by recursive descent and either
returns a frozen FieldSpec variant or raises a FieldError carrying the dotted
path of the first failure. It handles:
    - Common attributes (name, type, required, label, card, rules, span)
    - Type-specific payloads for every FieldType
    - Nested array items and object properties
    - Default values, checked by value against their declared field

Traversal is first-failure-wins: nested object properties and array default
elements are checked in order and the first problem stops the walk.

Usage:
    ```python
    from form_guard.schema import parse_field

    spec = parse_field({
        "name": "age",
        "label": "Age",
        "type": "number",
        "min": 0,
        "max": 150,
        "defaultValue": 25,
    })
    assert spec.default_value == 25
    ```
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Optional

from form_guard.schema.dates import is_valid_date
from form_guard.schema.errors import DefaultValueError, FieldError, ShapeError
from form_guard.schema.types import (
    CARD_SIZES,
    SELECT_MODES,
    UNSET,
    UPLOAD_LIST_TYPES,
    ArrayField,
    CardSpec,
    CheckboxField,
    ChoiceField,
    DateField,
    FieldSpec,
    FieldType,
    FormSchema,
    JsonField,
    LayoutSpec,
    LongTextField,
    NumberField,
    ObjectField,
    RadioField,
    SelectField,
    SelectOption,
    StringField,
    UploadField,
)

logger = logging.getLogger(__name__)

GRID_SPAN_MAX = 24

# Deepest nesting level (array items and object properties) a schema may use.
MAX_NESTING_DEPTH = 32


@dataclass(frozen=True)
class ValueCheck:
    """
    Result of checking a concrete value against a field's runtime type.

    Attributes:
        valid: Whether the value matches
        error: Human-readable reason when invalid
        path: Location suffix inside the value (e.g. "[1]" or ".value")
    """

    valid: bool
    error: Optional[str] = None
    path: str = ""


VALID = ValueCheck(valid=True)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def _is_option_value(value: Any) -> bool:
    return isinstance(value, str) or _is_number(value)


def _contains_option(values: List[Any], value: Any) -> bool:
    # Booleans compare equal to 0/1 in Python; they are never option values.
    return _is_option_value(value) and value in values


def _join_path(base: Optional[str], key: str) -> str:
    return f"{base}.{key}" if base else key


def parse_field(node: Any, path: Optional[str] = None, _depth: int = 0) -> FieldSpec:
    """
    Verify one authored field description and build its FieldSpec.

    Args:
        node: Decoded JSON value describing the field, or an existing FieldSpec
        path: Dotted location of the field (defaults to the field's name)

    Returns:
        FieldSpec: Frozen, structurally verified field

    Raises:
        FieldError: On the first grammar violation found
        ShapeError: If items/properties nest deeper than MAX_NESTING_DEPTH

    Example:
        ```python
        parse_field({"name": "x", "type": "widget"})
        # FieldError: Invalid field type for x. Must be one of: string, ...
        ```
    """
    if isinstance(node, FieldSpec):
        node = node.to_dict()

    if _depth > MAX_NESTING_DEPTH:
        raise ShapeError(f"Schema nesting is too deep (more than {MAX_NESTING_DEPTH} levels)", path=path)

    if not isinstance(node, dict):
        raise FieldError(path, "Field description must be an object")

    name = node.get("name")
    if not name or not isinstance(name, str):
        raise FieldError(path, "Field name is required and must be a string")

    field_path = path if path is not None else name

    raw_type = node.get("type")
    try:
        field_type = FieldType(raw_type) if isinstance(raw_type, str) else None
    except ValueError:
        field_type = None
    if field_type is None:
        raise FieldError(
            field_path,
            f"Invalid field type for {name}. Must be one of: {', '.join(FieldType.names())}",
        )

    common = _parse_common(node, name, field_path)
    spec = _PARSERS[field_type](node, name, field_path, common, _depth)
    logger.debug(f"Verified field {field_path} ({field_type.value})")
    return spec


def _parse_common(node: Dict[str, Any], name: str, path: str) -> Dict[str, Any]:
    """
    Check the attributes shared by every field type.

    Returns:
        Dict: Keyword arguments for the FieldSpec constructor
    """
    required = node.get("required")
    if required is not None and not isinstance(required, bool):
        raise FieldError(path, f"Required property must be a boolean for field {name}")

    for key in ("label", "placeholder"):
        value = node.get(key)
        if value is not None and not isinstance(value, str):
            raise FieldError(path, f"{key.capitalize()} must be a string for field {name}")

    newline = node.get("newline")
    if newline is not None and not isinstance(newline, bool):
        raise FieldError(path, f"Newline must be a boolean for field {name}")

    span = node.get("span")
    if span is not None and (not _is_integer(span) or not 1 <= span <= GRID_SPAN_MAX):
        raise FieldError(path, f"Span must be an integer between 1 and {GRID_SPAN_MAX} for field {name}")

    rules = node.get("rules")
    if rules is not None:
        if not isinstance(rules, list) or not all(isinstance(rule, dict) for rule in rules):
            raise FieldError(path, f"Rules must be an array of objects for field {name}")
        rules = tuple(rules)

    card = _parse_card(node["card"], name, path) if "card" in node else None

    return {
        "name": name,
        "label": node.get("label"),
        "required": required,
        "rules": rules,
        "placeholder": node.get("placeholder"),
        "newline": newline,
        "span": int(span) if span is not None else None,
        "card": card,
    }


def _parse_card(card: Any, name: str, path: str) -> CardSpec:
    if not isinstance(card, dict):
        raise FieldError(path, f"Card configuration must be an object for field {name}")

    for key in ("title", "description", "extra"):
        if card.get(key) is not None and not isinstance(card[key], str):
            raise FieldError(path, f"Card {key} must be a string for field {name}")
    if card.get("bordered") is not None and not isinstance(card["bordered"], bool):
        raise FieldError(path, f"Card bordered must be a boolean for field {name}")
    if card.get("size") is not None and card["size"] not in CARD_SIZES:
        raise FieldError(path, f"Card size must be either 'default' or 'small' for field {name}")

    return CardSpec(
        title=card.get("title"),
        description=card.get("description"),
        bordered=card.get("bordered"),
        size=card.get("size"),
        extra=card.get("extra"),
    )


def _default_of(node: Dict[str, Any]) -> Any:
    return node["defaultValue"] if "defaultValue" in node else UNSET


def _parse_length_bounds(node: Dict[str, Any], name: str, path: str, lower: str, upper: str):
    bounds = []
    for key in (lower, upper):
        value = node.get(key)
        if value is not None and (not _is_integer(value) or value < 0):
            raise FieldError(path, f"{key[0].upper()}{key[1:]} must be a non-negative integer for field {name}")
        bounds.append(int(value) if value is not None else None)
    if bounds[0] is not None and bounds[1] is not None and bounds[0] > bounds[1]:
        raise FieldError(path, f"{lower} cannot be greater than {upper} for field {name}")
    return bounds[0], bounds[1]


def _parse_string(node, name, path, common, depth) -> StringField:
    default = _default_of(node)
    if default is not UNSET and not isinstance(default, str):
        raise FieldError(path, f"Default value must be a string for field {name}")
    min_length, max_length = _parse_length_bounds(node, name, path, "minLength", "maxLength")
    return StringField(min_length=min_length, max_length=max_length, default_value=default, **common)


def _parse_longtext(node, name, path, common, depth) -> LongTextField:
    default = _default_of(node)
    if default is not UNSET and not isinstance(default, str):
        raise FieldError(path, f"Default value must be a string for field {name}")
    min_length, max_length = _parse_length_bounds(node, name, path, "minLength", "maxLength")
    rows = node.get("rows")
    if rows is not None and (not _is_integer(rows) or rows < 1):
        raise FieldError(path, f"Rows must be a positive integer for field {name}")
    return LongTextField(
        min_length=min_length,
        max_length=max_length,
        rows=int(rows) if rows is not None else None,
        default_value=default,
        **common,
    )


def _parse_number(node, name, path, common, depth) -> NumberField:
    default = _default_of(node)
    if default is not UNSET and not _is_number(default):
        raise FieldError(path, f"Default value must be a number for field {name}")

    for key in ("min", "max", "step"):
        value = node.get(key)
        if value is not None and not _is_number(value):
            raise FieldError(path, f"{key.capitalize()} value must be a number for field {name}")

    minimum, maximum = node.get("min"), node.get("max")
    if minimum is not None and maximum is not None and minimum > maximum:
        raise FieldError(path, f"Min value cannot be greater than max value for field {name}")
    if default is not UNSET:
        if minimum is not None and default < minimum:
            raise FieldError(path, f"Default value cannot be less than min value for field {name}")
        if maximum is not None and default > maximum:
            raise FieldError(path, f"Default value cannot be greater than max value for field {name}")

    return NumberField(min=minimum, max=maximum, step=node.get("step"), default_value=default, **common)


def _parse_checkbox(node, name, path, common, depth) -> CheckboxField:
    default = _default_of(node)
    if default is not UNSET and not isinstance(default, bool):
        raise FieldError(path, f"Default value must be a boolean for field {name}")
    default_checked = node.get("defaultChecked")
    if default_checked is not None and not isinstance(default_checked, bool):
        raise FieldError(path, f"DefaultChecked must be a boolean for field {name}")
    return CheckboxField(default_checked=default_checked, default_value=default, **common)


def _parse_options(node, name, path, field_type: FieldType):
    options = node.get("options")
    if not isinstance(options, list):
        raise FieldError(path, f"{field_type.value} field {name} must have an options array")
    if not options:
        raise FieldError(path, f"{field_type.value} field {name} must have at least one option")
    for option in options:
        if (
            not isinstance(option, dict)
            or not isinstance(option.get("label"), str)
            or not _is_option_value(option.get("value"))
        ):
            raise FieldError(
                path,
                f"Invalid options format for {name}. Each option must have label and value properties",
            )
    # Duplicate option values are allowed.
    return tuple(SelectOption(label=option["label"], value=option["value"]) for option in options)


def _check_choice_default(spec: ChoiceField, default: Any, path: str) -> None:
    # Checked against the authored value; the spec only holds a frozen copy.
    if default is UNSET:
        return
    values = spec.option_values
    if spec.is_multiple:
        if not isinstance(default, list):
            raise FieldError(path, f"Default value must be an array for multiple select field {spec.name}")
        if not all(_contains_option(values, v) for v in default):
            raise FieldError(path, f"Default value contains invalid options for field {spec.name}")
    elif not _contains_option(values, default):
        raise FieldError(path, f"Invalid default value for field {spec.name}")


def _parse_radio(node, name, path, common, depth) -> RadioField:
    options = _parse_options(node, name, path, FieldType.RADIO)
    default = _default_of(node)
    spec = RadioField(options=options, default_value=default, **common)
    _check_choice_default(spec, default, path)
    return spec


def _parse_select(node, name, path, common, depth) -> SelectField:
    options = _parse_options(node, name, path, FieldType.SELECT)
    mode = node.get("mode")
    if mode is not None and mode not in SELECT_MODES:
        raise FieldError(path, f"Invalid select mode for {name}. Must be either 'multiple' or 'tags'")
    default = _default_of(node)
    spec = SelectField(options=options, mode=mode, default_value=default, **common)
    _check_choice_default(spec, default, path)
    return spec


def _parse_upload(node, name, path, common, depth) -> UploadField:
    multiple = node.get("multiple")
    if multiple is not None and not isinstance(multiple, bool):
        raise FieldError(path, f"Multiple property must be a boolean for upload field {name}")
    max_count = node.get("maxCount")
    if max_count is not None and (not _is_integer(max_count) or max_count < 1):
        raise FieldError(path, f"MaxCount must be a positive integer for upload field {name}")
    max_size = node.get("maxSize")
    if max_size is not None and (not _is_number(max_size) or max_size <= 0):
        raise FieldError(path, f"MaxSize must be a positive number for upload field {name}")
    accept = node.get("accept")
    if accept is not None and not isinstance(accept, str):
        raise FieldError(path, f"Accept must be a MIME pattern string for upload field {name}")
    list_type = node.get("listType")
    if list_type is not None and list_type not in UPLOAD_LIST_TYPES:
        raise FieldError(
            path,
            f"Invalid list type for upload field {name}. Must be one of: {', '.join(UPLOAD_LIST_TYPES)}",
        )
    default = _default_of(node)
    if default is not UNSET and not isinstance(default, list):
        raise FieldError(path, f"Default value must be an array for upload field {name}")
    return UploadField(
        multiple=multiple,
        max_count=int(max_count) if max_count is not None else None,
        max_size=max_size,
        accept=accept,
        list_type=list_type,
        default_value=default,
        **common,
    )


def _parse_array(node, name, path, common, depth) -> ArrayField:
    items_node = node.get("items")
    if not isinstance(items_node, dict):
        raise FieldError(path, f"Array field {name} must have an items property defining the array elements")
    if items_node.get("type") == FieldType.ARRAY.value:
        raise FieldError(path, f"Nested arrays are not supported for field {name}")

    try:
        items = parse_field(items_node, _join_path(path, "items"), depth + 1)
    except FieldError as e:
        raise FieldError(e.path, f"Invalid array items for field {name}: {e.message}") from e

    min_items, max_items = _parse_length_bounds(node, name, path, "minItems", "maxItems")

    default = _default_of(node)
    if default is not UNSET:
        if not isinstance(default, list):
            raise FieldError(path, f"Default value must be an array for field {name}")
        if min_items is not None and len(default) < min_items:
            raise DefaultValueError(path, f"Default value has fewer than {min_items} items for field {name}")
        if max_items is not None and len(default) > max_items:
            raise DefaultValueError(path, f"Default value has more than {max_items} items for field {name}")
        for index, item in enumerate(default):
            check = validate_value(item, items)
            if not check.valid:
                raise DefaultValueError(
                    f"{path}.defaultValue[{index}]{check.path}",
                    f"Invalid default value item for field {name}: {check.error}",
                )

    return ArrayField(items=items, min_items=min_items, max_items=max_items, default_value=default, **common)


def _parse_object(node, name, path, common, depth) -> ObjectField:
    properties_node = node.get("properties")
    if not isinstance(properties_node, dict):
        raise FieldError(path, f"Object field {name} must have a properties object")

    properties: Dict[str, FieldSpec] = {}
    for key, prop in properties_node.items():
        if not isinstance(key, str) or not key:
            raise FieldError(path, f"Property keys must be non-empty strings in object field {name}")
        try:
            properties[key] = parse_field(prop, _join_path(path, key), depth + 1)
        except FieldError as e:
            raise FieldError(e.path, f"Invalid property {key} in object field {name}: {e.message}") from e

    default = _default_of(node)
    if default is not UNSET:
        if not isinstance(default, dict):
            raise FieldError(path, f"Default value must be an object for field {name}")
        for key, value in default.items():
            if key not in properties:
                raise DefaultValueError(
                    f"{path}.defaultValue.{key}",
                    f"Unknown property {key} in default value for field {name}",
                )
            check = validate_value(value, properties[key])
            if not check.valid:
                raise DefaultValueError(
                    f"{path}.defaultValue.{key}{check.path}",
                    f"Invalid default value for property {key} in field {name}: {check.error}",
                )

    return ObjectField(properties=MappingProxyType(properties), default_value=default, **common)


def _parse_date(node, name, path, common, depth) -> DateField:
    default = _default_of(node)
    if default is not UNSET and not is_valid_date(default):
        raise FieldError(path, f"Invalid date format for default value in field {name}")
    date_format = node.get("format")
    if date_format is not None and not isinstance(date_format, str):
        raise FieldError(path, f"Date format must be a string for field {name}")
    show_time = node.get("showTime")
    if show_time is not None and not isinstance(show_time, bool):
        raise FieldError(path, f"ShowTime must be a boolean for field {name}")
    return DateField(format=date_format, show_time=show_time, default_value=default, **common)


def _parse_json(node, name, path, common, depth) -> JsonField:
    default = _default_of(node)
    if default is not UNSET and not isinstance(default, str):
        raise FieldError(path, f"Default value must be a string for field {name}")
    return JsonField(default_value=default, **common)


_PARSERS: Dict[FieldType, Callable[..., FieldSpec]] = {
    FieldType.STRING: _parse_string,
    FieldType.LONGTEXT: _parse_longtext,
    FieldType.NUMBER: _parse_number,
    FieldType.CHECKBOX: _parse_checkbox,
    FieldType.RADIO: _parse_radio,
    FieldType.SELECT: _parse_select,
    FieldType.UPLOAD: _parse_upload,
    FieldType.ARRAY: _parse_array,
    FieldType.OBJECT: _parse_object,
    FieldType.DATE: _parse_date,
    FieldType.JSON: _parse_json,
}

assert set(_PARSERS) == set(FieldType), "every FieldType needs a parser"


def validate_value(value: Any, spec: FieldSpec, _depth: int = 0) -> ValueCheck:
    """
    Check that a concrete value matches the runtime type a field declares.

    This is shallower than parse_field: object and array values are opened
    one level deep, and anything nested below that is accepted as is.

    Args:
        value: Concrete value (e.g. one element of an array default)
        spec: Verified field the value belongs to

    Returns:
        ValueCheck: valid=True, or the reason and location of the mismatch

    Example:
        ```python
        spec = parse_field({"name": "n", "type": "number"})
        validate_value("5", spec).error  # "Value must be a number"
        ```
    """
    field_type = spec.field_type

    if field_type in (FieldType.STRING, FieldType.LONGTEXT, FieldType.JSON):
        if not isinstance(value, str):
            return ValueCheck(False, "Value must be a string")

    elif field_type == FieldType.NUMBER:
        if not _is_number(value):
            return ValueCheck(False, "Value must be a number")

    elif field_type == FieldType.CHECKBOX:
        if not isinstance(value, bool):
            return ValueCheck(False, "Value must be a boolean")

    elif field_type in (FieldType.RADIO, FieldType.SELECT):
        values = spec.option_values
        if spec.is_multiple:
            if not isinstance(value, list):
                return ValueCheck(False, "Value must be an array of option values")
            if not all(_contains_option(values, v) for v in value):
                return ValueCheck(False, "Invalid option value")
        elif not _contains_option(values, value):
            return ValueCheck(False, "Invalid option value")

    elif field_type == FieldType.UPLOAD:
        if not isinstance(value, list):
            return ValueCheck(False, "Value must be an array")

    elif field_type == FieldType.DATE:
        if not is_valid_date(value):
            return ValueCheck(False, "Value must be a valid date string")

    elif field_type == FieldType.OBJECT:
        if _depth > 0:
            return VALID
        if not isinstance(value, dict):
            return ValueCheck(False, "Value must be an object")
        for key, item in value.items():
            if key not in spec.properties:
                return ValueCheck(False, f"Unknown property {key}", f".{key}")
            check = validate_value(item, spec.properties[key], _depth + 1)
            if not check.valid:
                return ValueCheck(False, f"Property {key}: {check.error}", f".{key}{check.path}")

    elif field_type == FieldType.ARRAY:
        if _depth > 0:
            return VALID
        if not isinstance(value, list):
            return ValueCheck(False, "Value must be an array")
        for index, item in enumerate(value):
            check = validate_value(item, spec.items, _depth + 1)
            if not check.valid:
                return ValueCheck(False, f"Item {index}: {check.error}", f"[{index}]{check.path}")

    return VALID


def parse_layout(node: Any) -> Optional[LayoutSpec]:
    """
    Verify the optional form-wide layout block.

    Raises:
        ShapeError: If columns/mobileColumns are not positive integers or the
            gutter is not exactly two non-negative integers
    """
    if node is None:
        return None
    if not isinstance(node, dict):
        raise ShapeError("Layout must be an object")

    columns = node.get("columns")
    if columns is not None and (not _is_integer(columns) or columns < 1):
        raise ShapeError("Layout columns must be a positive integer")

    mobile_columns = node.get("mobileColumns")
    if mobile_columns is not None and (not _is_integer(mobile_columns) or mobile_columns < 1):
        raise ShapeError("Layout mobileColumns must be a positive integer")

    gutter = node.get("gutter")
    if gutter is not None:
        if (
            not isinstance(gutter, list)
            or len(gutter) != 2
            or not all(_is_integer(v) and v >= 0 for v in gutter)
        ):
            raise ShapeError("Layout gutter must be an array of two non-negative integers")
        gutter = (int(gutter[0]), int(gutter[1]))

    return LayoutSpec(
        columns=int(columns) if columns is not None else None,
        mobile_columns=int(mobile_columns) if mobile_columns is not None else None,
        gutter=gutter,
    )


def parse_form_schema(document: Any) -> FormSchema:
    """
    Verify a decoded schema document and build the FormSchema.

    Fields are verified in order and the first failing field stops the walk;
    the layout block is checked after all fields pass.

    Args:
        document: Decoded JSON root

    Returns:
        FormSchema: Verified schema

    Raises:
        ShapeError: If the root is not an object with a fields array, or the
            layout block is malformed
        FieldError: On the first invalid field
    """
    if not isinstance(document, dict):
        raise ShapeError("Schema must be a valid JSON object")

    fields_node = document.get("fields")
    if not isinstance(fields_node, list):
        raise ShapeError("Schema must have a fields array")

    fields: List[FieldSpec] = []
    seen = set()
    for index, node in enumerate(fields_node):
        try:
            spec = parse_field(node)
        except FieldError as e:
            if e.path is None:
                e.path = f"fields[{index}]"
            raise
        if spec.name in seen:
            raise FieldError(spec.name, f"Duplicate field name {spec.name}")
        seen.add(spec.name)
        fields.append(spec)

    layout = parse_layout(document.get("layout"))

    logger.debug(f"Verified schema with {len(fields)} top-level field(s)")
    return FormSchema(fields=tuple(fields), layout=layout)
