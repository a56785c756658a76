"""
Field type definitions for form schemas.

This module defines the closed field grammar used to represent an authored
form schema once it has been verified. Every authored field becomes exactly
one immutable FieldSpec variant; the rest of the engine dispatches on the
variant and never re-checks raw JSON types.

Type Hierarchy:
    FieldSpec (abstract)
    ├── StringField: Single-line text with optional length bounds
    ├── LongTextField: Multi-line text with optional length bounds and rows
    ├── NumberField: Numeric input with min/max/step
    ├── CheckboxField: Boolean toggle
    ├── RadioField: Single choice from an options list
    ├── SelectField: Single or multiple choice from an options list
    ├── UploadField: File list with count/size/MIME constraint declarations
    ├── ArrayField: Repeated element described by a single nested field
    ├── ObjectField: Named nested properties
    ├── DateField: Date/time value with display format
    └── JsonField: Raw JSON text passthrough

Each variant knows how to:
    - Report its FieldType
    - Convert itself back to its authored JSON form (to_dict)
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple, Union


class FieldType(str, Enum):
    """Closed set of field types a form schema may use."""

    STRING = "string"
    LONGTEXT = "longtext"
    NUMBER = "number"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    SELECT = "select"
    UPLOAD = "upload"
    ARRAY = "array"
    OBJECT = "object"
    DATE = "date"
    JSON = "json"

    @classmethod
    def names(cls) -> List[str]:
        return [member.value for member in cls]


class _Unset:
    """Marker for an attribute that was absent from the authored JSON."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()

OptionValue = Union[str, int, float]

CARD_SIZES = ("default", "small")
SELECT_MODES = ("multiple", "tags")
UPLOAD_LIST_TYPES = ("text", "picture", "picture-card")


def freeze(value: Any) -> Any:
    """
    Return a read-only copy of a decoded JSON value.

    Objects become MappingProxyType and arrays become tuples, recursively.
    Scalars are returned as is.
    """
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of freeze: fresh dicts and lists, safe to hand out."""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(v) for v in value]
    return value


@dataclass(frozen=True)
class CardSpec:
    """
    Visual container metadata for a field.

    Purely a rendering hint; carries no validation semantics.

    Attributes:
        title: Card title (renderers fall back to the field label)
        description: Paragraph shown above the card body
        bordered: Whether the card has a border
        size: Either "default" or "small"
        extra: Extra text shown in the card header
    """

    title: Optional[str] = None
    description: Optional[str] = None
    bordered: Optional[bool] = None
    size: Optional[str] = None
    extra: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "title": self.title,
            "description": self.description,
            "bordered": self.bordered,
            "size": self.size,
            "extra": self.extra,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class SelectOption:
    """One entry of a radio/select options list."""

    label: str
    value: OptionValue

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "value": self.value}


@dataclass(frozen=True)
class FieldSpec(ABC):
    """
    Abstract base class for all verified field descriptions.

    Attributes:
        name: Field name, non-empty and unique within its scope
        label: Display label (None means "use the name")
        required: Whether a value must be present
        rules: Explicit rule descriptors, which suppress generated rules
        placeholder: Input placeholder text
        newline: Force the field onto a full-width row
        span: Explicit column span override (1-24)
        card: Card grouping metadata
        default_value: Authored default (read-only copy), or UNSET when absent
    """

    name: str
    label: Optional[str] = None
    required: Optional[bool] = None
    rules: Optional[Tuple[Mapping[str, Any], ...]] = None
    placeholder: Optional[str] = None
    newline: Optional[bool] = None
    span: Optional[int] = None
    card: Optional[CardSpec] = None
    default_value: Any = UNSET

    field_type: ClassVar[FieldType]

    def __post_init__(self):
        # Authored containers are stored read-only; to_dict thaws them.
        if self.rules is not None:
            object.__setattr__(self, "rules", tuple(freeze(rule) for rule in self.rules))
        object.__setattr__(self, "default_value", freeze(self.default_value))

    @property
    def type(self) -> FieldType:
        return self.field_type

    @property
    def display_label(self) -> str:
        return self.label if self.label is not None else self.name

    @property
    def has_default(self) -> bool:
        return self.default_value is not UNSET

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert this field back to its authored JSON form.

        The result can be fed to the field validator again and yields the
        same verdict as the original input.

        Returns:
            Dict: JSON-compatible field description
        """
        data: Dict[str, Any] = {"name": self.name, "type": self.field_type.value}
        optional = {
            "label": self.label,
            "required": self.required,
            "placeholder": self.placeholder,
            "newline": self.newline,
            "span": self.span,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        if self.rules is not None:
            data["rules"] = [thaw(rule) for rule in self.rules]
        if self.card is not None:
            data["card"] = self.card.to_dict()
        data.update(self._payload())
        if self.default_value is not UNSET:
            data["defaultValue"] = thaw(self.default_value)
        return data

    def _payload(self) -> Dict[str, Any]:
        return {}


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class StringField(FieldSpec):
    """Single-line text input."""

    min_length: Optional[int] = None
    max_length: Optional[int] = None

    field_type: ClassVar[FieldType] = FieldType.STRING

    def _payload(self) -> Dict[str, Any]:
        return _drop_none({"minLength": self.min_length, "maxLength": self.max_length})


@dataclass(frozen=True)
class LongTextField(FieldSpec):
    """Multi-line text input."""

    min_length: Optional[int] = None
    max_length: Optional[int] = None
    rows: Optional[int] = None

    field_type: ClassVar[FieldType] = FieldType.LONGTEXT

    def _payload(self) -> Dict[str, Any]:
        return _drop_none({
            "minLength": self.min_length,
            "maxLength": self.max_length,
            "rows": self.rows,
        })


@dataclass(frozen=True)
class NumberField(FieldSpec):
    """
    Numeric input.

    Invariants (enforced by the validator):
        min <= max when both are present
        min <= default_value <= max when a default is present
    """

    min: Optional[Union[int, float]] = None
    max: Optional[Union[int, float]] = None
    step: Optional[Union[int, float]] = None

    field_type: ClassVar[FieldType] = FieldType.NUMBER

    def _payload(self) -> Dict[str, Any]:
        return _drop_none({"min": self.min, "max": self.max, "step": self.step})


@dataclass(frozen=True)
class CheckboxField(FieldSpec):
    """Boolean toggle. `default_checked` is the legacy spelling of the default."""

    default_checked: Optional[bool] = None

    field_type: ClassVar[FieldType] = FieldType.CHECKBOX

    @property
    def has_default(self) -> bool:
        return self.default_value is not UNSET or self.default_checked is not None

    @property
    def effective_default(self) -> Any:
        if self.default_value is not UNSET:
            return self.default_value
        return self.default_checked if self.default_checked is not None else UNSET

    def _payload(self) -> Dict[str, Any]:
        return _drop_none({"defaultChecked": self.default_checked})


@dataclass(frozen=True)
class ChoiceField(FieldSpec):
    """Shared base for fields that pick from a declared options list."""

    options: Tuple[SelectOption, ...] = ()

    @property
    def option_values(self) -> List[OptionValue]:
        return [option.value for option in self.options]

    @property
    def is_multiple(self) -> bool:
        return False

    def _payload(self) -> Dict[str, Any]:
        return {"options": [option.to_dict() for option in self.options]}


@dataclass(frozen=True)
class RadioField(ChoiceField):
    """Single choice rendered as a radio group."""

    field_type: ClassVar[FieldType] = FieldType.RADIO


@dataclass(frozen=True)
class SelectField(ChoiceField):
    """Dropdown; `mode` of "multiple" or "tags" makes the value a list."""

    mode: Optional[str] = None

    field_type: ClassVar[FieldType] = FieldType.SELECT

    @property
    def is_multiple(self) -> bool:
        return self.mode in SELECT_MODES

    def _payload(self) -> Dict[str, Any]:
        return _drop_none({**super()._payload(), "mode": self.mode})


@dataclass(frozen=True)
class UploadField(FieldSpec):
    """
    File list input.

    Only constraint declarations live here; enforcing them against real files
    is the upload collaborator's job.
    """

    multiple: Optional[bool] = None
    max_count: Optional[int] = None
    max_size: Optional[Union[int, float]] = None
    accept: Optional[str] = None
    list_type: Optional[str] = None

    field_type: ClassVar[FieldType] = FieldType.UPLOAD

    def _payload(self) -> Dict[str, Any]:
        return _drop_none({
            "multiple": self.multiple,
            "maxCount": self.max_count,
            "maxSize": self.max_size,
            "accept": self.accept,
            "listType": self.list_type,
        })


@dataclass(frozen=True)
class ArrayField(FieldSpec):
    """
    Repeated element list.

    Attributes:
        items: Shape of every element (never another ArrayField)
        min_items: Minimum number of elements
        max_items: Maximum number of elements
    """

    items: Optional[FieldSpec] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None

    field_type: ClassVar[FieldType] = FieldType.ARRAY

    def _payload(self) -> Dict[str, Any]:
        return _drop_none({
            "items": self.items.to_dict() if self.items is not None else None,
            "minItems": self.min_items,
            "maxItems": self.max_items,
        })


@dataclass(frozen=True)
class ObjectField(FieldSpec):
    """
    Group of named nested fields.

    Property keys need not equal the nested field's own name.
    """

    properties: Mapping[str, FieldSpec] = field(default_factory=lambda: MappingProxyType({}))

    field_type: ClassVar[FieldType] = FieldType.OBJECT

    def _payload(self) -> Dict[str, Any]:
        return {"properties": {k: v.to_dict() for k, v in self.properties.items()}}


@dataclass(frozen=True)
class DateField(FieldSpec):
    """Date or date/time value; the default is kept as the authored string."""

    format: Optional[str] = None
    show_time: Optional[bool] = None

    field_type: ClassVar[FieldType] = FieldType.DATE

    def _payload(self) -> Dict[str, Any]:
        return _drop_none({"format": self.format, "showTime": self.show_time})


@dataclass(frozen=True)
class JsonField(FieldSpec):
    """Raw JSON text; the default is passed through without inspection."""

    field_type: ClassVar[FieldType] = FieldType.JSON


FIELD_CLASSES: Dict[FieldType, type] = {
    cls.field_type: cls
    for cls in (
        StringField,
        LongTextField,
        NumberField,
        CheckboxField,
        RadioField,
        SelectField,
        UploadField,
        ArrayField,
        ObjectField,
        DateField,
        JsonField,
    )
}

assert set(FIELD_CLASSES) == set(FieldType), "every FieldType needs a FieldSpec variant"


@dataclass(frozen=True)
class LayoutSpec:
    """
    Form-wide layout block.

    Attributes:
        columns: Columns per row on wide screens
        mobile_columns: Columns per row on narrow screens
        gutter: (horizontal, vertical) spacing
    """

    columns: Optional[int] = None
    mobile_columns: Optional[int] = None
    gutter: Optional[Tuple[int, int]] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "columns": self.columns,
            "mobileColumns": self.mobile_columns,
            "gutter": list(self.gutter) if self.gutter is not None else None,
        })


@dataclass(frozen=True)
class FormSchema:
    """Root of a verified schema; `fields` order is rendering order."""

    fields: Tuple[FieldSpec, ...] = ()
    layout: Optional[LayoutSpec] = None

    def get_field(self, name: str) -> Optional[FieldSpec]:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"fields": [spec.to_dict() for spec in self.fields]}
        if self.layout is not None:
            data["layout"] = self.layout.to_dict()
        return data
