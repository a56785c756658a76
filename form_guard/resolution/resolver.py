"""
Field resolver - turn a verified schema into the renderer's descriptor tree.

Every ResolvedField carries what a widget renderer needs to paint and bind one
input: the absolute schema path, the binding path into the initial values,
effective rules, spans, card metadata, options and the initial value.

Paths:
    path        Dotted location in the schema
                ("personalInfo.age", "contactMethods.items.type")
    value_path  Key the renderer binds the value to. Object properties use
                their own key (matching the flattened defaults); values inside
                array elements use "<array>[].<key>"
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from form_guard.config import DEFAULT_OPTIONS, EngineOptions
from form_guard.resolution.layout import SlotContext, resolve_card, resolve_mobile_span, resolve_span
from form_guard.resolution.rules import Rule, resolve_rules
from form_guard.schema.types import (
    UNSET,
    ArrayField,
    CardSpec,
    CheckboxField,
    ChoiceField,
    DateField,
    FieldSpec,
    FieldType,
    FormSchema,
    ObjectField,
    SelectOption,
    UploadField,
    freeze,
)

logger = logging.getLogger(__name__)


def to_jsonable(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def value_prop_for(spec: FieldSpec) -> str:
    """Name of the widget property that holds the field value."""
    if isinstance(spec, CheckboxField):
        return "checked"
    if isinstance(spec, UploadField):
        return "fileList"
    return "value"


@dataclass(frozen=True)
class ResolvedField:
    """
    A verified field plus everything computed for rendering it.

    Attributes:
        name: Field name
        label: Display label (falls back to the name)
        type: Declared field type
        path: Absolute dotted schema path
        value_path: Binding path into the initial-value mapping
        spec: The verified FieldSpec
        rules: Effective validation rules
        span: Wide-screen column span
        mobile_span: Narrow-screen column span
        newline: Whether the field forces a new row
        card: Effective card metadata
        options: Options for radio/select fields
        value_prop: Widget property holding the value
        date_format: Display format for date fields (None otherwise)
        initial_value: Effective initial value (read-only), or UNSET
        children: Resolved properties (object) or element shape (array)
    """

    name: str
    label: str
    type: FieldType
    path: str
    value_path: str
    spec: FieldSpec
    rules: Tuple[Rule, ...]
    span: int
    mobile_span: int
    newline: bool
    card: Optional[CardSpec]
    options: Tuple[SelectOption, ...]
    value_prop: str
    date_format: Optional[str] = None
    initial_value: Any = UNSET
    children: Tuple["ResolvedField", ...] = ()

    @property
    def has_initial_value(self) -> bool:
        return self.initial_value is not UNSET

    def walk(self) -> Iterator["ResolvedField"]:
        """Yield this field and all descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "label": self.label,
            "type": self.type.value,
            "path": self.path,
            "valuePath": self.value_path,
            "rules": [rule.to_dict() for rule in self.rules],
            "span": self.span,
            "mobileSpan": self.mobile_span,
            "newline": self.newline,
            "valueProp": self.value_prop,
        }
        if self.card is not None:
            data["card"] = self.card.to_dict()
        if self.options:
            data["options"] = [option.to_dict() for option in self.options]
        if self.date_format is not None:
            data["format"] = self.date_format
        if self.has_initial_value:
            data["initialValue"] = to_jsonable(self.initial_value)
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


class FieldResolver:
    """
    Build ResolvedField trees for one schema and one set of initial values.

    Attributes:
        schema: Verified schema
        initial_values: Merged initial values (defaults + caller overrides)
        options: Engine options
    """

    def __init__(
        self,
        schema: FormSchema,
        initial_values: Optional[Mapping[str, Any]] = None,
        options: EngineOptions = DEFAULT_OPTIONS,
    ):
        self.schema = schema
        self.initial_values = dict(initial_values or {})
        self.options = options

    def resolve(self) -> Tuple[ResolvedField, ...]:
        """Resolve every top-level field in authored order."""
        tree = tuple(
            self._resolve(spec, spec.name, spec.name, SlotContext.ROOT, in_array=False)
            for spec in self.schema.fields
        )
        logger.debug(f"Resolved {sum(1 for f in tree for _ in f.walk())} field descriptor(s)")
        return tree

    def _resolve(
        self,
        spec: FieldSpec,
        path: str,
        value_path: str,
        context: SlotContext,
        in_array: bool,
    ) -> ResolvedField:
        layout = self.schema.layout
        # Read-only copy, detached from the result's initial_values mapping.
        initial = UNSET if in_array else freeze(self.initial_values.get(value_path, UNSET))

        return ResolvedField(
            name=spec.name,
            label=spec.display_label,
            type=spec.field_type,
            path=path,
            value_path=value_path,
            spec=spec,
            rules=resolve_rules(spec, self.options.date_reference),
            span=resolve_span(spec, context, layout, self.options),
            mobile_span=resolve_mobile_span(spec, layout, self.options),
            newline=bool(spec.newline),
            card=resolve_card(spec),
            options=spec.options if isinstance(spec, ChoiceField) else (),
            value_prop=value_prop_for(spec),
            date_format=(spec.format or self.options.date_format) if isinstance(spec, DateField) else None,
            initial_value=initial,
            children=self._children(spec, path, value_path, context, in_array),
        )

    def _children(
        self,
        spec: FieldSpec,
        path: str,
        value_path: str,
        context: SlotContext,
        in_array: bool,
    ) -> Tuple[ResolvedField, ...]:
        if isinstance(spec, ObjectField):
            child_context = (
                SlotContext.ARRAY_ITEM_PROPERTY if context == SlotContext.ARRAY_ITEM
                else SlotContext.OBJECT_PROPERTY
            )
            return tuple(
                self._resolve(
                    prop,
                    f"{path}.{key}",
                    f"{value_path}.{key}" if in_array else key,
                    child_context,
                    in_array,
                )
                for key, prop in spec.properties.items()
            )

        if isinstance(spec, ArrayField) and spec.items is not None:
            items = spec.items
            item_value_path = f"{value_path}[]"
            if not isinstance(items, ObjectField):
                item_value_path = f"{item_value_path}.{items.name}"
            return (
                self._resolve(items, f"{path}.items", item_value_path, SlotContext.ARRAY_ITEM, in_array=True),
            )

        return ()


def resolve_fields(
    schema: FormSchema,
    initial_values: Optional[Mapping[str, Any]] = None,
    options: EngineOptions = DEFAULT_OPTIONS,
) -> Tuple[ResolvedField, ...]:
    """
    Resolve a verified schema into its descriptor tree.

    Args:
        schema: Verified FormSchema
        initial_values: Merged initial values keyed by binding path
        options: Engine options

    Returns:
        Tuple[ResolvedField, ...]: One descriptor per top-level field, in order
    """
    return FieldResolver(schema, initial_values, options).resolve()
