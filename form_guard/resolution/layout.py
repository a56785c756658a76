"""
Layout resolver - assign grid spans to fields.

Spans are in grid units (24 per row by default):
    - Top-level fields take a full row
    - Properties of an object take grid_width // columns
    - Properties of an object array item take a narrow span for checkboxes
      and a wider one for everything else
    - newline: true always means a full row
    - An authored span overrides the computed one unless newline is set
"""

from dataclasses import replace
from enum import Enum
from typing import Optional

from form_guard.config import DEFAULT_OPTIONS, EngineOptions
from form_guard.schema.types import CardSpec, CheckboxField, FieldSpec, LayoutSpec


class SlotContext(str, Enum):
    """Where a field sits in the resolved tree."""

    ROOT = "root"
    OBJECT_PROPERTY = "object_property"
    ARRAY_ITEM = "array_item"
    ARRAY_ITEM_PROPERTY = "array_item_property"


def _columns(layout: Optional[LayoutSpec], options: EngineOptions) -> int:
    if layout is not None and layout.columns is not None:
        return layout.columns
    return options.default_columns


def resolve_span(
    spec: FieldSpec,
    context: SlotContext,
    layout: Optional[LayoutSpec] = None,
    options: EngineOptions = DEFAULT_OPTIONS,
) -> int:
    """
    Compute the wide-screen column span of a field.

    Args:
        spec: Verified field
        context: Position of the field in the tree
        layout: Form-wide layout block, if any
        options: Engine options (grid width, array spans)

    Returns:
        int: Span between 1 and options.grid_width
    """
    full = options.grid_width
    if spec.newline:
        return full
    if spec.span is not None:
        return min(spec.span, full)

    if context == SlotContext.OBJECT_PROPERTY:
        # Every object divides its row by the column count, carded or not.
        return max(1, full // _columns(layout, options))
    if context == SlotContext.ARRAY_ITEM_PROPERTY:
        if isinstance(spec, CheckboxField):
            return options.array_checkbox_span
        return options.array_item_span
    return full


def resolve_mobile_span(
    spec: FieldSpec,
    layout: Optional[LayoutSpec] = None,
    options: EngineOptions = DEFAULT_OPTIONS,
) -> int:
    """Compute the narrow-screen span from layout.mobileColumns."""
    full = options.grid_width
    if spec.newline:
        return full
    columns = options.default_mobile_columns
    if layout is not None and layout.mobile_columns is not None:
        columns = layout.mobile_columns
    return max(1, full // columns)


def resolve_card(spec: FieldSpec) -> Optional[CardSpec]:
    """Return the field's card with its title defaulted to the field label."""
    if spec.card is None:
        return None
    if spec.card.title:
        return spec.card
    return replace(spec.card, title=spec.display_label)
