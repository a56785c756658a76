"""
Engine configuration.

EngineOptions is passed explicitly into SchemaEngine; nothing reads global
state. The defaults match a 24-column grid renderer.
"""

from dataclasses import dataclass, field
from datetime import datetime

from form_guard.schema.dates import REFERENCE_DATE


@dataclass(frozen=True)
class EngineOptions:
    """
    Tunables for rule and layout resolution.

    Attributes:
        grid_width: Number of grid units in a full-width row
        default_columns: Columns used when the schema layout omits them
        default_mobile_columns: Mobile columns used when the layout omits them
        array_item_span: Span of a non-checkbox property inside an array item
        array_checkbox_span: Span of a checkbox property inside an array item
        date_format: Display format for date fields that declare none
        date_reference: Source of date components missing from a date string
    """

    grid_width: int = 24
    default_columns: int = 1
    default_mobile_columns: int = 1
    array_item_span: int = 12
    array_checkbox_span: int = 8
    date_format: str = "YYYY-MM-DD"
    date_reference: datetime = field(default=REFERENCE_DATE)

    def __post_init__(self):
        for name in ("grid_width", "default_columns", "default_mobile_columns",
                     "array_item_span", "array_checkbox_span"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if self.array_item_span > self.grid_width or self.array_checkbox_span > self.grid_width:
            raise ValueError("Array item spans cannot exceed grid_width")


DEFAULT_OPTIONS = EngineOptions()
