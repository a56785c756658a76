"""
Rule resolver - compute the effective validation rules for a field.

Authored `rules` always win and suppress every generated rule. Otherwise the
rules are generated from the field, in this order:
    1. required: true         -> "required" rule naming the field label
    2. number with min or max  -> "range" rule
    3. date                    -> "date" rule whose transform parses raw values
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from form_guard.schema.dates import REFERENCE_DATE, try_parse_date
from form_guard.schema.types import DateField, FieldSpec, NumberField, freeze, thaw


class RuleKind(str, Enum):
    REQUIRED = "required"
    RANGE = "range"
    DATE = "date"
    CUSTOM = "custom"


@dataclass(frozen=True)
class DateTransform:
    """
    Parse a raw widget value into a datetime before validation.

    Values that are empty, already datetimes or unparsable are returned
    unchanged so the renderer's own type check reports them.
    """

    reference: datetime = REFERENCE_DATE

    def __call__(self, value: Any) -> Any:
        if value is None or value == "" or isinstance(value, datetime):
            return value
        parsed = try_parse_date(value, self.reference)
        return parsed if parsed is not None else value


@dataclass(frozen=True)
class Rule:
    """
    One effective validation rule handed to the renderer.

    Attributes:
        kind: Rule category
        message: Message shown when the rule fails
        min: Lower bound for range rules
        max: Upper bound for range rules
        transform: Value transform applied before validation (date rules)
        params: Authored descriptor for custom rules
    """

    kind: RuleKind
    message: Optional[str] = None
    min: Optional[Union[int, float]] = None
    max: Optional[Union[int, float]] = None
    transform: Optional[DateTransform] = None
    params: Optional[Mapping[str, Any]] = field(default=None)

    def to_dict(self) -> Dict[str, Any]:
        if self.kind == RuleKind.CUSTOM:
            return thaw(self.params or {})
        data: Dict[str, Any] = {"kind": self.kind.value}
        if self.message is not None:
            data["message"] = self.message
        if self.min is not None:
            data["min"] = self.min
        if self.max is not None:
            data["max"] = self.max
        if self.transform is not None:
            data["transform"] = "parse_date"
        return data


def _range_message(label: str, minimum, maximum) -> str:
    if minimum is not None and maximum is not None:
        return f"{label} must be between {minimum} and {maximum}"
    if minimum is not None:
        return f"{label} must be at least {minimum}"
    return f"{label} must be at most {maximum}"


def resolve_rules(spec: FieldSpec, reference: datetime = REFERENCE_DATE) -> Tuple[Rule, ...]:
    """
    Compute the effective rule sequence for one field.

    Args:
        spec: Verified field
        reference: Date reference used by the date transform

    Returns:
        Tuple[Rule, ...]: Rules in evaluation order (may be empty)
    """
    if spec.rules is not None:
        return tuple(
            Rule(kind=RuleKind.CUSTOM, message=rule.get("message"), params=freeze(rule))
            for rule in spec.rules
        )

    label = spec.display_label
    rules = []
    if spec.required:
        rules.append(Rule(kind=RuleKind.REQUIRED, message=f"Please input {label}"))
    if isinstance(spec, NumberField) and (spec.min is not None or spec.max is not None):
        rules.append(Rule(
            kind=RuleKind.RANGE,
            message=_range_message(label, spec.min, spec.max),
            min=spec.min,
            max=spec.max,
        ))
    if isinstance(spec, DateField):
        rules.append(Rule(
            kind=RuleKind.DATE,
            message=f"{label} must be a valid date",
            transform=DateTransform(reference),
        ))
    return tuple(rules)
