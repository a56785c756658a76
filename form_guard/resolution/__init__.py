"""
Resolution module.

Turns a verified FormSchema into what an external renderer consumes.

Components:
    - defaults: Flat initial-value extraction and caller override merging
    - rules: Effective validation rules per field
    - layout: Column spans and card metadata per field
    - resolver: ResolvedField tree construction
"""

from form_guard.resolution.defaults import extract_defaults, merge_initial_values
from form_guard.resolution.layout import SlotContext, resolve_card, resolve_mobile_span, resolve_span
from form_guard.resolution.resolver import FieldResolver, ResolvedField, resolve_fields
from form_guard.resolution.rules import DateTransform, Rule, RuleKind, resolve_rules

__all__ = [
    "extract_defaults",
    "merge_initial_values",
    "resolve_rules",
    "Rule",
    "RuleKind",
    "DateTransform",
    "resolve_span",
    "resolve_mobile_span",
    "resolve_card",
    "SlotContext",
    "ResolvedField",
    "FieldResolver",
    "resolve_fields",
]
