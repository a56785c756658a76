"""
Schema engine - the facade an external renderer talks to.

This is the class that ties all components together:
    1. Decode raw schema text as JSON
    2. Verify the document shape, every field and the layout block
    3. Extract default values and merge caller initial values
    4. Resolve rules, spans and cards into a ResolvedField tree

The engine is stateless: it holds only its frozen options, and every call
builds a fresh result from scratch. Schema errors never escape as exceptions;
they are reported in ResolutionResult.error and no tree is emitted.

Usage:
    ```python
    from form_guard import SchemaEngine

    engine = SchemaEngine()
    result = engine.resolve(schema_text, initial_values={"name": "Ada"})

    if result.is_valid:
        for field in result.tree:
            print(field.path, field.span, field.rules)
    else:
        print(result.error.message)
    ```
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from form_guard.config import DEFAULT_OPTIONS, EngineOptions
from form_guard.resolution.defaults import extract_defaults, merge_initial_values
from form_guard.resolution.resolver import ResolvedField, resolve_fields, to_jsonable
from form_guard.schema.types import FormSchema
from form_guard.validation.validator import EngineError, VerificationResult, verify_schema

logger = logging.getLogger(__name__)


@dataclass
class ResolutionResult:
    """
    Result of resolving schema text.

    Attributes:
        is_valid: Whether the schema verified
        tree: Resolved top-level fields in authored order (empty if invalid)
        initial_values: Flat binding path -> initial value (empty if invalid)
        schema: Verified schema (None if invalid)
        error: First failure found (None if valid)
    """

    is_valid: bool
    tree: Tuple[ResolvedField, ...] = ()
    initial_values: Dict[str, Any] = field(default_factory=dict)
    schema: Optional[FormSchema] = None
    error: Optional[EngineError] = None

    def find(self, path: str) -> Optional[ResolvedField]:
        """Look up a resolved field by its dotted schema path."""
        for top in self.tree:
            for resolved in top.walk():
                if resolved.path == path:
                    return resolved
        return None

    def to_dict(self) -> Dict[str, Any]:
        if not self.is_valid:
            return {"valid": False, "error": self.error.to_dict() if self.error else None}
        return {
            "valid": True,
            "fields": [resolved.to_dict() for resolved in self.tree],
            "initialValues": to_jsonable(self.initial_values),
        }


class SchemaEngine:
    """
    Verify and resolve form schemas.

    Attributes:
        options: Engine options used for every resolution
    """

    def __init__(self, options: Optional[EngineOptions] = None):
        """
        Initialize the engine.

        Args:
            options: Layout and date options (None for the defaults)
        """
        self.options = options or DEFAULT_OPTIONS

    def verify(self, raw_text: Union[str, bytes]) -> VerificationResult:
        """Verify schema text without resolving it."""
        return verify_schema(raw_text)

    def resolve(
        self,
        raw_text: Union[str, bytes],
        initial_values: Optional[Mapping[str, Any]] = None,
    ) -> ResolutionResult:
        """
        Verify schema text and resolve it for rendering.

        Args:
            raw_text: JSON text describing the form
            initial_values: Caller values that override schema defaults key by key

        Returns:
            ResolutionResult: Tree and initial values, or the first error

        Raises:
            TypeError: If initial_values is not a mapping
        """
        verification = self.verify(raw_text)
        if not verification.is_valid:
            return ResolutionResult(is_valid=False, error=verification.error)
        return self.resolve_schema(verification.schema, initial_values)

    def resolve_schema(
        self,
        schema: FormSchema,
        initial_values: Optional[Mapping[str, Any]] = None,
    ) -> ResolutionResult:
        """
        Resolve an already verified schema.

        Args:
            schema: Verified FormSchema
            initial_values: Caller values that override schema defaults

        Returns:
            ResolutionResult: Always valid
        """
        if initial_values is not None and not isinstance(initial_values, Mapping):
            raise TypeError(
                f"initial_values must be a mapping, got {type(initial_values).__name__}"
            )

        defaults = extract_defaults(schema, self.options.date_reference)
        values = merge_initial_values(defaults, initial_values)
        tree = resolve_fields(schema, values, self.options)

        logger.info(f"Resolved schema: {len(tree)} field(s), {len(values)} initial value(s)")
        return ResolutionResult(is_valid=True, tree=tree, initial_values=values, schema=schema)


def resolve(
    raw_text: Union[str, bytes],
    initial_values: Optional[Mapping[str, Any]] = None,
    options: Optional[EngineOptions] = None,
) -> ResolutionResult:
    """
    Resolve schema text with a throwaway engine.

    Example:
        ```python
        result = resolve('{"fields": [{"name": "age", "type": "number", "defaultValue": 25}]}')
        assert result.initial_values == {"age": 25}
        ```
    """
    return SchemaEngine(options).resolve(raw_text, initial_values)
