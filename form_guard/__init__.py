"""
FormGuard: Verification and Resolution for JSON Form Schemas

FormGuard takes an untyped JSON document describing a form (field names,
types, nesting, validation rules, layout hints), verifies it against a closed
recursive field grammar and resolves it into a tree of renderable field
descriptors with defaults, effective rules and layout spans. Painting the
form is left to an external renderer.

Key Features:
    - Closed field grammar: string, longtext, number, checkbox, radio, select,
      upload, array, object, date, json
    - First-failure-wins verification with dotted field paths
    - Flat initial-value extraction with caller overrides
    - Generated required/range/date rules and grid span assignment
    - Pure and stateless: the same text always yields the same result

Quick Start:
    ```python
    from form_guard import SchemaEngine

    engine = SchemaEngine()
    result = engine.resolve('''
        {"fields": [
            {"name": "age", "label": "Age", "type": "number",
             "min": 0, "max": 150, "defaultValue": 25, "required": true}
        ]}
    ''')
    print(result.initial_values)  # {'age': 25}
    print(result.tree[0].rules)
    ```

Architecture:
    1. Validator: raw JSON -> verified FieldSpec tree (form_guard.schema)
    2. Default Resolver: flat initial values (form_guard.resolution.defaults)
    3. Rule/Layout Resolver: rules, spans, cards (form_guard.resolution)
    4. Engine: orchestration and structured errors (form_guard.engine)
"""

__version__ = "0.1.0"

# Main API exports - these are the primary user-facing classes
from form_guard.api import (  # noqa: F401
    EngineError,
    EngineOptions,
    ResolutionResult,
    SchemaEngine,
    VerificationResult,
    resolve,
    verify_schema,
)

__all__ = [
    "SchemaEngine",
    "ResolutionResult",
    "EngineOptions",
    "EngineError",
    "VerificationResult",
    "resolve",
    "verify_schema",
]
