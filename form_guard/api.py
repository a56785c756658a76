"""
High-level Python API for FormGuard.

This module provides the main user-facing entry points for verifying and
resolving form schemas.
"""

from form_guard.config import EngineOptions
from form_guard.engine import ResolutionResult, SchemaEngine, resolve
from form_guard.validation import EngineError, VerificationResult, verify_schema

# Re-export for convenience
__all__ = [
    "SchemaEngine",
    "ResolutionResult",
    "EngineOptions",
    "EngineError",
    "VerificationResult",
    "resolve",
    "verify_schema",
]
