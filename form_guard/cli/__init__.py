"""
Command-line interface module.

This module provides a rich terminal interface for FormGuard using Typer and Rich.

Commands:
    - validate: Verify a form schema file
    - resolve: Resolve a schema into field descriptors and initial values
    - types: List the field grammar

Features:
    - Syntax-highlighted JSON output
    - Colored error panels with location and hint
    - Resolved field tree and initial-value table

Example Usage:
    ```bash
    # Verify a schema
    form-guard validate --schema profile.json

    # Resolve with caller overrides and save the result
    form-guard resolve \\
        --schema profile.json \\
        --initial values.json \\
        --output resolved.json
    ```
"""

from .main import app

__all__ = ["app"]
