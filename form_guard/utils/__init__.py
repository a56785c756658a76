"""
Utility functions and helpers.

This module contains shared utilities used across FormGuard components.

Components:
    - logging: Logging configuration with a Rich console handler

Example:
    ```python
    from form_guard.utils import setup_logging

    setup_logging(level="DEBUG", log_file=Path("form_guard.log"))
    ```
"""

from form_guard.utils.logging import setup_logging

__all__ = ["setup_logging"]
