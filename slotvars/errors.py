"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from SlotVarsError.

The template engine itself never raises for string input: malformed
markers, unresolved paths and failing conditions degrade to literal
text, empty strings or false branches. SlotVarsError is for the
surrounding surface: configuration files and CLI input.
"""

from __future__ import annotations


class SlotVarsError(Exception):
    """
    Base class for all user-facing errors in slot-variables.

    These errors indicate problems that the user can fix:
    invalid configuration, unreadable data files, bad CLI arguments.
    """
    pass


__all__ = ["SlotVarsError"]
