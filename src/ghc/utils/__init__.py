"""Shared utilities — small helpers importable by any layer.

Rules
-----
* No business logic.
* No imports from ``cli``, ``core`` or ``infra``.
"""
