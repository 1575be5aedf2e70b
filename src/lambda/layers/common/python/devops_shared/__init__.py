"""DevOps event notifier utilities exposed via the Lambda layer."""

from __future__ import annotations

__all__ = [
    "clients",
    "dispatch",
    "models",
    "utils",
]
