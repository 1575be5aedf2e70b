"""Routing of SNS-wrapped DevOps events to their handlers."""

from .dispatcher import ACTIONS, dispatch_records, parse_envelope
from .routes import EventKind, classify

__all__ = [
    "ACTIONS",
    "EventKind",
    "classify",
    "dispatch_records",
    "parse_envelope",
]
