"""Models subpackage exposed via the Common Layer."""

from .events import (
    DevopsEnvelope,
    PipelineFailureNotification,
    PullRequestNotification,
    SourceCommit,
)
from .settings import EnvSettings

__all__ = [
    "DevopsEnvelope",
    "EnvSettings",
    "PipelineFailureNotification",
    "PullRequestNotification",
    "SourceCommit",
]
