"""Classification of DevOps envelopes into a closed set of event kinds."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from devops_shared.models.events import DevopsEnvelope

TYPE_CODECOMMIT = "codecommit"
TYPE_CODEBUILD = "codebuild"
TYPE_CODEPIPELINE = "codepipeline"

# EventBridge occasionally delivers "referenceCreated " with a trailing space
COMMIT_EVENTS = frozenset({"referenceCreated", "referenceCreated "})
APPROVAL_RULE_EVENTS = frozenset(
    {
        "pullRequestApprovalRuleCreated",
        "pullRequestApprovalRuleOverridden",
        "pullRequestApprovalRuleUpdated",
    }
)
PULL_REQUEST_EVENTS = frozenset({"pullRequestCreated", "pullRequestStatusChanged"})


class EventKind(str, Enum):
    COMMIT = "commit"
    APPROVAL_RULE = "approval_rule"
    PULL_REQUEST = "pull_request"
    CODECOMMIT_OTHER = "codecommit_other"
    CODEBUILD = "codebuild"
    PIPELINE = "pipeline"


def _codecommit_event(payload: Any) -> str:
    event = payload.get("event") if isinstance(payload, dict) else None
    return event if isinstance(event, str) else ""


def classify(envelope: DevopsEnvelope) -> Optional[EventKind]:
    """Return the event kind of an envelope, or None when nothing handles it.

    Precedence follows the route order: commit events, approval rule events,
    pull request events, any other CodeCommit event, CodeBuild, CodePipeline.
    """
    if envelope.type == TYPE_CODECOMMIT:
        event = _codecommit_event(envelope.payload)
        if event in COMMIT_EVENTS:
            return EventKind.COMMIT
        if event in APPROVAL_RULE_EVENTS:
            return EventKind.APPROVAL_RULE
        if event in PULL_REQUEST_EVENTS:
            return EventKind.PULL_REQUEST
        return EventKind.CODECOMMIT_OTHER
    if envelope.type == TYPE_CODEBUILD:
        return EventKind.CODEBUILD
    if envelope.type == TYPE_CODEPIPELINE:
        return EventKind.PIPELINE
    return None
