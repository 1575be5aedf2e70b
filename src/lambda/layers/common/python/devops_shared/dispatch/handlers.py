"""Handlers invoked by the dispatcher, one per event kind."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from devops_shared.clients import AwsServices
from devops_shared.models.events import (
    PipelineFailureNotification,
    PullRequestNotification,
    SourceCommit,
)
from devops_shared.utils.logger import get_logger
from devops_shared.utils.settle import Outcome, settle

logger = get_logger(__name__)

TEMPLATE_PULL_REQUEST = "PullRequest"
TEMPLATE_PIPELINE_FAILED = "PipelineFailed"

PIPELINE_STATE_FAILED = "FAILED"


def process_commit_event(payload: Dict[str, Any], services: AwsServices) -> None:
    """Commit (reference) events are logged only; no notification is sent for them."""
    logger.debug(
        "Processing commit event.",
        extra={"context": {"event": payload.get("event"), "repositoryName": payload.get("repositoryName")}},
    )
    return None


def process_noop(payload: Dict[str, Any], services: AwsServices) -> None:
    """Log-only handler for events without an implemented action."""
    logger.debug("Not processing.", extra={"context": {"payload": payload}})
    return None


def process_pull_request_event(payload: Dict[str, Any], services: AwsServices) -> Optional[Dict[str, Any]]:
    """Email every IAM approver of the pull request with the ``PullRequest`` template."""
    pull_request_id = (payload or {}).get("pullRequestId")
    if not pull_request_id:
        return None

    try:
        users = services.codecommit.get_pull_request_approvers(pull_request_id) or []
        emails = services.iam.get_user_emails(users) or []
        notification = PullRequestNotification(
            pullRequestId=str(pull_request_id),
            approverIamUserNames=users,
            resolvedEmails=emails,
        )
        logger.debug(
            "Resolved pull request approvers",
            extra={"context": {"pullRequestId": pull_request_id, "approvers": notification.approver_iam_user_names}},
        )
        return services.email.send_emails(
            template_id=TEMPLATE_PULL_REQUEST,
            emails=notification.recipients,
            params=dict(payload),
        )
    except Exception as e:
        logger.error(f"Error sending emails: {str(e)}", extra={"context": {"pullRequestId": pull_request_id}})
        raise


def _notify_committer(commit_desc: SourceCommit, services: AwsServices) -> bool:
    resp = services.codecommit.get_commit(commit_desc.repository_name, commit_desc.commit_id)
    commit = (resp or {}).get("commit") or {}
    logger.debug("got commit", extra={"context": {"commitId": commit_desc.commit_id}})

    author = commit.get("author") or {}
    committer = commit.get("committer") or {}
    notification = PipelineFailureNotification(
        commit=commit_desc,
        authorName=author.get("name"),
        committerName=committer.get("name"),
        committerEmail=committer.get("email"),
    )
    if not notification.committer_email:
        return False

    services.email.send_emails(
        template_id=TEMPLATE_PIPELINE_FAILED,
        emails=[notification.committer_email],
        params=notification.template_params(),
    )
    return True


def process_pipeline_event(payload: Dict[str, Any], services: AwsServices) -> Optional[List[Outcome]]:
    """Email the committer of every source commit of a failed pipeline execution."""
    payload = payload or {}
    if payload.get("state") != PIPELINE_STATE_FAILED:
        return None

    try:
        logger.debug("payload", extra={"context": {"payload": payload}})
        source_commits = services.codepipeline.get_commit_info_for_pipeline(
            payload.get("execution-id"), payload.get("pipeline")
        )
    except Exception as e:
        logger.error(f"Error processing pipeline events: {str(e)}")
        raise

    # Source actions without a CommitId output variable are dropped here
    commits = [c for c in source_commits or [] if c is not None]
    if not commits:
        return None

    results = settle(lambda c: _notify_committer(c, services), commits, max_workers=services.max_workers)
    for commit_desc, result in zip(commits, results):
        if result.ok:
            logger.info(f"Processing of pipeline event done. emailSent={result.value}")
        else:
            logger.error(
                f"Error processing pipeline event: {result.reason}",
                extra={"context": {"commitId": commit_desc.commit_id}},
            )
    return results
