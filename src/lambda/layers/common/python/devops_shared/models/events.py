"""Typed event models for the DevOps event Lambda using Pydantic v2.

The envelope is the shape EventBridge rules publish onto the SNS topic:
``{"type": "...", "payload": {...}}`` where ``payload`` is the raw detail of
the CodeCommit/CodeBuild/CodePipeline event.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DevopsEnvelope(BaseModel):
    type: Optional[str] = None
    payload: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, v: Any) -> Optional[str]:  # type: ignore[override]
        return v if isinstance(v, str) else None

    @field_validator("payload", mode="before")
    @classmethod
    def _coerce_payload(cls, v: Any) -> Dict[str, Any]:  # type: ignore[override]
        # Non-object payloads are left for the catch-all routes
        return v if isinstance(v, dict) else {}


class SourceCommit(BaseModel):
    """Commit checked out by a pipeline ``Source`` action."""

    model_config = ConfigDict(populate_by_name=True)

    branch_name: Optional[str] = Field(default=None, alias="branchName")
    commit_id: str = Field(alias="commitId")
    commit_message: Optional[str] = Field(default=None, alias="commitMessage")
    committer_date: Optional[str] = Field(default=None, alias="committerDate")
    repository_name: Optional[str] = Field(default=None, alias="repositoryName")

    @classmethod
    def from_output_variables(cls, variables: Dict[str, Any]) -> "SourceCommit":
        return cls(
            branchName=variables.get("BranchName"),
            commitId=variables["CommitId"],
            commitMessage=variables.get("CommitMessage"),
            committerDate=variables.get("CommitterDate"),
            repositoryName=variables.get("RepositoryName"),
        )

    def template_params(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class PipelineFailureNotification(BaseModel):
    """Template parameters for the ``PipelineFailed`` email."""

    model_config = ConfigDict(populate_by_name=True)

    commit: SourceCommit
    author_name: Optional[str] = Field(default=None, alias="authorName")
    committer_name: Optional[str] = Field(default=None, alias="committerName")
    committer_email: Optional[str] = Field(default=None, alias="committerEmail")

    def template_params(self) -> Dict[str, Any]:
        params = self.commit.template_params()
        params["authorName"] = self.author_name
        params["committerName"] = self.committer_name
        return params


class PullRequestNotification(BaseModel):
    """Approvers of a pull request and the emails resolved for them."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    pull_request_id: str = Field(alias="pullRequestId")
    approver_iam_user_names: List[str] = Field(default_factory=list, alias="approverIamUserNames")
    resolved_emails: List[Optional[str]] = Field(default_factory=list, alias="resolvedEmails")

    @property
    def recipients(self) -> List[str]:
        return [email for email in self.resolved_emails if email]
