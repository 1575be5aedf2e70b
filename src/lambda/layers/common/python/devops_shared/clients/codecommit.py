"""CodeCommit facade: commits, pull requests and approval rule approvers."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import boto3

from devops_shared.utils.logger import get_logger

logger = get_logger(__name__)

PREFIX_APPROVERS = "CodeCommitApprovers:"


def extract_approvers(approval_rule_content: Optional[str]) -> List[str]:
    """Return IAM user names from ``Approvers`` statements of one approval rule.

    Pool members carrying the ``CodeCommitApprovers:`` prefix are reduced to
    the text after the prefix. Order is kept and duplicates are not removed.
    """
    if not approval_rule_content:
        return []
    content = json.loads(approval_rule_content)
    names: List[str] = []
    for statement in content.get("Statements") or []:
        if not statement or statement.get("Type") != "Approvers":
            continue
        for member in statement.get("ApprovalPoolMembers") or []:
            if not isinstance(member, str):
                continue
            idx = member.find(PREFIX_APPROVERS)
            if idx > -1:
                names.append(member[idx + len(PREFIX_APPROVERS):])
    return names


class CodeCommitService:
    """Read-only helper around the CodeCommit API."""

    def __init__(self, client: Optional[Any] = None, region_name: Optional[str] = None):
        self.client = client or boto3.client("codecommit", region_name=region_name)

    def get_commit(self, repository_name: Optional[str], commit_id: str) -> Dict[str, Any]:
        return self.client.get_commit(repositoryName=repository_name, commitId=commit_id)

    def get_pull_request(self, pull_request_id: str) -> Dict[str, Any]:
        return self.client.get_pull_request(pullRequestId=pull_request_id)

    def get_pull_request_approvers(self, pull_request_id: str) -> List[str]:
        """Get IAM user names of approvers listed in the pull request's approval rules."""
        resp = self.get_pull_request(pull_request_id)
        logger.debug("Pull request loaded.", extra={"context": {"pullRequestId": pull_request_id}})
        rules = ((resp or {}).get("pullRequest") or {}).get("approvalRules") or []

        iam_user_names: List[str] = []
        for rule in rules:
            iam_user_names.extend(extract_approvers((rule or {}).get("approvalRuleContent")))
        return iam_user_names
