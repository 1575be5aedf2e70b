"""CodePipeline facade: source commits of a pipeline execution."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import boto3

from devops_shared.models.events import SourceCommit
from devops_shared.utils.logger import get_logger

logger = get_logger(__name__)

SOURCE_ACTION_NAME = "Source"


def to_source_commit(action: Dict[str, Any]) -> Optional[SourceCommit]:
    """Build a commit descriptor from a Source action, or None without CommitId."""
    variables = (((action or {}).get("output") or {}).get("outputVariables")) or {}
    if not variables.get("CommitId"):
        return None
    return SourceCommit.from_output_variables(variables)


class CodePipelineService:
    """Read-only helper around the CodePipeline API."""

    def __init__(self, client: Optional[Any] = None, region_name: Optional[str] = None):
        self.client = client or boto3.client("codepipeline", region_name=region_name)

    def list_action_executions(self, pipeline_execution_id: str, pipeline_name: str) -> List[Dict[str, Any]]:
        """List every action execution of one pipeline run, following nextToken."""
        params: Dict[str, Any] = {
            "pipelineName": pipeline_name,
            "filter": {"pipelineExecutionId": pipeline_execution_id},
        }
        details: List[Dict[str, Any]] = []
        while True:
            resp = self.client.list_action_executions(**params) or {}
            details.extend(resp.get("actionExecutionDetails") or [])
            next_token = resp.get("nextToken")
            if not next_token:
                break
            params["nextToken"] = next_token
        return details

    def get_commit_info_for_pipeline(
        self, pipeline_execution_id: str, pipeline_name: str
    ) -> Optional[List[Optional[SourceCommit]]]:
        """Map each ``Source`` action of the execution to its commit descriptor.

        Returns None when the execution has no action details at all. Source
        actions without a ``CommitId`` output variable map to None.
        """
        actions = self.list_action_executions(pipeline_execution_id, pipeline_name)
        if not actions:
            logger.debug("No action executions found", extra={"context": {"pipeline": pipeline_name}})
            return None

        source_commits = [
            to_source_commit(action) for action in actions if action.get("actionName") == SOURCE_ACTION_NAME
        ]
        logger.debug(
            "sourceCommits",
            extra={"context": {"sourceCommits": [c.template_params() if c else None for c in source_commits]}},
        )
        return source_commits
