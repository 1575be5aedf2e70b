"""AWS service facades used by the DevOps event handlers.

``AwsServices`` bundles one handle per collaborator API. It is built once per
invocation and handed to the handlers so tests can substitute fakes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import boto3

from devops_shared.models.settings import EnvSettings

from .codecommit import CodeCommitService
from .codepipeline import CodePipelineService
from .iam import IamService
from .ses import EmailSender


@dataclass
class AwsServices:
    codecommit: CodeCommitService
    codepipeline: CodePipelineService
    iam: IamService
    email: EmailSender
    max_workers: int = 8

    @classmethod
    def from_settings(cls, settings: EnvSettings, session: Optional[Any] = None) -> "AwsServices":
        """Create boto3-backed services; ``session`` may be a boto3 module or Session."""
        factory = session or boto3
        return cls(
            codecommit=CodeCommitService(client=factory.client("codecommit")),
            codepipeline=CodePipelineService(client=factory.client("codepipeline")),
            iam=IamService(client=factory.client("iam"), max_workers=settings.max_workers),
            email=EmailSender(
                template_arn_prefix=settings.template_arn_prefix,
                email_from=settings.email_from,
                client=factory.client("sesv2"),
            ),
            max_workers=settings.max_workers,
        )


__all__ = [
    "AwsServices",
    "CodeCommitService",
    "CodePipelineService",
    "EmailSender",
    "IamService",
]
