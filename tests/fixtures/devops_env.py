"""Environment and service helpers for DevOps event handler tests."""

from __future__ import annotations

from typing import Callable, Optional

import pytest

TEMPLATE_ARN_PREFIX = "arn:aws:ses:us-east-1:123456789012:template/"
EMAIL_FROM = "notifications@example.com"


@pytest.fixture
def devops_env(monkeypatch: pytest.MonkeyPatch) -> Callable[..., None]:
    """Set the handler environment variables.

    Usage: devops_env() for defaults or devops_env(debug=False, info=True).
    """

    def _apply(
        *,
        template_arn_prefix: str = TEMPLATE_ARN_PREFIX,
        email_from: str = EMAIL_FROM,
        debug: Optional[bool] = None,
        info: Optional[bool] = None,
        environment: str = "dev",
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", environment)
        monkeypatch.setenv("TEMPLATE_ARN_PREFIX", template_arn_prefix)
        monkeypatch.setenv("EMAIL_FROM", email_from)
        if debug is not None:
            monkeypatch.setenv("DEBUG", "true" if debug else "false")
        if info is not None:
            monkeypatch.setenv("INFO", "true" if info else "false")

    return _apply


@pytest.fixture
def services_factory():
    """Build ``AwsServices`` around stub clients."""
    from devops_shared.clients import (
        AwsServices,
        CodeCommitService,
        CodePipelineService,
        EmailSender,
        IamService,
    )
    from tests.fixtures.clients import CodeCommitStub, CodePipelineStub, IamStub, SesV2Stub

    def _create(
        *,
        codecommit: Optional[CodeCommitStub] = None,
        codepipeline: Optional[CodePipelineStub] = None,
        iam: Optional[IamStub] = None,
        ses: Optional[SesV2Stub] = None,
        max_workers: int = 4,
    ) -> AwsServices:
        return AwsServices(
            codecommit=CodeCommitService(client=codecommit or CodeCommitStub()),
            codepipeline=CodePipelineService(client=codepipeline or CodePipelineStub()),
            iam=IamService(client=iam or IamStub(), max_workers=max_workers),
            email=EmailSender(
                template_arn_prefix=TEMPLATE_ARN_PREFIX,
                email_from=EMAIL_FROM,
                client=ses or SesV2Stub(),
            ),
            max_workers=max_workers,
        )

    return _create
