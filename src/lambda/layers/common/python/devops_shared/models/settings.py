"""Environment settings for the DevOps event Lambda."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from devops_shared.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_WORKERS = 8


@dataclass(frozen=True)
class EnvSettings:
    environment: Optional[str]
    template_arn_prefix: str
    email_from: str
    debug: bool
    info: bool
    max_workers: int

    @staticmethod
    def load() -> "EnvSettings":
        template_arn_prefix = os.environ.get("TEMPLATE_ARN_PREFIX", "")
        email_from = os.environ.get("EMAIL_FROM", "")
        if not template_arn_prefix:
            logger.error("TEMPLATE_ARN_PREFIX env var is empty.")
        if not email_from:
            logger.error("EMAIL_FROM env var is empty.")

        debug = os.environ.get("DEBUG", "true").strip().lower() == "true"
        info = debug or os.environ.get("INFO", "").strip().lower() == "true"

        try:
            max_workers = int(os.environ.get("MAX_WORKERS", str(DEFAULT_MAX_WORKERS)))
        except ValueError:
            logger.warning("MAX_WORKERS is not an integer; using default")
            max_workers = DEFAULT_MAX_WORKERS

        return EnvSettings(
            environment=os.environ.get("ENVIRONMENT"),
            template_arn_prefix=template_arn_prefix,
            email_from=email_from,
            debug=debug,
            info=info,
            max_workers=max(1, max_workers),
        )
