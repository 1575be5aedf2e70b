"""Templated email sending via SES v2."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Sequence

import boto3

from devops_shared.utils.logger import get_logger

logger = get_logger(__name__)

EMAIL_TAGS = [{"Name": "TYPE", "Value": "DEVOPS"}]


class EmailSender:
    """Send SES templated emails on behalf of the notification sender."""

    def __init__(
        self,
        template_arn_prefix: str,
        email_from: str,
        client: Optional[Any] = None,
        region_name: Optional[str] = None,
    ):
        self.template_arn_prefix = template_arn_prefix
        self.email_from = email_from
        self.client = client or boto3.client("sesv2", region_name=region_name)

    def template_arn(self, template_id: str) -> str:
        return f"{self.template_arn_prefix}{template_id}"

    def send_emails(
        self,
        template_id: Optional[str],
        emails: Optional[Sequence[Optional[str]]],
        params: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """Send one templated email to all non-empty addresses.

        Returns None without calling SES when there is no template id or no
        address left after filtering. SES errors are not caught here.
        """
        recipients = [email for email in (emails or []) if email]
        if not template_id or not recipients:
            logger.debug("Nothing to send", extra={"context": {"templateId": template_id}})
            return None

        request = {
            "Content": {
                "Template": {
                    "TemplateArn": self.template_arn(template_id),
                    "TemplateData": json.dumps(params or {}, default=str),
                }
            },
            "Destination": {"ToAddresses": recipients},
            "EmailTags": list(EMAIL_TAGS),
            "FromEmailAddress": self.email_from,
            "ReplyToAddresses": [self.email_from],
        }
        logger.debug("sending email", extra={"context": {"request": request}})
        response = self.client.send_email(**request)
        logger.info(f"Sent {template_id} email: {(response or {}).get('MessageId')}")
        return response
