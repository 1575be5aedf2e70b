"""IAM facade resolving user emails from the ``email`` user tag."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import boto3

from devops_shared.utils.logger import get_logger
from devops_shared.utils.settle import settle

logger = get_logger(__name__)

EMAIL_TAG_KEY = "email"


def email_from_tags(tags: Optional[Sequence[Dict[str, Any]]]) -> Optional[str]:
    for tag in tags or []:
        if tag.get("Key") == EMAIL_TAG_KEY:
            return tag.get("Value")
    return None


class IamService:
    def __init__(
        self,
        client: Optional[Any] = None,
        region_name: Optional[str] = None,
        max_workers: int = 8,
    ):
        self.client = client or boto3.client("iam", region_name=region_name)
        self.max_workers = max_workers

    def get_user(self, user_name: str) -> Optional[Dict[str, Any]]:
        resp = self.client.get_user(UserName=user_name)
        return (resp or {}).get("User")

    def get_user_email(self, user_name: str) -> Optional[str]:
        user = self.get_user(user_name)
        email = email_from_tags((user or {}).get("Tags"))
        logger.debug(f"Found user email: {email}", extra={"context": {"UserName": user_name}})
        return email

    def get_user_emails(self, user_names: Optional[Sequence[str]]) -> List[Optional[str]]:
        """Resolve one email per user name, keeping positions.

        A failed lookup is logged and yields None without affecting the
        other lookups.
        """
        if not user_names:
            logger.debug("No userNames to convert to emails")
            return []

        outcomes = settle(self.get_user_email, user_names, max_workers=self.max_workers)
        emails: List[Optional[str]] = []
        for user_name, outcome in zip(user_names, outcomes):
            if outcome.ok:
                emails.append(outcome.value)
            else:
                logger.error(
                    f"Unable to get email address for iam user {user_name}: {outcome.reason}",
                    extra={"context": {"UserName": user_name}},
                )
                emails.append(None)
        logger.debug(f"Found user emails: {emails}")
        return emails
