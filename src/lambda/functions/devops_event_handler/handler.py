"""DevOps event handler Lambda function.

Subscribed to the DevOps events SNS topic. Relays CodeCommit pull request
and CodePipeline failure events to SES templated notification emails.
"""

from __future__ import annotations

import json
from typing import Any, Dict

import boto3

from devops_shared.clients import AwsServices
from devops_shared.dispatch import dispatch_records
from devops_shared.models.settings import EnvSettings
from devops_shared.utils.logger import extract_correlation_id, get_logger

logger = get_logger(__name__)


def main(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main handler for the DevOps event Lambda function.

    Expected event structure:
    {
        "Records": [
            {
                "EventSource": "aws:sns",
                "Sns": {
                    "MessageId": "string",
                    "Message": "{\"type\": \"codecommit|codebuild|codepipeline\", \"payload\": {...}}"
                }
            }
        ]
    }

    Args:
        event: SNS invocation event
        context: Lambda context

    Returns:
        Processing summary. Per-record failures are logged and counted, never raised.
    """
    corr_id = extract_correlation_id(event)
    log = get_logger(__name__, correlation_id=corr_id) if corr_id else logger
    try:
        log.debug(f"Starting with event: {json.dumps(event, default=str)}")

        settings = EnvSettings.load()
        services = AwsServices.from_settings(settings, session=boto3)

        result = dispatch_records(event, services)
        log.info(f"Processed {result['dispatched']} record(s), {result['rejected']} failed")
        return result

    except Exception as e:
        log.error(f"Error processing event: {str(e)}")
        return {"status": "error", "error": str(e)}
