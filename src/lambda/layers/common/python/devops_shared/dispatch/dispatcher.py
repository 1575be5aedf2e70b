"""SNS record dispatcher.

Each SNS record carries a ``{type, payload}`` envelope. Records are parsed,
classified and handed to their handler concurrently; every record settles
independently and no failure escapes ``dispatch_records``.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional

from devops_shared.clients import AwsServices
from devops_shared.models.events import DevopsEnvelope
from devops_shared.utils.logger import get_logger
from devops_shared.utils.settle import settle

from .handlers import process_commit_event, process_noop, process_pipeline_event, process_pull_request_event
from .routes import EventKind, classify

logger = get_logger(__name__)

SNS_EVENT_SOURCE = "aws:sns"

Action = Callable[[Dict[str, Any], AwsServices], Any]

ACTIONS: Dict[EventKind, Action] = {
    EventKind.COMMIT: process_commit_event,
    EventKind.APPROVAL_RULE: process_pull_request_event,
    EventKind.PULL_REQUEST: process_pull_request_event,
    EventKind.CODECOMMIT_OTHER: process_noop,
    EventKind.CODEBUILD: process_noop,
    EventKind.PIPELINE: process_pipeline_event,
}


def is_sns_record(record: Any) -> bool:
    if not isinstance(record, dict) or not isinstance(record.get("Sns"), dict):
        return False
    source = record.get("EventSource")
    return source is None or source == SNS_EVENT_SOURCE


def parse_envelope(record: Dict[str, Any]) -> Optional[DevopsEnvelope]:
    """Decode the SNS message body; raises on malformed JSON.

    Well-formed JSON that is not an object (``null``, arrays, scalars) carries
    no envelope and yields None, like an empty message.
    """
    message = record["Sns"].get("Message")
    if not message:
        return None
    data = json.loads(message)
    if not isinstance(data, dict):
        logger.debug("SNS message is not a JSON object", extra={"context": {"kind": type(data).__name__}})
        return None
    return DevopsEnvelope.model_validate(data)


def _process_record(record: Dict[str, Any], services: AwsServices) -> Any:
    envelope = parse_envelope(record)
    if envelope is None:
        logger.debug("No envelope in SNS message, skipping.")
        return None

    kind = classify(envelope)
    if kind is None:
        logger.debug(
            "No route for message, skipping.",
            extra={"context": {"type": envelope.type}},
        )
        return None

    logger.debug(
        f"Processing {kind.value} event.",
        extra={"context": {"type": envelope.type, "event": envelope.payload.get("event")}},
    )
    return ACTIONS[kind](envelope.payload, services)


def dispatch_records(event: Dict[str, Any], services: AwsServices) -> Dict[str, Any]:
    """Route all SNS records of an invocation event and log every outcome."""
    records: List[Any] = (event or {}).get("Records") or []
    sns_records = [r for r in records if is_sns_record(r)]
    if len(sns_records) < len(records):
        logger.debug(f"Skipping {len(records) - len(sns_records)} non-SNS record(s)")

    outcomes = settle(lambda r: _process_record(r, services), sns_records, max_workers=services.max_workers)

    rejected = 0
    for outcome in outcomes:
        if outcome.ok:
            logger.info("Processing done.", extra={"context": {"result": outcome.value}})
        else:
            rejected += 1
            logger.error(f"Error processing event: {outcome.reason}")

    return {
        "status": "done",
        "records": len(records),
        "dispatched": len(sns_records),
        "fulfilled": len(outcomes) - rejected,
        "rejected": rejected,
    }
