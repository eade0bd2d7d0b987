"""Example worker: sends one email per SQS record.

Any failure raises, so the whole batch returns to the queue and, after
maxRetries receives, lands in the dead letter queue.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


def _send(message: Dict[str, Any]) -> None:
    if not message.get("to"):
        raise ValueError("message has no recipient")
    logger.info(json.dumps({"message": "email sent", "to": message["to"]}))


def handler(event: Dict[str, Any], context: Any) -> Dict[str, int]:
    records = event.get("Records", [])
    for record in records:
        try:
            _send(json.loads(record.get("body") or "{}"))
        except ValueError as exc:
            details = {"message": "email failed", "messageId": record.get("messageId"), "error": str(exc)}
            logger.error(json.dumps(details))
            raise
    return {"processed": len(records)}
