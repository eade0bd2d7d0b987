"""Example worker: renders a report per SQS record."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


def handler(event: Dict[str, Any], context: Any) -> Dict[str, int]:
    records = event.get("Records", [])
    for record in records:
        payload = json.loads(record.get("body") or "{}")
        if "report_id" not in payload:
            # Raising redrives the batch; repeated failures end in the DLQ
            raise ValueError(f"report request {record.get('messageId')} has no report_id")
        logger.info(json.dumps({"message": "report rendered", "report_id": payload["report_id"]}))
    return {"processed": len(records)}
