"""Staging stage configuration."""

import os

from worker_queue.config.types import StageConfig

staging_config: StageConfig = {
    "app_name": "worker-queues",
    "account_id": os.environ.get("CDK_DEFAULT_ACCOUNT"),
    "region": "ap-northeast-2",
    "log_retention_days": 30,
    "constructs": {
        "emails": {
            "type": "queue",
            "worker": {"handler": "src/workers/emails.handler", "timeout": 10},
        },
        "reports": {
            "type": "queue",
            "worker": {"handler": "src/workers/reports.handler", "timeout": 30},
            "batchSize": 10,
            "maxRetries": 1,
        },
    },
}
