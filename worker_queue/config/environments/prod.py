"""Production stage configuration."""

import os

from worker_queue.config.types import StageConfig

prod_config: StageConfig = {
    "app_name": "worker-queues",
    "account_id": os.environ.get("CDK_DEFAULT_ACCOUNT"),
    "region": "ap-northeast-2",
    "log_retention_days": 90,
    "constructs": {
        "emails": {
            "type": "queue",
            "worker": {"handler": "src/workers/emails.handler", "timeout": 10, "memorySize": 512},
            "maxRetries": 5,
            # Failed jobs page the on-call alias
            "alarm": "alerts@example.com",
        },
        "reports": {
            "type": "queue",
            "worker": {"handler": "src/workers/reports.handler", "timeout": 60},
            "batchSize": 10,
            "maxRetries": 3,
            "alarm": "alerts@example.com",
        },
    },
}
