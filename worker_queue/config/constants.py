"""
Policy constants for worker queue compilation.

Values here are fixed policy, not user configuration.
"""

from typing import Final

# Dead letter queue keeps failed messages for the SQS maximum (14 days)
DLQ_RETENTION_SECONDS: Final[int] = 14 * 24 * 60 * 60

# Visibility timeout = worker timeout x multiplier
VISIBILITY_TIMEOUT_MULTIPLIER: Final[int] = 6

# DLQ alarm
ALARM_PERIOD_SECONDS: Final[int] = 60
ALARM_EVALUATION_PERIODS: Final[int] = 1
ALARM_THRESHOLD: Final[int] = 0
ALARM_METRIC_NAMESPACE: Final[str] = "AWS/SQS"
ALARM_METRIC_NAME: Final[str] = "ApproximateNumberOfMessagesVisible"
ALARM_DESCRIPTION: Final[str] = "Alert triggered when there are failed jobs in the dead letter queue."

# Config defaults
QUEUE_DEFAULTS: Final[dict[str, int]] = {
    "batch_size": 1,
    "max_batching_window_seconds": 60,
    "max_retries": 3,
    "function_timeout_seconds": 6,
    "worker_memory_size": 1024,
}

# Config bounds (inclusive)
BATCH_SIZE_RANGE: Final[tuple[int, int]] = (1, 10)
BATCHING_WINDOW_RANGE: Final[tuple[int, int]] = (0, 300)
FUNCTION_TIMEOUT_RANGE: Final[tuple[int, int]] = (1, 900)

# Provider name length limits
SQS_NAME_MAX_LENGTH: Final[int] = 80
SNS_NAME_MAX_LENGTH: Final[int] = 256
ALARM_NAME_MAX_LENGTH: Final[int] = 255
LAMBDA_NAME_MAX_LENGTH: Final[int] = 64

# Host-owned identifiers
DEFAULT_EXECUTION_ROLE_ID: Final[str] = "IamRoleLambdaExecution"

# Physical name suffixes (compatibility surface)
DLQ_SUFFIX: Final[str] = "-dlq"
ALARM_SUFFIX: Final[str] = "-dlq-alarm"
ALARM_TOPIC_SUFFIX: Final[str] = "-dlq-alarm-topic"
