"""Typed configuration contracts for stage and construct settings."""

from __future__ import annotations

from typing import Dict, NotRequired, Required, TypedDict


class WorkerConfig(TypedDict, total=False):
    """Worker function settings of a queue construct."""

    handler: Required[str]
    timeout: NotRequired[int]
    memorySize: NotRequired[int]
    environment: NotRequired[Dict[str, str]]


# camelCase keys mirror the user-facing construct configuration
QueueConfig = TypedDict(
    "QueueConfig",
    {
        "type": NotRequired[str],
        "worker": Required[WorkerConfig],
        "maxRetries": NotRequired[int],
        "batchSize": NotRequired[int],
        "maxBatchingWindow": NotRequired[int],
        "alarm": NotRequired[str],
    },
    total=False,
)


class StageConfig(TypedDict, total=False):
    """Strongly-typed stage configuration contract."""

    app_name: Required[str]
    region: Required[str]
    account_id: NotRequired[str | None]

    log_retention_days: NotRequired[int]
    tags: NotRequired[Dict[str, str]]

    constructs: Required[Dict[str, QueueConfig]]
