"""Resource graph builder for a single worker queue construct."""

from __future__ import annotations

from worker_queue.compiler.alerting import alerting_from, alerting_nodes
from worker_queue.compiler.context import HostContext
from worker_queue.config.constants import DLQ_RETENTION_SECONDS, DLQ_SUFFIX
from worker_queue.core.graph import ResourceGraph, ResourceKind, ResourceNode
from worker_queue.core.naming import (
    event_source_mapping_logical_id,
    physical_name,
    resource_logical_id,
    worker_function_logical_id,
)
from worker_queue.core.references import GetAtt
from worker_queue.core.resolver import NormalizedConfiguration

DELETION_POLICY = "Delete"


def _dead_letter_queue(construct_name: str, host: HostContext) -> ResourceNode:
    return ResourceNode(
        logical_id=resource_logical_id(construct_name, "Dlq"),
        kind=ResourceKind.DEAD_LETTER_QUEUE,
        properties={
            "MessageRetentionPeriod": DLQ_RETENTION_SECONDS,
            "QueueName": physical_name(host.app_name, host.stage, construct_name, DLQ_SUFFIX),
        },
        deletion_policy=DELETION_POLICY,
    )


def _queue(
    construct_name: str, config: NormalizedConfiguration, host: HostContext, dlq_id: str
) -> ResourceNode:
    return ResourceNode(
        logical_id=resource_logical_id(construct_name, "Queue"),
        kind=ResourceKind.QUEUE,
        properties={
            "QueueName": physical_name(host.app_name, host.stage, construct_name),
            "RedrivePolicy": {
                "deadLetterTargetArn": GetAtt(dlq_id, "Arn"),
                "maxReceiveCount": config.max_retries,
            },
            "VisibilityTimeout": config.visibility_timeout_seconds,
        },
        deletion_policy=DELETION_POLICY,
    )


def _binding(
    construct_name: str, config: NormalizedConfiguration, host: HostContext, queue_id: str
) -> ResourceNode:
    # Polling starts only after the execution role grants SQS access
    return ResourceNode(
        logical_id=event_source_mapping_logical_id(construct_name, queue_id),
        kind=ResourceKind.EVENT_SOURCE_BINDING,
        properties={
            "BatchSize": config.batch_size,
            "Enabled": True,
            "EventSourceArn": GetAtt(queue_id, "Arn"),
            "FunctionName": GetAtt(worker_function_logical_id(construct_name), "Arn"),
            "MaximumBatchingWindowInSeconds": config.max_batching_window_seconds,
        },
        depends_on=(host.execution_role_id,),
    )


def build(construct_name: str, config: NormalizedConfiguration, host: HostContext) -> ResourceGraph:
    """
    Build the resource graph for one queue construct.

    Args:
        construct_name: Construct namespace
        config: Resolved configuration
        host: Host namespace (app, stage, execution role)

    Returns:
        Validated ResourceGraph: DLQ, queue, event source mapping and,
        when an alarm email is configured, the alerting sub-graph
    """
    dlq = _dead_letter_queue(construct_name, host)
    queue = _queue(construct_name, config, host, dlq.logical_id)
    binding = _binding(construct_name, config, host, queue.logical_id)
    alerting = alerting_nodes(alerting_from(config), construct_name, host, dlq.logical_id)

    graph = ResourceGraph(
        nodes=(dlq, queue, binding, *alerting),
        external_ids=frozenset({host.execution_role_id, worker_function_logical_id(construct_name)}),
    )
    return graph.validate()
