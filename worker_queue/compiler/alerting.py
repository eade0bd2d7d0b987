"""Optional DLQ alerting sub-graph.

Alerting is a tagged union: ``AlertingAbsent`` contributes no nodes,
``AlertingPresent`` contributes exactly a topic, an email subscription and an
alarm watching the dead letter queue.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from worker_queue.compiler.context import HostContext
from worker_queue.config.constants import (
    ALARM_DESCRIPTION,
    ALARM_EVALUATION_PERIODS,
    ALARM_METRIC_NAME,
    ALARM_METRIC_NAMESPACE,
    ALARM_NAME_MAX_LENGTH,
    ALARM_PERIOD_SECONDS,
    ALARM_SUFFIX,
    ALARM_THRESHOLD,
    ALARM_TOPIC_SUFFIX,
    SNS_NAME_MAX_LENGTH,
)
from worker_queue.core.graph import ResourceKind, ResourceNode
from worker_queue.core.naming import physical_name, resource_logical_id
from worker_queue.core.references import GetAtt, Ref
from worker_queue.core.resolver import NormalizedConfiguration


@dataclass(frozen=True)
class AlertingAbsent:
    """No alarm email configured."""


@dataclass(frozen=True)
class AlertingPresent:
    """Alarm email configured; failed jobs notify ``email``."""

    email: str


Alerting = Union[AlertingAbsent, AlertingPresent]


def alerting_from(config: NormalizedConfiguration) -> Alerting:
    if config.alarm_email is None:
        return AlertingAbsent()
    return AlertingPresent(email=config.alarm_email)


def alerting_nodes(
    alerting: Alerting,
    construct_name: str,
    host: HostContext,
    dlq_logical_id: str,
) -> tuple[ResourceNode, ...]:
    """Return the alerting nodes for ``alerting`` in emission order."""
    if isinstance(alerting, AlertingAbsent):
        return ()
    if not isinstance(alerting, AlertingPresent):
        raise TypeError(f"Unknown alerting variant: {alerting!r}")

    topic_id = resource_logical_id(construct_name, "AlarmTopic")

    topic = ResourceNode(
        logical_id=topic_id,
        kind=ResourceKind.ALARM_TOPIC,
        properties={
            "TopicName": physical_name(
                host.app_name, host.stage, construct_name, ALARM_TOPIC_SUFFIX, max_length=SNS_NAME_MAX_LENGTH
            ),
            "DisplayName": f"[Alert][{construct_name}] There are failed jobs in the dead letter queue.",
        },
    )

    subscription = ResourceNode(
        logical_id=resource_logical_id(construct_name, "AlarmTopicSubscription"),
        kind=ResourceKind.ALARM_SUBSCRIPTION,
        properties={
            "Endpoint": alerting.email,
            "Protocol": "email",
            "TopicArn": Ref(topic_id),
        },
    )

    alarm = ResourceNode(
        logical_id=resource_logical_id(construct_name, "Alarm"),
        kind=ResourceKind.ALARM,
        properties={
            "AlarmName": physical_name(
                host.app_name, host.stage, construct_name, ALARM_SUFFIX, max_length=ALARM_NAME_MAX_LENGTH
            ),
            "AlarmDescription": ALARM_DESCRIPTION,
            "AlarmActions": [Ref(topic_id)],
            "ComparisonOperator": "GreaterThanThreshold",
            "Dimensions": [{"Name": "QueueName", "Value": GetAtt(dlq_logical_id, "QueueName")}],
            "EvaluationPeriods": ALARM_EVALUATION_PERIODS,
            "MetricName": ALARM_METRIC_NAME,
            "Namespace": ALARM_METRIC_NAMESPACE,
            "Period": ALARM_PERIOD_SECONDS,
            "Statistic": "Sum",
            "Threshold": ALARM_THRESHOLD,
        },
    )

    return (topic, subscription, alarm)
