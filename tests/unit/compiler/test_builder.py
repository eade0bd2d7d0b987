import pytest

from tests.fixtures.builders import build_expected_names
from worker_queue.compiler.builder import build
from worker_queue.core.graph import ResourceKind
from worker_queue.core.naming import resource_logical_id
from worker_queue.core.references import GetAtt
from worker_queue.core.resolver import resolve


pytestmark = [pytest.mark.unit]


def _build(host, raw):
    return build("emails", resolve(raw, construct_name="emails"), host)


def test_creates_all_required_resources(host, raw_config) -> None:
    """
    Given: the default emails queue configuration
    When: building the graph
    Then: DLQ, queue and event source mapping exist, in that order
    """
    graph = _build(host, raw_config())

    assert graph.logical_ids == [
        "emailsDlq47F8494C",
        "emailsQueueF057328A",
        "EmailsWorkerEventSourceMappingSQSEmailsQueueF057328A",
    ]
    assert len(graph.nodes_of_kind(ResourceKind.QUEUE)) == 1
    assert len(graph.nodes_of_kind(ResourceKind.DEAD_LETTER_QUEUE)) == 1


def test_queue_template(host, raw_config) -> None:
    graph = _build(host, raw_config())
    template = graph.to_template()
    names = build_expected_names(app="test-queues", stage="dev", construct="emails")

    assert template[resource_logical_id("emails", "Queue")] == {
        "Type": "AWS::SQS::Queue",
        "Properties": {
            "QueueName": names.queue,
            "RedrivePolicy": {
                "deadLetterTargetArn": {"Fn::GetAtt": [resource_logical_id("emails", "Dlq"), "Arn"]},
                "maxReceiveCount": 3,
            },
            "VisibilityTimeout": 36,
        },
        "DeletionPolicy": "Delete",
        "UpdateReplacePolicy": "Delete",
    }


def test_dead_letter_queue_template(host, raw_config) -> None:
    template = _build(host, raw_config()).to_template()
    names = build_expected_names(app="test-queues", stage="dev", construct="emails")

    assert template[resource_logical_id("emails", "Dlq")] == {
        "Type": "AWS::SQS::Queue",
        "Properties": {"MessageRetentionPeriod": 1209600, "QueueName": names.dlq},
        "DeletionPolicy": "Delete",
        "UpdateReplacePolicy": "Delete",
    }


@pytest.mark.parametrize(
    "overrides",
    [{}, {"maxRetries": 0}, {"batchSize": 10}, {"alarm": "alerting@example.com"}],
)
def test_dead_letter_retention_is_not_configurable(host, raw_config, overrides) -> None:
    graph = _build(host, raw_config(timeout=30, **overrides))

    dlq = graph.require(ResourceKind.DEAD_LETTER_QUEUE)
    assert dlq.properties["MessageRetentionPeriod"] == 14 * 24 * 60 * 60


def test_event_source_mapping_template(host, raw_config) -> None:
    graph = _build(host, raw_config())
    mapping = graph.require(ResourceKind.EVENT_SOURCE_BINDING)

    assert mapping.to_template() == {
        "Type": "AWS::Lambda::EventSourceMapping",
        "Properties": {
            "BatchSize": 1,
            "Enabled": True,
            "EventSourceArn": {"Fn::GetAtt": [resource_logical_id("emails", "Queue"), "Arn"]},
            "FunctionName": {"Fn::GetAtt": ["EmailsWorkerLambdaFunction", "Arn"]},
            "MaximumBatchingWindowInSeconds": 60,
        },
        "DependsOn": ["IamRoleLambdaExecution"],
    }


@pytest.mark.parametrize("timeout,visibility", [(6, 36), (7, 42), (1, 6), (900, 5400)])
def test_visibility_timeout_is_six_times_function_timeout(host, raw_config, timeout, visibility) -> None:
    graph = _build(host, raw_config(timeout=timeout))

    assert graph.require(ResourceKind.QUEUE).properties["VisibilityTimeout"] == visibility


@pytest.mark.parametrize("retries", [0, 1, 3, 10])
def test_max_receive_count_equals_max_retries(host, raw_config, retries) -> None:
    graph = _build(host, raw_config(maxRetries=retries))

    redrive = graph.require(ResourceKind.QUEUE).properties["RedrivePolicy"]
    assert redrive["maxReceiveCount"] == retries


@pytest.mark.parametrize("batch_size", [1, 10])
def test_batch_size_propagates(host, raw_config, batch_size) -> None:
    graph = _build(host, raw_config(batchSize=batch_size))

    assert graph.require(ResourceKind.EVENT_SOURCE_BINDING).properties["BatchSize"] == batch_size


def test_cross_node_values_are_references(host, raw_config) -> None:
    """
    Given: a graph with alerting
    When: inspecting cross-node properties
    Then: each is a reference value, never a literal copy
    """
    graph = _build(host, raw_config(alarm="alerting@example.com"))
    dlq_id = resource_logical_id("emails", "Dlq")
    topic_id = resource_logical_id("emails", "AlarmTopic")

    queue = graph.require(ResourceKind.QUEUE)
    alarm = graph.require(ResourceKind.ALARM)

    assert queue.properties["RedrivePolicy"]["deadLetterTargetArn"] == GetAtt(dlq_id, "Arn")
    assert alarm.properties["Dimensions"][0]["Value"] == GetAtt(dlq_id, "QueueName")
    assert {ref.logical_id for ref in alarm.references()} == {dlq_id, topic_id}


def test_graph_is_referentially_closed(host, raw_config) -> None:
    graph = _build(host, raw_config(alarm="alerting@example.com"))

    assert graph.dangling() == []
    assert graph.external_ids == frozenset({"IamRoleLambdaExecution", "EmailsWorkerLambdaFunction"})


def test_custom_execution_role_id(raw_config) -> None:
    from worker_queue.compiler.context import HostContext

    host = HostContext(app_name="app", stage="prod", execution_role_id="SharedRole")
    graph = build("emails", resolve(raw_config()), host)

    assert graph.require(ResourceKind.EVENT_SOURCE_BINDING).depends_on == ("SharedRole",)
    assert graph.require(ResourceKind.QUEUE).properties["QueueName"] == "app-prod-emails"


def test_build_is_deterministic(host, raw_config) -> None:
    raw = raw_config(alarm="alerting@example.com", batchSize=5)

    assert _build(host, raw).to_json() == _build(host, raw).to_json()
