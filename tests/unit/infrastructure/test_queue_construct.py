import pytest
from aws_cdk import App, CfnResource, Stack
from aws_cdk.assertions import Match, Template

from worker_queue.compiler.compile import compile_queue
from worker_queue.constructs import QueueConstruct
from worker_queue.core.naming import logical_id, resource_logical_id


pytestmark = [pytest.mark.infrastructure]


def _host_stack() -> Stack:
    """Stack with stand-ins for the host-owned role and worker function."""
    stack = Stack(App(), "QueueHost")
    role = CfnResource(stack, "Role", type="AWS::IAM::Role", properties={"AssumeRolePolicyDocument": {}})
    role.override_logical_id("IamRoleLambdaExecution")
    function = CfnResource(stack, "Worker", type="AWS::Lambda::Function", properties={"Role": role.get_att("Arn")})
    function.override_logical_id("EmailsWorkerLambdaFunction")
    return stack


def test_construct_declares_compiled_resources(host, raw_config) -> None:
    """
    Given: a compiled emails queue with an alarm
    When: synthesizing the construct in a stack
    Then: every compiled node appears under its compiled logical id
    """
    stack = _host_stack()
    compilation = compile_queue("emails", raw_config(alarm="ops@example.com"), host)

    QueueConstruct(stack, "emails", compilation=compilation)

    resources = Template.from_stack(stack).to_json()["Resources"]
    for node in compilation.graph.nodes:
        assert resources[node.logical_id]["Type"] == node.kind.cfn_type
        assert resources[node.logical_id]["Properties"] == node.to_template()["Properties"]


def test_queues_are_destroyed_with_the_stack(host, raw_config) -> None:
    stack = _host_stack()
    QueueConstruct(stack, "emails", compilation=compile_queue("emails", raw_config(), host))

    t = Template.from_stack(stack)

    queues = t.find_resources("AWS::SQS::Queue")
    assert set(queues) == {resource_logical_id("emails", "Queue"), resource_logical_id("emails", "Dlq")}
    for queue in queues.values():
        assert queue["DeletionPolicy"] == "Delete"
        assert queue["UpdateReplacePolicy"] == "Delete"


def test_event_source_mapping_waits_for_execution_role(host, raw_config) -> None:
    stack = _host_stack()
    QueueConstruct(stack, "emails", compilation=compile_queue("emails", raw_config(), host))

    t = Template.from_stack(stack)

    t.has_resource(
        "AWS::Lambda::EventSourceMapping",
        {
            "DependsOn": ["IamRoleLambdaExecution"],
            "Properties": Match.object_like(
                {
                    "BatchSize": 1,
                    "FunctionName": {"Fn::GetAtt": ["EmailsWorkerLambdaFunction", "Arn"]},
                }
            ),
        },
    )


def test_outputs_and_queue_tokens(host, raw_config) -> None:
    stack = _host_stack()
    construct = QueueConstruct(stack, "emails", compilation=compile_queue("emails", raw_config(), host))
    queue_id = resource_logical_id("emails", "Queue")

    t = Template.from_stack(stack)

    t.has_output(
        logical_id("emails", "QueueArn"),
        {"Description": 'ARN of the "emails" SQS queue.', "Value": {"Fn::GetAtt": [queue_id, "Arn"]}},
    )
    t.has_output(
        logical_id("emails", "QueueUrl"),
        {"Description": 'URL of the "emails" SQS queue.', "Value": {"Ref": queue_id}},
    )
    assert stack.resolve(construct.queue_url) == {"Ref": queue_id}
    assert stack.resolve(construct.queue_arn) == {"Fn::GetAtt": [queue_id, "Arn"]}
