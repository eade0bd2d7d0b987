"""Construct rendering a compiled worker queue into a CDK stack."""

from __future__ import annotations

from aws_cdk import CfnOutput, CfnResource, Fn, RemovalPolicy
from constructs import Construct

from worker_queue.compiler.compile import QueueCompilation
from worker_queue.core.references import GetAtt, Reference, render


def to_token(reference: Reference) -> str:
    """Return a CDK token string resolving to ``reference`` at synth time."""
    if isinstance(reference, GetAtt):
        return Fn.get_att(reference.logical_id, reference.attribute).to_string()
    return Fn.ref(reference.logical_id)


class QueueConstruct(Construct):
    """Declare the compiled queue resources and outputs under this scope.

    Logical ids are overridden with the compiled ids so the template matches
    the compilation exactly; the host stays responsible for the worker
    function and the execution role the graph points at.
    """

    def __init__(self, scope: Construct, construct_id: str, *, compilation: QueueCompilation) -> None:
        super().__init__(scope, construct_id)
        self.compilation = compilation
        self.resources: dict[str, CfnResource] = {}

        for node in compilation.graph.nodes:
            resource = CfnResource(
                self,
                node.logical_id,
                type=node.kind.cfn_type,
                properties=render(node.properties),
            )
            resource.override_logical_id(node.logical_id)
            if node.deletion_policy == "Delete":
                resource.apply_removal_policy(RemovalPolicy.DESTROY)
            if node.depends_on:
                resource.add_override("DependsOn", list(node.depends_on))
            self.resources[node.logical_id] = resource

        for output_id, output in compilation.outputs.items():
            cfn_output = CfnOutput(
                self,
                output_id,
                value=to_token(output.value),
                description=output.description,
            )
            cfn_output.override_logical_id(output_id)

    @property
    def queue_url(self) -> str:
        return to_token(self.compilation.variables["queueUrl"])

    @property
    def queue_arn(self) -> str:
        return to_token(self.compilation.variables["queueArn"])
