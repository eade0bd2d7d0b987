"""Externally visible values exposed through the host's outputs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from worker_queue.core.graph import ResourceGraph, ResourceKind
from worker_queue.core.naming import logical_id
from worker_queue.core.references import GetAtt, Ref, Reference, render


@dataclass(frozen=True)
class StackOutput:
    description: str
    value: Reference

    def to_dict(self) -> dict[str, Any]:
        return {"Description": self.description, "Value": render(self.value)}


def outputs_for(construct_name: str, graph: ResourceGraph) -> dict[str, StackOutput]:
    """
    Derive the queue ARN and URL outputs of a construct.

    Args:
        construct_name: Construct namespace, also used in descriptions
        graph: Graph built for the construct

    Returns:
        Mapping of output logical id to StackOutput

    Raises:
        IncompleteGraphError: If the graph has no primary queue node
    """
    queue_id = graph.require(ResourceKind.QUEUE).logical_id
    return {
        logical_id(construct_name, "QueueArn"): StackOutput(
            description=f'ARN of the "{construct_name}" SQS queue.',
            value=GetAtt(queue_id, "Arn"),
        ),
        logical_id(construct_name, "QueueUrl"): StackOutput(
            description=f'URL of the "{construct_name}" SQS queue.',
            value=Ref(queue_id),
        ),
    }


def variables_for(graph: ResourceGraph) -> dict[str, Reference]:
    """Values other parts of the app can reference (e.g., in function environments)."""
    queue_id = graph.require(ResourceKind.QUEUE).logical_id
    return {
        "queueUrl": Ref(queue_id),
        "queueArn": GetAtt(queue_id, "Arn"),
    }
