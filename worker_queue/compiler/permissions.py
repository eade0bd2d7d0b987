"""Permission statements the shared worker execution role must receive."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from worker_queue.core.graph import ResourceGraph, ResourceKind
from worker_queue.core.references import GetAtt, Reference, render

SEND_MESSAGE_ACTION = "sqs:SendMessage"


@dataclass(frozen=True)
class PermissionStatement:
    """A single IAM policy statement scoped to compiled resources."""

    action: str
    resources: tuple[Reference, ...]
    effect: str = "Allow"

    def to_dict(self) -> dict[str, Any]:
        return {
            "Action": self.action,
            "Effect": self.effect,
            "Resource": render(self.resources),
        }


def permissions_for(graph: ResourceGraph) -> list[PermissionStatement]:
    """Allow every function of the app to enqueue messages into the primary queue.

    Raises:
        IncompleteGraphError: If the graph has no primary queue node
    """
    queue = graph.require(ResourceKind.QUEUE)
    return [PermissionStatement(action=SEND_MESSAGE_ACTION, resources=(GetAtt(queue.logical_id, "Arn"),))]
