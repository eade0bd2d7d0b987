"""Resource nodes and the graph a compilation emits."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional

from worker_queue.core.errors import DanglingReferenceError, DuplicateNodeError, IncompleteGraphError
from worker_queue.core.references import Reference, iter_references, render


class ResourceKind(str, Enum):
    """Role a node plays in the compiled construct."""

    QUEUE = "queue"
    DEAD_LETTER_QUEUE = "dead-letter-queue"
    EVENT_SOURCE_BINDING = "event-source-binding"
    ALARM = "alarm"
    ALARM_TOPIC = "alarm-topic"
    ALARM_SUBSCRIPTION = "alarm-subscription"

    @property
    def cfn_type(self) -> str:
        return _CFN_TYPES[self]


_CFN_TYPES = {
    ResourceKind.QUEUE: "AWS::SQS::Queue",
    ResourceKind.DEAD_LETTER_QUEUE: "AWS::SQS::Queue",
    ResourceKind.EVENT_SOURCE_BINDING: "AWS::Lambda::EventSourceMapping",
    ResourceKind.ALARM: "AWS::CloudWatch::Alarm",
    ResourceKind.ALARM_TOPIC: "AWS::SNS::Topic",
    ResourceKind.ALARM_SUBSCRIPTION: "AWS::SNS::Subscription",
}


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(nested) for key, nested in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


@dataclass(frozen=True)
class ResourceNode:
    """A typed resource declaration; property bags are deep-frozen on creation."""

    logical_id: str
    kind: ResourceKind
    properties: Mapping[str, Any]
    depends_on: tuple[str, ...] = ()
    deletion_policy: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", _freeze(self.properties))
        object.__setattr__(self, "depends_on", tuple(self.depends_on))

    def references(self) -> Iterator[Reference]:
        return iter_references(self.properties)

    def to_template(self) -> dict[str, Any]:
        body: dict[str, Any] = {"Type": self.kind.cfn_type, "Properties": render(self.properties)}
        if self.depends_on:
            body["DependsOn"] = list(self.depends_on)
        if self.deletion_policy:
            body["DeletionPolicy"] = self.deletion_policy
            body["UpdateReplacePolicy"] = self.deletion_policy
        return body


@dataclass(frozen=True)
class ResourceGraph:
    """
    Self-contained fragment of resource declarations for one construct.

    Attributes:
        nodes: Nodes in emission order
        external_ids: Host-owned logical ids the nodes may point at
    """

    nodes: tuple[ResourceNode, ...]
    external_ids: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "external_ids", frozenset(self.external_ids))
        seen: set[str] = set()
        for node in self.nodes:
            if node.logical_id in seen:
                raise DuplicateNodeError(f"Duplicate logical id in graph: {node.logical_id}")
            seen.add(node.logical_id)

    def __contains__(self, logical_id: object) -> bool:
        return any(node.logical_id == logical_id for node in self.nodes)

    def __getitem__(self, logical_id: str) -> ResourceNode:
        for node in self.nodes:
            if node.logical_id == logical_id:
                return node
        raise KeyError(logical_id)

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def logical_ids(self) -> list[str]:
        return [node.logical_id for node in self.nodes]

    def nodes_of_kind(self, kind: ResourceKind) -> list[ResourceNode]:
        return [node for node in self.nodes if node.kind is kind]

    def require(self, kind: ResourceKind) -> ResourceNode:
        """Return the single node of ``kind`` or raise ``IncompleteGraphError``."""
        matches = self.nodes_of_kind(kind)
        if len(matches) != 1:
            raise IncompleteGraphError(f"Expected exactly one {kind.value} node, found {len(matches)}")
        return matches[0]

    def dangling(self) -> list[tuple[str, str]]:
        """Return (source, target) pairs whose target is neither a node nor an external id."""
        known = set(self.logical_ids) | self.external_ids
        missing: list[tuple[str, str]] = []
        for node in self.nodes:
            targets = [ref.logical_id for ref in node.references()] + list(node.depends_on)
            missing.extend((node.logical_id, target) for target in targets if target not in known)
        return missing

    def validate(self) -> "ResourceGraph":
        missing = self.dangling()
        if missing:
            details = ", ".join(f"{source} -> {target}" for source, target in missing)
            raise DanglingReferenceError(f"Graph contains dangling references: {details}")
        return self

    def to_template(self) -> dict[str, Any]:
        return {node.logical_id: node.to_template() for node in self.nodes}

    def to_json(self) -> str:
        return json.dumps(self.to_template(), indent=2, ensure_ascii=False)


def merge_graphs(graphs: Iterable[ResourceGraph]) -> ResourceGraph:
    """Combine fragments into one graph; logical ids must stay unique."""
    nodes: list[ResourceNode] = []
    external: set[str] = set()
    for graph in graphs:
        nodes.extend(graph.nodes)
        external.update(graph.external_ids)
    return ResourceGraph(nodes=tuple(nodes), external_ids=frozenset(external))
