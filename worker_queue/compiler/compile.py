"""Compilation facade: raw construct configuration in, deployable fragment out."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping

from worker_queue.compiler.builder import build
from worker_queue.compiler.context import HostContext
from worker_queue.compiler.outputs import StackOutput, outputs_for, variables_for
from worker_queue.compiler.permissions import PermissionStatement, permissions_for
from worker_queue.compiler.worker import WorkerDefinition, worker_for
from worker_queue.core.errors import DuplicateNodeError
from worker_queue.core.graph import ResourceGraph, merge_graphs
from worker_queue.core.references import Reference
from worker_queue.core.resolver import NormalizedConfiguration, resolve, validate_construct_name
from worker_queue.utils.logger import get_logger


@dataclass(frozen=True)
class QueueCompilation:
    """Everything one construct contributes to the host's deployment plan."""

    construct_name: str
    config: NormalizedConfiguration
    graph: ResourceGraph
    worker: WorkerDefinition
    permissions: tuple[PermissionStatement, ...]
    outputs: Mapping[str, StackOutput]
    variables: Mapping[str, Reference]

    def to_template(self) -> dict[str, Any]:
        return {
            "Resources": self.graph.to_template(),
            "Outputs": {key: output.to_dict() for key, output in self.outputs.items()},
        }

    def to_json(self) -> str:
        return json.dumps(self.to_template(), indent=2, ensure_ascii=False)


def compile_queue(construct_name: str, raw_config: Any, host: HostContext) -> QueueCompilation:
    """
    Compile one queue construct.

    Args:
        construct_name: Construct namespace, unique within the deployment
        raw_config: User configuration for the construct
        host: Host namespace

    Returns:
        QueueCompilation

    Raises:
        ConfigValidationError: If the construct name or configuration is invalid
    """
    validate_construct_name(construct_name)
    config = resolve(raw_config, construct_name=construct_name)
    graph = build(construct_name, config, host)

    compilation = QueueCompilation(
        construct_name=construct_name,
        config=config,
        graph=graph,
        worker=worker_for(construct_name, config, host),
        permissions=tuple(permissions_for(graph)),
        outputs=outputs_for(construct_name, graph),
        variables=variables_for(graph),
    )

    log = get_logger(__name__, stage=host.stage, construct=construct_name)
    log.debug(
        "Compiled queue construct",
        extra={"details": {"resources": graph.logical_ids, "alarm": config.alarm_email is not None}},
    )
    return compilation


def _claim(owners: dict[str, str], identifier: str, construct_name: str, kind: str) -> None:
    owner = owners.setdefault(identifier, construct_name)
    if owner != construct_name:
        raise DuplicateNodeError(f'Constructs "{owner}" and "{construct_name}" both produce {kind} "{identifier}"')


def _ensure_unique_ids(compilations: Mapping[str, QueueCompilation]) -> None:
    """Reject a deployment in which two constructs claim the same identifier.

    Resource node ids are checked by merging the graphs. Worker logical ids
    carry no hash, and construct names share the host scope with worker keys,
    so both are checked explicitly.

    Raises:
        DuplicateNodeError: On the first shared identifier
    """
    merge_graphs(compilation.graph for compilation in compilations.values())

    worker_ids: dict[str, str] = {}
    scope_ids: dict[str, str] = {}
    for name, compilation in compilations.items():
        _claim(worker_ids, compilation.worker.logical_id, name, "worker logical id")
        _claim(scope_ids, name, name, "construct id")
        _claim(scope_ids, compilation.worker.key, name, "construct id")


def compile_queues(constructs: Mapping[str, Any], host: HostContext) -> dict[str, QueueCompilation]:
    """Compile every queue construct of a deployment.

    Raises:
        ConfigValidationError: On the first invalid construct
        DuplicateNodeError: If two constructs produce the same logical id,
            worker logical id or host construct id
    """
    compilations = {name: compile_queue(name, raw, host) for name, raw in constructs.items()}
    _ensure_unique_ids(compilations)

    log = get_logger(__name__, stage=host.stage)
    log.info("Compiled queue constructs", extra={"details": {"constructs": sorted(compilations)}})
    return compilations
