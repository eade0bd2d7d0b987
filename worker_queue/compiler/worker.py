"""Worker function declaration handed to the host for packaging."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from worker_queue.compiler.context import HostContext
from worker_queue.config.constants import LAMBDA_NAME_MAX_LENGTH
from worker_queue.core.naming import physical_name, worker_function_logical_id, worker_function_name
from worker_queue.core.resolver import NormalizedConfiguration


@dataclass(frozen=True)
class WorkerDefinition:
    """
    Worker function as the host should declare it.

    Attributes:
        key: Function key within the app (e.g., 'emailsWorker')
        name: Physical function name
        logical_id: Logical id the binding points at
        handler: Code reference, 'path/to/module.function'
        timeout: Function timeout in seconds
        memory_size: Function memory in MB
        environment: Extra environment variables
    """

    key: str
    name: str
    logical_id: str
    handler: str
    timeout: int
    memory_size: int
    environment: Mapping[str, str] = field(default_factory=dict)

    @property
    def module_path(self) -> str:
        return self.handler.rsplit(".", 1)[0].replace(".", "/")

    @property
    def entry(self) -> str:
        """Directory holding the handler module ('.' for the project root)."""
        directory, _, _ = self.module_path.rpartition("/")
        return directory or "."

    @property
    def index(self) -> str:
        return f"{self.module_path.rpartition('/')[2]}.py"

    @property
    def function(self) -> str:
        return self.handler.rsplit(".", 1)[1]


def worker_for(construct_name: str, config: NormalizedConfiguration, host: HostContext) -> WorkerDefinition:
    """Declare the worker function; its timeout is the configured function timeout verbatim."""
    key = worker_function_name(construct_name)
    return WorkerDefinition(
        key=key,
        name=physical_name(host.app_name, host.stage, key, max_length=LAMBDA_NAME_MAX_LENGTH),
        logical_id=worker_function_logical_id(construct_name),
        handler=config.worker_handler,
        timeout=config.function_timeout_seconds,
        memory_size=config.worker_memory_size,
        environment=dict(config.worker_environment),
    )
