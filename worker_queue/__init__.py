"""
Worker queue construct compiler.

Turns a named queue with a worker function into CloudFormation resources:
- Main queue and dead letter queue with redrive policy
- SQS event source mapping for the worker
- Permission statements for the shared execution role
- Optional DLQ alarm with email notification
"""

from worker_queue.compiler.compile import QueueCompilation, compile_queue, compile_queues
from worker_queue.compiler.context import HostContext
from worker_queue.core.errors import (
    ConfigValidationError,
    DanglingReferenceError,
    DuplicateNodeError,
    IncompleteGraphError,
    QueueCompilerError,
)

__all__ = [
    "ConfigValidationError",
    "DanglingReferenceError",
    "DuplicateNodeError",
    "HostContext",
    "IncompleteGraphError",
    "QueueCompilation",
    "QueueCompilerError",
    "compile_queue",
    "compile_queues",
]
