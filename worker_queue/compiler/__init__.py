"""Graph builder and the permission/output contributors."""

from worker_queue.compiler.builder import build
from worker_queue.compiler.outputs import outputs_for, variables_for
from worker_queue.compiler.permissions import permissions_for

__all__ = ["build", "outputs_for", "permissions_for", "variables_for"]
