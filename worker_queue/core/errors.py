"""Error taxonomy for queue construct compilation."""

from __future__ import annotations

from typing import Optional, Sequence


class QueueCompilerError(Exception):
    """Base class for every error raised by the compiler."""


class ConfigValidationError(QueueCompilerError, ValueError):
    """Raised when user configuration violates a documented constraint."""

    def __init__(self, errors: Sequence[str], construct_name: Optional[str] = None) -> None:
        self.errors = list(errors)
        self.construct_name = construct_name
        prefix = f'Invalid configuration for queue "{construct_name}"' if construct_name else "Invalid queue configuration"
        super().__init__(f"{prefix}: {'; '.join(self.errors)}")


class IncompleteGraphError(QueueCompilerError):
    """Raised when a contributor receives a graph missing an expected node."""


class DanglingReferenceError(IncompleteGraphError):
    """Raised when a reference or dependency points outside the graph."""


class DuplicateNodeError(IncompleteGraphError):
    """Raised when two nodes share one logical id."""
