"""Host-owned namespace handed to every compilation."""

from __future__ import annotations

import re
from dataclasses import dataclass

from worker_queue.config.constants import DEFAULT_EXECUTION_ROLE_ID

_TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9-]+$")


@dataclass(frozen=True)
class HostContext:
    """
    Deployment namespace supplied by the host.

    Attributes:
        app_name: Application identifier embedded in physical names
        stage: Deployment stage token (dev, staging, prod)
        execution_role_id: Logical id of the shared worker execution role
    """

    app_name: str
    stage: str
    execution_role_id: str = DEFAULT_EXECUTION_ROLE_ID

    def __post_init__(self) -> None:
        for label, value in (("app_name", self.app_name), ("stage", self.stage)):
            if not isinstance(value, str) or not _TOKEN_PATTERN.fullmatch(value):
                raise ValueError(f"{label} must contain only letters, digits and '-': {value!r}")
        if not self.execution_role_id:
            raise ValueError("execution_role_id must be provided")
