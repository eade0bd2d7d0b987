"""Config resolver: validate raw construct configuration and apply defaults.

Raw configuration is parsed with Pydantic v2 models. Defaults are applied only
when a key is absent, so explicit falsy values such as ``maxRetries: 0`` are
kept as given.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from worker_queue.config.constants import (
    BATCH_SIZE_RANGE,
    BATCHING_WINDOW_RANGE,
    FUNCTION_TIMEOUT_RANGE,
    QUEUE_DEFAULTS,
    VISIBILITY_TIMEOUT_MULTIPLIER,
)
from worker_queue.core.errors import ConfigValidationError

CONSTRUCT_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
HANDLER_PATTERN = re.compile(r"^(?:[A-Za-z0-9_-]+/)*[A-Za-z0-9_-]+(?:\.[A-Za-z0-9_-]+)*\.[A-Za-z_][A-Za-z0-9_]*$")


class _WorkerModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    handler: str
    timeout: int = Field(
        default=QUEUE_DEFAULTS["function_timeout_seconds"],
        ge=FUNCTION_TIMEOUT_RANGE[0],
        le=FUNCTION_TIMEOUT_RANGE[1],
        strict=True,
    )
    memory_size: int = Field(
        default=QUEUE_DEFAULTS["worker_memory_size"], alias="memorySize", ge=128, le=10240, strict=True
    )
    environment: Dict[str, str] = Field(default_factory=dict)

    @field_validator("handler")
    @classmethod
    def _validate_handler(cls, v: str) -> str:  # type: ignore[override]
        value = v.strip()
        if not HANDLER_PATTERN.fullmatch(value):
            raise ValueError("handler must look like 'path/to/module.function'")
        return value


class _QueueModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    type: Optional[Literal["queue"]] = None
    worker: _WorkerModel
    max_retries: int = Field(default=QUEUE_DEFAULTS["max_retries"], alias="maxRetries", ge=0, strict=True)
    batch_size: int = Field(
        default=QUEUE_DEFAULTS["batch_size"],
        alias="batchSize",
        ge=BATCH_SIZE_RANGE[0],
        le=BATCH_SIZE_RANGE[1],
        strict=True,
    )
    max_batching_window: int = Field(
        default=QUEUE_DEFAULTS["max_batching_window_seconds"],
        alias="maxBatchingWindow",
        ge=BATCHING_WINDOW_RANGE[0],
        le=BATCHING_WINDOW_RANGE[1],
        strict=True,
    )
    alarm: Optional[str] = None

    @field_validator("alarm")
    @classmethod
    def _validate_alarm(cls, v: Optional[str]) -> Optional[str]:  # type: ignore[override]
        if v is None:
            return None
        value = v.strip()
        if not EMAIL_PATTERN.fullmatch(value):
            raise ValueError("alarm must be an email address")
        return value


@dataclass(frozen=True)
class NormalizedConfiguration:
    """Validated queue configuration with every default applied."""

    worker_handler: str
    batch_size: int = QUEUE_DEFAULTS["batch_size"]
    max_batching_window_seconds: int = QUEUE_DEFAULTS["max_batching_window_seconds"]
    max_retries: int = QUEUE_DEFAULTS["max_retries"]
    function_timeout_seconds: int = QUEUE_DEFAULTS["function_timeout_seconds"]
    alarm_email: Optional[str] = None
    worker_memory_size: int = QUEUE_DEFAULTS["worker_memory_size"]
    worker_environment: Mapping[str, str] = field(default_factory=dict)

    @property
    def visibility_timeout_seconds(self) -> int:
        return self.function_timeout_seconds * VISIBILITY_TIMEOUT_MULTIPLIER


def _format_errors(exc: ValidationError) -> List[str]:
    messages: List[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = str(error.get("msg", "invalid value"))
        messages.append(f"{location}: {message}" if location else message)
    return messages


def validate_construct_name(construct_name: Any) -> str:
    """Return the construct name or raise ``ConfigValidationError``."""
    if not isinstance(construct_name, str) or not CONSTRUCT_NAME_PATTERN.fullmatch(construct_name):
        raise ConfigValidationError(
            ["construct name may only contain letters, digits, '-' and '_'"],
            construct_name=str(construct_name),
        )
    return construct_name


def resolve(raw_config: Any, construct_name: Optional[str] = None) -> NormalizedConfiguration:
    """
    Merge raw construct configuration with defaults and validate it.

    Args:
        raw_config: Mapping as written by the user (camelCase keys)
        construct_name: Construct being resolved, used in error messages

    Returns:
        NormalizedConfiguration

    Raises:
        ConfigValidationError: If any documented constraint is violated
    """
    if not isinstance(raw_config, Mapping):
        raise ConfigValidationError(["configuration must be a mapping"], construct_name)

    try:
        model = _QueueModel.model_validate(dict(raw_config))
    except ValidationError as exc:
        raise ConfigValidationError(_format_errors(exc), construct_name) from exc

    return NormalizedConfiguration(
        worker_handler=model.worker.handler,
        batch_size=model.batch_size,
        max_batching_window_seconds=model.max_batching_window,
        max_retries=model.max_retries,
        function_timeout_seconds=model.worker.timeout,
        alarm_email=model.alarm,
        worker_memory_size=model.worker.memory_size,
        worker_environment=dict(model.worker.environment),
    )
