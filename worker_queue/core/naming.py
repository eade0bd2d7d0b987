"""
Identifier generation for compiled resources.

Logical ids follow the AWS CDK unique-id scheme: a human readable prefix
built from the path components plus an 8 character MD5 digest of the full
path. Physical names follow the pattern {app}-{stage}-{construct}{suffix}.
"""

from __future__ import annotations

import hashlib
import re

from worker_queue.config.constants import SQS_NAME_MAX_LENGTH

HASH_LENGTH = 8
MAX_HUMAN_LENGTH = 240
PATH_SEPARATOR = "/"

# Path components hashed but hidden from the human readable prefix
HIDDEN_COMPONENTS = frozenset({"Resource", "Default"})
DEFAULT_CHILD = "Resource"

_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")


def _path_hash(components: list[str]) -> str:
    digest = hashlib.md5(PATH_SEPARATOR.join(components).encode("utf-8")).hexdigest()
    return digest[:HASH_LENGTH].upper()


def remove_non_alphanumeric(value: str) -> str:
    """Strip every character that is not an ASCII letter or digit."""
    return _NON_ALPHANUMERIC.sub("", value)


def _unique_id(components: list[str]) -> str:
    human = "".join(remove_non_alphanumeric(c) for c in components if c not in HIDDEN_COMPONENTS)
    return f"{human[:MAX_HUMAN_LENGTH]}{_path_hash(components)}"


def logical_id(construct_name: str, role: str) -> str:
    """
    Derive the logical id of a construct-level element such as an output.

    Args:
        construct_name: Construct namespace (e.g., 'emails')
        role: Element role within the construct (e.g., 'QueueArn')

    Returns:
        Stable logical id such as 'emailsQueueArnFFE4EF8E'
    """
    if not construct_name or not role:
        raise ValueError("construct_name and role must be non-empty")
    return _unique_id([construct_name, role])


def resource_logical_id(construct_name: str, role: str) -> str:
    """
    Derive the logical id of a resource declared inside a construct.

    Resources live at the default child path '{construct}/{role}/Resource';
    the hidden component is hashed but kept out of the readable prefix.

    Args:
        construct_name: Construct namespace (e.g., 'emails')
        role: Resource role within the construct (e.g., 'Queue', 'Dlq')

    Returns:
        Stable logical id such as 'emailsQueueF057328A'
    """
    if not construct_name or not role:
        raise ValueError("construct_name and role must be non-empty")
    return _unique_id([construct_name, role, DEFAULT_CHILD])


def physical_name(
    app: str,
    stage: str,
    construct_name: str,
    suffix: str = "",
    max_length: int = SQS_NAME_MAX_LENGTH,
) -> str:
    """
    Generate a globally visible resource name.

    When the name exceeds ``max_length`` the app and construct portions are
    truncated and a digest of the full name is inserted before the suffix.
    The stage token and the suffix are always kept whole.

    Args:
        app: Application identifier
        stage: Deployment stage (dev, staging, prod)
        construct_name: Construct namespace
        suffix: Role suffix (e.g., '-dlq')
        max_length: Provider limit for this resource type

    Returns:
        Formatted resource name
    """
    full = f"{app}-{stage}-{construct_name}{suffix}"
    if len(full) <= max_length:
        return full

    digest = hashlib.md5(full.encode("utf-8")).hexdigest()[:HASH_LENGTH]
    budget = max_length - len(stage) - len(suffix) - len(digest) - 3
    if budget < 2:
        raise ValueError(f"Cannot fit stage '{stage}' and suffix '{suffix}' into {max_length} characters")

    construct_budget = min(len(construct_name), budget - 1)
    app_budget = min(len(app), budget - construct_budget)
    return f"{app[:app_budget]}-{stage}-{construct_name[:construct_budget]}-{digest}{suffix}"


def normalize_name(name: str) -> str:
    """Normalize a name the way the host framework builds its own logical ids."""
    replaced = name.replace("-", "Dash").replace("_", "Underscore")
    return replaced[:1].upper() + replaced[1:]


def normalize_alphanumeric(name: str) -> str:
    stripped = remove_non_alphanumeric(name)
    return stripped[:1].upper() + stripped[1:]


def worker_function_name(construct_name: str) -> str:
    """Return the host function key of the construct's worker."""
    return f"{construct_name}Worker"


def worker_function_logical_id(construct_name: str) -> str:
    """Return the logical id the host assigns to the worker function."""
    return f"{normalize_name(worker_function_name(construct_name))}LambdaFunction"


def event_source_mapping_logical_id(construct_name: str, queue_logical_id: str) -> str:
    """Return the logical id of the SQS event source mapping feeding the worker."""
    function_part = normalize_name(worker_function_name(construct_name))
    return f"{function_part}EventSourceMappingSQS{normalize_alphanumeric(queue_logical_id)}"
