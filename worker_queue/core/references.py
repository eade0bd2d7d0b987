"""Symbolic cross-resource references and the rendering pass that resolves them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, Mapping, Union


@dataclass(frozen=True)
class Ref:
    """Pointer to another resource's primary identifier (CloudFormation ``Ref``)."""

    logical_id: str

    def to_intrinsic(self) -> dict[str, Any]:
        return {"Ref": self.logical_id}


@dataclass(frozen=True)
class GetAtt:
    """Pointer to a runtime attribute of another resource (``Fn::GetAtt``)."""

    logical_id: str
    attribute: str

    def to_intrinsic(self) -> dict[str, Any]:
        return {"Fn::GetAtt": [self.logical_id, self.attribute]}


Reference = Union[Ref, GetAtt]


def is_reference(value: Any) -> bool:
    return isinstance(value, (Ref, GetAtt))


def iter_references(value: Any) -> Iterator[Reference]:
    """Yield every reference nested inside a property value."""
    if is_reference(value):
        yield value
    elif isinstance(value, Mapping):
        for nested in value.values():
            yield from iter_references(nested)
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from iter_references(item)


def substitute(value: Any, resolver: Callable[[Reference], Any]) -> Any:
    """Return a plain copy of ``value`` with every reference replaced by ``resolver(ref)``.

    Mappings become dicts and tuples become lists so the result is JSON
    serializable.
    """
    if is_reference(value):
        return resolver(value)
    if isinstance(value, Mapping):
        return {key: substitute(nested, resolver) for key, nested in value.items()}
    if isinstance(value, (list, tuple)):
        return [substitute(item, resolver) for item in value]
    return value


def render(value: Any) -> Any:
    """Render references as CloudFormation intrinsic functions."""
    return substitute(value, lambda ref: ref.to_intrinsic())
