"""Control definitions describing how markup maps onto control instances.

A definition is supplied by whoever implements a control and is registered
once, before any render. The renderer only reads it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple

from .errors import InvalidControl


@dataclass(frozen=True)
class AttributeDefinition:
    """Markup attribute ``name`` assigned to instance ``property`` as ``type``."""

    name: str
    property: str
    type: str = "string"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AttributeDefinition":
        name = str(data.get("name") or "").strip()
        if not name:
            raise InvalidControl("Attribute definition is missing 'name'.")
        return cls(
            name=name,
            property=str(data.get("property") or name),
            type=str(data.get("type") or "string"),
        )


@dataclass(frozen=True)
class EventDefinition:
    """Event ``name`` wired through the ``on<name>`` markup attribute.

    The callback is assigned to ``handler`` on the instance.
    """

    name: str
    handler: str = ""

    @property
    def attribute(self) -> str:
        return f"on{self.name}"

    @property
    def handler_property(self) -> str:
        return self.handler or self.attribute

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EventDefinition":
        name = str(data.get("name") or "").strip()
        if not name:
            raise InvalidControl("Event definition is missing 'name'.")
        return cls(name=name, handler=str(data.get("handler") or data.get("property") or ""))


@dataclass(frozen=True)
class ContainerDefinition:
    """Named child slot; ``function`` is a dotted path to the add-child callable."""

    name: str
    function: str
    attributes: Tuple[AttributeDefinition, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ContainerDefinition":
        name = str(data.get("name") or "").strip()
        function = str(data.get("function") or data.get("funct") or "").strip()
        if not name:
            raise InvalidControl("Container definition is missing 'name'.")
        if not function:
            raise InvalidControl(f"Container '{name}' is missing its add 'function'.")
        return cls(
            name=name,
            function=function,
            attributes=_attributes(data.get("attributes")),
        )


@dataclass(frozen=True)
class ControlDefinition:
    """Schema of one control type.

    Attributes:
        name: Tag name the control is registered under.
        type: Zero-argument factory (usually the control class).
        attributes: Markup attributes copied onto the instance.
        events: Events bound to controller callbacks.
        containers: Ordered child slots.
        parent_type: Only parent control type this control may be nested in.
    """

    name: str
    type: Callable[[], Any]
    attributes: Tuple[AttributeDefinition, ...] = ()
    events: Tuple[EventDefinition, ...] = ()
    containers: Tuple[ContainerDefinition, ...] = ()
    parent_type: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidControl("Control definition is missing 'name'.")
        if not callable(self.type):
            raise InvalidControl(f"Control '{self.name}' has no callable 'type'.")

    @property
    def container_names(self) -> Tuple[str, ...]:
        return tuple(container.name for container in self.containers)

    def create(self) -> Any:
        return self.type()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ControlDefinition":
        """Build a definition from a nested mapping.

        Accepts the shape ``{name, type, attributes[], events[], containers[],
        parent_type}`` where list entries are mappings or already-built
        definition objects.
        """
        name = str(data.get("name") or "").strip()
        factory = data.get("type")
        if not name:
            raise InvalidControl("Control definition is missing 'name'.")
        if factory is None:
            raise InvalidControl(f"Control '{name}' is missing 'type'.")
        return cls(
            name=name,
            type=factory,
            attributes=_attributes(data.get("attributes")),
            events=tuple(
                e if isinstance(e, EventDefinition) else EventDefinition.from_dict(e)
                for e in (data.get("events") or ())
            ),
            containers=tuple(
                c if isinstance(c, ContainerDefinition) else ContainerDefinition.from_dict(c)
                for c in (data.get("containers") or ())
            ),
            parent_type=data.get("parent_type") or data.get("parentType") or None,
        )


def _attributes(items: Optional[Iterable[Any]]) -> Tuple[AttributeDefinition, ...]:
    return tuple(
        a if isinstance(a, AttributeDefinition) else AttributeDefinition.from_dict(a)
        for a in (items or ())
    )


__all__ = [
    "AttributeDefinition",
    "ContainerDefinition",
    "ControlDefinition",
    "EventDefinition",
]
