"""Member lookup by dotted path and publishing onto controller objects."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, Callable, Optional

_MISSING = object()


def _get(owner: Any, key: str) -> Any:
    if isinstance(owner, Mapping):
        return owner.get(key, _MISSING)
    return getattr(owner, key, _MISSING)


def resolve_member(owner: Any, path: str) -> Optional[Any]:
    """Return the member at dotted ``path`` on ``owner`` or ``None``.

    ``"items.append"`` resolves ``owner.items`` first, then ``append`` on it.
    Mapping owners are indexed by key instead of attribute.
    """
    if owner is None or not path:
        return None
    current = owner
    for part in path.split("."):
        current = _get(current, part)
        if current is _MISSING or current is None:
            return None
    return current


def resolve_callable(owner: Any, path: str) -> Optional[Callable[..., Any]]:
    """Return the member at ``path`` when it is callable, else ``None``."""
    member = resolve_member(owner, path)
    return member if callable(member) else None


def set_member(owner: Any, path: str, value: Any) -> None:
    """Assign ``value`` at dotted ``path``; intermediate members must exist."""
    head, _, last = path.rpartition(".")
    target = resolve_member(owner, head) if head else owner
    if target is None:
        raise AttributeError(f"Cannot set '{path}': '{head}' does not exist.")
    if isinstance(target, MutableMapping):
        target[last] = value
    else:
        setattr(target, last, value)


def lower_camel(name: str) -> str:
    """Lower-case the first character only (``"MainView"`` -> ``"mainView"``)."""
    if not name:
        return name
    return name[:1].lower() + name[1:]


class ControllerBinder:
    """Publishes rendered controls and groups onto the bound controller."""

    def __init__(self, controller: Any = None) -> None:
        self.controller = controller

    def publish(self, name: str, value: Any) -> None:
        """Set ``value`` on the controller under ``lower_camel(name)``.

        No-op when no controller is bound.
        """
        if self.controller is None or not name:
            return
        key = lower_camel(name)
        if isinstance(self.controller, MutableMapping):
            self.controller[key] = value
        else:
            setattr(self.controller, key, value)


__all__ = [
    "ControllerBinder",
    "lower_camel",
    "resolve_callable",
    "resolve_member",
    "set_member",
]
