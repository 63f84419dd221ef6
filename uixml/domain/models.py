"""Render results: the app descriptor and its control groups."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class ControlGroup:
    """Named set of controls declared by a ``group`` node.

    ``controls`` is the same list object that is published on the controller,
    so members added later in the render are visible there.
    """

    name: str
    controls: List[Any] = field(default_factory=list)


@dataclass
class AppDescriptor:
    """Document-level metadata and root controls produced by one render."""

    name: Optional[str] = None
    icon: Optional[str] = None
    controller: Optional[str] = None
    main: Optional[str] = None
    on_load: Optional[str] = None
    controls: List[Any] = field(default_factory=list)
    groups: List[ControlGroup] = field(default_factory=list)
    instance: Any = None
    package: Any = None

    def find_group(self, name: str) -> Optional[ControlGroup]:
        for group in self.groups:
            if group.name == name:
                return group
        return None

    def find_control(self, name: str) -> Optional[Any]:
        """Return the root control named ``name``."""
        for control in self.controls:
            if getattr(control, "name", None) == name:
                return control
        return None

    @property
    def main_control(self) -> Optional[Any]:
        if not self.main:
            return None
        return self.find_control(self.main)


__all__ = ["AppDescriptor", "ControlGroup"]
