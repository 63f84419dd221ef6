"""Registry mapping markup tag names to control definitions.

The renderer resolves every control node through this registry. Registration
is expected to finish before the first render; lookups during a render are
read-only.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from .definitions import ControlDefinition
from .errors import DuplicateControl, InvalidControl

_log = logging.getLogger(__name__)


class ControlRegistry:
    """Tag-name keyed store of :class:`ControlDefinition` objects."""

    def __init__(self, *, case_sensitive: bool = False) -> None:
        self._case_sensitive = bool(case_sensitive)
        self._definitions: Dict[str, ControlDefinition] = {}

    @property
    def case_sensitive(self) -> bool:
        return self._case_sensitive

    def normalize(self, tag: Optional[str]) -> str:
        """Normalize a tag or container name per the case policy."""
        text = str(tag or "")
        return text if self._case_sensitive else text.lower()

    def register(
        self, definition: Union[ControlDefinition, Mapping[str, Any]]
    ) -> ControlDefinition:
        """Store a definition under its normalized tag name.

        Raises:
            DuplicateControl: If the normalized tag is already registered.
            InvalidControl: If a mapping definition is incomplete, or two
                containers share a name under the case policy.
        """
        if not isinstance(definition, ControlDefinition):
            definition = ControlDefinition.from_dict(definition)
        key = self.normalize(definition.name)
        if key in self._definitions:
            raise DuplicateControl(
                f"A control with name '{definition.name}' is already registered."
            )
        self._check_containers(definition)
        self._definitions[key] = definition
        _log.debug("Registered control type '%s'", key)
        return definition

    def _check_containers(self, definition: ControlDefinition) -> None:
        seen: Dict[str, str] = {}
        for name in definition.container_names:
            key = self.normalize(name)
            if key in seen:
                raise InvalidControl(
                    f"Control '{definition.name}' declares containers '{seen[key]}' "
                    f"and '{name}' that match the same node name '{key}'."
                )
            seen[key] = name

    def resolve(self, tag: Optional[str]) -> Optional[ControlDefinition]:
        """Return the definition for ``tag`` or ``None`` when unknown."""
        if not tag:
            return None
        return self._definitions.get(self.normalize(tag))

    def unregister(self, tag: str) -> None:
        self._definitions.pop(self.normalize(tag), None)

    def reset(self) -> None:
        """Drop every registration."""
        self._definitions.clear()

    def names(self) -> List[str]:
        return list(self._definitions.keys())

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and self.normalize(tag) in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[ControlDefinition]:
        return iter(list(self._definitions.values()))


__all__ = ["ControlRegistry"]
