"""Render UIXML markup into control instances bound onto controllers."""

from .app.engine import UixmlEngine
from .app.settings import EngineSettings
from .domain.definitions import (
    AttributeDefinition,
    ContainerDefinition,
    ControlDefinition,
    EventDefinition,
)
from .domain.errors import (
    DuplicateControl,
    InvalidControl,
    InvalidMarkup,
    LoadError,
    UixmlError,
    UnableToRender,
    UnsupportedRuntime,
)
from .domain.models import AppDescriptor, ControlGroup
from .domain.registry import ControlRegistry
from .utils.logging import configure_logging

__version__ = "0.1.0"

__all__ = [
    "AppDescriptor",
    "AttributeDefinition",
    "ContainerDefinition",
    "ControlDefinition",
    "ControlGroup",
    "ControlRegistry",
    "DuplicateControl",
    "EngineSettings",
    "EventDefinition",
    "InvalidControl",
    "InvalidMarkup",
    "LoadError",
    "UixmlError",
    "UixmlEngine",
    "UnableToRender",
    "UnsupportedRuntime",
    "configure_logging",
]
