from __future__ import annotations

from typing import Any, Dict, List, Optional

from uixml.domain.definitions import ControlDefinition
from uixml.domain.registry import ControlRegistry
from uixml.adapters.xml_minidom import get_xml_parser
from uixml.usecases.render_markup import RenderMarkup


class _Control:
    """Minimal control base with the capabilities the renderer relies on."""

    type_name = "control"
    parent_type: Optional[str] = None

    def __init__(self) -> None:
        self.name = ""

    def get_parent_type(self) -> Optional[str]:
        return self.parent_type

    def get_type(self) -> str:
        return self.type_name


class Button(_Control):
    type_name = "button"

    def __init__(self) -> None:
        super().__init__()
        self.text = None
        self.enabled = None
        self.width = None
        self.onclick = None


class _Children:
    def __init__(self) -> None:
        self.items: List[Any] = []

    def add(self, control: Any) -> None:
        self.items.append(control)


class Panel(_Control):
    type_name = "panel"

    def __init__(self) -> None:
        super().__init__()
        self.children: List[Any] = []
        self.padding = None

    def add_child(self, control: Any) -> None:
        self.children.append(control)


class Window(_Control):
    type_name = "window"

    def __init__(self) -> None:
        super().__init__()
        self.header = _Children()
        self.body = _Children()
        self.title = None
        self.scroll = None


class Tabs(_Control):
    type_name = "tabs"

    def __init__(self) -> None:
        super().__init__()
        self.pages: List[Any] = []

    def add_page(self, page: Any) -> None:
        self.pages.append(page)


class TabPage(Panel):
    type_name = "tabpage"
    parent_type = "tabs"


BUTTON = {
    "name": "button",
    "type": Button,
    "attributes": [
        {"name": "text", "property": "text"},
        {"name": "enabled", "property": "enabled", "type": "boolean"},
        {"name": "width", "property": "width", "type": "int"},
    ],
    "events": [{"name": "click", "handler": "onclick"}],
}

PANEL = {
    "name": "panel",
    "type": Panel,
    "attributes": [{"name": "padding", "property": "padding", "type": "float"}],
    "containers": [{"name": "children", "function": "add_child"}],
}

WINDOW = {
    "name": "window",
    "type": Window,
    "attributes": [{"name": "title", "property": "title"}],
    "containers": [
        {"name": "header", "function": "header.add"},
        {
            "name": "body",
            "function": "body.add",
            "attributes": [{"name": "scroll", "property": "scroll", "type": "boolean"}],
        },
    ],
}

TABS = {
    "name": "tabs",
    "type": Tabs,
    "containers": [{"name": "pages", "function": "add_page"}],
}

TABPAGE = {
    "name": "tabpage",
    "type": TabPage,
    "containers": [{"name": "children", "function": "add_child"}],
}


class ControllerStub:
    """Controller recording handler invocations."""

    def __init__(self) -> None:
        self.calls: List[tuple] = []

    def on_save(self, sender: Any, args: Any) -> str:
        self.calls.append(("on_save", sender, args))
        return "saved"

    def button_loaded(self, control: Any) -> None:
        self.calls.append(("button_loaded", control))

    def app_loaded(self, app: Any) -> None:
        self.calls.append(("app_loaded", app))


def make_registry(*definitions: Dict[str, Any], case_sensitive: bool = False) -> ControlRegistry:
    registry = ControlRegistry(case_sensitive=case_sensitive)
    for definition in definitions or (BUTTON, PANEL, WINDOW, TABS, TABPAGE):
        registry.register(ControlDefinition.from_dict(definition))
    return registry


def make_renderer(registry: Optional[ControlRegistry] = None, **kwargs: Any) -> RenderMarkup:
    return RenderMarkup(registry=registry or make_registry(), parser=get_xml_parser(), **kwargs)


__all__ = [
    "BUTTON",
    "Button",
    "ControllerStub",
    "PANEL",
    "Panel",
    "TABPAGE",
    "TABS",
    "TabPage",
    "Tabs",
    "WINDOW",
    "Window",
    "make_registry",
    "make_renderer",
]
