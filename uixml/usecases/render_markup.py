"""Render UIXML markup into control instances bound onto a controller.

Rendering is a single synchronous depth-first pass. All mutable state of a
render (name counters, groups, the app descriptor) lives on a ``_RenderPass``
created per call, so one :class:`RenderMarkup` can serve many renders.

Call context:
    - ``uixml.app.engine.UixmlEngine.render`` / ``render_control``.
    - ``uixml.usecases.load_markup.LoadMarkup`` once the markup text is read.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..domain.coercion import DEFAULT_PACKAGE_SCHEME, AttributeCoercer
from ..domain.definitions import (
    AttributeDefinition,
    ContainerDefinition,
    ControlDefinition,
)
from ..domain.errors import InvalidControl, InvalidMarkup, UixmlError, UnableToRender
from ..domain.members import ControllerBinder, resolve_callable, set_member
from ..domain.models import AppDescriptor, ControlGroup
from ..domain.ports import PackagePort, XmlNode, XmlParserPort
from ..domain.registry import ControlRegistry

_log = logging.getLogger(__name__)

UI_TAG = "ui"
GROUP_TAG = "group"
_TEXT_NODE_TYPES = (3, 4)  # DOM TEXT_NODE, CDATA_SECTION_NODE


def _tag(node: Any) -> Optional[str]:
    return getattr(node, "tagName", None)


def _elements(node: Any) -> List[Any]:
    return [child for child in getattr(node, "childNodes", ()) if _tag(child) is not None]


def _has_content(node: Any) -> bool:
    """True when ``node`` has element children or non-blank text."""
    for child in getattr(node, "childNodes", ()):
        if _tag(child) is not None:
            return True
        if getattr(child, "nodeType", None) in _TEXT_NODE_TYPES:
            if (getattr(child, "data", "") or "").strip():
                return True
    return False


def node_attribute(node: Any, name: str, mandatory: bool = False) -> Optional[str]:
    """Return the attribute value of ``node`` or ``None``.

    Raises:
        UnableToRender: If ``mandatory`` and the attribute is absent.
    """
    attrs = getattr(node, "attributes", None)
    attr = attrs.get(name) if attrs else None
    if attr is not None:
        return attr.value
    if mandatory:
        raise UnableToRender(
            f"Node '{_tag(node)}' is missing the mandatory '{name}' attribute."
        )
    return None


def _publish_to_owner(owner: Any, name: str, control: Any) -> None:
    if isinstance(owner, MutableMapping):
        owner[name] = control
    else:
        setattr(owner, name, control)


class _RenderPass:
    """State and recursion for one render."""

    def __init__(
        self,
        registry: ControlRegistry,
        app: AppDescriptor,
        coercer: AttributeCoercer,
    ) -> None:
        self.registry = registry
        self.app = app
        self.coercer = coercer
        self.binder = ControllerBinder(app.instance)
        self.tag_counts: Dict[str, int] = {}

    # ------------------------------------------------------------------ #
    # Node traversal
    # ------------------------------------------------------------------ #
    def parse_root(self, ui_node: XmlNode) -> None:
        group_nodes: List[XmlNode] = []
        other_nodes: List[XmlNode] = []
        for child in ui_node.childNodes:
            if _tag(child) == GROUP_TAG:
                group_nodes.append(child)
            else:
                other_nodes.append(child)

        # groups first so controls can reference them regardless of order
        self.parse_nodes(group_nodes)
        self.parse_nodes(other_nodes)

    def parse_nodes(self, nodes: Iterable[XmlNode]) -> None:
        for node in nodes:
            self.parse_node(node)

    def parse_node(self, node: XmlNode) -> None:
        tag = _tag(node)
        if tag is None:
            return
        if tag == GROUP_TAG:
            self.parse_group(node)
            return
        control = self.create_control_instance(node)
        self.app.controls.append(control)
        self.binder.publish(control.name, control)

    def parse_group(self, node: XmlNode) -> None:
        name = node_attribute(node, "name", mandatory=True)
        if not name:
            return
        if self.app.find_group(name) is not None:
            raise UnableToRender(f"Control group '{name}' is defined multiple times.")
        group = ControlGroup(name)
        self.app.groups.append(group)
        self.binder.publish(name, group.controls)
        _log.debug("Declared control group '%s'", name)

    # ------------------------------------------------------------------ #
    # Control instantiation
    # ------------------------------------------------------------------ #
    def next_name(self, tag: str) -> str:
        key = tag.lower()
        count = self.tag_counts.get(key, 0)
        self.tag_counts[key] = count + 1
        return f"{key}{count}"

    def create_control_instance(self, node: XmlNode, owner: Any = None) -> Any:
        tag = _tag(node) or ""
        name = node_attribute(node, "name")
        definition = self.registry.resolve(tag)
        if definition is None:
            label = f" '{name}'" if name else ""
            raise UnableToRender(
                f"Could not render control{label}. Control type '{tag}' could not be "
                "found. Make sure the control type is loaded and registered."
            )

        try:
            instance = definition.create()
        except UixmlError:
            raise
        except Exception as exc:
            raise InvalidControl(
                f"Control type '{definition.name}' could not be instantiated: {exc}"
            ) from exc
        instance.name = name or self.next_name(tag)
        _log.debug("Instantiated control '%s' of type '%s'", instance.name, definition.name)

        group_name = node_attribute(node, "group")
        if group_name:
            group = self.app.find_group(group_name)
            if group is None:
                raise UnableToRender(
                    f"Could not render control '{instance.name}'. Control group "
                    f"'{group_name}' is not defined in the UIXML."
                )
            group.controls.append(instance)

        self.apply_attributes(instance, definition.attributes, node)
        self.bind_events(instance, definition, node, owner)
        self.parse_containers(instance, definition, node, owner)

        onload = node_attribute(node, "onload")
        if onload:
            target = owner if owner is not None else self.app.instance
            handler = resolve_callable(target, onload)
            if handler is None:
                raise UnableToRender(
                    f"Could not render control '{instance.name}'. It is missing "
                    f"function '{onload}' for the onLoad event."
                )
            handler(instance)
        return instance

    def apply_attributes(
        self,
        instance: Any,
        attributes: Iterable[AttributeDefinition],
        node: XmlNode,
    ) -> None:
        for attribute in attributes:
            raw = node_attribute(node, attribute.name)
            if raw is None:
                continue
            value = self.coercer.coerce(raw, attribute.type)
            try:
                set_member(instance, attribute.property, value)
            except AttributeError as exc:
                raise UnableToRender(
                    f"Could not render control '{instance.name}'. Attribute "
                    f"'{attribute.name}' could not be applied: {exc}"
                ) from exc

    def bind_events(
        self,
        instance: Any,
        definition: ControlDefinition,
        node: XmlNode,
        owner: Any,
    ) -> None:
        for event in definition.events:
            handler_name = node_attribute(node, event.attribute)
            if not handler_name:
                continue
            callback = self.event_callback(handler_name, owner)
            try:
                set_member(instance, event.handler_property, callback)
            except AttributeError as exc:
                raise UnableToRender(
                    f"Could not render control '{instance.name}'. Event "
                    f"'{event.name}' could not be bound: {exc}"
                ) from exc

    def event_callback(self, handler_name: str, owner: Any) -> Callable[..., Any]:
        target = owner if owner is not None else self.app.instance
        controller_ref = self.app.controller

        def callback(sender: Any, args: Any = None) -> Any:
            handler = resolve_callable(target, handler_name)
            if handler is None:
                raise UnableToRender(
                    f"Could not execute callback. Controller '{controller_ref}' is "
                    f"missing function '{handler_name}'."
                )
            return handler(sender, args)

        return callback

    # ------------------------------------------------------------------ #
    # Containers
    # ------------------------------------------------------------------ #
    def match_container(
        self, definition: ControlDefinition, tag: Optional[str]
    ) -> Optional[ContainerDefinition]:
        key = self.registry.normalize(tag)
        for container in definition.containers:
            if self.registry.normalize(container.name) == key:
                return container
        return None

    def parse_containers(
        self,
        instance: Any,
        definition: ControlDefinition,
        node: XmlNode,
        owner: Any,
    ) -> None:
        containers = definition.containers
        if len(containers) == 1:
            # single container: children may sit directly under the control node
            self.parse_container(containers[0], instance, node, definition, owner)
            return
        if not containers:
            if _has_content(node):
                raise UnableToRender(
                    f"Could not render control '{instance.name}'. Control type "
                    f"'{definition.name}' does not support child controls."
                )
            return
        for child in _elements(node):
            container = self.match_container(definition, _tag(child))
            if container is None:
                expected = ", ".join(
                    self.registry.normalize(name) for name in definition.container_names
                )
                raise UnableToRender(
                    f"Could not render control '{instance.name}'. Invalid child node "
                    f"'{_tag(child)}'. Expects one of the container nodes: '{expected}'."
                )
            self.parse_container(container, instance, child, definition, owner)

    def parse_container(
        self,
        container: ContainerDefinition,
        instance: Any,
        node: XmlNode,
        parent: ControlDefinition,
        owner: Any,
    ) -> None:
        self.apply_attributes(instance, container.attributes, node)

        for child in _elements(node):
            control = self.create_control_instance(child, owner)
            child_definition = self.registry.resolve(_tag(child))
            self.check_parent_type(control, child_definition, parent)

            if owner is not None:
                _publish_to_owner(owner, control.name, control)
            else:
                self.binder.publish(control.name, control)

            add = resolve_callable(instance, container.function)
            if add is None:
                raise InvalidControl(
                    f"Can't add child control '{control.name}'. Control type "
                    f"'{parent.name}' is missing function '{container.function}'."
                )
            add(control)

    @staticmethod
    def check_parent_type(
        control: Any,
        definition: Optional[ControlDefinition],
        parent: ControlDefinition,
    ) -> None:
        getter = getattr(control, "get_parent_type", None)
        required = getter() if callable(getter) else getattr(definition, "parent_type", None)
        if not required or required == parent.name:
            return
        type_getter = getattr(control, "get_type", None)
        control_type = type_getter() if callable(type_getter) else getattr(definition, "name", "?")
        raise UnableToRender(
            f"Control type '{control_type}' can not be used as a child of control "
            f"type '{parent.name}', only as a child of control type '{required}'."
        )


@dataclass
class RenderMarkup:
    """Render markup text into an :class:`AppDescriptor`.

    Attributes:
        registry: Control types available to the markup.
        parser: XML parsing capability.
        package: Optional package used for ``resource`` attribute values.
        package_scheme: URL prefix that marks package resources.
        controller_resolver: Builds the controller named by ``ui@controller``
            when the caller does not pass one.
    """

    registry: ControlRegistry
    parser: XmlParserPort
    package: Optional[PackagePort] = None
    package_scheme: str = DEFAULT_PACKAGE_SCHEME
    controller_resolver: Optional[Callable[[str], Any]] = None

    def __call__(self, text: str, controller: Any = None) -> AppDescriptor:
        document = self.parser.parse(text)
        ui_nodes = document.getElementsByTagName(UI_TAG)
        if not ui_nodes:
            raise InvalidMarkup("The specified xml does not have a 'ui' node.")
        ui_node = ui_nodes[0]

        app = AppDescriptor(package=self.package)
        app.name = node_attribute(ui_node, "name", mandatory=True)
        app.icon = node_attribute(ui_node, "icon")
        app.controller = node_attribute(ui_node, "controller")
        app.main = node_attribute(ui_node, "main")
        app.on_load = node_attribute(ui_node, "onload")

        if controller is None and app.controller and self.controller_resolver is not None:
            controller = self.controller_resolver(app.controller)
        app.instance = controller

        render = _RenderPass(self.registry, app, self._coercer())
        render.parse_root(ui_node)

        if app.main and app.main_control is None:
            raise UnableToRender(f"Main control '{app.main}' is not defined in the UIXML.")
        if app.on_load:
            hook = resolve_callable(app.instance, app.on_load)
            if hook is None:
                raise UnableToRender(
                    f"Could not load app '{app.name}'. It is missing function "
                    f"'{app.on_load}' for the onLoad event."
                )
            hook(app)

        _log.info("Rendered app '%s' with %d root control(s)", app.name, len(app.controls))
        return app

    def render_control(self, text: str, owner: Any) -> Any:
        """Instantiate the single control node of ``text`` for ``owner``.

        Event, onload and child publishing go to ``owner`` instead of a
        controller.
        """
        document = self.parser.parse(text)
        root = getattr(document, "documentElement", None)
        if root is None or _tag(root) is None:
            raise InvalidMarkup("The specified xml does not have a control node.")
        app = AppDescriptor(package=self.package)
        render = _RenderPass(self.registry, app, self._coercer())
        return render.create_control_instance(root, owner)

    def _coercer(self) -> AttributeCoercer:
        return AttributeCoercer(self.package, package_scheme=self.package_scheme)


__all__ = ["RenderMarkup", "node_attribute"]
