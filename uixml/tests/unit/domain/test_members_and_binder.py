from __future__ import annotations

from types import SimpleNamespace

import pytest

from uixml.domain.members import (
    ControllerBinder,
    lower_camel,
    resolve_callable,
    resolve_member,
    set_member,
)
from uixml.domain.models import AppDescriptor


def test_lower_camel_only_touches_first_character() -> None:
    assert lower_camel("MainView") == "mainView"
    assert lower_camel("OKButton") == "oKButton"
    assert lower_camel("b") == "b"
    assert lower_camel("") == ""


def test_resolve_member_walks_dotted_paths() -> None:
    items = []
    owner = SimpleNamespace(body=SimpleNamespace(items=items))

    assert resolve_member(owner, "body.items") is items
    assert resolve_member(owner, "body.missing") is None
    assert resolve_member(None, "body") is None
    assert resolve_callable(owner, "body.items.append") == items.append
    assert resolve_callable(owner, "body.items") is None


def test_resolve_member_indexes_mappings() -> None:
    handler = lambda sender, args: None  # noqa: E731
    assert resolve_member({"handlers": {"save": handler}}, "handlers.save") is handler


def test_set_member_assigns_nested_attribute_and_mapping_key() -> None:
    owner = SimpleNamespace(style=SimpleNamespace(color=None), data={})

    set_member(owner, "style.color", "red")
    set_member(owner, "data.key", 1)
    set_member(owner, "title", "Hello")

    assert owner.style.color == "red"
    assert owner.data == {"key": 1}
    assert owner.title == "Hello"


def test_set_member_requires_existing_parent() -> None:
    with pytest.raises(AttributeError):
        set_member(SimpleNamespace(), "style.color", "red")


def test_binder_publishes_lower_camel_names() -> None:
    controller = SimpleNamespace()
    binder = ControllerBinder(controller)

    binder.publish("SaveButton", "instance")
    binder.publish("g1", ["a"])

    assert controller.saveButton == "instance"
    assert controller.g1 == ["a"]


def test_binder_supports_mapping_controllers_and_is_noop_without_controller() -> None:
    controller = {}
    ControllerBinder(controller).publish("Title", 1)
    ControllerBinder(None).publish("Title", 1)

    assert controller == {"title": 1}


def test_app_descriptor_lookups() -> None:
    first = SimpleNamespace(name="first")
    app = AppDescriptor(name="App", main="first", controls=[first])

    assert app.find_control("first") is first
    assert app.main_control is first
    assert app.find_group("g") is None
    assert AppDescriptor(controls=[first]).main_control is None
