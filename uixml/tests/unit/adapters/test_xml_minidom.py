from __future__ import annotations

import importlib

import pytest

from uixml.adapters import xml_minidom
from uixml.domain.errors import InvalidMarkup, UnsupportedRuntime


def test_parser_exposes_dom_shape() -> None:
    document = xml_minidom.get_xml_parser().parse('<ui name="App"><button text="Hi"/></ui>')

    ui = document.getElementsByTagName("ui")[0]
    assert ui.tagName == "ui"
    assert ui.attributes["name"].value == "App"
    button = ui.childNodes[0]
    assert button.attributes.get("text").value == "Hi"
    assert button.attributes.get("missing") is None


def test_parser_rejects_malformed_markup() -> None:
    with pytest.raises(InvalidMarkup) as exc_info:
        xml_minidom.get_xml_parser().parse("<ui><button></ui>")

    assert isinstance(exc_info.value.__cause__, Exception)


def test_missing_xml_support_is_unsupported_runtime(monkeypatch) -> None:
    real_import = importlib.import_module

    def _import(name, *args, **kwargs):
        if name == "xml.parsers.expat":
            raise ImportError("no expat")
        return real_import(name, *args, **kwargs)

    monkeypatch.setattr(xml_minidom.importlib, "import_module", _import)

    with pytest.raises(UnsupportedRuntime) as exc_info:
        xml_minidom.get_xml_parser()

    assert exc_info.value.code == "uixml-error-unsupported-runtime"
