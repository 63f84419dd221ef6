"""XML parsing adapter backed by ``xml.dom.minidom``.

minidom already exposes the DOM shape the renderer walks (``tagName``,
``attributes[name].value``, ``childNodes``), so documents are returned as-is.

Dependencies:
    - ``xml.dom.minidom`` / ``xml.parsers.expat`` from the standard library.

Call context:
    - Built by ``uixml.app.engine.UixmlEngine`` through ``get_xml_parser``.
"""

from __future__ import annotations

import importlib
from typing import Any

from uixml.domain.errors import InvalidMarkup, UnsupportedRuntime
from uixml.domain.ports import XmlParserPort


class MinidomParser(XmlParserPort):
    """Parse markup text with minidom."""

    def __init__(self, minidom: Any, expat: Any) -> None:
        self._minidom = minidom
        self._expat = expat

    def parse(self, text: str) -> Any:
        """Return the parsed document.

        Raises:
            InvalidMarkup: If the text is not well-formed XML.
        """
        try:
            return self._minidom.parseString(text)
        except self._expat.ExpatError as exc:
            raise InvalidMarkup(f"The specified xml could not be parsed: {exc}") from exc


def get_xml_parser() -> MinidomParser:
    """Return the XML parser available in this interpreter.

    Raises:
        UnsupportedRuntime: If the interpreter was built without expat.
    """
    try:
        minidom = importlib.import_module("xml.dom.minidom")
        expat = importlib.import_module("xml.parsers.expat")
    except ImportError as exc:
        raise UnsupportedRuntime("The current runtime does not have an XML parser.") from exc
    return MinidomParser(minidom, expat)


__all__ = ["MinidomParser", "get_xml_parser"]
