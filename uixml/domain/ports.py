from __future__ import annotations
from typing import Any, Mapping, Optional, Protocol, Sequence


# ---- Markup tree (DOM-shaped) ----
class XmlAttribute(Protocol):
    value: str


class XmlNode(Protocol):
    """One node of a parsed markup tree.

    Text, comment and other non-element nodes report ``tagName`` as ``None``
    (or do not define it at all).
    """

    tagName: Optional[str]
    attributes: Mapping[str, XmlAttribute]
    childNodes: Sequence["XmlNode"]


class XmlDocument(Protocol):
    documentElement: Optional[XmlNode]

    def getElementsByTagName(self, name: str) -> Sequence[XmlNode]: ...


# ---- Ports (Hexagonal boundaries) ----
class XmlParserPort(Protocol):
    """Turns markup text into a node tree."""

    def parse(self, text: str) -> XmlDocument: ...


class StreamPort(Protocol):
    """A readable resource returned by :class:`UriOpenerPort`."""

    def read_as_string(self) -> str: ...


class UriOpenerPort(Protocol):
    """Opens a URI for reading (http(s), file, package scheme)."""

    def open(self, uri: str) -> StreamPort: ...


class PackagePort(Protocol):
    """Package collaborator used for ``resource`` attribute values."""

    full_name: str

    def require(self, path: str) -> Optional[Any]: ...  # module or None
    def read_text(self, path: str) -> str: ...


class ControlInstance(Protocol):
    """Capabilities the renderer uses on instantiated controls."""

    name: str

    def get_parent_type(self) -> Optional[str]: ...
    def get_type(self) -> str: ...
