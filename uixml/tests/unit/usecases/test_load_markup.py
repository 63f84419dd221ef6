from __future__ import annotations

import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from types import SimpleNamespace

import pytest

from uixml.domain.errors import LoadError, UnableToRender
from uixml.usecases.load_markup import LoadMarkup
from uixml.tests.unit.helpers import Button, ControllerStub, make_registry, make_renderer


class _StreamStub:
    def __init__(self, text=None, error=None):
        self._text = text
        self._error = error

    def read_as_string(self):
        if self._error is not None:
            raise self._error
        return self._text


class _OpenerStub:
    def __init__(self, streams=None, error=None):
        self.streams = streams or {}
        self.error = error
        self.opened = []

    def open(self, uri):
        self.opened.append(uri)
        if self.error is not None:
            raise self.error
        return self.streams[uri]


@pytest.fixture
def executor():
    pool = ThreadPoolExecutor(max_workers=1)
    yield pool
    pool.shutdown(wait=True)


def _load(opener, executor) -> LoadMarkup:
    registry = make_registry({"name": "button", "type": Button})
    return LoadMarkup(opener=opener, render=make_renderer(registry), executor=executor)


def test_load_resolves_with_rendered_app(executor) -> None:
    opener = _OpenerStub({"app.xml": _StreamStub('<ui name="App"><button name="b1"/></ui>')})
    controller = SimpleNamespace()

    app = _load(opener, executor)("app.xml", controller).result(timeout=5)

    assert app.name == "App"
    assert controller.b1 is app.controls[0]
    assert opener.opened == ["app.xml"]


def test_open_failure_rejects_future(executor) -> None:
    opener = _OpenerStub(error=LoadError("File 'x' does not exist."))

    future = _load(opener, executor)("x")

    with pytest.raises(LoadError):
        future.result(timeout=5)


def test_read_failure_is_wrapped_as_load_error(executor) -> None:
    opener = _OpenerStub({"app.xml": _StreamStub(error=RuntimeError("socket closed"))})

    future = _load(opener, executor)("app.xml")

    with pytest.raises(LoadError) as exc_info:
        future.result(timeout=5)
    assert "socket closed" in exc_info.value.message
    assert exc_info.value.context == "app.xml"


def test_render_failure_rejects_future_without_partial_result(executor) -> None:
    opener = _OpenerStub({"app.xml": _StreamStub('<ui name="App"><slider/></ui>')})

    future = _load(opener, executor)("app.xml")

    with pytest.raises(UnableToRender):
        future.result(timeout=5)


class _ThreadRecorder(ControllerStub):
    def __init__(self) -> None:
        super().__init__()
        self.threads = []

    def button_loaded(self, control) -> None:
        self.threads.append(threading.get_ident())


def test_dispatch_moves_render_onto_the_host_thread(executor) -> None:
    pending = queue.Queue()
    opener = _OpenerStub(
        {"app.xml": _StreamStub('<ui name="App"><button name="b1" onload="button_loaded"/></ui>')}
    )
    loader = _load(opener, executor)
    loader.dispatch = pending.put
    controller = _ThreadRecorder()

    future = loader("app.xml", controller)
    pending.get(timeout=5)()

    app = future.result(timeout=5)
    assert app.controls[0] is controller.b1
    assert controller.threads == [threading.get_ident()]


def test_dispatch_render_failure_rejects_future(executor) -> None:
    pending = queue.Queue()
    loader = _load(_OpenerStub({"app.xml": _StreamStub('<ui name="App"><slider/></ui>')}), executor)
    loader.dispatch = pending.put

    future = loader("app.xml")
    pending.get(timeout=5)()

    with pytest.raises(UnableToRender):
        future.result(timeout=5)


def test_dispatch_is_skipped_when_read_fails(executor) -> None:
    pending = queue.Queue()
    loader = _load(_OpenerStub(error=LoadError("File 'x' does not exist.")), executor)
    loader.dispatch = pending.put

    with pytest.raises(LoadError):
        loader("x").result(timeout=5)
    assert pending.empty()


def test_fetch_returns_text_without_rendering(executor) -> None:
    opener = _OpenerStub({"app.xml": _StreamStub('<ui name="App"><slider/></ui>')})

    assert _load(opener, executor).fetch("app.xml").result(timeout=5) == '<ui name="App"><slider/></ui>'
