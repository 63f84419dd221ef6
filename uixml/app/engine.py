"""Engine composition: registry, collaborators, and use-case wiring.

The host builds one :class:`UixmlEngine`, registers control types and
controllers on it, then renders or loads markup. Collaborators that are not
injected are created lazily from :class:`EngineSettings`.
"""

from __future__ import annotations

import importlib
import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, Mapping, Optional, Union

from ..adapters.http_client import HttpConfig
from ..adapters.uri_opener import UriOpener
from ..adapters.xml_minidom import get_xml_parser
from ..domain.definitions import ControlDefinition
from ..domain.errors import UixmlError, UnableToRender
from ..domain.models import AppDescriptor
from ..domain.ports import PackagePort, UriOpenerPort, XmlParserPort
from ..domain.registry import ControlRegistry
from ..usecases.load_markup import LoadMarkup
from ..usecases.render_markup import RenderMarkup
from .settings import EngineSettings


class UixmlEngine:
    """Render UIXML documents into controls bound on controllers.

    Call chain:
        host -> ``register_control`` (once per type) -> ``render`` / ``load``
        -> :class:`RenderMarkup` / :class:`LoadMarkup`.
    """

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        *,
        registry: Optional[ControlRegistry] = None,
        parser: Optional[XmlParserPort] = None,
        opener: Optional[UriOpenerPort] = None,
        package: Optional[PackagePort] = None,
        executor: Optional[Executor] = None,
        dispatch: Optional[Callable[[Callable[[], None]], Any]] = None,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.registry = registry or ControlRegistry(case_sensitive=self.settings.case_sensitive)
        self.package = package
        self._parser = parser
        self._opener = opener
        self._executor = executor
        self._owns_executor = executor is None
        self._dispatch = dispatch
        self._controllers: Dict[str, Callable[[], Any]] = {}
        self._renderer: Optional[RenderMarkup] = None
        self._loader: Optional[LoadMarkup] = None
        self._log = logging.getLogger(__name__)

    # ------------------------------------------------------------------ #
    # Lazy collaborators
    # ------------------------------------------------------------------ #
    @property
    def parser(self) -> XmlParserPort:
        if self._parser is None:
            self._parser = get_xml_parser()
        return self._parser

    @property
    def opener(self) -> UriOpenerPort:
        if self._opener is None:
            self._opener = UriOpener(
                base_dir=self.settings.base_dir,
                package=self.package,
                package_scheme=self.settings.package_scheme,
                http_config=HttpConfig(
                    request_timeout_s=self.settings.request_timeout_s,
                    retries=self.settings.retries,
                ),
            )
        return self._opener

    @property
    def executor(self) -> Executor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.settings.max_workers,
                thread_name_prefix="uixml-load",
            )
        return self._executor

    @property
    def renderer(self) -> RenderMarkup:
        if self._renderer is None:
            self._renderer = RenderMarkup(
                registry=self.registry,
                parser=self.parser,
                package=self.package,
                package_scheme=self.settings.package_scheme,
                controller_resolver=self.resolve_controller,
            )
        return self._renderer

    @property
    def loader(self) -> LoadMarkup:
        if self._loader is None:
            self._loader = LoadMarkup(
                opener=self.opener,
                render=self.renderer,
                executor=self.executor,
                dispatch=self._dispatch,
            )
        return self._loader

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #
    def register_control(
        self, definition: Union[ControlDefinition, Mapping[str, Any]]
    ) -> ControlDefinition:
        """Register a control type; see :meth:`ControlRegistry.register`."""
        return self.registry.register(definition)

    def register_controller(self, name: str, factory: Callable[[], Any]) -> None:
        """Register the factory used for ``<ui controller="name">``."""
        if not callable(factory):
            raise ValueError(f"Controller '{name}' factory must be callable.")
        if name in self._controllers:
            raise ValueError(f"Controller '{name}' is already registered.")
        self._controllers[name] = factory

    def resolve_controller(self, reference: str) -> Any:
        """Instantiate the controller named by ``reference``.

        Registered names win; otherwise ``"package.module:Attr"`` is imported.

        Raises:
            UnableToRender: If the reference cannot be resolved or built.
        """
        factory = self._controllers.get(reference)
        if factory is None and ":" in reference:
            module_name, _, attr = reference.partition(":")
            try:
                module = importlib.import_module(module_name)
            except ImportError as exc:
                raise UnableToRender(
                    f"Controller '{reference}' could not be imported: {exc}"
                ) from exc
            factory = getattr(module, attr, None)
        if not callable(factory):
            raise UnableToRender(f"Controller '{reference}' could not be found.")
        try:
            return factory()
        except UixmlError:
            raise
        except Exception as exc:
            raise UnableToRender(
                f"Controller '{reference}' could not be created: {exc}"
            ) from exc

    # ------------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------------ #
    def render(self, text: str, controller: Any = None) -> AppDescriptor:
        return self.renderer(text, controller)

    def render_control(self, text: str, owner: Any) -> Any:
        return self.renderer.render_control(text, owner)

    def load(self, uri: str, controller: Any = None) -> "Future[AppDescriptor]":
        """Fetch and render ``uri``; the future carries the result or failure.

        With a ``dispatch`` callable the render runs wherever ``dispatch``
        schedules it, so controls and onload hooks stay on the host UI thread.
        """
        self._log.debug("Loading %s", uri)
        return self.loader(uri, controller)

    def fetch(self, uri: str) -> "Future[str]":
        """Read ``uri`` off the calling thread; rendering is left to the caller."""
        return self.loader.fetch(uri)

    def close(self) -> None:
        """Shut down the load executor if this engine created it."""
        if self._executor is not None and self._owns_executor:
            self._executor.shutdown(wait=True)
            self._executor = None
            self._loader = None

    def __enter__(self) -> "UixmlEngine":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


__all__ = ["UixmlEngine"]
