"""Directory-backed package collaborator for resources and package URIs."""

from __future__ import annotations

import importlib.util
import logging
import os
import re
import threading
from types import ModuleType
from typing import Dict, Optional

from uixml.domain.ports import PackagePort

_MODULE_NAME_PATTERN = re.compile(r"[^A-Za-z0-9_]+")


class LocalPackage(PackagePort):
    """Serve resources from files below ``root_dir``.

    ``require("img/logo")`` imports ``<root_dir>/img/logo.py`` once and returns
    the module; ``read_text`` returns raw file contents.
    """

    def __init__(self, root_dir: str, name: Optional[str] = None) -> None:
        self.root = os.path.abspath(root_dir)
        self.full_name = name or os.path.basename(self.root.rstrip(os.sep)) or self.root
        self._modules: Dict[str, ModuleType] = {}
        self._lock = threading.RLock()
        self._log = logging.getLogger(__name__)

    def _path(self, relative: str) -> str:
        candidate = os.path.abspath(os.path.join(self.root, relative.lstrip("/\\")))
        if os.path.commonpath([candidate, self.root]) != self.root:
            raise ValueError(f"'{relative}' points outside package '{self.full_name}'.")
        return candidate

    def require(self, path: str) -> Optional[ModuleType]:
        """Import the module file at ``path``; ``None`` when it does not exist."""
        try:
            file_path = self._path(path)
        except ValueError:
            return None
        if not file_path.endswith(".py"):
            file_path += ".py"
        with self._lock:
            if file_path in self._modules:
                return self._modules[file_path]
            if not os.path.isfile(file_path):
                return None
            return self._load(file_path)

    def _load(self, file_path: str) -> Optional[ModuleType]:
        relative = os.path.relpath(file_path, self.root)
        module_name = "uixml_pkg_" + _MODULE_NAME_PATTERN.sub("_", f"{self.full_name}_{relative[:-3]}")
        spec = importlib.util.spec_from_file_location(module_name, file_path)
        if spec is None or spec.loader is None:
            return None
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        self._modules[file_path] = module
        self._log.debug("Loaded resource module '%s' from %s", relative, self.full_name)
        return module

    def read_text(self, path: str) -> str:
        with open(self._path(path), "r", encoding="utf-8") as f:
            return f.read()


__all__ = ["LocalPackage"]
