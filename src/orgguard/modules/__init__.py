"""Feature modules with auto-discovery.

A module exposes its HTTP surface as ``router`` in its ``routes``
submodule. Modules without one are skipped.
"""

import logging
from importlib import import_module
from importlib.util import find_spec
from pathlib import Path

from fastapi import APIRouter


logger = logging.getLogger(__name__)


def discover_modules() -> list[APIRouter]:
    """Return the routers of all feature modules, in directory order."""
    modules_dir = Path(__file__).parent
    routers: list[APIRouter] = []

    for path in sorted(modules_dir.iterdir()):
        if not path.is_dir() or path.name.startswith("_"):
            continue
        name = f"{__name__}.{path.name}.routes"
        if find_spec(name) is None:
            continue
        module = import_module(name)
        router = getattr(module, "router", None)
        if isinstance(router, APIRouter):
            routers.append(router)
            logger.info("Loaded module: %s", path.name)

    return routers
