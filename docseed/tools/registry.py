"""Discover tool definitions and handlers from docseed.tools.* modules."""
from __future__ import annotations

import importlib
import pkgutil
from functools import wraps
from typing import Any, Dict, List, Tuple

from ..errors import DocumentError
from ..types import ToolDefinition, ToolHandler, ToolResult


def _reporting_errors(name: str, handler: ToolHandler) -> ToolHandler:
    """Turn caller-facing DocumentErrors into error results carrying only their message."""

    @wraps(handler)
    def wrapper(args: Dict[str, Any]) -> ToolResult:
        try:
            return handler(args)
        except DocumentError as exc:
            return {"id": name, "output": str(exc), "error": True}

    return wrapper


def discover_tools() -> Tuple[List[ToolDefinition], Dict[str, ToolHandler]]:
    definitions: List[ToolDefinition] = []
    handlers: Dict[str, ToolHandler] = {}
    package_name = __name__.rsplit(".", 1)[0]
    package = importlib.import_module(package_name)
    for module_info in pkgutil.iter_modules(package.__path__):
        name = module_info.name
        if name.startswith("_") or name == "registry":
            continue
        module = importlib.import_module(f"{package_name}.{name}")
        definition = getattr(module, "TOOL_DEFINITION", None)
        handler = getattr(module, "tool_handler", None)
        if definition and handler:
            definitions.append(definition)
            handlers[definition["name"]] = _reporting_errors(definition["name"], handler)
    return definitions, handlers
