"""Tool modules exposed to the runtime."""
from .registry import discover_tools

__all__ = ["discover_tools"]
