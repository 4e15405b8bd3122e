"""Typed dev server runtime state containers."""
from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class ServerContext:
    """Live server handles passed to every plugin.

    Plugins may add routes to ``app`` but never replace any member.
    """
    config: Any
    http_server: Any
    app: Any


@dataclass(frozen=True)
class CleanupHandle:
    """Cleanup obligation returned by a plugin; ``callback`` may be async."""
    callback: Callable[[], Any]
    name: Optional[str] = None

    @property
    def label(self):
        if self.name:
            return self.name
        return getattr(self.callback, "__qualname__", None) or repr(self.callback)
