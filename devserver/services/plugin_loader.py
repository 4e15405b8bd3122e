"""Resolve ``module:attribute`` plugin references into callables."""

import importlib


def load_plugin(spec):
    """Import and return the plugin callable named by ``module:attribute``."""
    module_name, sep, attr_path = (spec or "").strip().partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Invalid plugin reference {spec!r} (expected 'module:attribute')")
    target = importlib.import_module(module_name)
    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise ValueError(f"Plugin reference {spec!r} does not resolve: missing {part!r}") from None
    if not callable(target):
        raise TypeError(f"Plugin reference {spec!r} is not callable")
    return target


def load_plugins(specs):
    """Return plugin callables for ``specs``, preserving order."""
    return [load_plugin(spec) for spec in specs]
