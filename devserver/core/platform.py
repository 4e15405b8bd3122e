"""Platform types the dev server can be started for."""

from enum import Enum


class PlatformType(str, Enum):
    """Renderer platform served by the dev server."""
    WEB = "web"
    NATIVE = "native"


def parse_platform_type(value):
    """Return ``value`` as a ``PlatformType``; raise ``ValueError`` when unknown."""
    if isinstance(value, PlatformType):
        return value
    text = str(value or "").strip().lower()
    try:
        return PlatformType(text)
    except ValueError:
        choices = ", ".join(p.value for p in PlatformType)
        raise ValueError(f"Unknown platform type {value!r} (expected one of: {choices})") from None
