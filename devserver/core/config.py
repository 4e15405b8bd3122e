"""Runtime configuration helpers for the dev server."""

import os
import secrets
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from devserver.core.web_config import WebConfig

CONFIG_ENV_VAR = "DEVSERVER_CONFIG"
DEFAULT_CONFIG_NAME = "devserver.env"
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 5000


@dataclass(frozen=True)
class DevServerConfig:
    """Resolved, immutable dev server settings."""
    root_dir: Path
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    static_path: Optional[Path] = None
    public_url: str = "/"
    log_dir: Optional[Path] = None
    secret_key: str = ""
    debug: bool = False
    plugins: tuple = ()


def normalize_public_url(value):
    """Return ``value`` as an absolute URL path with a trailing slash."""
    text = (value or "").strip()
    if "://" in text:
        # Full URLs keep only their path component.
        text = "/" + text.split("://", 1)[1].partition("/")[2]
    if not text.startswith("/"):
        text = "/" + text
    if not text.endswith("/"):
        text += "/"
    return text


def parse_plugin_specs(raw):
    """Split a comma-separated ``module:attribute`` list, dropping blanks."""
    return tuple(part.strip() for part in (raw or "").split(",") if part.strip())


def resolve_secret_key(cfg_get_str, *env_names):
    """Resolve secret key from env/config with secure fallback."""
    for name in env_names:
        value = (os.environ.get(name) or "").strip()
        if value:
            return value
    configured = (cfg_get_str("DEVSERVER_SECRET_KEY", "") or "").strip()
    if configured:
        return configured
    return secrets.token_hex(32)


def load_dev_server_config(config_path=None, base_dir=None):
    """Build a ``DevServerConfig`` from a KEY=VALUE file plus env overrides."""
    base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
    config_path = Path(config_path) if config_path is not None else base_dir / DEFAULT_CONFIG_NAME
    cfg = WebConfig(config_path, base_dir)

    host = (os.environ.get("WEB_HOST") or "").strip() or cfg.get_str("WEB_HOST", DEFAULT_HOST)
    port = cfg.get_int("WEB_PORT", DEFAULT_PORT, minimum=0)
    env_port = (os.environ.get("WEB_PORT") or "").strip()
    if env_port:
        try:
            port = max(0, int(env_port))
        except ValueError:
            pass

    return DevServerConfig(
        root_dir=base_dir,
        host=host,
        port=port,
        static_path=cfg.get_path("STATIC_PATH", None),
        public_url=normalize_public_url(cfg.get_str("PUBLIC_URL", "/")),
        log_dir=cfg.get_path("LOG_DIR", base_dir / "logs"),
        secret_key=resolve_secret_key(cfg.get_str, "DEVSERVER_SECRET_KEY", "FLASK_SECRET_KEY"),
        debug=cfg.get_bool("DEBUG", False),
        plugins=parse_plugin_specs(cfg.get_str("PLUGINS", "")),
    )


def get_dev_server_config():
    """Return the config for the current working directory.

    ``DEVSERVER_CONFIG`` may point at an alternate config file; relative
    paths inside it resolve from that file's directory.
    """
    override = (os.environ.get(CONFIG_ENV_VAR) or "").strip()
    if override:
        config_path = Path(override).resolve()
        return load_dev_server_config(config_path, config_path.parent)
    return load_dev_server_config()


def apply_default_flask_config(app, config):
    """Apply baseline Flask runtime config values."""
    app.config["SECRET_KEY"] = config.secret_key or secrets.token_hex(32)
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
    app.config["SEND_FILE_MAX_AGE_DEFAULT"] = 0 if config.debug else 3600
    app.config["DEBUG"] = config.debug
