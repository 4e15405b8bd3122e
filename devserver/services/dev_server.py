"""Dev server startup: app, optional static mount, listener, then plugins."""

from devserver.core.config import get_dev_server_config
from devserver.core.logging_setup import build_loggers
from devserver.core.platform import parse_platform_type
from devserver.services.app_builder import create_app
from devserver.services.http_server import create_http_server
from devserver.services.plugin_lifecycle import PluginLifecycle
from devserver.services.static_files import serve_static_dir
from devserver.state import ServerContext


async def start_dev_server(platform_type, plugins=(), *, config=None, loggers=None):
    """Start a dev server and return its async aggregate cleanup.

    ``loggers`` is the ``(log_action, log_system, log_exception)`` triple from
    ``build_loggers``; by default it is built from ``config.log_dir``.
    Awaiting the returned cleanup runs every plugin cleanup in registration
    order and then stops the listener.
    """
    if config is None:
        config = get_dev_server_config()
    log_action, log_system, log_exception = loggers or build_loggers(config.log_dir)
    platform_type = parse_platform_type(platform_type)
    log_system("boot-start", command=f"platform={platform_type.value} host={config.host} port={config.port}")

    app = create_app(platform_type, config, log_exception=log_exception)
    if config.static_path:
        _mount_static_dir(app, config, log_system, log_exception)

    http_server = create_http_server(config, app, log_action=log_system)
    try:
        await http_server.start()
    except Exception as exc:
        log_exception("boot_step/http_server.start", exc)
        log_system("boot-failed", command="http_server.start", rejection_message=str(exc)[:500] or "listener failed to start")
        raise

    lifecycle = PluginLifecycle(http_server, log_action=log_action, log_exception=log_exception)
    context = ServerContext(config=config, http_server=http_server.server, app=app)
    try:
        clean_up = await lifecycle.run(context, plugins)
    except Exception as exc:
        log_system("boot-failed", command="plugins", rejection_message=str(exc)[:500] or "plugin failed")
        raise

    log_system("boot-ready", command=http_server.url)
    return clean_up


def _mount_static_dir(app, config, log_system, log_exception):
    try:
        serve_static_dir(app, config.static_path, config.public_url, log_action=log_system)
    except Exception as exc:
        log_exception("boot_step/serve_static_dir", exc)
        log_system("boot-failed", command="serve_static_dir", rejection_message=str(exc)[:500] or "static mount failed")
        raise
