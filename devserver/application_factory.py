"""App factory for WSGI hosts that manage their own listener."""

import os


def create_app():
    """Return a dev server Flask app built from the working-directory config.

    Plugins are not run here; they need the live listener from ``start_dev_server``.
    """
    from devserver.core.config import get_dev_server_config
    from devserver.core.logging_setup import build_loggers
    from devserver.services.app_builder import create_app as build_app
    from devserver.services.static_files import serve_static_dir

    config = get_dev_server_config()
    _, log_system, log_exception = build_loggers(config.log_dir)
    app = build_app(os.environ.get("DEVSERVER_PLATFORM", "web"), config, log_exception=log_exception)
    if config.static_path:
        serve_static_dir(app, config.static_path, config.public_url, log_action=log_system)
    return app
