"""Flask application construction for the dev server."""

from html import escape

from flask import Flask, Response, has_request_context, request
from werkzeug.exceptions import HTTPException

from devserver.core.action_logging import make_log_exception, null_log_action
from devserver.core.config import apply_default_flask_config
from devserver.core.platform import PlatformType, parse_platform_type
from devserver.core.response_helpers import internal_error_response, status_response

RENDERER_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>devserver renderer</title>
</head>
<body>
<div id="root" data-public-url="{public_url}"></div>
</body>
</html>
"""


def install_flask_hooks(app, *, log_exception):
    """Install the unhandled-exception hook; HTTP errors pass through untouched."""

    @app.errorhandler(Exception)
    def _unhandled_exception_handler(exc):
        if isinstance(exc, HTTPException):
            return exc
        path = request.path if has_request_context() else "unknown-path"
        log_exception(f"unhandled_exception path={path}", exc)
        return internal_error_response(request)


def register_core_routes(app, platform_type, config):
    """Register the status route and, for web, the renderer page."""

    @app.route("/_status")
    def devserver_status():
        return status_response({
            "platform": platform_type.value,
            "public_url": config.public_url,
            "static": config.static_path is not None,
        })

    if platform_type is PlatformType.WEB:
        renderer_html = RENDERER_TEMPLATE.format(public_url=escape(config.public_url))

        @app.route("/_renderer.html")
        def devserver_renderer():
            return Response(renderer_html, mimetype="text/html")


def create_app(platform_type, config, *, log_exception=None):
    """Build the request-handling Flask app for ``platform_type``."""
    platform_type = parse_platform_type(platform_type)
    app = Flask(__name__, static_folder=None)
    apply_default_flask_config(app, config)
    app.config["DEVSERVER_CONFIG"] = config
    app.config["DEVSERVER_PLATFORM"] = platform_type.value
    install_flask_hooks(app, log_exception=log_exception or make_log_exception(null_log_action))
    register_core_routes(app, platform_type, config)
    return app
