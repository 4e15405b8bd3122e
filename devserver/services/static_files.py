"""Static directory mounting for the dev server Flask app."""

from pathlib import Path

from flask import send_from_directory

from devserver.core.action_logging import null_log_action
from devserver.core.config import normalize_public_url

INDEX_FILE = "index.html"


def serve_static_dir(app, static_path, public_url="/", *, log_action=None):
    """Serve files under ``static_path`` at ``public_url``.

    Directory URLs (the mount root included) serve their ``index.html``.
    Paths escaping the directory and missing files answer 404.
    """
    log_action = log_action or null_log_action
    static_dir = Path(static_path).resolve()
    if not static_dir.is_dir():
        raise FileNotFoundError(f"Static directory not found: {static_dir}")
    prefix = normalize_public_url(public_url)

    def serve_static(filename=""):
        if not filename or filename.endswith("/"):
            filename += INDEX_FILE
        return send_from_directory(static_dir, filename)

    endpoint = f"devserver_static:{prefix}"
    app.add_url_rule(prefix, endpoint, serve_static)
    app.add_url_rule(f"{prefix}<path:filename>", endpoint, serve_static)
    log_action("static-mount", command=f"Serving static files from {static_dir} at {prefix}")
    return prefix
