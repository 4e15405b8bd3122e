"""Shared Flask response helpers for json/non-json clients."""

from flask import jsonify


def is_ajax_request(request):
    """Return True when request expects a JSON/XHR style response."""
    if request.headers.get("X-Requested-With") == "XMLHttpRequest":
        return True
    accept = request.headers.get("Accept", "")
    return "application/json" in accept.lower()


def status_response(payload):
    """Return a JSON status payload with ``ok`` set."""
    body = {"ok": True}
    body.update(payload)
    return jsonify(body)


def internal_error_response(request):
    """Return generic internal-error response payload."""
    if is_ajax_request(request):
        return jsonify({"ok": False, "error": "internal_error", "message": "Internal server error."}), 500
    return "Internal server error.", 500, {"Content-Type": "text/plain; charset=utf-8"}
