"""Threaded werkzeug listener with async start/stop."""

import asyncio
import threading

from werkzeug.serving import make_server

from devserver.core.action_logging import null_log_action

_WILDCARD_HOSTS = {"", "0.0.0.0", "::"}


class HttpServer:
    """Serve a WSGI app from a background thread.

    ``server`` is the raw werkzeug server handed to plugins; it only exists
    once ``start()`` has completed.
    """

    def __init__(self, host, port, app, *, log_action=None, poll_interval=0.1):
        self.host = host
        self.port = port
        self.app = app
        self.log_action = log_action or null_log_action
        self.poll_interval = poll_interval
        self._server = None
        self._thread = None
        self._stopped = False

    @property
    def server(self):
        if self._server is None:
            raise RuntimeError("HTTP server has not been started")
        return self._server

    @property
    def bound_port(self):
        """Port actually bound, which differs from ``port`` when it was 0."""
        return self.server.server_port

    @property
    def url(self):
        host = "localhost" if self.host in _WILDCARD_HOSTS else self.host
        return f"http://{host}:{self.bound_port}/"

    @property
    def running(self):
        return self._thread is not None and self._thread.is_alive() and not self._stopped

    async def start(self):
        """Bind the socket and begin accepting connections."""
        if self._server is not None:
            raise RuntimeError("HTTP server already started")
        # Binding can block on name resolution; keep it off the event loop.
        try:
            server = await asyncio.to_thread(make_server, self.host, self.port, self.app, threaded=True)
        except SystemExit as exc:
            # werkzeug exits the process when the address cannot be bound.
            raise OSError(f"Could not bind HTTP server to {self.host}:{self.port}") from exc
        thread = threading.Thread(
            target=server.serve_forever,
            kwargs={"poll_interval": self.poll_interval},
            name=f"devserver-http-{server.server_port}",
            daemon=True,
        )
        thread.start()
        self._server = server
        self._thread = thread
        self.log_action("listening", command=f"See you at {self.url}")

    async def stop(self):
        """Stop accepting connections and close the socket; repeat calls are no-ops."""
        if self._server is None or self._stopped:
            return
        self._stopped = True
        await asyncio.to_thread(self._shutdown)
        self.log_action("listener-closed", command=f"port={self._server.server_port}")

    def _shutdown(self):
        self._server.shutdown()
        self._thread.join()
        self._server.server_close()


def create_http_server(config, app, *, log_action=None):
    """Wrap ``app`` in an unstarted listener bound to the configured host/port."""
    return HttpServer(config.host, config.port, app, log_action=log_action)
