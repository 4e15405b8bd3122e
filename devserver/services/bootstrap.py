"""Process-level run helpers: start the dev server, wait, then clean up."""

import asyncio
import signal

from devserver.core.config import get_dev_server_config
from devserver.core.logging_setup import build_loggers
from devserver.services.dev_server import start_dev_server

_STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def _install_signal_handlers(loop, stop_event):
    """Set ``stop_event`` on SIGINT/SIGTERM; return the signals installed."""
    installed = []
    for sig in _STOP_SIGNALS:
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except (NotImplementedError, RuntimeError, ValueError):
            # Unsupported platform or not on the main thread.
            continue
        installed.append(sig)
    return installed


async def serve_until_stopped(platform_type, plugins=(), *, config=None, stop_event=None, handle_signals=True):
    """Run the dev server until ``stop_event`` is set, then tear it down."""
    if config is None:
        config = get_dev_server_config()
    loggers = build_loggers(config.log_dir)
    log_system = loggers[1]
    stop_event = stop_event or asyncio.Event()

    clean_up = await start_dev_server(platform_type, plugins, config=config, loggers=loggers)
    loop = asyncio.get_running_loop()
    installed = _install_signal_handlers(loop, stop_event) if handle_signals else []
    try:
        await stop_event.wait()
        log_system("shutdown-requested")
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)
        await clean_up()


def run_dev_server(platform_type, plugins=(), *, config=None):
    """Blocking entry point used by ``devserver.main``."""
    asyncio.run(serve_until_stopped(platform_type, plugins, config=config))
