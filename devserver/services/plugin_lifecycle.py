"""Plugin lifecycle orchestration for one dev server instance.

Plugins run once at startup, strictly in list order, each fully awaited
before the next begins. A plugin returns ``None``, a ``CleanupHandle`` or a
bare zero-argument callable; the callables become cleanup callbacks.

Cleanup callbacks run in registration order (first registered, first run),
not as a LIFO unwind. Every callback is attempted and awaited even when an
earlier one fails; failures are logged, collected and raised together as
``CleanupError`` once the listener has been stopped.
"""

import inspect

from devserver.core.action_logging import make_log_exception, null_log_action
from devserver.state import CleanupHandle


class CleanupError(Exception):
    """Raised after teardown when one or more cleanup callbacks failed."""

    def __init__(self, failures):
        self.failures = list(failures)
        names = ", ".join(name for name, _ in self.failures)
        super().__init__(f"{len(self.failures)} cleanup callback(s) failed: {names}")


async def _resolve(value):
    """Await ``value`` when it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


def plugin_name(plugin):
    """Return a readable name for a plugin callable."""
    return getattr(plugin, "__qualname__", None) or getattr(plugin, "__name__", None) or repr(plugin)


def as_cleanup_handle(outcome):
    """Return the ``CleanupHandle`` carried by a plugin outcome, or ``None``."""
    if isinstance(outcome, CleanupHandle):
        return outcome
    if callable(outcome):
        return CleanupHandle(outcome)
    return None


class PluginLifecycle:
    """Run plugins against a started listener and own their cleanup callbacks.

    One instance serves exactly one server lifetime. ``listener`` must expose
    an async ``stop()``; it is only stopped during teardown.
    """

    def __init__(self, listener, *, log_action=None, log_exception=None):
        self.listener = listener
        self.log_action = log_action or null_log_action
        self.log_exception = log_exception or make_log_exception(self.log_action)
        self._cleanups = []
        self._started = False
        self._closed = False

    @property
    def cleanups(self):
        """Registered cleanup handles in registration order."""
        return tuple(self._cleanups)

    @property
    def closed(self):
        return self._closed

    async def run(self, context, plugins):
        """Invoke each plugin with ``context`` and return the aggregate cleanup.

        On a plugin failure the remaining plugins are skipped, the callbacks
        registered so far and the listener are torn down best-effort, and
        the plugin's own exception is re-raised.
        """
        if self._started:
            raise RuntimeError("PluginLifecycle.run() may only be called once per server instance")
        self._started = True

        for index, plugin in enumerate(plugins):
            name = plugin_name(plugin)
            self.log_action("plugin-start", command=f"#{index} {name}")
            try:
                outcome = await _resolve(plugin(context))
            except Exception as exc:
                self.log_exception(f"plugin/{name}", exc)
                self.log_action("plugin-failed", command=name, rejection_message=str(exc)[:500] or "plugin failed")
                await self._teardown_after_failure()
                raise
            handle = as_cleanup_handle(outcome)
            if handle is not None:
                self._cleanups.append(handle)
            self.log_action("plugin-ready", command=f"#{index} {name} cleanup={'yes' if handle else 'no'}")

        return self.clean_up

    async def clean_up(self):
        """Run every cleanup callback in order, then stop the listener.

        A second call is a no-op.
        """
        if self._closed:
            self.log_action("cleanup-skipped", command="already cleaned up")
            return
        self._closed = True
        self.log_action("cleanup-start", command=f"callbacks={len(self._cleanups)}")
        failures = await self._run_cleanups()
        await self.listener.stop()
        self.log_action("listener-stopped")
        if failures:
            raise CleanupError(failures)
        self.log_action("cleanup-done")

    async def _run_cleanups(self):
        failures = []
        for handle in self._cleanups:
            label = handle.label
            try:
                await _resolve(handle.callback())
            except Exception as exc:
                self.log_exception(f"cleanup/{label}", exc)
                self.log_action("cleanup-failed", command=label, rejection_message=str(exc)[:500] or "cleanup failed")
                failures.append((label, exc))
        return failures

    async def _teardown_after_failure(self):
        # Teardown errors are logged only; the plugin failure is what surfaces.
        self._closed = True
        failures = await self._run_cleanups()
        try:
            await self.listener.stop()
        except Exception as exc:
            self.log_exception("teardown/listener.stop", exc)
        else:
            self.log_action("listener-stopped")
        if failures:
            self.log_action(
                "cleanup-failed",
                command="startup teardown",
                rejection_message=f"{len(failures)} cleanup callback(s) failed",
            )
