"""Logging setup helpers."""

from devserver.core.action_logging import make_log_action, make_log_exception, null_log_action

ACTION_LOG_NAME = "devserver-actions.log"
SYSTEM_LOG_NAME = "devserver.log"


def build_loggers(log_dir, display_tz=None):
    """Create devserver action/system log writers and exception logger.

    With no ``log_dir`` the writers discard every event.
    """
    if log_dir is None:
        return null_log_action, null_log_action, make_log_exception(null_log_action)
    log_action = make_log_action(display_tz, log_dir, log_dir / ACTION_LOG_NAME)
    log_system = make_log_action(display_tz, log_dir, log_dir / SYSTEM_LOG_NAME)
    log_exception = make_log_exception(log_system)
    return log_action, log_system, log_exception
