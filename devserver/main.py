"""Command-line entry point for the dev server.

Usage: ``python -m devserver.main [web|native]``

Settings come from ``devserver.env`` in the working directory (or the file
named by ``DEVSERVER_CONFIG``). ``PLUGINS`` lists ``module:attribute``
references that are started in order after the listener is up.
"""

import sys

from devserver.core.config import get_dev_server_config
from devserver.core.platform import PlatformType, parse_platform_type
from devserver.services.bootstrap import run_dev_server
from devserver.services.plugin_loader import load_plugins

USAGE = "usage: python -m devserver.main [web|native]"


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) > 1 or (args and args[0] in {"-h", "--help"}):
        print(USAGE)
        return 0 if args and args[0] in {"-h", "--help"} else 2
    try:
        platform_type = parse_platform_type(args[0]) if args else PlatformType.WEB
    except ValueError as exc:
        print(f"{exc}\n{USAGE}", file=sys.stderr)
        return 2

    config = get_dev_server_config()
    plugins = load_plugins(config.plugins)
    run_dev_server(platform_type, plugins, config=config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
