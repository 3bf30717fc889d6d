"""
Command-line interface for the FRITZ!Box client.

Resolves credentials, logs in, runs one subcommand and prints its result
as a single table on stdout.  Log output goes to stderr.
"""

import argparse
import getpass
import sys
from pathlib import Path
from typing import Callable, Dict, List

from fritz_cli.auth.client import SessionClient
from fritz_cli.config import (
    DEFAULT_COLUMN_SPACING,
    DEFAULT_CONFIG,
    REQUEST_TIMEOUT,
    Credentials,
    load_credentials,
    write_config,
)
from fritz_cli.exceptions import ConfigError, FritzError
from fritz_cli.gateway import ResourceGateway
from fritz_cli.logging_setup import _setup_logging, log
from fritz_cli.models import RebootResult, ReconnectResult
from fritz_cli.table import MappingRow, TableRow, render

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CONFIG = 2


def cmd_info(gateway: ResourceGateway) -> List[TableRow]:
    return [gateway.fetch_overview()]


def cmd_devices(gateway: ResourceGateway) -> List[TableRow]:
    return list(gateway.fetch_devices())


def cmd_reboot(gateway: ResourceGateway) -> List[TableRow]:
    if gateway.reboot():
        return [RebootResult(accepted=True, message="Reboot initiated")]
    return [RebootResult(accepted=False, message="Router did not accept the reboot request")]


def cmd_reconnect(gateway: ResourceGateway) -> List[TableRow]:
    settle = gateway.reconnect()
    return [ReconnectResult(
        action="reconnect",
        settle_seconds=settle,
        message=f"Heads up! This can take up to {settle}s to take full effect",
    )]


COMMANDS: Dict[str, Callable[[ResourceGateway], List[TableRow]]] = {
    "info": cmd_info,
    "reboot": cmd_reboot,
    "reconnect": cmd_reconnect,
    "devices": cmd_devices,
}

_COMMAND_HELP = {
    "init": "Write the config file from flags, environment or prompts.",
    "info": "Display status information about the FRITZ!Box.",
    "reboot": "Reboot the device instantly.",
    "reconnect": "Reconnect the device, usually with a new IP.",
    "devices": "List all known devices and device info.",
}


def parse_args(argv: "List[str] | None" = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="fritz-cli",
        description="Query and control an AVM FRITZ!Box from the console.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Credentials are taken from flags, then the FRITZ_URL / FRITZ_USER /\n"
            "FRITZ_PASSWORD env vars, then the config file.  If no password is\n"
            "found you will be prompted for it."
        ),
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, type=Path,
        help=f"Path of the JSON config file (default: {DEFAULT_CONFIG})",
    )
    parser.add_argument("--url", help="Router base URL (e.g. http://fritz.box)")
    parser.add_argument("--user", help="Login username")
    parser.add_argument("--password", help="Login password (overrides FRITZ_PASSWORD)")
    parser.add_argument(
        "--timeout", type=float, default=REQUEST_TIMEOUT,
        help=f"HTTP timeout in seconds (default: {REQUEST_TIMEOUT})",
    )
    parser.add_argument(
        "--spacing", type=int, default=DEFAULT_COLUMN_SPACING,
        help=f"Spaces between table columns (default: {DEFAULT_COLUMN_SPACING})",
    )
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging")

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    for name in ("init", *COMMANDS):
        sub.add_parser(name, help=_COMMAND_HELP[name], description=_COMMAND_HELP[name])

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help(sys.stderr)
        parser.exit(EXIT_CONFIG)
    if args.spacing < 0:
        parser.error("--spacing must be >= 0")
    if args.timeout <= 0:
        parser.error("--timeout must be > 0")
    return args


def resolve_credentials(args: argparse.Namespace, interactive: bool = False) -> Credentials:
    """Build Credentials from flags/env/config file, prompting for what is missing."""
    resolved = load_credentials(
        args.config, base_url=args.url, username=args.user, password=args.password,
    )
    username = resolved["username"]
    password = resolved["password"]

    if username is None:
        username = input("Router username (empty for none): ").strip() if interactive else ""
    if not password:
        if not sys.stdin.isatty() and not interactive:
            raise ConfigError(
                "No password configured; pass --password, set FRITZ_PASSWORD "
                "or run 'fritz-cli init'"
            )
        password = getpass.getpass("Router password: ")
    if not password:
        raise ConfigError("Empty password")
    return Credentials(base_url=resolved["base_url"], username=username, password=password)


def run_init(args: argparse.Namespace) -> str:
    credentials = resolve_credentials(args, interactive=True)
    write_config(args.config, credentials)
    log.info("Wrote config to %s", args.config)
    row = MappingRow({
        "config": str(args.config),
        "base_url": credentials.base_url,
        "username": credentials.username,
    })
    return render([row], args.spacing)


def run_command(args: argparse.Namespace) -> str:
    credentials = resolve_credentials(args)
    with SessionClient(credentials, timeout=args.timeout) as client:
        client.login()
        rows = COMMANDS[args.command](ResourceGateway(client))
    return render(rows, args.spacing)


def main(argv: "List[str] | None" = None) -> int:
    """
    Main entry point for the CLI.

    Returns the process exit status.
    """
    args = parse_args(argv)
    _setup_logging(debug=args.debug)

    try:
        if args.command == "init":
            output = run_init(args)
        else:
            output = run_command(args)
    except ConfigError as exc:
        log.error("%s", exc)
        return EXIT_CONFIG
    except FritzError as exc:
        log.error("%s failed: %s", args.command, exc)
        return EXIT_ERROR

    # Printed only once the full result set has been decoded
    sys.stdout.write(output)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
