#!/usr/bin/env python3
"""rwsdk-tools CLI - Main Entry Point.

Usage:
    rwsdk-tools <command> [options]

Commands:
    routes        Generate src/app/shared/links.ts from the worker's routes
    seed-to-sql   Convert a Prisma seed script into a SQL file
    help          Show this help message
"""

from __future__ import annotations

import contextlib
import os
import sys

import click

from rwsdk_tools.helpers.helpers_logging import print_info
from rwsdk_tools.helpers.project_config import CONFIG_FILE_NAME, get_project_root

PROG_NAME = "rwsdk-tools"
COMPLETE_VAR = "_RWSDK_TOOLS_COMPLETE"

# Minimum number of CLI args (program name + command)
_MIN_ARGS = 2

COMMAND_ALIASES: dict[str, str] = {
    "gr": "routes",
    "s2s": "seed-to-sql",
}


def print_help() -> None:
    """Print help message with all available commands."""
    from rwsdk_tools.cli.click_commands import CLICK_COMMANDS

    print(__doc__)

    project_root = get_project_root()
    print(f"📍 Project root: {project_root}")
    if (project_root / CONFIG_FILE_NAME).is_file():
        print(f"   Config: {CONFIG_FILE_NAME}")

    print("\n📦 Commands:")
    for name, cmd in CLICK_COMMANDS.items():
        print(f"  {name:14} - {cmd.help}")

    print("\n⚡ Aliases:")
    for alias, canonical in COMMAND_ALIASES.items():
        print(f"  {alias:14} - alias for {canonical}")

    print_info(f"\n💡 Run '{PROG_NAME} <command> --help' for command options")


@click.group(invoke_without_command=True)
@click.pass_context
def _click_cli(ctx: click.Context) -> int:
    """Top-level rwsdk-tools command group."""
    if ctx.invoked_subcommand is None:
        print_help()
    return 0


def _register_commands() -> None:
    """Register typed commands, their aliases, and ``help``."""
    from rwsdk_tools.cli.click_commands import CLICK_COMMANDS

    for _name, cmd_obj in CLICK_COMMANDS.items():
        _click_cli.add_command(cmd_obj)

    for alias, canonical in COMMAND_ALIASES.items():
        cmd_obj = CLICK_COMMANDS.get(canonical)
        if cmd_obj is not None:
            _click_cli.add_command(cmd_obj, name=alias)

    @click.command(name="help", help="Show help message")
    def _help_cmd() -> int:
        print_help()
        return 0

    _click_cli.add_command(_help_cmd)


_register_commands()


def main() -> int:
    """Main CLI entry point."""
    # Let Click handle shell completion protocol before anything else.
    if os.environ.get(COMPLETE_VAR):
        with contextlib.suppress(SystemExit):
            _click_cli.main(
                args=sys.argv[1:],
                prog_name=PROG_NAME,
                complete_var=COMPLETE_VAR,
                standalone_mode=True,
            )
        return 0

    if len(sys.argv) < _MIN_ARGS or sys.argv[1] in ["help", "--help", "-h"]:
        print_help()
        return 0

    try:
        result = _click_cli.main(
            args=sys.argv[1:],
            prog_name=PROG_NAME,
            standalone_mode=False,
        )
    except click.Abort:
        print("\n⚠️  Cancelled by user")
        return 130
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    return 0 if result is None else int(result)


if __name__ == "__main__":
    sys.exit(main())
