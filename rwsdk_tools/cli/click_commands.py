"""Click command definitions for the rwsdk-tools CLI.

Each command only declares its options and hands them to the handler
module that does the work (``generate_routes``, ``seed_to_sql``). Handlers
return an exit code, which ``commands.main`` passes back to the shell.
"""

from __future__ import annotations

import click

from rwsdk_tools.cli.generate_routes import run_generate_routes
from rwsdk_tools.cli.seed_to_sql import run_seed_to_sql


def _complete_seed_files(
    _ctx: click.Context, _param: click.Parameter, incomplete: str,
) -> list[str]:
    """Offer .ts/.js files in the working directory tree for seed input."""
    from pathlib import Path

    matches: list[str] = []
    for pattern in ("**/*.ts", "**/*.js"):
        for path in Path.cwd().glob(pattern):
            if "node_modules" in path.parts:
                continue
            relative = path.relative_to(Path.cwd()).as_posix()
            if relative.startswith(incomplete):
                matches.append(relative)
    return sorted(matches)


# ============================================================================
# routes
# ============================================================================

@click.command(
    name="routes",
    help="Generate links.ts from the routes defined in the worker file",
)
@click.option("--worker", metavar="PATH",
              help="Router definition file (default: src/worker.tsx)")
@click.option("--output", metavar="PATH",
              help="Generated links module (default: src/app/shared/links.ts)")
@click.option("--source-root", metavar="PATH",
              help="Directory '@/' imports resolve against (default: src)")
@click.option("--router-module", metavar="MODULE",
              help="Module defineLinks is imported from (default: rwsdk/router)")
@click.option("--dry-run", is_flag=True,
              help="Print the generated module instead of writing it")
def routes_cmd(
    worker: str | None,
    output: str | None,
    source_root: str | None,
    router_module: str | None,
    dry_run: bool,
) -> int:
    """Generate the typed links module."""
    return run_generate_routes(
        worker=worker,
        output=output,
        source_root=source_root,
        router_module=router_module,
        dry_run=dry_run,
    )


# ============================================================================
# seed-to-sql
# ============================================================================

@click.command(
    name="seed-to-sql",
    help="Convert a Prisma seed script into SQL statements",
)
@click.argument("input_positional", required=False, default=None,
                metavar="INPUT", shell_complete=_complete_seed_files)
@click.option("-i", "--input", "input_option", metavar="PATH",
              shell_complete=_complete_seed_files,
              help="Seed file to convert")
@click.option("-o", "--output", metavar="PATH",
              help="SQL file to write (default: input path with .sql)")
@click.option("--stdout", "to_stdout", is_flag=True,
              help="Print the SQL instead of writing a file")
def seed_to_sql_cmd(
    input_positional: str | None,
    input_option: str | None,
    output: str | None,
    to_stdout: bool,
) -> int:
    """Convert a seed script."""
    return run_seed_to_sql(
        input_option or input_positional,
        output_file=output,
        to_stdout=to_stdout,
    )


# ============================================================================
# Registry of all typed commands
# ============================================================================

CLICK_COMMANDS: dict[str, click.Command] = {
    "routes": routes_cmd,
    "seed-to-sql": seed_to_sql_cmd,
}
