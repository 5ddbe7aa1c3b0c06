#!/usr/bin/env python3
"""
Convert a Prisma seed script into a SQL file.

Usage:
    rwsdk-tools seed-to-sql src/scripts/seed.ts
    rwsdk-tools seed-to-sql --input src/scripts/seed.ts --output migrations/seed.sql
    rwsdk-tools seed-to-sql src/scripts/seed.ts --stdout

Without --output the SQL is written next to the input with a ``.sql``
extension. Client names (``db`` by default) come from the ``seed`` section
of rwsdk-tools.yaml.
"""

from __future__ import annotations

from pathlib import Path

from rwsdk_tools.core.seed_to_sql import convert_seed_file
from rwsdk_tools.helpers.helpers_logging import print_error, print_info, print_success
from rwsdk_tools.helpers.project_config import ConfigError, load_config


def run_seed_to_sql(
    input_file: str | None,
    output_file: str | None = None,
    to_stdout: bool = False,
) -> int:
    """Run seed conversion; returns the process exit code."""
    if not input_file:
        print_error("No input file specified")
        print_info("Usage: rwsdk-tools seed-to-sql --input <seed-file.ts> [--output <output-file.sql>]")
        return 1

    try:
        config = load_config()
    except ConfigError as e:
        print_error(f"Invalid configuration: {e}")
        return 1

    input_path = Path(input_file).resolve()
    output_path = Path(output_file).resolve() if output_file else None

    try:
        result = convert_seed_file(
            input_path,
            output_path,
            client_names=config.seed.clients,
            dry_run=to_stdout,
        )
    except FileNotFoundError:
        print_error(f"Input file '{input_path}' does not exist")
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print_error(f"Error converting seed file: {e}")
        return 1

    if to_stdout:
        print(result.sql, end="")
        return 0

    print_success(f"SQL generated successfully: {result.output_path}")
    print_info(f"Found and converted {len(result.statements)} SQL statements.")
    return 0
