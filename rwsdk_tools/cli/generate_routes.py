#!/usr/bin/env python3
"""
Generate ``src/app/shared/links.ts`` from the routes of ``src/worker.tsx``.

Usage:
    rwsdk-tools routes
    rwsdk-tools routes --worker src/worker.tsx --output src/app/shared/links.ts
    rwsdk-tools routes --dry-run     # print the module instead of writing it

Paths default to the ``routes`` section of rwsdk-tools.yaml and resolve
against the project root (nearest directory with rwsdk-tools.yaml or
package.json).
"""

from __future__ import annotations

from rwsdk_tools.core.links_writer import generate_links
from rwsdk_tools.helpers.helpers_logging import (
    print_dim,
    print_error,
    print_info,
    print_success,
)
from rwsdk_tools.helpers.project_config import ConfigError, load_config


def run_generate_routes(
    worker: str | None = None,
    output: str | None = None,
    source_root: str | None = None,
    router_module: str | None = None,
    dry_run: bool = False,
) -> int:
    """Run links generation; returns the process exit code."""
    try:
        config = load_config().with_routes(
            worker=worker,
            output=output,
            source_root=source_root,
            router_module=router_module,
        )
    except ConfigError as e:
        print_error(f"Invalid configuration: {e}")
        return 1

    try:
        result = generate_links(config, dry_run=dry_run)
    except FileNotFoundError as e:
        print_error(str(e))
        print_info("   Use --worker to point at your router definition file.")
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print_error(f"Error generating routes: {e}")
        return 1

    if dry_run:
        print(result.content, end="")
        return 0

    print_success(f"Generated {result.output_path} ({len(result.routes)} routes)")
    for route in result.routes:
        print_dim(f"  {route}")
    return 0
