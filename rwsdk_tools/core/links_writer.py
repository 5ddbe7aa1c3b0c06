"""Generation of the typed ``links.ts`` module from extracted routes."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from rwsdk_tools.core.route_extractor import extract_routes_from_file
from rwsdk_tools.helpers.project_config import DEFAULT_ROUTER_MODULE, ToolsConfig


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one links generation run."""

    routes: list[str]
    output_path: Path
    content: str
    written: bool


def render_links_module(
    routes: list[str],
    router_module: str = DEFAULT_ROUTER_MODULE,
) -> str:
    """Render the links module source for *routes*.

    The route array is serialized as JSON with two-space indentation.
    """
    routes_json = json.dumps(routes, indent=2, ensure_ascii=False)
    return (
        f'import {{ defineLinks }} from "{router_module}";\n'
        "\n"
        f"export const link = defineLinks({routes_json});\n"
    )


def write_links_file(
    routes: list[str],
    output_path: Path,
    router_module: str = DEFAULT_ROUTER_MODULE,
) -> Path:
    """Write the links module for *routes* to *output_path*."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_links_module(routes, router_module), encoding="utf-8")
    return output_path


def generate_links(config: ToolsConfig, dry_run: bool = False) -> GenerationResult:
    """Extract routes from the configured worker file and write links.ts.

    Args:
        config: Project configuration (paths resolve against its root).
        dry_run: Render the module without writing it.

    Raises:
        FileNotFoundError: If the worker file does not exist
    """
    worker_path = config.resolve(config.routes.worker)
    source_root = config.resolve(config.routes.source_root)
    output_path = config.resolve(config.routes.output)

    routes = extract_routes_from_file(worker_path, source_root=source_root)
    content = render_links_module(routes, config.routes.router_module)

    if not dry_run:
        write_links_file(routes, output_path, config.routes.router_module)

    return GenerationResult(
        routes=routes,
        output_path=output_path,
        content=content,
        written=not dry_run,
    )
