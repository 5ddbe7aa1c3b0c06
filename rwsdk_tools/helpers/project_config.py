#!/usr/bin/env python3
"""
Project root discovery and ``rwsdk-tools.yaml`` configuration loading.

Example rwsdk-tools.yaml:
    routes:
      worker: src/worker.tsx
      output: src/app/shared/links.ts
      source_root: src
      router_module: rwsdk/router
    seed:
      clients: [db]

Every key is optional; missing keys fall back to the RedwoodSDK defaults.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path

from ruamel.yaml.error import YAMLError

from rwsdk_tools.helpers.yaml_loader import ConfigDict, ConfigValue, load_yaml_file

CONFIG_FILE_NAME = "rwsdk-tools.yaml"
_ROOT_MARKERS = (CONFIG_FILE_NAME, "package.json")

DEFAULT_WORKER = "src/worker.tsx"
DEFAULT_LINKS_OUTPUT = "src/app/shared/links.ts"
DEFAULT_SOURCE_ROOT = "src"
DEFAULT_ROUTER_MODULE = "rwsdk/router"
DEFAULT_SEED_CLIENTS = ("db",)


class ConfigError(ValueError):
    """Raised when rwsdk-tools.yaml holds a value of the wrong shape."""


@dataclass(frozen=True)
class RoutesConfig:
    """Settings for route extraction and links generation.

    Attributes:
        worker: Router definition file, relative to the project root.
        output: Generated links module, relative to the project root.
        source_root: Directory that ``@/`` import paths resolve against.
        router_module: Module ``defineLinks`` is imported from.
    """

    worker: str = DEFAULT_WORKER
    output: str = DEFAULT_LINKS_OUTPUT
    source_root: str = DEFAULT_SOURCE_ROOT
    router_module: str = DEFAULT_ROUTER_MODULE


@dataclass(frozen=True)
class SeedConfig:
    """Settings for seed-to-SQL conversion.

    Attributes:
        clients: Names the Prisma client is bound to in seed scripts.
    """

    clients: tuple[str, ...] = DEFAULT_SEED_CLIENTS


@dataclass(frozen=True)
class ToolsConfig:
    """Resolved configuration for one project."""

    project_root: Path
    routes: RoutesConfig = field(default_factory=RoutesConfig)
    seed: SeedConfig = field(default_factory=SeedConfig)

    def resolve(self, relative: str) -> Path:
        """Resolve a configured path against the project root."""
        path = Path(relative)
        if path.is_absolute():
            return path
        return self.project_root / path

    def with_routes(self, **overrides: str | None) -> "ToolsConfig":
        """Return a copy with non-None route settings replaced."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return replace(self, routes=replace(self.routes, **changes))


def get_project_root(start: Path | None = None) -> Path:
    """Find the project root by walking up from *start* (default: cwd).

    The root is the nearest directory holding ``rwsdk-tools.yaml`` or
    ``package.json``. Falls back to *start* when neither is found.
    """
    current = (start or Path.cwd()).resolve()
    for parent in [current, *current.parents]:
        if any((parent / marker).is_file() for marker in _ROOT_MARKERS):
            return parent
    return current


def _section(raw: ConfigDict, name: str) -> ConfigDict:
    value = raw.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{name}' must be a mapping in {CONFIG_FILE_NAME}")
    return value


def _string(section: ConfigDict, section_name: str, key: str, default: str) -> str:
    value: ConfigValue = section.get(key)
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(
            f"'{section_name}.{key}' must be a non-empty string in {CONFIG_FILE_NAME}"
        )
    return value.strip()


def _string_list(
    section: ConfigDict,
    section_name: str,
    key: str,
    default: tuple[str, ...],
) -> tuple[str, ...]:
    value: ConfigValue = section.get(key)
    if value is None:
        return default
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(
        isinstance(item, str) and item.strip() for item in value
    ):
        raise ConfigError(
            f"'{section_name}.{key}' must be a list of names in {CONFIG_FILE_NAME}"
        )
    return tuple(str(item).strip() for item in value)


def parse_config(raw: ConfigDict, project_root: Path) -> ToolsConfig:
    """Build a ToolsConfig from a loaded YAML mapping."""
    routes_raw = _section(raw, "routes")
    seed_raw = _section(raw, "seed")

    routes = RoutesConfig(
        worker=_string(routes_raw, "routes", "worker", DEFAULT_WORKER),
        output=_string(routes_raw, "routes", "output", DEFAULT_LINKS_OUTPUT),
        source_root=_string(routes_raw, "routes", "source_root", DEFAULT_SOURCE_ROOT),
        router_module=_string(
            routes_raw, "routes", "router_module", DEFAULT_ROUTER_MODULE,
        ),
    )
    seed = SeedConfig(
        clients=_string_list(seed_raw, "seed", "clients", DEFAULT_SEED_CLIENTS),
    )
    return ToolsConfig(project_root=project_root, routes=routes, seed=seed)


def load_config(project_root: Path | None = None) -> ToolsConfig:
    """Load the configuration for *project_root* (default: discovered root)."""
    root = project_root if project_root is not None else get_project_root()
    config_path = root / CONFIG_FILE_NAME
    if not config_path.is_file():
        return ToolsConfig(project_root=root)

    try:
        raw = load_yaml_file(config_path)
    except (TypeError, YAMLError) as e:
        raise ConfigError(str(e)) from e
    return parse_config(raw, root)
