"""YAML loading for rwsdk-tools configuration files.

Uses ruamel.yaml in safe mode; configuration is read-only for the tools,
so no round-trip (comment preserving) instance is needed.
"""

from pathlib import Path
from typing import Protocol, TextIO, Union, cast

from ruamel.yaml import YAML

# Recursive type for nested YAML structures
ConfigValue = Union[str, int, float, bool, None, 'ConfigDict', list['ConfigValue']]
ConfigDict = dict[str, ConfigValue]


class YAMLLoader(Protocol):
    """Protocol for the subset of the ruamel.yaml API the tools use."""

    def load(self, stream: TextIO) -> ConfigValue:
        """Load YAML from stream."""
        ...


def _create_yaml_loader() -> YAMLLoader:
    """Create the shared safe YAML loader instance."""
    yaml_obj = YAML(typ="safe", pure=True)
    if not callable(getattr(yaml_obj, "load", None)):
        raise TypeError("YAML.load is not callable")
    return cast(YAMLLoader, yaml_obj)


yaml: YAMLLoader = _create_yaml_loader()


def load_yaml_file(file_path: Path) -> ConfigDict:
    """Load a YAML mapping from *file_path*.

    An empty document loads as an empty mapping.

    Raises:
        FileNotFoundError: If file does not exist
        TypeError: If the document root is not a mapping
    """
    if not file_path.exists():
        raise FileNotFoundError(f"YAML file not found: {file_path}")

    with file_path.open(encoding="utf-8") as f:
        raw: ConfigValue = yaml.load(f)

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise TypeError(
            f"Expected a mapping at the top of {file_path}, "
            + f"got {type(raw).__name__}"
        )
    return cast(ConfigDict, raw)
