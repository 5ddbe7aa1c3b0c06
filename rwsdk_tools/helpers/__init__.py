"""Helper utilities shared by the rwsdk-tools commands."""

from rwsdk_tools.helpers.project_config import (
    ToolsConfig,
    get_project_root,
    load_config,
)

__all__ = [
    "ToolsConfig",
    "get_project_root",
    "load_config",
]
