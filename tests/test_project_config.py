"""Tests for project root discovery and rwsdk-tools.yaml loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from rwsdk_tools.helpers.project_config import (
    CONFIG_FILE_NAME,
    DEFAULT_LINKS_OUTPUT,
    DEFAULT_WORKER,
    ConfigError,
    ToolsConfig,
    get_project_root,
    load_config,
    parse_config,
)
from rwsdk_tools.helpers.yaml_loader import load_yaml_file
from tests.conftest import write_file


class TestGetProjectRoot:
    """Tests for get_project_root."""

    def test_finds_package_json_above(self, project_dir: Path) -> None:
        nested = project_dir / "src" / "app" / "pages"
        nested.mkdir(parents=True)
        assert get_project_root(nested) == project_dir

    def test_config_file_marks_root(self, tmp_path: Path) -> None:
        write_file(tmp_path, f"web/{CONFIG_FILE_NAME}", "routes: {}\n")
        (tmp_path / "web" / "src").mkdir()
        assert get_project_root(tmp_path / "web" / "src") == (tmp_path / "web").resolve()

    def test_defaults_to_cwd(self, project_dir: Path) -> None:
        assert get_project_root() == project_dir


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self, project_dir: Path) -> None:
        config = load_config()
        assert config.project_root == project_dir
        assert config.routes.worker == DEFAULT_WORKER
        assert config.routes.output == DEFAULT_LINKS_OUTPUT
        assert config.seed.clients == ("db",)

    def test_reads_yaml(self, project_dir: Path) -> None:
        write_file(
            project_dir,
            CONFIG_FILE_NAME,
            "routes:\n"
            "  worker: src/app/worker.tsx\n"
            "  router_module: '@redwoodjs/sdk/router'\n"
            "seed:\n"
            "  clients: [db, prisma]\n",
        )

        config = load_config(project_dir)

        assert config.routes.worker == "src/app/worker.tsx"
        assert config.routes.router_module == "@redwoodjs/sdk/router"
        assert config.routes.output == DEFAULT_LINKS_OUTPUT
        assert config.seed.clients == ("db", "prisma")

    def test_empty_file_gives_defaults(self, project_dir: Path) -> None:
        write_file(project_dir, CONFIG_FILE_NAME, "")
        assert load_config(project_dir).routes.worker == DEFAULT_WORKER

    def test_non_mapping_root_is_config_error(self, project_dir: Path) -> None:
        write_file(project_dir, CONFIG_FILE_NAME, "- routes\n")
        with pytest.raises(ConfigError):
            load_config(project_dir)

    def test_yaml_syntax_error_is_config_error(self, project_dir: Path) -> None:
        write_file(project_dir, CONFIG_FILE_NAME, "routes: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(project_dir)


class TestParseConfig:
    """Tests for parse_config value validation."""

    def test_single_client_string(self, tmp_path: Path) -> None:
        config = parse_config({"seed": {"clients": "prisma"}}, tmp_path)
        assert config.seed.clients == ("prisma",)

    @pytest.mark.parametrize(
        "raw",
        [
            {"routes": ["worker"]},
            {"routes": {"worker": 3}},
            {"routes": {"output": "  "}},
            {"seed": {"clients": [1]}},
        ],
    )
    def test_invalid_values(self, raw: dict[str, object], tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            parse_config(raw, tmp_path)  # type: ignore[arg-type]

    def test_config_error_is_value_error(self) -> None:
        assert issubclass(ConfigError, ValueError)


class TestToolsConfig:
    """Tests for ToolsConfig helpers."""

    def test_resolve_relative_and_absolute(self, tmp_path: Path) -> None:
        config = ToolsConfig(project_root=tmp_path)
        assert config.resolve("src/worker.tsx") == tmp_path / "src" / "worker.tsx"
        absolute = tmp_path / "elsewhere.ts"
        assert config.resolve(str(absolute)) == absolute

    def test_with_routes_ignores_none(self, tmp_path: Path) -> None:
        config = ToolsConfig(project_root=tmp_path)
        updated = config.with_routes(worker="app.tsx", output=None)
        assert updated.routes.worker == "app.tsx"
        assert updated.routes.output == DEFAULT_LINKS_OUTPUT
        assert config.with_routes(worker=None) is config


class TestLoadYamlFile:
    """Tests for load_yaml_file."""

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_yaml_file(tmp_path / "missing.yaml")

    def test_returns_mapping(self, tmp_path: Path) -> None:
        path = write_file(tmp_path, "x.yaml", "a: 1\nb: [x, y]\n")
        assert load_yaml_file(path) == {"a": 1, "b": ["x", "y"]}
