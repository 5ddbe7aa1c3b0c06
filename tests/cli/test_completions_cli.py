"""Completion tests for the rwsdk-tools click command group."""

from pathlib import Path

import pytest

from tests.cli.conftest import RunToolsCompletion
from tests.conftest import write_file

pytestmark = pytest.mark.cli


def test_commands_and_aliases_complete(run_tools_completion: RunToolsCompletion) -> None:
    values = run_tools_completion("rwsdk-tools ")
    for name in ("routes", "seed-to-sql", "gr", "s2s", "help"):
        assert name in values


def test_routes_options_complete(run_tools_completion: RunToolsCompletion) -> None:
    assert "--dry-run" in run_tools_completion("rwsdk-tools routes --dr")


def test_seed_input_completes_script_files(
    run_tools_completion: RunToolsCompletion, isolated_project: Path,
) -> None:
    write_file(isolated_project, "src/scripts/seed.ts", "")
    write_file(isolated_project, "node_modules/pkg/index.js", "")

    values = run_tools_completion("rwsdk-tools seed-to-sql src/")

    assert values == ["src/scripts/seed.ts"]
