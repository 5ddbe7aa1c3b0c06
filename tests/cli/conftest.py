"""Shared fixtures for end-to-end CLI tests.

Every CLI e2e test gets an isolated RedwoodSDK-shaped project directory
(``package.json`` plus ``src/``) to work in, so tests never pollute each
other or the real workspace.

``run_tools`` invokes the installed ``rwsdk-tools`` entry point in a
subprocess, exactly as a user would from the project root. This validates
the full chain: entry point → ``commands.py`` dispatch → click command →
handler.

``run_tools_completion`` uses Click's ``ShellComplete`` API to query
completions at the Python level, the same logic that drives the runtime
``_RWSDK_TOOLS_COMPLETE`` protocol.

**Isolation:** If the ``rwsdk-tools`` entry point is not installed, every
test that depends on ``run_tools`` is skipped with a clear reason.
"""

import os
import shutil
import subprocess
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from click.shell_completion import ShellComplete

RunTools = Callable[..., subprocess.CompletedProcess[str]]
RunToolsCompletion = Callable[[str], list[str]]

_TOOLS_AVAILABLE = shutil.which("rwsdk-tools") is not None
_SKIP_REASON_TOOLS = "rwsdk-tools entry point is not installed (run: pip install -e .)"


@pytest.fixture()
def isolated_project(tmp_path: Path) -> Iterator[Path]:
    """Create an isolated project directory and cd into it.

    Yields:
        Path to the temporary project root.

    After the test, the working directory is restored.
    """
    root = tmp_path.resolve()
    (root / "package.json").write_text('{"name": "app"}\n', encoding="utf-8")
    (root / "src").mkdir()

    original_cwd = Path.cwd()
    os.chdir(root)
    try:
        yield root
    finally:
        os.chdir(original_cwd)


@pytest.fixture()
def run_tools(isolated_project: Path) -> RunTools:
    """Return a helper that runs ``rwsdk-tools <args>`` in the project.

    Usage in tests::

        def test_routes(run_tools: RunTools) -> None:
            result = run_tools("routes", "--dry-run")
            assert result.returncode == 0

    Returns:
        A callable ``(*args) -> CompletedProcess[str]``.
    """
    if not _TOOLS_AVAILABLE:
        pytest.skip(_SKIP_REASON_TOOLS)

    env = {key: value for key, value in os.environ.items() if key != "_RWSDK_TOOLS_COMPLETE"}

    def _run(*args: str) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            ["rwsdk-tools", *args],
            cwd=isolated_project,
            capture_output=True,
            text=True,
            check=False,
            env=env,
        )

    return _run


@pytest.fixture()
def run_tools_completion() -> RunToolsCompletion:
    """Return a helper that queries Click completions for ``rwsdk-tools``.

    The returned callable accepts a partial command string (e.g.
    ``"rwsdk-tools routes --dr"``) and returns the completion values.
    """
    from rwsdk_tools.cli.commands import COMPLETE_VAR, PROG_NAME, _click_cli

    def _complete(partial_cmd: str) -> list[str]:
        parts = partial_cmd.split()
        if parts and parts[0] == PROG_NAME:
            parts = parts[1:]

        # A trailing space means a new, empty word is being typed.
        if partial_cmd.endswith(" ") or not parts:
            incomplete, args = "", parts
        else:
            incomplete, args = parts[-1], parts[:-1]

        comp = ShellComplete(_click_cli, {}, PROG_NAME, COMPLETE_VAR)
        return [c.value for c in comp.get_completions(args, incomplete)]

    return _complete
