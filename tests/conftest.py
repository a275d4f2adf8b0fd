from collections.abc import Sequence
import os
from pathlib import Path
import sys

import pytest

# Ensure repo root is importable without an editable install.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from shadcn_mcp.tools.runner import CommandExecutionError, CommandResult  # noqa: E402


@pytest.fixture(autouse=True)
def hermetic_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Autouse: each test runs in its own tmp cwd with no SHADCN_MCP_* overrides,
    so a stray shadcn-mcp.toml or exported variable cannot leak into config.
    """
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("SHADCN_MCP_"):
            monkeypatch.delenv(key, raising=False)
    return tmp_path


class SpyRunner:
    """Stand-in for the command runner that records every spawn request."""

    def __init__(
        self,
        stdout: str = "",
        stderr: str = "",
        error: str | None = None,
    ):
        self.result = CommandResult(stdout=stdout, stderr=stderr)
        self.error = error
        self.calls: list[tuple[list[str], str]] = []

    async def __call__(self, argv: Sequence[str], cwd: str | Path) -> CommandResult:
        self.calls.append((list(argv), str(cwd)))
        if self.error is not None:
            raise CommandExecutionError(self.error, returncode=1)
        return self.result


@pytest.fixture
def spy_runner() -> SpyRunner:
    return SpyRunner(stdout="OK", stderr="")


@pytest.fixture
def make_spy():
    return SpyRunner
