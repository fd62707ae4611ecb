from __future__ import annotations

from pathlib import Path

from sprout import exec as exec_util
from sprout import installers
from sprout.models import PackageManager

BASE_GENERATED = {".gitignore", "package.json", "src"}


def entries(path: Path) -> set[str]:
    return {child.name for child in path.iterdir()}


class FakeRunner:
    """Command runner that records requests instead of spawning processes."""

    def __init__(self, *, returncode: int = 0, stderr: str = "", missing: bool = False) -> None:
        self.returncode = returncode
        self.stderr = stderr
        self.missing = missing
        self.requests: list[exec_util.CommandRequest] = []

    def run(self, request: exec_util.CommandRequest) -> exec_util.CommandResult | None:
        self.requests.append(request)
        if self.missing:
            return None
        if request.cwd is not None:
            (request.cwd / "node_modules").mkdir(exist_ok=True)
        return exec_util.CommandResult(
            argv=request.argv,
            returncode=self.returncode,
            stdout="",
            stderr=self.stderr,
        )


def fake_installer_factory(runner: FakeRunner):
    def factory(package_manager: PackageManager) -> installers.PackageInstaller:
        return installers.installer_for(package_manager, runner=runner)

    return factory
