"""Package-manager adapters used after a scaffold is written."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping, Protocol

from . import exec as exec_util
from .models import PackageManager, PackageManifest
from .services.errors import ExternalCommandFailedError

NPM_LOCKFILE = "package-lock.json"
YARN_LOCKFILE = "yarn.lock"
YARN_LOCKFILE_HEADER = (
    "# THIS IS AN AUTOGENERATED FILE. DO NOT EDIT THIS FILE DIRECTLY.\n# yarn lockfile v1\n"
)
INSTALL_TIMEOUT_SECONDS = 60 * 10


class PackageInstaller(Protocol):
    """Capability for seeding a lockfile and installing dependencies."""

    name: PackageManager
    lockfile_name: str

    def seed_lockfile(self, manifest: PackageManifest) -> str:
        """Return the initial lockfile contents for ``manifest``."""
        ...

    def install(self, project_dir: Path) -> None:
        """Install dependencies declared in ``project_dir/package.json``."""
        ...


class _CommandInstaller:
    name: PackageManager
    lockfile_name: str
    install_argv: tuple[str, ...]

    def __init__(
        self,
        *,
        runner: exec_util.CommandRunner | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._runner = runner
        self._env = env

    def install(self, project_dir: Path) -> None:
        request = exec_util.CommandRequest(
            argv=self.install_argv,
            cwd=project_dir,
            env=self._env,
            timeout_seconds=INSTALL_TIMEOUT_SECONDS,
        )
        try:
            exec_util.run_checked(request, runner=self._runner)
        except exec_util.CommandExecutionError as exc:
            raise ExternalCommandFailedError(
                str(exc),
                recovery_hint=f"Check that {self.name} is installed and the registry is reachable.",
            ) from exc


class NpmInstaller(_CommandInstaller):
    """Install with ``npm`` and seed ``package-lock.json``."""

    name: PackageManager = "npm"
    lockfile_name = NPM_LOCKFILE
    install_argv = ("npm", "install", "--no-audit", "--no-fund", "--loglevel", "error")

    def seed_lockfile(self, manifest: PackageManifest) -> str:
        root: dict[str, object] = {"name": manifest.name, "version": manifest.version}
        if manifest.dependencies:
            root["dependencies"] = dict(manifest.dependencies)
        payload = {
            "name": manifest.name,
            "version": manifest.version,
            "lockfileVersion": 3,
            "requires": True,
            "packages": {"": root},
        }
        return json.dumps(payload, indent=2) + "\n"


class YarnInstaller(_CommandInstaller):
    """Install with ``yarn`` and seed ``yarn.lock``."""

    name: PackageManager = "yarn"
    lockfile_name = YARN_LOCKFILE
    install_argv = ("yarn", "install", "--non-interactive", "--silent")

    def seed_lockfile(self, manifest: PackageManifest) -> str:
        del manifest
        return YARN_LOCKFILE_HEADER + "\n\n"


def installer_for(
    package_manager: PackageManager,
    *,
    runner: exec_util.CommandRunner | None = None,
    env: Mapping[str, str] | None = None,
) -> PackageInstaller:
    """Return the installer for a package manager name.

    Example:
        >>> installer_for("yarn").lockfile_name
        'yarn.lock'
        >>> installer_for("npm").lockfile_name
        'package-lock.json'
    """
    if package_manager == "yarn":
        return YarnInstaller(runner=runner, env=env)
    return NpmInstaller(runner=runner, env=env)
