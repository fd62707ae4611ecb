"""End-to-end runs of ``python -m sprout`` as a subprocess."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

GENERATED_FILES = [".gitignore", "package.json", "src", "package-lock.json"]
PROJECT_NAME = "test-app"


def run(args: list[str], cwd: Path, **env: str) -> subprocess.CompletedProcess[str]:
    run_env = {
        key: value
        for key, value in os.environ.items()
        if key not in {"npm_config_user_agent", "SPROUT_LOG_LEVEL"}
    }
    run_env["PYTHONPATH"] = os.pathsep.join(
        [str(SRC), *filter(None, [os.environ.get("PYTHONPATH")])]
    )
    run_env["SPROUT_SKIP_INSTALL"] = "1"
    run_env["NO_COLOR"] = "1"
    run_env["XDG_CONFIG_HOME"] = str(cwd.parent / "xdg-config")
    run_env.update(env)
    return subprocess.run(
        [sys.executable, "-m", "sprout", *args],
        cwd=cwd,
        env=run_env,
        capture_output=True,
        text=True,
        check=False,
        timeout=120,
    )


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    work = tmp_path / "work"
    work.mkdir()
    return work


def _assert_generated(project_dir: Path, files: list[str]) -> None:
    for name in files:
        assert (project_dir / name).exists(), name


def test_asks_to_supply_an_argument_if_none_supplied(workdir: Path) -> None:
    result = run([], workdir)

    assert result.returncode == 1
    assert "Please specify the project directory" in result.stderr


def test_creates_a_project_on_supplying_a_name(workdir: Path) -> None:
    result = run([PROJECT_NAME], workdir)

    assert result.returncode == 0, result.stderr
    _assert_generated(workdir / PROJECT_NAME, GENERATED_FILES)


def test_warns_about_conflicting_files_in_path(workdir: Path) -> None:
    project_dir = workdir / PROJECT_NAME
    project_dir.mkdir()
    (project_dir / "package.json").write_text('{ "foo": "bar" }', encoding="utf-8")

    result = run([PROJECT_NAME], workdir)

    assert result.returncode == 1
    assert f"The directory {PROJECT_NAME} contains files that could conflict" in result.stdout


def test_creates_a_project_in_the_current_directory(workdir: Path) -> None:
    project_dir = workdir / PROJECT_NAME
    project_dir.mkdir()

    result = run(["."], project_dir)

    assert result.returncode == 0, result.stderr
    _assert_generated(project_dir, GENERATED_FILES)


def test_uses_yarn_as_the_package_manager(workdir: Path) -> None:
    result = run([PROJECT_NAME], workdir, npm_config_user_agent="yarn")

    assert result.returncode == 0, result.stderr
    files = [name for name in GENERATED_FILES if name != "package-lock.json"] + ["yarn.lock"]
    _assert_generated(workdir / PROJECT_NAME, files)
    assert not (workdir / PROJECT_NAME / "package-lock.json").exists()


def test_creates_a_project_based_on_the_typescript_template(workdir: Path) -> None:
    result = run([PROJECT_NAME, "--template", "typescript"], workdir)

    assert result.returncode == 0, result.stderr
    _assert_generated(workdir / PROJECT_NAME, [*GENERATED_FILES, "tsconfig.json"])
