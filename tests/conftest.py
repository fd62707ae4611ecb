# ruff: noqa: E402

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import sprout.log as sprout_log
import sprout.paths as paths


@pytest.fixture(autouse=True)
def _isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> Iterator[None]:
    config_dir = tmp_path_factory.mktemp("sprout-config")
    monkeypatch.setattr(paths, "user_config_path", lambda: config_dir / "config.json")
    for name in (
        "npm_config_user_agent",
        "SPROUT_LOG_LEVEL",
        "SPROUT_SKIP_INSTALL",
        "SPROUT_NO_COLOR",
        "NO_COLOR",
    ):
        monkeypatch.delenv(name, raising=False)
    sprout_log.reset()
    yield
    sprout_log.reset()

