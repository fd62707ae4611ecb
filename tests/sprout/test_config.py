import json
from pathlib import Path

import pytest

import sprout.config as config
from sprout.models import UserConfig
from sprout.services import ValidationFailedError


class TestLoadSettings:
    def test_defaults_to_npm_default_template_and_install(self, tmp_path: Path) -> None:
        settings = config.load_settings({}, tmp_path)

        assert settings.cwd == tmp_path
        assert settings.package_manager == "npm"
        assert settings.template is None
        assert settings.install is True
        assert settings.no_color is False

    @pytest.mark.parametrize(
        ("agent", "expected"),
        [
            ("yarn", "yarn"),
            ("yarn/1.22.19 npm/? node/v18.17.0 darwin arm64", "yarn"),
            ("npm/9.6.7 node/v18.17.0 darwin arm64 workspaces/false", "npm"),
            ("pnpm/8.6.0 npm/? node/v18.17.0", "npm"),
        ],
    )
    def test_user_agent_selects_package_manager(
        self, tmp_path: Path, agent: str, expected: str
    ) -> None:
        settings = config.load_settings({"npm_config_user_agent": agent}, tmp_path)

        assert settings.package_manager == expected

    def test_use_npm_overrides_yarn_user_agent(self, tmp_path: Path) -> None:
        settings = config.load_settings(
            {"npm_config_user_agent": "yarn"}, tmp_path, use_npm=True
        )

        assert settings.package_manager == "npm"

    def test_user_config_supplies_defaults(self, tmp_path: Path) -> None:
        settings = config.load_settings(
            {},
            tmp_path,
            user_config=UserConfig(template="typescript", package_manager="yarn"),
        )

        assert settings.package_manager == "yarn"
        assert settings.template == "typescript"

    def test_flags_override_user_config(self, tmp_path: Path) -> None:
        settings = config.load_settings(
            {},
            tmp_path,
            template="default",
            use_npm=True,
            user_config=UserConfig(template="typescript", package_manager="yarn"),
        )

        assert settings.package_manager == "npm"
        assert settings.template == "default"

    def test_environment_flags(self, tmp_path: Path) -> None:
        settings = config.load_settings(
            {"SPROUT_SKIP_INSTALL": "true", "SPROUT_LOG_LEVEL": "debug", "NO_COLOR": "1"},
            tmp_path,
        )

        assert settings.install is False
        assert settings.log_level == "debug"
        assert settings.no_color is True

    def test_skip_install_flag(self, tmp_path: Path) -> None:
        assert config.load_settings({}, tmp_path, skip_install=True).install is False


class TestLoadUserConfig:
    def test_missing_file_returns_none(self, tmp_path: Path) -> None:
        assert config.load_user_config(tmp_path / "config.json") is None

    def test_valid_file_is_parsed(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"package_manager": "Yarn", "extra": 1}), encoding="utf-8")

        loaded = config.load_user_config(path)

        assert loaded == UserConfig(package_manager="yarn")

    def test_invalid_package_manager_is_validation_failure(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"package_manager": "pnpm"}), encoding="utf-8")

        with pytest.raises(ValidationFailedError) as exc_info:
            config.load_user_config(path)

        assert "invalid user config" in str(exc_info.value)
        assert exc_info.value.recovery_hint == (
            "Supported keys: template, package_manager (npm|yarn)."
        )

    def test_malformed_json_is_validation_failure(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValidationFailedError):
            config.load_user_config(path)

    def test_undecodable_file_is_validation_failure(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_bytes(b'{"template": "caf\xe9"}')

        with pytest.raises(ValidationFailedError) as exc_info:
            config.load_user_config(path)

        assert "failed to read user config" in str(exc_info.value)
