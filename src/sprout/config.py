"""Settings resolution for Sprout runs.

Settings are built from an explicit environment mapping and working
directory, plus an optional user defaults file. Nothing here reads
``os.environ`` or the process working directory directly.

Example:
    >>> from pathlib import Path
    >>> settings = load_settings({"npm_config_user_agent": "yarn/1.22.19"}, Path("/work"))
    >>> settings.package_manager
    'yarn'
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from pydantic import ValidationError

from .models import PACKAGE_MANAGER_VALUES, PackageManager, ScaffoldSettings, UserConfig
from .services.errors import ValidationFailedError

USER_AGENT_ENV = "npm_config_user_agent"
LOG_LEVEL_ENV = "SPROUT_LOG_LEVEL"
SKIP_INSTALL_ENV = "SPROUT_SKIP_INSTALL"
NO_COLOR_ENVS = ("NO_COLOR", "SPROUT_NO_COLOR")

_TRUE_VALUES = {"1", "true", "yes", "on"}


def load_json(path: Path) -> dict | None:
    """Load a JSON file if it exists.

    Args:
        path: Path to the JSON file.

    Returns:
        Parsed payload as a dict, or ``None`` if the file does not exist.

    Example:
        >>> load_json(Path("missing.json")) is None
        True
    """
    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def load_user_config(path: Path) -> UserConfig | None:
    """Load and validate the optional user defaults file."""
    try:
        payload = load_json(path)
    except (OSError, ValueError) as exc:
        raise ValidationFailedError(
            f"failed to read user config {path}: {exc}",
            recovery_hint="Fix or remove the file.",
        ) from exc
    if payload is None:
        return None
    try:
        return UserConfig.model_validate(payload)
    except ValidationError as exc:
        raise ValidationFailedError(
            f"invalid user config {path}: {exc}",
            recovery_hint=(
                "Supported keys: template, "
                f"package_manager ({'|'.join(PACKAGE_MANAGER_VALUES)})."
            ),
        ) from exc


def is_truthy(value: str | None) -> bool:
    """Interpret an environment flag.

    Example:
        >>> is_truthy(" Yes "), is_truthy("0"), is_truthy(None)
        (True, False, False)
    """
    if value is None:
        return False
    return value.strip().lower() in _TRUE_VALUES


def detect_package_manager(env: Mapping[str, str]) -> PackageManager | None:
    """Return ``"yarn"`` when the user agent names yarn, otherwise ``None``.

    Example:
        >>> detect_package_manager({"npm_config_user_agent": "npm/9.6.7 node/v18.17.0"}) is None
        True
        >>> detect_package_manager({"npm_config_user_agent": "yarn"})
        'yarn'
    """
    agent = env.get(USER_AGENT_ENV, "")
    if "yarn" in agent.lower():
        return "yarn"
    return None


def load_settings(
    env: Mapping[str, str],
    cwd: Path,
    *,
    template: str | None = None,
    use_npm: bool = False,
    skip_install: bool = False,
    log_level: str | None = None,
    no_color: bool = False,
    user_config: UserConfig | None = None,
) -> ScaffoldSettings:
    """Resolve settings for a run.

    Precedence: CLI flags, then environment, then the user config file,
    then built-in defaults (npm, default template, install enabled).

    Args:
        env: Environment mapping (``os.environ`` in the CLI).
        cwd: Working directory used to resolve the project path.
        template: ``--template`` value.
        use_npm: ``--use-npm`` flag; forces npm regardless of the user agent.
        skip_install: ``--skip-install`` flag.
        log_level: ``--log-level`` value.
        no_color: ``--no-color`` flag.
        user_config: Optional user defaults.

    Returns:
        Frozen ``ScaffoldSettings``.
    """
    defaults = user_config or UserConfig()
    package_manager: PackageManager
    if use_npm:
        package_manager = "npm"
    else:
        package_manager = detect_package_manager(env) or defaults.package_manager or "npm"
    return ScaffoldSettings(
        cwd=cwd,
        package_manager=package_manager,
        template=template or defaults.template,
        install=not (skip_install or is_truthy(env.get(SKIP_INSTALL_ENV))),
        log_level=log_level or env.get(LOG_LEVEL_ENV),
        no_color=no_color or any(env.get(name) for name in NO_COLOR_ENVS),
    )
