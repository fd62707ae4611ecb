"""Command-line entry point for Sprout.

Example:
    $ sprout my-app
    $ sprout my-app --template typescript
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import NoReturn, Optional

import typer

from . import __version__, config, installers, paths
from . import log as sprout_log
from .models import ConflictReport
from .services import ScaffoldConflict, ScaffoldSuccess, ServiceFailure
from .services.project import InitializeProjectService, require_target

app = typer.Typer(
    name="sprout",
    help="Create a new React app in PROJECT_DIRECTORY.",
    add_completion=False,
)


def _validate_log_level(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized not in sprout_log.LOG_LEVEL_NAMES:
        choices = ", ".join(sprout_log.LOG_LEVEL_NAMES)
        raise typer.BadParameter(f"expected one of: {choices}")
    return normalized


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _fail(error: ServiceFailure) -> NoReturn:
    sprout_log.error(f"error: {error.message}")
    if error.recovery_hint:
        sprout_log.error(f"hint: {error.recovery_hint}")
    raise typer.Exit(code=1)


def _report_conflict(report: ConflictReport) -> NoReturn:
    style = "yellow"
    sprout_log.echo(
        f"The directory {report.directory_name} contains files that could conflict:",
        style=style,
    )
    sprout_log.echo("")
    for name in report.conflicting_files:
        sprout_log.echo(f"  {name}", style=style)
    sprout_log.echo("")
    sprout_log.echo(
        "Either try using a new directory name, or remove the files listed above.",
        style=style,
    )
    raise typer.Exit(code=1)


def _report_success(result: ScaffoldSuccess, raw_target: str, installed: bool) -> None:
    manager = result.package_manager
    run_prefix = "yarn" if manager == "yarn" else "npm run"
    start = "yarn start" if manager == "yarn" else "npm start"
    sprout_log.success(f"Success! Created {result.project_dir.name} at {result.project_dir}")
    sprout_log.info("Inside that directory, you can run several commands:")
    sprout_log.info(f"  {start}")
    sprout_log.info("    Starts the development server.")
    sprout_log.info(f"  {run_prefix} build")
    sprout_log.info("    Bundles the app into static files for production.")
    sprout_log.info(f"  {'yarn' if manager == 'yarn' else 'npm'} test")
    sprout_log.info("    Starts the test runner.")
    sprout_log.info("We suggest that you begin by typing:")
    if raw_target.strip() not in {"", "."}:
        sprout_log.info(f"  cd {raw_target.strip()}")
    if not installed:
        sprout_log.info(f"  {manager} install")
    sprout_log.info(f"  {start}")
    sprout_log.info("Happy hacking!")


@app.command()
def create(
    project_directory: Optional[str] = typer.Argument(
        None, metavar="PROJECT_DIRECTORY", help="Directory to create, or . for the current one."
    ),
    template: Optional[str] = typer.Option(
        None, "--template", help="Template to use (default or typescript)."
    ),
    use_npm: bool = typer.Option(
        False, "--use-npm", help="Use npm even when invoked through yarn."
    ),
    skip_install: bool = typer.Option(
        False, "--skip-install", help="Write files and lockfile without installing packages."
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        callback=_validate_log_level,
        help="Log level: trace, debug, info, success, warning, error.",
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print the version and exit.",
    ),
) -> None:
    """Create a new React app in PROJECT_DIRECTORY."""
    del version
    try:
        require_target(project_directory)
    except ServiceFailure as exc:
        _fail(exc)
    env = dict(os.environ)
    try:
        settings = config.load_settings(
            env,
            Path.cwd(),
            template=template,
            use_npm=use_npm,
            skip_install=skip_install,
            log_level=log_level,
            no_color=no_color,
            user_config=config.load_user_config(paths.user_config_path()),
        )
    except ServiceFailure as exc:
        _fail(exc)
    if settings.log_level:
        sprout_log.set_level(settings.log_level)
    if settings.no_color:
        sprout_log.set_no_color(True)
    sprout_log.debug(
        f"package manager: {settings.package_manager}, template: {settings.template or 'default'}"
    )

    try:
        result = InitializeProjectService.run_default(
            target=project_directory,
            cwd=settings.cwd,
            package_manager=settings.package_manager,
            template=settings.template,
            install=settings.install,
            installer_factory=lambda manager: installers.installer_for(manager, env=env),
        )
    except ServiceFailure as exc:
        _fail(exc)

    if isinstance(result, ScaffoldConflict):
        _report_conflict(result.report)
    _report_success(result, project_directory or "", settings.install)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
