"""CLI entrypoint for pgrate."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import rich_click as click

from pgrate import __version__
from pgrate.config import ConfigLoadError
from pgrate.controllers import (
    CueGenConfigCommand,
    MigrateCommand,
    MigrationCliController,
    PsqlArgsCommand,
)
from pgrate.migrations import Direction, MigrationListingError
from pgrate.runner import CommandRunError

click.rich_click.USE_MARKDOWN = True
MIGRATION_CONTROLLER = MigrationCliController()

_project_root_option = click.option(
    "--project-root",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help=(
        "Project root holding config/ and the migration scripts. "
        "Defaults to PGRATE_PROJECT_ROOT or the current directory."
    ),
)
_dry_run_option = click.option(
    "--dry-run/--no-dry-run",
    default=False,
    show_default=True,
    help="Print the command instead of running it.",
)


@click.group()
@click.version_option(version=__version__, prog_name="pgrate")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default="warning",
    show_default=True,
    help="Logging verbosity.",
)
def pgrate(log_level: str) -> None:
    """Apply numbered SQL migrations with psql and generate config profiles with cue."""

    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@pgrate.command("up")
@click.argument("profile")
@_project_root_option
@_dry_run_option
def up(profile: str, project_root: Path | None, dry_run: bool) -> None:
    """Execute DDL scripts found in the up directory, example: `pgrate up default`.

    A `config/<profile>.json` file is expected under the project root.
    """

    _migrate(Direction.UP, profile, project_root, dry_run)


@pgrate.command("down")
@click.argument("profile")
@_project_root_option
@_dry_run_option
def down(profile: str, project_root: Path | None, dry_run: bool) -> None:
    """Execute drop statement DDL scripts found in the down directory.

    Example: `pgrate down default`.
    """

    _migrate(Direction.DOWN, profile, project_root, dry_run)


@pgrate.command("psql-args")
@click.argument(
    "direction",
    type=click.Choice([direction.value for direction in Direction], case_sensitive=False),
)
@click.argument("profile")
@_project_root_option
def print_psql_args(direction: str, profile: str, project_root: Path | None) -> None:
    """Print psql arguments for a direction, one per line."""

    with _cli_errors():
        args = MIGRATION_CONTROLLER.psql_args(
            PsqlArgsCommand(
                direction=Direction(direction.lower()),
                profile=profile,
                project_root=project_root,
            ),
        )
    _emit_lines(list(args))


@pgrate.command("cue-gen-config")
@click.argument("profile")
@_project_root_option
@_dry_run_option
def cue_gen_config(profile: str, project_root: Path | None, dry_run: bool) -> None:
    """Generate `config/<profile>.json` from `config/cue/<profile>.cue`.

    The inputs are run through `cue vet` against `config/cue/schema.cue`,
    formatted with `cue fmt` and exported as JSON.
    """

    with _cli_errors():
        lines = MIGRATION_CONTROLLER.cue_gen_config(
            CueGenConfigCommand(profile=profile, project_root=project_root, dry_run=dry_run),
        )
    _emit_lines(lines)


def _migrate(direction: Direction, profile: str, project_root: Path | None, dry_run: bool) -> None:
    with _cli_errors():
        lines = MIGRATION_CONTROLLER.migrate(
            MigrateCommand(
                direction=direction,
                profile=profile,
                project_root=project_root,
                dry_run=dry_run,
            ),
        )
    _emit_lines(lines)


@contextmanager
def _cli_errors() -> Iterator[None]:
    try:
        yield
    except (ConfigLoadError, MigrationListingError, CommandRunError) as error:
        raise click.ClickException(str(error)) from error
    except ValueError as error:
        raise click.ClickException(f"Invalid configuration: {error}") from error


def _emit_lines(lines: list[str]) -> None:
    for line in lines:
        click.echo(line)


if __name__ == "__main__":  # pragma: no cover
    pgrate()
