"""Controllers for pgrate CLI commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from pgrate.config import ConfigFile, Settings, load_config_file
from pgrate.cue import cue_paths, gen_config_steps
from pgrate.migrations import Direction, psql_args
from pgrate.runner import render_command, run_command

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PsqlArgsCommand:
    """CLI inputs for printing psql arguments."""

    direction: Direction
    profile: str
    project_root: Path | None


@dataclass(slots=True)
class MigrateCommand:
    """CLI inputs for the up and down commands."""

    direction: Direction
    profile: str
    project_root: Path | None
    dry_run: bool


@dataclass(slots=True)
class CueGenConfigCommand:
    """CLI inputs for config generation through cue."""

    profile: str
    project_root: Path | None
    dry_run: bool


class MigrationCliController:
    """Coordinates migration and config command execution."""

    def psql_args(self, command: PsqlArgsCommand) -> tuple[str, ...]:
        settings = Settings.from_env(project_root=command.project_root)
        config = _load_profile(settings, command.profile)
        return _build_psql_args(settings, config, command.direction)

    def migrate(self, command: MigrateCommand) -> list[str]:
        settings = Settings.from_env(project_root=command.project_root)
        config = _load_profile(settings, command.profile)
        args = _build_psql_args(settings, config, command.direction)
        script_count = sum(1 for arg in args if arg == "-f")

        if command.dry_run:
            return [render_command(settings.psql_executable, args)]

        extra_env: dict[str, str] = {}
        if config.database.password:
            extra_env["PGPASSWORD"] = config.database.password
        run_command(settings.psql_executable, args, extra_env=extra_env)
        return [
            "Migration finished: "
            f"direction={command.direction.value} profile={command.profile} "
            f"scripts={script_count}",
        ]

    def cue_gen_config(self, command: CueGenConfigCommand) -> list[str]:
        settings = Settings.from_env(project_root=command.project_root)
        paths = cue_paths(command.profile, settings.project_root)
        steps = gen_config_steps(paths)

        if command.dry_run:
            return [render_command(settings.cue_executable, args) for args in steps]

        for args in steps:
            run_command(settings.cue_executable, args)
        return [f"Config generated: profile={command.profile} output={paths.output}"]


def _load_profile(settings: Settings, profile: str) -> ConfigFile:
    path = settings.profile_config_path(profile)
    logger.debug("Loading profile %s from %s", profile, path)
    config = load_config_file(path)
    config.validate()
    return config


def _build_psql_args(
    settings: Settings,
    config: ConfigFile,
    direction: Direction,
) -> tuple[str, ...]:
    return psql_args(
        direction,
        config.database,
        _scripts_dir(settings, config),
        smoke_test_query=settings.smoke_test_query,
        stop_on_error=settings.stop_on_error,
    )


def _scripts_dir(settings: Settings, config: ConfigFile) -> str:
    # Relative script dirs are relative to the project root; keep them verbatim for the default root.
    scripts_dir = config.migration_scripts_dir
    if Path(scripts_dir).is_absolute() or settings.project_root == Path("."):
        return scripts_dir
    return (settings.project_root / scripts_dir).as_posix()
