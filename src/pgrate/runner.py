"""Run external binaries (psql, cue) with a prepared argument list."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from collections.abc import Mapping, Sequence

logger = logging.getLogger(__name__)


class CommandRunError(RuntimeError):
    """External command could not be run successfully."""


class CommandNotFoundError(CommandRunError):
    """Executable is not on PATH."""

    def __init__(self, executable: str) -> None:
        super().__init__(f"Executable not found in PATH: {executable}")
        self.executable = executable


class CommandFailedError(CommandRunError):
    """External command exited with a non-zero status."""

    def __init__(self, executable: str, exit_code: int) -> None:
        super().__init__(f"{executable} exited with code {exit_code}")
        self.executable = executable
        self.exit_code = exit_code


def render_command(executable: str, args: Sequence[str]) -> str:
    """Return a shell-quoted, copy-pasteable form of the command."""

    return shlex.join([executable, *args])


def run_command(
    executable: str,
    args: Sequence[str],
    *,
    extra_env: Mapping[str, str] | None = None,
) -> int:
    """Run ``executable`` with ``args``, inheriting stdin/stdout/stderr.

    ``extra_env`` is layered over the current environment. Output is left to
    the terminal. Returns the exit code on success.
    """

    resolved_executable = shutil.which(executable)
    if resolved_executable is None:
        raise CommandNotFoundError(executable)

    env = os.environ.copy()
    if extra_env:
        env.update(extra_env)

    if logger.isEnabledFor(logging.INFO):
        logger.info("Running %s", render_command(executable, args))
    try:
        completed = subprocess.run(  # noqa: S603
            [resolved_executable, *args],
            env=env,
            check=False,
        )
    except OSError as error:
        raise CommandRunError(f"{executable} failed to start: {error}") from error

    if completed.returncode != 0:
        logger.warning("%s exited with code %d", executable, completed.returncode)
        raise CommandFailedError(executable, completed.returncode)
    return completed.returncode
