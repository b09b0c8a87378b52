"""CUE config generation: input/output paths and cue command arguments."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pgrate.config import profile_config_path

SCHEMA_FILENAME = "schema.cue"


@dataclass(frozen=True, slots=True)
class CuePaths:
    """Files read and written by cue for one profile."""

    inputs: tuple[Path, ...]
    output: Path


def cue_paths(profile: str, root: Path = Path(".")) -> CuePaths:
    """Return the schema and profile ``.cue`` inputs and the ``.json`` output.

    ``config/cue/<profile>.cue`` is exported to ``config/<profile>.json``,
    which the up and down migrations read.
    """

    cue_dir = root / "config" / "cue"
    output = profile_config_path(profile, root)
    return CuePaths(
        inputs=(cue_dir / SCHEMA_FILENAME, cue_dir / f"{profile}.cue"),
        output=output,
    )


def vet_args(paths: CuePaths) -> tuple[str, ...]:
    return ("vet", *(str(path) for path in paths.inputs))


def fmt_args(paths: CuePaths) -> tuple[str, ...]:
    return ("fmt", *(str(path) for path in paths.inputs))


def export_args(paths: CuePaths) -> tuple[str, ...]:
    return (
        "export",
        *(str(path) for path in paths.inputs),
        "--force",
        "--out",
        "json",
        "--outfile",
        str(paths.output),
    )


def gen_config_steps(paths: CuePaths) -> list[tuple[str, ...]]:
    """Return vet, fmt and export arguments in the order they must run."""

    return [vet_args(paths), fmt_args(paths), export_args(paths)]
