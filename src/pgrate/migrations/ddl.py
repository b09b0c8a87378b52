"""Discovery and ordering of numbered DDL migration files.

Migration files follow the ``<number>-<description>.<ext>`` naming convention,
for example ``001-user.sql``. Everything before the first dash is the ordering
key used to sequence execution.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

FILE_NUMBER_SEPARATOR = "-"

_FILE_NUMBER_PATTERN = re.compile(r"[+-]?[0-9]+")


class MigrationFileError(RuntimeError):
    """Base error for migration file discovery."""


class MalformedFilename(MigrationFileError):
    """Filename lacks the ``<number>-`` prefix."""

    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(f"Malformed migration filename {filename!r}: {reason}")
        self.filename = filename


class DirectoryReadError(MigrationFileError):
    """Migration directory cannot be opened or listed."""

    def __init__(self, directory: str | Path, reason: str) -> None:
        super().__init__(f"Cannot read migration directory {str(directory)!r}: {reason}")
        self.directory = str(directory)


class EmptyDirectory(MigrationFileError):
    """No migration files were found in a directory."""

    def __init__(self, directory: str | Path) -> None:
        super().__init__(f"There are no DDL files to process in {directory}")
        self.directory = str(directory)


@dataclass(frozen=True, slots=True)
class DDLFile:
    """One migration file and its ordering key."""

    filename: str
    file_number: int

    def __str__(self) -> str:
        return f"{self.filename}: {self.file_number}"


def parse_ddl_filename(filename: str) -> DDLFile:
    """Build a `DDLFile` from a name such as ``001-user.sql``.

    Raises `MalformedFilename` if there is no dash or the text before the
    first dash is not a base-10 integer.
    """

    prefix, separator, _ = filename.partition(FILE_NUMBER_SEPARATOR)
    if not separator:
        raise MalformedFilename(filename, f"missing {FILE_NUMBER_SEPARATOR!r} separator")
    if _FILE_NUMBER_PATTERN.fullmatch(prefix) is None:
        raise MalformedFilename(filename, f"prefix {prefix!r} is not an integer")
    return DDLFile(filename=filename, file_number=int(prefix))


def read_ddl_files(directory: str | Path) -> list[DDLFile]:
    """Return migration files of ``directory`` sorted by file number.

    Subdirectories are skipped. Entries are visited in name order and the sort
    is stable, so files sharing a number keep their name order. The first
    malformed filename aborts the listing.
    """

    try:
        with os.scandir(directory) as iterator:
            entries = sorted(iterator, key=lambda entry: entry.name)
    except OSError as error:
        raise DirectoryReadError(directory, error.strerror or str(error)) from error

    ddl_files: list[DDLFile] = []
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            continue
        ddl_files.append(parse_ddl_filename(entry.name))

    if not ddl_files:
        raise EmptyDirectory(directory)

    ddl_files = sorted(ddl_files, key=lambda ddl_file: ddl_file.file_number)
    logger.debug(
        "Found %d DDL files in %s: %s",
        len(ddl_files),
        directory,
        ", ".join(str(ddl_file) for ddl_file in ddl_files),
    )
    return ddl_files
