"""Build psql command line arguments for a migration run."""

from __future__ import annotations

import logging
from enum import StrEnum

from pgrate.config import DEFAULT_SMOKE_TEST_QUERY, DatabaseConfig
from pgrate.dsn import PostgreSQLDSN
from pgrate.migrations.ddl import MigrationFileError, read_ddl_files

logger = logging.getLogger(__name__)

SMOKE_TEST_QUERY = DEFAULT_SMOKE_TEST_QUERY


class Direction(StrEnum):
    """Migration direction; the value is the scripts subdirectory name."""

    UP = "up"
    DOWN = "down"


class MigrationListingError(RuntimeError):
    """Listing the scripts of one direction failed."""

    def __init__(self, direction: Direction, directory: str, cause: MigrationFileError) -> None:
        super().__init__(f"{direction.value} migration: {cause}")
        self.direction = direction
        self.directory = directory
        self.cause = cause


def psql_args(
    direction: Direction,
    database: DatabaseConfig,
    migration_scripts_dir: str,
    *,
    smoke_test_query: str = SMOKE_TEST_QUERY,
    stop_on_error: bool = False,
) -> tuple[str, ...]:
    """Return the psql arguments that execute every script of ``direction``.

    The arguments are:

    -w never prompt for a password, this runs as a script.

    -d the database connection as a connection URI.

    -c a query printing the database, user and server version before any
    script runs, so a bad connection fails fast.

    -f once per script, in file number order.

    With ``stop_on_error`` the ``ON_ERROR_STOP`` variable is set so psql
    stops at the first failing statement instead of running every file.
    """

    directory = f"{migration_scripts_dir}/{direction.value}"
    try:
        ddl_files = read_ddl_files(directory)
    except MigrationFileError as error:
        raise MigrationListingError(direction, directory, error) from error

    args = ["-w"]
    if stop_on_error:
        args.extend(["-v", "ON_ERROR_STOP=1"])
    args.extend(
        [
            "-d",
            PostgreSQLDSN.from_config(database).connection_uri(),
            "-c",
            smoke_test_query,
        ],
    )
    for ddl_file in ddl_files:
        args.extend(["-f", f"{directory}/{ddl_file.filename}"])

    logger.debug("Built psql arguments for %d %s scripts", len(ddl_files), direction.value)
    return tuple(args)
