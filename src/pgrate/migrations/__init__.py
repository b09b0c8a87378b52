"""Migration file discovery and psql argument assembly."""

from pgrate.migrations.ddl import (
    DDLFile,
    DirectoryReadError,
    EmptyDirectory,
    MalformedFilename,
    MigrationFileError,
    parse_ddl_filename,
    read_ddl_files,
)
from pgrate.migrations.psql import (
    SMOKE_TEST_QUERY,
    Direction,
    MigrationListingError,
    psql_args,
)

__all__ = [
    "SMOKE_TEST_QUERY",
    "DDLFile",
    "Direction",
    "DirectoryReadError",
    "EmptyDirectory",
    "MalformedFilename",
    "MigrationFileError",
    "MigrationListingError",
    "parse_ddl_filename",
    "psql_args",
    "read_ddl_files",
]
