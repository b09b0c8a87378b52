"""PostgreSQL data source name encodings."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote, urlencode

from pgrate.config import DatabaseConfig

URI_SCHEME_DESIGNATOR = "postgresql"

# Characters left unescaped per URI component, on top of ALPHA / DIGIT / "-._~".
_USERINFO_SAFE = "$&+,;="
_HOST_SAFE = "!$&'()*+,;=:[]<>\""
_PATH_SAFE = "/$&+,:;=@"


@dataclass(frozen=True, slots=True)
class PostgreSQLDSN:
    """PostgreSQL datasource name."""

    host: str
    port: int
    dbname: str
    user: str
    password: str = ""
    search_path: str = ""

    @classmethod
    def from_config(cls, database: DatabaseConfig) -> PostgreSQLDSN:
        return cls(
            host=database.host,
            port=database.port,
            dbname=database.name,
            user=database.user,
            password=database.password,
            search_path=database.search_path,
        )

    def connection_uri(self) -> str:
        """Return the connection URI form of the DSN.

        The general form is ``postgresql://[userspec@][hostspec][/dbname][?paramspec]``.
        The password is never placed in the URI; psql picks it up from
        ``PGPASSWORD`` or ``~/.pgpass`` instead. A non-empty search path is
        passed through the ``options`` parameter as ``-csearch_path=<value>``.
        """

        host = self.host
        if self.port != 0:
            host += f":{self.port}"

        uri = (
            f"{URI_SCHEME_DESIGNATOR}://"
            f"{quote(self.user, safe=_USERINFO_SAFE)}@"
            f"{quote(host, safe=_HOST_SAFE)}"
        )
        if self.dbname:
            uri += quote("/" + self.dbname, safe=_PATH_SAFE)
        if self.search_path:
            uri += "?" + urlencode({"options": f"-csearch_path={self.search_path}"})
        return uri

    def keyword_value_connection_string(self) -> str:
        """Return the keyword/value connection string form of the DSN."""

        parts = [
            f"host={self.host}",
            f"port={self.port}",
            f"dbname={self.dbname}",
            f"user={self.user}",
        ]
        # An empty password parameter makes libpq fail, so leave it out entirely.
        if self.password:
            parts.append(f"password={self.password}")
        parts.append("sslmode=disable")
        if self.search_path:
            parts.append(f"search_path={self.search_path}")
        return " ".join(parts)
