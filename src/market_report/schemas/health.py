"""Health check and database explorer schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DatabaseHealthResponse(BaseModel):
    """Database connectivity result."""

    ok: bool
    error: str | None = None


class SchemaHealthResponse(BaseModel):
    """Presence of the tables the report depends on."""

    tables: dict[str, bool]
    found: int
    expected: int


class ColumnInfo(BaseModel):
    name: str
    type: str


class TableColumnsResponse(BaseModel):
    """Columns of each explored table that exists."""

    tables: dict[str, list[ColumnInfo]]


class DatabaseInfoResponse(BaseModel):
    """Identity of the live database connection."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    database_name: str | None = None
    login_name: str | None = None
    dialect: str
    server_version: str | None = None


class ConnectionConfigResponse(BaseModel):
    """Configured connection with the password redacted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    driver: str
    host: str | None = None
    port: int | None = None
    database: str | None = None
    user: str | None = None
    has_password: bool
