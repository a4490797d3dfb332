"""Database requests and responses."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from .common import ApiArgs, CommonResponse


class CreateDatabaseArgs(ApiArgs):
    resource: ClassVar[str] = "database"
    action: ClassVar[str | None] = "create"

    database: str = Field(min_length=1)


class DropDatabaseArgs(ApiArgs):
    """Drop a database; every table in it must be dropped first."""

    http_method: ClassVar[str] = "DELETE"
    resource: ClassVar[str] = "database"

    database: str = Field(min_length=1)


class ListDatabaseArgs(ApiArgs):
    resource: ClassVar[str] = "database"
    action: ClassVar[str | None] = "list"
    has_body: ClassVar[bool] = False


class ListDatabaseResponse(CommonResponse):
    databases: list[str] = Field(default_factory=list)


__all__ = [
    "CreateDatabaseArgs",
    "DropDatabaseArgs",
    "ListDatabaseArgs",
    "ListDatabaseResponse",
]
