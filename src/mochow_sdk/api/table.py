"""Table schema and table requests/responses."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from .common import ApiArgs, ApiModel, CommonResponse
from .enums import FieldType, PartitionType, TableState
from .index import IndexSchema


class Partition(ApiModel):
    """Hash partitioning of a table.

    Attributes:
        partition_type: Only HASH is supported
        partition_num: Number of tablets, range [1, 1000]; aim for 1M-10M rows each
    """

    partition_type: PartitionType = PartitionType.HASH
    partition_num: int = 1


class FieldSchema(ApiModel):
    """A scalar or vector column.

    Primary key and partition key fields cannot be BOOL, FLOAT, DOUBLE or
    FLOAT_VECTOR. Only UINT64 primary keys may auto-increment. ``dimension`` is
    required for FLOAT_VECTOR fields only.
    """

    field_name: str = ""
    field_type: FieldType
    primary_key: bool = False
    partition_key: bool = False
    auto_increment: bool = False
    not_null: bool = False
    dimension: int | None = None


class TableSchema(ApiModel):
    fields: list[FieldSchema] = Field(default_factory=list)
    indexes: list[IndexSchema] = Field(default_factory=list)


class CreateTableArgs(ApiArgs):
    """Create a table.

    Attributes:
        replication: Replicas per tablet including the primary, range [1, 10];
            at most the number of data nodes, 3 or more for high availability
        enable_dynamic_field: Accept columns not declared in the schema
    """

    resource: ClassVar[str] = "table"
    action: ClassVar[str | None] = "create"

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    description: str | None = None
    replication: int
    partition: Partition = Field(default_factory=Partition)
    enable_dynamic_field: bool | None = False
    table_schema: TableSchema = Field(default_factory=TableSchema, alias="schema")


class DropTableArgs(ApiArgs):
    http_method: ClassVar[str] = "DELETE"
    resource: ClassVar[str] = "table"

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)


class ListTableArgs(ApiArgs):
    resource: ClassVar[str] = "table"
    action: ClassVar[str | None] = "list"

    database: str = Field(min_length=1)


class ListTableResponse(CommonResponse):
    tables: list[str] = Field(default_factory=list)


class DescribeTableArgs(ApiArgs):
    resource: ClassVar[str] = "table"
    action: ClassVar[str | None] = "desc"

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)


class TableDescription(ApiModel):
    database: str
    table: str
    create_time: str = ""
    description: str = ""
    replication: int = 0
    partition: Partition = Field(default_factory=Partition)
    enable_dynamic_field: bool = False
    state: TableState = TableState.INVALID
    aliases: list[str] = Field(default_factory=list)
    table_schema: TableSchema = Field(default_factory=TableSchema, alias="schema")


class DescribeTableResponse(CommonResponse):
    table: TableDescription


class AddFieldArgs(ApiArgs):
    """Add columns to a table; only scalar fields can be added."""

    resource: ClassVar[str] = "table"
    action: ClassVar[str | None] = "addField"

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    table_schema: TableSchema = Field(default_factory=TableSchema, alias="schema")


class StatsTableArgs(ApiArgs):
    resource: ClassVar[str] = "table"
    action: ClassVar[str | None] = "stats"

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)


class StatsTableResponse(CommonResponse):
    row_count: int = 0
    memory_size_in_byte: int = 0
    disk_size_in_byte: int = 0


class AliasTableArgs(ApiArgs):
    resource: ClassVar[str] = "table"
    action: ClassVar[str | None] = "alias"

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    alias: str = Field(min_length=1)


class UnaliasTableArgs(ApiArgs):
    resource: ClassVar[str] = "table"
    action: ClassVar[str | None] = "unalias"

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    alias: str = Field(min_length=1)


__all__ = [
    "AddFieldArgs",
    "AliasTableArgs",
    "CreateTableArgs",
    "DescribeTableArgs",
    "DescribeTableResponse",
    "DropTableArgs",
    "FieldSchema",
    "ListTableArgs",
    "ListTableResponse",
    "Partition",
    "StatsTableArgs",
    "StatsTableResponse",
    "TableDescription",
    "TableSchema",
    "UnaliasTableArgs",
]
