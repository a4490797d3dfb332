"""Request, response and schema models of the Mochow HTTP API."""

from .common import ApiArgs, ApiModel, CommonResponse
from .database import CreateDatabaseArgs, DropDatabaseArgs, ListDatabaseArgs, ListDatabaseResponse
from .enums import (
    AutoBuildPolicyType,
    FieldType,
    IndexState,
    IndexType,
    MetricType,
    PartitionType,
    ReadConsistency,
    ServerErrorCode,
    TableState,
)
from .index import (
    AutoBuildPolicy,
    CreateIndexArgs,
    DeleteIndexArgs,
    DescribeIndexArgs,
    DescribeIndexResponse,
    HNSWIndexParam,
    HNSWPQIndexParam,
    IndexSchema,
    ModifyIndexArgs,
    PUCKIndexParam,
    RebuildIndexArgs,
    VectorIndexParams,
)
from .row import (
    AnnsSearchParams,
    BatchAnnsSearchParams,
    BatchRowResult,
    BatchSearchRowsArgs,
    BatchSearchRowsResponse,
    DeleteRowArgs,
    FLATSearchParams,
    HNSWPQSearchParams,
    HNSWSearchParams,
    InsertRowArgs,
    InsertRowsResponse,
    PUCKSearchParams,
    QueryRowArgs,
    QueryRowResponse,
    RowResult,
    SearchRowsArgs,
    SearchRowsResponse,
    SelectRowsArgs,
    SelectRowsResponse,
    UpdateRowArgs,
    UpsertRowArgs,
    UpsertRowsResponse,
    VectorSearchParams,
)
from .table import (
    AddFieldArgs,
    AliasTableArgs,
    CreateTableArgs,
    DescribeTableArgs,
    DescribeTableResponse,
    DropTableArgs,
    FieldSchema,
    ListTableArgs,
    ListTableResponse,
    Partition,
    StatsTableArgs,
    StatsTableResponse,
    TableDescription,
    TableSchema,
    UnaliasTableArgs,
)

__all__ = [
    "AddFieldArgs",
    "AliasTableArgs",
    "AnnsSearchParams",
    "ApiArgs",
    "ApiModel",
    "AutoBuildPolicy",
    "AutoBuildPolicyType",
    "BatchAnnsSearchParams",
    "BatchRowResult",
    "BatchSearchRowsArgs",
    "BatchSearchRowsResponse",
    "CommonResponse",
    "CreateDatabaseArgs",
    "CreateIndexArgs",
    "CreateTableArgs",
    "DeleteIndexArgs",
    "DeleteRowArgs",
    "DescribeIndexArgs",
    "DescribeIndexResponse",
    "DescribeTableArgs",
    "DescribeTableResponse",
    "DropDatabaseArgs",
    "DropTableArgs",
    "FLATSearchParams",
    "FieldSchema",
    "FieldType",
    "HNSWIndexParam",
    "HNSWPQIndexParam",
    "HNSWPQSearchParams",
    "HNSWSearchParams",
    "IndexSchema",
    "IndexState",
    "IndexType",
    "InsertRowArgs",
    "InsertRowsResponse",
    "ListDatabaseArgs",
    "ListDatabaseResponse",
    "ListTableArgs",
    "ListTableResponse",
    "MetricType",
    "ModifyIndexArgs",
    "PUCKIndexParam",
    "PUCKSearchParams",
    "Partition",
    "PartitionType",
    "QueryRowArgs",
    "QueryRowResponse",
    "ReadConsistency",
    "RebuildIndexArgs",
    "RowResult",
    "SearchRowsArgs",
    "SearchRowsResponse",
    "SelectRowsArgs",
    "SelectRowsResponse",
    "ServerErrorCode",
    "StatsTableArgs",
    "StatsTableResponse",
    "TableDescription",
    "TableSchema",
    "TableState",
    "UnaliasTableArgs",
    "UpdateRowArgs",
    "UpsertRowArgs",
    "UpsertRowsResponse",
    "VectorIndexParams",
    "VectorSearchParams",
]
