"""Row CRUD and vector search requests/responses.

Row payloads are generic: responses are parameterized by the row type, e.g.
``QueryRowResponse[Document]`` decodes ``row`` into a ``Document`` model, while
the unparameterized form keeps rows as plain dictionaries.
"""

from __future__ import annotations

from typing import Any, ClassVar, Generic, TypeVar

from pydantic import ConfigDict, Field

from .common import ApiArgs, ApiModel, CommonResponse
from .enums import ReadConsistency

RowT = TypeVar("RowT")


class InsertRowArgs(ApiArgs):
    """Insert rows; at most 1000 rows per request, enforced by the service."""

    resource: ClassVar[str] = "row"
    action: ClassVar[str | None] = "insert"

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    rows: list[Any]


class InsertRowsResponse(CommonResponse):
    affected_count: int = 0


class UpsertRowArgs(ApiArgs):
    """Insert rows, replacing those whose primary key already exists."""

    resource: ClassVar[str] = "row"
    action: ClassVar[str | None] = "upsert"

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    rows: list[Any]


class UpsertRowsResponse(CommonResponse):
    affected_count: int = 0


class UpdateRowArgs(ApiArgs):
    """Update the non-key fields of the row identified by ``primary_key``."""

    resource: ClassVar[str] = "row"
    action: ClassVar[str | None] = "update"

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    primary_key: dict[str, Any]
    partition_key: dict[str, Any] | None = None
    update: dict[str, Any]


class DeleteRowArgs(ApiArgs):
    """Delete rows by primary key or by a scalar ``filter`` expression."""

    resource: ClassVar[str] = "row"
    action: ClassVar[str | None] = "delete"

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    primary_key: dict[str, Any] | None = None
    partition_key: dict[str, Any] | None = None
    filter: str | None = None


class QueryRowArgs(ApiArgs):
    """Point lookup by primary key.

    Attributes:
        projections: Fields to return; all scalar fields when omitted
        retrieve_vector: Also return vector fields
        read_consistency: EVENTUAL (service default) or STRONG
    """

    resource: ClassVar[str] = "row"
    action: ClassVar[str | None] = "query"

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    primary_key: dict[str, Any]
    partition_key: dict[str, Any] | None = None
    projections: list[str] | None = None
    retrieve_vector: bool | None = None
    read_consistency: ReadConsistency | None = None


class QueryRowResponse(CommonResponse, Generic[RowT]):
    row: RowT


class _SearchParams(ApiModel):
    model_config = ConfigDict(extra="forbid")

    limit: int = 50
    distance_far: float | None = None
    distance_near: float | None = None


class FLATSearchParams(_SearchParams):
    pass


class HNSWSearchParams(_SearchParams):
    ef: int
    pruning: bool = False


class HNSWPQSearchParams(_SearchParams):
    ef: int


class PUCKSearchParams(_SearchParams):
    search_coarse_count: int


VectorSearchParams = PUCKSearchParams | HNSWPQSearchParams | HNSWSearchParams | FLATSearchParams


class AnnsSearchParams(ApiModel):
    """Approximate nearest-neighbour search over one vector field.

    Attributes:
        vector_field: Vector field to search
        vector_floats: Query vector
        params: Search parameters matching the field's index type
        filter: Optional scalar filter expression
    """

    vector_field: str
    vector_floats: list[float]
    params: VectorSearchParams
    filter: str | None = None


class SearchRowsArgs(ApiArgs):
    resource: ClassVar[str] = "row"
    action: ClassVar[str | None] = "search"

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    anns: AnnsSearchParams
    partition_key: dict[str, Any] | None = None
    projections: list[str] | None = None
    retrieve_vector: bool | None = None
    read_consistency: ReadConsistency | None = None


class RowResult(ApiModel, Generic[RowT]):
    row: RowT
    distance: float = 0.0
    score: float = 0.0


class SearchRowsResponse(CommonResponse, Generic[RowT]):
    rows: list[RowResult[RowT]] = Field(default_factory=list)


class SelectRowsArgs(ApiArgs):
    """Scan rows matching a scalar filter, one page per call.

    Pass ``next_marker`` from the previous response as ``marker`` to fetch the
    following page; stop once ``is_truncated`` is false.
    """

    resource: ClassVar[str] = "row"
    action: ClassVar[str | None] = "select"

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    filter: str | None = None
    marker: Any = None
    limit: int | None = None
    projections: list[str] | None = None
    read_consistency: ReadConsistency | None = None


class SelectRowsResponse(CommonResponse, Generic[RowT]):
    rows: list[RowT] = Field(default_factory=list)
    is_truncated: bool = False
    next_marker: Any = None


class BatchAnnsSearchParams(ApiModel):
    vector_field: str
    vector_floats: list[list[float]]
    params: VectorSearchParams
    filter: str | None = None


class BatchSearchRowsArgs(ApiArgs):
    """Search with several query vectors at once; one result set per vector."""

    resource: ClassVar[str] = "row"
    action: ClassVar[str | None] = "batchSearch"

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    anns: BatchAnnsSearchParams
    partition_key: dict[str, Any] | None = None
    projections: list[str] | None = None
    retrieve_vector: bool | None = None
    read_consistency: ReadConsistency | None = None


class BatchRowResult(ApiModel, Generic[RowT]):
    search_vector_floats: list[float] = Field(default_factory=list)
    rows: list[RowResult[RowT]] = Field(default_factory=list)


class BatchSearchRowsResponse(CommonResponse, Generic[RowT]):
    results: list[BatchRowResult[RowT]] = Field(default_factory=list)


__all__ = [
    "AnnsSearchParams",
    "BatchAnnsSearchParams",
    "BatchRowResult",
    "BatchSearchRowsArgs",
    "BatchSearchRowsResponse",
    "DeleteRowArgs",
    "FLATSearchParams",
    "HNSWPQSearchParams",
    "HNSWSearchParams",
    "InsertRowArgs",
    "InsertRowsResponse",
    "PUCKSearchParams",
    "QueryRowArgs",
    "QueryRowResponse",
    "RowResult",
    "SearchRowsArgs",
    "SearchRowsResponse",
    "SelectRowsArgs",
    "SelectRowsResponse",
    "UpdateRowArgs",
    "UpsertRowArgs",
    "UpsertRowsResponse",
    "VectorSearchParams",
]
