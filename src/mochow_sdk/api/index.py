"""Index schema, index parameters, and index requests/responses.

Vector index parameters are sent without a type tag: the service tells the
variants apart by their keys. Each variant forbids unknown keys so a decoded
``params`` object matches exactly one of them:

=========  ==========================================
HNSW       ``M``, ``efConstruction``
HNSWPQ     ``M``, ``efConstruction``, ``NSQ``, ``sampleRate``
PUCK       ``coarseClusterCount``, ``fineClusterCount``
=========  ==========================================
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import ConfigDict, Field

from .common import ApiArgs, ApiModel, CommonResponse
from .enums import AutoBuildPolicyType, IndexState, IndexType, MetricType


class _IndexParam(ApiModel):
    model_config = ConfigDict(extra="forbid")


class HNSWIndexParam(_IndexParam):
    """HNSW graph parameters.

    Attributes:
        m: Neighbours connected to each node, range [4, 128]
        ef_construction: Candidate list size while building, range [8, 1024]
    """

    m: int = Field(alias="M")
    ef_construction: int


class HNSWPQIndexParam(_IndexParam):
    """HNSW with product quantization.

    Attributes:
        nsq: Quantization subspaces, range [1, dim]; must divide the dimension
        sample_rate: k-means sampling rate, range [0.0, 1.0]
    """

    m: int = Field(alias="M")
    ef_construction: int
    nsq: int = Field(alias="NSQ")
    sample_rate: float


class PUCKIndexParam(_IndexParam):
    coarse_cluster_count: int
    fine_cluster_count: int


VectorIndexParams = HNSWPQIndexParam | HNSWIndexParam | PUCKIndexParam


class AutoBuildPolicy(ApiModel):
    """Strategy for rebuilding a vector index automatically.

    Attributes:
        policy_type: TIMING builds once, PERIODICAL repeats, ROW_COUNT_INCREMENT
            builds after the tablet grows or shrinks
        timing: ``%Y-%m-%d %H:%M:%S`` (local) or ``%Y-%m-%dT%H:%M:%Z`` (UTC)
        period_in_second: Interval of periodical builds
        row_count_increment: Row delta that triggers a build
        row_count_increment_ratio: Relative row delta that triggers a build
    """

    policy_type: AutoBuildPolicyType | None = None
    timing: str | None = None
    period_in_second: int | None = Field(default=None, ge=0)
    row_count_increment: int | None = Field(default=None, ge=0)
    row_count_increment_ratio: float | None = Field(default=None, ge=0.0)


class IndexSchema(ApiModel):
    """Definition of a scalar (SECONDARY) or vector index.

    ``state`` and ``index_major_version`` are reported by the service and are
    never sent.
    """

    index_name: str = ""
    index_type: IndexType | None = None
    metric_type: MetricType | None = None
    params: VectorIndexParams | None = None
    field: str = ""
    auto_build: bool = False
    auto_build_policy: AutoBuildPolicy | None = None
    state: IndexState | None = Field(default=None, exclude=True)
    index_major_version: int | None = Field(default=None, exclude=True)


class CreateIndexArgs(ApiArgs):
    resource: ClassVar[str] = "index"
    action: ClassVar[str | None] = "create"

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    indexes: list[IndexSchema] = Field(default_factory=list)


class DescribeIndexArgs(ApiArgs):
    resource: ClassVar[str] = "index"
    action: ClassVar[str | None] = "desc"

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    index_name: str = Field(min_length=1)


class DescribeIndexResponse(CommonResponse):
    index: IndexSchema


class RebuildIndexArgs(ApiArgs):
    """Rebuild a vector index; the major version increases once it completes."""

    resource: ClassVar[str] = "index"
    action: ClassVar[str | None] = "rebuild"

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    index_name: str = Field(min_length=1)


class DeleteIndexArgs(ApiArgs):
    http_method: ClassVar[str] = "DELETE"
    resource: ClassVar[str] = "index"

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    index_name: str = Field(min_length=1)


class ModifyIndexArgs(ApiArgs):
    """Modify a vector index; only the auto-build attributes can change."""

    resource: ClassVar[str] = "index"
    action: ClassVar[str | None] = "modify"

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    index: IndexSchema


__all__ = [
    "AutoBuildPolicy",
    "CreateIndexArgs",
    "DeleteIndexArgs",
    "DescribeIndexArgs",
    "DescribeIndexResponse",
    "HNSWIndexParam",
    "HNSWPQIndexParam",
    "IndexSchema",
    "ModifyIndexArgs",
    "PUCKIndexParam",
    "RebuildIndexArgs",
    "VectorIndexParams",
]
