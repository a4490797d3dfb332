"""Async client for the Mochow vector database HTTP API."""

from __future__ import annotations

from types import TracebackType
from typing import Any, TypeVar

import httpx
from loguru import logger
from pydantic import ValidationError

from .api import (
    AddFieldArgs,
    AliasTableArgs,
    ApiArgs,
    BatchSearchRowsArgs,
    BatchSearchRowsResponse,
    CommonResponse,
    CreateDatabaseArgs,
    CreateIndexArgs,
    CreateTableArgs,
    DeleteIndexArgs,
    DeleteRowArgs,
    DescribeIndexArgs,
    DescribeIndexResponse,
    DescribeTableArgs,
    DescribeTableResponse,
    DropDatabaseArgs,
    DropTableArgs,
    InsertRowArgs,
    InsertRowsResponse,
    ListDatabaseArgs,
    ListDatabaseResponse,
    ListTableArgs,
    ListTableResponse,
    ModifyIndexArgs,
    QueryRowArgs,
    QueryRowResponse,
    RebuildIndexArgs,
    SearchRowsArgs,
    SearchRowsResponse,
    SelectRowsArgs,
    SelectRowsResponse,
    ServerErrorCode,
    StatsTableArgs,
    StatsTableResponse,
    UnaliasTableArgs,
    UpdateRowArgs,
    UpsertRowArgs,
    UpsertRowsResponse,
)
from .auth import Credentials
from .config import ClientConfiguration
from .errors import OtherError, ServiceError, TransportError
from .transport import RetryTransport

ResponseT = TypeVar("ResponseT", bound=CommonResponse)

REQUEST_ID_HEADER = "Request-ID"


class MochowClient:
    """Send Mochow API requests and decode their responses.

    Every operation either returns its typed response or raises exactly one of
    :class:`ParamsError`, :class:`TransportError`, :class:`ServiceError` or
    :class:`OtherError`. The client stays usable after any of them.

    When no ``http_client`` is given, the client owns an ``httpx.AsyncClient``
    whose transport retries transient failures according to ``config``; it is
    closed by :meth:`aclose`. An injected client is used as-is and left open.
    """

    def __init__(
        self, config: ClientConfiguration, http_client: httpx.AsyncClient | None = None
    ) -> None:
        self.config = config
        self._credentials = Credentials(config.account, config.api_key)
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            transport=RetryTransport(
                max_retries=config.max_retries,
                backoff_seconds=config.retry_backoff_seconds,
            )
        )

    @classmethod
    def create(
        cls,
        account: str,
        api_key: str,
        endpoint: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        **options: Any,
    ) -> MochowClient:
        """Build a client from connection settings.

        Args:
            account: Mochow account name
            api_key: API key for the account
            endpoint: Service address, e.g. ``127.0.0.1:5287``
            http_client: Optional pre-configured httpx client
            **options: Other ClientConfiguration fields (timeout_seconds, ...)

        Raises:
            ParamsError: If a setting is missing or invalid
        """
        config = ClientConfiguration(
            account=account, api_key=api_key, endpoint=endpoint, **options
        )
        return cls(config, http_client=http_client)

    async def __aenter__(self) -> MochowClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # request plumbing

    def _headers(self) -> dict[str, str]:
        headers = self.config.request_headers()
        token = self._credentials.token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _send(self, args: ApiArgs, response_model: type[ResponseT]) -> ResponseT:
        url = args.url(self.config)
        operation = type(args).__name__.removesuffix("Args")
        try:
            response = await self._client.request(
                args.http_method,
                url,
                json=args.body(),
                headers=self._headers(),
                timeout=self.config.timeout_seconds,
            )
        except httpx.TransportError as exc:
            logger.error(f"{operation} request to {url} failed: {exc!r}")
            raise TransportError(
                str(exc) or type(exc).__name__, context={"operation": operation, "url": url}
            ) from exc
        except httpx.HTTPError as exc:
            raise OtherError(
                str(exc) or type(exc).__name__, context={"operation": operation, "url": url}
            ) from exc

        request_id = response.headers.get(REQUEST_ID_HEADER, "")
        if response.is_client_error or response.is_server_error:
            raise self._service_error(response, request_id, operation)

        try:
            return response_model.model_validate_json(response.content)
        except ValidationError as exc:
            raise OtherError(
                f"failed to decode {operation} response: {exc}",
                context={"operation": operation, "request_id": request_id},
            ) from exc

    @staticmethod
    def _service_error(response: httpx.Response, request_id: str, operation: str) -> ServiceError:
        try:
            resp = CommonResponse.model_validate_json(response.content)
        except ValidationError as exc:
            resp = CommonResponse(code=-1, msg=f"Service json error message decode failed: {exc}")
        error = ServiceError(
            status_code=response.status_code,
            request_id=request_id,
            resp=resp,
            server_code=ServerErrorCode.from_code(resp.code),
        )
        logger.error(f"{operation} failed: {error}")
        return error

    # ------------------------------------------------------------------
    # databases

    async def create_database(self, database: str) -> CommonResponse:
        return await self._send(CreateDatabaseArgs.build(database=database), CommonResponse)

    async def drop_database(self, database: str) -> CommonResponse:
        """Drop a database; all of its tables must be dropped beforehand."""
        return await self._send(DropDatabaseArgs.build(database=database), CommonResponse)

    async def list_database(self) -> ListDatabaseResponse:
        return await self._send(ListDatabaseArgs.build(), ListDatabaseResponse)

    async def has_database(self, database: str) -> bool:
        response = await self.list_database()
        return database in response.databases

    # ------------------------------------------------------------------
    # tables

    async def create_table(self, args: CreateTableArgs) -> CommonResponse:
        """Create a table.

        Example:
            >>> args = CreateTableArgs.build(
            ...     database="book",
            ...     table="book_segments",
            ...     replication=3,
            ...     partition=Partition(partition_num=3),
            ...     schema=TableSchema(fields=fields, indexes=indexes),
            ... )
            >>> await client.create_table(args)
        """
        return await self._send(args, CommonResponse)

    async def drop_table(self, database: str, table: str) -> CommonResponse:
        return await self._send(DropTableArgs.build(database=database, table=table), CommonResponse)

    async def list_table(self, database: str) -> ListTableResponse:
        return await self._send(ListTableArgs.build(database=database), ListTableResponse)

    async def has_table(self, database: str, table: str) -> bool:
        response = await self.list_table(database)
        return table in response.tables

    async def desc_table(self, database: str, table: str) -> DescribeTableResponse:
        return await self._send(
            DescribeTableArgs.build(database=database, table=table), DescribeTableResponse
        )

    async def add_field(self, args: AddFieldArgs) -> CommonResponse:
        """Add scalar fields to an existing table."""
        return await self._send(args, CommonResponse)

    async def show_table_stats(self, database: str, table: str) -> StatsTableResponse:
        return await self._send(
            StatsTableArgs.build(database=database, table=table), StatsTableResponse
        )

    async def alias_table(self, args: AliasTableArgs) -> CommonResponse:
        return await self._send(args, CommonResponse)

    async def unalias_table(self, args: UnaliasTableArgs) -> CommonResponse:
        return await self._send(args, CommonResponse)

    # ------------------------------------------------------------------
    # indexes

    async def create_index(self, args: CreateIndexArgs) -> CommonResponse:
        return await self._send(args, CommonResponse)

    async def desc_index(self, database: str, table: str, index_name: str) -> DescribeIndexResponse:
        args = DescribeIndexArgs.build(database=database, table=table, index_name=index_name)
        return await self._send(args, DescribeIndexResponse)

    async def modify_index(self, args: ModifyIndexArgs) -> CommonResponse:
        """Change the auto-build settings of a vector index."""
        return await self._send(args, CommonResponse)

    async def rebuild_index(self, database: str, table: str, index_name: str) -> CommonResponse:
        args = RebuildIndexArgs.build(database=database, table=table, index_name=index_name)
        return await self._send(args, CommonResponse)

    async def delete_index(self, database: str, table: str, index_name: str) -> CommonResponse:
        args = DeleteIndexArgs.build(database=database, table=table, index_name=index_name)
        return await self._send(args, CommonResponse)

    # ------------------------------------------------------------------
    # rows

    async def insert_row(self, args: InsertRowArgs) -> InsertRowsResponse:
        return await self._send(args, InsertRowsResponse)

    async def upsert_row(self, args: UpsertRowArgs) -> UpsertRowsResponse:
        return await self._send(args, UpsertRowsResponse)

    async def update_row(self, args: UpdateRowArgs) -> CommonResponse:
        return await self._send(args, CommonResponse)

    async def delete_rows(self, args: DeleteRowArgs) -> CommonResponse:
        """Delete rows by primary key or by filter."""
        return await self._send(args, CommonResponse)

    async def query_row(
        self, args: QueryRowArgs, row_type: Any = dict[str, Any]
    ) -> QueryRowResponse[Any]:
        """Fetch one row by primary key, decoding it as ``row_type``."""
        return await self._send(args, QueryRowResponse[row_type])

    async def search_rows(
        self, args: SearchRowsArgs, row_type: Any = dict[str, Any]
    ) -> SearchRowsResponse[Any]:
        return await self._send(args, SearchRowsResponse[row_type])

    async def select_rows(
        self, args: SelectRowsArgs, row_type: Any = dict[str, Any]
    ) -> SelectRowsResponse[Any]:
        """Fetch one page of rows matching a filter.

        Pagination is left to the caller::

            marker = None
            while True:
                page = await client.select_rows(
                    SelectRowsArgs.build(database=db, table=table, marker=marker, limit=100)
                )
                handle(page.rows)
                if not page.is_truncated:
                    break
                marker = page.next_marker
        """
        return await self._send(args, SelectRowsResponse[row_type])

    async def batch_search_rows(
        self, args: BatchSearchRowsArgs, row_type: Any = dict[str, Any]
    ) -> BatchSearchRowsResponse[Any]:
        return await self._send(args, BatchSearchRowsResponse[row_type])


__all__ = ["MochowClient", "REQUEST_ID_HEADER"]
