"""Tests for MochowClient request dispatch and error classification."""

from __future__ import annotations

import json

import httpx
import pytest
import respx
from httpx import Response
from pydantic import BaseModel

from mochow_sdk.api import (
    CreateTableArgs,
    FieldSchema,
    FieldType,
    InsertRowArgs,
    Partition,
    QueryRowArgs,
    SelectRowsArgs,
    ServerErrorCode,
    TableSchema,
)
from mochow_sdk.client import MochowClient
from mochow_sdk.errors import OtherError, ParamsError, ServiceError, TransportError

BASE = "http://mochow.test:5287/v1"
SUCCESS = {"code": 0, "msg": "Success"}


class Book(BaseModel):
    id: str
    page: int


class TestDispatch:
    """Requests are built from the operation mapping and carry auth headers."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_create_database_request(self, client_config):
        route = respx.post(f"{BASE}/database?create").mock(return_value=Response(200, json=SUCCESS))

        async with MochowClient(client_config) as client:
            response = await client.create_database("book")

        assert response.code == 0
        assert response.msg == "Success"
        request = route.calls.last.request
        assert request.url.query == b"create"
        assert json.loads(request.content) == {"database": "book"}
        assert request.headers["Authorization"] == "Bearer account=root&api_key=mochow"
        assert request.headers["User-Agent"] == "mochow-sdk-python"

    @pytest.mark.asyncio
    @respx.mock
    async def test_drop_database_uses_delete(self, client_config):
        route = respx.delete(f"{BASE}/database").mock(return_value=Response(200, json=SUCCESS))

        async with MochowClient(client_config) as client:
            await client.drop_database("book")

        request = route.calls.last.request
        assert request.method == "DELETE"
        assert request.url.query == b""
        assert json.loads(request.content) == {"database": "book"}

    @pytest.mark.asyncio
    @respx.mock
    async def test_has_database_lists_and_checks_membership(self, client_config):
        route = respx.post(f"{BASE}/database?list").mock(
            return_value=Response(200, json={**SUCCESS, "databases": ["book", "music"]})
        )

        async with MochowClient(client_config) as client:
            assert await client.has_database("book") is True
            assert await client.has_database("films") is False

        assert route.call_count == 2
        assert route.calls.last.request.content == b""

    @pytest.mark.asyncio
    @respx.mock
    async def test_has_table(self, client_config):
        route = respx.post(f"{BASE}/table?list").mock(
            return_value=Response(200, json={**SUCCESS, "tables": ["book_segments"]})
        )

        async with MochowClient(client_config) as client:
            assert await client.has_table("book", "book_segments") is True

        assert json.loads(route.calls.last.request.content) == {"database": "book"}

    @pytest.mark.asyncio
    @respx.mock
    async def test_create_table_sends_schema(self, client_config):
        route = respx.post(f"{BASE}/table?create").mock(return_value=Response(200, json=SUCCESS))
        args = CreateTableArgs.build(
            database="book",
            table="book_segments",
            description="basic test",
            replication=3,
            partition=Partition(partition_num=3),
            schema=TableSchema(
                fields=[
                    FieldSchema(
                        field_name="id",
                        field_type=FieldType.STRING,
                        primary_key=True,
                        partition_key=True,
                        not_null=True,
                    )
                ]
            ),
        )

        async with MochowClient(client_config) as client:
            await client.create_table(args)

        body = json.loads(route.calls.last.request.content)
        assert body["description"] == "basic test"
        assert body["replication"] == 3
        assert body["schema"]["fields"][0]["fieldName"] == "id"
        assert body["schema"]["indexes"] == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_show_table_stats(self, client_config):
        respx.post(f"{BASE}/table?stats").mock(
            return_value=Response(
                200,
                json={**SUCCESS, "rowCount": 3, "memorySizeInByte": 1024, "diskSizeInByte": 4096},
            )
        )

        async with MochowClient(client_config) as client:
            stats = await client.show_table_stats("book", "book_segments")

        assert stats.row_count == 3
        assert stats.memory_size_in_byte == 1024
        assert stats.disk_size_in_byte == 4096

    @pytest.mark.asyncio
    @respx.mock
    async def test_desc_index(self, client_config):
        route = respx.post(f"{BASE}/index?desc").mock(
            return_value=Response(
                200,
                json={
                    **SUCCESS,
                    "index": {
                        "indexName": "vector_idx",
                        "indexType": "HNSW",
                        "metricType": "L2",
                        "params": {"M": 32, "efConstruction": 200},
                        "field": "vector",
                        "autoBuild": False,
                        "state": "NORMAL",
                        "indexMajorVersion": 1,
                    },
                },
            )
        )

        async with MochowClient(client_config) as client:
            response = await client.desc_index("book", "book_segments", "vector_idx")

        assert response.index.index_major_version == 1
        assert json.loads(route.calls.last.request.content) == {
            "database": "book",
            "table": "book_segments",
            "indexName": "vector_idx",
        }

    @pytest.mark.asyncio
    @respx.mock
    async def test_insert_row_reports_affected_count(self, client_config):
        respx.post(f"{BASE}/row?insert").mock(
            return_value=Response(200, json={**SUCCESS, "affectedCount": 2})
        )
        args = InsertRowArgs.build(
            database="book", table="book_segments", rows=[{"id": "0001"}, {"id": "0002"}]
        )

        async with MochowClient(client_config) as client:
            response = await client.insert_row(args)

        assert response.affected_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_query_row_with_row_type(self, client_config):
        respx.post(f"{BASE}/row?query").mock(
            return_value=Response(200, json={**SUCCESS, "row": {"id": "0001", "page": 21}})
        )
        args = QueryRowArgs.build(database="book", table="t", primary_key={"id": "0001"})

        async with MochowClient(client_config) as client:
            typed = await client.query_row(args, row_type=Book)
            untyped = await client.query_row(args)

        assert typed.row == Book(id="0001", page=21)
        assert untyped.row == {"id": "0001", "page": 21}

    @pytest.mark.asyncio
    @respx.mock
    async def test_select_rows_caller_driven_pagination(self, client_config):
        """Given two pages, when the caller feeds next_marker back, then the second
        request carries the first page's marker and iteration stops when not truncated."""
        route = respx.post(f"{BASE}/row?select").mock(
            side_effect=[
                Response(
                    200,
                    json={
                        **SUCCESS,
                        "rows": [{"id": "0001"}],
                        "isTruncated": True,
                        "nextMarker": {"id": "0002"},
                    },
                ),
                Response(
                    200,
                    json={**SUCCESS, "rows": [{"id": "0002"}], "isTruncated": False},
                ),
            ]
        )

        seen = []
        async with MochowClient(client_config) as client:
            marker = None
            while True:
                page = await client.select_rows(
                    SelectRowsArgs.build(database="book", table="t", marker=marker, limit=1)
                )
                seen.extend(row["id"] for row in page.rows)
                if not page.is_truncated:
                    break
                marker = page.next_marker

        assert seen == ["0001", "0002"]
        first, second = (json.loads(call.request.content) for call in route.calls)
        assert "marker" not in first
        assert second["marker"] == {"id": "0002"}


class TestErrors:
    """Each failure is classified into exactly one error kind."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_service_error_carries_envelope_and_request_id(self, client_config):
        respx.post(f"{BASE}/database?create").mock(
            return_value=Response(
                400,
                json={"code": 51, "msg": "Database Already Exists"},
                headers={"Request-ID": "req-42"},
            )
        )

        async with MochowClient(client_config) as client:
            with pytest.raises(ServiceError) as exc_info:
                await client.create_database("book")

        error = exc_info.value
        assert error.status_code == 400
        assert error.request_id == "req-42"
        assert error.resp.code == 51
        assert error.resp.msg == "Database Already Exists"
        assert error.server_code is ServerErrorCode.DB_ALREADY_EXIST

    @pytest.mark.asyncio
    @respx.mock
    async def test_service_error_without_request_id_header(self, client_config):
        respx.delete(f"{BASE}/table").mock(
            return_value=Response(404, json={"code": 69, "msg": "Table Not Exist"})
        )

        async with MochowClient(client_config) as client:
            with pytest.raises(ServiceError) as exc_info:
                await client.drop_table("book", "missing")

        assert exc_info.value.request_id == ""
        assert exc_info.value.server_code is ServerErrorCode.TABLE_NOT_EXIST

    @pytest.mark.asyncio
    @respx.mock
    async def test_unknown_server_code(self, client_config):
        respx.post(f"{BASE}/table?list").mock(
            return_value=Response(400, json={"code": 4242, "msg": "New Failure"})
        )

        async with MochowClient(client_config) as client:
            with pytest.raises(ServiceError) as exc_info:
                await client.list_table("book")

        assert exc_info.value.server_code is ServerErrorCode.UNKNOWN
        assert exc_info.value.resp.code == 4242

    @pytest.mark.asyncio
    @respx.mock
    async def test_undecodable_error_body(self, client_config):
        """Given a 5xx with a non-JSON body, when retries run out, then the service
        error falls back to code -1 with a decode-failure message."""
        route = respx.post(f"{BASE}/database?list").mock(
            return_value=Response(502, text="<html>Bad Gateway</html>")
        )

        async with MochowClient(client_config) as client:
            with pytest.raises(ServiceError) as exc_info:
                await client.list_database()

        error = exc_info.value
        assert error.status_code == 502
        assert error.resp.code == -1
        assert error.resp.msg.startswith("Service json error message decode failed")
        assert error.server_code is ServerErrorCode.UNKNOWN
        assert route.call_count == client_config.max_retries + 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_business_error_is_not_retried(self, client_config):
        route = respx.post(f"{BASE}/database?create").mock(
            return_value=Response(400, json={"code": 51, "msg": "Database Already Exists"})
        )

        async with MochowClient(client_config) as client:
            with pytest.raises(ServiceError):
                await client.create_database("book")

        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_transient_failure_then_success(self, client_config):
        route = respx.post(f"{BASE}/database?list").mock(
            side_effect=[
                Response(503, json={"code": 1, "msg": "Internal Error"}),
                Response(200, json={**SUCCESS, "databases": ["book"]}),
            ]
        )

        async with MochowClient(client_config) as client:
            response = await client.list_database()

        assert response.databases == ["book"]
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_connection_failure_becomes_transport_error(self, client_config):
        route = respx.post(f"{BASE}/database?create").mock(
            side_effect=httpx.ConnectError("connection refused")
        )

        async with MochowClient(client_config) as client:
            with pytest.raises(TransportError, match="connection refused"):
                await client.create_database("book")

        assert route.call_count == client_config.max_retries + 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_invalid_success_body_is_other_error(self, client_config):
        respx.post(f"{BASE}/database?list").mock(return_value=Response(200, text="not json"))

        async with MochowClient(client_config) as client:
            with pytest.raises(OtherError):
                await client.list_database()

    @pytest.mark.asyncio
    @respx.mock
    async def test_mismatched_success_body_is_other_error(self, client_config):
        respx.post(f"{BASE}/table?stats").mock(
            return_value=Response(200, json={**SUCCESS, "rowCount": "many"})
        )

        async with MochowClient(client_config) as client:
            with pytest.raises(OtherError, match="StatsTable"):
                await client.show_table_stats("book", "t")

    @pytest.mark.asyncio
    @respx.mock
    async def test_params_error_before_any_request(self, client_config):
        route = respx.post(f"{BASE}/database?create").mock(return_value=Response(200, json=SUCCESS))

        async with MochowClient(client_config) as client:
            with pytest.raises(ParamsError):
                await client.create_database("")

        assert not route.called

    @pytest.mark.asyncio
    @respx.mock
    async def test_client_usable_after_error(self, client_config):
        respx.post(f"{BASE}/database?create").mock(
            side_effect=[
                Response(400, json={"code": 51, "msg": "Database Already Exists"}),
                Response(200, json=SUCCESS),
            ]
        )

        async with MochowClient(client_config) as client:
            with pytest.raises(ServiceError):
                await client.create_database("book")
            response = await client.create_database("book2")

        assert response.code == 0


class TestConstruction:
    def test_create_normalizes_endpoint(self):
        client = MochowClient.create("root", "mochow", "127.0.0.1:5287", user_agent="tests")

        assert client.config.base_url == "http://127.0.0.1:5287/v1"
        assert client.config.request_headers()["User-Agent"] == "mochow-sdk-python/tests"

    def test_create_requires_endpoint(self):
        with pytest.raises(ParamsError, match="endpoint"):
            MochowClient.create("root", "mochow", "")

    def test_create_wraps_invalid_options(self):
        with pytest.raises(ParamsError, match="timeout_seconds"):
            MochowClient.create("root", "mochow", "127.0.0.1:5287", timeout_seconds=-1)

    @pytest.mark.asyncio
    async def test_injected_client_is_left_open(self, client_config):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> Response:
            seen.append(request)
            return Response(200, json={**SUCCESS, "databases": []})

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        async with MochowClient(client_config, http_client=http_client) as client:
            await client.list_database()

        assert not http_client.is_closed
        assert seen[0].headers["Authorization"].startswith("Bearer ")
        await http_client.aclose()
