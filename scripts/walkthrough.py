#!/usr/bin/env python
"""End-to-end walkthrough against a running Mochow instance.

Creates a database and table, inserts rows, runs a vector search, pages
through a filtered select and finally drops everything it created.

Connection settings come from ``conf/mochow.yml`` (or ``MOCHOW_CONFIG_PATH``)::

    account: root
    api_key: mochow
    endpoint: "127.0.0.1:5287"

Usage:
    python scripts/walkthrough.py
"""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from loguru import logger

from mochow_sdk import ClientConfiguration, MochowClient, ServiceError
from mochow_sdk.api import (
    AnnsSearchParams,
    CreateTableArgs,
    FieldSchema,
    FieldType,
    HNSWIndexParam,
    HNSWSearchParams,
    IndexSchema,
    IndexState,
    IndexType,
    InsertRowArgs,
    MetricType,
    Partition,
    SearchRowsArgs,
    SelectRowsArgs,
    TableSchema,
    TableState,
)

# Configure logging
logger.remove()
logger.add(sys.stderr, level="INFO", format="<level>{message}</level>")

DATABASE = "book"
TABLE = "book_segments"

ROWS = [
    {"id": "0001", "bookName": "West Journey", "page": 21, "vector": [0.2123, 0.21, 0.213]},
    {"id": "0002", "bookName": "West Journey", "page": 22, "vector": [0.2123, 0.22, 0.213]},
    {"id": "0003", "bookName": "Three Kingdoms", "page": 23, "vector": [0.2123, 0.23, 0.213]},
    {"id": "0004", "bookName": "Three Kingdoms", "page": 24, "vector": [0.2123, 0.24, 0.213]},
    {"id": "0005", "bookName": "Three Kingdoms", "page": 25, "vector": [0.2123, 0.25, 0.213]},
]


def table_args() -> CreateTableArgs:
    schema = TableSchema(
        fields=[
            FieldSchema(
                field_name="id",
                field_type=FieldType.STRING,
                primary_key=True,
                partition_key=True,
                not_null=True,
            ),
            FieldSchema(field_name="bookName", field_type=FieldType.STRING, not_null=True),
            FieldSchema(field_name="page", field_type=FieldType.UINT32, not_null=True),
            FieldSchema(
                field_name="vector", field_type=FieldType.FLOAT_VECTOR, not_null=True, dimension=3
            ),
        ],
        indexes=[
            IndexSchema(
                index_name="book_name_idx", index_type=IndexType.SECONDARY_INDEX, field="bookName"
            ),
            IndexSchema(
                index_name="vector_idx",
                index_type=IndexType.HNSW,
                metric_type=MetricType.L2,
                field="vector",
                params=HNSWIndexParam(m=32, ef_construction=200),
            ),
        ],
    )
    return CreateTableArgs.build(
        database=DATABASE,
        table=TABLE,
        description="walkthrough",
        replication=1,
        partition=Partition(partition_num=1),
        schema=schema,
    )


async def wait_until_ready(client: MochowClient) -> None:
    for _ in range(30):
        described = await client.desc_table(DATABASE, TABLE)
        if described.table.state == TableState.NORMAL:
            return
        await asyncio.sleep(1)
    raise RuntimeError(f"table {DATABASE}.{TABLE} did not become ready")


async def cleanup(client: MochowClient) -> None:
    if await client.has_database(DATABASE):
        if await client.has_table(DATABASE, TABLE):
            await client.drop_table(DATABASE, TABLE)
            while await client.has_table(DATABASE, TABLE):
                await asyncio.sleep(1)
        await client.drop_database(DATABASE)


async def main() -> None:
    config = ClientConfiguration.from_file()
    async with MochowClient(config) as client:
        await cleanup(client)
        await client.create_database(DATABASE)
        await client.create_table(table_args())
        await wait_until_ready(client)
        logger.info(f"Created {DATABASE}.{TABLE}")

        inserted = await client.insert_row(
            InsertRowArgs.build(database=DATABASE, table=TABLE, rows=ROWS)
        )
        logger.info(f"Inserted {inserted.affected_count} rows")

        # The vector index has to be built before ANN search returns results
        await client.rebuild_index(DATABASE, TABLE, "vector_idx")
        while True:
            described = await client.desc_index(DATABASE, TABLE, "vector_idx")
            if described.index.state == IndexState.NORMAL:
                break
            await asyncio.sleep(1)

        found = await client.search_rows(
            SearchRowsArgs.build(
                database=DATABASE,
                table=TABLE,
                anns=AnnsSearchParams(
                    vector_field="vector",
                    vector_floats=[0.3123, 0.43, 0.213],
                    params=HNSWSearchParams(ef=200, limit=3),
                    filter="bookName = 'Three Kingdoms'",
                ),
            )
        )
        for hit in found.rows:
            logger.info(f"search hit {hit.row['id']} distance={hit.distance:.4f}")

        marker = None
        page_number = 0
        while True:
            page = await client.select_rows(
                SelectRowsArgs.build(
                    database=DATABASE,
                    table=TABLE,
                    filter="page >= 22",
                    marker=marker,
                    limit=2,
                    projections=["id", "page"],
                )
            )
            page_number += 1
            logger.info(f"select page {page_number}: {[row['id'] for row in page.rows]}")
            if not page.is_truncated:
                break
            marker = page.next_marker

        await cleanup(client)
        logger.info("Dropped walkthrough database")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except ServiceError as e:
        logger.error(f"Mochow rejected a request: {e}")
        sys.exit(1)
