"""Tests for batch routing, pre-flight checks and request-level failures."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.db.graph import GraphStore
from app.ingestion.errors import ErrorKind, MalformedInputError, StoreConnectivityError
from app.ingestion.orchestrator import import_csv, import_mode, run_import
from app.ingestion.reader import read_rows

NODES = b"ID,Type,Name\n1,Invoice,First\n7,Product,Widget\n"
RELATIONS = b"Start_Node_Type,Start_ID,End_Node_Type,End_ID,Relation\nInvoice,1,Product,7,CONTAINS\n"


@pytest.mark.parametrize(
    "file_name, mode",
    [
        ("relations.csv", "relationships"),
        ("invoice_relations_2024.csv", "relationships"),
        ("Relations.csv", "nodes"),
        ("RELATIONS.csv", "nodes"),
        ("products.csv", "nodes"),
    ],
)
def test_mode_is_chosen_by_file_name(file_name, mode):
    assert import_mode(file_name) == mode


@pytest.mark.asyncio
async def test_nodes_then_relations_in_one_session(store):
    nodes = await import_csv(store, "nodes.csv", NODES)
    relations = await import_csv(store, "relations.csv", RELATIONS)

    assert nodes.mode == "nodes"
    assert nodes.rows_realized == 2
    assert relations.mode == "relationships"
    assert relations.rows_realized == 1
    assert relations.message == "Imported 1 of 1 rows from relations.csv"


@pytest.mark.asyncio
async def test_rows_are_processed_in_file_order(store):
    await run_import(store, "nodes.csv", read_rows(b"ID,Type\n1,A\n2,B\n3,C\n"))
    labels = [n["labels"][0] for n in store.nodes.values()]
    assert labels == ["A", "B", "C"]


@pytest.mark.asyncio
async def test_missing_reserved_columns(store):
    with pytest.raises(MalformedInputError, match="Relation"):
        await import_csv(store, "relations.csv", b"Start_Node_Type,Start_ID,End_Node_Type,End_ID\nA,1,B,2\n")
    with pytest.raises(MalformedInputError, match="Type"):
        await import_csv(store, "nodes.csv", b"ID,Name\n1,Widget\n")
    assert store.queries == []


@pytest.mark.asyncio
async def test_node_file_named_relations_needs_relationship_columns(store):
    with pytest.raises(MalformedInputError):
        await import_csv(store, "product_relations.csv", NODES)


@pytest.mark.asyncio
async def test_blank_reserved_value_is_row_level(store):
    outcome = await import_csv(store, "nodes.csv", b"ID,Type\n,Product\n2,Product\n")
    assert outcome.rows_failed == 1
    assert outcome.rows_realized == 1


@pytest.mark.asyncio
async def test_connectivity_error_aborts(store):
    store.unreachable = True
    with pytest.raises(StoreConnectivityError):
        await import_csv(store, "nodes.csv", NODES)


@pytest.mark.asyncio
async def test_malformed_row_aborts_after_earlier_rows(store):
    """Rows before the malformed line stay committed; there is no rollback."""
    with pytest.raises(MalformedInputError):
        await import_csv(store, "nodes.csv", b"ID,Type\n1,Product\n2,Product,oops\n3,Product\n")
    assert len(store.nodes) == 1


@pytest.mark.asyncio
async def test_header_only_file(store):
    outcome = await import_csv(store, "nodes.csv", b"ID,Type,Name\n")
    assert outcome.rows_read == 0
    assert outcome.issues == []


def _int64_session() -> AsyncMock:
    """Session that rejects out-of-range integers the way the Bolt packer does."""

    async def run(query, parameters):
        for value in parameters["properties"].values():
            if isinstance(value, int) and not -(2 ** 63) <= value < 2 ** 63:
                raise OverflowError(f"Integer {value} out of range")
        result = MagicMock()
        result.data = AsyncMock(
            return_value=[{"element_id": f"4:x:{parameters['properties']['ID']}", "properties": parameters["properties"]}]
        )
        return result

    session = AsyncMock()
    session.run = AsyncMock(side_effect=run)
    return session


@pytest.mark.asyncio
async def test_out_of_range_integer_fails_only_its_row():
    session = _int64_session()
    outcome = await import_csv(
        GraphStore(session),
        "products.csv",
        b"ID,Type,Barcode\n1,Product,12345678901234567890\n2,Product,42\n",
    )

    assert outcome.rows_read == 2
    assert outcome.rows_realized == 1
    assert outcome.rows_failed == 1
    assert outcome.issues[0].row == 2
    assert outcome.issues[0].reason == ErrorKind.STORE_WRITE
    assert session.run.await_count == 2
