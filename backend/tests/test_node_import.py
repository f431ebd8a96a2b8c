"""Tests for the node importer and node-mode batches."""
import pytest

from app.ingestion.errors import ErrorKind, StoreWriteError
from app.ingestion.models import NodeImportSpec
from app.ingestion.nodes import create_node_query, import_node
from app.ingestion.orchestrator import run_import
from app.ingestion.reader import read_rows


@pytest.mark.asyncio
async def test_widget_row_creates_typed_product(store):
    """ID,Type,Name,Price / 7,Product,Widget,19.99 → Product {ID: 7, Name, Price}."""
    outcome = await run_import(store, "products.csv", read_rows(b"ID,Type,Name,Price\n7,Product,Widget,19.99\n"))

    assert outcome.rows_read == 1
    assert outcome.rows_realized == 1
    products = store.nodes_with_label("Product")
    assert len(products) == 1
    props = products[0]["properties"]
    assert props == {"ID": 7, "Name": "Widget", "Price": 19.99}
    assert type(props["ID"]) is int
    assert type(props["Price"]) is float
    assert "Type" not in props


@pytest.mark.asyncio
async def test_import_node_returns_store_id(store):
    spec = NodeImportSpec.from_row({"ID": "1", "Type": "Provider", "Name": "Acme"})
    result = await import_node(store, spec)
    assert result.element_id in store.nodes
    assert result.properties == {"ID": 1, "Name": "Acme"}


@pytest.mark.asyncio
async def test_reimport_duplicates_nodes(store):
    content = b"ID,Type,Name\n1,Product,Widget\n"
    await run_import(store, "products.csv", read_rows(content))
    await run_import(store, "products.csv", read_rows(content))
    assert len(store.nodes_with_label("Product")) == 2


@pytest.mark.asyncio
async def test_invalid_label_fails_one_row_only(store):
    """Row 3 of 10 has Type 'Pro-duct' → 9 nodes, 1 failure, no exception."""
    lines = ["ID,Type,Name"]
    for i in range(1, 11):
        lines.append(f"{i},{'Pro-duct' if i == 3 else 'Product'},Item {i}")
    content = ("\n".join(lines) + "\n").encode()

    outcome = await run_import(store, "products.csv", read_rows(content))

    assert outcome.rows_read == 10
    assert outcome.rows_realized == 9
    assert outcome.rows_failed == 1
    assert len(store.nodes_with_label("Product")) == 9
    issue = outcome.issues[0]
    assert issue.row == 4  # third data row, after the header
    assert issue.reason is ErrorKind.INVALID_IDENTIFIER


@pytest.mark.asyncio
async def test_store_rejection_is_recorded_and_batch_continues(store):
    store.rejected_labels.add("Route")
    content = b"ID,Type\n1,Route\n2,BranchOffice\n"

    outcome = await run_import(store, "mixed.csv", read_rows(content))

    assert outcome.rows_realized == 1
    assert outcome.rows_failed == 1
    assert outcome.issues[0].reason is ErrorKind.STORE_WRITE
    assert len(store.nodes_with_label("BranchOffice")) == 1


@pytest.mark.asyncio
async def test_empty_store_result_is_a_write_error():
    class SilentStore:
        async def run(self, query, parameters=None):
            return []

    spec = NodeImportSpec.from_row({"ID": "1", "Type": "Product"})
    with pytest.raises(StoreWriteError):
        await import_node(SilentStore(), spec)


def test_label_is_the_only_interpolated_value():
    spec = NodeImportSpec.from_row({"ID": "1", "Type": "Invoice", "Note": "x}) DETACH DELETE n //"})
    query = create_node_query(spec)
    assert "`Invoice`" in query
    assert "DETACH" not in query
    assert "$properties" in query
