"""Endpoint tests for branch office CRUD and the EMITS link."""
import pytest

from tests.fakes import make_mock_store, send

BRANCH_ID = "4:77aa:3"
INVOICE_ID = "4:77aa:8"

STORED_BRANCH = {
    "ID": "1f7e2c9a-0d55-4a8e-9a57-3a9b1c1e0f10",
    "Name": "Zone 10",
    "Location": "Guatemala City",
    "Income": 125000.0,
    "Voided": False,
}

BRANCH_BODY = {"name": "Zone 10", "location": "Guatemala City", "income": 125000}


@pytest.mark.asyncio
async def test_create_branch_office_generates_business_key():
    store = make_mock_store([{"id": BRANCH_ID, "b": STORED_BRANCH}])

    response = await send(store, "POST", "/branchoffice", json=BRANCH_BODY)

    assert response.status_code == 201
    assert response.json()["ID"] == STORED_BRANCH["ID"]
    query, params = store.run.await_args.args
    assert "randomUUID()" in query
    assert "id" not in params


@pytest.mark.asyncio
async def test_create_branch_office_requires_income():
    response = await send(make_mock_store(), "POST", "/branchoffice", json={"name": "Zone 10", "location": "Zone 10"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_branch_office():
    store = make_mock_store([{"id": BRANCH_ID, "b": {**STORED_BRANCH, "Income": 130000.0}}])

    response = await send(store, "PUT", f"/branchoffice/{BRANCH_ID}", json={**BRANCH_BODY, "income": 130000})

    assert response.status_code == 200
    assert response.json()["Income"] == 130000.0
    _, params = store.run.await_args.args
    assert params == {"id": BRANCH_ID, "name": "Zone 10", "location": "Guatemala City", "income": 130000.0}


@pytest.mark.asyncio
async def test_update_missing_branch_office_returns_404():
    response = await send(make_mock_store(), "PUT", f"/branchoffice/{BRANCH_ID}", json=BRANCH_BODY)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_soft_delete_branch_office():
    response = await send(make_mock_store([{"id": BRANCH_ID}]), "DELETE", f"/branchoffice/{BRANCH_ID}")
    assert response.status_code == 200
    assert response.json() == {"message": "Branch office deleted (soft delete)"}


@pytest.mark.asyncio
async def test_soft_delete_missing_branch_office_returns_404():
    response = await send(make_mock_store(), "DELETE", f"/branchoffice/{BRANCH_ID}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_branch_office_emits_invoice():
    edge = {"id": "5:77aa:1", "source": BRANCH_ID, "target": INVOICE_ID, "type": "EMITS", "properties": {}}
    store = make_mock_store([edge])

    response = await send(store, "POST", "/branchoffice/relationship", json={"sourceId": BRANCH_ID, "targetId": INVOICE_ID})

    assert response.status_code == 201
    assert response.json() == edge
    query, params = store.run.await_args.args
    assert "MATCH (a:`BranchOffice`)" in query and "MATCH (b:`Invoice`)" in query
    assert params == {"source_id": BRANCH_ID, "target_id": INVOICE_ID, "properties": {}}


@pytest.mark.asyncio
async def test_branch_office_link_to_voided_invoice_returns_404():
    response = await send(
        make_mock_store(), "POST", "/branchoffice/relationship", json={"sourceId": BRANCH_ID, "targetId": INVOICE_ID}
    )
    assert response.status_code == 404
    assert response.json() == {"detail": "Source or target node not found."}
