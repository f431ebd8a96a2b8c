"""Branch office API endpoints."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.db.graph import GraphStore
from app.db.session import get_graph_store
from app.schemas.graph import (
    BranchOfficeCreate,
    BranchOfficeOut,
    BranchOfficeRelationshipCreate,
    MessageResponse,
    RelationshipOut,
)
from app.services.links import LinkKind, create_link, link_properties

logger = logging.getLogger(__name__)

router = APIRouter()

# Branch offices get a generated business key; clients never supply one.
CREATE_BRANCH_OFFICE_QUERY = """
CREATE (b:BranchOffice {ID: randomUUID(), Name: $name, Location: $location, Income: $income, Voided: false})
RETURN elementId(b) AS id, properties(b) AS b
"""

UPDATE_BRANCH_OFFICE_QUERY = """
MATCH (b:BranchOffice)
WHERE elementId(b) = $id AND b.Voided = false
SET b.Name = $name, b.Location = $location, b.Income = $income
RETURN elementId(b) AS id, properties(b) AS b
"""

SOFT_DELETE_BRANCH_OFFICE_QUERY = """
MATCH (b:BranchOffice)
WHERE elementId(b) = $id
SET b.Voided = true
RETURN elementId(b) AS id
"""

BRANCH_OFFICE_LINKS = {
    "invoice": LinkKind.of("BranchOffice", "Invoice", "EMITS"),
}


def _branch_office_out(record: dict) -> BranchOfficeOut:
    return BranchOfficeOut(id=record["id"], **record["b"])


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Branch office not found.")


@router.post("", response_model=BranchOfficeOut, status_code=status.HTTP_201_CREATED, summary="Create a branch office")
async def create_branch_office(
    body: BranchOfficeCreate,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    records = await store.run(CREATE_BRANCH_OFFICE_QUERY, body.model_dump())
    branch = _branch_office_out(records[0])
    logger.info("Created branch office %s (%s)", branch.id, branch.Name)
    return branch


@router.post(
    "/relationship",
    response_model=RelationshipOut,
    status_code=status.HTTP_201_CREATED,
    summary="Record that a branch office emitted an invoice",
)
async def create_branch_office_relationship(
    body: BranchOfficeRelationshipCreate,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    kind = BRANCH_OFFICE_LINKS[body.target_type]
    link = await create_link(store, kind, body.source_id, body.target_id, link_properties(kind, body))
    if link is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Source or target node not found.")
    return link


@router.put("/{branch_office_id}", response_model=BranchOfficeOut, summary="Update a branch office")
async def update_branch_office(
    branch_office_id: str,
    body: BranchOfficeCreate,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    records = await store.run(UPDATE_BRANCH_OFFICE_QUERY, {"id": branch_office_id, **body.model_dump()})
    if not records:
        raise _not_found()
    return _branch_office_out(records[0])


@router.delete("/{branch_office_id}", response_model=MessageResponse, summary="Mark a branch office as voided")
async def soft_delete_branch_office(
    branch_office_id: str,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    records = await store.run(SOFT_DELETE_BRANCH_OFFICE_QUERY, {"id": branch_office_id})
    if not records:
        raise _not_found()
    logger.info("Voided branch office %s", branch_office_id)
    return MessageResponse(message="Branch office deleted (soft delete)")
