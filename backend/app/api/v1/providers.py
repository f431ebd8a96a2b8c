"""Provider API endpoints."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.db.graph import GraphStore
from app.db.session import get_graph_store
from app.schemas.graph import (
    MessageResponse,
    ProviderCreate,
    ProviderDetail,
    ProviderOut,
    ProviderRelationshipCreate,
    ProviderSearchResponse,
    ProviderUpdate,
    RelationshipOut,
)
from app.services.links import LinkKind, create_link, link_properties, missing_fields

logger = logging.getLogger(__name__)

router = APIRouter()

CREATE_PROVIDER_QUERY = """
CREATE (p:Provider {ID: $id, Name: $name, Location: $location, Voided: false})
RETURN elementId(p) AS id, properties(p) AS p
"""

UPDATE_PROVIDER_QUERY = """
MATCH (p:Provider)
WHERE elementId(p) = $id AND p.Voided = false
SET p.Name = $name, p.Location = $location
RETURN elementId(p) AS id, properties(p) AS p
"""

SOFT_DELETE_PROVIDER_QUERY = """
MATCH (p:Provider)
WHERE elementId(p) = $id
SET p.Voided = true
RETURN elementId(p) AS id
"""

# Case-insensitive substring match; related nodes are folded into lists.
SEARCH_PROVIDERS_QUERY = """
MATCH (p:Provider)
WHERE p.Voided = false AND toLower(p.Name) CONTAINS toLower($name)
OPTIONAL MATCH (p)-[:PROVIDES_TO]->(b:BranchOffice)
OPTIONAL MATCH (p)-[:USE]->(r:Route)
OPTIONAL MATCH (p)-[:RECEIVES]->(o:Buy_Order)
WITH p,
     collect(DISTINCT b {.*, id: elementId(b)}) AS branchOffices,
     collect(DISTINCT r {.*, id: elementId(r)}) AS routes,
     collect(DISTINCT o {.*, id: elementId(o)}) AS buyOrders
RETURN elementId(p) AS id, properties(p) AS p, branchOffices, routes, buyOrders
ORDER BY p.Name ASC
"""

PROVIDER_LINKS = {
    "branchOffice": LinkKind.of(
        "Provider", "BranchOffice", "PROVIDES_TO", "quantity_of_orders_in_time", "type_product", "range_client"
    ),
    "route": LinkKind.of("Provider", "Route", "USE", "cost_of_operation", "status_payment", "type_vehicle"),
}


def _provider_out(record: dict) -> ProviderOut:
    return ProviderOut(id=record["id"], **record["p"])


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Provider not found.")


@router.post("", response_model=ProviderOut, status_code=status.HTTP_201_CREATED, summary="Create a provider")
async def create_provider(
    body: ProviderCreate,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    records = await store.run(CREATE_PROVIDER_QUERY, body.model_dump())
    provider = _provider_out(records[0])
    logger.info("Created provider %s (%s)", provider.id, provider.Name)
    return provider


@router.get("/search/{name}", response_model=ProviderSearchResponse, summary="Search providers by partial name")
async def search_providers(
    name: str,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    records = await store.run(SEARCH_PROVIDERS_QUERY, {"name": name})
    providers = [
        ProviderDetail(
            id=r["id"],
            **r["p"],
            branchOffices=r["branchOffices"],
            routes=r["routes"],
            buyOrders=r["buyOrders"],
        )
        for r in records
    ]
    return ProviderSearchResponse(count=len(providers), providers=providers)


@router.post(
    "/relationshipProvider",
    response_model=RelationshipOut,
    status_code=status.HTTP_201_CREATED,
    summary="Link a provider to a branch office or a route",
)
async def create_provider_relationship(
    body: ProviderRelationshipCreate,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    kind = PROVIDER_LINKS[body.target_type]
    missing = missing_fields(kind, body)
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing fields for {kind.relation_type}: {', '.join(missing)}",
        )
    link = await create_link(store, kind, body.source_id, body.target_id, link_properties(kind, body))
    if link is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Source or target node not found.")
    return link


@router.put("/{provider_id}", response_model=ProviderOut, summary="Update a provider's name and location")
async def update_provider(
    provider_id: str,
    body: ProviderUpdate,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    records = await store.run(UPDATE_PROVIDER_QUERY, {"id": provider_id, **body.model_dump()})
    if not records:
        raise _not_found()
    return _provider_out(records[0])


@router.delete("/{provider_id}", response_model=MessageResponse, summary="Mark a provider as voided")
async def soft_delete_provider(
    provider_id: str,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    records = await store.run(SOFT_DELETE_PROVIDER_QUERY, {"id": provider_id})
    if not records:
        raise _not_found()
    logger.info("Voided provider %s", provider_id)
    return MessageResponse(message="Provider marked as inactive")
