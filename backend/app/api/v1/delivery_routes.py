"""Delivery route API endpoints (``Route`` nodes)."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.db.graph import GraphStore
from app.db.session import get_graph_store
from app.schemas.graph import MessageResponse, RouteCreate, RouteOut

logger = logging.getLogger(__name__)

router = APIRouter()

CREATE_ROUTE_QUERY = """
CREATE (r:Route {
    Quantity: $quantity,
    Delivery_name: $delivery_name,
    Arrive_date: date($arrive_date),
    Arrive_hour: $arrive_hour,
    Company: $company,
    Distance_KM: $distance_km,
    Voided: false
})
RETURN elementId(r) AS id, properties(r) AS r
"""

UPDATE_ROUTE_QUERY = """
MATCH (r:Route)
WHERE elementId(r) = $id AND r.Voided = false
SET r.Quantity = $quantity,
    r.Delivery_name = $delivery_name,
    r.Arrive_date = date($arrive_date),
    r.Arrive_hour = $arrive_hour,
    r.Company = $company,
    r.Distance_KM = $distance_km
RETURN elementId(r) AS id, properties(r) AS r
"""

SOFT_DELETE_ROUTE_QUERY = """
MATCH (r:Route)
WHERE elementId(r) = $id
SET r.Voided = true
RETURN elementId(r) AS id
"""


def _params(body: RouteCreate) -> dict:
    return {**body.model_dump(exclude={"arrive_date"}), "arrive_date": body.arrive_date.isoformat()}


def _route_out(record: dict) -> RouteOut:
    return RouteOut(id=record["id"], **record["r"])


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Route not found.")


@router.post("", response_model=RouteOut, status_code=status.HTTP_201_CREATED, summary="Create a delivery route")
async def create_route(
    body: RouteCreate,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    records = await store.run(CREATE_ROUTE_QUERY, _params(body))
    route = _route_out(records[0])
    logger.info("Created route %s (%s)", route.id, route.Delivery_name)
    return route


@router.put("/{route_id}", response_model=RouteOut, summary="Replace a route's fields")
async def update_route(
    route_id: str,
    body: RouteCreate,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    records = await store.run(UPDATE_ROUTE_QUERY, {"id": route_id, **_params(body)})
    if not records:
        raise _not_found()
    return _route_out(records[0])


@router.delete("/{route_id}", response_model=MessageResponse, summary="Mark a route as voided")
async def soft_delete_route(
    route_id: str,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    records = await store.run(SOFT_DELETE_ROUTE_QUERY, {"id": route_id})
    if not records:
        raise _not_found()
    logger.info("Voided route %s", route_id)
    return MessageResponse(message="Route deleted (soft delete)")
