"""Invoice and buy order API endpoints."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.db.graph import GraphStore
from app.db.session import get_graph_store
from app.schemas.graph import (
    BuyOrderCreate,
    BuyOrderOut,
    InvoiceCreate,
    InvoiceOut,
    InvoiceRelationshipCreate,
    MessageResponse,
    RelationshipOut,
)
from app.services.links import LinkKind, create_link, link_properties, missing_fields

logger = logging.getLogger(__name__)

router = APIRouter()

CREATE_INVOICE_QUERY = """
CREATE (i:Invoice {
    ID: $id,
    Name: $name,
    NIT: $nit,
    Total: $total,
    Cashier_main: $cashier_main,
    Date: date($date),
    Status: $status,
    Notes: $notes,
    Voided: false
})
RETURN elementId(i) AS id, properties(i) AS i
"""

UPDATE_INVOICE_QUERY = """
MATCH (i:Invoice)
WHERE elementId(i) = $id AND i.Voided = false
SET i.Name = $name,
    i.NIT = $nit,
    i.Total = $total,
    i.Cashier_main = $cashier_main,
    i.Date = date($date),
    i.Status = $status,
    i.Notes = $notes
RETURN elementId(i) AS id, properties(i) AS i
"""

SOFT_DELETE_INVOICE_QUERY = """
MATCH (i:Invoice)
WHERE elementId(i) = $id
SET i.Voided = true
RETURN elementId(i) AS id
"""

CREATE_BUY_ORDER_QUERY = """
CREATE (o:Buy_Order {
    ID: $id,
    Status: $status,
    Total: $total,
    Items: $items,
    Date: date($date),
    Voided: $voided
})
RETURN elementId(o) AS id, properties(o) AS o
"""

INVOICE_LINKS = {
    "product": LinkKind.of("Invoice", "Product", "CONTAINS", "quantity"),
}


def _invoice_params(body: InvoiceCreate) -> dict:
    return {**body.model_dump(exclude={"date"}), "date": body.date.isoformat()}


def _invoice_out(record: dict) -> InvoiceOut:
    return InvoiceOut(id=record["id"], **record["i"])


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found.")


# ─── Invoices ───

@router.post("", response_model=InvoiceOut, status_code=status.HTTP_201_CREATED, summary="Create an invoice")
async def create_invoice(
    body: InvoiceCreate,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    records = await store.run(CREATE_INVOICE_QUERY, _invoice_params(body))
    invoice = _invoice_out(records[0])
    logger.info("Created invoice %s (ID=%s)", invoice.id, invoice.ID)
    return invoice


@router.put("/{invoice_id}", response_model=InvoiceOut, summary="Replace an invoice's fields")
async def update_invoice(
    invoice_id: str,
    body: InvoiceCreate,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    records = await store.run(UPDATE_INVOICE_QUERY, {"id": invoice_id, **_invoice_params(body)})
    if not records:
        raise _not_found()
    return _invoice_out(records[0])


@router.delete("/{invoice_id}", response_model=MessageResponse, summary="Mark an invoice as voided")
async def soft_delete_invoice(
    invoice_id: str,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    records = await store.run(SOFT_DELETE_INVOICE_QUERY, {"id": invoice_id})
    if not records:
        raise _not_found()
    logger.info("Voided invoice %s", invoice_id)
    return MessageResponse(message="Invoice marked as deleted")


# ─── Buy orders ───

@router.post("/buyorder", response_model=BuyOrderOut, status_code=status.HTTP_201_CREATED, summary="Create a buy order")
async def create_buy_order(
    body: BuyOrderCreate,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    params = {**body.model_dump(exclude={"date"}), "date": body.date.to_date().isoformat()}
    records = await store.run(CREATE_BUY_ORDER_QUERY, params)
    record = records[0]
    logger.info("Created buy order %s (ID=%s)", record["id"], body.id)
    return BuyOrderOut(id=record["id"], **record["o"])


# ─── Relationships ───

@router.post(
    "/relationship",
    response_model=RelationshipOut,
    status_code=status.HTTP_201_CREATED,
    summary="Record that an invoice contains a product",
)
async def create_invoice_relationship(
    body: InvoiceRelationshipCreate,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    kind = INVOICE_LINKS[body.target_type]
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
