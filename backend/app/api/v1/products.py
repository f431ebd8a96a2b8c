"""Product API endpoints: CRUD with soft delete, plus links to related nodes."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.db.graph import GraphStore
from app.db.session import get_graph_store
from app.ingestion.properties import Identifier
from app.schemas.graph import ProductCreate, ProductOut, ProductRelationshipCreate, RelationshipOut
from app.services.links import LinkKind, create_link, link_properties, missing_fields, relationships_of

logger = logging.getLogger(__name__)

router = APIRouter()

CREATE_PRODUCT_QUERY = """
CREATE (p:Product {
    Name: $name,
    Category: $category,
    Price: $price,
    Tags: $tags,
    Expiration_date: date($expiration_date),
    Voided: false
})
RETURN elementId(p) AS id, properties(p) AS p
"""

GET_PRODUCT_QUERY = """
MATCH (p:Product)
WHERE elementId(p) = $id AND p.Voided = false
RETURN elementId(p) AS id, properties(p) AS p
"""

UPDATE_PRODUCT_QUERY = """
MATCH (p:Product)
WHERE elementId(p) = $id AND p.Voided = false
SET p.Name = $name,
    p.Category = $category,
    p.Price = $price,
    p.Tags = $tags,
    p.Expiration_date = date($expiration_date)
RETURN elementId(p) AS id, properties(p) AS p
"""

SOFT_DELETE_PRODUCT_QUERY = """
MATCH (p:Product)
WHERE elementId(p) = $id
SET p.Voided = true
RETURN elementId(p) AS id
"""

PRODUCT_LINKS = {
    "product": LinkKind.of("Product", "Product", "SEEMS"),
    "provider": LinkKind.of("Product", "Provider", "BELONGS_TO", "create_date", "time_to_create"),
    "branchOffice": LinkKind.of("Product", "BranchOffice", "EXISTS_ON", "actual_stock", "buy_date", "minimum_stock"),
}


def _params(body: ProductCreate) -> dict:
    return {
        "name": body.name,
        "category": body.category,
        "price": body.price,
        "tags": body.tags,
        "expiration_date": body.expiration_date.isoformat(),
    }


def _product_out(record: dict) -> ProductOut:
    return ProductOut(id=record["id"], **record["p"])


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found.")


# ─── Create product ───

@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED, summary="Create a product")
async def create_product(
    body: ProductCreate,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    records = await store.run(CREATE_PRODUCT_QUERY, _params(body))
    product = _product_out(records[0])
    logger.info("Created product %s (%s)", product.id, product.Name)
    return product


# ─── Get product ───

@router.get("/{product_id}", response_model=ProductOut, summary="Get a product by element id")
async def get_product(
    product_id: str,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    records = await store.run(GET_PRODUCT_QUERY, {"id": product_id})
    if not records:
        raise _not_found()
    return _product_out(records[0])


# ─── Update product ───

@router.put("/{product_id}", response_model=ProductOut, summary="Replace a product's fields")
async def update_product(
    product_id: str,
    body: ProductCreate,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    records = await store.run(UPDATE_PRODUCT_QUERY, {"id": product_id, **_params(body)})
    if not records:
        raise _not_found()
    return _product_out(records[0])


# ─── Soft delete ───

@router.delete("/{product_id}", summary="Mark a product as voided")
async def soft_delete_product(
    product_id: str,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    records = await store.run(SOFT_DELETE_PRODUCT_QUERY, {"id": product_id})
    if not records:
        raise _not_found()
    logger.info("Voided product %s", product_id)
    return {"message": "Product marked as deleted"}


# ─── Relationships ───

@router.post(
    "/relationship",
    response_model=RelationshipOut,
    status_code=status.HTTP_201_CREATED,
    summary="Link a product to another product, a provider or a branch office",
)
async def create_product_relationship(
    body: ProductRelationshipCreate,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    kind = PRODUCT_LINKS[body.target_type]
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


@router.get("/{product_id}/relationships", response_model=list[RelationshipOut], summary="Edges to related products")
async def get_product_relationships(
    product_id: str,
    store: Annotated[GraphStore, Depends(get_graph_store)],
):
    return await relationships_of(store, Identifier("Product"), Identifier("Product"), product_id)
