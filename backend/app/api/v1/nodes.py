"""Raw node browser: a quick look at what is in the graph."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from app.db.graph import GraphStore
from app.db.session import get_graph_store
from app.ingestion.errors import StoreConnectivityError
from app.schemas.graph import NodeListResponse, NodeOut

logger = logging.getLogger(__name__)

router = APIRouter()

SAMPLE_NODES_QUERY = """
MATCH (n)
RETURN elementId(n) AS id, labels(n) AS labels, properties(n) AS properties
LIMIT $limit
"""


@router.get("", response_model=NodeListResponse, summary="Return a sample of nodes")
async def get_nodes(
    store: Annotated[GraphStore, Depends(get_graph_store)],
    limit: int = Query(default=10, ge=1, le=100),
):
    try:
        records = await store.run(SAMPLE_NODES_QUERY, {"limit": limit})
    except StoreConnectivityError as exc:
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": exc.message})
    return NodeListResponse(nodes=[NodeOut(**r) for r in records])
