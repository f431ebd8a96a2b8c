"""Node importer: one CREATE per node row.

There is no existence check: importing the same file twice
creates every node twice.
"""
import logging

from app.db.graph import GraphStore
from app.ingestion.errors import StoreWriteError
from app.ingestion.models import NodeImportResult, NodeImportSpec
from app.ingestion.properties import as_parameters

logger = logging.getLogger(__name__)


def create_node_query(spec: NodeImportSpec) -> str:
    return (
        f"CREATE (n:{spec.label.quoted}) "
        "SET n = $properties "
        "RETURN elementId(n) AS element_id, properties(n) AS properties"
    )


async def import_node(store: GraphStore, spec: NodeImportSpec) -> NodeImportResult:
    """Create one node labelled ``spec.label`` carrying ``{ID, **properties}``.

    Raises:
        StoreWriteError: the store rejected the write (or returned nothing).
        StoreConnectivityError: the store is unreachable.
    """
    records = await store.run(create_node_query(spec), {"properties": as_parameters(spec.node_properties())})
    if not records:
        raise StoreWriteError(f"CREATE returned no node for label {spec.label}")

    record = records[0]
    logger.debug("Created %s node %s (ID=%r)", spec.label, record["element_id"], spec.business_key)
    return NodeImportResult(element_id=record["element_id"], properties=record["properties"])
