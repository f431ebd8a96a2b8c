"""Relationship resolver: two-phase, strictly sequential.

Phase 1 looks up each endpoint by label + business key. A row whose
endpoints cannot be pinned down to exactly one node each is skipped; no
placeholder nodes are ever created.

Phase 2 MERGEs a single edge of the row's type between the two resolved
nodes and overwrites its property set, so replaying a row refreshes the edge
instead of adding a parallel one.
"""
import logging

from app.db.graph import GraphStore
from app.ingestion.coercion import TypedScalar
from app.ingestion.errors import AmbiguousEndpointError, EndpointNotFound, StoreWriteError
from app.ingestion.models import BUSINESS_KEY_PROPERTY, RelationshipImportResult, RelationshipImportSpec
from app.ingestion.properties import Identifier, as_parameters

logger = logging.getLogger(__name__)

# Fetch one extra match so ambiguity can be detected without counting.
_LOOKUP_LIMIT = 2

MERGE_EDGE_QUERY_TEMPLATE = (
    "MATCH (a) WHERE elementId(a) = $source_id "
    "MATCH (b) WHERE elementId(b) = $target_id "
    "MERGE (a)-[r:{relation_type}]->(b) "
    "SET r = $properties "
    "RETURN elementId(r) AS element_id, properties(r) AS properties"
)


def lookup_query(label: Identifier) -> str:
    return (
        f"MATCH (n:{label.quoted} {{{BUSINESS_KEY_PROPERTY.quoted}: $key}}) "
        f"RETURN elementId(n) AS element_id LIMIT {_LOOKUP_LIMIT}"
    )


async def resolve_endpoint(store: GraphStore, label: Identifier, key: TypedScalar) -> str:
    """Return the element id of the single ``label`` node whose ID is ``key``.

    Raises:
        EndpointNotFound: no such node.
        AmbiguousEndpointError: more than one node carries that label and key.
    """
    records = await store.run(lookup_query(label), {"key": key})
    if not records:
        raise EndpointNotFound(f"No {label} node with ID {key!r}")
    if len(records) > 1:
        raise AmbiguousEndpointError(f"Several {label} nodes share ID {key!r}")
    return records[0]["element_id"]


async def import_relationship(store: GraphStore, spec: RelationshipImportSpec) -> RelationshipImportResult:
    """Resolve both endpoints, then create-or-refresh the typed edge.

    An unresolvable endpoint is reported through ``skip_reason``; it never
    raises. Store failures raise ``StoreWriteError`` / ``StoreConnectivityError``.
    """
    try:
        source_id = await resolve_endpoint(store, spec.source_label, spec.source_key)
        target_id = await resolve_endpoint(store, spec.target_label, spec.target_key)
    except (EndpointNotFound, AmbiguousEndpointError) as exc:
        return RelationshipImportResult(skip_reason=exc.kind, message=exc.message)

    query = MERGE_EDGE_QUERY_TEMPLATE.format(relation_type=spec.relation_type.quoted)
    records = await store.run(
        query,
        {"source_id": source_id, "target_id": target_id, "properties": as_parameters(spec.properties)},
    )
    if not records:
        # endpoint deleted between the two phases
        raise StoreWriteError(f"MERGE {spec.relation_type} matched no endpoints")

    record = records[0]
    logger.debug(
        "Merged %s edge %s: %s(%r) -> %s(%r)",
        spec.relation_type, record["element_id"],
        spec.source_label, spec.source_key, spec.target_label, spec.target_key,
    )
    return RelationshipImportResult(element_id=record["element_id"], properties=record["properties"])
