"""Manual relationship creation between existing nodes, addressed by element id.

Each route declares the kinds of link it may create (target label, relation
type, required body fields). Body fields become edge properties with their
first letter capitalised (``buy_date`` -> ``Buy_date``), matching the names
the CSV import produces.
"""
import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from app.db.graph import GraphStore
from app.ingestion.properties import Identifier

logger = logging.getLogger(__name__)

LINK_QUERY_TEMPLATE = (
    "MATCH (a:{source}) WHERE elementId(a) = $source_id AND coalesce(a.Voided, false) = false "
    "MATCH (b:{target}) WHERE elementId(b) = $target_id AND coalesce(b.Voided, false) = false "
    "MERGE (a)-[r:{relation_type}]->(b) "
    "SET r = $properties "
    "RETURN elementId(r) AS id, elementId(a) AS source, elementId(b) AS target, "
    "type(r) AS type, properties(r) AS properties"
)

RELATIONSHIPS_OF_QUERY_TEMPLATE = (
    "MATCH (a:{source})-[r]->(b:{target}) "
    "WHERE elementId(a) = $source_id AND coalesce(b.Voided, false) = false "
    "RETURN elementId(r) AS id, elementId(a) AS source, elementId(b) AS target, "
    "type(r) AS type, properties(r) AS properties"
)


@dataclass(frozen=True)
class LinkKind:
    source_label: Identifier
    target_label: Identifier
    relation_type: Identifier
    fields: tuple[str, ...] = ()

    @classmethod
    def of(cls, source: str, target: str, relation_type: str, *fields: str) -> "LinkKind":
        return cls(
            Identifier(source, role="label"),
            Identifier(target, role="label"),
            Identifier(relation_type, role="relation type"),
            fields,
        )

    def query(self) -> str:
        return LINK_QUERY_TEMPLATE.format(
            source=self.source_label.quoted,
            target=self.target_label.quoted,
            relation_type=self.relation_type.quoted,
        )


def property_name(field: str) -> str:
    return field[:1].upper() + field[1:]


def missing_fields(kind: LinkKind, body: BaseModel) -> list[str]:
    return [field for field in kind.fields if getattr(body, field, None) is None]


def link_properties(kind: LinkKind, body: BaseModel) -> dict[str, Any]:
    return {property_name(field): getattr(body, field) for field in kind.fields}


async def create_link(store: GraphStore, kind: LinkKind, source_id: str, target_id: str, properties: dict[str, Any]) -> dict | None:
    """MERGE one ``kind`` edge between two live nodes and set its properties.

    Returns the edge record, or ``None`` when either endpoint is missing,
    voided, or carries a different label.
    """
    records = await store.run(
        kind.query(),
        {"source_id": source_id, "target_id": target_id, "properties": properties},
    )
    if not records:
        return None
    link = records[0]
    logger.info("Linked %s -[%s]-> %s", source_id, kind.relation_type, target_id)
    return link


async def relationships_of(store: GraphStore, source_label: Identifier, target_label: Identifier, source_id: str) -> list[dict]:
    """Outgoing edges of one node towards live ``target_label`` nodes."""
    query = RELATIONSHIPS_OF_QUERY_TEMPLATE.format(source=source_label.quoted, target=target_label.quoted)
    return await store.run(query, {"source_id": source_id})
