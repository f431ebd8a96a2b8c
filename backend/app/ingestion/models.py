"""Per-row import specs and importer results."""
from dataclasses import dataclass, field

from app.ingestion.coercion import TypedScalar, coerce
from app.ingestion.errors import ErrorKind, MissingColumnError
from app.ingestion.properties import Identifier, PropertyBag, build_property_bag

# ─── Reserved columns ───

ID_COLUMN = "ID"
TYPE_COLUMN = "Type"

START_TYPE_COLUMN = "Start_Node_Type"
START_ID_COLUMN = "Start_ID"
END_TYPE_COLUMN = "End_Node_Type"
END_ID_COLUMN = "End_ID"
RELATION_COLUMN = "Relation"

NODE_RESERVED = frozenset({ID_COLUMN, TYPE_COLUMN})
RELATIONSHIP_RESERVED = frozenset({
    START_TYPE_COLUMN, START_ID_COLUMN, END_TYPE_COLUMN, END_ID_COLUMN, RELATION_COLUMN,
})

# Property key the business key is stored under on every imported node
BUSINESS_KEY_PROPERTY = Identifier(ID_COLUMN)


def _required(row: dict[str, str], column: str) -> str:
    value = row.get(column, "")
    if not value.strip():
        raise MissingColumnError(column)
    return value.strip()


# ─── Specs ───

@dataclass(frozen=True)
class NodeImportSpec:
    label: Identifier
    business_key: TypedScalar
    properties: PropertyBag = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: dict[str, str]) -> "NodeImportSpec":
        """Build a node spec from a raw row.

        Raises:
            MissingColumnError: ``ID`` or ``Type`` is blank.
            InvalidIdentifierError: the label or a property name is not an identifier.
        """
        label = Identifier(_required(row, TYPE_COLUMN), role="label")
        key = coerce(_required(row, ID_COLUMN))
        return cls(label=label, business_key=key, properties=build_property_bag(row, NODE_RESERVED))

    def node_properties(self) -> PropertyBag:
        return {BUSINESS_KEY_PROPERTY: self.business_key, **self.properties}


@dataclass(frozen=True)
class RelationshipImportSpec:
    source_label: Identifier
    source_key: TypedScalar
    target_label: Identifier
    target_key: TypedScalar
    relation_type: Identifier
    properties: PropertyBag = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: dict[str, str]) -> "RelationshipImportSpec":
        return cls(
            source_label=Identifier(_required(row, START_TYPE_COLUMN), role="label"),
            source_key=coerce(_required(row, START_ID_COLUMN)),
            target_label=Identifier(_required(row, END_TYPE_COLUMN), role="label"),
            target_key=coerce(_required(row, END_ID_COLUMN)),
            relation_type=Identifier(_required(row, RELATION_COLUMN), role="relationship type"),
            properties=build_property_bag(row, RELATIONSHIP_RESERVED),
        )


# ─── Importer results ───

@dataclass
class NodeImportResult:
    element_id: str
    properties: dict


@dataclass
class RelationshipImportResult:
    element_id: str | None = None
    properties: dict = field(default_factory=dict)
    skip_reason: ErrorKind | None = None
    message: str = ""

    @property
    def realized(self) -> bool:
        return self.skip_reason is None
