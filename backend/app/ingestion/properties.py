"""Validated identifiers and the typed property bag built from a CSV row.

Labels and relationship types are the only pieces of row content that end up
inside Cypher text, so they can only be produced through ``Identifier``.
"""
import re

from app.ingestion.coercion import TypedScalar, coerce
from app.ingestion.errors import InvalidIdentifierError

_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*", re.ASCII)


class Identifier(str):
    """A string guaranteed to match ``[A-Za-z_][A-Za-z0-9_]*``."""

    def __new__(cls, value: str, role: str = "identifier"):
        if not isinstance(value, str) or not _IDENTIFIER_RE.fullmatch(value):
            raise InvalidIdentifierError(str(value), role=role)
        return super().__new__(cls, value)

    @property
    def quoted(self) -> str:
        """Back-quoted form for interpolation into query text."""
        return f"`{self}`"


PropertyBag = dict[Identifier, TypedScalar]


def build_property_bag(row: dict[str, str], exclude: frozenset[str] | set[str]) -> PropertyBag:
    """Coerce every non-reserved column of ``row``.

    Raises:
        InvalidIdentifierError: a column name is not usable as a property key.
    """
    bag: PropertyBag = {}
    for column, raw in row.items():
        if column in exclude:
            continue
        bag[Identifier(column, role="property name")] = coerce(raw)
    return bag


def as_parameters(bag: PropertyBag) -> dict[str, TypedScalar]:
    """Plain-``str`` keyed copy for the driver's parameter packer."""
    return {str(key): value for key, value in bag.items()}
