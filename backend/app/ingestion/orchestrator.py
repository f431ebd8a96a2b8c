"""Batch orchestrator: routes a CSV file to the node or relationship importer.

Routing is by file name only: any name containing ``"relations"`` is a
relationship file. Rows are awaited one at a time in file order because
relationship rows may point at nodes created earlier in the same upload.
"""
import logging
from collections.abc import Iterable

from app.db.graph import GraphStore
from app.ingestion.errors import MalformedInputError, RowError
from app.ingestion.models import (
    NODE_RESERVED,
    RELATIONSHIP_RESERVED,
    NodeImportSpec,
    RelationshipImportSpec,
)
from app.ingestion.nodes import import_node
from app.ingestion.reader import RawRow, read_header, read_rows
from app.ingestion.relationships import import_relationship
from app.schemas.imports import ImportMode, ImportOutcome, RowOutcome

logger = logging.getLogger(__name__)

RELATIONS_MARKER = "relations"


def import_mode(file_name: str) -> ImportMode:
    return "relationships" if RELATIONS_MARKER in file_name else "nodes"


# ─── Per-row handlers ───

async def _node_row(store: GraphStore, row_no: int, row: RawRow) -> RowOutcome:
    try:
        spec = NodeImportSpec.from_row(row)
        result = await import_node(store, spec)
    except RowError as exc:
        return RowOutcome(row=row_no, status="failed", reason=exc.kind, message=exc.message)
    return RowOutcome(row=row_no, status="realized", element_id=result.element_id)


async def _relationship_row(store: GraphStore, row_no: int, row: RawRow) -> RowOutcome:
    try:
        spec = RelationshipImportSpec.from_row(row)
        result = await import_relationship(store, spec)
    except RowError as exc:
        return RowOutcome(row=row_no, status="failed", reason=exc.kind, message=exc.message)
    if not result.realized:
        return RowOutcome(row=row_no, status="skipped", reason=result.skip_reason, message=result.message)
    return RowOutcome(row=row_no, status="realized", element_id=result.element_id)


# ─── Entry points ───

async def run_import(store: GraphStore, file_name: str, rows: Iterable[RawRow]) -> ImportOutcome:
    """Import every row of one file and return the per-file summary.

    Row-level problems end up in the summary. ``StoreConnectivityError`` and
    ``MalformedInputError`` (raised lazily by the row iterator) propagate.
    """
    mode = import_mode(file_name)
    handler = _relationship_row if mode == "relationships" else _node_row
    outcome = ImportOutcome(file_name=file_name, mode=mode)

    for row_no, row in enumerate(rows, start=2):  # row 1 = header
        row_outcome = await handler(store, row_no, row)
        outcome.record(row_outcome)
        if not row_outcome.realized:
            logger.warning(
                "%s row %d %s (%s): %s",
                file_name, row_no, row_outcome.status, row_outcome.reason.value, row_outcome.message,
            )

    logger.info(
        "Imported %s: %d read, %d realized, %d skipped, %d failed",
        file_name, outcome.rows_read, outcome.rows_realized, outcome.rows_skipped, outcome.rows_failed,
    )
    return outcome


async def import_csv(store: GraphStore, file_name: str, content: bytes) -> ImportOutcome:
    """Decode ``content``, check the reserved columns for its mode, then import."""
    required = RELATIONSHIP_RESERVED if import_mode(file_name) == "relationships" else NODE_RESERVED
    header = read_header(content)
    missing = sorted(required - set(header))
    if missing:
        raise MalformedInputError(f"Missing required columns: {', '.join(missing)}")
    return await run_import(store, file_name, read_rows(content))
