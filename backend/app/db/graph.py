"""Narrow query-execution interface over a Neo4j async session.

Everything above this module talks to the store through ``GraphStore.run``:
a Cypher template plus a parameter mapping in, a list of plain dicts out.
Driver exceptions are translated into the ingestion error taxonomy here so
callers never import from ``neo4j`` directly.
"""
import logging
from typing import Any

from neo4j import AsyncSession
from neo4j.exceptions import AuthError, DriverError, Neo4jError, ServiceUnavailable, SessionExpired

from app.ingestion.errors import StoreConnectivityError, StoreWriteError

logger = logging.getLogger(__name__)

_CONNECTIVITY_ERRORS = (ServiceUnavailable, SessionExpired, AuthError)
# Raised by the driver while packing parameters (e.g. integers outside int64).
_PACKING_ERRORS = (OverflowError, ValueError, TypeError)


def _to_native(value: Any) -> Any:
    """Make driver values JSON-friendly (temporal types become ISO strings)."""
    if isinstance(value, dict):
        return {k: _to_native(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_native(v) for v in value]
    if hasattr(value, "iso_format"):
        return value.iso_format()
    return value


class GraphStore:
    """Request-scoped handle; does not own the session it wraps."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def run(self, query: str, parameters: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        try:
            result = await self._session.run(query, parameters or {})
            records = await result.data()
        except _CONNECTIVITY_ERRORS as exc:
            logger.error("Graph store unreachable: %s", exc)
            raise StoreConnectivityError(f"Graph store unreachable: {exc}") from exc
        except (Neo4jError, DriverError) as exc:
            raise StoreWriteError(f"Graph store rejected query: {exc}") from exc
        except _PACKING_ERRORS as exc:
            raise StoreWriteError(f"Parameters cannot be sent to the graph store: {exc}") from exc
        return [_to_native(record) for record in records]
