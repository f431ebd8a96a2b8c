from collections.abc import AsyncGenerator

from fastapi import Request
from neo4j import AsyncDriver, AsyncGraphDatabase

from app.core.config import settings
from app.db.graph import GraphStore


def create_driver() -> AsyncDriver:
    """Build the pooled driver. Connections are opened lazily on first query."""
    return AsyncGraphDatabase.driver(
        settings.NEO4J_URI,
        auth=(settings.NEO4J_USER, settings.NEO4J_PASSWORD),
        max_connection_pool_size=settings.NEO4J_MAX_POOL_SIZE,
        connection_acquisition_timeout=settings.NEO4J_CONNECTION_TIMEOUT,
        keep_alive=True,
    )


async def get_graph_store(request: Request) -> AsyncGenerator[GraphStore, None]:
    """FastAPI dependency: one session per request, closed on every exit path."""
    driver: AsyncDriver = request.app.state.neo4j_driver
    async with driver.session(database=settings.NEO4J_DATABASE) as session:
        yield GraphStore(session)
