import logging
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# private in-memory database; gone when the engine is disposed or the process exits
MEMORY_URL = "sqlite://"


def create_memory_engine() -> Engine:
    # one shared connection, otherwise every pooled connection would see its own empty database
    engine = create_engine(
        MEMORY_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    logger.info("in-memory database ready")
    return engine
