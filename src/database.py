import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker

from src.config import settings

logger = logging.getLogger(__name__)

# Le schéma est géré hors de l'application: aucune table n'est créée au démarrage
engine = create_async_engine(
    settings.database_url,
    echo=settings.DB_ECHO_LOG,
    pool_pre_ping=True,
)

AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Session par requête. Les repositories valident eux-mêmes leurs écritures."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception as e:
            logger.error(f"Rollback de la session DB suite à une erreur: {e}", exc_info=True)
            await session.rollback()
            raise
