"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from aeobro.config import Settings
from aeobro.domain.repository import (
    BioCodeRepository,
    ChangeLogRepository,
    DomainClaimRepository,
    PlatformAccountRepository,
    ProfileRepository,
)
from aeobro.persistence.database import create_engine, create_session_factory
from aeobro.persistence.repository import (
    PostgresBioCodeRepository,
    PostgresChangeLogRepository,
    PostgresDomainClaimRepository,
    PostgresPlatformAccountRepository,
    PostgresProfileRepository,
)
from aeobro.util.di.base import ProviderBase
from aeobro.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request if no exception
        occurred, or rolled back if one was raised. A claim and the profile
        status it drives are therefore written together or not at all.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=type(e).__name__)
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_profile_repository(self, session: AsyncSession) -> ProfileRepository:
        """Provide Profile repository."""
        return PostgresProfileRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_domain_claim_repository(
        self, session: AsyncSession
    ) -> DomainClaimRepository:
        """Provide DomainClaim repository."""
        return PostgresDomainClaimRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_platform_account_repository(
        self, session: AsyncSession
    ) -> PlatformAccountRepository:
        """Provide PlatformAccount repository."""
        return PostgresPlatformAccountRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_bio_code_repository(self, session: AsyncSession) -> BioCodeRepository:
        """Provide BioCode repository."""
        return PostgresBioCodeRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_change_log_repository(
        self, session: AsyncSession
    ) -> ChangeLogRepository:
        """Provide ChangeLog repository."""
        return PostgresChangeLogRepository(session)
