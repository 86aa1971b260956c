import logging
from collections.abc import AsyncGenerator
from datetime import timedelta
from typing import Annotated

from fastapi import Depends
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from application.services import CurrencyService, ExpenseService, RateService
from config.settings import get_settings
from infrastructure.cache.redis_cache import RedisCacheService
from infrastructure.persistence.database import Database
from infrastructure.persistence.repositories.currency import ExchangeRateRepository
from infrastructure.persistence.repositories.expense import ExpenseRepository
from infrastructure.providers import ExchangeRateProvider, NBUProvider, PrivatBankProvider

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	db: Database | None = None
	redis_client: Redis | None = None
	redis_cache: RedisCacheService | None = None
	providers: list[ExchangeRateProvider] | None = None


deps = AppDependencies()


def init_dependencies() -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = get_settings()

	deps.db = Database(settings.DATABASE_URL)
	if settings.REDIS_ENABLED:
		deps.redis_client = Redis.from_url(settings.REDIS_URL, decode_responses=True)
		deps.redis_cache = RedisCacheService(
			deps.redis_client, rate_ttl=timedelta(hours=settings.RATE_CACHE_TTL_HOURS)
		)

	# Order is priority: the first provider with data wins.
	deps.providers = [
		NBUProvider(timeout=settings.PROVIDER_TIMEOUT_SECONDS, base_url=settings.NBU_BASE_URL),
		PrivatBankProvider(
			timeout=settings.PROVIDER_TIMEOUT_SECONDS, base_url=settings.PRIVATBANK_BASE_URL
		),
	]
	logger.info('Dependencies initialized')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.redis_client:
		await deps.redis_client.aclose()
	if deps.db:
		await deps.db.close()
	if deps.providers:
		for provider in deps.providers:
			await provider.close()

	logger.info('Cleanup complete')


def get_database() -> Database:
	if deps.db is None:
		raise RuntimeError('Database is not initialized')
	return deps.db


async def get_db_session(
	db: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession, None]:
	session = db.session_factory()
	try:
		yield session
		await session.commit()
	except Exception:
		await session.rollback()
		raise
	finally:
		await session.close()


def get_redis_cache() -> RedisCacheService | None:
	return deps.redis_cache


def get_providers() -> list[ExchangeRateProvider]:
	if deps.providers is None:
		raise RuntimeError('Providers not initialized')
	return deps.providers


def get_rate_repository(
	db: Annotated[Database, Depends(get_database)],
	cache: Annotated[RedisCacheService | None, Depends(get_redis_cache)],
) -> ExchangeRateRepository:
	return ExchangeRateRepository(database=db, cache_service=cache)


def get_currency_service() -> CurrencyService:
	return CurrencyService()


def get_rate_service(
	repository: Annotated[ExchangeRateRepository, Depends(get_rate_repository)],
	providers: Annotated[list[ExchangeRateProvider], Depends(get_providers)],
) -> RateService:
	settings = get_settings()
	return RateService(
		repository=repository,
		providers=providers,
		max_depth=settings.RATE_MAX_FALLBACK_DEPTH,
		provider_timeout=settings.PROVIDER_DEADLINE_SECONDS,
	)


async def get_expense_repository(
	session: Annotated[AsyncSession, Depends(get_db_session)],
) -> ExpenseRepository:
	return ExpenseRepository(db_session=session)


async def get_expense_service(
	repository: Annotated[ExpenseRepository, Depends(get_expense_repository)],
	rate_service: Annotated[RateService, Depends(get_rate_service)],
) -> ExpenseService:
	return ExpenseService(repository=repository, rate_service=rate_service)
