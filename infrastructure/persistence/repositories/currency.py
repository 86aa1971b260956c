import logging
from datetime import date

from redis.exceptions import RedisError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from domain.exceptions.currency import CacheError
from domain.models.currency import Currency, ExchangeRate
from infrastructure.cache.redis_cache import RedisCacheService
from infrastructure.persistence.database import Database
from infrastructure.persistence.models.currency import ExchangeRateDB

logger = logging.getLogger(__name__)


class ExchangeRateRepository:
	"""Persistent rate cache keyed on (currency, date).

	Every find/save runs in its own short session, so a resolved rate is committed
	even when the caller's own unit of work is later rolled back. Redis, when
	configured, is only a read-through layer in front of the table.
	"""

	def __init__(self, database: Database, cache_service: RedisCacheService | None = None):
		self.database = database
		self.cache = cache_service

	async def find(self, currency: Currency, rate_date: date) -> ExchangeRate | None:
		cached = await self._get_cached(currency, rate_date)
		if cached is not None:
			return cached

		async with self.database.session() as session:
			rate = await self._select(session, currency, rate_date)

		if rate is not None:
			await self._set_cached(rate)
		return rate

	async def save(self, rate: ExchangeRate) -> ExchangeRate:
		try:
			async with self.database.session() as session:
				session.add(
					ExchangeRateDB(
						currency=rate.currency,
						rate=rate.rate,
						date=rate.date,
						source=rate.source,
					)
				)
				await session.flush()
			stored = rate
		except IntegrityError:
			logger.info(
				f'Rate for {rate.currency.value} on {rate.date.isoformat()} already stored, '
				'reading existing record'
			)
			async with self.database.session() as session:
				stored = await self._select(session, rate.currency, rate.date)
			if stored is None:
				raise

		await self._set_cached(stored)
		return stored

	async def _select(
		self, session: AsyncSession, currency: Currency, rate_date: date
	) -> ExchangeRate | None:
		result = await session.execute(
			select(ExchangeRateDB).filter(
				ExchangeRateDB.currency == currency,
				ExchangeRateDB.date == rate_date,
			)
		)
		row = result.scalars().first()
		if row is None:
			return None
		return ExchangeRate(
			currency=row.currency,
			rate=row.rate,
			date=row.date,
			source=row.source,
		)

	async def _get_cached(self, currency: Currency, rate_date: date) -> ExchangeRate | None:
		if self.cache is None:
			return None
		try:
			return await self.cache.get_rate(currency, rate_date)
		except (RedisError, CacheError) as e:
			logger.warning(f'Rate cache read failed for {currency.value} on {rate_date}: {e}')
			return None

	async def _set_cached(self, rate: ExchangeRate) -> None:
		if self.cache is None:
			return
		try:
			await self.cache.set_rate(rate)
		except RedisError as e:
			logger.warning(f'Rate cache write failed for {rate.currency.value} on {rate.date}: {e}')
