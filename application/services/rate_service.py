import asyncio
import logging
from datetime import date, timedelta
from decimal import Decimal

from domain.exceptions.currency import InvalidCurrencyError, ResolutionExhaustedError
from domain.models.currency import (
    MAX_RATE,
    RATE_PRECISION,
    SETTLEMENT_CURRENCY,
    Currency,
    ExchangeRate,
)
from infrastructure.persistence.repositories.currency import ExchangeRateRepository
from infrastructure.providers.base import ExchangeRateProvider

logger = logging.getLogger(__name__)

MAX_FALLBACK_DEPTH = 10


class RateService:
    """Resolves the UAH rate of a currency for a calendar date.

    Lookup order for each date: the persistent cache, then every provider in
    priority order. When no provider has data (weekends, bank holidays) the
    previous calendar day is tried, up to ``max_depth`` dates in total.
    """

    def __init__(
        self,
        repository: ExchangeRateRepository,
        providers: list[ExchangeRateProvider],
        max_depth: int = MAX_FALLBACK_DEPTH,
        provider_timeout: float | None = 15.0,
    ):
        self.repository = repository
        self.providers = providers
        self.max_depth = max_depth
        self.provider_timeout = provider_timeout

    async def get_rate(self, currency: Currency, rate_date: date, depth: int = 0) -> ExchangeRate:
        if currency == SETTLEMENT_CURRENCY:
            raise InvalidCurrencyError(
                f'{SETTLEMENT_CURRENCY.value} is the settlement currency and has no exchange rate'
            )

        current_date = rate_date
        for current_depth in range(depth, self.max_depth):
            cached = await self.repository.find(currency, current_date)
            if cached is not None:
                logger.info(
                    f'Found cached rate for {currency.value} on {current_date.isoformat()}: '
                    f'{cached.rate} (source: {cached.source.value})'
                )
                return cached

            for provider in self.providers:
                rate = await self._fetch_from_provider(provider, currency, current_date)
                if rate is None:
                    continue

                logger.info(
                    f'Fetched rate from {provider.name} for {currency.value} '
                    f'on {current_date.isoformat()}: {rate}'
                )
                return await self.repository.save(
                    ExchangeRate(
                        currency=currency,
                        rate=rate,
                        date=current_date,
                        source=provider.source,
                    )
                )

            logger.info(
                f'No rate available for {currency.value} on {current_date.isoformat()}, '
                f'trying previous day (depth: {current_depth + 1})'
            )
            current_date -= timedelta(days=1)

        raise ResolutionExhaustedError(currency.value, rate_date, max(self.max_depth - depth, 0))

    async def _fetch_from_provider(
        self, provider: ExchangeRateProvider, currency: Currency, rate_date: date
    ) -> Decimal | None:
        try:
            rate = await asyncio.wait_for(
                provider.fetch_rate(currency, rate_date), timeout=self.provider_timeout
            )
        except asyncio.TimeoutError:
            logger.error(
                f'Provider {provider.name} timed out for {currency.value} on {rate_date.isoformat()}'
            )
            return None
        except Exception as e:
            logger.error(
                f'Provider {provider.name} failed for {currency.value} on {rate_date.isoformat()}: {e}'
            )
            return None

        if rate is None:
            return None
        try:
            rate = rate.quantize(RATE_PRECISION)
        except ArithmeticError:
            logger.error(
                f'Provider {provider.name} returned unusable rate {rate} for {currency.value} '
                f'on {rate_date.isoformat()}'
            )
            return None
        if rate <= 0 or rate > MAX_RATE:
            return None
        return rate
