import json
from datetime import date, timedelta
from decimal import Decimal

from redis import asyncio as redis

from domain.exceptions.currency import CacheError
from domain.models.currency import Currency, ExchangeRate, RateSource


class RedisCacheService:
    def __init__(self, redis_client: redis.Redis, rate_ttl: timedelta = timedelta(hours=24)):
        self.redis = redis_client
        self.rate_ttl = rate_ttl

    def _make_rate_key(self, currency: Currency, rate_date: date) -> str:
        return f"rate:{currency.value}:{rate_date.isoformat()}"

    async def get_rate(self, currency: Currency, rate_date: date) -> ExchangeRate | None:
        key = self._make_rate_key(currency, rate_date)
        data = await self.redis.get(key)

        if not data:
            return None

        try:
            rate_dict = json.loads(data)
            return ExchangeRate(
                currency=Currency(rate_dict["currency"]),
                rate=Decimal(rate_dict["rate"]),
                date=date.fromisoformat(rate_dict["date"]),
                source=RateSource(rate_dict["source"]),
            )
        except (ValueError, KeyError, TypeError, ArithmeticError) as e:
            raise CacheError(f"Corrupted cache entry {key}: {e}") from e

    async def set_rate(self, rate: ExchangeRate) -> None:
        # Keyed on the observed date; a fallback hit for an earlier day is never stored
        # under the requested day.
        key = self._make_rate_key(rate.currency, rate.date)

        rate_dict = {
            "currency": rate.currency.value,
            "rate": str(rate.rate),
            "date": rate.date.isoformat(),
            "source": rate.source.value,
        }

        await self.redis.setex(key, self.rate_ttl, json.dumps(rate_dict))
