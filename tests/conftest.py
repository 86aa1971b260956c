"""
Shared fakes for rate resolution tests.
"""

import asyncio
from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio

from domain.models.currency import Currency, ExchangeRate, RateSource
from infrastructure.persistence.database import Database


class FakeProvider:
    """Provider double returning canned rates keyed by (currency, date)."""

    def __init__(self, name: str, source: RateSource, rates: dict | None = None,
                 error: Exception | None = None, delay: float = 0, call_log: list | None = None):
        self._name = name
        self._source = source
        self.rates = rates or {}
        self.error = error
        self.delay = delay
        self.calls: list[tuple[Currency, date]] = []
        self.call_log = call_log if call_log is not None else []

    @property
    def name(self) -> str:
        return self._name

    @property
    def source(self) -> RateSource:
        return self._source

    async def fetch_rate(self, currency: Currency, rate_date: date) -> Decimal | None:
        self.calls.append((currency, rate_date))
        self.call_log.append((self._name, rate_date))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.rates.get((currency, rate_date))

    async def close(self) -> None:
        pass


class InMemoryRateRepository:
    def __init__(self, records: list[ExchangeRate] | None = None):
        self.records = {(r.currency, r.date): r for r in records or []}
        self.saved: list[ExchangeRate] = []

    async def find(self, currency: Currency, rate_date: date) -> ExchangeRate | None:
        return self.records.get((currency, rate_date))

    async def save(self, rate: ExchangeRate) -> ExchangeRate:
        existing = self.records.get((rate.currency, rate.date))
        if existing is not None:
            return existing
        self.records[(rate.currency, rate.date)] = rate
        self.saved.append(rate)
        return rate


@pytest.fixture
def call_log() -> list:
    return []


@pytest.fixture
def make_nbu(call_log):
    def _make(**kwargs) -> FakeProvider:
        return FakeProvider('nbu', RateSource.NBU, call_log=call_log, **kwargs)
    return _make


@pytest.fixture
def make_privatbank(call_log):
    def _make(**kwargs) -> FakeProvider:
        return FakeProvider('privatbank', RateSource.PRIVATBANK, call_log=call_log, **kwargs)
    return _make


@pytest.fixture
def memory_repository() -> InMemoryRateRepository:
    return InMemoryRateRepository()


@pytest_asyncio.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await db.create_tables()
    yield db
    await db.close()


@pytest.fixture
def make_repository():
    def _make(records: list[ExchangeRate] | None = None) -> InMemoryRateRepository:
        return InMemoryRateRepository(records)
    return _make
