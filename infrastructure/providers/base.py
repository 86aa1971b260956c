from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Protocol

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from domain.exceptions.currency import ProviderError
from domain.models.currency import MAX_RATE, RATE_PRECISION, Currency, RateSource

RETRY_ATTEMPTS = 2


class ExchangeRateProvider(Protocol):
    """Anything that can answer "how many UAH for one unit of currency on this date"."""

    @property
    def name(self) -> str: ...

    @property
    def source(self) -> RateSource: ...

    async def fetch_rate(self, currency: Currency, rate_date: date) -> Decimal | None: ...

    async def close(self) -> None: ...


def parse_rate(value: Any) -> Decimal | None:
    """Convert a payload rate to a 4-place Decimal. Missing or non-positive values mean no data."""
    if value is None or isinstance(value, bool):
        return None
    try:
        rate = Decimal(str(value))
    except InvalidOperation as e:
        raise ProviderError(f'Rate value {value!r} is not a usable number') from e
    if not rate.is_finite():
        return None
    if rate > MAX_RATE:
        raise ProviderError(f'Rate value {value!r} is out of range')
    rate = rate.quantize(RATE_PRECISION)
    if rate <= 0:
        return None
    return rate


class BaseRateProvider(ABC):
    """A base class for rate providers, handling common HTTP logic."""

    def __init__(self, base_url: str, client: httpx.AsyncClient | None = None, timeout: float = 5.0):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def source(self) -> RateSource:
        ...

    @abstractmethod
    async def fetch_rate(self, currency: Currency, rate_date: date) -> Decimal | None:
        ...

    @retry(
        stop=stop_after_attempt(RETRY_ATTEMPTS),
        wait=wait_exponential(multiplier=0.1, max=1),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    async def _get(self, url: str, params: dict) -> httpx.Response:
        return await self._client.get(url, params=params)

    async def _request(self, endpoint: str, params: dict) -> Any:
        url = f'{self.base_url}/{endpoint}'
        try:
            response = await self._get(url, params)
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            raise ProviderError(
                f'{self.name} HTTP error {e.response.status_code}: {e.response.text[:200]}'
            ) from e
        except httpx.RequestError as e:
            raise ProviderError(f'{self.name} request failed: {e.__class__.__name__}') from e
        except Exception as e:
            raise ProviderError(f'{self.name} response parsing error: {str(e)}') from e

    async def close(self) -> None:
        await self._client.aclose()
