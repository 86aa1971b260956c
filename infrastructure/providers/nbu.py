from datetime import date
from decimal import Decimal

import httpx

from domain.exceptions.currency import ProviderError
from domain.models.currency import Currency, RateSource
from infrastructure.providers.base import BaseRateProvider, parse_rate


class NBUProvider(BaseRateProvider):
	"""Official rates of the National Bank of Ukraine (primary source)."""

	BASE_URL = 'https://bank.gov.ua/NBUStatService/v1/statdirectory'

	def __init__(
		self,
		client: httpx.AsyncClient | None = None,
		timeout: float = 5.0,
		base_url: str | None = None,
	):
		super().__init__(base_url or self.BASE_URL, client=client, timeout=timeout)

	@property
	def name(self) -> str:
		return 'nbu'

	@property
	def source(self) -> RateSource:
		return RateSource.NBU

	async def fetch_rate(self, currency: Currency, rate_date: date) -> Decimal | None:
		data = await self._request(
			'exchange',
			{'valcode': currency.value, 'date': rate_date.strftime('%Y%m%d'), 'json': ''},
		)

		if not isinstance(data, list):
			raise ProviderError(f'NBU returned unexpected payload type {type(data).__name__}')
		if not data:
			return None

		entry = data[0]
		if not isinstance(entry, dict):
			raise ProviderError('NBU returned malformed rate entry')
		return parse_rate(entry.get('rate'))
