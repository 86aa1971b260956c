from datetime import date
from decimal import Decimal

import httpx

from domain.exceptions.currency import ProviderError
from domain.models.currency import Currency, RateSource
from infrastructure.providers.base import BaseRateProvider, parse_rate


class PrivatBankProvider(BaseRateProvider):
	"""PrivatBank archive rates; uses the NBU rate it republishes (``saleRateNB``)."""

	BASE_URL = 'https://api.privatbank.ua/p24api'

	def __init__(
		self,
		client: httpx.AsyncClient | None = None,
		timeout: float = 5.0,
		base_url: str | None = None,
	):
		super().__init__(base_url or self.BASE_URL, client=client, timeout=timeout)

	@property
	def name(self) -> str:
		return 'privatbank'

	@property
	def source(self) -> RateSource:
		return RateSource.PRIVATBANK

	async def fetch_rate(self, currency: Currency, rate_date: date) -> Decimal | None:
		data = await self._request(
			'exchange_rates',
			{'json': '', 'date': rate_date.strftime('%d.%m.%Y')},
		)

		if not isinstance(data, dict):
			raise ProviderError(
				f'PrivatBank returned unexpected payload type {type(data).__name__}'
			)

		rates = data.get('exchangeRate') or []
		if not isinstance(rates, list):
			raise ProviderError('PrivatBank exchangeRate field is not a list')

		for entry in rates:
			if isinstance(entry, dict) and entry.get('currency') == currency.value:
				return parse_rate(entry.get('saleRateNB'))
		return None
