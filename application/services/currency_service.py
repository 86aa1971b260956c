from datetime import date, datetime

from domain.exceptions.currency import InvalidCurrencyError, InvalidDateError
from domain.models.currency import SETTLEMENT_CURRENCY, Currency


class CurrencyService:
	def get_supported_currencies(self) -> list[str]:
		return [c.value for c in Currency if c != SETTLEMENT_CURRENCY]

	def validate_currency(self, code: str) -> Currency:
		try:
			currency = Currency(code.strip().upper())
		except ValueError as e:
			raise InvalidCurrencyError(f'Currency {code} is not supported') from e

		if currency == SETTLEMENT_CURRENCY:
			raise InvalidCurrencyError(
				f'{currency.value} is the settlement currency and has no exchange rate'
			)
		return currency

	def parse_date(self, value: str) -> date:
		"""Accept ``YYYY-MM-DD`` or a full ISO-8601 timestamp; only the date part is kept."""
		value = value.strip()
		try:
			return date.fromisoformat(value)
		except ValueError:
			pass
		try:
			return datetime.fromisoformat(value.replace('Z', '+00:00')).date()
		except ValueError as e:
			raise InvalidDateError(f'Invalid date format: {value}') from e
