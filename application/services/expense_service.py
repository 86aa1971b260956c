import dataclasses
import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from application.services.rate_service import RateService
from domain.exceptions.currency import CurrencyException
from domain.exceptions.expense import ExpenseNotFoundError, ExpenseValidationError
from domain.models.currency import SETTLEMENT_CURRENCY, Currency
from domain.models.expense import AMOUNT_PRECISION, Expense, ExpenseCategory, ExpenseSource
from infrastructure.persistence.repositories.expense import ExpenseRepository

logger = logging.getLogger(__name__)


def to_uah(amount: Decimal, rate: Decimal) -> Decimal:
	return (amount * rate).quantize(AMOUNT_PRECISION, rounding=ROUND_HALF_UP)


class ExpenseService:
	def __init__(self, repository: ExpenseRepository, rate_service: RateService):
		self.repository = repository
		self.rate_service = rate_service

	async def create_expense(
		self,
		amount: Decimal,
		currency: Currency,
		expense_date: date,
		source: ExpenseSource,
		category: ExpenseCategory,
		description: str,
		parent_expense_id: str | None = None,
	) -> Expense:
		if parent_expense_id:
			await self._require(parent_expense_id, kind='Parent expense')

		amount_uah, exchange_rate, rate_date = await self._convert(amount, currency, expense_date)

		return await self.repository.add(
			Expense(
				id='',
				amount=amount,
				currency=currency,
				exchange_rate=exchange_rate,
				rate_date=rate_date,
				amount_uah=amount_uah,
				date=expense_date,
				source=source,
				category=category,
				description=description,
				parent_expense_id=parent_expense_id or None,
			)
		)

	async def create_child_expense(
		self,
		parent_id: str,
		amount: Decimal,
		currency: Currency,
		expense_date: date,
		source: ExpenseSource,
		category: ExpenseCategory,
		description: str,
	) -> Expense:
		return await self.create_expense(
			amount=amount,
			currency=currency,
			expense_date=expense_date,
			source=source,
			category=category,
			description=description,
			parent_expense_id=parent_id,
		)

	async def get_expense(self, expense_id: str) -> Expense:
		expense = await self._require(expense_id)
		children = await self.repository.list_children(expense_id)
		return dataclasses.replace(expense, children=tuple(children))

	async def list_expenses(
		self,
		page: int = 1,
		limit: int = 20,
		date_from: date | None = None,
		date_to: date | None = None,
		category: ExpenseCategory | None = None,
		source: ExpenseSource | None = None,
	) -> tuple[list[Expense], int]:
		expenses, total = await self.repository.find_all(
			page=page,
			limit=limit,
			date_from=date_from,
			date_to=date_to,
			category=category,
			source=source,
		)
		with_children = []
		for expense in expenses:
			children = await self.repository.list_children(expense.id)
			with_children.append(dataclasses.replace(expense, children=tuple(children)))
		return with_children, total

	async def update_expense(
		self,
		expense_id: str,
		amount: Decimal | None = None,
		currency: Currency | None = None,
		expense_date: date | None = None,
		source: ExpenseSource | None = None,
		category: ExpenseCategory | None = None,
		description: str | None = None,
	) -> Expense:
		expense = await self._require(expense_id)

		currency_changed = currency is not None and currency != expense.currency
		date_changed = expense_date is not None and expense_date != expense.date
		amount_changed = amount is not None

		changes: dict = {}
		if currency_changed or date_changed or amount_changed:
			final_amount = amount if amount is not None else expense.amount
			final_currency = currency if currency is not None else expense.currency
			final_date = expense_date if expense_date is not None else expense.date

			if final_currency == SETTLEMENT_CURRENCY or currency_changed or date_changed:
				amount_uah, exchange_rate, rate_date = await self._convert(
					final_amount, final_currency, final_date
				)
			else:
				if expense.exchange_rate is None:
					raise ExpenseValidationError(
						f'Exchange rate is required for non-{SETTLEMENT_CURRENCY.value} currencies'
					)
				amount_uah = to_uah(final_amount, expense.exchange_rate)
				exchange_rate, rate_date = expense.exchange_rate, expense.rate_date

			changes.update(
				amount=final_amount,
				currency=final_currency,
				amount_uah=amount_uah,
				exchange_rate=exchange_rate,
				rate_date=rate_date,
			)

		if expense_date is not None:
			changes['date'] = expense_date
		if source is not None:
			changes['source'] = source
		if category is not None:
			changes['category'] = category
		if description is not None:
			changes['description'] = description

		if not changes:
			return expense
		return await self.repository.update(dataclasses.replace(expense, **changes))

	async def _convert(
		self, amount: Decimal, currency: Currency, expense_date: date
	) -> tuple[Decimal, Decimal | None, date | None]:
		if currency == SETTLEMENT_CURRENCY:
			logger.info(f'{currency.value} expense, amount_uah = {amount}')
			return amount, None, None

		try:
			rate = await self.rate_service.get_rate(currency, expense_date)
		except CurrencyException as e:
			logger.error(
				f'Failed to fetch exchange rate for {currency.value} on {expense_date.isoformat()}: {e}'
			)
			raise

		amount_uah = to_uah(amount, rate.rate)
		logger.info(
			f'Exchange rate for {currency.value} on {expense_date.isoformat()}: {rate.rate} '
			f'(source: {rate.source.value}, date: {rate.date.isoformat()}), amount_uah = {amount_uah}'
		)
		return amount_uah, rate.rate, rate.date

	async def _require(self, expense_id: str, kind: str = 'Expense') -> Expense:
		expense = await self.repository.get(expense_id)
		if expense is None:
			raise ExpenseNotFoundError(f'{kind} with ID {expense_id} not found')
		return expense
