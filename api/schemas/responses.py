import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from domain.models.currency import Currency, RateSource
from domain.models.expense import Expense, ExpenseCategory, ExpenseSource


class ExchangeRateResponse(BaseModel):
	currency: Currency = Field(..., description='Foreign currency code')
	rate: Decimal = Field(..., description='UAH per 1 unit of currency')
	date: datetime.date = Field(..., description='Date the rate was published for')
	source: RateSource = Field(..., description='Provider the rate came from')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'currency': 'USD',
				'rate': 38.0123,
				'date': '2024-01-05',
				'source': 'NBU',
			}
		}
	)


class SupportedCurrenciesResponse(BaseModel):
	currencies: list[str] = Field(description='List of currency codes')

	model_config = ConfigDict(json_schema_extra={'examples': [{'currencies': ['USD', 'EUR']}]})


class ExpenseResponse(BaseModel):
	id: str
	amount: Decimal
	currency: Currency
	exchange_rate: Decimal | None = Field(None, description='Rate used for the UAH amount')
	rate_date: datetime.date | None = Field(None, description='Date the rate was published for')
	amount_uah: Decimal
	date: datetime.date
	source: ExpenseSource
	category: ExpenseCategory
	description: str
	parent_expense_id: str | None = None
	created_at: datetime.datetime | None = None
	updated_at: datetime.datetime | None = None
	children: list['ExpenseResponse'] = Field(default_factory=list)

	@classmethod
	def from_domain(cls, expense: Expense) -> 'ExpenseResponse':
		return cls(
			id=expense.id,
			amount=expense.amount,
			currency=expense.currency,
			exchange_rate=expense.exchange_rate,
			rate_date=expense.rate_date,
			amount_uah=expense.amount_uah,
			date=expense.date,
			source=expense.source,
			category=expense.category,
			description=expense.description,
			parent_expense_id=expense.parent_expense_id,
			created_at=expense.created_at,
			updated_at=expense.updated_at,
			children=[cls.from_domain(child) for child in expense.children],
		)


class ExpenseListResponse(BaseModel):
	data: list[ExpenseResponse]
	total: int = Field(..., description='Number of top-level expenses matching the filters')
	page: int
	limit: int
