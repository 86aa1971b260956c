import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.models.currency import Currency
from domain.models.expense import ExpenseCategory, ExpenseSource


class ExpenseCreateRequest(BaseModel):
	amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
	currency: Currency
	date: datetime.date
	source: ExpenseSource
	category: ExpenseCategory
	description: str = Field(..., min_length=1)
	parent_expense_id: str | None = None

	@field_validator('currency', mode='before')
	@classmethod
	def uppercase_currency(cls, v):
		return v.upper() if isinstance(v, str) else v

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'amount': 100.00,
				'currency': 'USD',
				'date': '2024-01-06',
				'source': 'CASH',
				'category': 'PARTS',
				'description': 'Brake pads',
			}
		}
	)


class ExpenseUpdateRequest(BaseModel):
	amount: Decimal | None = Field(None, gt=0, max_digits=10, decimal_places=2)
	currency: Currency | None = None
	date: datetime.date | None = None
	source: ExpenseSource | None = None
	category: ExpenseCategory | None = None
	description: str | None = Field(None, min_length=1)

	@field_validator('currency', mode='before')
	@classmethod
	def uppercase_currency(cls, v):
		return v.upper() if isinstance(v, str) else v


class ExpenseFilterParams(BaseModel):
	page: int = Field(1, ge=1)
	limit: int = Field(20, ge=1, le=100)
	date_from: datetime.date | None = None
	date_to: datetime.date | None = None
	category: ExpenseCategory | None = None
	source: ExpenseSource | None = None
