from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from domain.models.currency import Currency

AMOUNT_PRECISION = Decimal('0.01')


class ExpenseSource(str, Enum):
    CASH = 'CASH'
    FUND_ACCOUNT = 'FUND_ACCOUNT'


class ExpenseCategory(str, Enum):
    PARTS = 'PARTS'
    TOOLS = 'TOOLS'
    REPAIR = 'REPAIR'
    CHARITY_TRANSFER = 'CHARITY_TRANSFER'
    DELIVERY = 'DELIVERY'


@dataclass(frozen=True)
class Expense:
    id: str
    amount: Decimal
    currency: Currency
    exchange_rate: Decimal | None
    rate_date: date | None
    amount_uah: Decimal
    date: date
    source: ExpenseSource
    category: ExpenseCategory
    description: str
    parent_expense_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    children: tuple['Expense', ...] = field(default_factory=tuple)
