import datetime
import uuid
from decimal import Decimal

from sqlalchemy import DECIMAL, Date, DateTime, Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from domain.models.currency import Currency
from domain.models.expense import ExpenseCategory, ExpenseSource
from infrastructure.persistence.models.currency import Base


class ExpenseDB(Base):
	__tablename__ = 'expenses'

	id: Mapped[str] = mapped_column(
		String(36), primary_key=True, default=lambda: str(uuid.uuid4())
	)
	amount: Mapped[Decimal] = mapped_column(DECIMAL(precision=10, scale=2), nullable=False)
	currency: Mapped[Currency] = mapped_column(
		Enum(Currency, name='currency', native_enum=False, length=5), nullable=False
	)
	exchange_rate: Mapped[Decimal | None] = mapped_column(
		DECIMAL(precision=10, scale=4), nullable=True
	)
	rate_date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
	amount_uah: Mapped[Decimal] = mapped_column(DECIMAL(precision=10, scale=2), nullable=False)
	date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
	source: Mapped[ExpenseSource] = mapped_column(
		Enum(ExpenseSource, name='expense_source', native_enum=False, length=20), nullable=False
	)
	category: Mapped[ExpenseCategory] = mapped_column(
		Enum(ExpenseCategory, name='expense_category', native_enum=False, length=30),
		nullable=False,
	)
	description: Mapped[str] = mapped_column(Text, nullable=False)
	parent_expense_id: Mapped[str | None] = mapped_column(
		String(36), ForeignKey('expenses.id', ondelete='CASCADE'), nullable=True
	)
	created_at: Mapped[datetime.datetime] = mapped_column(
		DateTime, nullable=False, default=datetime.datetime.now
	)
	updated_at: Mapped[datetime.datetime] = mapped_column(
		DateTime, nullable=False, default=datetime.datetime.now, onupdate=datetime.datetime.now
	)

	__table_args__ = (
		Index('idx_expenses_parent', 'parent_expense_id'),
		Index('idx_expenses_date', 'date'),
	)
