import uuid
from datetime import date, datetime

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from domain.exceptions.expense import ExpenseNotFoundError
from domain.models.expense import Expense, ExpenseCategory, ExpenseSource
from infrastructure.persistence.models.expense import ExpenseDB


def _to_domain(row: ExpenseDB) -> Expense:
	return Expense(
		id=row.id,
		amount=row.amount,
		currency=row.currency,
		exchange_rate=row.exchange_rate,
		rate_date=row.rate_date,
		amount_uah=row.amount_uah,
		date=row.date,
		source=row.source,
		category=row.category,
		description=row.description,
		parent_expense_id=row.parent_expense_id,
		created_at=row.created_at,
		updated_at=row.updated_at,
	)


class ExpenseRepository:
	def __init__(self, db_session: AsyncSession):
		self.db_session = db_session

	async def get(self, expense_id: str) -> Expense | None:
		row = await self.db_session.get(ExpenseDB, expense_id)
		return _to_domain(row) if row is not None else None

	async def list_children(self, parent_id: str) -> list[Expense]:
		stmt = (
			select(ExpenseDB)
			.filter(ExpenseDB.parent_expense_id == parent_id)
			.order_by(ExpenseDB.date.desc(), ExpenseDB.created_at.desc())
		)
		result = await self.db_session.execute(stmt)
		return [_to_domain(row) for row in result.scalars().all()]

	async def find_all(
		self,
		page: int = 1,
		limit: int = 20,
		date_from: date | None = None,
		date_to: date | None = None,
		category: ExpenseCategory | None = None,
		source: ExpenseSource | None = None,
	) -> tuple[list[Expense], int]:
		"""One page of top-level expenses, newest first, and the total matching count."""
		conditions = [ExpenseDB.parent_expense_id.is_(None)]
		if date_from is not None:
			conditions.append(ExpenseDB.date >= date_from)
		if date_to is not None:
			conditions.append(ExpenseDB.date <= date_to)
		if category is not None:
			conditions.append(ExpenseDB.category == category)
		if source is not None:
			conditions.append(ExpenseDB.source == source)

		total = await self.db_session.scalar(
			select(func.count()).select_from(ExpenseDB).filter(*conditions)
		)
		stmt = (
			select(ExpenseDB)
			.filter(*conditions)
			.order_by(ExpenseDB.date.desc(), ExpenseDB.created_at.desc())
			.offset((page - 1) * limit)
			.limit(limit)
		)
		result = await self.db_session.execute(stmt)
		return [_to_domain(row) for row in result.scalars().all()], total or 0

	async def add(self, expense: Expense) -> Expense:
		now = datetime.now()
		row = ExpenseDB(
			id=expense.id or str(uuid.uuid4()),
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
			created_at=now,
			updated_at=now,
		)
		self.db_session.add(row)
		await self.db_session.flush()
		return _to_domain(row)

	async def update(self, expense: Expense) -> Expense:
		row = await self.db_session.get(ExpenseDB, expense.id)
		if row is None:
			raise ExpenseNotFoundError(f'Expense with ID {expense.id} not found')

		row.amount = expense.amount
		row.currency = expense.currency
		row.exchange_rate = expense.exchange_rate
		row.rate_date = expense.rate_date
		row.amount_uah = expense.amount_uah
		row.date = expense.date
		row.source = expense.source
		row.category = expense.category
		row.description = expense.description
		row.updated_at = datetime.now()
		await self.db_session.flush()
		return _to_domain(row)
