import datetime
from decimal import Decimal

from sqlalchemy import DECIMAL, Date, Enum, Index, Integer, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from domain.models.currency import Currency, RateSource


class Base(DeclarativeBase):
	pass


class ExchangeRateDB(Base):
	__tablename__ = 'exchange_rates'

	id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
	currency: Mapped[Currency] = mapped_column(
		Enum(Currency, name='currency', native_enum=False, length=5), nullable=False
	)
	rate: Mapped[Decimal] = mapped_column(DECIMAL(precision=10, scale=4), nullable=False)
	date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
	source: Mapped[RateSource] = mapped_column(
		Enum(RateSource, name='rate_source', native_enum=False, length=20), nullable=False
	)

	__table_args__ = (
		Index('idx_exchange_rates_date', 'date'),
		UniqueConstraint('currency', 'date', name='uq_exchange_rates_currency_date'),
	)
