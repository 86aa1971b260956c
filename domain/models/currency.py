from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

RATE_PRECISION = Decimal('0.0001')
# Largest value a NUMERIC(10, 4) rate column holds
MAX_RATE = Decimal('999999.9999')


class Currency(str, Enum):
    UAH = 'UAH'
    USD = 'USD'
    EUR = 'EUR'


SETTLEMENT_CURRENCY = Currency.UAH


class RateSource(str, Enum):
    NBU = 'NBU'
    PRIVATBANK = 'PRIVATBANK'


@dataclass(frozen=True)
class ExchangeRate:
    currency: Currency
    rate: Decimal  # UAH per 1 unit of currency
    date: date  # date the rate was observed for, not necessarily the one requested
    source: RateSource
