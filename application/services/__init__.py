from .currency_service import CurrencyService
from .expense_service import ExpenseService
from .rate_service import RateService

__all__ = ['CurrencyService', 'ExpenseService', 'RateService']
