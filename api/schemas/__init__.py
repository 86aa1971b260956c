from .requests import ExpenseCreateRequest, ExpenseFilterParams, ExpenseUpdateRequest
from .responses import (
	ExchangeRateResponse,
	ExpenseListResponse,
	ExpenseResponse,
	SupportedCurrenciesResponse,
)

__all__ = [
	'ExchangeRateResponse',
	'ExpenseCreateRequest',
	'ExpenseFilterParams',
	'ExpenseListResponse',
	'ExpenseResponse',
	'ExpenseUpdateRequest',
	'SupportedCurrenciesResponse',
]
