import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.currency import (
	InvalidCurrencyError,
	InvalidDateError,
	ResolutionExhaustedError,
)
from domain.exceptions.expense import ExpenseNotFoundError, ExpenseValidationError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(InvalidCurrencyError)
	async def invalid_currency_handler(request: Request, exc: InvalidCurrencyError):
		return JSONResponse(status_code=400, content={'detail': str(exc)})

	@app.exception_handler(InvalidDateError)
	async def invalid_date_handler(request: Request, exc: InvalidDateError):
		return JSONResponse(status_code=400, content={'detail': str(exc)})

	@app.exception_handler(ExpenseValidationError)
	async def expense_validation_handler(request: Request, exc: ExpenseValidationError):
		return JSONResponse(status_code=400, content={'detail': str(exc)})

	@app.exception_handler(ExpenseNotFoundError)
	async def expense_not_found_handler(request: Request, exc: ExpenseNotFoundError):
		return JSONResponse(status_code=404, content={'detail': str(exc)})

	@app.exception_handler(ResolutionExhaustedError)
	async def resolution_exhausted_handler(request: Request, exc: ResolutionExhaustedError):
		logger.error(f'Rate resolution exhausted: {exc}')
		return JSONResponse(status_code=503, content={'detail': str(exc)})
