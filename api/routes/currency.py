from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_currency_service, get_rate_service
from api.schemas import ExchangeRateResponse, SupportedCurrenciesResponse
from application.services import CurrencyService, RateService

router = APIRouter(prefix='/api', tags=['currency'])


@router.get(
	'/exchange-rates',
	response_model=ExchangeRateResponse,
	status_code=status.HTTP_200_OK,
	summary='Get the UAH exchange rate of a currency for a date',
)
async def get_exchange_rate(
	currency: Annotated[str, Query(min_length=3, max_length=5)],
	date: Annotated[str, Query(min_length=8, description='ISO-8601 date or timestamp')],
	currency_service: Annotated[CurrencyService, Depends(get_currency_service)],
	rate_service: Annotated[RateService, Depends(get_rate_service)],
) -> ExchangeRateResponse:
	validated_currency = currency_service.validate_currency(currency)
	rate_date = currency_service.parse_date(date)

	result = await rate_service.get_rate(validated_currency, rate_date)
	return ExchangeRateResponse(
		currency=result.currency,
		rate=result.rate,
		date=result.date,
		source=result.source,
	)


@router.get(
	'/currencies',
	response_model=SupportedCurrenciesResponse,
	status_code=status.HTTP_200_OK,
	summary='List currencies with exchange rates',
)
async def get_supported_currencies(
	service: Annotated[CurrencyService, Depends(get_currency_service)],
) -> SupportedCurrenciesResponse:
	return SupportedCurrenciesResponse(currencies=service.get_supported_currencies())
