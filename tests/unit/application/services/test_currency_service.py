# nosec B101


import pytest
from datetime import date

from application.services.currency_service import CurrencyService
from domain.exceptions.currency import InvalidCurrencyError, InvalidDateError
from domain.models.currency import Currency


@pytest.fixture
def service():
    return CurrencyService()


def test_supported_currencies_exclude_settlement_currency(service):
    assert service.get_supported_currencies() == ['USD', 'EUR']


@pytest.mark.parametrize('code, expected', [('USD', Currency.USD), ('eur', Currency.EUR), (' usd ', Currency.USD)])
def test_validate_currency_normalizes_case(service, code, expected):
    assert service.validate_currency(code) == expected


@pytest.mark.parametrize('code', ['GBP', 'XYZ', '', 'UAH'])
def test_validate_currency_rejects_unsupported(service, code):
    with pytest.raises(InvalidCurrencyError):
        service.validate_currency(code)


@pytest.mark.parametrize('value', ['2024-01-06', '2024-01-06T00:00:00.000Z', '2024-01-06T15:30:00+02:00'])
def test_parse_date_accepts_dates_and_timestamps(service, value):
    assert service.parse_date(value) == date(2024, 1, 6)


@pytest.mark.parametrize('value', ['06.01.2024', 'yesterday', '2024-13-01'])
def test_parse_date_rejects_garbage(service, value):
    with pytest.raises(InvalidDateError):
        service.parse_date(value)
