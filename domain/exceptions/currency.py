from datetime import date


class CurrencyException(Exception):
    pass


class InvalidCurrencyError(CurrencyException):
    pass


class InvalidDateError(CurrencyException):
    pass


class ProviderError(CurrencyException):
    pass


class CacheError(CurrencyException):
    pass


class ResolutionExhaustedError(CurrencyException):
    def __init__(self, currency: str, requested_date: date, attempts: int):
        self.currency = currency
        self.requested_date = requested_date
        self.attempts = attempts
        super().__init__(
            f'Could not fetch exchange rate for {currency} on {requested_date.isoformat()} '
            f'after {attempts} attempts'
        )
