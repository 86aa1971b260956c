from .base import BaseRateProvider, ExchangeRateProvider
from .nbu import NBUProvider
from .privatbank import PrivatBankProvider

__all__ = ['BaseRateProvider', 'ExchangeRateProvider', 'NBUProvider', 'PrivatBankProvider']
