from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	DATABASE_URL: str = 'sqlite+aiosqlite:///./expense_tracker.db'

	REDIS_URL: str = 'redis://localhost:6379'
	REDIS_ENABLED: bool = True
	RATE_CACHE_TTL_HOURS: int = 24

	# Rate providers
	NBU_BASE_URL: str = 'https://bank.gov.ua/NBUStatService/v1/statdirectory'
	PRIVATBANK_BASE_URL: str = 'https://api.privatbank.ua/p24api'
	PROVIDER_TIMEOUT_SECONDS: float = 5.0
	PROVIDER_DEADLINE_SECONDS: float = 15.0
	RATE_MAX_FALLBACK_DEPTH: int = 10

	# Application
	APP_NAME: str = 'Expense Tracker API'
	DEBUG: bool = True
	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
