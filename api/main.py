import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.dependencies import cleanup_dependencies, deps, init_dependencies
from api.error_handlers import register_exception_handlers
from api.routes import currency, expenses
from config.logger import configure_logging
from config.settings import get_settings

settings = get_settings()

configure_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	logger.info('Starting Expense Tracker API...')

	init_dependencies()

	if deps.db is None:
		raise RuntimeError('Database not initialized')
	await deps.db.create_tables()
	logger.info('Database tables created')

	logger.info('Application ready')

	yield

	logger.info('Shutting down...')
	await cleanup_dependencies()


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
	logger.error(f'Unhandled exception: {exc}', exc_info=True)
	return JSONResponse(status_code=500, content={'detail': 'Internal server error'})


app.include_router(currency.router)
app.include_router(expenses.router)
register_exception_handlers(app)


if __name__ == '__main__':
	import uvicorn

	uvicorn.run('api.main:app', host='0.0.0.0', port=8000, reload=settings.DEBUG)
