"""
Banking Ledger Simulator — FastAPI Application.

This is the entry point for the application.
All routers are registered here.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from banking_ledger.config import get_settings
from banking_ledger.logging_config import setup_logging
from banking_ledger.models.base import init_db
from banking_ledger.api.health import router as health_router
from banking_ledger.api.users import router as users_router
from banking_ledger.api.accounts import router as accounts_router
from banking_ledger.api.transactions import router as transactions_router
from banking_ledger.api.loans import router as loans_router

settings = get_settings()
setup_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The ledger is in memory, so tables are created on every start
    init_db()
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="An in-memory banking ledger: users, accounts, transactions and loans",
    lifespan=lifespan,
)

# Register routers
app.include_router(health_router)
app.include_router(users_router)
app.include_router(accounts_router)
app.include_router(transactions_router)
app.include_router(loans_router)
