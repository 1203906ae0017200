"""FastAPI app entrypoint."""
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from openbill.logging_setup import setup_logging
from openbill.database import engine, Base
from openbill import models  # noqa: F401  registers tables on Base.metadata
from openbill.routers import groups, expenses, balances

setup_logging()

Base.metadata.create_all(bind=engine)

_origins_env = os.getenv("ALLOWED_ORIGINS", "")
allowed_origins = [o.strip() for o in _origins_env.split(",") if o.strip()] if _origins_env else ["*"]

app = FastAPI(
    title="OpenBill API",
    description="Share a running tab with a group. Track who paid and who owes whom.",
    version="1.0.0",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(groups.router, prefix="/api")
app.include_router(expenses.router, prefix="/api")
app.include_router(balances.router, prefix="/api")


@app.get("/")
def root():
    return {"message": "OpenBill API", "docs": "/docs"}
