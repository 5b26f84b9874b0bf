"""ddlbridge - CREATE TABLE conversion between SQLite, MySQL/MariaDB and PostgreSQL.

Importing the package loads ``settings.yaml``, prepares the log directory and
builds ``app``, the FastAPI service that exposes the translator under
``/api/v1`` (``/convert``, ``/parse``, ``/dialects``). Library callers that
only need the converter can import ``ddlbridge.services.sql_conversion``.
"""
import os

from ddlbridge.config import config
from .utils.logger import setup_logger

# base_dirs (currently just the log directory) must exist before the first
# setup_logger() call opens ddlbridge.log.
for key, path in config.get('base_dirs', {}).items():
    os.makedirs(path, exist_ok=True)

init_logger = setup_logger('ddlbridge_init')
init_logger.info(
    f"ddlbridge initialised; default target dialect: "
    f"{config.get('conversion', {}).get('default_target', 'pgsql')}"
)

# ------------------------- FastAPI application ---------------------------

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

app = FastAPI(
    title="DDL Bridge API",
    description="Translate CREATE TABLE scripts between SQLite, MySQL/MariaDB and PostgreSQL.",
    version=config.get('api', {}).get('version', 'v1'),
)

# Browser front-ends paste scripts from any origin.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

from .api.routes import api_router

app.include_router(api_router)

for route in app.routes:
    if hasattr(route, 'methods'):
        init_logger.debug(f"route {sorted(route.methods)} {route.path}")
