"""Shared fixtures. Log output goes to a throwaway directory for the whole session."""

import os
import tempfile

# Must be set before ddlbridge.config is imported by any test module.
os.environ.setdefault("DDLBRIDGE_LOG_DIR", tempfile.mkdtemp(prefix="ddlbridge-logs-"))

import pytest  # noqa: E402

USERS_DDL = (
    "CREATE TABLE users (id INT NOT NULL AUTO_INCREMENT PRIMARY KEY, "
    "username VARCHAR(255) NOT NULL, email VARCHAR(255), created_at DATETIME);"
)


@pytest.fixture
def users_ddl() -> str:
    return USERS_DDL
