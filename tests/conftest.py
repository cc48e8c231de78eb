"""Shared fixtures for domain and core tests."""

import sqlite3
from typing import Iterator

import pytest

from songlink.core.database import get_db_connection, init_database


@pytest.fixture
def db_path(tmp_path):
    """Path to a freshly initialized SQLite database."""
    path = tmp_path / "songlink.db"
    init_database(path)
    return path


@pytest.fixture
def conn(db_path) -> Iterator[sqlite3.Connection]:
    with get_db_connection(db_path) as connection:
        yield connection


@pytest.fixture
def anyio_backend():
    """The code under test targets asyncio (e.g. asyncio.to_thread)."""
    return "asyncio"
