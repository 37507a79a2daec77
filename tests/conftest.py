# tests/conftest.py
import logging
from datetime import date
from typing import Any, AsyncGenerator, Dict, List

import aiosqlite
import pytest
import pytest_asyncio

from qs_filter import Configuration, QueryStringParser

# Surface library debug logs in failing test output.
logging.getLogger("qs_filter").setLevel(logging.DEBUG)

CUSTOMERS_TABLE = "customers"

# The ten-customer fixture used by the end-to-end SQLite tests.
CUSTOMERS: List[Dict[str, Any]] = [
    {"name": "Leesa Tex", "age": 22, "totalWealth": 50, "lastLogin": date(2022, 7, 6), "isActive": True},
    {"name": "Gabby Fitz", "age": 22, "totalWealth": 128.65, "lastLogin": date(2022, 7, 6), "isActive": False},
    {"name": "Malvina Al", "age": 19, "totalWealth": 79.01, "lastLogin": date(2022, 7, 6), "isActive": False},
    {"name": "Topher Gage", "age": 18, "totalWealth": 12.50, "lastLogin": None, "isActive": True},
    {"name": "Percival Emery", "age": 26, "totalWealth": 697.02, "lastLogin": date(2022, 5, 28), "isActive": True},
    {"name": "Rosalind Edmund", "age": 31, "totalWealth": 1024, "lastLogin": date(2022, 6, 12), "isActive": False},
    {"name": "Sherlyn Axel", "age": 44, "totalWealth": 10000.99, "lastLogin": date(2021, 12, 18), "isActive": False},
    {"name": "Satchel Veva", "age": 49, "totalWealth": 10001.12, "lastLogin": date(2021, 11, 3), "isActive": True},
    {"name": "Eileen Myrna", "age": 55, "totalWealth": 760, "lastLogin": date(2022, 4, 22), "isActive": True},
    {"name": "Abbi Xanthia", "age": 27, "totalWealth": 99999, "lastLogin": None, "isActive": True},
]


@pytest.fixture
def config() -> Configuration:
    return Configuration()


@pytest.fixture
def parser() -> QueryStringParser:
    return QueryStringParser()


@pytest.fixture
def date_config() -> Configuration:
    return Configuration(
        date_only_compare=True,
        date_only_fields={"createdAt", "updatedAt", "lastLogin"},
    )


@pytest.fixture
def date_parser(date_config: Configuration) -> QueryStringParser:
    return QueryStringParser(date_config)


@pytest_asyncio.fixture
async def customers_db() -> AsyncGenerator[aiosqlite.Connection, None]:
    """In-memory SQLite database seeded with CUSTOMERS."""
    async with aiosqlite.connect(":memory:") as conn:
        await conn.execute(
            f"""
            CREATE TABLE "{CUSTOMERS_TABLE}" (
                "id" INTEGER PRIMARY KEY AUTOINCREMENT,
                "name" TEXT NOT NULL,
                "age" INTEGER NOT NULL DEFAULT 18,
                "totalWealth" REAL NOT NULL DEFAULT 0,
                "lastLogin" TEXT,
                "isActive" INTEGER NOT NULL DEFAULT 1
            )
            """
        )
        await conn.executemany(
            f'INSERT INTO "{CUSTOMERS_TABLE}" '
            '("name", "age", "totalWealth", "lastLogin", "isActive") VALUES (?, ?, ?, ?, ?)',
            [
                (
                    c["name"],
                    c["age"],
                    c["totalWealth"],
                    c["lastLogin"].isoformat() if c["lastLogin"] else None,
                    1 if c["isActive"] else 0,
                )
                for c in CUSTOMERS
            ],
        )
        await conn.commit()
        yield conn
