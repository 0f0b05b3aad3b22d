import asyncio
import logging
from types import SimpleNamespace

import pytest

from app.core.db import Database, _native_error_code
from app.core.exceptions import DatabaseError, is_unique_violation


def test_native_error_code_extraction():
    assert _native_error_code(SimpleNamespace(sqlstate="23505")) == "23505"
    assert _native_error_code(SimpleNamespace(pgcode="23503")) == "23503"
    assert (
        _native_error_code(SimpleNamespace(sqlite_errorname="SQLITE_CONSTRAINT_UNIQUE"))
        == "SQLITE_CONSTRAINT_UNIQUE"
    )
    assert _native_error_code(ValueError("boom")) is None


def test_unique_violation_codes():
    assert is_unique_violation(DatabaseError("dup", "23505"))
    assert is_unique_violation(DatabaseError("dup", "SQLITE_CONSTRAINT_UNIQUE"))
    assert not is_unique_violation(DatabaseError("fk", "23503"))
    assert not is_unique_violation(DatabaseError("timeout"))


def test_executor_reports_rows_and_unique_violations(database_url):
    async def scenario():
        db = Database.from_url(database_url)
        try:
            await db.execute("CREATE TABLE t (id INTEGER PRIMARY KEY, code TEXT UNIQUE)")

            inserted = await db.execute(
                "INSERT INTO t (code) VALUES (:code) RETURNING id, code",
                {"code": "a"},
            )
            assert inserted.rowcount == 1
            assert inserted.first() == {"id": 1, "code": "a"}

            with pytest.raises(DatabaseError) as excinfo:
                await db.execute("INSERT INTO t (code) VALUES (:code)", {"code": "a"})
            assert is_unique_violation(excinfo.value)

            count = await db.execute("SELECT COUNT(*) AS n FROM t")
            assert count.scalar() == 1
        finally:
            await db.dispose()

    asyncio.run(scenario())


def test_transaction_rolls_back_on_error(database_url):
    async def scenario():
        db = Database.from_url(database_url)
        try:
            await db.execute("CREATE TABLE t (id INTEGER PRIMARY KEY, code TEXT UNIQUE)")

            with pytest.raises(DatabaseError):
                async with db.transaction() as tx:
                    await tx.execute("INSERT INTO t (code) VALUES ('x')")
                    await tx.execute("INSERT INTO t (code) VALUES ('x')")

            assert (await db.execute("SELECT COUNT(*) FROM t")).scalar() == 0
        finally:
            await db.dispose()

    asyncio.run(scenario())


def test_syntax_error_is_wrapped(database_url):
    async def scenario():
        db = Database.from_url(database_url)
        try:
            with pytest.raises(DatabaseError) as excinfo:
                await db.execute("SELEC nothing")
            assert not is_unique_violation(excinfo.value)
        finally:
            await db.dispose()

    asyncio.run(scenario())


class _UnreachableEngine:
    def __init__(self, error):
        self.error = error

    def begin(self):
        raise self.error


@pytest.mark.parametrize(
    "error",
    [ConnectionRefusedError(111, "Connection refused"), asyncio.TimeoutError()],
)
def test_connect_failures_become_database_errors(error):
    db = Database(_UnreachableEngine(error))

    with pytest.raises(DatabaseError) as excinfo:
        asyncio.run(db.ping())

    assert excinfo.value.__cause__ is error
    assert excinfo.value.code is None
    assert excinfo.value.message


def test_db_logger_has_its_own_level():
    from app.core.logging import DB_LOG_LEVEL

    assert logging.getLogger("app.core.db").level == logging.getLevelName(DB_LOG_LEVEL)
