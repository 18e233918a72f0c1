# =============================================================================
# File: collabhub/infra/persistence/pg_client.py
# =============================================================================
# AsyncPG pool helper: module-level pool, CRUD wrappers, transactions that
# share their connection through a ContextVar, and startup schema execution.
# =============================================================================

from __future__ import annotations

import asyncio
import logging
import pathlib
import time
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import Any, AsyncIterator, List, Optional

import asyncpg
from asyncpg.exceptions import PostgresError
from dotenv import load_dotenv

from collabhub.common.exceptions.exceptions import PersistenceFailure
from collabhub.config.pg_client_config import get_database_config, DatabaseConfig

load_dotenv()

log = logging.getLogger("collabhub.infra.pg_client")

# Connection of the innermost active transaction() block, if any
_current_transaction_connection: ContextVar[Optional[asyncpg.Connection]] = ContextVar(
    'transaction_connection', default=None
)

_POOL: Optional[asyncpg.Pool] = None
_POOL_LOCK = asyncio.Lock()

# Arbitrary but fixed key for pg_advisory_lock around schema execution
_SCHEMA_LOCK_KEY = 7_412_260_001

_CONFIG: Optional[DatabaseConfig] = None


def get_config() -> DatabaseConfig:
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = get_database_config()
    return _CONFIG


def get_postgres_dsn() -> str:
    dsn = get_config().get_dsn()
    if not dsn:
        raise RuntimeError("PostgreSQL DSN not configured (set PG_DSN or POSTGRES_DSN)")
    return dsn


# =============================================================================
# Pool lifecycle
# =============================================================================

async def init_db_pool(dsn_or_url: Optional[str] = None, **pool_kwargs: Any) -> asyncpg.Pool:
    """Initialize the global asyncpg pool. Idempotent."""
    global _POOL

    async with _POOL_LOCK:
        if _POOL is not None and not _POOL.is_closing():
            return _POOL

        dsn = dsn_or_url or get_postgres_dsn()
        params = get_config().to_asyncpg_params()
        params.update(pool_kwargs)

        log.info(f"Initializing PostgreSQL pool (hidden DSN): {dsn.split('@')[-1]}")
        try:
            pool = await asyncpg.create_pool(dsn=dsn, **params)
            async with pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
        except (PostgresError, OSError, asyncio.TimeoutError) as e:
            log.critical(f"Failed to init PostgreSQL pool: {e}", exc_info=True)
            _POOL = None
            raise PersistenceFailure(f"PostgreSQL pool init error: {e}") from e

        _POOL = pool
        log.info(f"PostgreSQL pool ready. Min/Max size: {params['min_size']}/{params['max_size']}")
        return _POOL


async def get_pool(ensure_initialized: bool = True) -> asyncpg.Pool:
    """Get the global pool, init if needed (default)."""
    if _POOL is None or _POOL.is_closing():
        if ensure_initialized:
            return await init_db_pool()
        raise PersistenceFailure("PostgreSQL pool not available")
    return _POOL


async def close_db_pool() -> None:
    """Close the global pool gracefully."""
    global _POOL

    async with _POOL_LOCK:
        pool = _POOL
        _POOL = None
        if pool and not pool.is_closing():
            log.info("Closing PostgreSQL pool...")
            try:
                await pool.close()
                log.info("PostgreSQL pool closed.")
            except (PostgresError, OSError) as e:
                log.error(f"Error closing pool: {e}", exc_info=True)


@asynccontextmanager
async def acquire_connection() -> AsyncIterator[asyncpg.Connection]:
    """Acquire a connection, reusing the transaction connection when inside transaction()."""
    tx_conn = _current_transaction_connection.get()
    if tx_conn is not None:
        yield tx_conn
        return

    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


# =============================================================================
# CRUD wrappers
# =============================================================================

def _log_slow(kind: str, query: str, started: float) -> None:
    elapsed_ms = (time.monotonic() - started) * 1000
    if elapsed_ms > get_config().slow_query_threshold_ms:
        log.warning(f"[SLOW QUERY] {kind} took {elapsed_ms:.1f}ms: {query[:200]}")


async def fetch(query: str, *args: Any, timeout: Optional[float] = None) -> List[asyncpg.Record]:
    """Execute the query and return all rows."""
    started = time.monotonic()
    try:
        async with acquire_connection() as conn:
            rows = await conn.fetch(query, *args, timeout=timeout)
    except (PostgresError, OSError) as e:
        log.error(f"fetch failed: {e}", exc_info=True)
        raise PersistenceFailure(str(e)) from e
    _log_slow("FETCH", query, started)
    return rows


async def fetchrow(query: str, *args: Any, timeout: Optional[float] = None) -> Optional[asyncpg.Record]:
    """Execute query and return single row."""
    started = time.monotonic()
    try:
        async with acquire_connection() as conn:
            row = await conn.fetchrow(query, *args, timeout=timeout)
    except (PostgresError, OSError) as e:
        log.error(f"fetchrow failed: {e}", exc_info=True)
        raise PersistenceFailure(str(e)) from e
    _log_slow("FETCHROW", query, started)
    return row


async def fetchval(query: str, *args: Any, column: int = 0, timeout: Optional[float] = None) -> Any:
    """Execute query and return a single value."""
    started = time.monotonic()
    try:
        async with acquire_connection() as conn:
            value = await conn.fetchval(query, *args, column=column, timeout=timeout)
    except (PostgresError, OSError) as e:
        log.error(f"fetchval failed: {e}", exc_info=True)
        raise PersistenceFailure(str(e)) from e
    _log_slow("FETCHVAL", query, started)
    return value


async def execute(query: str, *args: Any, timeout: Optional[float] = None) -> str:
    """Execute a command and return its status string (e.g. 'UPDATE 1')."""
    started = time.monotonic()
    try:
        async with acquire_connection() as conn:
            status = await conn.execute(query, *args, timeout=timeout)
    except (PostgresError, OSError) as e:
        log.error(f"execute failed: {e}", exc_info=True)
        raise PersistenceFailure(str(e)) from e
    _log_slow("EXECUTE", query, started)
    return status


@asynccontextmanager
async def transaction(timeout: Optional[float] = None) -> AsyncIterator[asyncpg.Connection]:
    """
    Transaction context manager.

    Every fetch/execute wrapper called inside the block runs on the same
    connection. Commits on clean exit, rolls back on exception.

    Usage:
        async with transaction() as conn:
            await execute("DELETE FROM ...")
    """
    pool = await get_pool()
    try:
        conn = await pool.acquire(timeout=timeout)
    except (PostgresError, OSError, asyncio.TimeoutError) as e:
        raise PersistenceFailure(f"Could not acquire transaction connection: {e}") from e

    token = _current_transaction_connection.set(conn)
    tx_start = time.monotonic()
    try:
        async with conn.transaction():
            yield conn

        tx_duration_ms = (time.monotonic() - tx_start) * 1000
        if tx_duration_ms > get_config().long_transaction_threshold_ms:
            log.warning(f"[LONG TRANSACTION] took {tx_duration_ms:.0f}ms")
    except PostgresError as e:
        log.error(f"Transaction failed: {e}")
        raise PersistenceFailure(str(e)) from e
    finally:
        _current_transaction_connection.reset(token)
        await pool.release(conn)


# =============================================================================
# Schema
# =============================================================================

async def run_schema_from_file(file_path_str: Optional[str] = None) -> None:
    """
    Execute DDL statements from a SQL file once at process start.

    A session advisory lock serializes workers that start at the same time.
    """
    file_path_str = file_path_str or get_config().schema_file
    path = pathlib.Path(file_path_str)
    if not path.is_file():
        raise FileNotFoundError(f"Schema file not found: {file_path_str}")

    sql = path.read_text(encoding="utf-8").strip()
    if not sql:
        log.warning(f"Schema file {file_path_str} is empty")
        return

    pool = await get_pool()
    try:
        async with pool.acquire() as conn:
            await conn.execute("SELECT pg_advisory_lock($1)", _SCHEMA_LOCK_KEY)
            try:
                await conn.execute(sql)
            finally:
                await conn.execute("SELECT pg_advisory_unlock($1)", _SCHEMA_LOCK_KEY)
    except PostgresError as e:
        log.error(f"Schema execution failed: {e}", exc_info=True)
        raise PersistenceFailure(f"Schema execution failed: {e}") from e

    log.info(f"Schema from {file_path_str} applied successfully")


run_schema = run_schema_from_file


# =============================================================================
# Health
# =============================================================================

async def health_check() -> dict:
    """PostgreSQL health check with latency and pool stats."""
    if _POOL is None or _POOL.is_closing():
        return {"healthy": False, "error": "pool not initialized"}

    started = time.monotonic()
    try:
        async with _POOL.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except (PostgresError, OSError) as e:
        return {"healthy": False, "error": str(e)}

    return {
        "healthy": True,
        "latency_ms": round((time.monotonic() - started) * 1000, 2),
        "pool_size": _POOL.get_size(),
        "pool_idle": _POOL.get_idle_size(),
    }


# EOF
