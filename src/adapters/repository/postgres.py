"""
PostgreSQL repository adapter - Implements AccountRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 async connections with raw SQL.

Uniqueness:
-----------
The service checks IC number, email and phone before inserting, but two
concurrent registrations can both pass those checks. The accounts table
carries UNIQUE constraints, and add() maps a UniqueViolation back to the
same ConflictError message the service check would have produced, so
exactly one of the racing registrations succeeds.
"""

import logging
from pathlib import Path

from psycopg import errors
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from src.domain.account import Account
from src.domain.exceptions import ConflictError

logger = logging.getLogger(__name__)

# Constraint name -> conflict message (see migrations/001_create_accounts.sql)
_UNIQUE_CONSTRAINT_MESSAGES = {
    "accounts_ic_number_key": "ICNumber already registered",
    "accounts_email_key": "Email already registered",
    "accounts_phone_number_key": "Phone number already registered",
}

_COLUMNS = (
    "id, customer_name, ic_number, email, phone_number, pin_hash, "
    "has_accepted_privacy_policy, is_email_verified, is_phone_verified, "
    "use_face_biometric, is_face_biometric_enabled, "
    "use_fingerprint_biometric, is_fingerprint_biometric_enabled"
)


class PostgresAccountRepository:
    """
    Implements AccountRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 AsyncConnectionPool for database connections
        """
        self._pool = pool

    async def ic_number_exists(self, ic_number: str) -> bool:
        return await self._exists("SELECT 1 FROM accounts WHERE ic_number = %s", ic_number)

    async def email_exists(self, email: str) -> bool:
        return await self._exists("SELECT 1 FROM accounts WHERE email = %s", email)

    async def phone_number_exists(self, phone_number: str) -> bool:
        return await self._exists("SELECT 1 FROM accounts WHERE phone_number = %s", phone_number)

    async def add(self, account: Account) -> int:
        """
        Insert a new account and return its generated id.

        Raises:
            ConflictError: If a unique constraint rejects the insert
        """
        sql = """
            INSERT INTO accounts (
                customer_name, ic_number, email, phone_number, pin_hash,
                has_accepted_privacy_policy, is_email_verified, is_phone_verified,
                use_face_biometric, is_face_biometric_enabled,
                use_fingerprint_biometric, is_fingerprint_biometric_enabled
            )
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING id
        """
        params = (
            account.customer_name,
            account.ic_number,
            account.email,
            account.phone_number,
            account.pin_hash,
            account.has_accepted_privacy_policy,
            account.is_email_verified,
            account.is_phone_verified,
            account.use_face_biometric,
            account.is_face_biometric_enabled,
            account.use_fingerprint_biometric,
            account.is_fingerprint_biometric_enabled,
        )

        try:
            async with self._pool.connection() as conn, conn.cursor() as cursor:
                await cursor.execute(sql, params)
                row = await cursor.fetchone()
        except errors.UniqueViolation as e:
            constraint = e.diag.constraint_name
            message = _UNIQUE_CONSTRAINT_MESSAGES.get(constraint)
            if message is None:
                raise
            raise ConflictError(message) from e

        account.id = row[0]
        return account.id

    async def get_by_ic_number(self, ic_number: str) -> Account | None:
        sql = f"SELECT {_COLUMNS} FROM accounts WHERE ic_number = %s"

        async with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
            await cursor.execute(sql, (ic_number,))
            row = await cursor.fetchone()

        if row is None:
            return None
        return Account(**row)

    async def update(self, account: Account) -> None:
        """
        Write back the mutable fields of an account.

        IC number, email and phone number are never updated.
        """
        sql = """
            UPDATE accounts
            SET customer_name = %s,
                pin_hash = %s,
                has_accepted_privacy_policy = %s,
                is_email_verified = %s,
                is_phone_verified = %s,
                use_face_biometric = %s,
                is_face_biometric_enabled = %s,
                use_fingerprint_biometric = %s,
                is_fingerprint_biometric_enabled = %s
            WHERE id = %s
        """
        params = (
            account.customer_name,
            account.pin_hash,
            account.has_accepted_privacy_policy,
            account.is_email_verified,
            account.is_phone_verified,
            account.use_face_biometric,
            account.is_face_biometric_enabled,
            account.use_fingerprint_biometric,
            account.is_fingerprint_biometric_enabled,
            account.id,
        )

        async with self._pool.connection() as conn:
            await conn.execute(sql, params)

    async def ping(self) -> None:
        """Run a trivial query (health check)."""
        async with self._pool.connection() as conn:
            await conn.execute("SELECT 1")

    async def _exists(self, sql: str, value: str) -> bool:
        async with self._pool.connection() as conn, conn.cursor() as cursor:
            await cursor.execute(sql, (value,))
            return await cursor.fetchone() is not None


async def run_migrations(pool: AsyncConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 AsyncConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            async with pool.connection() as conn:
                await conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
