from typing import Iterable, Optional

import psycopg2
from psycopg2 import sql

from zeux_coach.config import Config


def get_db_connection():
    """
    Establishes connection to the Postgres DB using credentials from Config.
    """
    try:
        conn = psycopg2.connect(
            database=Config.POSTGRES_DB,
            user=Config.POSTGRES_USER,
            password=Config.POSTGRES_PASSWORD,
            host=Config.POSTGRES_HOST,
            port=Config.POSTGRES_PORT
        )
        return conn
    except Exception as e:
        print(f"❌ Database Connection Error: {e}")
        raise e


class PostgresKeyValueStore:
    """
    Key-value storage on a single Postgres table (one row per category key).
    Every call opens its own connection and closes it when done.
    """

    def __init__(self, connect=get_db_connection, table: Optional[str] = None):
        self._connect = connect
        self._table = sql.Identifier(table or Config.STORAGE_TABLE)

    def create_table(self):
        """Creates the table if it does not exist."""
        self._execute(
            sql.SQL("""
                CREATE TABLE IF NOT EXISTS {} (
                    storage_key   VARCHAR(100) PRIMARY KEY,
                    storage_value TEXT NOT NULL,
                    updated_at    TIMESTAMP DEFAULT NOW()
                );
            """).format(self._table)
        )

    def get_item(self, key: str) -> Optional[str]:
        conn = None
        try:
            conn = self._connect()
            with conn.cursor() as cur:
                cur.execute(
                    sql.SQL("SELECT storage_value FROM {} WHERE storage_key = %s").format(self._table),
                    (key,),
                )
                row = cur.fetchone()
            return row[0] if row else None
        finally:
            if conn:
                conn.close()

    def set_item(self, key: str, value: str):
        self._execute(
            sql.SQL("""
                INSERT INTO {} (storage_key, storage_value, updated_at)
                VALUES (%s, %s, NOW())
                ON CONFLICT (storage_key) DO UPDATE SET
                    storage_value = EXCLUDED.storage_value,
                    updated_at    = EXCLUDED.updated_at;
            """).format(self._table),
            (key, value),
        )

    def multi_remove(self, keys: Iterable[str]):
        self._execute(
            sql.SQL("DELETE FROM {} WHERE storage_key = ANY(%s)").format(self._table),
            (list(keys),),
        )

    def _execute(self, query, params=None):
        conn = None
        try:
            conn = self._connect()
            with conn.cursor() as cur:
                cur.execute(query, params)
            conn.commit()
        except Exception:
            if conn:
                conn.rollback()  # undo all changes since last commit
            raise
        finally:
            if conn:
                conn.close()
