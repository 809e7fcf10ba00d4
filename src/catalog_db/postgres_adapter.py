"""
PostgreSQL record store.

Each collection is a table holding one JSONB document per row:

    products(id BIGSERIAL PRIMARY KEY, data JSONB NOT NULL)

with a unique expression index on the identifier field inside ``data``.
Every call opens its own connection and runs as a single transaction.
"""

import logging
from typing import Any, Dict, List, Optional

import psycopg
from psycopg import sql
from psycopg.types.json import Jsonb

from .base import Record, RecordStore, check_json_compatible
from .errors import RecordNotFound, StoreError, StoreUnavailable
from .ids import generate_id
from .schemas import COLLECTIONS, Collection

logger = logging.getLogger(__name__)


class PostgresRecordStore(RecordStore):
    """Record store keeping each record as a JSONB document in PostgreSQL"""

    backend_name = "postgres"

    def __init__(
        self,
        database_url: str,
        ssl: bool = True,
        ssl_reject_unauthorized: bool = False,
        connect_timeout: int = 10,
    ):
        self.database_url = database_url
        self.connect_kwargs: Dict[str, Any] = {"connect_timeout": connect_timeout}
        if ssl:
            # "require" encrypts without checking the server certificate
            self.connect_kwargs["sslmode"] = "verify-full" if ssl_reject_unauthorized else "require"

    def _get_connection(self) -> psycopg.Connection:
        """Open a connection, mapping connection failures to StoreUnavailable"""
        try:
            return psycopg.connect(self.database_url, **self.connect_kwargs)
        except psycopg.OperationalError as e:
            logger.error(f"Cannot connect to PostgreSQL: {e}")
            raise StoreUnavailable("Database is unreachable") from e

    def _execute(self, query: sql.Composable, params: Optional[tuple] = None) -> List[tuple]:
        try:
            with self._get_connection() as conn:
                cursor = conn.execute(query, params)
                return cursor.fetchall() if cursor.description else []
        except StoreError:
            raise
        except psycopg.OperationalError as e:
            logger.error(f"Database connection lost: {e}")
            raise StoreUnavailable("Database is unreachable") from e
        except psycopg.Error as e:
            logger.error(f"Database error: {e}")
            raise StoreError(str(e)) from e

    def init_schema(self) -> None:
        """Create collection tables and identifier indexes if missing"""
        for collection in COLLECTIONS.values():
            table = sql.Identifier(collection.name)
            self._execute(
                sql.SQL(
                    "CREATE TABLE IF NOT EXISTS {table} ("
                    " id BIGSERIAL PRIMARY KEY,"
                    " data JSONB NOT NULL)"
                ).format(table=table)
            )
            self._execute(
                sql.SQL(
                    "CREATE UNIQUE INDEX IF NOT EXISTS {index} ON {table} ((data->>{field}))"
                ).format(
                    index=sql.Identifier(f"{collection.name}_{collection.id_field.lower()}_key"),
                    table=table,
                    field=sql.Literal(collection.id_field),
                )
            )
        logger.info("PostgreSQL catalog schema initialized")

    def list_records(self, collection: Collection) -> List[Record]:
        rows = self._execute(
            sql.SQL("SELECT data FROM {table} ORDER BY id").format(
                table=sql.Identifier(collection.name)
            )
        )
        return [row[0] for row in rows]

    def create_record(self, collection: Collection, body: Record) -> Record:
        check_json_compatible(body)
        query = sql.SQL(
            "INSERT INTO {table} (data) VALUES (%s)"
            " ON CONFLICT ((data->>{field})) DO NOTHING"
            " RETURNING data"
        ).format(
            table=sql.Identifier(collection.name),
            field=sql.Literal(collection.id_field),
        )
        while True:
            record = dict(body)
            record[collection.id_field] = generate_id(collection.id_prefix)
            rows = self._execute(query, (Jsonb(record),))
            if rows:
                logger.info(f"Created {collection.label} {record[collection.id_field]}")
                return rows[0][0]
            logger.warning(
                f"Identifier collision on {record[collection.id_field]}, drawing a new one"
            )

    def update_record(self, collection: Collection, record_id: str, body: Record) -> Record:
        check_json_compatible(body)
        rows = self._execute(
            sql.SQL(
                "UPDATE {table}"
                " SET data = data || %s || jsonb_build_object({field}::text, %s::text)"
                " WHERE data->>{field} = %s"
                " RETURNING data"
            ).format(
                table=sql.Identifier(collection.name),
                field=sql.Literal(collection.id_field),
            ),
            (Jsonb(body), record_id, record_id),
        )
        if not rows:
            raise RecordNotFound(collection.name, record_id)
        return rows[0][0]

    def delete_record(self, collection: Collection, record_id: str) -> None:
        rows = self._execute(
            sql.SQL("DELETE FROM {table} WHERE data->>{field} = %s RETURNING id").format(
                table=sql.Identifier(collection.name),
                field=sql.Literal(collection.id_field),
            ),
            (record_id,),
        )
        if not rows:
            raise RecordNotFound(collection.name, record_id)

    def ping(self) -> None:
        self._execute(sql.SQL("SELECT 1"))
