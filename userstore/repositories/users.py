"""CRUD access to the ``users`` table.

The repository works on a caller-owned :class:`~sqlalchemy.orm.Session`. The
session pins a single connection for the duration of its transaction, which is
what makes :meth:`UserRepository.create` safe: the generated key is read back
through the connection-local last-insert-id function of the dialect, never by
ordering the table, so concurrent writers on other connections cannot leak
their rows into our result.
"""
import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.engine import Connection, Row
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from userstore.core.clock import Clock, SystemClock
from userstore.core.errors import ConstraintViolation, NotFound, StoreConnectionError, StoreError
from userstore.models.user import User
from userstore.schemas.user import UserOut

logger = logging.getLogger(__name__)

users = User.__table__

# Connection-scoped "last generated key" per dialect
_LAST_INSERT_ID = {
    "sqlite": func.last_insert_rowid,
    "mysql": func.last_insert_id,
    "mariadb": func.last_insert_id,
    "postgresql": func.lastval,
}


def last_insert_id_expression(dialect_name: str):
    try:
        return _LAST_INSERT_ID[dialect_name]()
    except KeyError as exc:
        raise StoreError(f"No connection-local last-insert-id function for dialect {dialect_name!r}") from exc


def row_to_user(row: Row) -> UserOut:
    return UserOut.model_validate(dict(row._mapping))


class UserRepository:
    def __init__(self, db: Session, clock: Optional[Clock] = None) -> None:
        self.db = db
        self.clock = clock or SystemClock()

    @contextmanager
    def _unit_of_work(self, operation: str, commit: bool = True) -> Iterator[Connection]:
        """Yield the session's connection and map driver failures to store errors.

        On success the session is committed (when ``commit`` is set); on any
        failure it is rolled back before the typed error propagates.
        """
        try:
            yield self.db.connection()
            if commit:
                self.db.commit()
        except StoreError as exc:
            self.db.rollback()
            logger.warning("%s failed: %s", operation, exc.kind)
            raise
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning("%s failed: %s", operation, ConstraintViolation.kind)
            raise ConstraintViolation(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.warning("%s failed: %s", operation, StoreConnectionError.kind)
            raise StoreConnectionError(str(exc)) from exc

    def create(self, email: str) -> UserOut:
        """Insert a user and return exactly the row this connection inserted."""

        if not email or not email.strip():
            raise ValueError("Email must not be empty")

        last_insert_id = last_insert_id_expression(self.db.get_bind().dialect.name)

        with self._unit_of_work("create") as conn:
            conn.execute(insert(users).values(email=email))
            new_id = conn.execute(select(last_insert_id)).scalar_one()
            row = conn.execute(select(users).where(users.c.id == new_id)).one_or_none()
            if row is None:
                raise NotFound(f"User {new_id} could not be fetched after insert")
            user = row_to_user(row)

        logger.debug("Created user id=%s", user.id)
        return user

    def read_all(self) -> List[UserOut]:
        with self._unit_of_work("read_all", commit=False) as conn:
            rows = conn.execute(select(users)).all()
        return [row_to_user(row) for row in rows]

    def get(self, user_id: int) -> Optional[UserOut]:
        with self._unit_of_work("get", commit=False) as conn:
            row = conn.execute(select(users).where(users.c.id == user_id)).one_or_none()
        if row is None:
            return None
        return row_to_user(row)

    def update_timestamp(self, user_id: int) -> None:
        """Set ``created_at`` to the current UTC time. Missing ids are a no-op."""

        with self._unit_of_work("update_timestamp") as conn:
            result = conn.execute(
                update(users).where(users.c.id == user_id).values(created_at=self.clock.now())
            )
        logger.debug("Touched user id=%s (%s row(s))", user_id, result.rowcount)

    def delete_by_id(self, user_id: int) -> None:
        with self._unit_of_work("delete_by_id") as conn:
            result = conn.execute(delete(users).where(users.c.id == user_id))
        logger.debug("Deleted user id=%s (%s row(s))", user_id, result.rowcount)

    def clear(self) -> int:
        with self._unit_of_work("clear") as conn:
            result = conn.execute(delete(users))
        logger.debug("Cleared %s user(s)", result.rowcount)
        return result.rowcount
