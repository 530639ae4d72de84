"""Scripted CRUD walkthrough against the configured database.

Run with ``python -m userstore.demo``. The ``users`` table is emptied first.
"""
import logging
import sys
import time
from typing import Optional

from sqlalchemy.orm import Session

from userstore.core.clock import Clock
from userstore.core.errors import StoreError
from userstore.core.settings import settings
from userstore.db.session import SessionLocal, engine, init_db
from userstore.repositories.users import UserRepository
from userstore.schemas.user import UserOut

logger = logging.getLogger(__name__)


class DemoFailure(RuntimeError):
    pass


def _check(condition: bool, message: str) -> None:
    if not condition:
        raise DemoFailure(message)


def run_demo(db: Session, clock: Optional[Clock] = None) -> UserOut:
    repo = UserRepository(db, clock=clock)
    repo.clear()

    email = f"test+{int(time.time())}@example.com"

    logger.info("CRUD - Create")
    created = repo.create(email)
    logger.info("%r", created)

    logger.info("CRUD - Read")
    rows = repo.read_all()
    logger.info("%r", rows)
    _check(bool(rows) and rows[0].id == created.id, "read back a different user than was created")

    logger.info("CRUD - Update")
    repo.update_timestamp(created.id)
    rows = repo.read_all()
    logger.info("%r", rows)
    _check(rows[0].created_at != created.created_at, "created_at was not updated")

    logger.info("CRUD - Delete")
    repo.delete_by_id(created.id)
    rows = repo.read_all()
    logger.info("%r", rows)
    _check(not rows, "users table is not empty after delete")

    return created


def main() -> int:
    logging.basicConfig(level=settings.log_level)
    init_db(engine)
    with SessionLocal() as db:
        try:
            run_demo(db)
        except (StoreError, DemoFailure) as exc:
            logger.error("Demo failed: %s", exc)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
