from datetime import datetime
from pathlib import Path

import pytest
from sqlalchemy.orm import sessionmaker

from userstore.db.session import create_db_engine, init_db


class FixedClock:
    def __init__(self, moment: datetime) -> None:
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


@pytest.fixture()
def engine(tmp_path: Path):
    eng = create_db_engine(f"sqlite:///{tmp_path / 'users.sqlite3'}")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()
