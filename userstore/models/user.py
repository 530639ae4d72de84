from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement

from userstore.db.session import Base


class utc_now(FunctionElement):
    """Current UTC time as a naive timestamp, rendered per dialect."""

    type = DateTime(timezone=False)
    inherit_cache = True


@compiles(utc_now)
def _utc_now_default(element, compiler, **kw):
    # SQLite's CURRENT_TIMESTAMP is already UTC
    return "CURRENT_TIMESTAMP"


@compiles(utc_now, "postgresql")
def _utc_now_postgresql(element, compiler, **kw):
    return "TIMEZONE('utc', CURRENT_TIMESTAMP)"


@compiles(utc_now, "mysql")
@compiles(utc_now, "mariadb")
def _utc_now_mysql(element, compiler, **kw):
    # Expression defaults must be parenthesised on MySQL/MariaDB
    return "(UTC_TIMESTAMP())"


class User(Base):
    __tablename__ = "users"
    # AUTOINCREMENT keeps SQLite from reusing ids of deleted rows
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    # MySQL cannot index TEXT without a prefix length
    email = Column(Text().with_variant(String(255), "mysql", "mariadb"), unique=True, nullable=False)
    # Naive UTC timestamp; the store fills it in at insertion time
    created_at = Column(DateTime(timezone=False), server_default=utc_now(), nullable=False)
