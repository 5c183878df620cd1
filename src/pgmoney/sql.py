"""
sql.py — SQLAlchemy column type for Money

On PostgreSQL the column is a native ``MONEY``. Values are bound as their
display string ("-$93.32") and the driver's text result ("$1,234.56") is
read back through the parser.

On every other backend the column is a BIGINT holding the raw cents, so
the same model works against SQLite in tests.

    class Invoice(Base):
        __tablename__ = "invoices"
        id: Mapped[int] = mapped_column(Integer, primary_key=True)
        total: Mapped[Money] = mapped_column(MoneyType())
"""

from __future__ import annotations
from typing import Any

from sqlalchemy.dialects.postgresql import MONEY
from sqlalchemy.engine import Dialect
from sqlalchemy.types import BigInteger, TypeDecorator, TypeEngine

from .core import Money


class MoneyType(TypeDecorator):
    """Money column: PostgreSQL MONEY, or BIGINT cents elsewhere."""

    impl = BigInteger
    cache_ok = True

    def load_dialect_impl(self, dialect: Dialect) -> TypeEngine[Any]:
        if dialect.name == "postgresql":
            return dialect.type_descriptor(MONEY())
        return dialect.type_descriptor(BigInteger())

    def process_bind_param(self, value: Any, dialect: Dialect) -> Any:
        if value is None:
            return None
        if not isinstance(value, Money):
            raise TypeError(f"MoneyType expects Money, got {type(value).__name__}")
        if dialect.name == "postgresql":
            return str(value)
        return value.raw

    def process_result_value(self, value: Any, dialect: Dialect) -> Money | None:
        if value is None:
            return None
        if isinstance(value, Money):
            return value
        if isinstance(value, int):
            return Money.from_raw(value)
        # psycopg and asyncpg hand MONEY back as a formatted string
        return Money.parse(str(value))

    @property
    def python_type(self) -> type:
        return Money
