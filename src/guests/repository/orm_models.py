"""Table layout of the hosted store.

The app never opens a SQL connection; these models exist so the schema lives
in one place and its PostgreSQL DDL can be generated for the ``exec_sql`` RPC.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, String, Text, func
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.schema import CreateIndex, CreateTable

from src.config.table_names import TableNames
from src.models.base import Base, CreatedAt


class Guest(Base, CreatedAt):
    __tablename__ = TableNames.GUESTS.value
    __table_args__ = (
        Index("idx_guests_name", "name"),
        Index("idx_guests_address", "address"),
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Guest {self.name}>"


class RSVP(Base):
    __tablename__ = TableNames.RSVPS.value
    __table_args__ = (Index("idx_rsvps_email_submitted_at", "email", "submitted_at"),)

    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    is_attending: Mapped[bool] = mapped_column(Boolean, nullable=False)
    attending_guests: Mapped[list[str]] = mapped_column(
        postgresql.ARRAY(Text), nullable=False, server_default="{}"
    )
    diet: Mapped[str | None] = mapped_column(Text, nullable=True)
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")
    # List of {"guestName", "avatar", "message"} objects
    avatar_data: Mapped[list | None] = mapped_column(postgresql.JSONB, nullable=True)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<RSVP {self.email} verified={self.verified}>"


def create_table_sql(model: type[Base]) -> str:
    """PostgreSQL DDL for ``model``'s table and indexes, safe to run repeatedly."""
    dialect = postgresql.dialect()
    table = model.__table__
    statements = [str(CreateTable(table, if_not_exists=True).compile(dialect=dialect)).strip()]
    for index in sorted(table.indexes, key=lambda i: i.name):
        statements.append(str(CreateIndex(index, if_not_exists=True).compile(dialect=dialect)).strip())
    return ";\n".join(statements) + ";"
