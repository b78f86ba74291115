# tabs_vs_spaces/infrastructure/database/models.py

from sqlalchemy import CHAR, TIMESTAMP, BigInteger, Column, Integer
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class VoteRecord(Base):
    """ORM model for the append-only votes table."""

    __tablename__ = "votes"

    # SQLite only autoincrements INTEGER PRIMARY KEY columns.
    vote_id = Column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    # Naive UTC, microsecond precision so the stored value matches the acknowledgement.
    time_cast = Column(
        TIMESTAMP().with_variant(mysql.TIMESTAMP(fsp=6), "mysql"),
        nullable=False,
    )
    candidate = Column(CHAR(6), nullable=False)
