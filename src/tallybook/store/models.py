"""SQLAlchemy models for the local transaction store."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    DateTime,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class Transaction(Base):
    """Transaction model.

    ``position`` records append order, which is the order transactions
    are listed in.
    """

    __tablename__ = "transactions"

    position = Column(Integer, primary_key=True, autoincrement=True)
    transaction_id = Column(String, unique=True, nullable=False)
    date = Column(String, nullable=False)
    description = Column(String, nullable=False)
    type = Column(String, nullable=False)
    category = Column(String, nullable=False, default="")
    amount = Column(Float, nullable=False)
    stored_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
