"""SQLAlchemy ORM models."""

from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import DeclarativeBase, relationship


class Base(DeclarativeBase):
    pass


class Reader(Base):
    __tablename__ = "users"

    user_id = Column(String(10), primary_key=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    loans = relationship("Loan", back_populates="reader", lazy="selectin")


class Book(Base):
    __tablename__ = "books"

    book_id = Column(String(10), primary_key=True)
    title = Column(String(255), nullable=False)
    author = Column(String(255), nullable=False)
    dewey_decimal = Column(String(20), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    loans = relationship("Loan", back_populates="book", lazy="selectin")


class Loan(Base):
    __tablename__ = "loans"
    __table_args__ = (
        Index("idx_loans_user_book", "user_id", "book_id"),
        Index("idx_loans_book_user", "book_id", "user_id"),
    )

    loan_id = Column(String(10), primary_key=True)
    user_id = Column(
        String(10),
        ForeignKey("users.user_id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    book_id = Column(
        String(10),
        ForeignKey("books.book_id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    borrowed_at = Column(Date, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    reader = relationship("Reader", back_populates="loans")
    book = relationship("Book", back_populates="loans")
