"""SQLAlchemy models for budgetbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    CheckConstraint,
    PrimaryKeyConstraint,
    create_engine,
    event,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class CategoryGroup(Base):
    """Category group model."""

    __tablename__ = "category_groups"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)
    color = Column(String, nullable=True)

    # Relationships
    categories = relationship("Category", back_populates="group")


class Category(Base):
    """Category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    rule = Column(String, nullable=False)
    group_id = Column(Integer, ForeignKey("category_groups.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (CheckConstraint("rule IN ('income', 'spending')", name="ck_category_rule"),)

    # Relationships
    group = relationship("CategoryGroup", back_populates="categories")
    budgets = relationship("MonthlyBudget", back_populates="category", cascade="all, delete-orphan")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False, index=True)
    description = Column(String, nullable=False)
    account = Column(String, nullable=False, default="")
    is_income = Column(Boolean, nullable=False, default=False)
    amount = Column(Numeric(10, 2), nullable=False)
    # Not a foreign key: imported rows may reference categories that do not exist
    category_id = Column(Integer, nullable=False, index=True)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (CheckConstraint("amount > 0", name="ck_transaction_amount_positive"),)


class MonthlyBudget(Base):
    """Budget allocation for a category in a month."""

    __tablename__ = "monthly_budgets"

    category_id = Column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False)
    month = Column(String(7), nullable=False, index=True)
    budget_amount = Column(Numeric(10, 2), nullable=False)

    __table_args__ = (
        PrimaryKeyConstraint("category_id", "month", name="pk_monthly_budget"),
        CheckConstraint("budget_amount > 0", name="ck_budget_amount_positive"),
    )

    # Relationships
    category = relationship("Category", back_populates="budgets")


class AppSetting(Base):
    """Key/value application settings (e.g. the selected month)."""

    __tablename__ = "app_settings"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)


def _enable_sqlite_pragmas(dbapi_conn, _record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON;")
    cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    if database_url.startswith("sqlite"):
        event.listen(engine, "connect", _enable_sqlite_pragmas)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
