"""
Database models for applications and their portfolios.
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    DateTime,
    Enum as SQLEnum,
    Text,
    ForeignKey,
    Float,
    Boolean,
    Uuid,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base
import enum
import uuid


class ApplicationState(enum.Enum):
    """Lifecycle state of an application."""
    PENDING = "pending"
    ACTIVATED = "activated"
    IN_REVIEW = "in_review"
    CLOSED = "closed"
    DECLINED = "declined"

    @property
    def description(self) -> str:
        """Human-readable label used on documents."""
        return self.value.replace("_", " ").title()


class Person(Base):
    """Natural person who submitted an application."""
    __tablename__ = "persons"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    surname = Column(String(100), nullable=False)


class LegalEntity(Base):
    """Company or trust details for applications made on behalf of a legal entity."""
    __tablename__ = "legal_entities"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    registration_number = Column(String(64), nullable=True)
    vat_number = Column(String(64), nullable=True)


class Application(Base):
    """An investment application and its current lifecycle state."""
    __tablename__ = "applications"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    reference_number = Column(String(50), nullable=False, unique=True, index=True)
    state = Column(SQLEnum(ApplicationState), nullable=False, default=ApplicationState.PENDING)
    date = Column(Date, nullable=False)  # submission date

    person_id = Column(Integer, ForeignKey("persons.id"), nullable=False)
    is_legal_entity = Column(Boolean, nullable=False, default=False)
    legal_entity_id = Column(Integer, ForeignKey("legal_entities.id"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    person = relationship("Person")
    legal_entity = relationship("LegalEntity")
    products = relationship(
        "Product", back_populates="application", cascade="all, delete-orphan", order_by="Product.id"
    )
    # Only meaningful while the application is in review.
    current_review = relationship(
        "Review", back_populates="application", uselist=False, cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Application(id={self.id}, reference_number={self.reference_number}, state={self.state.value})>"


class Product(Base):
    """A product held by an application; groups one or more funds."""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    application_id = Column(Uuid, ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)

    application = relationship("Application", back_populates="products")
    funds = relationship("Fund", back_populates="product", cascade="all, delete-orphan", order_by="Fund.id")


class Fund(Base):
    """Fund allocation within a product."""
    __tablename__ = "funds"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    amount = Column(Float, nullable=False, default=0.0)
    fees = Column(Float, nullable=False, default=0.0)

    product = relationship("Product", back_populates="funds")


class Review(Base):
    """Review opened against an application."""
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    application_id = Column(Uuid, ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, unique=True)
    reason = Column(Text, nullable=False)
    reviewer = Column(String(200), nullable=True)
    opened_on = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)

    application = relationship("Application", back_populates="current_review")
