"""Reservation model for the database."""

from sqlalchemy import Column, DateTime, Float, Integer, String, Text

from components.core.database import Base


class Reservation(Base):
    """Reservation model holding funds against a plan category."""
    __tablename__ = "reservations"

    pk = Column(Integer, primary_key=True, autoincrement=True)  # Keeps insertion order
    id = Column(String(64), unique=True, index=True, nullable=False)
    plan_id = Column(String(64), index=True, nullable=False)  # No FK, dangling ids are tolerated
    category_id = Column(String(64), index=True, nullable=False)
    amount = Column(Float, nullable=False)
    purpose = Column(String(255), nullable=False)
    reserved_by = Column(String(255), nullable=False)
    reserved_date = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(16), nullable=False)
    utilized_date = Column(DateTime(timezone=True), nullable=True)
    cancellation_reason = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
