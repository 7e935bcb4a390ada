"""
Credit Builder - SQLAlchemy ORM Models
Persistent storage for profiles, dispute history and cached creditor addresses
"""
from datetime import datetime
from sqlalchemy import Column, String, Float, DateTime, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base


class CreditProfileDB(Base):
    """One credit profile per user, stored whole as JSON."""
    __tablename__ = "credit_profiles"

    user_id = Column(String(64), primary_key=True)
    profile_data = Column(JSON, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# =============================================================================
# DISPUTE HISTORY
# =============================================================================

class DisputeRecordDB(Base):
    """
    Append-only dispute history. One row per mailed letter.

    letter_type and target are nullable on purpose: rows written without
    them are kept in storage and skipped by the read path.
    """
    __tablename__ = "dispute_records"

    id = Column(String(36), primary_key=True)  # UUID
    user_id = Column(String(64), nullable=False, index=True)

    letter_type = Column(String(50), nullable=True)
    letter_name = Column(String(255), nullable=True)
    target = Column(String(255), nullable=True)  # bureau or creditor/collector name
    recipient_name = Column(String(255), nullable=True)
    items_disputed = Column(JSON, nullable=True)  # list of NegativeItem dicts

    # Deadlines are fixed at creation
    sent_at = Column(DateTime(timezone=True), nullable=True)
    response_deadline = Column(DateTime(timezone=True), nullable=True)
    escalation_date = Column(DateTime(timezone=True), nullable=True)

    status = Column(String(30), default="sent")
    outcome = Column(String(30), nullable=True)
    notes = Column(Text, nullable=True)

    # Carrier details
    lob_letter_id = Column(String(100), nullable=True)
    tracking_number = Column(String(100), nullable=True)
    cost = Column(Float, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    status_log = relationship("DisputeStatusLogDB", back_populates="dispute", cascade="all, delete-orphan")


class DisputeStatusLogDB(Base):
    """
    Immutable log of dispute status transitions.
    Append-only - records every status change.
    """
    __tablename__ = "dispute_status_log"

    id = Column(String(36), primary_key=True)  # UUID
    dispute_id = Column(String(36), ForeignKey("dispute_records.id", ondelete="CASCADE"), nullable=False, index=True)

    from_status = Column(String(30), nullable=True)
    to_status = Column(String(30), nullable=False)
    outcome = Column(String(30), nullable=True)
    note = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    dispute = relationship("DisputeRecordDB", back_populates="status_log")


# =============================================================================
# CREDITOR ADDRESS CACHE
# =============================================================================

class CreditorAddressDB(Base):
    """Mailing address per (user, normalized creditor name). Last write wins."""
    __tablename__ = "creditor_addresses"

    user_id = Column(String(64), primary_key=True)
    normalized_name = Column(String(255), primary_key=True)

    creditor_name = Column(String(255), nullable=False)
    entity_type = Column(String(20), nullable=False)  # creditor | collector
    name = Column(String(255), nullable=False)
    address_line1 = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(2), nullable=False)
    zip = Column(String(10), nullable=False)

    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
