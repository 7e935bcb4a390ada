"""
Dispute History Store

Append-only per-user dispute history.

Reads are tolerant: a stored row missing letter_type or target is treated
as corrupt and left out of every read view. It is never deleted, and it
never blocks reads of the rest of the history.
"""
import logging
from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from sqlalchemy.orm import Session

from ...models.db_models import DisputeRecordDB, DisputeStatusLogDB
from ...models.ssot import DisputeRecord, DisputeStatus, DisputeOutcome, NegativeItem
from .deadline_engine import ensure_utc

logger = logging.getLogger(__name__)


class DisputeHistoryStore:
    """SQLAlchemy-backed dispute history."""

    def __init__(self, db_session: Session):
        """Initialize with database session."""
        self.db = db_session

    def append(self, user_id: str, record: DisputeRecord) -> None:
        row = DisputeRecordDB(
            id=record.id,
            user_id=user_id,
            letter_type=record.letter_type,
            letter_name=record.letter_name,
            target=record.target,
            recipient_name=record.recipient_name,
            items_disputed=[item.to_dict() for item in record.items_disputed],
            sent_at=record.sent_date,
            response_deadline=record.response_deadline,
            escalation_date=record.escalation_date,
            status=record.status.value,
            outcome=record.outcome.value if record.outcome else None,
            notes=record.notes,
            lob_letter_id=record.lob_letter_id,
            tracking_number=record.tracking_number,
            cost=record.cost,
        )
        self.db.add(row)

        self.db.add(DisputeStatusLogDB(
            id=str(uuid4()),
            dispute_id=record.id,
            from_status=None,
            to_status=record.status.value,
            note=f"{record.letter_name} recorded for {record.target}",
        ))
        self.db.commit()
        logger.info(f"Dispute record saved for {user_id}: {record.id}")

    def list_all(self, user_id: str) -> List[DisputeRecord]:
        """All readable records for the user, oldest first."""
        rows = (
            self.db.query(DisputeRecordDB)
            .filter(DisputeRecordDB.user_id == user_id)
            .order_by(DisputeRecordDB.created_at, DisputeRecordDB.sent_at)
            .all()
        )
        records = []
        for row in rows:
            record = self._to_record(row)
            if record is not None:
                records.append(record)
        return records

    def get(self, user_id: str, dispute_id: str) -> Optional[DisputeRecord]:
        row = self._get_row(user_id, dispute_id)
        return self._to_record(row) if row is not None else None

    def update_status(
        self,
        user_id: str,
        dispute_id: str,
        from_status: DisputeStatus,
        to_status: DisputeStatus,
        outcome: Optional[DisputeOutcome] = None,
        note: Optional[str] = None,
    ) -> Optional[DisputeRecord]:
        """
        Write a status (and optional outcome) change plus its log entry.

        Transition legality is checked by the caller.
        """
        row = self._get_row(user_id, dispute_id)
        if row is None:
            return None

        row.status = to_status.value
        if outcome is not None:
            row.outcome = outcome.value
        if note:
            row.notes = note
        row.updated_at = datetime.utcnow()

        self.db.add(DisputeStatusLogDB(
            id=str(uuid4()),
            dispute_id=dispute_id,
            from_status=from_status.value,
            to_status=to_status.value,
            outcome=outcome.value if outcome else None,
            note=note,
        ))
        self.db.commit()
        logger.info(f"Dispute {dispute_id} status {from_status.value} -> {to_status.value}")
        return self._to_record(row)

    def status_log(self, dispute_id: str) -> List[DisputeStatusLogDB]:
        return (
            self.db.query(DisputeStatusLogDB)
            .filter(DisputeStatusLogDB.dispute_id == dispute_id)
            .order_by(DisputeStatusLogDB.created_at)
            .all()
        )

    # =========================================================================
    # INTERNAL HELPERS
    # =========================================================================

    def _get_row(self, user_id: str, dispute_id: str) -> Optional[DisputeRecordDB]:
        return (
            self.db.query(DisputeRecordDB)
            .filter(DisputeRecordDB.id == dispute_id, DisputeRecordDB.user_id == user_id)
            .first()
        )

    def _to_record(self, row: DisputeRecordDB) -> Optional[DisputeRecord]:
        if not row.letter_type or not row.target:
            logger.warning(f"Skipping malformed dispute record {row.id}: missing letter_type or target")
            return None

        try:
            return DisputeRecord(
                id=row.id,
                letter_type=row.letter_type,
                letter_name=row.letter_name or "",
                target=row.target,
                recipient_name=row.recipient_name or "",
                items_disputed=[NegativeItem.from_dict(i) for i in (row.items_disputed or [])],
                sent_date=ensure_utc(row.sent_at) if row.sent_at else None,
                response_deadline=ensure_utc(row.response_deadline) if row.response_deadline else None,
                escalation_date=ensure_utc(row.escalation_date) if row.escalation_date else None,
                status=row.status or DisputeStatus.SENT,
                lob_letter_id=row.lob_letter_id,
                tracking_number=row.tracking_number,
                cost=row.cost,
                outcome=row.outcome,
                notes=row.notes,
            )
        except (TypeError, ValueError) as e:
            logger.warning(f"Skipping unreadable dispute record {row.id}: {e}")
            return None
