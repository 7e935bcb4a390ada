"""
Dispute Lifecycle Tracker

Owns each user's dispute history and derives the pending/overdue partition
from the stored response deadline and the caller's "now".

Core rules:
- pending  = status in {sent, delivered} and response_deadline >  now
- overdue  = status in {sent, delivered} and response_deadline <= now
- resolved/escalated records never appear in either view
- a record leaves the partition only through an explicit status change
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from ...models.ssot import DisputeRecord, DisputeStatus, DisputeOutcome
from .deadline_engine import DeadlineEngine, utcnow, ensure_utc
from .history_store import DisputeHistoryStore
from .state_machine import DisputeStatusMachine, OPEN_STATUSES

logger = logging.getLogger(__name__)


OVERDUE_GUIDANCE = (
    "File CFPB complaint (consumerfinance.gov/complaint) or send Intent to Sue letter. "
    "Bureau violated FCRA § 1681i - they had 30 days to investigate."
)


class DisputeLifecycleTracker:
    """Deadline-driven view over a user's dispute history."""

    def __init__(self, store: DisputeHistoryStore):
        self.store = store
        self.deadlines = DeadlineEngine()
        self.state_machine = DisputeStatusMachine()

    # =========================================================================
    # WRITES
    # =========================================================================

    def add(self, user_id: str, record: DisputeRecord) -> None:
        """Append a mailed dispute. Requires letter_type and target."""
        if not record.letter_type or not record.target:
            raise ValueError("Dispute record requires letter_type and target")
        self.store.append(user_id, record)

    def transition(
        self,
        user_id: str,
        dispute_id: str,
        to_status: DisputeStatus,
        outcome: Optional[DisputeOutcome] = None,
        note: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Move a dispute to a new status.

        Resolving without an outcome records "pending".
        Returns {"error": ...} for unknown disputes or illegal transitions.
        """
        record = self.store.get(user_id, dispute_id)
        if record is None:
            return {"error": "Dispute not found", "status_code": 404}

        allowed, reason = self.state_machine.can_transition(record.status, to_status)
        if not allowed:
            return {"error": reason, "status_code": 400}

        if to_status == DisputeStatus.RESOLVED and outcome is None:
            outcome = DisputeOutcome.PENDING

        updated = self.store.update_status(
            user_id, dispute_id, record.status, to_status, outcome=outcome, note=note,
        )
        return {
            "dispute_id": dispute_id,
            "from_status": record.status.value,
            "status": updated.status.value,
            "outcome": updated.outcome.value if updated.outcome else None,
        }

    # =========================================================================
    # READS
    # =========================================================================

    def all(self, user_id: str) -> List[DisputeRecord]:
        return self.store.list_all(user_id)

    def pending(self, user_id: str, now: Optional[datetime] = None) -> List[DisputeRecord]:
        now = ensure_utc(now or utcnow())
        return [
            r for r in self._open(user_id)
            if not self.deadlines.is_past(r.response_deadline, now)
        ]

    def overdue(self, user_id: str, now: Optional[datetime] = None) -> List[DisputeRecord]:
        now = ensure_utc(now or utcnow())
        return [
            r for r in self._open(user_id)
            if self.deadlines.is_past(r.response_deadline, now)
        ]

    def resolved(self, user_id: str) -> List[DisputeRecord]:
        return [r for r in self.all(user_id) if r.status == DisputeStatus.RESOLVED]

    def escalation_due(self, user_id: str, now: Optional[datetime] = None) -> List[DisputeRecord]:
        """Open disputes whose escalation date (deadline + transit buffer) has arrived."""
        now = ensure_utc(now or utcnow())
        return [
            r for r in self._open(user_id)
            if r.escalation_date is not None and self.deadlines.is_past(r.escalation_date, now)
        ]

    def summary(self, user_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Counts plus per-record deadline detail for display."""
        now = ensure_utc(now or utcnow())
        records = self.all(user_id)
        pending = self.pending(user_id, now)
        overdue = self.overdue(user_id, now)
        resolved = [r for r in records if r.status == DisputeStatus.RESOLVED]

        return {
            "total": len(records),
            "pending_count": len(pending),
            "overdue_count": len(overdue),
            "resolved_count": len(resolved),
            "overdue": [
                {
                    **self._brief(r),
                    "days_overdue": self.deadlines.days_overdue(r.response_deadline, now),
                    "escalation": OVERDUE_GUIDANCE,
                }
                for r in overdue
            ],
            "pending": [
                {
                    **self._brief(r),
                    "days_remaining": self.deadlines.days_remaining(r.response_deadline, now),
                }
                for r in pending
            ],
            "resolved": [
                {**self._brief(r), "outcome": r.outcome.value if r.outcome else "resolved"}
                for r in resolved
            ],
        }

    # =========================================================================
    # INTERNAL HELPERS
    # =========================================================================

    def _open(self, user_id: str) -> List[DisputeRecord]:
        # Records without a deadline cannot be partitioned
        return [
            r for r in self.all(user_id)
            if r.status in OPEN_STATUSES and r.response_deadline is not None
        ]

    def _brief(self, record: DisputeRecord) -> Dict[str, Any]:
        return {
            "id": record.id,
            "letter_name": record.letter_name,
            "target": record.target,
            "status": record.status.value,
            "tracking_number": record.tracking_number,
            "response_deadline": record.response_deadline.isoformat() if record.response_deadline else None,
        }
