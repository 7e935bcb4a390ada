"""
Deadline Engine

Calculates response and escalation deadlines for mailed disputes.

Deadlines are fixed once, at send time, and never recalculated:
- response_deadline = sent + 30 days (FCRA investigation window)
- escalation_date   = sent + 35 days (deadline plus mail transit buffer)

Pending/overdue status is derived from these dates and the caller's
"now" at query time. Nothing here changes a stored status.
"""
import math
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple


# =============================================================================
# DEADLINE CONFIGURATION
# =============================================================================

RESPONSE_WINDOW_DAYS = 30
MAIL_TRANSIT_BUFFER_DAYS = 5
ESCALATION_DAYS = RESPONSE_WINDOW_DAYS + MAIL_TRANSIT_BUFFER_DAYS

DEADLINE_CONFIG = {
    "days": RESPONSE_WINDOW_DAYS,
    "escalation_days": ESCALATION_DAYS,
    "statute": "FCRA § 1681i(a)(1)(A)",
    "description": "Standard 30-day investigation period",
}

SECONDS_PER_DAY = 24 * 60 * 60


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes (e.g. read back from SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class DeadlineEngine:
    """Deadline arithmetic for the dispute lifecycle."""

    def calculate_deadlines(self, sent_at: datetime) -> Tuple[datetime, datetime]:
        """Returns (response_deadline, escalation_date)."""
        sent_at = ensure_utc(sent_at)
        return (
            sent_at + timedelta(days=RESPONSE_WINDOW_DAYS),
            sent_at + timedelta(days=ESCALATION_DAYS),
        )

    def is_past(self, deadline: datetime, now: Optional[datetime] = None) -> bool:
        """True once now has reached the deadline (deadline <= now)."""
        now = ensure_utc(now or utcnow())
        return ensure_utc(deadline) <= now

    def days_remaining(self, deadline: datetime, now: Optional[datetime] = None) -> int:
        """Whole days left before the deadline, rounded up."""
        now = ensure_utc(now or utcnow())
        seconds = (ensure_utc(deadline) - now).total_seconds()
        return math.ceil(seconds / SECONDS_PER_DAY)

    def days_overdue(self, deadline: datetime, now: Optional[datetime] = None) -> int:
        """Whole days since the deadline passed, rounded up."""
        now = ensure_utc(now or utcnow())
        seconds = (now - ensure_utc(deadline)).total_seconds()
        return math.ceil(seconds / SECONDS_PER_DAY)
