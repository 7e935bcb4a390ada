"""
Dispute Services

Dispute lifecycle: deadlines, status transitions, history, creditor
address cache and the free-text intent matcher.

Submission lives in .submission and is imported from there directly,
since it depends on the mail gateway, which depends on the deadline engine.
"""

from .deadline_engine import DeadlineEngine, RESPONSE_WINDOW_DAYS, ESCALATION_DAYS
from .state_machine import DisputeStatusMachine, OPEN_STATUSES
from .history_store import DisputeHistoryStore
from .tracker import DisputeLifecycleTracker, OVERDUE_GUIDANCE
from .creditor_addresses import CreditorAddressCache, normalize_creditor_name
from .intent import (
    detect_letter_type,
    detect_bureau,
    wants_all_bureaus,
    extract_creditor_name,
    parse_creditor_address,
)

__all__ = [
    'DeadlineEngine',
    'RESPONSE_WINDOW_DAYS',
    'ESCALATION_DAYS',
    'DisputeStatusMachine',
    'OPEN_STATUSES',
    'DisputeHistoryStore',
    'DisputeLifecycleTracker',
    'OVERDUE_GUIDANCE',
    'CreditorAddressCache',
    'normalize_creditor_name',
    'detect_letter_type',
    'detect_bureau',
    'wants_all_bureaus',
    'extract_creditor_name',
    'parse_creditor_address',
]
