"""
Dispute Status State Machine

Explicit status transitions for mailed disputes.
No transition happens automatically: "overdue" is a read-time view
computed by the lifecycle tracker, never a stored status.
"""
from typing import Dict, Any, List, Tuple

from ...models.ssot import DisputeStatus


# =============================================================================
# STATE CONFIGURATION
# =============================================================================

STATUS_CONFIG: Dict[DisputeStatus, Dict[str, Any]] = {
    DisputeStatus.DRAFT: {
        "description": "Letter prepared, not yet mailed",
        "allowed_transitions": [DisputeStatus.SENT],
    },
    DisputeStatus.SENT: {
        "description": "Letter mailed, awaiting delivery and response",
        "allowed_transitions": [
            DisputeStatus.DELIVERED,
            DisputeStatus.RESPONSE_RECEIVED,
            DisputeStatus.RESOLVED,
            DisputeStatus.ESCALATED,
        ],
    },
    DisputeStatus.DELIVERED: {
        "description": "Letter delivered, response window running",
        "allowed_transitions": [
            DisputeStatus.RESPONSE_RECEIVED,
            DisputeStatus.RESOLVED,
            DisputeStatus.ESCALATED,
        ],
    },
    DisputeStatus.RESPONSE_RECEIVED: {
        "description": "Recipient responded, outcome not yet recorded",
        "allowed_transitions": [DisputeStatus.RESOLVED, DisputeStatus.ESCALATED],
    },
    DisputeStatus.ESCALATED: {
        "description": "Moved to the next remedy on the escalation path",
        "allowed_transitions": [DisputeStatus.RESOLVED],
    },
    DisputeStatus.RESOLVED: {
        "description": "Outcome recorded",
        "allowed_transitions": [],  # Terminal state
    },
    DisputeStatus.OVERDUE: {
        # Legacy stored value only; treated like SENT for transitions
        "description": "Response deadline passed",
        "allowed_transitions": [
            DisputeStatus.RESPONSE_RECEIVED,
            DisputeStatus.RESOLVED,
            DisputeStatus.ESCALATED,
        ],
    },
}

# Statuses that count toward the pending/overdue partition
OPEN_STATUSES = (DisputeStatus.SENT, DisputeStatus.DELIVERED)


class DisputeStatusMachine:
    """Validates dispute status transitions."""

    def get_state_config(self, status: DisputeStatus) -> Dict[str, Any]:
        return STATUS_CONFIG.get(status, {})

    def can_transition(
        self,
        from_status: DisputeStatus,
        to_status: DisputeStatus,
    ) -> Tuple[bool, str]:
        """
        Check if a status transition is allowed.

        Returns (allowed, reason)
        """
        if to_status == DisputeStatus.OVERDUE:
            return False, "Overdue is derived from the response deadline and cannot be set"

        allowed = self.get_state_config(from_status).get("allowed_transitions", [])
        if to_status in allowed:
            return True, "Transition allowed"

        return False, f"Cannot transition from {from_status.value} to {to_status.value}"

    def is_terminal_state(self, status: DisputeStatus) -> bool:
        return len(self.get_state_config(status).get("allowed_transitions", [])) == 0

    def get_next_states(self, status: DisputeStatus) -> List[DisputeStatus]:
        return list(self.get_state_config(status).get("allowed_transitions", []))
