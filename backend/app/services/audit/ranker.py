"""
Credit Builder - Dispute Candidate Ranker

Scores each negative item by expected value (score gain x success
probability) and orders candidates highest first.
"""
from __future__ import annotations
import math
from typing import Dict, Iterable, List, Tuple

from ...models.ssot import NegativeItem, NegativeItemType, DisputeCandidate
from ...models.catalog import LetterType


# Same path for every candidate; not varied by item type.
ESCALATION_PATH = [
    "Basic Bureau Dispute",
    "609 Verification",
    "611 Reinvestigation",
    "CFPB Complaint",
    "Intent to Sue",
    "FCRA Attorney",
]

# type -> (estimated_score_gain, success_probability, letter_type)
CANDIDATE_TABLE: Dict[NegativeItemType, Tuple[int, float, LetterType]] = {
    NegativeItemType.COLLECTION: (45, 0.55, LetterType.DEBT_VALIDATION),
    NegativeItemType.CHARGEOFF: (40, 0.40, LetterType.CHARGEOFF_REMOVAL),
    NegativeItemType.INQUIRY: (8, 0.70, LetterType.UNAUTHORIZED_INQUIRY),
}

DEFAULT_CANDIDATE = (20, 0.50, LetterType.BASIC_BUREAU)

LATE_PAYMENT_GAIN = 30
LATE_PAYMENT_WITH_REASON = (0.65, LetterType.BASIC_BUREAU)
LATE_PAYMENT_WITHOUT_REASON = (0.35, LetterType.GOODWILL)


def round_priority(value: float) -> float:
    """Round half up to one decimal place (24.75 -> 24.8)."""
    return math.floor(value * 10 + 0.5) / 10


class DisputeCandidateRanker:
    """Maps negative items to dispute candidates."""

    def assess(self, item: NegativeItem) -> DisputeCandidate:
        if item.type == NegativeItemType.LATE_PAYMENT:
            # A documented reason makes a factual bureau dispute viable;
            # otherwise the best remaining play is a goodwill request.
            gain = LATE_PAYMENT_GAIN
            probability, letter_type = (
                LATE_PAYMENT_WITH_REASON if item.dispute_reason else LATE_PAYMENT_WITHOUT_REASON
            )
        else:
            gain, probability, letter_type = CANDIDATE_TABLE.get(item.type, DEFAULT_CANDIDATE)

        return DisputeCandidate(
            item=item,
            recommended_letter_type=letter_type.value,
            estimated_score_gain=gain,
            success_probability=probability,
            priority_score=round_priority(gain * probability),
            escalation_path=list(ESCALATION_PATH),
        )

    def rank(self, items: Iterable[NegativeItem]) -> List[DisputeCandidate]:
        """
        Assess disputable items and sort by priority_score, highest first.

        Items flagged disputable=False are skipped. Ties keep input order.
        """
        candidates = [self.assess(item) for item in items if item.is_disputable]
        return sorted(candidates, key=lambda c: c.priority_score, reverse=True)
