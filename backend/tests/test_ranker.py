"""
Tests for dispute candidate ranking.
"""
import pytest

from app.models.ssot import NegativeItem, NegativeItemType
from app.services.audit import DisputeCandidateRanker, ESCALATION_PATH
from app.services.audit.ranker import round_priority


def item(item_type, name="Creditor", **kwargs):
    return NegativeItem(type=item_type, creditor_name=name, **kwargs)


class TestAssess:

    @pytest.fixture
    def ranker(self):
        return DisputeCandidateRanker()

    @pytest.mark.parametrize("item_type,gain,probability,letter,priority", [
        (NegativeItemType.COLLECTION, 45, 0.55, "debt_validation", 24.8),
        (NegativeItemType.CHARGEOFF, 40, 0.40, "chargeoff_removal", 16.0),
        (NegativeItemType.INQUIRY, 8, 0.70, "unauthorized_inquiry", 5.6),
        (NegativeItemType.BANKRUPTCY, 20, 0.50, "basic_bureau", 10.0),
        (NegativeItemType.JUDGMENT, 20, 0.50, "basic_bureau", 10.0),
        (NegativeItemType.TAX_LIEN, 20, 0.50, "basic_bureau", 10.0),
        (NegativeItemType.OTHER, 20, 0.50, "basic_bureau", 10.0),
    ])
    def test_candidate_table(self, ranker, item_type, gain, probability, letter, priority):
        candidate = ranker.assess(item(item_type))
        assert candidate.estimated_score_gain == gain
        assert candidate.success_probability == probability
        assert candidate.recommended_letter_type == letter
        assert candidate.priority_score == priority

    def test_late_payment_with_reason_is_bureau_dispute(self, ranker):
        candidate = ranker.assess(item(NegativeItemType.LATE_PAYMENT, dispute_reason="Paid on time, bank error"))
        assert candidate.recommended_letter_type == "basic_bureau"
        assert candidate.success_probability == 0.65
        assert candidate.priority_score == 19.5

    def test_late_payment_without_reason_is_goodwill(self, ranker):
        candidate = ranker.assess(item(NegativeItemType.LATE_PAYMENT))
        assert candidate.recommended_letter_type == "goodwill"
        assert candidate.success_probability == 0.35
        assert candidate.priority_score == 10.5

    def test_escalation_path_is_fixed_and_copied(self, ranker):
        first = ranker.assess(item(NegativeItemType.COLLECTION))
        second = ranker.assess(item(NegativeItemType.INQUIRY))
        assert first.escalation_path == ESCALATION_PATH
        assert first.escalation_path[0] == "Basic Bureau Dispute"
        assert first.escalation_path[-1] == "FCRA Attorney"

        first.escalation_path.append("extra")
        assert second.escalation_path == ESCALATION_PATH


class TestRank:

    def test_sorted_highest_first(self):
        ranked = DisputeCandidateRanker().rank([
            item(NegativeItemType.INQUIRY, "A"),
            item(NegativeItemType.COLLECTION, "B"),
            item(NegativeItemType.CHARGEOFF, "C"),
        ])
        assert [c.item.creditor_name for c in ranked] == ["B", "C", "A"]

    def test_ties_keep_input_order(self):
        ranked = DisputeCandidateRanker().rank([
            item(NegativeItemType.JUDGMENT, "first"),
            item(NegativeItemType.COLLECTION, "top"),
            item(NegativeItemType.BANKRUPTCY, "second"),
            item(NegativeItemType.OTHER, "third"),
        ])
        assert [c.item.creditor_name for c in ranked] == ["top", "first", "second", "third"]

    def test_disputable_false_is_excluded(self):
        ranked = DisputeCandidateRanker().rank([
            item(NegativeItemType.COLLECTION, "kept", disputable=True),
            item(NegativeItemType.COLLECTION, "dropped", disputable=False),
            item(NegativeItemType.COLLECTION, "unset"),
        ])
        assert [c.item.creditor_name for c in ranked] == ["kept", "unset"]

    def test_empty(self):
        assert DisputeCandidateRanker().rank([]) == []


@pytest.mark.parametrize("value,expected", [
    (24.75, 24.8),
    (5.6, 5.6),
    (10.04, 10.0),
])
def test_round_priority_half_up(value, expected):
    assert round_priority(value) == expected
