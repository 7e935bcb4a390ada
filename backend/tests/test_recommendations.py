"""
Tests for phase-aware recommended actions.
"""
from app.models.ssot import NegativeItem, NegativeItemType, ScorePhase, UtilizationStatus
from app.services.audit import RecommendationGenerator

from conftest import make_profile


def actions_for(profile, phase, utilization=UtilizationStatus.GOOD, missing=None):
    return RecommendationGenerator().generate(profile, phase, utilization, missing or [])


def test_critical_utilization_is_worth_more_than_fair():
    critical = actions_for(make_profile(), ScorePhase.ACCELERATION, UtilizationStatus.CRITICAL)
    fair = actions_for(make_profile(), ScorePhase.ACCELERATION, UtilizationStatus.FAIR)

    assert critical[0].action == "Reduce utilization"
    assert critical[0].estimated_score_impact == 50
    assert fair[0].estimated_score_impact == 25


def test_good_utilization_has_no_paydown_action():
    actions = actions_for(make_profile(), ScorePhase.OPTIMIZATION)
    assert "Reduce utilization" not in [a.action for a in actions]


def test_dispute_action_counts_negative_items():
    profile = make_profile(negative_items=[
        NegativeItem(type=NegativeItemType.COLLECTION, creditor_name="A"),
        NegativeItem(type=NegativeItemType.INQUIRY, creditor_name="B"),
    ])
    dispute = next(a for a in actions_for(profile, ScorePhase.ACCELERATION) if a.action == "Dispute negative items")
    assert dispute.description.startswith("You have 2 negative item(s) to dispute.")
    assert dispute.cost == 9
    assert dispute.priority == 2


def test_foundation_builders_only_for_thin_files():
    thin = actions_for(make_profile(total_accounts=2), ScorePhase.FOUNDATION)
    established = actions_for(make_profile(total_accounts=3), ScorePhase.FOUNDATION)
    unknown = actions_for(make_profile(), ScorePhase.FOUNDATION)

    builders = {"Open secured credit card", "Open credit builder loan", "Become authorized user"}
    assert builders <= {a.action for a in thin}
    assert builders <= {a.action for a in unknown}
    assert not builders & {a.action for a in established}


def test_limit_increase_outside_foundation():
    foundation = actions_for(make_profile(total_accounts=5), ScorePhase.FOUNDATION)
    elite = actions_for(make_profile(), ScorePhase.ELITE)

    assert "Request credit limit increases" not in [a.action for a in foundation]
    assert "Request credit limit increases" in [a.action for a in elite]


def test_missing_types_listed_in_description():
    actions = actions_for(make_profile(), ScorePhase.ELITE, missing=["revolving", "installment"])
    mix = next(a for a in actions if a.action == "Diversify credit mix")
    assert mix.description.startswith("Missing account types: revolving, installment.")


def test_experian_boost_always_present():
    for phase in ScorePhase:
        assert "Enable Experian Boost" in [a.action for a in actions_for(make_profile(), phase)]


def test_sorted_by_priority_with_stable_ties():
    actions = actions_for(
        make_profile(total_accounts=0),
        ScorePhase.FOUNDATION,
        UtilizationStatus.CRITICAL,
        missing=["installment"],
    )
    priorities = [a.priority for a in actions]
    assert priorities == sorted(priorities)
    # Builder loan and Experian Boost share priority 4; generation order wins
    fours = [a.action for a in actions if a.priority == 4]
    assert fours == ["Open credit builder loan", "Enable Experian Boost"]
