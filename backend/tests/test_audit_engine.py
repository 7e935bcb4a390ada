"""
Tests for the credit audit engine and its factor rules.

Covers phase boundaries, each factor's thresholds, absent-value handling
and full audits of representative profiles.
"""
import logging

import pytest

from app.models.ssot import (
    AuditFactor, NegativeItem, NegativeItemType, PaymentHistoryStatus,
    ScorePhase, UtilizationStatus,
)
from app.services.audit import CreditAuditEngine, FactorRules, classify_phase, run_audit

from conftest import make_profile


class TestClassifyPhase:

    @pytest.mark.parametrize("score,phase", [
        (None, ScorePhase.FOUNDATION),
        (0, ScorePhase.FOUNDATION),
        (579, ScorePhase.FOUNDATION),
        (580, ScorePhase.ACCELERATION),
        (669, ScorePhase.ACCELERATION),
        (670, ScorePhase.OPTIMIZATION),
        (739, ScorePhase.OPTIMIZATION),
        (740, ScorePhase.ELITE),
        (850, ScorePhase.ELITE),
    ])
    def test_boundaries_belong_to_higher_phase(self, score, phase):
        assert classify_phase(score) == phase


class TestPaymentHistory:

    @pytest.fixture
    def rules(self):
        return FactorRules()

    def test_99_percent_is_strength(self, rules):
        result = rules.check_payment_history(make_profile(on_time_payment_percent=99))
        assert [s.description for s in result.strengths] == ["Near-perfect payment history"]
        assert result.weaknesses == []

    @pytest.mark.parametrize("pct", [95, 97, 98.9])
    def test_dead_zone_produces_no_signal(self, rules, pct):
        result = rules.check_payment_history(make_profile(on_time_payment_percent=pct))
        assert result.strengths == []
        assert result.weaknesses == []

    def test_below_95_is_weakness(self, rules):
        result = rules.check_payment_history(make_profile(on_time_payment_percent=92))
        assert len(result.weaknesses) == 1
        weakness = result.weaknesses[0]
        assert weakness.factor == AuditFactor.PAYMENT_HISTORY
        assert weakness.score_weight_percent == 35
        assert weakness.description.startswith("Payment history at 92%")

    def test_absent_percent_is_no_signal(self, rules):
        result = rules.check_payment_history(make_profile())
        assert result.strengths == []
        assert result.weaknesses == []

    @pytest.mark.parametrize("pct,status", [
        (100, PaymentHistoryStatus.PERFECT),
        (99, PaymentHistoryStatus.PERFECT),
        (95, PaymentHistoryStatus.GOOD),
        (85, PaymentHistoryStatus.NEEDS_WORK),
        (84.9, PaymentHistoryStatus.POOR),
        (None, PaymentHistoryStatus.POOR),
    ])
    def test_status_buckets(self, rules, pct, status):
        assert rules.payment_history_status(make_profile(on_time_payment_percent=pct)) == status


class TestUtilization:

    @pytest.fixture
    def rules(self):
        return FactorRules()

    @pytest.mark.parametrize("util,status,strengths,weaknesses", [
        (0, UtilizationStatus.EXCELLENT, 1, 0),
        (9, UtilizationStatus.EXCELLENT, 1, 0),
        (9.5, UtilizationStatus.GOOD, 0, 0),
        (30, UtilizationStatus.GOOD, 0, 0),
        (30.5, UtilizationStatus.FAIR, 0, 1),
        (50, UtilizationStatus.FAIR, 0, 1),
        (51, UtilizationStatus.CRITICAL, 0, 1),
    ])
    def test_thresholds(self, rules, util, status, strengths, weaknesses):
        result_status, result = rules.check_utilization(make_profile(utilization_percent=util))
        assert result_status == status
        assert len(result.strengths) == strengths
        assert len(result.weaknesses) == weaknesses

    def test_derived_from_balance_and_limit(self, rules):
        status, result = rules.check_utilization(
            make_profile(total_credit_limit=1000, total_balance=500)
        )
        assert status == UtilizationStatus.FAIR
        assert result.weaknesses[0].description.startswith("Utilization at 50%")

    def test_missing_balance_counts_as_zero(self, rules):
        status, result = rules.check_utilization(make_profile(total_credit_limit=1000))
        assert status == UtilizationStatus.EXCELLENT
        assert len(result.strengths) == 1

    @pytest.mark.parametrize("limit", [None, 0])
    def test_unknown_reports_excellent_without_strength(self, rules, limit):
        status, result = rules.check_utilization(
            make_profile(total_credit_limit=limit, total_balance=300)
        )
        assert status == UtilizationStatus.EXCELLENT
        assert result.strengths == []
        assert result.weaknesses == []

    def test_critical_description(self, rules):
        _, result = rules.check_utilization(make_profile(utilization_percent=78))
        assert result.weaknesses[0].description == "Utilization at 78% - CRITICAL. Pay down immediately"


class TestAgeMixInquiries:

    @pytest.fixture
    def rules(self):
        return FactorRules()

    def test_age_thresholds(self, rules):
        strong = rules.check_account_age(make_profile(average_account_age_months=84))
        assert strong.strengths[0].description == "Average account age 7.0 years - excellent"

        assert rules.check_account_age(make_profile(average_account_age_months=83)).strengths == []
        assert rules.check_account_age(make_profile(average_account_age_months=24)).weaknesses == []

        young = rules.check_account_age(make_profile(average_account_age_months=23))
        assert len(young.weaknesses) == 1
        assert young.weaknesses[0].factor == AuditFactor.AGE

    def test_mix_counts_distinct_types(self, rules):
        assert rules.check_credit_mix(
            make_profile(account_types=["revolving", "auto", "mortgage"])
        ).weaknesses == []

        repeated = rules.check_credit_mix(
            make_profile(account_types=["revolving", "revolving", "auto"])
        )
        assert repeated.weaknesses[0].description.startswith("Only 2 account type(s)")

    def test_empty_mix_is_weakness(self, rules):
        result = rules.check_credit_mix(make_profile())
        assert result.weaknesses[0].description.startswith("Only 0 account type(s)")

    @pytest.mark.parametrize("types,missing", [
        ([], ["revolving", "installment"]),
        (["revolving", "heloc"], ["installment"]),
        (["mortgage"], ["revolving"]),
        (["revolving", "student"], []),
    ])
    def test_missing_account_types(self, rules, types, missing):
        assert rules.missing_account_types(make_profile(account_types=types)) == missing

    def test_inquiries_above_three(self, rules):
        assert rules.check_inquiries(make_profile(hard_inquiries_last_12mo=3)).weaknesses == []
        result = rules.check_inquiries(make_profile(hard_inquiries_last_12mo=4))
        assert result.weaknesses[0].description == "4 hard inquiries in last 12 months - slow down applications"

    def test_absent_inquiries_no_signal(self, rules):
        assert rules.check_inquiries(make_profile()).weaknesses == []


class TestCreditAuditEngine:

    def test_acceleration_profile(self, profile):
        audit = CreditAuditEngine().audit(profile)

        assert audit.score_phase == ScorePhase.ACCELERATION
        assert audit.utilization_status == UtilizationStatus.FAIR
        assert audit.payment_history_status == PaymentHistoryStatus.NEEDS_WORK
        assert audit.missing_account_types == []
        assert audit.strengths == []
        assert [w.factor for w in audit.weaknesses] == [
            AuditFactor.PAYMENT_HISTORY,
            AuditFactor.UTILIZATION,
            AuditFactor.MIX,
        ]

        assert [c.item.creditor_name for c in audit.disputable_items] == [
            "Midland Credit", "Synchrony Bank", "Capital One", "Chase Auto",
        ]
        assert [c.priority_score for c in audit.disputable_items] == [24.8, 16.0, 10.5, 5.6]

        assert [a.action for a in audit.recommended_actions] == [
            "Reduce utilization",
            "Dispute negative items",
            "Request credit limit increases",
            "Enable Experian Boost",
        ]
        assert audit.recommended_actions[0].estimated_score_impact == 25

    def test_thin_file_gets_foundation_builders(self):
        audit = run_audit(make_profile(current_score=520, total_accounts=1))

        assert audit.score_phase == ScorePhase.FOUNDATION
        assert audit.utilization_status == UtilizationStatus.EXCELLENT
        assert audit.disputable_items == []
        assert [a.action for a in audit.recommended_actions] == [
            "Become authorized user",
            "Open secured credit card",
            "Open credit builder loan",
            "Enable Experian Boost",
            "Diversify credit mix",
        ]

    def test_elite_profile(self):
        audit = run_audit(make_profile(
            current_score=790,
            on_time_payment_percent=100,
            utilization_percent=4,
            average_account_age_months=120,
            hard_inquiries_last_12mo=0,
            account_types=["revolving", "mortgage", "auto"],
        ))

        assert audit.score_phase == ScorePhase.ELITE
        assert [s.factor for s in audit.strengths] == [
            AuditFactor.PAYMENT_HISTORY, AuditFactor.UTILIZATION, AuditFactor.AGE,
        ]
        assert audit.weaknesses == []
        assert [a.action for a in audit.recommended_actions] == [
            "Request credit limit increases",
            "Enable Experian Boost",
        ]

    def test_empty_profile_does_not_raise(self):
        audit = run_audit(make_profile())
        assert audit.score_phase == ScorePhase.FOUNDATION
        assert audit.payment_history_status == PaymentHistoryStatus.POOR

    def test_audit_leaves_profile_unchanged(self, profile):
        before = profile.to_dict()
        run_audit(profile)
        assert profile.to_dict() == before

    def test_non_disputable_items_are_skipped(self):
        audit = run_audit(make_profile(negative_items=[
            NegativeItem(type=NegativeItemType.BANKRUPTCY, creditor_name="Court", disputable=False),
            NegativeItem(type=NegativeItemType.JUDGMENT, creditor_name="County"),
        ]))
        assert [c.item.creditor_name for c in audit.disputable_items] == ["County"]
        # Both items still count toward the dispute recommendation
        dispute = next(a for a in audit.recommended_actions if a.action == "Dispute negative items")
        assert "2 negative item(s)" in dispute.description

    def test_to_dict_is_json_safe(self, profile):
        data = run_audit(profile).to_dict()
        assert data["score_phase"] == "acceleration"
        assert data["disputable_items"][0]["recommended_letter_type"] == "debt_validation"
        assert data["recommended_actions"][0]["phase"] == "acceleration"

    def test_logs_summary_at_info(self, profile, caplog):
        with caplog.at_level(logging.INFO, logger="app.services.audit.engine"):
            run_audit(profile)

        records = [r for r in caplog.records if r.name == "app.services.audit.engine"]
        assert [r.levelno for r in records] == [logging.INFO]
        assert records[0].getMessage().startswith("Audit complete: phase=acceleration")
