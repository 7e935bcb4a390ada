"""
Credit Builder - Audit Factor Rules

One check per FICO-style scoring factor. Every check is a pure function of
the CreditProfile and never raises for a well-formed profile: an absent
value either falls back to zero or produces no signal, as documented
on each check.

Weights:
    payment history  35%
    utilization      30%
    account age      15%
    credit mix       10%
    inquiries        10%
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ...models.ssot import (
    CreditProfile, AuditItem, AuditFactor, Impact, ScorePhase,
    UtilizationStatus, PaymentHistoryStatus, AccountType,
)


# =============================================================================
# THRESHOLDS
# =============================================================================

PHASE_THRESHOLDS = [
    (740, ScorePhase.ELITE),
    (670, ScorePhase.OPTIMIZATION),
    (580, ScorePhase.ACCELERATION),
]

PAYMENT_HISTORY_WEIGHT = 35
UTILIZATION_WEIGHT = 30
AGE_WEIGHT = 15
MIX_WEIGHT = 10
INQUIRIES_WEIGHT = 10

PAYMENT_STRENGTH_MIN = 99
PAYMENT_WEAKNESS_BELOW = 95
PAYMENT_NEEDS_WORK_MIN = 85

UTILIZATION_EXCELLENT_MAX = 9
UTILIZATION_GOOD_MAX = 30
UTILIZATION_FAIR_MAX = 50

AGE_STRENGTH_MIN_MONTHS = 84
AGE_WEAKNESS_BELOW_MONTHS = 24

MIX_MIN_TYPES = 3
INQUIRY_CEILING = 3  # no penalty at or below

INSTALLMENT_TYPES = {
    AccountType.INSTALLMENT.value,
    AccountType.AUTO.value,
    AccountType.STUDENT.value,
    AccountType.PERSONAL.value,
    AccountType.MORTGAGE.value,
}


@dataclass
class FactorAssessment:
    """Signals produced by a single factor check."""
    strengths: List[AuditItem] = field(default_factory=list)
    weaknesses: List[AuditItem] = field(default_factory=list)


# =============================================================================
# SCORE PHASE
# =============================================================================

def classify_phase(score: Optional[int]) -> ScorePhase:
    """Bucket a score. Boundary values belong to the higher phase; absent is 0."""
    score = score or 0
    for minimum, phase in PHASE_THRESHOLDS:
        if score >= minimum:
            return phase
    return ScorePhase.FOUNDATION


# =============================================================================
# FACTOR RULES
# =============================================================================

class FactorRules:
    """Per-factor checks used by the CreditAuditEngine."""

    def check_payment_history(self, profile: CreditProfile) -> FactorAssessment:
        """
        >= 99% on time is a strength, < 95% a weakness.

        95-98 is a dead zone: good enough not to warn, not good enough to praise.
        """
        result = FactorAssessment()
        pct = profile.on_time_payment_percent
        if pct is None:
            return result

        if pct >= PAYMENT_STRENGTH_MIN:
            result.strengths.append(AuditItem(
                factor=AuditFactor.PAYMENT_HISTORY,
                description="Near-perfect payment history",
                impact=Impact.HIGH,
                score_weight_percent=PAYMENT_HISTORY_WEIGHT,
            ))
        elif pct < PAYMENT_WEAKNESS_BELOW:
            result.weaknesses.append(AuditItem(
                factor=AuditFactor.PAYMENT_HISTORY,
                description=f"Payment history at {_fmt(pct)}% - late payments are the #1 score killer",
                impact=Impact.HIGH,
                score_weight_percent=PAYMENT_HISTORY_WEIGHT,
            ))
        return result

    def payment_history_status(self, profile: CreditProfile) -> PaymentHistoryStatus:
        """Status bucket for on-time percentage. Absent counts as 0 (poor)."""
        pct = profile.on_time_payment_percent or 0
        if pct >= PAYMENT_STRENGTH_MIN:
            return PaymentHistoryStatus.PERFECT
        if pct >= PAYMENT_WEAKNESS_BELOW:
            return PaymentHistoryStatus.GOOD
        if pct >= PAYMENT_NEEDS_WORK_MIN:
            return PaymentHistoryStatus.NEEDS_WORK
        return PaymentHistoryStatus.POOR

    def check_utilization(self, profile: CreditProfile) -> Tuple[UtilizationStatus, FactorAssessment]:
        """
        Returns (UtilizationStatus, FactorAssessment).

        <= 9 excellent (strength), <= 30 good, <= 50 fair (weakness),
        above 50 critical (weakness). Unknown utilization reports
        "excellent" with no strength recorded.
        """
        result = FactorAssessment()
        util = profile.effective_utilization
        if util is None:
            return UtilizationStatus.EXCELLENT, result

        if util <= UTILIZATION_EXCELLENT_MAX:
            result.strengths.append(AuditItem(
                factor=AuditFactor.UTILIZATION,
                description=f"Utilization at {util:.0f}% - optimal range",
                impact=Impact.HIGH,
                score_weight_percent=UTILIZATION_WEIGHT,
            ))
            return UtilizationStatus.EXCELLENT, result

        if util <= UTILIZATION_GOOD_MAX:
            return UtilizationStatus.GOOD, result

        if util <= UTILIZATION_FAIR_MAX:
            result.weaknesses.append(AuditItem(
                factor=AuditFactor.UTILIZATION,
                description=f"Utilization at {util:.0f}% - should be under 30%, ideal under 10%",
                impact=Impact.HIGH,
                score_weight_percent=UTILIZATION_WEIGHT,
            ))
            return UtilizationStatus.FAIR, result

        result.weaknesses.append(AuditItem(
            factor=AuditFactor.UTILIZATION,
            description=f"Utilization at {util:.0f}% - CRITICAL. Pay down immediately",
            impact=Impact.HIGH,
            score_weight_percent=UTILIZATION_WEIGHT,
        ))
        return UtilizationStatus.CRITICAL, result

    def check_account_age(self, profile: CreditProfile) -> FactorAssessment:
        """84+ months is a strength, under 24 a weakness, 24-83 no signal."""
        result = FactorAssessment()
        months = profile.average_account_age_months
        if months is None:
            return result

        if months >= AGE_STRENGTH_MIN_MONTHS:
            result.strengths.append(AuditItem(
                factor=AuditFactor.AGE,
                description=f"Average account age {months / 12:.1f} years - excellent",
                impact=Impact.MEDIUM,
                score_weight_percent=AGE_WEIGHT,
            ))
        elif months < AGE_WEAKNESS_BELOW_MONTHS:
            result.weaknesses.append(AuditItem(
                factor=AuditFactor.AGE,
                description="Average account age under 2 years - need to let accounts age",
                impact=Impact.MEDIUM,
                score_weight_percent=AGE_WEIGHT,
            ))
        return result

    def missing_account_types(self, profile: CreditProfile) -> List[str]:
        types = set(profile.account_types or [])
        missing = []
        if AccountType.REVOLVING.value not in types:
            missing.append(AccountType.REVOLVING.value)
        if not types & INSTALLMENT_TYPES:
            missing.append(AccountType.INSTALLMENT.value)
        return missing

    def check_credit_mix(self, profile: CreditProfile) -> FactorAssessment:
        """Fewer than three distinct account types is a weakness."""
        result = FactorAssessment()
        distinct = len(set(profile.account_types or []))
        if distinct < MIX_MIN_TYPES:
            result.weaknesses.append(AuditItem(
                factor=AuditFactor.MIX,
                description=f"Only {distinct} account type(s) - FICO rewards variety",
                impact=Impact.LOW,
                score_weight_percent=MIX_WEIGHT,
            ))
        return result

    def check_inquiries(self, profile: CreditProfile) -> FactorAssessment:
        """More than three hard inquiries in 12 months is a weakness."""
        result = FactorAssessment()
        count = profile.hard_inquiries_last_12mo
        if count is not None and count > INQUIRY_CEILING:
            result.weaknesses.append(AuditItem(
                factor=AuditFactor.INQUIRIES,
                description=f"{count} hard inquiries in last 12 months - slow down applications",
                impact=Impact.LOW,
                score_weight_percent=INQUIRIES_WEIGHT,
            ))
        return result


def _fmt(value: float) -> str:
    """Render 92.0 as '92' and 92.5 as '92.5'."""
    return f"{value:g}"
