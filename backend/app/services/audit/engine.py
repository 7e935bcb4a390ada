"""
Credit Builder - Audit Engine

Main orchestrator that runs every factor rule against a CreditProfile.
Output is CreditAudit (SSOT #2) - computed fresh on each request, never stored.
"""
from __future__ import annotations
import logging
from typing import List

from ...models.ssot import CreditProfile, CreditAudit, AuditItem
from .rules import FactorRules, classify_phase
from .ranker import DisputeCandidateRanker
from .recommendations import RecommendationGenerator

logger = logging.getLogger(__name__)


class CreditAuditEngine:
    """
    Stateless audit engine.

    Total over any well-formed CreditProfile: absent values are treated
    as zero or as "no signal", never as errors.
    """

    def __init__(self):
        """Initialize the audit engine with all rule sets."""
        self.factor_rules = FactorRules()
        self.ranker = DisputeCandidateRanker()
        self.recommendations = RecommendationGenerator()

    def audit(self, profile: CreditProfile) -> CreditAudit:
        """
        Run all factor rules against a CreditProfile.

        Args:
            profile: CreditProfile (SSOT #1)

        Returns:
            CreditAudit (SSOT #2)
        """
        rules = self.factor_rules
        phase = classify_phase(profile.current_score)

        strengths: List[AuditItem] = []
        weaknesses: List[AuditItem] = []

        payment = rules.check_payment_history(profile)
        utilization_status, utilization = rules.check_utilization(profile)
        age = rules.check_account_age(profile)
        mix = rules.check_credit_mix(profile)
        inquiries = rules.check_inquiries(profile)

        for assessment in (payment, utilization, age, mix, inquiries):
            strengths.extend(assessment.strengths)
            weaknesses.extend(assessment.weaknesses)

        missing_types = rules.missing_account_types(profile)
        disputable = self.ranker.rank(profile.negative_items or [])
        actions = self.recommendations.generate(profile, phase, utilization_status, missing_types)

        audit = CreditAudit(
            profile=profile,
            score_phase=phase,
            strengths=strengths,
            weaknesses=weaknesses,
            disputable_items=disputable,
            missing_account_types=missing_types,
            utilization_status=utilization_status,
            payment_history_status=rules.payment_history_status(profile),
            recommended_actions=actions,
        )

        logger.info(
            f"Audit complete: phase={phase.value}, "
            f"{len(strengths)} strengths, {len(weaknesses)} weaknesses, "
            f"{len(disputable)} dispute candidates, {len(actions)} actions"
        )

        return audit


# =============================================================================
# FACTORY FUNCTION
# =============================================================================

def run_audit(profile: CreditProfile) -> CreditAudit:
    """
    Factory function to audit a CreditProfile.

    Args:
        profile: CreditProfile (SSOT #1)

    Returns:
        CreditAudit (SSOT #2)
    """
    engine = CreditAuditEngine()
    return engine.audit(profile)
