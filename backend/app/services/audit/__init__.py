"""Credit Builder - Audit Engine

This layer audits a CreditProfile and outputs CreditAudit (SSOT #2).
Phase, strengths, weaknesses, dispute ranking and actions are computed here only.
"""
from .engine import CreditAuditEngine, run_audit
from .rules import FactorRules, FactorAssessment, classify_phase
from .ranker import DisputeCandidateRanker, ESCALATION_PATH
from .recommendations import RecommendationGenerator

__all__ = [
    "CreditAuditEngine",
    "run_audit",
    "FactorRules",
    "FactorAssessment",
    "classify_phase",
    "DisputeCandidateRanker",
    "ESCALATION_PATH",
    "RecommendationGenerator",
]
