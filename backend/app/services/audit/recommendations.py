"""
Credit Builder - Recommendation Generator

Phase-aware action list. Rules fire independently; the caller receives
the list sorted by priority (ascending, ties in generation order).
"""
from __future__ import annotations
from typing import List

from ...models.ssot import CreditProfile, RecommendedAction, ScorePhase, UtilizationStatus


FOUNDATION_MIN_ACCOUNTS = 3


class RecommendationGenerator:
    """Builds RecommendedAction lists for the audit engine."""

    def generate(
        self,
        profile: CreditProfile,
        phase: ScorePhase,
        utilization_status: UtilizationStatus,
        missing_types: List[str],
    ) -> List[RecommendedAction]:
        """Return actions sorted by priority. Equal priorities keep generation order."""
        actions: List[RecommendedAction] = []

        if utilization_status in (UtilizationStatus.CRITICAL, UtilizationStatus.FAIR):
            actions.append(RecommendedAction(
                action="Reduce utilization",
                description=(
                    "Pay down credit card balances. Target under 10% utilization on each card. "
                    "Use AZEO strategy: pay all cards to $0 except one with a small $5-20 balance."
                ),
                estimated_score_impact=50 if utilization_status == UtilizationStatus.CRITICAL else 25,
                cost=0,
                timeline_days=30,
                priority=1,
                phase=ScorePhase.ACCELERATION,
            ))

        negative_count = len(profile.negative_items or [])
        if negative_count > 0:
            actions.append(RecommendedAction(
                action="Dispute negative items",
                description=(
                    f"You have {negative_count} negative item(s) to dispute. "
                    "Submit a dispute to generate and send certified dispute letters."
                ),
                estimated_score_impact=30,
                cost=9,
                timeline_days=30,
                priority=2,
                phase=ScorePhase.ACCELERATION,
            ))

        if phase == ScorePhase.FOUNDATION and (profile.total_accounts or 0) < FOUNDATION_MIN_ACCOUNTS:
            actions.extend(self._foundation_builders())

        if missing_types:
            actions.append(RecommendedAction(
                action="Diversify credit mix",
                description=(
                    f"Missing account types: {', '.join(missing_types)}. "
                    "Adding variety to your credit mix improves the 10% credit mix factor."
                ),
                estimated_score_impact=10,
                cost=0,
                timeline_days=30,
                priority=5,
                phase=ScorePhase.OPTIMIZATION,
            ))

        if phase != ScorePhase.FOUNDATION:
            actions.append(RecommendedAction(
                action="Request credit limit increases",
                description=(
                    "Request CLI on all existing cards (soft pull when possible). "
                    "Lowers utilization ratio without paying down balances."
                ),
                estimated_score_impact=15,
                cost=0,
                timeline_days=1,
                priority=3,
                phase=ScorePhase.OPTIMIZATION,
            ))

        actions.append(RecommendedAction(
            action="Enable Experian Boost",
            description=(
                "Connect utility, phone, and streaming payments to Experian Boost "
                "for an instant score bump (Experian only)."
            ),
            estimated_score_impact=10,
            cost=0,
            timeline_days=1,
            priority=4,
            phase=ScorePhase.ACCELERATION,
        ))

        return sorted(actions, key=lambda a: a.priority)

    def _foundation_builders(self) -> List[RecommendedAction]:
        """Starter accounts for thin files."""
        return [
            RecommendedAction(
                action="Open secured credit card",
                description=(
                    "Open a Discover It Secured or Capital One Secured card. Use for one small "
                    "recurring charge, set to autopay, pay in full monthly."
                ),
                estimated_score_impact=20,
                cost=200,
                timeline_days=7,
                priority=3,
                phase=ScorePhase.FOUNDATION,
            ),
            RecommendedAction(
                action="Open credit builder loan",
                description="Open a Self.inc credit builder loan ($25/month). Adds an installment account to your mix.",
                estimated_score_impact=15,
                cost=25,
                timeline_days=7,
                priority=4,
                phase=ScorePhase.FOUNDATION,
            ),
            RecommendedAction(
                action="Become authorized user",
                description=(
                    "Ask a trusted family member to add you as an authorized user on their oldest, "
                    "highest-limit, lowest-utilization card. The full history backdates to your report."
                ),
                estimated_score_impact=40,
                cost=0,
                timeline_days=30,
                priority=2,
                phase=ScorePhase.FOUNDATION,
            ),
        ]
