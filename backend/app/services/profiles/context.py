"""
Credit context summary - a short plain-text snapshot of where a user
stands, for display alongside a conversation or dashboard.
"""
from typing import List, Optional

from ...models.ssot import CreditProfile, CreditAudit, DisputeRecord


NO_PROFILE_MESSAGE = "No credit profile on file for this user. Create a profile to start."


def build_credit_context(
    profile: Optional[CreditProfile],
    audit: Optional[CreditAudit],
    pending: List[DisputeRecord],
    overdue: List[DisputeRecord],
) -> str:
    if profile is None:
        return NO_PROFILE_MESSAGE

    utilization = (
        f"{profile.utilization_percent:g}%" if profile.utilization_percent is not None else "unknown"
    )

    lines = [
        "[Credit Context]",
        f"Score: {profile.current_score or 'unknown'}",
        f"Phase: {audit.score_phase.value if audit else 'unknown'}",
        f"Accounts: {profile.total_accounts or 'unknown'}",
        f"Utilization: {utilization}",
        f"Negative items: {len(profile.negative_items or [])}",
        f"Pending disputes: {len(pending)}",
        f"Overdue disputes: {len(overdue)}",
    ]

    if overdue:
        lines.append("")
        lines.append(f"WARNING: {len(overdue)} dispute(s) past 30-day deadline - recommend escalation to CFPB")

    if audit:
        top_weakness = audit.weaknesses[0].description if audit.weaknesses else "none identified"
        top_action = audit.recommended_actions[0] if audit.recommended_actions else None
        lines.append("")
        lines.append(f"Top weakness: {top_weakness}")
        if top_action:
            lines.append(f"Top action: {top_action.action} (est. +{top_action.estimated_score_impact}pts)")
        else:
            lines.append("Top action: none (est. +0pts)")

    business = profile.business
    if business:
        lines.append("")
        lines.append("[Business Credit]")
        entity = business.entity_type.value if business.entity_type else "unknown"
        lines.append(f"Entity: {business.legal_name} ({entity})")
        lines.append(f"DUNS: {business.duns_number or 'not registered'}")
        lines.append(f"PAYDEX: {business.paydex_score or 'not established'}")
        lines.append(f"Trade lines: {business.existing_trade_lines or 0}")

    return "\n".join(lines) + "\n"
