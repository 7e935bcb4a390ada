"""Credit Builder - Data Models"""
from .ssot import (
    # Enums
    Bureau, ScorePhase, ScoreSource, NegativeItemType, AccountType, AuditFactor, Impact,
    UtilizationStatus, PaymentHistoryStatus, DisputeStatus, DisputeOutcome, EntityType,
    # SSOT #1: Profile
    NegativeItem, BusinessProfile, CreditProfile,
    # SSOT #2: Audit
    AuditItem, DisputeCandidate, RecommendedAction, CreditAudit,
    # SSOT #3: Dispute
    LetterAddress, CreditorAddress, DisputeRecord,
)
from .catalog import LetterType, TargetType, LetterTypeInfo, LETTER_TYPE_INFO, BUREAU_ADDRESSES

__all__ = [
    "Bureau", "ScorePhase", "ScoreSource", "NegativeItemType", "AccountType", "AuditFactor", "Impact",
    "UtilizationStatus", "PaymentHistoryStatus", "DisputeStatus", "DisputeOutcome", "EntityType",
    "NegativeItem", "BusinessProfile", "CreditProfile",
    "AuditItem", "DisputeCandidate", "RecommendedAction", "CreditAudit",
    "LetterAddress", "CreditorAddress", "DisputeRecord",
    "LetterType", "TargetType", "LetterTypeInfo", "LETTER_TYPE_INFO", "BUREAU_ADDRESSES",
]
