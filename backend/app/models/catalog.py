"""
Credit Builder - Letter Catalog

Static lookup tables shared by the ranker, the intent matcher,
the letter renderer and the mail gateway.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict

from .ssot import Bureau, LetterAddress


class LetterType(str, Enum):
    BASIC_BUREAU = "basic_bureau"
    VERIFICATION_609 = "609_verification"
    REINVESTIGATION_611 = "611_reinvestigation"
    METHOD_OF_VERIFICATION = "method_of_verification"
    IDENTITY_THEFT = "identity_theft"
    DEBT_VALIDATION = "debt_validation"
    CEASE_DESIST = "cease_desist"
    PAY_FOR_DELETE = "pay_for_delete"
    GOODWILL = "goodwill"
    DIRECT_CREDITOR = "direct_creditor"
    CHARGEOFF_REMOVAL = "chargeoff_removal"
    UNAUTHORIZED_INQUIRY = "unauthorized_inquiry"
    HIPAA_MEDICAL = "hipaa_medical"
    STATUTE_OF_LIMITATIONS = "statute_of_limitations"
    INTENT_TO_SUE = "intent_to_sue"
    ARBITRATION_ELECTION = "arbitration_election"
    BILLING_ERROR = "billing_error"
    BREACH_OF_CONTRACT = "breach_of_contract"
    DEMAND_LETTER = "demand_letter"


class TargetType(str, Enum):
    BUREAU = "bureau"
    CREDITOR = "creditor"
    COLLECTOR = "collector"
    ANY = "any"


@dataclass(frozen=True)
class LetterTypeInfo:
    id: int
    name: str
    category: str
    legal_basis: str
    target_type: TargetType


LETTER_TYPE_INFO: Dict[LetterType, LetterTypeInfo] = {
    # FCRA bureau letters (1-5)
    LetterType.BASIC_BUREAU: LetterTypeInfo(1, "Basic Credit Bureau Dispute", "FCRA", "FCRA § 1681i", TargetType.BUREAU),
    LetterType.VERIFICATION_609: LetterTypeInfo(2, "609 Verification Request", "FCRA", "FCRA § 609", TargetType.BUREAU),
    LetterType.REINVESTIGATION_611: LetterTypeInfo(3, "611 Reinvestigation Demand", "FCRA", "FCRA § 611", TargetType.BUREAU),
    LetterType.METHOD_OF_VERIFICATION: LetterTypeInfo(4, "Method of Verification Demand", "FCRA", "FCRA § 611(a)(6)", TargetType.BUREAU),
    LetterType.IDENTITY_THEFT: LetterTypeInfo(5, "Identity Theft Dispute", "FCRA", "FCRA § 605B", TargetType.BUREAU),

    # FDCPA collector letters (6-8)
    LetterType.DEBT_VALIDATION: LetterTypeInfo(6, "Debt Validation Letter", "FDCPA", "FDCPA § 1692g", TargetType.COLLECTOR),
    LetterType.CEASE_DESIST: LetterTypeInfo(7, "Cease and Desist Letter", "FDCPA", "FDCPA § 1692c(c)", TargetType.COLLECTOR),
    LetterType.PAY_FOR_DELETE: LetterTypeInfo(8, "Pay-for-Delete Letter", "Negotiation", "Negotiation", TargetType.COLLECTOR),

    # Creditor letters (9-11)
    LetterType.GOODWILL: LetterTypeInfo(9, "Goodwill Removal Letter", "Courtesy", "Courtesy", TargetType.CREDITOR),
    LetterType.DIRECT_CREDITOR: LetterTypeInfo(10, "Direct Creditor Dispute", "FCRA", "FCRA § 1681s-2(b)", TargetType.CREDITOR),
    LetterType.CHARGEOFF_REMOVAL: LetterTypeInfo(11, "Charge-Off Removal Request", "Negotiation", "Negotiation", TargetType.CREDITOR),

    # Specialized letters (12-19)
    LetterType.UNAUTHORIZED_INQUIRY: LetterTypeInfo(12, "Unauthorized Inquiry Removal", "FCRA", "FCRA § 1681b", TargetType.BUREAU),
    LetterType.HIPAA_MEDICAL: LetterTypeInfo(13, "HIPAA Medical Debt Dispute", "HIPAA", "HIPAA + FDCPA", TargetType.COLLECTOR),
    LetterType.STATUTE_OF_LIMITATIONS: LetterTypeInfo(14, "Statute of Limitations Defense", "State Law", "State SOL", TargetType.COLLECTOR),
    LetterType.INTENT_TO_SUE: LetterTypeInfo(15, "Intent to Sue Letter", "FCRA/FDCPA", "FCRA § 1681n", TargetType.ANY),
    LetterType.ARBITRATION_ELECTION: LetterTypeInfo(16, "Arbitration Election", "Contract", "Federal Arbitration Act", TargetType.CREDITOR),
    LetterType.BILLING_ERROR: LetterTypeInfo(17, "Billing Error (FCBA)", "FCBA", "FCBA § 1666", TargetType.CREDITOR),
    LetterType.BREACH_OF_CONTRACT: LetterTypeInfo(18, "Breach of Contract Notice", "Contract", "State contract law", TargetType.ANY),
    LetterType.DEMAND_LETTER: LetterTypeInfo(19, "Formal Demand Letter", "General", "Contract law", TargetType.ANY),
}


# Bureau addresses for dispute letters
BUREAU_ADDRESSES: Dict[Bureau, LetterAddress] = {
    Bureau.EQUIFAX: LetterAddress(
        name="Equifax Information Services LLC",
        address_line1="P.O. Box 740256",
        city="Atlanta",
        state="GA",
        zip="30374-0256",
    ),
    Bureau.EXPERIAN: LetterAddress(
        name="Experian",
        address_line1="P.O. Box 4500",
        city="Allen",
        state="TX",
        zip="75013",
    ),
    Bureau.TRANSUNION: LetterAddress(
        name="TransUnion LLC Consumer Dispute Center",
        address_line1="P.O. Box 2000",
        city="Chester",
        state="PA",
        zip="19016",
    ),
}


def get_letter_info(letter_type) -> LetterTypeInfo:
    """Look up catalog info. Accepts a LetterType or its string value."""
    return LETTER_TYPE_INFO[LetterType(letter_type)]
