"""
Dispute Intent Matcher

Deterministic, ordered keyword rules that turn a free-text request
("send a 609 letter to Experian") into a letter type and a target.
The first matching rule wins, so order is part of the contract:
"609" is checked before anything else, bureau names are only looked
at after the letter type is settled.
"""
import re
from typing import Iterable, List, Optional, Tuple

from ...models.catalog import LetterType
from ...models.ssot import Bureau, CreditorAddress, EntityType, NegativeItem


# (letter_type, any of these phrases, all of these phrases)
LETTER_TYPE_RULES: List[Tuple[LetterType, Tuple[str, ...], Tuple[str, ...]]] = [
    (LetterType.VERIFICATION_609, ("609",), ()),
    (LetterType.REINVESTIGATION_611, ("611",), ()),
    (LetterType.METHOD_OF_VERIFICATION, ("verification", "method"), ()),
    (LetterType.IDENTITY_THEFT, ("identity", "fraud"), ()),
    (LetterType.DEBT_VALIDATION, ("validation", "validate"), ()),
    (LetterType.CEASE_DESIST, ("cease", "stop"), ()),
    (LetterType.PAY_FOR_DELETE, ("pay for delete", "pay-for-delete"), ()),
    (LetterType.GOODWILL, ("goodwill",), ()),
    (LetterType.DIRECT_CREDITOR, ("direct",), ()),
    (LetterType.CHARGEOFF_REMOVAL, (), ("charge", "off")),
    (LetterType.UNAUTHORIZED_INQUIRY, ("inquiry", "hard pull"), ()),
    (LetterType.HIPAA_MEDICAL, ("medical", "hipaa"), ()),
    (LetterType.STATUTE_OF_LIMITATIONS, ("statute", "expired", "too old"), ()),
    (LetterType.INTENT_TO_SUE, ("sue", "lawsuit"), ()),
    (LetterType.ARBITRATION_ELECTION, ("arbitration",), ()),
    (LetterType.BILLING_ERROR, ("billing", "unauthorized charge"), ()),
    (LetterType.BREACH_OF_CONTRACT, (), ("breach", "contract")),
    (LetterType.DEMAND_LETTER, ("demand", "formal demand"), ()),
]

ALL_BUREAUS_PHRASES = ("all bureau", "all 3", "all three")

_STATE_ZIP = re.compile(r"^([A-Za-z]{2})\s+(\d{5}(?:-\d{4})?)$")


def _matches(text: str, any_of: Iterable[str], all_of: Iterable[str]) -> bool:
    any_of = tuple(any_of)
    all_of = tuple(all_of)
    if any_of and not any(phrase in text for phrase in any_of):
        return False
    return all(phrase in text for phrase in all_of)


def detect_letter_type(text: str) -> LetterType:
    """First matching rule wins; falls back to a basic bureau dispute."""
    lower = (text or "").lower()
    for letter_type, any_of, all_of in LETTER_TYPE_RULES:
        if _matches(lower, any_of, all_of):
            return letter_type
    return LetterType.BASIC_BUREAU


def detect_bureau(text: str) -> Optional[Bureau]:
    """Checked in the order equifax, experian, transunion."""
    lower = (text or "").lower()
    for bureau in Bureau:
        if bureau.value in lower:
            return bureau
    return None


def wants_all_bureaus(text: str) -> bool:
    lower = (text or "").lower()
    return any(phrase in lower for phrase in ALL_BUREAUS_PHRASES)


def extract_creditor_name(text: str, negative_items: List[NegativeItem]) -> Optional[str]:
    """First negative item whose creditor name appears in the text."""
    lower = (text or "").lower()
    for item in negative_items:
        if item.creditor_name and item.creditor_name.lower() in lower:
            return item.creditor_name
    return None


def parse_creditor_address(text: str, entity_type: EntityType) -> Optional[CreditorAddress]:
    """
    Parse "Name, 123 Street, City, ST 12345" anchored from the right.

    The last part must be "ST ZIP"; everything before street/city is the
    name, so names may themselves contain commas.
    """
    parts = [p.strip() for p in (text or "").split(",")]
    if len(parts) < 4:
        return None

    match = _STATE_ZIP.match(parts[-1])
    if not match:
        return None

    state = match.group(1).upper()
    zip_code = match.group(2)
    city = parts[-2]
    address_line1 = parts[-3]
    name = ", ".join(parts[:-3])

    if not name or not address_line1 or not city:
        return None

    return CreditorAddress(
        creditor_name=name,
        entity_type=entity_type,
        name=name,
        address_line1=address_line1,
        city=city,
        state=state,
        zip=zip_code,
    )
