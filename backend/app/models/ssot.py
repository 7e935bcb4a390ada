"""
Credit Builder - Single Source of Truth Models

These models are the ONLY data structures used throughout the pipeline.

- CreditProfile (SSOT #1): one per user, owned by the Profile Store
- CreditAudit (SSOT #2): derived from a CreditProfile, recomputed on every request
- DisputeRecord (SSOT #3): one per mailed letter, owned by the dispute history

No module may recompute an audit from anything other than a CreditProfile.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import uuid4

from dateutil.parser import isoparse


# =============================================================================
# ENUMS
# =============================================================================

class Bureau(str, Enum):
    # Declaration order is the dispatch order for all-bureau sends
    EQUIFAX = "equifax"
    EXPERIAN = "experian"
    TRANSUNION = "transunion"


class ScorePhase(str, Enum):
    FOUNDATION = "foundation"
    ACCELERATION = "acceleration"
    OPTIMIZATION = "optimization"
    ELITE = "elite"


class ScoreSource(str, Enum):
    FICO = "fico"
    VANTAGE = "vantage"
    SELF_REPORTED = "self_reported"
    UNKNOWN = "unknown"


class NegativeItemType(str, Enum):
    LATE_PAYMENT = "late_payment"
    COLLECTION = "collection"
    CHARGEOFF = "chargeoff"
    BANKRUPTCY = "bankruptcy"
    JUDGMENT = "judgment"
    TAX_LIEN = "tax_lien"
    INQUIRY = "inquiry"
    OTHER = "other"


class AccountType(str, Enum):
    REVOLVING = "revolving"
    INSTALLMENT = "installment"
    MORTGAGE = "mortgage"
    AUTO = "auto"
    STUDENT = "student"
    PERSONAL = "personal"
    HELOC = "heloc"
    CHARGE = "charge"


class AuditFactor(str, Enum):
    PAYMENT_HISTORY = "payment_history"
    UTILIZATION = "utilization"
    AGE = "age"
    MIX = "mix"
    INQUIRIES = "inquiries"


class Impact(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class UtilizationStatus(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"  # never produced by the audit, kept for stored values
    CRITICAL = "critical"


class PaymentHistoryStatus(str, Enum):
    PERFECT = "perfect"
    GOOD = "good"
    NEEDS_WORK = "needs_work"
    POOR = "poor"


class DisputeStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    DELIVERED = "delivered"
    RESPONSE_RECEIVED = "response_received"
    RESOLVED = "resolved"
    ESCALATED = "escalated"
    OVERDUE = "overdue"


class DisputeOutcome(str, Enum):
    DELETED = "deleted"
    CORRECTED = "corrected"
    VERIFIED = "verified"
    PENDING = "pending"


class EntityType(str, Enum):
    """Who a creditor address belongs to."""
    CREDITOR = "creditor"
    COLLECTOR = "collector"


class BusinessEntityType(str, Enum):
    LLC = "llc"
    CORPORATION = "corporation"
    S_CORP = "s_corp"
    SOLE_PROP = "sole_prop"
    PARTNERSHIP = "partnership"


class EducationTopic(str, Enum):
    FICO_FACTORS = "fico_factors"
    UTILIZATION = "utilization"
    AUTHORIZED_USER = "authorized_user"
    MYTHS = "myths"
    FCRA_RIGHTS = "fcra_rights"
    MENU = "menu"


class BusinessCreditPhase(str, Enum):
    """Stages of building business credit; OVERVIEW covers all of them."""
    FOUNDATION = "foundation"
    VENDOR_CREDIT = "vendor_credit"
    BUSINESS_CARDS = "business_cards"
    LOANS = "loans"
    OVERVIEW = "overview"


# =============================================================================
# SERIALIZATION HELPERS
# =============================================================================

def _plain(value: Any) -> Any:
    """Convert enums, datetimes and nested dataclasses into JSON-safe values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, list):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


def _known(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys the dataclass does not declare."""
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return isoparse(value)


# =============================================================================
# SSOT #1: CREDIT PROFILE
# =============================================================================

@dataclass
class NegativeItem:
    """Single adverse record on a credit file. Embedded in a CreditProfile."""
    type: NegativeItemType
    creditor_name: str
    account_number_last4: Optional[str] = None
    amount: Optional[float] = None
    date_reported: Optional[str] = None
    date_of_delinquency: Optional[str] = None
    status: Optional[str] = None
    bureau: Optional[str] = None  # equifax | experian | transunion | all
    disputable: Optional[bool] = None  # absent means disputable
    dispute_reason: Optional[str] = None

    def __post_init__(self):
        self.type = NegativeItemType(self.type)

    @property
    def is_disputable(self) -> bool:
        return self.disputable is not False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NegativeItem":
        return cls(**_known(cls, data))

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: _plain(getattr(self, f.name)) for f in fields(self)}


@dataclass
class BusinessProfile:
    """Business credit details. Informational only, never scored."""
    legal_name: str
    entity_type: Optional[BusinessEntityType] = None
    ein: Optional[str] = None
    duns_number: Optional[str] = None
    state_of_formation: Optional[str] = None
    formation_date: Optional[str] = None
    business_address: Optional[str] = None
    business_phone: Optional[str] = None
    website: Optional[str] = None
    industry: Optional[str] = None
    annual_revenue: Optional[float] = None
    monthly_revenue: Optional[float] = None
    paydex_score: Optional[int] = None
    intelliscore: Optional[int] = None
    existing_trade_lines: Optional[int] = None
    bank_account_open: Optional[bool] = None

    def __post_init__(self):
        if self.entity_type is not None:
            self.entity_type = BusinessEntityType(self.entity_type)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BusinessProfile":
        return cls(**_known(cls, data))

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: _plain(getattr(self, f.name)) for f in fields(self)}


@dataclass
class CreditProfile:
    """
    Consumer credit profile - one per user.

    Every numeric credit attribute is optional. The audit engine defines
    how each absent value is treated; nothing here fills defaults in.
    """
    name: str
    address_line1: str
    city: str
    state: str
    zip: str
    ssn_last4: Optional[str] = None
    dob: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    # Personal credit
    current_score: Optional[int] = None
    score_source: Optional[ScoreSource] = None
    total_accounts: Optional[int] = None
    oldest_account_age_months: Optional[int] = None
    average_account_age_months: Optional[int] = None
    total_credit_limit: Optional[float] = None
    total_balance: Optional[float] = None
    utilization_percent: Optional[float] = None
    on_time_payment_percent: Optional[float] = None
    negative_items: List[NegativeItem] = field(default_factory=list)
    hard_inquiries_last_12mo: Optional[int] = None
    account_types: List[str] = field(default_factory=list)

    # Business credit
    business: Optional[BusinessProfile] = None

    # Financial
    monthly_income: Optional[float] = None
    monthly_expenses: Optional[float] = None
    available_for_deposits: Optional[float] = None

    # Goals
    credit_goals: List[str] = field(default_factory=list)
    timeline_months: Optional[int] = None

    def __post_init__(self):
        if self.score_source is not None:
            self.score_source = ScoreSource(self.score_source)
        # Tags are kept as plain strings so set lookups match either form
        self.account_types = [_plain(t) for t in self.account_types]

    @property
    def effective_utilization(self) -> Optional[float]:
        """
        Stored utilization, else balance / limit x 100.

        Returns None ("unknown") when neither is available. A missing
        balance counts as zero once a positive limit is known.
        """
        if self.utilization_percent is not None:
            return self.utilization_percent
        if self.total_credit_limit:
            return ((self.total_balance or 0) / self.total_credit_limit) * 100
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CreditProfile":
        values = _known(cls, data)
        values["negative_items"] = [
            item if isinstance(item, NegativeItem) else NegativeItem.from_dict(item)
            for item in (values.get("negative_items") or [])
        ]
        values["account_types"] = list(values.get("account_types") or [])
        values["credit_goals"] = list(values.get("credit_goals") or [])
        business = values.get("business")
        if isinstance(business, dict):
            values["business"] = BusinessProfile.from_dict(business)
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: _plain(getattr(self, f.name)) for f in fields(self)}


# =============================================================================
# SSOT #2: CREDIT AUDIT
# =============================================================================

@dataclass
class AuditItem:
    """A strength or weakness tied to one scoring factor."""
    factor: AuditFactor
    description: str
    impact: Impact
    score_weight_percent: int

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: _plain(getattr(self, f.name)) for f in fields(self)}


@dataclass
class DisputeCandidate:
    """A negative item paired with its recommended remedy and expected value."""
    item: NegativeItem
    recommended_letter_type: str
    estimated_score_gain: int
    success_probability: float
    priority_score: float  # gain x probability, one decimal
    escalation_path: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: _plain(getattr(self, f.name)) for f in fields(self)}


@dataclass
class RecommendedAction:
    action: str
    description: str
    estimated_score_impact: int
    cost: float
    timeline_days: int
    priority: int  # lower is shown first
    phase: ScorePhase

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: _plain(getattr(self, f.name)) for f in fields(self)}


@dataclass
class CreditAudit:
    """
    Derived audit of a CreditProfile.

    Ephemeral - never stored, never partially updated.
    """
    profile: CreditProfile
    score_phase: ScorePhase
    strengths: List[AuditItem]
    weaknesses: List[AuditItem]
    disputable_items: List[DisputeCandidate]
    missing_account_types: List[str]
    utilization_status: UtilizationStatus
    payment_history_status: PaymentHistoryStatus
    recommended_actions: List[RecommendedAction]

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: _plain(getattr(self, f.name)) for f in fields(self)}


# =============================================================================
# SSOT #3: DISPUTE RECORD
# =============================================================================

@dataclass
class LetterAddress:
    """Postal address as printed on a letter."""
    name: str
    address_line1: str
    city: str
    state: str
    zip: str

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class CreditorAddress:
    """Cached mailing address for a creditor or collector."""
    creditor_name: str
    entity_type: EntityType
    name: str  # as printed on the letter
    address_line1: str
    city: str
    state: str
    zip: str

    def __post_init__(self):
        self.entity_type = EntityType(self.entity_type)

    def to_letter_address(self) -> LetterAddress:
        return LetterAddress(
            name=self.name,
            address_line1=self.address_line1,
            city=self.city,
            state=self.state,
            zip=self.zip,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: _plain(getattr(self, f.name)) for f in fields(self)}


@dataclass
class DisputeRecord:
    """
    One mailed dispute letter.

    Deadlines are fixed at creation. Only status, outcome and notes
    change afterwards.
    """
    letter_type: str
    letter_name: str
    target: str  # bureau name or free-text creditor/collector name
    recipient_name: str
    items_disputed: List[NegativeItem]
    sent_date: datetime
    response_deadline: datetime
    escalation_date: datetime
    status: DisputeStatus = DisputeStatus.SENT
    id: str = field(default_factory=lambda: str(uuid4()))
    lob_letter_id: Optional[str] = None
    tracking_number: Optional[str] = None
    cost: Optional[float] = None
    outcome: Optional[DisputeOutcome] = None
    notes: Optional[str] = None

    def __post_init__(self):
        self.status = DisputeStatus(self.status)
        if self.outcome is not None:
            self.outcome = DisputeOutcome(self.outcome)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DisputeRecord":
        values = _known(cls, data)
        values["items_disputed"] = [
            item if isinstance(item, NegativeItem) else NegativeItem.from_dict(item)
            for item in (values.get("items_disputed") or [])
        ]
        for key in ("sent_date", "response_deadline", "escalation_date"):
            values[key] = _parse_datetime(values.get(key))
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: _plain(getattr(self, f.name)) for f in fields(self)}
