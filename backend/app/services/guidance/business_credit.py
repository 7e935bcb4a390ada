"""
Business Credit Guidance

Walks an owner through building business credit, phase by phase:
foundation (entity, EIN, DUNS, consistent NAP), starter Net-30 vendors,
store and business cards, then lines of credit and SBA loans.

Phase-specific questions are checked before the generic "getting started"
words, so "which vendors give Net-30 to new businesses?" lands on vendor
credit rather than the foundation checklist.
"""
from typing import Any, Dict, List, Optional

from ...models.ssot import BusinessCreditPhase, BusinessProfile
from .rules import Rule, first_match


BUSINESS_CREDIT_RULES: List[Rule] = [
    (BusinessCreditPhase.VENDOR_CREDIT, ("vendor", "net 30", "net-30", "trade line", "phase 1"), ()),
    (BusinessCreditPhase.BUSINESS_CARDS, (" card", "phase 2", "phase 3", "no pg", "no personal guarantee"), ()),
    (BusinessCreditPhase.LOANS, ("sba", " loan", "line of credit", "phase 4"), ()),
    (BusinessCreditPhase.FOUNDATION, (" start", "beginning", " new ", " zero ", "foundation"), ()),
]


BUSINESS_CREDIT_ANSWERS: Dict[BusinessCreditPhase, str] = {
    BusinessCreditPhase.FOUNDATION: """**Business Credit: Phase 0, Foundation**

Before applying for any business credit, you need:

**Entity Checklist:**
1. **Register LLC or Corporation**: separates business from personal liability ($50-$500)
2. **Get an EIN**: free at IRS.gov (your business SSN)
3. **Open a business bank account**: proves the business is real
4. **Get a DUNS Number**: free at dnb.com (takes 30 days, or ~$229 expedited)
5. **Business phone number**: listed under business name (Google Voice works)
6. **Business address**: must match across all registrations
7. **Business website**: professional domain with business email
8. **State/local licenses**: whatever your state requires

**CRITICAL:** Every registration must use the EXACT same Name, Address, and Phone (NAP). One inconsistency = denied.

Once all of this is set up, move to Phase 1: Vendor Credit.""",

    BusinessCreditPhase.VENDOR_CREDIT: """**Business Credit: Phase 1, Starter Vendor Credit (Months 1-3)**

These vendors extend Net-30 to NEW businesses with NO credit history and REPORT to bureaus:

| Vendor | What They Sell | Reports To |
|--------|---------------|-----------|
| **Uline** | Shipping/office supplies | D&B |
| **Quill** | Office supplies | D&B, Experian |
| **Grainger** | Industrial/safety | D&B |
| **Crown Office** | Office supplies | D&B, Experian, Equifax |
| **Strategic Network** | Tech accessories | D&B, Experian |
| **Summa Office** | Office supplies | All 3 |
| **The CEO Creative** | Marketing materials | All 3 ($49 fee) |
| **Shirtsy** | Custom apparel | D&B, Equifax |

**Strategy:**
1. Open 5+ vendor accounts in the first 30 days
2. Make a small purchase on each ($50-$200)
3. **PAY EARLY**: don't wait for Net-30. Pay within 1-5 days
4. Early payment = higher PAYDEX score (opposite of personal credit)
5. After 3 months: 5+ trade lines, PAYDEX 80+""",

    BusinessCreditPhase.BUSINESS_CARDS: """**Business Credit: Phase 2-3, Business Credit Cards**

**Tier 2: Store/Fleet Cards (Months 3-4):**
- Shell Small Business Card (D&B, Experian)
- Home Depot Pro (D&B)
- Lowe's Business Advantage (D&B, Experian)
- Amazon Business Line (D&B)

**Tier 3: Major Business Cards (Months 4-6):**
- Capital One Spark: $5K-$50K (PG required)
- Chase Ink Business: $5K-$50K (PG, doesn't report to personal)
- Amex Business Gold: No preset limit (PG, doesn't report to personal unless default)

**No Personal Guarantee Cards (The Goal):**
- **Brex**: $5K-$300K (needs $50K+ in business bank)
- **Ramp**: $5K-$500K (needs $75K+ in business bank)
- **Divvy**: $5K-$50K (more flexible, uses cash flow)

These approve based on BUSINESS financials only. No personal credit check, no PG.""",

    BusinessCreditPhase.LOANS: """**Business Credit: Phase 4, Loans & Lines of Credit (Months 6-12+)**

**Business Lines of Credit:**
- **Bluevine**: $5K-$250K (2+ years, $40K+/mo revenue)
- **Fundbox**: $1K-$150K (6+ months, $50K+/yr revenue)
- **OnDeck**: $6K-$100K (1+ year, $100K+/yr revenue)
- **Kabbage (AmEx)**: $2K-$250K (1+ year, $3K+/mo revenue)

**SBA Loans:**
- **7(a)**: up to $5M, 7-25 years, ~6-8% APR
- **504**: up to $5.5M, for real estate/equipment
- **Microloan**: up to $50K, newer businesses OK
- **SBA Express**: up to $500K, 36-hour approval

**Your ECOA Rights:**
Under the Equal Credit Opportunity Act, lenders CANNOT deny you based on race, color, religion, national origin, sex, marital status, or age. If denied, they MUST provide specific written reasons within 30 days. Violations = $10K individual / $500K class action damages.""",

    BusinessCreditPhase.OVERVIEW: """**Business Credit Building: Overview**

Building business credit is a 4-phase process that takes 6-12 months to reach $100K+:

**Phase 0: Foundation**: LLC, EIN, DUNS number, business bank account, consistent NAP
**Phase 1: Vendor Credit (Months 1-3)**: 5+ Net-30 vendor accounts, pay early, build PAYDEX
**Phase 2: Store Cards (Months 3-6)**: Shell, Home Depot, Amazon Business
**Phase 3: Major Cards (Months 4-6)**: Chase Ink, Amex Business, Capital One Spark
**Phase 4: Lines & Loans (Months 6-12)**: Bluevine, SBA loans, no-PG cards (Brex, Ramp)

**3 Business Credit Bureaus:**
- **D&B PAYDEX** (0-100): most important, rewards early payment
- **Experian Intelliscore** (0-100): credit risk assessment
- **Equifax Business** (101-992): payment index + utilization

**Key Rule:** Keep business and personal credit COMPLETELY separate. Never use personal cards for business expenses. Never commingle funds.

Ask me about any specific phase for detailed guidance.""",
}


# (checklist step, BusinessProfile attribute that shows it is done)
FOUNDATION_CHECKLIST = [
    ("Register LLC or Corporation", "entity_type"),
    ("Get an EIN", "ein"),
    ("Open a business bank account", "bank_account_open"),
    ("Get a DUNS Number", "duns_number"),
    ("Business phone number", "business_phone"),
    ("Business address", "business_address"),
    ("Business website", "website"),
]


def classify_business_question(text: str) -> BusinessCreditPhase:
    return first_match(text, BUSINESS_CREDIT_RULES, BusinessCreditPhase.OVERVIEW)


def missing_foundation_steps(business: Optional[BusinessProfile]) -> List[str]:
    """Foundation checklist steps the business profile does not show as done."""
    return [
        step for step, attribute in FOUNDATION_CHECKLIST
        if business is None or not getattr(business, attribute)
    ]


def business_credit_guidance(text: str, business: Optional[BusinessProfile] = None) -> Dict[str, Any]:
    phase = classify_business_question(text)
    result: Dict[str, Any] = {"phase": phase.value, "text": BUSINESS_CREDIT_ANSWERS[phase]}
    if phase in (BusinessCreditPhase.FOUNDATION, BusinessCreditPhase.OVERVIEW):
        result["missing_foundation"] = missing_foundation_steps(business)
    return result
