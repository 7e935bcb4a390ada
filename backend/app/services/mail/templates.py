"""
Dispute Letter Templates

One body per LetterType. Each template receives the rendered item blocks,
the raw items (for settlement totals) and the caller's `extra` inputs, and
returns the letter body between the address blocks and the signature.

Optional `extra` keys:
- goodwill: reason, goal
- pay_for_delete, chargeoff_removal: offer_percent (defaults 40 / 50)
- statute_of_limitations: state_sol_years, debt_state
- intent_to_sue: additional_violation
- breach_of_contract: breach_description
- demand_letter: demand_amount, background

Statutory citations are reproduced exactly; edit prose, not citations.
"""
import math
import re
from html import escape
from typing import Callable, Dict, List, NamedTuple, Optional

from ...models.catalog import LetterType
from ...models.ssot import NegativeItem


STANDARD_BUREAU_ENCLOSURES = [
    "Copy of government-issued photo identification",
    "Proof of current address (utility bill or bank statement)",
    "Copy of credit report highlighting disputed items",
]

ID_ENCLOSURE = "Copy of government-issued photo identification"
ADDRESS_ENCLOSURE = "Proof of current address"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def esc(value: Optional[str]) -> str:
    return escape(value or "", quote=True)


def _extra(extra: Dict[str, str], key: str, default: str) -> str:
    return esc(extra.get(key) or default)


def _offer_amount(items: List[NegativeItem], extra: Dict[str, str], default_percent: int) -> str:
    """Settlement offer as a whole-dollar share of the items' total."""
    match = _LEADING_INT.match(extra.get("offer_percent") or "")
    rate = int(match.group(1)) if match else default_percent
    total = sum(item.amount or 0 for item in items)
    if total <= 0:
        return "[AMOUNT]"
    return str(int(math.floor(total * rate / 100 + 0.5)))


# =============================================================================
# FCRA BUREAU (1-5)
# =============================================================================

def basic_bureau(items_html: str, items: List[NegativeItem], extra: Dict[str, str]) -> str:
    return f"""
    <p><strong>RE: Formal Dispute of Inaccurate Credit Information</strong></p>
    <p>Dear Sir/Madam:</p>
    <p>Pursuant to my rights under the Fair Credit Reporting Act, 15 U.S.C. &sect; 1681i(a),
    I am writing to formally dispute the following inaccurate information appearing on my
    credit report. I have identified the following account(s) that contain errors:</p>
    {items_html}
    <p>Under 15 U.S.C. &sect; 1681i(a), you are required to:</p>
    <ol>
      <li>Conduct a reasonable reinvestigation of the disputed information within <strong>30 days</strong> of receipt of this letter;</li>
      <li>Contact the furnisher of the information and notify them of the dispute;</li>
      <li>Review and consider all relevant information I have submitted;</li>
      <li>Delete or modify the information if it cannot be verified; and</li>
      <li>Provide me with written notice of the results of your reinvestigation within 5 business days of completion.</li>
    </ol>
    <p>Please note that under 15 U.S.C. &sect; 1681i(a)(5)(A), if the information is found to be
    inaccurate or incomplete, or cannot be verified, you must <strong>promptly delete or modify</strong>
    the item and notify all other consumer reporting agencies.</p>
    <p><strong>Failure to comply</strong> with the reinvestigation requirements may subject your agency to
    liability under 15 U.S.C. &sect; 1681n (willful noncompliance: statutory damages of $100&ndash;$1,000
    per violation plus punitive damages) and 15 U.S.C. &sect; 1681o (negligent noncompliance: actual damages).</p>
    <p>Please provide written confirmation of the results of your investigation, including
    an updated copy of my credit report reflecting any corrections.</p>
    """


def verification_609(items_html: str, items: List[NegativeItem], extra: Dict[str, str]) -> str:
    return f"""
    <p><strong>RE: Request for Disclosure of Information &mdash; FCRA &sect; 609</strong></p>
    <p>Dear Sir/Madam:</p>
    <p>Pursuant to 15 U.S.C. &sect; 1681g (FCRA Section 609), I am exercising my right to
    request disclosure of all information in my consumer file, specifically regarding the
    following account(s):</p>
    {items_html}
    <p>Under Section 609(a)(1), I am entitled to receive:</p>
    <ol>
      <li>All information in my consumer file at the time of the request;</li>
      <li>The sources of all information in the file;</li>
      <li>Identification of each person (including each end-user) that procured a consumer
      report on me during the preceding two-year period (or one year for employment purposes);</li>
      <li>The dates, original payees, and amounts of any checks upon which adverse information
      is based; and</li>
      <li>A record of all inquiries received during the preceding twelve-month period.</li>
    </ol>
    <p>I am specifically requesting that you provide <strong>verifiable proof</strong> that the above
    account(s) belong to me. This includes the original signed contract, application, or other
    documentation bearing my signature that authorized the reporting of this information.</p>
    <p>If you are unable to provide such verification, I demand that the unverified item(s)
    be <strong>immediately deleted</strong> from my credit report pursuant to 15 U.S.C. &sect; 1681i.</p>
    <p>You have <strong>30 days</strong> from receipt of this letter to respond. Failure to comply may
    result in legal action under 15 U.S.C. &sect;&sect; 1681n and 1681o.</p>
    """


def reinvestigation_611(items_html: str, items: List[NegativeItem], extra: Dict[str, str]) -> str:
    return f"""
    <p><strong>RE: Demand for Reinvestigation Pursuant to FCRA &sect; 611</strong></p>
    <p>Dear Sir/Madam:</p>
    <p>I previously disputed the accuracy of information on my credit report. Pursuant to
    15 U.S.C. &sect; 1681i (FCRA Section 611), I am demanding a <strong>thorough reinvestigation</strong>
    of the following account(s) that remain inaccurate:</p>
    {items_html}
    <p>Under Section 611, you are required to:</p>
    <ol>
      <li>Conduct a reasonable reinvestigation to determine whether the disputed information
      is inaccurate and record the current status of the disputed information, or delete the
      item in accordance with 15 U.S.C. &sect; 1681i(a)(5);</li>
      <li>Within 5 business days of receipt, notify the furnisher of information of this dispute,
      including all relevant information provided by the consumer;</li>
      <li>Consider all relevant information submitted by the consumer;</li>
      <li>Complete the reinvestigation within <strong>30 days</strong>; and</li>
      <li>Provide written notice of the results no later than 5 business days after completion.</li>
    </ol>
    <p><strong>Important:</strong> Under 15 U.S.C. &sect; 1681i(a)(5)(A), if the disputed information
    cannot be verified by the furnisher, you must promptly delete the item from my file and
    notify me of the deletion.</p>
    <p>This is a formal demand. I expect full compliance within the statutory timeframe.
    Noncompliance will be documented for potential action under 15 U.S.C. &sect;&sect; 1681n&ndash;1681o,
    including a complaint to the Consumer Financial Protection Bureau (CFPB).</p>
    """


def method_of_verification(items_html: str, items: List[NegativeItem], extra: Dict[str, str]) -> str:
    return f"""
    <p><strong>RE: Demand for Method of Verification &mdash; FCRA &sect; 611(a)(6)&ndash;(7)</strong></p>
    <p>Dear Sir/Madam:</p>
    <p>I previously submitted a dispute regarding the following account(s), and your agency
    reported the results as "verified." I am now exercising my right under 15 U.S.C.
    &sect; 1681i(a)(6) and (7) to demand that you provide the <strong>method of verification</strong>
    used to confirm the accuracy of the disputed information:</p>
    {items_html}
    <p>Under 15 U.S.C. &sect; 1681i(a)(6)(B)(iii), upon request, you must provide:</p>
    <ol>
      <li>A description of the <strong>procedure used</strong> to determine the accuracy and
      completeness of the information;</li>
      <li>The <strong>business name and address</strong> of any furnisher contacted in connection
      with the reinvestigation; and</li>
      <li>The <strong>telephone number</strong> of the furnisher, if reasonably available.</li>
    </ol>
    <p>Additionally, under 15 U.S.C. &sect; 1681i(a)(7), you must provide a description of the
    reinvestigation procedure and include the identity of any document relied upon.</p>
    <p>A generic response stating the information was "verified" without providing the specific
    method of verification does <strong>not</strong> satisfy the requirements of the FCRA. If you
    are unable to provide the requested details, I demand immediate deletion of the disputed
    item(s) pursuant to 15 U.S.C. &sect; 1681i(a)(5)(A).</p>
    <p>You have <strong>15 days</strong> from receipt of this request to comply. Failure to do so will
    constitute willful noncompliance under 15 U.S.C. &sect; 1681n, exposing your agency to
    statutory damages of $100&ndash;$1,000 per violation plus punitive damages and attorney fees.</p>
    """


def identity_theft(items_html: str, items: List[NegativeItem], extra: Dict[str, str]) -> str:
    return f"""
    <p><strong>RE: Identity Theft Report &mdash; Block of Fraudulent Information Under FCRA &sect; 605B</strong></p>
    <p>Dear Sir/Madam:</p>
    <p>I am a victim of identity theft. Pursuant to 15 U.S.C. &sect; 1681c-2 (FCRA Section 605B),
    I am requesting that you <strong>block</strong> the reporting of the following fraudulent
    account(s) that were opened or used without my knowledge, authorization, or consent:</p>
    {items_html}
    <p>Under 15 U.S.C. &sect; 1681c-2(a), you must block the reporting of any information
    identified in an identity theft report within <strong>4 business days</strong> of receipt of:</p>
    <ol>
      <li>This identity theft report (included as an enclosure);</li>
      <li>Proof of my identity (included as an enclosure); and</li>
      <li>Identification of the specific information to be blocked (listed above).</li>
    </ol>
    <p>Under 15 U.S.C. &sect; 1681c-2(b), you must also promptly notify the furnisher(s) of
    the information that the block has been imposed and that the information may be the result
    of identity theft.</p>
    <p><strong>You may not refuse</strong> to block information solely because the identity theft
    report was not filed with a law enforcement agency. An FTC Identity Theft Report satisfies
    the statutory requirements per 15 U.S.C. &sect; 1681a(q)(4).</p>
    <p>Failure to block the reported information within 4 business days constitutes willful
    noncompliance under 15 U.S.C. &sect; 1681n, subjecting your agency to statutory damages
    of $100&ndash;$1,000 per violation, punitive damages, and reasonable attorney fees.</p>
    """


# =============================================================================
# FDCPA COLLECTOR (6-8)
# =============================================================================

def debt_validation(items_html: str, items: List[NegativeItem], extra: Dict[str, str]) -> str:
    return f"""
    <p><strong>RE: Demand for Debt Validation Pursuant to FDCPA &sect; 1692g</strong></p>
    <p>Dear Sir/Madam:</p>
    <p>I am writing in response to your attempt to collect a debt. Pursuant to 15 U.S.C.
    &sect; 1692g(b) of the Fair Debt Collection Practices Act, I am formally disputing this
    debt and requesting validation of the following account(s):</p>
    {items_html}
    <p>Under 15 U.S.C. &sect; 1692g(b), upon receipt of this dispute, you must <strong>cease all
    collection activity</strong> until you provide adequate validation. Specifically, I demand
    that you provide:</p>
    <ol>
      <li>The <strong>amount of the debt</strong>, including an itemized accounting of principal,
      interest, fees, and any other charges;</li>
      <li>The <strong>name of the original creditor</strong> to whom the debt is owed;</li>
      <li>A <strong>copy of the original signed agreement</strong> or contract that created the
      obligation, bearing my signature;</li>
      <li>Proof that you are <strong>licensed to collect debts</strong> in my state of residence;</li>
      <li>Documentation establishing the <strong>chain of assignment</strong> or sale from the
      original creditor to your agency; and</li>
      <li>Proof that the <strong>statute of limitations</strong> has not expired on this debt.</li>
    </ol>
    <p><strong>Important notices:</strong></p>
    <ul>
      <li>Under 15 U.S.C. &sect; 1692g(b), you must cease collection until validation is provided.</li>
      <li>Under 15 U.S.C. &sect; 1692c(c), any communication other than to provide validation
      during this period constitutes a violation.</li>
      <li>Under 15 U.S.C. &sect; 1692e, reporting an unvalidated debt to credit bureaus is
      deceptive and a violation of the FDCPA.</li>
    </ul>
    <p>If you cannot provide the requested validation, you must:</p>
    <ol>
      <li>Cease all collection efforts immediately;</li>
      <li>Remove any negative reporting from all three credit bureaus; and</li>
      <li>Confirm in writing that this matter is resolved.</li>
    </ol>
    <p>Violations of the FDCPA carry penalties of up to <strong>$1,000 per violation</strong> in
    statutory damages (15 U.S.C. &sect; 1692k), plus actual damages and attorney fees.</p>
    """


def cease_desist(items_html: str, items: List[NegativeItem], extra: Dict[str, str]) -> str:
    return f"""
    <p><strong>RE: Cease and Desist Communication &mdash; FDCPA &sect; 1692c(c)</strong></p>
    <p>Dear Sir/Madam:</p>
    <p>Pursuant to 15 U.S.C. &sect; 1692c(c) of the Fair Debt Collection Practices Act,
    I hereby demand that you <strong>immediately cease all communication</strong> with me regarding
    the following alleged debt(s):</p>
    {items_html}
    <p>Under 15 U.S.C. &sect; 1692c(c), after receipt of this notice, you may only contact me to:</p>
    <ol>
      <li>Advise me that further collection efforts are being terminated;</li>
      <li>Notify me that you may invoke specific remedies ordinarily invoked by such debt collector; or</li>
      <li>Notify me that you intend to invoke a specified remedy.</li>
    </ol>
    <p><strong>Any other contact constitutes a violation of federal law.</strong></p>
    <p>Additionally, I demand that you:</p>
    <ol>
      <li>Stop all telephone calls, letters, emails, text messages, and other forms of
      communication regarding this alleged debt;</li>
      <li>Do not contact my employer, family members, neighbors, or any third party regarding
      this matter (15 U.S.C. &sect; 1692c(b));</li>
      <li>Do not report or continue to report this disputed debt to any credit reporting
      agency, as doing so while the debt is disputed and unvalidated constitutes a
      deceptive practice under 15 U.S.C. &sect; 1692e; and</li>
      <li>Provide written confirmation that you have received this cease and desist notice.</li>
    </ol>
    <p>Each violation of 15 U.S.C. &sect; 1692c(c) subjects you to statutory damages of up to
    <strong>$1,000</strong> per violation (15 U.S.C. &sect; 1692k), plus actual damages, attorney
    fees, and court costs. I am documenting all communications for potential legal action.</p>
    """


def pay_for_delete(items_html: str, items: List[NegativeItem], extra: Dict[str, str]) -> str:
    offer = _offer_amount(items, extra, 40)
    return f"""
    <p><strong>RE: Settlement Offer &mdash; Conditional Upon Deletion of Trade Line</strong></p>
    <p>Dear Sir/Madam:</p>
    <p>I am writing regarding the following account(s) currently being reported on my
    credit file:</p>
    {items_html}
    <p>I am prepared to resolve this matter with a settlement payment, <strong>conditional upon
    the complete deletion</strong> of the above account(s) from all three major credit bureaus
    (Equifax, Experian, and TransUnion).</p>
    <p><strong>Terms of this offer:</strong></p>
    <ol>
      <li>I will pay <strong>${offer}</strong> as settlement in full for the above account(s);</li>
      <li>Payment will be made via certified funds (cashier&rsquo;s check or money order) within
      <strong>10 business days</strong> of receiving your written acceptance;</li>
      <li>Upon receipt of payment, you will submit a Universal Data Form (AUD) to Equifax,
      Experian, and TransUnion requesting <strong>complete deletion</strong> of the trade line(s)
      &mdash; not an update to "paid" or "settled" status;</li>
      <li>Deletion must be completed within <strong>30 days</strong> of payment; and</li>
      <li>You will provide written confirmation that the deletion request has been submitted.</li>
    </ol>
    <p><strong>This offer is contingent upon deletion.</strong> If you are unwilling or unable to
    delete the trade line, this offer is withdrawn. I am not acknowledging the validity of this
    debt, and this letter does not restart any statute of limitations.</p>
    <p>Please respond in writing to accept or decline this offer within <strong>15 days</strong>.
    If accepted, I will remit payment promptly. If I do not receive a response, I will assume
    this offer has been declined and will pursue other remedies available to me under the FCRA
    and FDCPA.</p>
    <p>This letter is sent without prejudice to any rights I may have under applicable law.</p>
    """


# =============================================================================
# CREDITOR (9-11)
# =============================================================================

def goodwill(items_html: str, items: List[NegativeItem], extra: Dict[str, str]) -> str:
    reason = _extra(
        extra, "reason",
        "The late payment(s) occurred during a period of unexpected financial hardship "
        "(medical emergency, job loss, or other unforeseen circumstance)",
    )
    goal = _extra(
        extra, "goal",
        "achieving important financial goals such as purchasing a home or qualifying for "
        "favorable interest rates",
    )
    return f"""
    <p><strong>RE: Goodwill Request for Removal of Negative Reporting</strong></p>
    <p>Dear Sir/Madam:</p>
    <p>I am writing to respectfully request a goodwill adjustment to remove the following
    negative information from my credit report with your company:</p>
    {items_html}
    <p>I want to acknowledge that the reported information is technically accurate. However,
    I am requesting your consideration due to the following circumstances:</p>
    <ul>
      <li>I have been a loyal customer and value my relationship with your company;</li>
      <li>{reason};</li>
      <li>I have since brought the account current and have maintained on-time payments;</li>
      <li>This negative mark is preventing me from {goal}.</li>
    </ul>
    <p>I understand that you have no legal obligation to make this adjustment, and I am
    appealing solely to your goodwill. Many creditors recognize that a single lapse does not
    define a customer&rsquo;s creditworthiness, and that goodwill adjustments can strengthen
    customer loyalty.</p>
    <p><strong>My request:</strong></p>
    <ol>
      <li>Remove the negative reporting (late payment notation) from my credit file with
      all three bureaus (Equifax, Experian, and TransUnion); or</li>
      <li>Alternatively, update the reporting to reflect "Paid as Agreed" or "Current" status.</li>
    </ol>
    <p>I am committed to maintaining a positive relationship with your company and will
    continue to manage my account responsibly. Thank you for your time and consideration.</p>
    """


def direct_creditor(items_html: str, items: List[NegativeItem], extra: Dict[str, str]) -> str:
    return f"""
    <p><strong>RE: Direct Dispute of Inaccurate Information &mdash; FCRA &sect; 1681s-2(b)</strong></p>
    <p>Dear Sir/Madam:</p>
    <p>Pursuant to 15 U.S.C. &sect; 1681s-2(b), I am directly disputing the accuracy of
    information you are furnishing to the consumer reporting agencies regarding the following
    account(s):</p>
    {items_html}
    <p>As a furnisher of information, you have legal obligations under 15 U.S.C. &sect; 1681s-2.
    Specifically:</p>
    <ol>
      <li>Under <strong>&sect; 1681s-2(a)(1)(A)</strong>, you may not furnish information that you
      know or have reasonable cause to believe is inaccurate;</li>
      <li>Under <strong>&sect; 1681s-2(b)(1)</strong>, upon receiving notice of a dispute, you must
      conduct a reasonable investigation with respect to the disputed information;</li>
      <li>Under <strong>&sect; 1681s-2(b)(1)(B)</strong>, you must review all relevant information
      provided by the consumer;</li>
      <li>Under <strong>&sect; 1681s-2(b)(1)(C)</strong>, you must report the results of your
      investigation to the credit reporting agency; and</li>
      <li>Under <strong>&sect; 1681s-2(b)(1)(E)</strong>, if the information is found to be
      incomplete or inaccurate, you must modify, delete, or permanently block the reporting
      of that information.</li>
    </ol>
    <p>I demand that you:</p>
    <ol>
      <li>Immediately investigate the disputed information;</li>
      <li>Provide me with copies of any documentation you relied upon to verify the accuracy
      of this information;</li>
      <li>Correct or delete any inaccurate information; and</li>
      <li>Notify all consumer reporting agencies to which you reported the inaccurate information.</li>
    </ol>
    <p>Failure to conduct a reasonable investigation and correct inaccurate information may
    subject you to liability under 15 U.S.C. &sect; 1681s-2(c), including actual damages,
    statutory damages, punitive damages, and attorney fees. Consumers have a private right
    of action under &sect; 1681s-2(b) as established in <em>Nelson v. Chase Manhattan Mortgage
    Corp.</em>, 282 F.3d 1057 (9th Cir. 2002).</p>
    """


def chargeoff_removal(items_html: str, items: List[NegativeItem], extra: Dict[str, str]) -> str:
    offer = _offer_amount(items, extra, 50)
    return f"""
    <p><strong>RE: Settlement and Deletion Request for Charged-Off Account</strong></p>
    <p>Dear Sir/Madam:</p>
    <p>I am writing regarding the following account(s) that have been charged off and are
    currently being reported on my credit file:</p>
    {items_html}
    <p>I understand that a charge-off represents a significant negative event. However, I am
    writing to propose a resolution that benefits both parties:</p>
    <p><strong>Settlement proposal:</strong></p>
    <ol>
      <li>I will pay <strong>${offer}</strong> as full and final settlement of the
      above account(s);</li>
      <li>Payment will be made via certified funds within <strong>10 business days</strong>
      of receiving your written acceptance;</li>
      <li>Upon receipt of payment, you will update the trade line status to <strong>"Paid in
      Full"</strong> or, preferably, request <strong>complete deletion</strong> of the trade line
      from all three credit bureaus;</li>
      <li>You will provide a written settlement agreement prior to payment; and</li>
      <li>You will cease all collection activity related to this account.</li>
    </ol>
    <p><strong>Please note:</strong></p>
    <ul>
      <li>Under FCRA &sect; 1681s-2(a)(1)(A), furnishing information you know to be inaccurate
      is a violation. If this account is reported inaccurately in any way (balance, dates,
      status), it must be corrected regardless of settlement;</li>
      <li>A charge-off is an accounting term &mdash; it does not extinguish the debt or my
      right to dispute inaccurate reporting;</li>
      <li>This offer does not constitute an admission of the debt&rsquo;s validity or restart
      any applicable statute of limitations.</li>
    </ul>
    <p>Please respond in writing within <strong>15 days</strong> to accept or propose a counter-offer.
    I am motivated to resolve this matter promptly and am prepared to act quickly upon agreement.</p>
    """


# =============================================================================
# SPECIALIZED (12-19)
# =============================================================================

def unauthorized_inquiry(items_html: str, items: List[NegativeItem], extra: Dict[str, str]) -> str:
    return f"""
    <p><strong>RE: Demand for Removal of Unauthorized Hard Inquiry &mdash; FCRA &sect; 1681b</strong></p>
    <p>Dear Sir/Madam:</p>
    <p>I am writing to dispute the following unauthorized hard inquiry/inquiries appearing
    on my credit report:</p>
    {items_html}
    <p>Under 15 U.S.C. &sect; 1681b, a consumer reporting agency may furnish a consumer report only
    for a permissible purpose. I did not authorize the above-listed entity/entities to access
    my credit report, and no permissible purpose exists for these inquiries.</p>
    <p>Permissible purposes under &sect; 1681b(a) include:</p>
    <ol>
      <li>In response to a court order or federal grand jury subpoena;</li>
      <li>Written instructions of the consumer;</li>
      <li>A legitimate business transaction initiated by the consumer; or</li>
      <li>A legitimate business need in connection with a transaction involving the consumer.</li>
    </ol>
    <p><strong>None of these apply.</strong> I demand that you:</p>
    <ol>
      <li>Verify that the inquiring party had a permissible purpose;</li>
      <li>Provide me with documentation of the permissible purpose, if any;</li>
      <li>If no permissible purpose can be established, <strong>immediately remove</strong>
      the unauthorized inquiry from my credit report; and</li>
      <li>Provide written confirmation of the removal.</li>
    </ol>
    <p>Under 15 U.S.C. &sect; 1681n, obtaining a consumer report without a permissible purpose
    subjects the party to liability including statutory damages of <strong>$100&ndash;$1,000</strong>,
    actual damages, punitive damages, and attorney fees.</p>
    <p>You have <strong>30 days</strong> to investigate and respond.</p>
    """


def hipaa_medical(items_html: str, items: List[NegativeItem], extra: Dict[str, str]) -> str:
    return f"""
    <p><strong>RE: Dispute of Medical Debt &mdash; HIPAA Privacy Violation and FDCPA Demand</strong></p>
    <p>Dear Sir/Madam:</p>
    <p>I am writing to dispute the following medical debt(s) and to put you on notice of
    potential violations of the Health Insurance Portability and Accountability Act (HIPAA)
    and the Fair Debt Collection Practices Act (FDCPA):</p>
    {items_html}
    <p><strong>HIPAA concerns:</strong></p>
    <p>Under 45 CFR &sect; 164.502, a covered entity may only use or disclose Protected Health
    Information (PHI) for purposes of treatment, payment, or healthcare operations, and only
    with the minimum necessary information. The reporting of medical debt to consumer reporting
    agencies may constitute an unauthorized disclosure of PHI if proper authorization was not
    obtained.</p>
    <p><strong>I demand the following:</strong></p>
    <ol>
      <li>Provide a copy of the <strong>signed HIPAA authorization</strong> that permits the
      disclosure of my medical information to your agency and/or to credit reporting agencies;</li>
      <li>Provide an <strong>itemized statement</strong> of the medical charges, including procedure
      codes, dates of service, and the name of the healthcare provider;</li>
      <li>Verify that this debt was not <strong>paid or covered by insurance</strong>;</li>
      <li>Provide documentation of the <strong>original creditor</strong> and chain of assignment;</li>
      <li>Confirm compliance with your state&rsquo;s medical debt reporting laws; and</li>
      <li>If this debt is under <strong>$500</strong>, note that under CFPB rules effective 2023,
      medical debts under $500 cannot be reported to credit bureaus.</li>
    </ol>
    <p><strong>Important:</strong> Under the FDCPA (15 U.S.C. &sect; 1692g), you must cease collection
    until validation is provided. Under HIPAA, unauthorized disclosure of PHI carries penalties
    of <strong>$100&ndash;$50,000 per violation</strong> (up to $1.5 million per year for identical
    provisions), plus potential criminal penalties.</p>
    <p>If you cannot provide the requested documentation, I demand immediate cessation of
    collection and deletion from all credit reports.</p>
    """


def statute_of_limitations(items_html: str, items: List[NegativeItem], extra: Dict[str, str]) -> str:
    sol_years = _extra(extra, "state_sol_years", "[STATE SOL YEARS]")
    debt_state = _extra(extra, "debt_state", "[STATE]")
    return f"""
    <p><strong>RE: Statute of Limitations Defense &mdash; Time-Barred Debt</strong></p>
    <p>Dear Sir/Madam:</p>
    <p>I am writing regarding the following account(s) that you are attempting to collect
    and/or reporting on my credit file:</p>
    {items_html}
    <p>I am putting you on notice that this debt is <strong>time-barred</strong> under the
    applicable statute of limitations. The statute of limitations for this type of debt in
    {debt_state} is <strong>{sol_years} years</strong> from the date of last activity or
    default.</p>
    <p><strong>Legal implications of time-barred debt:</strong></p>
    <ol>
      <li>You cannot file a lawsuit to collect a time-barred debt. Any attempt to do so is
      subject to dismissal and may constitute a violation of the FDCPA;</li>
      <li>Under the FDCPA, threatening to sue on a time-barred debt or misrepresenting the
      legal status of a debt is a violation of 15 U.S.C. &sect; 1692e (deceptive practices);</li>
      <li>Under CFPB Regulation F (12 CFR &sect; 1006.26), if you continue to communicate about
      this time-barred debt, you must include a disclosure that the law limits how long you
      can sue to collect this debt;</li>
      <li>Under the FCRA, debts cannot appear on a credit report more than <strong>7 years</strong>
      from the date of first delinquency (15 U.S.C. &sect; 1681c(a)).</li>
    </ol>
    <p><strong>I demand that you:</strong></p>
    <ol>
      <li>Confirm the date of last activity or default on this account;</li>
      <li>Acknowledge that this debt is time-barred;</li>
      <li>Immediately cease all collection efforts;</li>
      <li>Remove this account from all credit bureau reports; and</li>
      <li>Confirm in writing that no further collection will be attempted.</li>
    </ol>
    <p>Any attempt to revive this time-barred debt through litigation, misrepresentation,
    or partial payment solicitation will be documented for potential FDCPA action. Statutory
    damages of up to <strong>$1,000</strong> per violation apply (15 U.S.C. &sect; 1692k).</p>
    """


def intent_to_sue(items_html: str, items: List[NegativeItem], extra: Dict[str, str]) -> str:
    additional = _extra(extra, "additional_violation", "Other violations as documented in prior correspondence")
    return f"""
    <p><strong>RE: Notice of Intent to File Lawsuit Under FCRA/FDCPA</strong></p>
    <p>Dear Sir/Madam:</p>
    <p>This letter serves as formal notice of my intent to file a lawsuit against your
    organization for violations of the Fair Credit Reporting Act (FCRA) and/or the Fair
    Debt Collection Practices Act (FDCPA) relating to the following account(s):</p>
    {items_html}
    <p><strong>Documented violations:</strong></p>
    <ol>
      <li>Failure to conduct a reasonable reinvestigation within 30 days as required by
      15 U.S.C. &sect; 1681i(a)(1);</li>
      <li>Continued reporting of inaccurate, incomplete, or unverifiable information in
      violation of 15 U.S.C. &sect; 1681s-2;</li>
      <li>Failure to provide the method of verification as required by
      15 U.S.C. &sect; 1681i(a)(6)&ndash;(7); and</li>
      <li>{additional}.</li>
    </ol>
    <p><strong>Damages I intend to pursue:</strong></p>
    <ul>
      <li><strong>Statutory damages:</strong> $100&ndash;$1,000 per violation under 15 U.S.C. &sect; 1681n
      (FCRA willful noncompliance) or up to $1,000 under 15 U.S.C. &sect; 1692k (FDCPA);</li>
      <li><strong>Actual damages:</strong> Including but not limited to credit denials, higher
      interest rates, emotional distress, and lost opportunities;</li>
      <li><strong>Punitive damages:</strong> As warranted by the willful nature of the violations;</li>
      <li><strong>Attorney fees and costs:</strong> As provided by 15 U.S.C. &sect;&sect; 1681n(a)(3)
      and 1692k(a)(3).</li>
    </ul>
    <p><strong>Final opportunity to resolve:</strong></p>
    <p>Before filing suit, I am providing you with <strong>15 days</strong> from receipt of this
    letter to:</p>
    <ol>
      <li>Delete or correct the disputed information from all credit bureau reports;</li>
      <li>Provide written confirmation of the correction/deletion; and</li>
      <li>Cease any further violations.</li>
    </ol>
    <p>If this matter is not resolved within 15 days, I will proceed with filing a lawsuit in
    the appropriate court without further notice. All prior correspondence has been preserved
    as evidence, including certified mail receipts and response (or lack thereof) documentation.</p>
    """


def arbitration_election(items_html: str, items: List[NegativeItem], extra: Dict[str, str]) -> str:
    return f"""
    <p><strong>RE: Election of Arbitration Under Account Agreement</strong></p>
    <p>Dear Sir/Madam:</p>
    <p>Pursuant to the arbitration provision contained in the account agreement governing the
    following account(s), I hereby elect to resolve this dispute through binding arbitration:</p>
    {items_html}
    <p>Under the Federal Arbitration Act (9 U.S.C. &sect;&sect; 1&ndash;16) and the arbitration clause
    in the governing agreement, either party has the right to elect arbitration to resolve
    any claim or dispute.</p>
    <p><strong>I am electing arbitration for the following claims:</strong></p>
    <ol>
      <li>Inaccurate reporting to consumer reporting agencies in violation of FCRA
      &sect; 1681s-2;</li>
      <li>Unfair, deceptive, or abusive collection practices in violation of the FDCPA; and</li>
      <li>Breach of the account agreement terms.</li>
    </ol>
    <p><strong>Arbitration logistics:</strong></p>
    <ol>
      <li>I request that arbitration be administered by the American Arbitration Association
      (AAA) under its Consumer Arbitration Rules, or JAMS under its Minimum Standards for
      Consumer Arbitrations;</li>
      <li>Per most consumer arbitration clauses, the company is required to pay the arbitration
      filing fees and arbitrator costs beyond the initial consumer filing fee;</li>
      <li>Arbitration should be conducted in my local jurisdiction; and</li>
      <li>I reserve all rights to seek statutory damages, actual damages, punitive damages,
      and attorney fees as available under the FCRA and FDCPA.</li>
    </ol>
    <p>Please confirm receipt of this arbitration election and provide the name and contact
    information of your designated representative for arbitration proceedings within
    <strong>15 days</strong>.</p>
    """


def billing_error(items_html: str, items: List[NegativeItem], extra: Dict[str, str]) -> str:
    return f"""
    <p><strong>RE: Notice of Billing Error &mdash; Fair Credit Billing Act &sect; 1666</strong></p>
    <p>Dear Sir/Madam:</p>
    <p>Pursuant to 15 U.S.C. &sect; 1666 of the Fair Credit Billing Act (FCBA), I am writing
    to notify you of a billing error on my account. The following charge(s) are in dispute:</p>
    {items_html}
    <p>Under 15 U.S.C. &sect; 1666(b), a "billing error" includes:</p>
    <ol>
      <li>A charge not made by me or a person authorized to use my account;</li>
      <li>A charge for property or services not accepted or delivered as agreed;</li>
      <li>A computational or accounting error;</li>
      <li>Failure to credit a payment or return properly; and</li>
      <li>A charge for which I request clarification or documentation.</li>
    </ol>
    <p><strong>Your legal obligations under the FCBA:</strong></p>
    <ol>
      <li>Within <strong>30 days</strong> of receiving this notice, you must acknowledge receipt
      in writing;</li>
      <li>Within <strong>two billing cycles (but no more than 90 days)</strong>, you must either
      correct the billing error or provide a written explanation of why you believe the charge
      is correct;</li>
      <li>During the investigation period, you <strong>may not</strong>:
        <ul>
          <li>Attempt to collect the disputed amount;</li>
          <li>Report the disputed amount as delinquent to any credit reporting agency; or</li>
          <li>Restrict or close the account solely due to the dispute.</li>
        </ul>
      </li>
    </ol>
    <p><strong>Penalties for noncompliance:</strong> Under 15 U.S.C. &sect; 1666(e), if you fail to
    comply with these requirements, you forfeit the right to collect the disputed amount
    <strong>up to $50</strong>, even if the charge was correct. Additionally, violations may subject
    you to civil liability under 15 U.S.C. &sect; 1640, including actual damages and statutory
    damages of <strong>twice the finance charge</strong> (minimum $500, maximum $5,000).</p>
    """


def breach_of_contract(items_html: str, items: List[NegativeItem], extra: Dict[str, str]) -> str:
    description = _extra(
        extra, "breach_description",
        "You have failed to perform your obligations under the account agreement, including but not "
        "limited to: accurate reporting of account information, proper application of payments, "
        "adherence to agreed-upon terms and conditions, and compliance with applicable consumer "
        "protection laws incorporated by reference into the agreement.",
    )
    return f"""
    <p><strong>RE: Notice of Breach of Contract</strong></p>
    <p>Dear Sir/Madam:</p>
    <p>This letter constitutes formal notice that you are in breach of the contractual
    agreement governing the following account(s):</p>
    {items_html}
    <p><strong>Nature of the breach:</strong></p>
    <p>{description}</p>
    <p><strong>Applicable legal framework:</strong></p>
    <ol>
      <li>Under state contract law, a material breach of contract excuses further performance
      by the non-breaching party and entitles them to damages;</li>
      <li>The implied covenant of good faith and fair dealing requires that neither party
      act in a way that destroys or injures the right of the other party to receive the
      benefits of the agreement;</li>
      <li>Under the FCRA, furnishing inaccurate information to credit bureaus may constitute
      both a statutory violation and a breach of any contractual obligation to report accurately; and</li>
      <li>Under the UCC &sect; 1-304, every contract imposes an obligation of good faith in its
      performance and enforcement.</li>
    </ol>
    <p><strong>Demand:</strong></p>
    <ol>
      <li>Cure the breach within <strong>30 days</strong> by correcting all inaccurate information;</li>
      <li>Provide written acknowledgment of the breach and corrective action taken;</li>
      <li>Compensate me for any actual damages suffered as a result of the breach; and</li>
      <li>Ensure future compliance with all contractual obligations.</li>
    </ol>
    <p>Failure to cure the breach within 30 days will result in pursuit of all available legal
    remedies, including compensatory damages, consequential damages, and attorney fees as
    permitted by the agreement and applicable law.</p>
    <p>This notice is provided without waiver of any rights I may have under the contract
    or applicable law.</p>
    """


def demand_letter(items_html: str, items: List[NegativeItem], extra: Dict[str, str]) -> str:
    amount = _extra(extra, "demand_amount", "[AMOUNT]")
    background = _extra(
        extra, "background",
        "Despite prior correspondence and attempts to resolve this matter, you have failed to comply "
        "with applicable federal and state consumer protection laws. Your continued inaction has caused "
        "and continues to cause me significant harm, including damage to my credit standing and "
        "resulting financial losses.",
    )
    return f"""
    <p><strong>RE: Formal Demand for Payment / Resolution</strong></p>
    <p>Dear Sir/Madam:</p>
    <p>This letter constitutes a formal demand regarding the following matter:</p>
    {items_html}
    <p><strong>Background:</strong></p>
    <p>{background}</p>
    <p><strong>Legal basis for this demand:</strong></p>
    <ol>
      <li>Fair Credit Reporting Act (15 U.S.C. &sect; 1681 et seq.) &mdash; violations of
      reinvestigation duties, furnisher obligations, and consumer disclosure rights;</li>
      <li>Fair Debt Collection Practices Act (15 U.S.C. &sect; 1692 et seq.) &mdash; deceptive
      and unfair collection practices, if applicable;</li>
      <li>State consumer protection and unfair trade practices statutes; and</li>
      <li>Common law claims including negligence, defamation, and breach of contract.</li>
    </ol>
    <p><strong>Demand:</strong></p>
    <p>I hereby demand that you take the following actions within <strong>15 days</strong> of
    receipt of this letter:</p>
    <ol>
      <li>Correct or delete all inaccurate information from my credit reports with all three
      major bureaus;</li>
      <li>Provide written confirmation of all corrections;</li>
      <li>Pay damages in the amount of <strong>${amount}</strong> to compensate for actual
      harm suffered, including credit denials, higher interest rates, emotional distress,
      and time spent attempting to resolve this matter; and</li>
      <li>Cease all further violations.</li>
    </ol>
    <p><strong>Consequences of non-compliance:</strong></p>
    <p>If this demand is not satisfied within 15 days, I will pursue all available legal
    remedies without further notice, including but not limited to:</p>
    <ul>
      <li>Filing suit in federal or state court;</li>
      <li>Filing complaints with the Consumer Financial Protection Bureau (CFPB),
      Federal Trade Commission (FTC), and state Attorney General;</li>
      <li>Seeking statutory damages, actual damages, punitive damages, and attorney fees; and</li>
      <li>Reporting your violations to relevant regulatory agencies.</li>
    </ul>
    <p>This letter is sent without prejudice to any additional rights and remedies I may have
    under applicable law. All prior correspondence has been preserved and will be submitted
    as evidence.</p>
    """


# =============================================================================
# DISPATCH TABLE
# =============================================================================

BodyFunction = Callable[[str, List[NegativeItem], Dict[str, str]], str]


class LetterTemplate(NamedTuple):
    body: BodyFunction
    enclosures: List[str]


LETTER_TEMPLATES: Dict[LetterType, LetterTemplate] = {
    LetterType.BASIC_BUREAU: LetterTemplate(basic_bureau, STANDARD_BUREAU_ENCLOSURES),
    LetterType.VERIFICATION_609: LetterTemplate(verification_609, STANDARD_BUREAU_ENCLOSURES),
    LetterType.REINVESTIGATION_611: LetterTemplate(reinvestigation_611, [
        *STANDARD_BUREAU_ENCLOSURES,
        "Copy of previous dispute correspondence (if applicable)",
    ]),
    LetterType.METHOD_OF_VERIFICATION: LetterTemplate(method_of_verification, [
        *STANDARD_BUREAU_ENCLOSURES,
        'Copy of previous dispute results showing "verified" status',
    ]),
    LetterType.IDENTITY_THEFT: LetterTemplate(identity_theft, [
        *STANDARD_BUREAU_ENCLOSURES,
        "FTC Identity Theft Report / police report",
        "FTC Identity Theft Affidavit (if applicable)",
    ]),
    LetterType.DEBT_VALIDATION: LetterTemplate(debt_validation, [ID_ENCLOSURE, ADDRESS_ENCLOSURE]),
    LetterType.CEASE_DESIST: LetterTemplate(cease_desist, [
        ID_ENCLOSURE,
        "Log of prior collection communications (if applicable)",
    ]),
    LetterType.PAY_FOR_DELETE: LetterTemplate(pay_for_delete, [ID_ENCLOSURE]),
    LetterType.GOODWILL: LetterTemplate(goodwill, [
        ID_ENCLOSURE,
        ADDRESS_ENCLOSURE,
        "Documentation of hardship (if applicable)",
    ]),
    LetterType.DIRECT_CREDITOR: LetterTemplate(direct_creditor, [
        ID_ENCLOSURE,
        ADDRESS_ENCLOSURE,
        "Copy of credit report showing disputed item(s)",
        "Supporting documentation of inaccuracy",
    ]),
    LetterType.CHARGEOFF_REMOVAL: LetterTemplate(chargeoff_removal, [ID_ENCLOSURE, ADDRESS_ENCLOSURE]),
    LetterType.UNAUTHORIZED_INQUIRY: LetterTemplate(unauthorized_inquiry, [
        ID_ENCLOSURE,
        "Copy of credit report highlighting unauthorized inquiry",
    ]),
    LetterType.HIPAA_MEDICAL: LetterTemplate(hipaa_medical, [
        ID_ENCLOSURE,
        ADDRESS_ENCLOSURE,
        "Copy of insurance Explanation of Benefits (if applicable)",
    ]),
    LetterType.STATUTE_OF_LIMITATIONS: LetterTemplate(statute_of_limitations, [
        ID_ENCLOSURE,
        ADDRESS_ENCLOSURE,
        "Documentation showing date of last activity (if available)",
    ]),
    LetterType.INTENT_TO_SUE: LetterTemplate(intent_to_sue, [
        ID_ENCLOSURE,
        "Copies of all prior dispute correspondence",
        "Certified mail receipts and return receipts",
        "Credit report excerpts showing continued inaccurate reporting",
    ]),
    LetterType.ARBITRATION_ELECTION: LetterTemplate(arbitration_election, [
        ID_ENCLOSURE,
        "Copy of account agreement (if available)",
        "Copies of prior dispute correspondence",
    ]),
    LetterType.BILLING_ERROR: LetterTemplate(billing_error, [
        ID_ENCLOSURE,
        "Copy of billing statement showing disputed charge(s)",
        "Supporting documentation (receipts, correspondence, etc.)",
    ]),
    LetterType.BREACH_OF_CONTRACT: LetterTemplate(breach_of_contract, [
        ID_ENCLOSURE,
        "Copy of account agreement or contract",
        "Documentation of breach (statements, correspondence, etc.)",
    ]),
    LetterType.DEMAND_LETTER: LetterTemplate(demand_letter, [
        ID_ENCLOSURE,
        "Copies of all prior correspondence",
        "Certified mail receipts and return receipts",
        "Credit report excerpts showing continued violations",
        "Documentation of actual damages (denial letters, rate quotes, etc.)",
    ]),
}
