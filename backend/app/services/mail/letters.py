"""
Dispute Letter Renderer

Builds the HTML document mailed by the gateway: sender block, date,
recipient block, the per-type body from `templates`, an optional note,
closing, enclosures and certified-mail footer. All user-supplied text is
HTML-escaped.
"""
from datetime import date
from typing import Dict, List, Optional

from ...models.catalog import LetterType
from ...models.ssot import CreditProfile, LetterAddress, NegativeItem
from .templates import LETTER_TEMPLATES, esc


DEFAULT_DISPUTE_REASON = "Information is inaccurate, incomplete, or unverifiable"


def format_disputed_items(items: List[NegativeItem]) -> str:
    blocks = []
    for i, item in enumerate(items, start=1):
        lines = [
            f"<strong>Item {i}:</strong>",
            f"<strong>Creditor/Furnisher:</strong> {esc(item.creditor_name)}",
            f"<strong>Account Number:</strong> XXXX-{esc(item.account_number_last4 or 'XXXX')}",
            f"<strong>Type:</strong> {esc(item.type.value.replace('_', ' '))}",
        ]
        if item.amount:
            lines.append(f"<strong>Amount:</strong> ${item.amount:,.2f}")
        if item.date_reported:
            lines.append(f"<strong>Date Reported:</strong> {esc(item.date_reported)}")
        lines.append(f"<strong>Reason for Dispute:</strong> {esc(item.dispute_reason or DEFAULT_DISPUTE_REASON)}")
        blocks.append(
            '<div style="margin:10px 0 10px 20px;padding:8px;border-left:2px solid #333">'
            + "<br>".join(lines)
            + "</div>"
        )
    return "".join(blocks)


def render_letter(
    letter_type,
    profile: CreditProfile,
    recipient: LetterAddress,
    items: List[NegativeItem],
    extra: Optional[Dict[str, str]] = None,
    today: Optional[date] = None,
) -> str:
    """Render a dispute letter as a standalone HTML document."""
    template = LETTER_TEMPLATES[LetterType(letter_type)]
    today = today or date.today()
    extra = extra or {}

    header = (
        '<div style="font-family:\'Times New Roman\',serif;font-size:12pt;line-height:1.6;'
        'max-width:6.5in;margin:0 auto;padding:0.5in">'
        f"<p>{esc(profile.name)}<br>{esc(profile.address_line1)}<br>"
        f"{esc(profile.city)}, {esc(profile.state)} {esc(profile.zip)}<br>"
        f"SSN (last 4): XXX-XX-{esc(profile.ssn_last4 or 'XXXX')}<br>"
        f"DOB: {esc(profile.dob or '[DOB]')}</p>"
        f"<p>{today.strftime('%B')} {today.day}, {today.year}</p>"
        f"<p>{esc(recipient.name)}<br>{esc(recipient.address_line1)}<br>"
        f"{esc(recipient.city)}, {esc(recipient.state)} {esc(recipient.zip)}</p>"
    )

    body = template.body(format_disputed_items(items), items, extra)
    if extra.get("note"):
        body += f"<p>{esc(extra['note'])}</p>"

    enclosure_block = ""
    if template.enclosures:
        enclosure_block = (
            '<p style="margin-top:20px"><strong>Enclosures:</strong></p><ol style="margin-left:20px">'
            + "".join(f"<li>{esc(e)}</li>" for e in template.enclosures)
            + "</ol>"
        )

    footer = (
        '<p style="margin-top:30px">Sincerely,</p><br><br>'
        f'<p style="border-top:1px solid #000;width:250px;padding-top:4px">{esc(profile.name)}</p>'
        f"{enclosure_block}"
        '<p style="font-size:10pt;color:#444;margin-top:30px;border-top:1px solid #ccc;padding-top:10px">'
        "<em>SENT VIA USPS CERTIFIED MAIL &mdash; RETURN RECEIPT REQUESTED</em></p></div>"
    )

    return f"<html><body>{header}{body}{footer}</body></html>"
