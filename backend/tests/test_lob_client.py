"""
Tests for the Lob mail gateway and the letter renderer.

Lob is replaced by httpx.MockTransport (see conftest.LobStub).
"""
import base64
from datetime import date, timedelta

import httpx
import pytest

from app.models.catalog import BUREAU_ADDRESSES, LetterType
from app.models.ssot import Bureau, DisputeStatus, LetterAddress, NegativeItem, NegativeItemType
from app.services.mail import (
    DEFAULT_DISPUTE_REASON, STANDARD_BUREAU_ENCLOSURES, LetterFailed, LetterSent, LobMailService,
    MailDispatchError, MailTimeoutError, render_letter,
)

from conftest import FIXED_NOW, make_profile


RECIPIENT = LetterAddress(
    name="Capital One", address_line1="P.O. Box 30285", city="Salt Lake City", state="UT", zip="84130",
)


class TestLobMailService:

    def test_is_test_from_key_prefix(self):
        assert LobMailService("test_123").is_test is True
        assert LobMailService("live_123").is_test is False

    def test_certified_letter_request(self, mail_service, lob_stub):
        sender = LetterAddress(name="Jane Doe", address_line1="12 Elm St", city="Austin", state="TX", zip="78701")
        result = mail_service.send_certified_letter(sender, RECIPIENT, "<html></html>", "desc")

        assert result == LetterSent(id="ltr_1", tracking_number="94070001", price=7.25)

        request = lob_stub.requests[0]
        assert request.method == "POST"
        assert request.url == "https://lob.test/v1/letters"
        expected_auth = base64.b64encode(b"test_abc123:").decode()
        assert request.headers["Authorization"] == f"Basic {expected_auth}"

        form = lob_stub.form()
        assert form["to[name]"] == "Capital One"
        assert form["to[address_zip]"] == "84130"
        assert form["from[address_city]"] == "Austin"
        assert form["color"] == "false"
        assert form["mail_type"] == "usps_first_class"
        assert form["extra_service"] == "certified_return_receipt"
        assert form["address_placement"] == "top_first_page"
        assert form["file"] == "<html></html>"

    def test_rejected_letter_is_tagged_failure(self, mail_service, lob_stub):
        lob_stub.queue((422, {"error": {"message": "address invalid"}}))
        result = mail_service.send_certified_letter(RECIPIENT, RECIPIENT, "<html></html>", "desc")

        assert isinstance(result, LetterFailed)
        assert result.status_code == 422
        assert "address invalid" in result.message

    def test_send_dispute_builds_record(self, mail_service, lob_stub, profile):
        record = mail_service.send_dispute(
            profile, LetterType.VERIFICATION_609, Bureau.EXPERIAN, profile.negative_items[:1], now=FIXED_NOW,
        )

        assert record.letter_type == "609_verification"
        assert record.letter_name == "609 Verification Request"
        assert record.target == "experian"
        assert record.recipient_name == BUREAU_ADDRESSES[Bureau.EXPERIAN].name
        assert record.status == DisputeStatus.SENT
        assert record.sent_date == FIXED_NOW
        assert record.response_deadline == FIXED_NOW + timedelta(days=30)
        assert record.escalation_date == FIXED_NOW + timedelta(days=35)
        assert record.lob_letter_id == "ltr_1"
        assert record.tracking_number == "94070001"
        assert record.cost == 7.25

        form = lob_stub.form()
        assert form["description"] == "Credit Dispute #2 - 609 Verification Request - experian"
        assert form["to[address_city]"] == "Allen"

    def test_send_dispute_to_explicit_address(self, mail_service, profile):
        record = mail_service.send_dispute(
            profile, "goodwill", RECIPIENT, profile.negative_items, target_name="capital one", now=FIXED_NOW,
        )
        assert record.target == "capital one"
        assert record.recipient_name == "Capital One"

    def test_send_dispute_failure_embeds_status(self, mail_service, lob_stub, profile):
        lob_stub.queue((500, {"error": "internal"}))
        with pytest.raises(MailDispatchError) as exc:
            mail_service.send_dispute(profile, "basic_bureau", "equifax", profile.negative_items)

        assert exc.value.status_code == 500
        assert str(exc.value).startswith("Lob API error 500:")
        assert "internal" in exc.value.detail

    def test_timeout_is_distinct(self, mail_service, lob_stub, profile):
        lob_stub.queue((httpx.ReadTimeout("slow"), None))
        with pytest.raises(MailTimeoutError) as exc:
            mail_service.send_dispute(profile, "basic_bureau", "equifax", profile.negative_items)
        assert exc.value.status_code is None

    def test_network_error(self, mail_service, lob_stub, profile):
        lob_stub.queue((httpx.ConnectError("refused"), None))
        with pytest.raises(MailDispatchError) as exc:
            mail_service.send_dispute(profile, "basic_bureau", "equifax", profile.negative_items)
        assert not isinstance(exc.value, MailTimeoutError)

    def test_no_retry_on_failure(self, mail_service, lob_stub, profile):
        lob_stub.queue((503, {"error": "busy"}))
        with pytest.raises(MailDispatchError):
            mail_service.send_dispute(profile, "basic_bureau", "equifax", profile.negative_items)
        assert len(lob_stub.requests) == 1

    def test_all_bureaus_in_order(self, mail_service, lob_stub, profile):
        result = mail_service.send_to_all_bureaus(profile, "basic_bureau", profile.negative_items, now=FIXED_NOW)

        assert result.complete
        assert [r.target for r in result.records] == ["equifax", "experian", "transunion"]
        assert [lob_stub.form(i)["to[address_state]"] for i in range(3)] == ["GA", "TX", "PA"]

    def test_all_bureaus_partial_failure(self, mail_service, lob_stub, profile):
        lob_stub.queue(
            (200, {"id": "ltr_eq", "tracking_number": "1", "price": 7.25}),
            (500, {"error": "down"}),
        )
        result = mail_service.send_to_all_bureaus(profile, "basic_bureau", profile.negative_items)

        assert not result.complete
        assert [r.target for r in result.records] == ["equifax"]
        assert result.failed_bureau == Bureau.EXPERIAN
        assert result.skipped == [Bureau.TRANSUNION]
        assert result.failure.status_code == 500
        assert len(lob_stub.requests) == 2

    def test_verify_address(self, mail_service, lob_stub):
        lob_stub.queue((200, {"deliverability": "deliverable"}))
        assert mail_service.verify_address(RECIPIENT)["deliverability"] == "deliverable"

        request = lob_stub.requests[0]
        assert request.url == "https://lob.test/v1/us_verifications"
        assert b'"zip_code":"84130"' in request.content.replace(b" ", b"")

    def test_check_status(self, mail_service, lob_stub):
        lob_stub.queue((200, {"id": "ltr_9", "tracking_events": []}))
        assert mail_service.check_status("ltr_9")["id"] == "ltr_9"
        assert lob_stub.requests[0].url == "https://lob.test/v1/letters/ltr_9"

        lob_stub.queue((404, {"error": "not found"}))
        with pytest.raises(MailDispatchError) as exc:
            mail_service.check_status("missing")
        assert exc.value.status_code == 404

    @pytest.mark.parametrize("body", [
        {"tracking_number": "94070001", "price": "7.25"},
        "<html>502 Bad Gateway</html>",
        {"id": "ltr_1", "price": "n/a"},
        ["ltr_1"],
    ])
    def test_unreadable_success_response(self, mail_service, lob_stub, body):
        lob_stub.queue((200, body))
        with pytest.raises(MailDispatchError) as exc:
            mail_service.send_certified_letter(RECIPIENT, RECIPIENT, "<html></html>", "desc")

        assert exc.value.status_code == 200
        assert "unreadable letter response (200)" in exc.value.message
        assert not isinstance(exc.value, MailTimeoutError)


class TestRenderLetter:

    def test_bureau_letter(self, profile):
        html = render_letter(
            LetterType.BASIC_BUREAU, profile, BUREAU_ADDRESSES[Bureau.EQUIFAX],
            profile.negative_items[:2], today=date(2024, 3, 1),
        )
        assert "March 1, 2024" in html
        assert "XXX-XX-1234" in html
        assert "Equifax Information Services LLC" in html
        assert "Midland Credit" in html
        assert "$842.00" in html
        assert DEFAULT_DISPUTE_REASON in html
        assert "RETURN RECEIPT REQUESTED" in html
        assert "15 U.S.C. &sect; 1681i(a)" in html
        assert "&sect; 1681i(a)(5)(A)" in html
        assert "$100&ndash;$1,000" in html
        for enclosure in STANDARD_BUREAU_ENCLOSURES:
            assert enclosure in html

    @pytest.mark.parametrize("letter_type, citations", [
        (LetterType.VERIFICATION_609, ["15 U.S.C. &sect; 1681g", "Section 609(a)(1)", "&sect;&sect; 1681n and 1681o"]),
        (LetterType.REINVESTIGATION_611, ["&sect; 1681i(a)(5)", "&sect;&sect; 1681n&ndash;1681o"]),
        (LetterType.METHOD_OF_VERIFICATION, ["&sect; 1681i(a)(6)(B)(iii)", "&sect; 1681i(a)(7)", "<strong>15 days</strong>"]),
        (LetterType.IDENTITY_THEFT, ["&sect; 1681c-2(a)", "&sect; 1681c-2(b)", "&sect; 1681a(q)(4)", "4 business days"]),
    ])
    def test_bureau_family_citations(self, profile, letter_type, citations):
        html = render_letter(letter_type, profile, BUREAU_ADDRESSES[Bureau.EXPERIAN], profile.negative_items[:1])
        for citation in citations:
            assert citation in html

    def test_bureau_specific_enclosures(self, profile):
        html = render_letter(LetterType.IDENTITY_THEFT, profile, BUREAU_ADDRESSES[Bureau.EXPERIAN], [])
        assert "FTC Identity Theft Report / police report" in html
        assert "FTC Identity Theft Affidavit (if applicable)" in html

        html = render_letter(LetterType.METHOD_OF_VERIFICATION, profile, BUREAU_ADDRESSES[Bureau.EXPERIAN], [])
        assert "Copy of previous dispute results showing &quot;verified&quot; status" in html

    @pytest.mark.parametrize("letter_type, citations", [
        (LetterType.DEBT_VALIDATION, ["&sect; 1692g(b)", "&sect; 1692c(c)", "&sect; 1692e", "&sect; 1692k"]),
        (LetterType.CEASE_DESIST, ["&sect; 1692c(c)", "&sect; 1692c(b)", "&sect; 1692k"]),
        (LetterType.PAY_FOR_DELETE, ["Universal Data Form (AUD)", "<strong>complete deletion</strong>"]),
    ])
    def test_collector_family_citations(self, profile, letter_type, citations):
        html = render_letter(letter_type, profile, RECIPIENT, profile.negative_items[:1])
        for citation in citations:
            assert citation in html

    def test_pay_for_delete_offer(self, profile):
        items = [profile.negative_items[0], profile.negative_items[3]]  # 842 + 1200

        html = render_letter(LetterType.PAY_FOR_DELETE, profile, RECIPIENT, items)
        assert "<strong>$817</strong>" in html

        html = render_letter(LetterType.PAY_FOR_DELETE, profile, RECIPIENT, items, extra={"offer_percent": "25%"})
        assert "<strong>$511</strong>" in html

        html = render_letter(LetterType.PAY_FOR_DELETE, profile, RECIPIENT, items, extra={"offer_percent": "half"})
        assert "<strong>$817</strong>" in html

    def test_offer_without_amounts(self, profile):
        html = render_letter(LetterType.CHARGEOFF_REMOVAL, profile, RECIPIENT, profile.negative_items[1:2])
        assert "<strong>$[AMOUNT]</strong>" in html

    def test_creditor_family(self, profile):
        html = render_letter("goodwill", profile, RECIPIENT, profile.negative_items[1:2])
        assert "Goodwill Request for Removal of Negative Reporting" in html
        assert "unexpected financial hardship" in html
        assert "purchasing a home" in html
        assert "Documentation of hardship (if applicable)" in html
        assert "Copy of credit report highlighting disputed items" not in html

        html = render_letter(LetterType.DIRECT_CREDITOR, profile, RECIPIENT, profile.negative_items[1:2])
        for citation in ["&sect; 1681s-2(a)(1)(A)", "&sect; 1681s-2(b)(1)(E)", "&sect; 1681s-2(c)", "282 F.3d 1057 (9th Cir. 2002)"]:
            assert citation in html

        html = render_letter(LetterType.CHARGEOFF_REMOVAL, profile, RECIPIENT, profile.negative_items[3:])
        assert "FCRA &sect; 1681s-2(a)(1)(A)" in html
        assert "<strong>$600</strong>" in html

    def test_goodwill_inputs(self, profile):
        html = render_letter(
            "goodwill", profile, RECIPIENT, profile.negative_items[1:2],
            extra={"reason": "A hospital stay & recovery", "goal": "refinancing my mortgage"},
        )
        assert "A hospital stay &amp; recovery;" in html
        assert "preventing me from refinancing my mortgage." in html
        assert "unexpected financial hardship" not in html

    @pytest.mark.parametrize("letter_type, citations", [
        (LetterType.UNAUTHORIZED_INQUIRY, ["15 U.S.C. &sect; 1681b", "&sect; 1681b(a)", "&sect; 1681n"]),
        (LetterType.HIPAA_MEDICAL, ["45 CFR &sect; 164.502", "&sect; 1692g", "$100&ndash;$50,000 per violation"]),
        (LetterType.STATUTE_OF_LIMITATIONS, ["12 CFR &sect; 1006.26", "&sect; 1681c(a)", "&sect; 1692e"]),
        (LetterType.INTENT_TO_SUE, ["&sect; 1681i(a)(1)", "&sect; 1681i(a)(6)&ndash;(7)", "&sect;&sect; 1681n(a)(3)"]),
        (LetterType.ARBITRATION_ELECTION, ["9 U.S.C. &sect;&sect; 1&ndash;16", "American Arbitration Association"]),
        (LetterType.BILLING_ERROR, ["&sect; 1666(b)", "&sect; 1666(e)", "&sect; 1640"]),
        (LetterType.BREACH_OF_CONTRACT, ["UCC &sect; 1-304"]),
        (LetterType.DEMAND_LETTER, ["15 U.S.C. &sect; 1681 et seq.", "15 U.S.C. &sect; 1692 et seq."]),
    ])
    def test_specialized_family_citations(self, profile, letter_type, citations):
        html = render_letter(letter_type, profile, RECIPIENT, profile.negative_items[:1])
        for citation in citations:
            assert citation in html

    def test_specialized_inputs(self, profile):
        items = profile.negative_items[:1]

        html = render_letter(LetterType.STATUTE_OF_LIMITATIONS, profile, RECIPIENT, items)
        assert "[STATE SOL YEARS] years" in html
        html = render_letter(
            LetterType.STATUTE_OF_LIMITATIONS, profile, RECIPIENT, items,
            extra={"state_sol_years": "4", "debt_state": "Texas"},
        )
        assert "Texas is <strong>4 years</strong>" in html

        html = render_letter(LetterType.INTENT_TO_SUE, profile, RECIPIENT, items, extra={"additional_violation": "Ignored my MOV request"})
        assert "<li>Ignored my MOV request.</li>" in html

        html = render_letter(LetterType.DEMAND_LETTER, profile, RECIPIENT, items, extra={"demand_amount": "2,500"})
        assert "<strong>$2,500</strong>" in html
        assert "Despite prior correspondence" in html

        html = render_letter(LetterType.BREACH_OF_CONTRACT, profile, RECIPIENT, items, extra={"breach_description": "Fees > agreed"})
        assert "<p>Fees &gt; agreed</p>" in html

    def test_every_letter_type_has_a_template(self, profile):
        for letter_type in LetterType:
            html = render_letter(letter_type, profile, RECIPIENT, profile.negative_items[:1])
            assert "Dear Sir/Madam:" in html
            assert "Enclosures:" in html

    def test_user_text_is_escaped(self):
        profile = make_profile(name="<script>alert(1)</script>")
        items = [NegativeItem(
            type=NegativeItemType.OTHER, creditor_name="A & B", dispute_reason='"not mine"',
        )]
        html = render_letter("basic_bureau", profile, RECIPIENT, items, extra={"note": "<b>see attached</b>"})

        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "A &amp; B" in html
        assert "&quot;not mine&quot;" in html
        assert "&lt;b&gt;see attached&lt;/b&gt;" in html
