"""
Tests for profile persistence, shallow merge and the credit context summary.
"""
from app.models.ssot import (
    BusinessProfile, CreditProfile, NegativeItem, NegativeItemType, ScoreSource,
)
from app.services.audit import run_audit
from app.services.profiles import NO_PROFILE_MESSAGE, ProfileStore, build_credit_context

from conftest import make_profile


class TestProfileStore:

    def test_save_and_get(self, db_session, profile):
        store = ProfileStore(db_session)
        store.save("user-1", profile)

        loaded = store.get("user-1")
        assert isinstance(loaded, CreditProfile)
        assert loaded.to_dict() == profile.to_dict()
        assert loaded.negative_items[0].type == NegativeItemType.COLLECTION

    def test_missing_profile(self, db_session):
        assert ProfileStore(db_session).get("nobody") is None

    def test_save_replaces(self, db_session, profile):
        store = ProfileStore(db_session)
        store.save("user-1", profile)
        store.save("user-1", make_profile(name="John Roe"))

        loaded = store.get("user-1")
        assert loaded.name == "John Roe"
        assert loaded.negative_items == []

    def test_merge_is_shallow(self, db_session, profile):
        store = ProfileStore(db_session)
        store.save("user-1", profile)

        merged = store.merge("user-1", {
            "current_score": 655,
            "negative_items": [{"type": "inquiry", "creditor_name": "Amex"}],
        })

        assert merged.current_score == 655
        assert [i.creditor_name for i in merged.negative_items] == ["Amex"]
        # Untouched keys survive
        assert merged.on_time_payment_percent == 92
        assert store.get("user-1").current_score == 655

    def test_merge_replaces_business_wholesale(self, db_session):
        store = ProfileStore(db_session)
        store.save("user-1", make_profile(business=BusinessProfile(legal_name="Doe LLC", ein="12-3456789")))

        merged = store.merge("user-1", {"business": {"legal_name": "Doe Holdings"}})
        assert merged.business.legal_name == "Doe Holdings"
        assert merged.business.ein is None

    def test_merge_without_profile(self, db_session):
        assert ProfileStore(db_session).merge("nobody", {"current_score": 700}) is None

    def test_from_dict_coerces_enums_and_ignores_unknown_keys(self):
        profile = CreditProfile.from_dict({
            "name": "Jane", "address_line1": "1 A St", "city": "X", "state": "TX", "zip": "1",
            "score_source": "fico",
            "account_types": ["revolving"],
            "unknown_field": True,
        })
        assert profile.score_source == ScoreSource.FICO
        assert profile.account_types == ["revolving"]


class TestCreditContext:

    def test_no_profile(self):
        assert build_credit_context(None, None, [], []) == NO_PROFILE_MESSAGE

    def test_context_lines(self, profile):
        text = build_credit_context(profile, run_audit(profile), [], [])

        assert text.startswith("[Credit Context]\n")
        assert "Score: 610" in text
        assert "Phase: acceleration" in text
        assert "Utilization: 45%" in text
        assert "Negative items: 4" in text
        assert "Top action: Reduce utilization (est. +25pts)" in text
        assert "WARNING" not in text
        assert "[Business Credit]" not in text

    def test_overdue_warning_and_business_section(self, profile):
        profile.business = BusinessProfile(legal_name="Doe LLC", paydex_score=80)
        overdue = [object(), object()]
        text = build_credit_context(profile, None, [], overdue)

        assert "Overdue disputes: 2" in text
        assert "WARNING: 2 dispute(s) past 30-day deadline" in text
        assert "Entity: Doe LLC (unknown)" in text
        assert "DUNS: not registered" in text
        assert "PAYDEX: 80" in text

    def test_unknown_values(self):
        text = build_credit_context(make_profile(), None, [], [])
        assert "Score: unknown" in text
        assert "Utilization: unknown" in text
        assert "Phase: unknown" in text
