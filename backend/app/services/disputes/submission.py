"""
Dispute Submission Service

Turns "send this letter to that recipient" into mailed letters and
tracked dispute records.

Flow:
1. Load the user's CreditProfile
2. Resolve the target (bureau, explicit address, cached creditor address)
3. Pick the items to dispute
4. Mail through the Lob gateway
5. Append one DisputeRecord per letter actually sent

A failed send never produces a record. A failed bulk send keeps the
records of the bureaus that were mailed before the failure.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from sqlalchemy.orm import Session

from ...models.catalog import LetterType, TargetType, get_letter_info
from ...models.ssot import Bureau, CreditProfile, EntityType, LetterAddress, NegativeItem
from ..mail.lob_client import LobMailService, MailDispatchError, MailTimeoutError
from ..profiles.context import NO_PROFILE_MESSAGE
from ..profiles.profile_store import ProfileStore
from .creditor_addresses import CreditorAddressCache
from .history_store import DisputeHistoryStore
from .intent import (
    detect_bureau, detect_letter_type, extract_creditor_name,
    parse_creditor_address, wants_all_bureaus,
)
from .tracker import DisputeLifecycleTracker

logger = logging.getLogger(__name__)


DEFAULT_ITEM_COUNT = 3
ADDRESS_FORMAT = "Creditor Name, 123 Street Address, City, ST 12345"
TEST_MODE_NOTICE = "Test mode: the letter was accepted by Lob but no physical mail was sent."

Target = Union[Bureau, LetterAddress, str, None]


class DisputeSubmissionService:
    """Mail dispute letters and record them in the user's history."""

    def __init__(self, db_session: Session, mail: Optional[LobMailService]):
        """Initialize with database session and mail gateway (None when unconfigured)."""
        self.db = db_session
        self.mail = mail
        self.profiles = ProfileStore(db_session)
        self.creditors = CreditorAddressCache(db_session)
        self.tracker = DisputeLifecycleTracker(DisputeHistoryStore(db_session))

    # =========================================================================
    # SUBMIT
    # =========================================================================

    def submit(
        self,
        user_id: str,
        letter_type: Union[LetterType, str],
        target: Target = None,
        send_all: bool = False,
        items: Optional[List[NegativeItem]] = None,
        extra: Optional[Dict[str, str]] = None,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        profile = self.profiles.get(user_id)
        if profile is None:
            return {"error": NO_PROFILE_MESSAGE, "status_code": 404}

        letter_type = LetterType(letter_type)
        info = get_letter_info(letter_type)

        if not profile.negative_items:
            return {
                "status": "nothing_to_dispute",
                "letter_type": letter_type.value,
                "message": "No negative items on file. There is nothing to dispute.",
            }

        if isinstance(target, str) and not isinstance(target, Bureau):
            target = self._as_bureau(target) or target.strip()

        # Bulk path: every bureau in order
        bulk_capable = info.target_type in (TargetType.BUREAU, TargetType.ANY)
        if send_all and bulk_capable and (target is None or isinstance(target, Bureau)):
            return self._send_bulk(user_id, profile, letter_type, items, extra, now)

        target_name = None
        if target is None:
            if info.target_type == TargetType.BUREAU:
                target = Bureau.EQUIFAX
            elif info.target_type == TargetType.ANY:
                return {
                    "status": "awaiting_target",
                    "letter_type": letter_type.value,
                    "message": f"Who should receive the {info.name}? Name a bureau or a creditor.",
                }
            else:
                return {
                    "status": "awaiting_target",
                    "letter_type": letter_type.value,
                    "known_creditors": self._known_creditors(profile),
                    "message": f"Which {info.target_type.value} should receive the {info.name}?",
                }
        elif isinstance(target, str) and not isinstance(target, Bureau):
            cached = self.creditors.get(user_id, target)
            if cached is None:
                return {
                    "status": "awaiting_address",
                    "letter_type": letter_type.value,
                    "creditor_name": target,
                    "expected_format": ADDRESS_FORMAT,
                    "message": f"I need the mailing address for {target}.",
                }
            if items is None:
                items = self._items_for_creditor(profile, target)
            target_name = target
            target = cached.to_letter_address()

        if items is None:
            items = profile.negative_items[:DEFAULT_ITEM_COUNT]

        if self.mail is None:
            return {"error": "Mail dispatch is not configured (LOB_API_KEY is empty)", "status_code": 503}

        label = target_name or (target.value if isinstance(target, Bureau) else target.name)
        try:
            record = self.mail.send_dispute(
                profile, letter_type, target, items, extra=extra, now=now, target_name=target_name,
            )
        except MailDispatchError as e:
            logger.error(f"Dispute to {label} failed for {user_id}: {e.message}")
            return self._failure(f"Failed to send {info.name} to {label}", e)

        self.tracker.add(user_id, record)
        return self._success(letter_type, [record])

    # =========================================================================
    # FREE TEXT
    # =========================================================================

    def interpret(self, user_id: str, text: str, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Route a free-text request through the intent matcher, then submit.

        Text that parses as a creditor address is cached instead.
        """
        profile = self.profiles.get(user_id)
        if profile is None:
            return {"error": NO_PROFILE_MESSAGE, "status_code": 404}

        letter_type = detect_letter_type(text)
        info = get_letter_info(letter_type)

        entity_type = EntityType.COLLECTOR if info.target_type == TargetType.COLLECTOR else EntityType.CREDITOR
        address = parse_creditor_address(text, entity_type)
        if address is not None:
            self.creditors.save(user_id, address)
            return {
                "status": "address_saved",
                "creditor_name": address.creditor_name,
                "address": address.to_dict(),
                "message": f"Saved the mailing address for {address.creditor_name}. Ask again to send the letter.",
            }

        target: Target = None
        send_all = False
        if info.target_type in (TargetType.BUREAU, TargetType.ANY):
            send_all = wants_all_bureaus(text)
            target = detect_bureau(text)
        if target is None and info.target_type != TargetType.BUREAU:
            target = extract_creditor_name(text, profile.negative_items)

        logger.info(f"Interpreted request for {user_id} as {letter_type.value} -> {target or 'unspecified'}")
        return self.submit(user_id, letter_type, target, send_all=send_all, now=now)

    # =========================================================================
    # INTERNAL HELPERS
    # =========================================================================

    def _send_bulk(
        self,
        user_id: str,
        profile: CreditProfile,
        letter_type: LetterType,
        items: Optional[List[NegativeItem]],
        extra: Optional[Dict[str, str]],
        now: Optional[datetime],
    ) -> Dict[str, Any]:
        if self.mail is None:
            return {"error": "Mail dispatch is not configured (LOB_API_KEY is empty)", "status_code": 503}

        items = items if items is not None else profile.negative_items[:DEFAULT_ITEM_COUNT]
        bulk = self.mail.send_to_all_bureaus(profile, letter_type, items, extra=extra, now=now)
        for record in bulk.records:
            self.tracker.add(user_id, record)

        if bulk.complete:
            return self._success(letter_type, bulk.records)

        info = get_letter_info(letter_type)
        result = self._failure(f"Failed to send {info.name} to {bulk.failed_bureau.value}", bulk.failure)
        result["failed_bureau"] = bulk.failed_bureau.value
        result["skipped"] = [b.value for b in bulk.skipped]
        result["disputes"] = [r.to_dict() for r in bulk.records]
        result["test_mode"] = self.mail.is_test
        return result

    def _success(self, letter_type: LetterType, records) -> Dict[str, Any]:
        info = get_letter_info(letter_type)
        targets = ", ".join(r.target for r in records)
        result = {
            "status": "sent",
            "letter_type": letter_type.value,
            "letter_name": info.name,
            "test_mode": self.mail.is_test,
            "disputes": [r.to_dict() for r in records],
            "message": f"{info.name} sent to {targets} via certified mail.",
        }
        if self.mail.is_test:
            result["notice"] = TEST_MODE_NOTICE
        return result

    def _failure(self, prefix: str, error: MailDispatchError) -> Dict[str, Any]:
        return {
            "error": f"{prefix}: {error.message}",
            "status_code": 504 if isinstance(error, MailTimeoutError) else 502,
            "gateway_status": error.status_code,
        }

    def _as_bureau(self, value: str) -> Optional[Bureau]:
        try:
            return Bureau(value.strip().lower())
        except ValueError:
            return None

    def _known_creditors(self, profile: CreditProfile) -> List[str]:
        names: List[str] = []
        for item in profile.negative_items:
            if item.creditor_name and item.creditor_name not in names:
                names.append(item.creditor_name)
        return names

    def _items_for_creditor(self, profile: CreditProfile, creditor_name: str) -> List[NegativeItem]:
        """Items whose creditor matches by substring in either direction, else the default set."""
        wanted = creditor_name.lower()
        matched = [
            item for item in profile.negative_items
            if item.creditor_name
            and (wanted in item.creditor_name.lower() or item.creditor_name.lower() in wanted)
        ]
        return matched or profile.negative_items[:DEFAULT_ITEM_COUNT]
