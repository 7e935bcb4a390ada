"""
Lob Mail Gateway

Sends dispute letters as USPS certified mail (return receipt requested)
through the Lob print-and-mail API.

Every send is a single unit of work: it either returns a LetterSent with
the Lob id, tracking number and price, or the letter was not mailed.
Requests are never retried here because each success is billed and
produces physical mail. A re-send is always a new call from the caller.
"""
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

import httpx

from ...models.catalog import BUREAU_ADDRESSES, LetterType, get_letter_info
from ...models.ssot import (
    Bureau, CreditProfile, DisputeRecord, DisputeStatus, LetterAddress, NegativeItem,
)
from ..disputes.deadline_engine import DeadlineEngine, utcnow
from .letters import render_letter

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

LOB_API_KEY = os.getenv("LOB_API_KEY", "")
LOB_BASE_URL = os.getenv("LOB_BASE_URL", "https://api.lob.com/v1")
LOB_TIMEOUT_SECONDS = float(os.getenv("LOB_TIMEOUT_SECONDS", "30"))

TEST_KEY_PREFIX = "test_"


# =============================================================================
# ERRORS AND RESULTS
# =============================================================================

class MailDispatchError(Exception):
    """The letter was not sent. Carries the Lob status code when there is one."""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail


class MailTimeoutError(MailDispatchError):
    """Lob did not answer within the configured timeout."""


@dataclass(frozen=True)
class LetterSent:
    id: str
    tracking_number: Optional[str]
    price: Optional[float]
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class LetterFailed:
    status_code: int
    message: str


SendResult = Union[LetterSent, LetterFailed]


@dataclass
class BulkDispatchResult:
    """
    Outcome of mailing the same dispute to every bureau in order.

    Sending stops at the first failure. Records already sent stay in
    `records`; bureaus never attempted are listed in `skipped`.
    """
    records: List[DisputeRecord] = field(default_factory=list)
    failure: Optional[MailDispatchError] = None
    failed_bureau: Optional[Bureau] = None
    skipped: List[Bureau] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return self.failure is None


# =============================================================================
# GATEWAY
# =============================================================================

class LobMailService:
    """Thin httpx client over the Lob letters and verification endpoints."""

    def __init__(
        self,
        api_key: str,
        base_url: str = LOB_BASE_URL,
        timeout: float = LOB_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self.deadlines = DeadlineEngine()
        self.client = httpx.Client(
            base_url=base_url,
            auth=(api_key, ""),
            timeout=timeout,
            transport=transport,
        )

    @property
    def is_test(self) -> bool:
        """Test keys are not billed and no physical mail goes out."""
        return self.api_key.startswith(TEST_KEY_PREFIX)

    def close(self) -> None:
        self.client.close()

    # =========================================================================
    # LOB ENDPOINTS
    # =========================================================================

    def verify_address(self, address: LetterAddress) -> Dict[str, Any]:
        response = self._request("POST", "/us_verifications", json={
            "primary_line": address.address_line1,
            "city": address.city,
            "state": address.state,
            "zip_code": address.zip,
        })
        if not response.is_success:
            raise MailDispatchError(
                f"Lob address verification failed ({response.status_code}): {response.text}",
                status_code=response.status_code,
            )
        return response.json()

    def send_certified_letter(
        self,
        sender: LetterAddress,
        recipient: LetterAddress,
        html: str,
        description: str,
    ) -> SendResult:
        """
        Mail one letter. Non-2xx answers come back as LetterFailed.

        Raises MailTimeoutError / MailDispatchError for transport failures
        and for 2xx answers without a readable letter id.
        """
        data = {
            "description": description,
            **self._address_fields("to", recipient),
            **self._address_fields("from", sender),
            "file": html,
            "color": "false",
            "mail_type": "usps_first_class",
            "extra_service": "certified_return_receipt",
            "address_placement": "top_first_page",
        }
        response = self._request("POST", "/letters", data=data)
        if not response.is_success:
            logger.error(f"Lob letter rejected ({response.status_code}): {response.text}")
            return LetterFailed(status_code=response.status_code, message=response.text)

        try:
            body = response.json()
            price = body.get("price")
            return LetterSent(
                id=body["id"],
                tracking_number=body.get("tracking_number"),
                price=float(price) if price is not None else None,
                raw=body,
            )
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"Unreadable Lob letter response ({response.status_code}): {response.text}")
            raise MailDispatchError(
                f"Lob returned an unreadable letter response ({response.status_code}): {e}",
                status_code=response.status_code,
                detail=response.text,
            ) from e

    def check_status(self, letter_id: str) -> Dict[str, Any]:
        response = self._request("GET", f"/letters/{letter_id}")
        if not response.is_success:
            raise MailDispatchError(
                f"Lob status check failed ({response.status_code}): {response.text}",
                status_code=response.status_code,
            )
        return response.json()

    # =========================================================================
    # DISPUTE DISPATCH
    # =========================================================================

    def send_dispute(
        self,
        profile: CreditProfile,
        letter_type: str,
        target: Union[Bureau, str, LetterAddress],
        items: List[NegativeItem],
        extra: Optional[Dict[str, str]] = None,
        now: Optional[datetime] = None,
        target_name: Optional[str] = None,
    ) -> DisputeRecord:
        """
        Render and mail one dispute, returning the record to track.

        `target` is a bureau (or its name) or an explicit recipient address.
        `target_name` overrides the name recorded for an explicit address.
        Raises MailDispatchError if the letter was not sent.
        """
        letter_type = LetterType(letter_type)
        info = get_letter_info(letter_type)
        recipient, resolved_name = self._resolve_target(target)
        target_name = target_name or resolved_name
        sent_at = now or utcnow()

        html = render_letter(letter_type, profile, recipient, items, extra=extra, today=sent_at.date())
        description = f"Credit Dispute #{info.id} - {info.name} - {target_name}"
        sender = LetterAddress(
            name=profile.name,
            address_line1=profile.address_line1,
            city=profile.city,
            state=profile.state,
            zip=profile.zip,
        )

        result = self.send_certified_letter(sender, recipient, html, description)
        if isinstance(result, LetterFailed):
            raise MailDispatchError(
                f"Lob API error {result.status_code}: {result.message}",
                status_code=result.status_code,
                detail=result.message,
            )

        response_deadline, escalation_date = self.deadlines.calculate_deadlines(sent_at)
        logger.info(f"Letter {result.id} sent to {target_name} ({info.name})")
        return DisputeRecord(
            letter_type=letter_type.value,
            letter_name=info.name,
            target=target_name,
            recipient_name=recipient.name,
            items_disputed=list(items),
            sent_date=sent_at,
            response_deadline=response_deadline,
            escalation_date=escalation_date,
            status=DisputeStatus.SENT,
            lob_letter_id=result.id,
            tracking_number=result.tracking_number,
            cost=result.price,
        )

    def send_to_all_bureaus(
        self,
        profile: CreditProfile,
        letter_type: str,
        items: List[NegativeItem],
        extra: Optional[Dict[str, str]] = None,
        now: Optional[datetime] = None,
    ) -> BulkDispatchResult:
        """Equifax, Experian, TransUnion in order; stops at the first failure."""
        result = BulkDispatchResult()
        bureaus = list(Bureau)
        for i, bureau in enumerate(bureaus):
            try:
                record = self.send_dispute(profile, letter_type, bureau, items, extra=extra, now=now)
            except MailDispatchError as e:
                logger.error(f"Bulk dispatch stopped at {bureau.value}: {e.message}")
                result.failure = e
                result.failed_bureau = bureau
                result.skipped = bureaus[i + 1:]
                break
            result.records.append(record)
        return result

    # =========================================================================
    # INTERNAL HELPERS
    # =========================================================================

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            return self.client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"Lob {method} {path} timed out after {self.timeout}s")
            raise MailTimeoutError(f"Lob request timed out after {self.timeout:g}s") from e
        except httpx.TransportError as e:
            logger.error(f"Lob {method} {path} failed: {e}")
            raise MailDispatchError(f"Lob request failed: {e}") from e

    def _resolve_target(self, target: Union[Bureau, str, LetterAddress]):
        if isinstance(target, LetterAddress):
            return target, target.name
        bureau = Bureau(target)
        return BUREAU_ADDRESSES[bureau], bureau.value

    @staticmethod
    def _address_fields(prefix: str, address: LetterAddress) -> Dict[str, str]:
        return {
            f"{prefix}[name]": address.name,
            f"{prefix}[address_line1]": address.address_line1,
            f"{prefix}[address_city]": address.city,
            f"{prefix}[address_state]": address.state,
            f"{prefix}[address_zip]": address.zip,
        }


# =============================================================================
# FACTORY FUNCTION
# =============================================================================

def get_mail_service():
    """FastAPI dependency. Yields None when no Lob key is configured."""
    if not LOB_API_KEY:
        yield None
        return
    service = LobMailService(LOB_API_KEY, LOB_BASE_URL, LOB_TIMEOUT_SECONDS)
    try:
        yield service
    finally:
        service.close()
