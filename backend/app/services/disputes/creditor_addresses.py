"""
Creditor Address Cache

Remembers a mailing address per (user, creditor) so later disputes to the
same creditor or collector skip address collection. Keys are normalized,
so "Capital One", "CAPITAL ONE" and "Capital-One!" share one entry.
"""
import logging
import re
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models.db_models import CreditorAddressDB
from ...models.ssot import CreditorAddress

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_creditor_name(name: str) -> str:
    """Lowercase, collapse non-alphanumeric runs to '-', strip edge separators."""
    return _NON_ALNUM.sub("-", (name or "").lower()).strip("-")


class CreditorAddressCache:
    """Per-user creditor address lookup. Concurrent writes: last writer wins."""

    def __init__(self, db_session: Session):
        """Initialize with database session."""
        self.db = db_session

    def save(self, user_id: str, address: CreditorAddress) -> None:
        key = normalize_creditor_name(address.creditor_name)
        row = self.db.get(CreditorAddressDB, (user_id, key))
        if row is None:
            row = CreditorAddressDB(user_id=user_id, normalized_name=key)
            self.db.add(row)

        row.creditor_name = address.creditor_name
        row.entity_type = address.entity_type.value
        row.name = address.name
        row.address_line1 = address.address_line1
        row.city = address.city
        row.state = address.state
        row.zip = address.zip
        row.updated_at = datetime.utcnow()

        self.db.commit()
        logger.info(f"Creditor address saved for {user_id}: {address.creditor_name}")

    def get(self, user_id: str, creditor_name: str) -> Optional[CreditorAddress]:
        key = normalize_creditor_name(creditor_name)
        row = self.db.get(CreditorAddressDB, (user_id, key))
        if row is None:
            return None
        return CreditorAddress(
            creditor_name=row.creditor_name,
            entity_type=row.entity_type,
            name=row.name,
            address_line1=row.address_line1,
            city=row.city,
            state=row.state,
            zip=row.zip,
        )
