"""
Profile Store

One CreditProfile per user, persisted whole as JSON.
Profiles are saved and merged here; nothing in this module deletes them.
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ...models.db_models import CreditProfileDB
from ...models.ssot import CreditProfile

logger = logging.getLogger(__name__)


class ProfileStore:
    """Key-value profile storage keyed by user id."""

    def __init__(self, db_session: Session):
        """Initialize with database session."""
        self.db = db_session

    def get(self, user_id: str) -> Optional[CreditProfile]:
        row = self.db.get(CreditProfileDB, user_id)
        if row is None:
            return None
        return CreditProfile.from_dict(row.profile_data)

    def save(self, user_id: str, profile: CreditProfile) -> None:
        """Insert or replace the user's profile."""
        data = profile.to_dict()
        row = self.db.get(CreditProfileDB, user_id)
        if row is None:
            row = CreditProfileDB(user_id=user_id, profile_data=data)
            self.db.add(row)
        else:
            row.profile_data = data
        self.db.commit()
        logger.info(f"Profile saved for {user_id}")

    def merge(self, user_id: str, updates: Dict[str, Any]) -> Optional[CreditProfile]:
        """
        Shallow-merge updates into the stored profile.

        Top-level keys replace existing values wholesale; nested objects
        (business, negative_items) are not deep-merged.
        Returns None when the user has no profile.
        """
        existing = self.get(user_id)
        if existing is None:
            return None

        merged = {**existing.to_dict(), **updates}
        profile = CreditProfile.from_dict(merged)
        self.save(user_id, profile)
        return profile
