"""
Profile Store
=============
Persists the user personality profile under its own key namespace
(``personality:profile``), separate from the entry snapshot.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError

from moodjournal.db.kv_store import KeyValueStore, NamespacedStore, StorageError, get_kv_store
from moodjournal.models.personality import UserPersonality

logger = logging.getLogger(__name__)

NAMESPACE = "personality"
PROFILE_KEY = "profile"


class ProfileStore:
    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = NamespacedStore(kv, NAMESPACE)

    def load(self) -> Optional[UserPersonality]:
        """Stored profile, or None when it is missing or unusable."""
        try:
            raw = self._kv.get(PROFILE_KEY)
        except StorageError:
            logger.exception("Could not read personality profile")
            return None
        if raw is None:
            return None
        try:
            return UserPersonality.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable personality profile")
            self._discard()
            return None

    def _discard(self) -> None:
        try:
            self._kv.delete(PROFILE_KEY)
        except StorageError:
            logger.exception("Could not remove unreadable personality profile")

    def save(self, profile: UserPersonality) -> UserPersonality:
        self._kv.set(PROFILE_KEY, profile.model_dump_json())
        return profile

    def ensure(self) -> UserPersonality:
        """Load the profile, creating and storing the default one if absent."""
        profile = self.load()
        if profile is not None:
            return profile

        profile = UserPersonality(last_updated=datetime.now(timezone.utc))
        try:
            self.save(profile)
        except StorageError:
            # The default is still usable for this session
            logger.exception("Could not store default personality profile")
        return profile


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------

_default_store: ProfileStore | None = None


def get_profile_store() -> ProfileStore:
    global _default_store
    if _default_store is None:
        _default_store = ProfileStore(get_kv_store())
    return _default_store
