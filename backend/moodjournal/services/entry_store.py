"""
Entry Store
===========
Owns the ordered collection of mood entries and its persisted snapshot.

Ordering: the collection is kept in descending ``date`` order. A "today"
save normally lands at the front; a backdated save is inserted before the
first entry that is older than it (or appended when every entry is newer).
Entries dated in the future stay ahead of a today save.

Persistence is whole-snapshot: every mutation re-serializes the full list
and overwrites one key. There is no incremental append and no rollback.

    save / delete ──> in-memory list ──> persist() ──> KeyValueStore
                                    └──> notify(StoreChange) ──> listeners

Failure behaviour:
- Corrupt snapshot on load: logged, the key is deleted, the journal starts
  empty. The app keeps working.
- Write failure: logged, ``error_message`` is set for the UI, listeners get
  a ``persist_failed`` change. The in-memory entry is NOT removed, so the
  next successful write also stores it.

Single writer: no locks. Every call is expected on the same thread/task.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Iterable, Optional
from uuid import UUID

from pydantic import TypeAdapter, ValidationError

from moodjournal.calendar_context import CalendarContext, get_calendar_context
from moodjournal.config import get_settings
from moodjournal.db.kv_store import KeyValueStore, NamespacedStore, StorageError, get_kv_store
from moodjournal.models.mood import CategorySelection, MoodEntry, MoodType
from moodjournal.services.demo_data import demo_entries

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

NAMESPACE = "entries"
SNAPSHOT_KEY = "snapshot"
SAVE_FAILED_MESSAGE = "Failed to save mood entry. Please try again."

_ENTRY_LIST = TypeAdapter(list[MoodEntry])


# ---------------------------------------------------------------------------
# Change notifications
# ---------------------------------------------------------------------------


class StoreEvent(str, Enum):
    LOADED = "loaded"
    SAVED = "saved"
    DELETED = "deleted"
    CLEARED = "cleared"
    PERSIST_FAILED = "persist_failed"


@dataclass(frozen=True)
class StoreChange:
    event: StoreEvent
    entry_id: Optional[UUID] = None
    message: Optional[str] = None


StoreListener = Callable[[StoreChange], None]


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class EntryStore:
    """In-memory entry collection backed by one serialized snapshot."""

    def __init__(
        self,
        kv: KeyValueStore,
        calendar: CalendarContext | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._kv = NamespacedStore(kv, NAMESPACE)
        self._calendar = calendar or get_calendar_context()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._entries: list[MoodEntry] = []
        self._listeners: list[StoreListener] = []
        self.error_message: Optional[str] = None

    # ---- Read access ------------------------------------------------------

    @property
    def entries(self) -> tuple[MoodEntry, ...]:
        return tuple(self._entries)

    @property
    def calendar(self) -> CalendarContext:
        return self._calendar

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, entry_id: UUID) -> Optional[MoodEntry]:
        return next((e for e in self._entries if e.id == entry_id), None)

    def filter(
        self,
        mood: Optional[MoodType] = None,
        has_audio: Optional[bool] = None,
    ) -> list[MoodEntry]:
        """Entries matching every predicate given. ``None`` means no filter."""
        result = []
        for entry in self._entries:
            if mood is not None and entry.mood != mood:
                continue
            if has_audio is not None and entry.has_audio != has_audio:
                continue
            result.append(entry)
        return result

    def get_entry(self, for_date: datetime) -> Optional[MoodEntry]:
        """First entry, in collection order, on the same local calendar day."""
        for entry in self._entries:
            if self._calendar.is_same_day(entry.date, for_date):
                return entry
        return None

    # ---- Mutations --------------------------------------------------------

    def save(
        self,
        mood: MoodType,
        date: Optional[datetime] = None,
        text: Optional[str] = None,
        audio_ref: Optional[str] = None,
        audio_transcript: Optional[str] = None,
        photo_ref: Optional[str] = None,
        categories: Iterable[CategorySelection] = (),
    ) -> MoodEntry:
        """Create an entry, insert it in date order, persist and notify."""
        now = self._clock()
        entry = MoodEntry(
            date=self._calendar.localize(date) if date is not None else now,
            mood=mood,
            text_entry=text or None,
            audio_ref=audio_ref,
            audio_transcript=audio_transcript,
            photo_ref=photo_ref,
            categories=list(categories),
            created_at=now,
            updated_at=now,
        )

        self._entries.insert(self._insert_index(entry.date, today=date is None), entry)

        logger.debug("Saved %s entry %s for %s", entry.mood.value, entry.id, entry.date)
        self.persist()
        self._notify(StoreChange(StoreEvent.SAVED, entry_id=entry.id))
        return entry

    def _insert_index(self, when: datetime, today: bool) -> int:
        # Today saves go ahead of entries at the same instant; backdated ones behind them.
        # Future-dated entries stay in front of either.
        for i, existing in enumerate(self._entries):
            existing_date = self._calendar.localize(existing.date)
            if existing_date < when or (today and existing_date == when):
                return i
        return len(self._entries)

    def delete(self, entry_id: UUID) -> bool:
        """Remove the entry with *entry_id*. Returns False (and does nothing) if absent."""
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                del self._entries[index]
                break
        else:
            return False

        self.persist()
        self._notify(StoreChange(StoreEvent.DELETED, entry_id=entry_id))
        return True

    def delete_all(self) -> None:
        """Full reset: empty collection and no persisted snapshot."""
        self._entries.clear()
        try:
            self._kv.delete(SNAPSHOT_KEY)
            self.error_message = None
        except StorageError:
            logger.exception("Failed to remove persisted mood entries")
            self.error_message = SAVE_FAILED_MESSAGE
            self._notify(StoreChange(StoreEvent.PERSIST_FAILED, message=self.error_message))
        self._notify(StoreChange(StoreEvent.CLEARED))

    # ---- Persistence ------------------------------------------------------

    def load(self) -> None:
        """Replace the in-memory collection with the persisted snapshot."""
        try:
            raw = self._kv.get(SNAPSHOT_KEY)
        except StorageError:
            logger.exception("Could not read mood entries, starting empty")
            self._entries = []
            self._notify(StoreChange(StoreEvent.LOADED))
            return

        if raw is None:
            self._entries = []
        else:
            try:
                entries = _ENTRY_LIST.validate_json(raw)
            except ValidationError as exc:
                logger.warning(
                    "Discarding corrupted mood entry snapshot (%d errors)",
                    exc.error_count(),
                )
                self._discard_snapshot()
                entries = []
            entries.sort(key=lambda e: self._calendar.localize(e.date), reverse=True)
            self._entries = self._dedupe(entries)

        logger.info("Loaded %d mood entries", len(self._entries))
        self._notify(StoreChange(StoreEvent.LOADED))

    def persist(self) -> bool:
        """Overwrite the snapshot with the full collection. Returns success."""
        payload = _ENTRY_LIST.dump_json(self._entries).decode("utf-8")
        try:
            self._kv.set(SNAPSHOT_KEY, payload)
        except StorageError:
            logger.exception("Failed to save %d mood entries", len(self._entries))
            self.error_message = SAVE_FAILED_MESSAGE
            self._notify(StoreChange(StoreEvent.PERSIST_FAILED, message=self.error_message))
            return False

        self.error_message = None
        return True

    def _discard_snapshot(self) -> None:
        try:
            self._kv.delete(SNAPSHOT_KEY)
        except StorageError:
            logger.exception("Could not remove corrupted mood entry snapshot")

    @staticmethod
    def _dedupe(entries: list[MoodEntry]) -> list[MoodEntry]:
        seen: set[UUID] = set()
        unique = []
        for entry in entries:
            if entry.id in seen:
                logger.warning("Dropping duplicate mood entry %s", entry.id)
                continue
            seen.add(entry.id)
            unique.append(entry)
        return unique

    # ---- Observers --------------------------------------------------------

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register *listener*; call the returned function to unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, change: StoreChange) -> None:
        for listener in list(self._listeners):
            listener(change)


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------

_default_store: EntryStore | None = None


def get_entry_store() -> EntryStore:
    global _default_store
    if _default_store is None:
        store = EntryStore(get_kv_store())
        store.load()
        if len(store) == 0 and get_settings().seed_demo_data:
            for entry in demo_entries(datetime.now(timezone.utc)):
                store.save(
                    entry.mood,
                    date=entry.date,
                    text=entry.text_entry,
                    categories=entry.categories,
                )
            logger.info("Seeded %d demo entries", len(store))
        _default_store = store
    return _default_store
