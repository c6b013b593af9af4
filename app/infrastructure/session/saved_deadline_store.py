"""
In-memory saved deadline agenda, scoped per session.
Entries live until removed explicitly or the process exits.
"""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Dict, List

from app.domain.models import SavedDeadline

logger = logging.getLogger(__name__)


class SavedDeadlineStore:
    def __init__(self, max_entries_per_session: int = 200):
        self._entries: Dict[str, List[SavedDeadline]] = {}
        self._max_entries = max_entries_per_session
        self._lock = threading.Lock()

    def add(self, session_id: str, title: str, date_text: str) -> SavedDeadline:
        title = (title or "").strip()
        if not title:
            raise ValueError("Title is required")

        entry = SavedDeadline(
            id=uuid.uuid4().hex,
            title=title,
            date=date_text,
            created_at=datetime.now(tz=timezone.utc),
        )

        with self._lock:
            entries = self._entries.setdefault(session_id, [])
            if len(entries) >= self._max_entries:
                raise ValueError(
                    f"Saved deadline limit reached ({self._max_entries})"
                )
            entries.append(entry)

        logger.info("SAVED_DEADLINE_ADDED | session=%s | id=%s", session_id, entry.id)
        return entry

    def list(self, session_id: str) -> List[SavedDeadline]:
        with self._lock:
            return list(self._entries.get(session_id, []))

    def remove(self, session_id: str, entry_id: str) -> SavedDeadline:
        with self._lock:
            entries = self._entries.get(session_id, [])
            for idx, entry in enumerate(entries):
                if entry.id == entry_id:
                    del entries[idx]
                    if not entries:
                        del self._entries[session_id]
                    logger.info(
                        "SAVED_DEADLINE_REMOVED | session=%s | id=%s", session_id, entry_id
                    )
                    return entry
        raise KeyError(entry_id)

    def session_count(self) -> int:
        with self._lock:
            return len(self._entries)
