"""In-memory conversation threads with write-through persistence.

Threads are kept newest first. Every change that should outlive the process
(create, delete, append, rename) flushes the whole list to the persistence
adapter. The active selection is session state and is not persisted; after a
load the newest thread becomes active.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from translator.core.models import ConversationThread, Message, now_ms
from translator.core.storage import ThreadPersistence


logger = logging.getLogger(__name__)

TITLE_PREFIX_LENGTH = 30


def title_from_text(text: str) -> str:
    return text[:TITLE_PREFIX_LENGTH] + "..."


class ThreadStore:
    def __init__(self, persistence: Optional[ThreadPersistence] = None) -> None:
        self.persistence = persistence
        self._threads: List[ConversationThread] = []
        self._active_id: Optional[str] = None
        self._last_id = 0

    @classmethod
    def load(cls, persistence: ThreadPersistence) -> "ThreadStore":
        store = cls(persistence)
        store._threads = persistence.load()
        if store._threads:
            store._active_id = store._threads[0].id
        known = [t.id for t in store._threads]
        known += [m.id for t in store._threads for m in t.messages]
        store._last_id = max((int(i) for i in known if i.isdigit()), default=0)
        logger.info("Loaded %s conversation threads", len(store._threads))
        return store

    # --- ids ---

    def new_id(self) -> str:
        """Time-based id, strictly increasing for the lifetime of the store."""
        candidate = max(now_ms(), self._last_id + 1)
        self._last_id = candidate
        return str(candidate)

    # --- queries ---

    def list_threads(self) -> Tuple[ConversationThread, ...]:
        return tuple(self._threads)

    def get_thread(self, thread_id: Optional[str]) -> Optional[ConversationThread]:
        for thread in self._threads:
            if thread.id == thread_id:
                return thread
        return None

    @property
    def active_thread_id(self) -> Optional[str]:
        return self._active_id

    @property
    def active_thread(self) -> Optional[ConversationThread]:
        return self.get_thread(self._active_id)

    # --- mutations ---

    def create_thread(self) -> str:
        if self._threads and not self._threads[0].messages:
            # newest thread is still empty: reuse it
            self._active_id = self._threads[0].id
            return self._active_id

        thread_id = self.new_id()
        thread = ConversationThread(id=thread_id, created_at=now_ms())
        self._threads.insert(0, thread)
        self._active_id = thread_id
        self._flush()
        return thread_id

    def select_thread(self, thread_id: str) -> None:
        if self.get_thread(thread_id) is not None:
            self._active_id = thread_id

    def delete_thread(self, thread_id: str) -> None:
        remaining = [t for t in self._threads if t.id != thread_id]
        if len(remaining) == len(self._threads):
            return
        self._threads = remaining
        if self._active_id == thread_id:
            self._active_id = remaining[0].id if remaining else None
        self._flush()

    def append_message(self, thread_id: str, message: Message) -> None:
        for index, thread in enumerate(self._threads):
            if thread.id != thread_id:
                continue
            title = title_from_text(message.text) if not thread.messages else thread.title
            self._threads[index] = thread.with_message(message, title)
            self._flush()
            return
        logger.debug("Dropping message for unknown thread %s", thread_id)

    def rename_thread(self, thread_id: str, title: str) -> None:
        if not title or not title.strip():
            return
        for index, thread in enumerate(self._threads):
            if thread.id == thread_id:
                self._threads[index] = thread.model_copy(update={"title": title.strip()})
                self._flush()
                return

    def _flush(self) -> None:
        if self.persistence is not None:
            self.persistence.save(self._threads)
