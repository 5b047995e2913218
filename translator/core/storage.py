"""Whole-blob persistence for conversation threads.

The full thread list is serialized to JSON and written under a single named
slot of a key-value store on every change. There is no schema version; the
models ignore unknown keys and fill defaults for missing ones.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence

from pydantic import TypeAdapter, ValidationError

from translator.core.errors import PersistenceParseError
from translator.core.models import ConversationThread


logger = logging.getLogger(__name__)

DEFAULT_SLOT = "translation-chats"

_THREAD_LIST = TypeAdapter(List[ConversationThread])


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryKeyValueStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class FileKeyValueStore:
    """One ``<key>.json`` file per slot inside ``directory``."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, self._path(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class ThreadPersistence:
    def __init__(self, kv: KeyValueStore, slot: str = DEFAULT_SLOT) -> None:
        self.kv = kv
        self.slot = slot

    def exists(self) -> bool:
        """True once a save has happened, even if the saved list is empty."""
        return self.kv.get(self.slot) is not None

    def load(self) -> List[ConversationThread]:
        raw = self.kv.get(self.slot)
        if raw is None:
            return []
        try:
            return self._decode(raw)
        except PersistenceParseError as exc:
            logger.warning("Failed to load chats: %s", exc.message)
            return []

    def save(self, threads: Sequence[ConversationThread]) -> None:
        payload = _THREAD_LIST.dump_python(list(threads), mode="json", by_alias=True)
        self.kv.set(self.slot, json.dumps(payload, ensure_ascii=False))
        logger.debug("Saved %s threads to slot %s", len(threads), self.slot)

    def _decode(self, raw: str) -> List[ConversationThread]:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PersistenceParseError(self.slot, f"invalid JSON ({exc.msg})") from exc
        try:
            return _THREAD_LIST.validate_python(data)
        except ValidationError as exc:
            reason = f"{exc.error_count()} invalid field(s)"
            raise PersistenceParseError(self.slot, reason) from exc
