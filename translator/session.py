from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from config.settings import Settings, get_settings
from translator.clients import Translator, build_translator
from translator.core.errors import (
    SubmissionInFlight,
    ThreadNotFound,
    TranslatorError,
    ValidationError,
)
from translator.core.languages import (
    SYSTEM_LABEL,
    SYSTEM_LANG_CODE,
    source_language,
    target_language,
)
from translator.core.models import ConversationThread, Message
from translator.core.storage import FileKeyValueStore, KeyValueStore, ThreadPersistence
from translator.core.threads import ThreadStore


logger = logging.getLogger(__name__)

FALLBACK_ERROR_TEXT = "⚠️ Error: Could not translate. The free API might be busy."


class TranslatorSession:
    """Input box state plus the submit flow: idle -> submitting -> idle.

    Only one submission may be in flight. The busy flag is set before the
    first await, so a concurrent second submit is rejected rather than queued.
    """

    def __init__(
        self,
        store: ThreadStore,
        translator: Translator,
        source_lang: str = "en-US",
        target_lang: str = "fr-FR",
    ) -> None:
        self.store = store
        self.translator = translator
        self.source_lang = source_lang
        self.target_lang = target_lang
        self.draft = ""
        self.is_translating = False

    def set_draft(self, text: str) -> None:
        self.draft = text

    def append_to_draft(self, transcript: str) -> None:
        self.draft = f"{self.draft} {transcript}" if self.draft else transcript

    def set_languages(self, source_lang: Optional[str] = None, target_lang: Optional[str] = None) -> None:
        if source_lang:
            self.source_lang = source_lang
        if target_lang:
            self.target_lang = target_lang

    async def submit(self, text: Optional[str] = None) -> ConversationThread:
        current_text = self.draft if text is None else text
        if not current_text.strip():
            raise ValidationError("Nothing to translate")
        if self.is_translating:
            raise SubmissionInFlight()

        thread_id = self.store.active_thread_id
        if thread_id is None:
            thread_id = self.store.create_thread()

        source = source_language(self.source_lang)
        target = target_language(self.target_lang)
        self.store.append_message(
            thread_id,
            Message(
                id=self.store.new_id(),
                role="user",
                text=current_text,
                lang_label=source.label,
                lang_code=source.code,
            ),
        )
        if text is None:
            self.draft = ""

        self.is_translating = True
        try:
            translated = await self.translator.translate(
                current_text, self.source_lang, self.target_lang
            )
            reply = Message(
                id=self.store.new_id(),
                role="assistant",
                text=translated,
                lang_label=target.label,
                lang_code=target.code,
            )
        except TranslatorError as exc:
            logger.error("Translation failed: %s", exc.message)
            reply = self._fallback_reply()
        except Exception:
            logger.exception("Translation failed unexpectedly")
            reply = self._fallback_reply()
        finally:
            self.is_translating = False

        self.store.append_message(thread_id, reply)
        thread = self.store.get_thread(thread_id)
        if thread is None:
            # deleted while the translation was pending
            raise ThreadNotFound(thread_id)
        return thread

    def _fallback_reply(self) -> Message:
        return Message(
            id=self.store.new_id(),
            role="assistant",
            text=FALLBACK_ERROR_TEXT,
            lang_label=SYSTEM_LABEL,
            lang_code=SYSTEM_LANG_CODE,
        )

    def snapshot(self) -> Dict[str, Any]:
        return {
            "draft": self.draft,
            "sourceLang": self.source_lang,
            "targetLang": self.target_lang,
            "isTranslating": self.is_translating,
            "activeThreadId": self.store.active_thread_id,
        }


def build_session(
    settings: Optional[Settings] = None,
    kv: Optional[KeyValueStore] = None,
    translator: Optional[Translator] = None,
) -> TranslatorSession:
    settings = settings or get_settings()
    persistence = ThreadPersistence(
        kv if kv is not None else FileKeyValueStore(Path(settings.storage_dir)),
        slot=settings.storage_slot,
    )
    return TranslatorSession(
        ThreadStore.load(persistence),
        translator or build_translator(settings),
        source_lang=settings.default_source_lang,
        target_lang=settings.default_target_lang,
    )
