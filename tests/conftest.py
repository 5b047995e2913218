"""Shared fixtures: in-memory persistence, fake translators and speech stubs."""

import asyncio
from typing import Callable, List, Optional, Tuple

import pytest

from translator.core.errors import TransportError
from translator.core.storage import MemoryKeyValueStore, ThreadPersistence
from translator.core.threads import ThreadStore
from translator.session import TranslatorSession


class FakeTranslator:
    """Returns a canned translation, or raises, and records every call."""

    def __init__(self, result: str = "Bonjour", error: Optional[Exception] = None):
        self.result = result
        self.error = error
        self.calls: List[Tuple[str, str, str]] = []
        self.gate: Optional[asyncio.Event] = None

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        self.calls.append((text, source_lang, target_lang))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.result


class StubRecognizer:
    def __init__(self):
        self.started: List[str] = []
        self.stopped = 0
        self.on_result: Optional[Callable[[str], None]] = None
        self.on_error: Optional[Callable[[str], None]] = None
        self.on_end: Optional[Callable[[], None]] = None

    def start(self, locale, on_result, on_error, on_end):
        self.started.append(locale)
        self.on_result, self.on_error, self.on_end = on_result, on_error, on_end

    def stop(self):
        self.stopped += 1


class StubSynthesizer:
    def __init__(self):
        self.events: List[tuple] = []

    def speak(self, text, locale, rate):
        self.events.append(("speak", text, locale, rate))

    def cancel(self):
        self.events.append(("cancel",))


@pytest.fixture
def kv():
    return MemoryKeyValueStore()


@pytest.fixture
def persistence(kv):
    return ThreadPersistence(kv)


@pytest.fixture
def store(persistence):
    return ThreadStore.load(persistence)


@pytest.fixture
def translator():
    return FakeTranslator()


@pytest.fixture
def failing_translator():
    return FakeTranslator(error=TransportError("upstream returned 503"))


@pytest.fixture
def session(store, translator):
    return TranslatorSession(store, translator, source_lang="en-US", target_lang="fr-FR")
