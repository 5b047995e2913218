"""Speech-to-text and text-to-speech as optional, injected capabilities.

Which capabilities exist is decided once, when the application is built.
Components only see the ``SpeechCapabilities`` they are handed, so tests and
hosts without audio can pass stubs or nothing at all.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Protocol

from translator.core.errors import CapabilityUnavailable
from translator.core.languages import SYSTEM_LABEL
from translator.core.models import Message

if TYPE_CHECKING:
    from translator.session import TranslatorSession


logger = logging.getLogger(__name__)

SPEECH_RATE = 0.9
VOICE_INPUT_UNSUPPORTED = "Browser not supported for Voice Input."


class SpeechRecognizer(Protocol):
    """Single-shot recognition; exactly one of on_result/on_error, then on_end."""

    def start(
        self,
        locale: str,
        on_result: Callable[[str], None],
        on_error: Callable[[str], None],
        on_end: Callable[[], None],
    ) -> None: ...

    def stop(self) -> None: ...


class SpeechSynthesizer(Protocol):
    def speak(self, text: str, locale: str, rate: float) -> None: ...

    def cancel(self) -> None: ...


@dataclass(frozen=True)
class SpeechCapabilities:
    recognizer: Optional[SpeechRecognizer] = None
    synthesizer: Optional[SpeechSynthesizer] = None

    @property
    def can_listen(self) -> bool:
        return self.recognizer is not None

    @property
    def can_speak(self) -> bool:
        return self.synthesizer is not None


def is_speakable(message: Message) -> bool:
    """Only real translations are voiced, not user input or error placeholders."""
    return message.role == "assistant" and message.lang_label != SYSTEM_LABEL


class SpeechBridge:
    def __init__(self, capabilities: SpeechCapabilities, session: "TranslatorSession") -> None:
        self.capabilities = capabilities
        self.session = session
        self.is_listening = False

    def toggle_listening(self) -> bool:
        """Start a recognition session, or stop the running one.

        Returns whether the bridge is listening afterwards.
        """
        recognizer = self.capabilities.recognizer
        if self.is_listening:
            if recognizer is not None:
                recognizer.stop()
            self.is_listening = False
            return False

        if recognizer is None:
            raise CapabilityUnavailable("speech_to_text", VOICE_INPUT_UNSUPPORTED)

        self.is_listening = True
        recognizer.start(
            self.session.source_lang,
            on_result=self._on_result,
            on_error=self._on_error,
            on_end=self._on_end,
        )
        return self.is_listening

    def speak(self, message: Message) -> bool:
        synthesizer = self.capabilities.synthesizer
        if synthesizer is None or not is_speakable(message):
            return False
        synthesizer.cancel()
        # the message's own locale, not whatever target is selected now
        synthesizer.speak(message.text, message.lang_code, SPEECH_RATE)
        return True

    def _on_result(self, transcript: str) -> None:
        self.session.append_to_draft(transcript)

    def _on_error(self, error: str) -> None:
        logger.warning("Speech error: %s", error)
        self.is_listening = False

    def _on_end(self) -> None:
        self.is_listening = False
