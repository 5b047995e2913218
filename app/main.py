from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from config.settings import Settings, get_settings
from translator.clients import MyMemoryTranslator, Translator
from translator.core.errors import (
    CapabilityUnavailable,
    SubmissionInFlight,
    ThreadNotFound,
    TranslatorError,
    ValidationError,
)
from translator.core.languages import LANGUAGES
from translator.core.speech import SpeechBridge, SpeechCapabilities
from translator.session import TranslatorSession, build_session


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("translator")

PROXY_FAILURE = "Translation failed. The free API might be busy."

_STATUS_BY_ERROR = {
    ValidationError: 400,
    SubmissionInFlight: 409,
    ThreadNotFound: 404,
    CapabilityUnavailable: 501,
}


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TranslateRequest(_CamelModel):
    text: Optional[str] = Field(None, description="Text to translate")
    source_lang: Optional[str] = Field(None, description="Source locale or 'auto'")
    target_lang: Optional[str] = Field(None, description="Target locale")


class SubmitRequest(_CamelModel):
    text: Optional[str] = Field(None, description="Text to submit; the draft when omitted")


class SessionUpdate(_CamelModel):
    draft: Optional[str] = None
    source_lang: Optional[str] = None
    target_lang: Optional[str] = None


class RenameRequest(_CamelModel):
    title: str


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _error_from(exc: TranslatorError) -> JSONResponse:
    return _error(_STATUS_BY_ERROR.get(type(exc), 500), exc.message)


def _threads_payload(session: TranslatorSession) -> Dict[str, Any]:
    return {
        "threads": [t.model_dump(mode="json", by_alias=True) for t in session.store.list_threads()],
        "activeThreadId": session.store.active_thread_id,
    }


def create_app(
    settings: Optional[Settings] = None,
    session: Optional[TranslatorSession] = None,
    upstream: Optional[Translator] = None,
    capabilities: Optional[SpeechCapabilities] = None,
) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Voice Translator", version="1.0.0")

    # CORS: allow local frontend during development
    if settings.app_env.lower() in {"dev", "development", "local"}:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    session = session or build_session(settings)
    # the proxy endpoint always talks to MyMemory directly
    upstream = upstream or MyMemoryTranslator(
        settings.mymemory_url, default_source_subtag=settings.default_source_subtag
    )
    speech = SpeechBridge(capabilities or SpeechCapabilities(), session)
    app.state.session = session
    app.state.speech = speech

    # handlers are all async so the store is only touched from the event loop

    @app.post("/translate")
    async def translate(req: TranslateRequest) -> Any:
        if not req.text or not req.target_lang:
            return _error(400, "Missing required fields")
        try:
            translated = await upstream.translate(
                req.text, req.source_lang or "auto", req.target_lang
            )
        except TranslatorError as exc:
            logger.error("Translation Error: %s", exc.message)
            return _error(500, PROXY_FAILURE)
        return {"translatedText": translated}

    @app.get("/languages")
    async def languages() -> Dict[str, Any]:
        return {
            "languages": [
                {"code": lang.code, "name": lang.name, "label": lang.label, "voice": lang.voice_tag}
                for lang in LANGUAGES
            ]
        }

    @app.get("/threads")
    async def list_threads() -> Dict[str, Any]:
        return _threads_payload(session)

    @app.post("/threads")
    async def create_thread() -> Dict[str, Any]:
        return {"threadId": session.store.create_thread()}

    @app.post("/threads/{thread_id}/select")
    async def select_thread(thread_id: str) -> Dict[str, Any]:
        session.store.select_thread(thread_id)
        return _threads_payload(session)

    @app.patch("/threads/{thread_id}")
    async def rename_thread(thread_id: str, req: RenameRequest) -> Any:
        if session.store.get_thread(thread_id) is None:
            return _error(404, "Thread not found")
        session.store.rename_thread(thread_id, req.title)
        return session.store.get_thread(thread_id).model_dump(mode="json", by_alias=True)

    @app.delete("/threads/{thread_id}")
    async def delete_thread(thread_id: str) -> Dict[str, Any]:
        session.store.delete_thread(thread_id)
        return _threads_payload(session)

    @app.get("/session")
    async def get_session() -> Dict[str, Any]:
        return {**session.snapshot(), "isListening": speech.is_listening}

    @app.put("/session")
    async def update_session(req: SessionUpdate) -> Dict[str, Any]:
        if req.draft is not None:
            session.set_draft(req.draft)
        session.set_languages(req.source_lang, req.target_lang)
        return {**session.snapshot(), "isListening": speech.is_listening}

    @app.post("/session/submit")
    async def submit(req: Optional[SubmitRequest] = None) -> Any:
        try:
            thread = await session.submit(req.text if req else None)
        except TranslatorError as exc:
            return _error_from(exc)
        logger.info("Thread %s now has %s messages", thread.id, len(thread.messages))
        return thread.model_dump(mode="json", by_alias=True)

    @app.post("/session/listen")
    async def toggle_listening() -> Any:
        try:
            listening = speech.toggle_listening()
        except CapabilityUnavailable as exc:
            return _error_from(exc)
        return {"listening": listening}

    @app.post("/threads/{thread_id}/messages/{message_id}/speak")
    async def speak(thread_id: str, message_id: str) -> Any:
        thread = session.store.get_thread(thread_id)
        message = next((m for m in thread.messages if m.id == message_id), None) if thread else None
        if message is None:
            return _error(404, "Message not found")
        return {"spoken": speech.speak(message)}

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
