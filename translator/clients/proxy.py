from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from translator.clients.base import validate_request
from translator.core.errors import TransportError


logger = logging.getLogger(__name__)


class ProxyTranslator:
    """Talks to a remote ``POST /translate`` proxy, as the browser client does."""

    def __init__(self, base_url: str, client: Optional[httpx.AsyncClient] = None) -> None:
        self.endpoint = base_url.rstrip("/") + "/translate"
        self._client = client

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        validate_request(text, target_lang)
        payload = {"text": text, "sourceLang": source_lang, "targetLang": target_lang}

        try:
            if self._client is not None:
                response = await self._client.post(self.endpoint, json=payload)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(self.endpoint, json=payload)
            data: Any = response.json()
        except httpx.HTTPError as exc:
            raise TransportError(f"Translation proxy call failed: {exc}") from exc
        except ValueError as exc:
            raise TransportError("Translation proxy returned invalid JSON") from exc

        if not response.is_success:
            message = data.get("error") if isinstance(data, dict) else None
            raise TransportError(
                message or "Translation request failed",
                details={"status_code": response.status_code},
            )

        translated = data.get("translatedText") if isinstance(data, dict) else None
        if not isinstance(translated, str) or not translated:
            raise TransportError("Translation proxy returned no translated text")
        return translated
