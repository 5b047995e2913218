"""Client for the MyMemory public translation API (no key required)."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from translator.clients.base import validate_request
from translator.core.errors import TransportError
from translator.core.languages import AUTO_DETECT, primary_subtag


logger = logging.getLogger(__name__)


def build_langpair(source_lang: str, target_lang: str, default_source_subtag: str = "en") -> str:
    """Format ``source|target`` using primary subtags.

    MyMemory does not reliably auto-detect, so ``auto`` becomes the default
    source subtag instead of being sent as is.
    """
    if not source_lang or source_lang == AUTO_DETECT:
        source = default_source_subtag
    else:
        source = primary_subtag(source_lang)
    return f"{source}|{primary_subtag(target_lang)}"


def _extract_translation(data: Any) -> str:
    if not isinstance(data, dict):
        raise TransportError("Unexpected response shape from translation service")

    status = data.get("responseStatus")
    if str(status) != "200":
        raise TransportError(
            str(data.get("responseDetails") or "Translation Error"),
            details={"responseStatus": status},
        )

    response_data = data.get("responseData") or {}
    translated = response_data.get("translatedText") if isinstance(response_data, dict) else None
    if not isinstance(translated, str) or not translated:
        raise TransportError("Translation service returned no translated text")
    return translated


class MyMemoryTranslator:
    def __init__(
        self,
        url: str,
        default_source_subtag: str = "en",
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.url = url
        self.default_source_subtag = default_source_subtag
        self._client = client

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        validate_request(text, target_lang)
        params: Dict[str, str] = {
            "q": text,
            "langpair": build_langpair(source_lang, target_lang, self.default_source_subtag),
        }
        logger.info("Translating %s chars with langpair=%s", len(text), params["langpair"])

        try:
            if self._client is not None:
                response = await self._client.get(self.url, params=params)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(self.url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            raise TransportError(f"Translation API call failed: {exc}") from exc
        except ValueError as exc:
            raise TransportError("Translation API returned invalid JSON") from exc

        return _extract_translation(data)
