from __future__ import annotations

from typing import Optional, Protocol

from translator.core.errors import ValidationError


MISSING_FIELDS = "Missing required fields"


class Translator(Protocol):
    async def translate(self, text: str, source_lang: str, target_lang: str) -> str: ...


def validate_request(text: Optional[str], target_lang: Optional[str]) -> None:
    if not text or not target_lang:
        raise ValidationError(
            MISSING_FIELDS,
            details={"text": bool(text), "targetLang": bool(target_lang)},
        )
