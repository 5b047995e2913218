from __future__ import annotations

from config.settings import Settings
from translator.clients.base import Translator, validate_request
from translator.clients.mymemory import MyMemoryTranslator, build_langpair
from translator.clients.proxy import ProxyTranslator


def build_translator(settings: Settings) -> Translator:
    if settings.translation_proxy_url:
        return ProxyTranslator(settings.translation_proxy_url)
    return MyMemoryTranslator(
        settings.mymemory_url,
        default_source_subtag=settings.default_source_subtag,
    )


__all__ = [
    "MyMemoryTranslator",
    "ProxyTranslator",
    "Translator",
    "build_langpair",
    "build_translator",
    "validate_request",
]
