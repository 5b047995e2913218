from __future__ import annotations

from typing import NamedTuple, Optional, Tuple


AUTO_DETECT = "auto"

SYSTEM_LABEL = "System"
SYSTEM_LANG_CODE = "en-US"


class Language(NamedTuple):
    code: str
    name: str
    label: str

    @property
    def voice_tag(self) -> str:
        return self.code


LANGUAGES: Tuple[Language, ...] = (
    Language("en-US", "English", "English"),
    Language("es-ES", "Spanish", "Español"),
    Language("fr-FR", "French", "Français"),
    Language("de-DE", "German", "Deutsch"),
    Language("zh-CN", "Chinese", "中文"),
    Language("hi-IN", "Hindi", "हिन्दी"),
    Language("ar-SA", "Arabic", "العربية"),
)


def find_language(code: Optional[str]) -> Optional[Language]:
    for language in LANGUAGES:
        if language.code == code:
            return language
    return None


def source_language(code: Optional[str]) -> Language:
    """Registry entry for a source locale, English when unknown."""
    return find_language(code) or LANGUAGES[0]


def target_language(code: Optional[str]) -> Language:
    """Registry entry for a target locale, Spanish when unknown."""
    return find_language(code) or LANGUAGES[1]


def primary_subtag(code: str) -> str:
    """Reduce a locale code such as ``fr-FR`` to ``fr``."""
    return code.split("-")[0]
