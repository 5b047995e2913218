from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


class Settings:
    """Application settings loaded from environment variables.

    Keep endpoints, storage location and language defaults centralized here.
    """

    app_env: str = os.getenv("APP_ENV", "development")
    mymemory_url: str = os.getenv(
        "MYMEMORY_URL", "https://api.mymemory.translated.net/get"
    )
    # When set, chat submissions go through a remote /translate proxy.
    translation_proxy_url: Optional[str] = os.getenv("TRANSLATION_PROXY_URL") or None
    default_source_subtag: str = os.getenv("DEFAULT_SOURCE_SUBTAG", "en")
    storage_dir: str = os.getenv("STORAGE_DIR", ".state")
    storage_slot: str = os.getenv("STORAGE_SLOT", "translation-chats")
    default_source_lang: str = os.getenv("DEFAULT_SOURCE_LANG", "en-US")
    default_target_lang: str = os.getenv("DEFAULT_TARGET_LANG", "fr-FR")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
