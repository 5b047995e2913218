"""Error taxonomy shared by the translator components."""
from __future__ import annotations

from typing import Any, Dict, Optional


class TranslatorError(Exception):
    """Base exception for the translator service."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(TranslatorError):
    """Raised when a request is rejected before any network call."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "VALIDATION_ERROR", details)


class TransportError(TranslatorError):
    """Raised when the translation service cannot produce a result."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "TRANSPORT_ERROR", details)


class PersistenceParseError(TranslatorError):
    """Raised when the persisted thread blob cannot be decoded."""

    def __init__(self, slot: str, reason: str):
        message = f"Stored threads in slot '{slot}' are unreadable: {reason}"
        super().__init__(message, "PERSISTENCE_PARSE_ERROR", {"slot": slot})


class CapabilityUnavailable(TranslatorError):
    """Raised when a speech capability is not present on this host."""

    def __init__(self, capability: str, message: str):
        super().__init__(message, "CAPABILITY_UNAVAILABLE", {"capability": capability})


class SubmissionInFlight(TranslatorError):
    """Raised when a submission arrives while another is still pending."""

    def __init__(self, message: str = "A translation is already in progress"):
        super().__init__(message, "CONFLICT")


class ThreadNotFound(TranslatorError):
    """Raised when a thread disappears before an operation completes."""

    def __init__(self, thread_id: str):
        message = f"Thread with identifier '{thread_id}' not found"
        super().__init__(message, "NOT_FOUND", {"thread_id": thread_id})
