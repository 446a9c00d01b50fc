"""Storage client exceptions.

Every error raised by the client derives from :class:`OSSError`. Errors
raised while driving a multipart upload carry the ``phase`` they originated
in (``plan``, ``initiate``, ``part N``, ``complete``).
"""

from typing import Any, Dict, Optional


class OSSError(Exception):
    """
    Base error for all storage client failures.

    Attributes:
        message: Human readable message
        code: Error code
        details: Extra context (never contains credentials)
        phase: Upload phase the error originated in, if any
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        phase: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.phase = phase

    def __str__(self) -> str:
        text = f"[{self.code}] {self.message}" if self.code else self.message
        if self.phase:
            text = f"{text} (phase: {self.phase})"
        return text

    def in_phase(self, phase: str) -> "OSSError":
        """Tag the error with a phase unless a lower layer already did."""
        if self.phase is None:
            self.phase = phase
        return self


class InvalidInputError(OSSError):
    """Caller supplied input that can never succeed (bad part size, empty file, unknown resource)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="INVALID_INPUT", details=details)


class TooManyPartsError(OSSError):
    """Planned part count reaches the provider limit."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="TOO_MANY_PARTS", details=details)


class TransportError(OSSError):
    """Network or HTTP layer failure; no response was received."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="TRANSPORT_ERROR", details=details)


class ProviderRejectedError(OSSError):
    """The provider answered with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: bytes = b"",
        detail: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code="PROVIDER_REJECTED", details=details)
        self.status_code = status_code
        self.body = body
        # Decoded <Error> document when the body carried one
        self.detail = detail


class SigningError(OSSError):
    """Header names or values that cannot be signed or sent."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="SIGNING_ERROR", details=details)


class FileReadError(OSSError):
    """Source file missing, unreadable or shorter than planned."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="FILE_READ_ERROR", details=details)


class DecodeError(OSSError):
    """Provider XML that cannot be decoded into the expected record."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="DECODE_ERROR", details=details)


__all__ = [
    "OSSError",
    "InvalidInputError",
    "TooManyPartsError",
    "TransportError",
    "ProviderRejectedError",
    "SigningError",
    "FileReadError",
    "DecodeError",
]
