from __future__ import annotations

from typing import Any, Optional


class PokeKGError(Exception):
    code = "POKEKG_ERROR"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class DataFormatError(PokeKGError):
    """A translation row could not be parsed."""

    code = "DATA_FORMAT"


class UpstreamError(PokeKGError):
    """Non-2xx status or transport failure from the wiki or the store."""

    code = "UPSTREAM"

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.url = url
        self.status = status


class RequestTimeout(UpstreamError):
    code = "TIMEOUT"


class ParseError(PokeKGError):
    """Expected page structure is missing."""

    code = "PARSE"


class FetchError(PokeKGError):
    """The validator could not load the store graph or the shape document."""

    code = "FETCH"


class PublishError(PokeKGError):
    """The store rejected a write."""

    code = "PUBLISH"

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        reason: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.status = status
        self.reason = reason
