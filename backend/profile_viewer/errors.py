"""Error classes for the profile proxy."""

from typing import Any, Optional


class ProxyError(Exception):
    """Base error for proxied profile fetches."""

    def __init__(
        self,
        error_type: str,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ):
        self.error_type = error_type
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.error_type}] {self.message}"


class FetchException(ProxyError):
    """The upstream request could not be completed."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("fetch", message, details)


class ParseException(ProxyError):
    """The upstream answered with a body that is not JSON."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("parse", message, details)
