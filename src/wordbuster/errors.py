# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl
from enum import Enum

import httpx

INVALID_CERTIFICATE_MESSAGE = "invalid certificate"
_CERTIFICATE_MARKERS = ("certificate_verify_failed", "certificate verify failed", "x509")


class WordbusterError(Exception):
    """Base class for wordbuster errors."""


class ConfigurationError(WordbusterError):
    """Invalid run configuration; raised before any worker starts."""


class SetupError(WordbusterError):
    """Pre-run check failed (unreachable target, wildcard responses, ...)."""


class ProbeCancelled(WordbusterError):
    """The cancellation signal fired while a probe was in flight."""


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    INVALID_CERTIFICATE = "INVALID_CERTIFICATE"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    PROXY_ERROR = "PROXY_ERROR"
    DNS_ERROR = "DNS_ERROR"
    CANCELLED = "CANCELLED"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


def _exception_chain(exc: BaseException):
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def is_certificate_error(exc: BaseException) -> bool:
    """Return True when the exception (or anything it wraps) is a certificate validation failure."""
    for item in _exception_chain(exc):
        if isinstance(item, (ssl.SSLCertVerificationError, ssl.CertificateError)):
            return True
        message = str(item).lower()
        if any(marker in message for marker in _CERTIFICATE_MARKERS):
            return True
    return False


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, ProbeCancelled):
        return ErrorCategory.CANCELLED

    if is_certificate_error(exc):
        return ErrorCategory.INVALID_CERTIFICATE

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, httpx.ProxyError):
        return ErrorCategory.PROXY_ERROR

    if isinstance(exc, ssl.SSLError):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, ConnectionError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (TimeoutError, socket.timeout)):
        return ErrorCategory.TIMEOUT

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout during probe",
        ErrorCategory.INVALID_CERTIFICATE: "Target presented an invalid certificate",
        ErrorCategory.SSL_ERROR: "TLS handshake failure",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.PROXY_ERROR: "Proxy refused or failed the request",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.CANCELLED: "Probe cancelled",
        ErrorCategory.UNKNOWN_ERROR: "Probe failed",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Probe failed due to network error")


__all__ = [
    "INVALID_CERTIFICATE_MESSAGE",
    "ConfigurationError",
    "ErrorCategory",
    "ProbeCancelled",
    "SetupError",
    "WordbusterError",
    "categorize_exception",
    "error_category_to_reason",
    "is_certificate_error",
]
