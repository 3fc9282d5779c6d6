"""Error taxonomy & redaction for gh-shorthand.

The resolver itself never raises: "no match" is represented by empty fields on
the Resolution. Everything here belongs to the layers around it, where real
faults happen (unreadable configuration, malformed RPC requests, socket
trouble) and need to be reported without leaking secrets into logs.

Public API:
- ShorthandError / ConfigError / RPCError
- classify_error(exc) -> ErrorInfo
- redact(text) -> str
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

# JSON-RPC 2.0 standard error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

_SENSITIVE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"ghp_[A-Za-z0-9]{20,40}"),  # GitHub classic tokens
    re.compile(r"github_pat_\w{20,}"),  # GitHub fine-grained tokens
    re.compile(r"gh[ousr]_[A-Za-z0-9]{20,}"),  # OAuth / app tokens
]

_REDACTION_PLACEHOLDER = "<redacted>"


class ShorthandError(Exception):
    """Base class for gh-shorthand failures outside the resolver."""


class ConfigError(ShorthandError):
    pass


class RPCError(ShorthandError):
    """A request the RPC server rejects, carrying its JSON-RPC error code."""

    def __init__(self, code: int, message: str, data: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def to_dict(self) -> dict[str, Any]:
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data:
            error["data"] = self.data
        return error


@dataclass
class ErrorInfo:
    category: str
    message: str
    original_type: str
    transient: bool = False
    details: dict[str, Any] | None = None


def redact(text: str) -> str:
    """Replace token-looking substrings with a placeholder."""
    if not text:
        return text
    redacted = text
    for pat in _SENSITIVE_PATTERNS:
        redacted = pat.sub(_REDACTION_PLACEHOLDER, redacted)
    return redacted


def classify_error(exc: BaseException) -> ErrorInfo:
    """Best-effort classification of an exception.

    - ConfigError, or YAML scanner/parser messages -> 'config'
    - RPCError -> 'rpc' (code kept in details)
    - timeouts / broken pipes / reset connections -> 'transport', transient
    - everything else -> 'generic'
    """
    msg = str(exc) if exc else ""
    low = msg.lower()
    name = exc.__class__.__name__

    if isinstance(exc, ConfigError) or any(k in low for k in ("yaml", "scannererror", "parsererror")):
        return ErrorInfo("config", redact(msg), name)
    if isinstance(exc, RPCError):
        return ErrorInfo("rpc", redact(msg), name, details={"code": exc.code})
    if isinstance(exc, (TimeoutError, ConnectionError)) or any(
        k in low for k in ("timeout", "timed out", "connection reset", "broken pipe")
    ):
        return ErrorInfo("transport", redact(msg), name, transient=True)
    return ErrorInfo("generic", redact(msg), name)


__all__ = [
    "ShorthandError",
    "ConfigError",
    "RPCError",
    "ErrorInfo",
    "classify_error",
    "redact",
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
]
