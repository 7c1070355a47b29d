"""Uniqueness tokens for generated storage keys.

A TokenSource is injected into NameGenerator so tests can supply
deterministic tokens and deployments can pick a strategy via settings.
"""

import itertools
import secrets
import threading
import time
from typing import Protocol

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


class TokenSource(Protocol):
    """Produces a fresh alphanumeric token on every call."""

    def next_token(self) -> str:
        ...


class UniqidTokenSource:
    """Hex token from the wall clock at microsecond resolution.

    Layout: 8 hex digits of seconds, 5 of microseconds, then a random hex
    suffix. The time part is strictly increasing within the process; the
    suffix separates processes that hit the same microsecond.
    """

    def __init__(self, entropy_bytes: int = 2) -> None:
        self._entropy_bytes = entropy_bytes
        self._lock = threading.Lock()
        self._last_us = 0

    def _next_microsecond(self) -> int:
        with self._lock:
            now_us = time.time_ns() // 1000
            if now_us <= self._last_us:
                now_us = self._last_us + 1
            self._last_us = now_us
            return now_us

    def next_token(self) -> str:
        seconds, micros = divmod(self._next_microsecond(), 1_000_000)
        suffix = secrets.token_hex(self._entropy_bytes) if self._entropy_bytes else ""
        return f"{seconds:08x}{micros:05x}{suffix}"


class CuidTokenSource:
    """CUID2 tokens (lowercase alphanumeric)."""

    def next_token(self) -> str:
        return generate_cuid()


class SequenceTokenSource:
    """Deterministic counter tokens: zero-padded hex, starting at ``start``."""

    def __init__(self, start: int = 1, width: int = 8) -> None:
        self._counter = itertools.count(start)
        self._width = width
        self._lock = threading.Lock()

    def next_token(self) -> str:
        with self._lock:
            value = next(self._counter)
        return f"{value:0{self._width}x}"


def create_token_source(strategy: str) -> TokenSource:
    """Return the token source for a settings strategy name ('uniqid' or 'cuid').

    Raises:
        ValueError: Unknown strategy.
    """
    if strategy == "uniqid":
        return UniqidTokenSource()
    if strategy == "cuid":
        return CuidTokenSource()
    raise ValueError(f"Unknown token strategy: {strategy}. Supported: 'uniqid', 'cuid'")
